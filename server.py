import uvicorn  # ASGI server that runs the FastAPI app

from user_directory.core.config import Settings
from user_directory.core.logging import setup_logging

# Configuration (database URL, port, ...) is loaded from the environment / .env file
settings = Settings.from_env()

if __name__ == "__main__":
    # Logging is configured by the process entry point, not by importing the app
    setup_logging(settings.log_level)
    uvicorn.run("user_directory.main:app", host=settings.api_host, port=settings.api_port, log_config=None)
