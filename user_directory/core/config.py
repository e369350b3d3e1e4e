# dataclass for configuration
# Values come from the environment (or a .env file loaded by python-dotenv).
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Settings:
    database_url: str = "sqlite:///./users.db"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    bcrypt_rounds: int = 10  # work factor for password hashing
    log_level: str = "INFO"
    cors_allowed_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        """Build the settings from environment variables, falling back to the defaults above."""
        defaults = cls()
        return cls(
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            api_host=os.getenv("API_HOST", defaults.api_host),
            api_port=int(os.getenv("API_PORT", str(defaults.api_port))),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", str(defaults.bcrypt_rounds))),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
            cors_allowed_origins=_split_origins(os.getenv("CORS_ALLOWED_ORIGINS", "*")),
        )
