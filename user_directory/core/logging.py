import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    # SQL echo and per-request access lines are too noisy at INFO
    for name in ["sqlalchemy.engine", "uvicorn.access"]:
        logging.getLogger(name).setLevel(logging.WARNING)
