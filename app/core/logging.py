"""Logging setup."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str = "INFO", sql_echo: bool = False) -> None:
    """Configure the root logger once at startup.

    Args:
        level: Root log level name, e.g. ``"INFO"`` or ``"DEBUG"``.
        sql_echo: Leave SQLAlchemy engine logging at INFO so statements are shown.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)

    if not sql_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
