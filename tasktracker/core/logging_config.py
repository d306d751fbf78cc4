# tasktracker/core/logging_config.py
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

# chatty per-request loggers, kept at WARNING unless the app itself is noisier
_QUIET_LOGGERS = ("httpx", "httpcore", "multipart")


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(level: int | str = logging.INFO, *, sql_echo: bool = False) -> None:
    """Install the stdout handler once; later calls only adjust levels."""
    root = logging.getLogger()
    resolved = _resolve_level(level)
    root.setLevel(resolved)

    if not any(getattr(h, "tasktracker_handler", False) for h in root.handlers):
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        h.tasktracker_handler = True
        root.addHandler(h)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if sql_echo else logging.WARNING)
