import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_LEVEL = "INFO"

_handler = logging.StreamHandler(sys.stdout)
_handler.setFormatter(logging.Formatter(LOG_FORMAT))


def resolve_level(level: str) -> str:
    """Known level name, upper-cased; anything else falls back to INFO."""
    name = (level or "").strip().upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    return DEFAULT_LEVEL


def configure_logging(level: str = DEFAULT_LEVEL) -> None:
    """Configure the root logger once per process. Safe to call again."""
    root = logging.getLogger()
    if _handler not in root.handlers:
        root.addHandler(_handler)

    resolved = resolve_level(level)
    root.setLevel(resolved)
    if resolved != (level or "").strip().upper():
        logging.getLogger(__name__).warning(f"Unknown log level {level!r}, using {resolved}")
