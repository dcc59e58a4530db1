import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def init_log(verbose: bool = False, level: Optional[str] = None) -> None:
    """Send package logs to stderr: DEBUG when verbose, else ``level`` (ERROR by default)."""
    root = logging.getLogger("mlb_oracle")
    root.setLevel(logging.DEBUG if verbose else (level or "ERROR").upper())
    if not any(getattr(h, "_mlb_oracle", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._mlb_oracle = True  # type: ignore[attr-defined]
        root.addHandler(handler)
