"""
CLI plumbing: root logging, one-line JSON event logs, and a stop flag the live preview polls.
"""
import json
import logging
import signal
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_EVENT_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(level: str | int = "INFO") -> None:
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


class StopSignal:
    """
    Set by SIGINT/SIGTERM once installed; the live preview passes it as should_stop.
    Calling the instance reports whether a stop was requested.
    """

    def __init__(self) -> None:
        self.requested = False
        self.signum: int | None = None

    def __call__(self) -> bool:
        return self.requested

    def _handle(self, signum: int, _frame: Any) -> None:
        self.requested = True
        self.signum = signum
        logger.info("Stop requested (signal %s); finishing current frame", signum)

    def install(self) -> "StopSignal":
        for sig in (signal.SIGTERM, signal.SIGINT):
            try:
                signal.signal(sig, self._handle)
            except (AttributeError, ValueError):
                pass  # not on the main thread, or no such signal here
        return self

    def reset(self) -> None:
        self.requested = False
        self.signum = None


def log_event(event: str, level: str = "info", **fields: Any) -> str:
    """Log one JSON line {"event": ..., **fields} and return it. Paths and other objects go through str()."""
    line = json.dumps({"event": event, **fields}, default=str, sort_keys=True)
    logger.log(_EVENT_LEVELS.get(level, logging.INFO), "%s", line)
    return line
