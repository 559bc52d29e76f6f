"""
Logging utilities for the Discord Project Bot.
"""

import logging
from datetime import datetime
from typing import List, Optional


_logger: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Get the application logger, initializing if needed."""
    global _logger
    if _logger is None:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s | %(levelname)-8s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        _logger = logging.getLogger("project_bot")
    return _logger


logger = get_logger()


class WorkflowLog:
    """Collects log lines for a single command invocation.

    Every line is also forwarded to the application logger. The collected
    lines are shown to the user as the debug section of the final report.
    """

    def __init__(self, invocation_id: str) -> None:
        self.invocation_id = invocation_id
        self.lines: List[str] = []
        self.start_time = datetime.now()

    def log(self, level: str, message: str) -> None:
        """Add a log entry."""
        self.lines.append(message)
        getattr(logger, level.lower(), logger.info)(f"[{self.invocation_id}] {message}")

    def info(self, message: str) -> None:
        self.log("INFO", message)

    def warning(self, message: str) -> None:
        self.log("WARNING", message)

    def error(self, message: str) -> None:
        self.log("ERROR", message)

    def elapsed_seconds(self) -> float:
        """Seconds since the collector was created."""
        return (datetime.now() - self.start_time).total_seconds()
