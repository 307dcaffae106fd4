# src/game/log.py
from __future__ import annotations
import logging
import sys


class HumanFormatter(logging.Formatter):
    """Compact one-line format for terminal display."""

    COLORS = {
        "DEBUG": "\033[90m",
        "INFO": "\033[36m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        ts = self.formatTime(record, "%H:%M:%S")
        name = record.name.replace("src.", "")
        return f"{color}{ts} [{record.levelname[0]}] {name}: {record.getMessage()}{self.RESET}"


def setup_logging(level: str = "info") -> None:
    """Configure the `src` package logger once for a CLI entry point."""
    root = logging.getLogger("src")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(HumanFormatter())
    root.addHandler(console)
    root.propagate = False
