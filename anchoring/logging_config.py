"""
Logging configuration for text anchoring

Includes IndentLogger so nested steps (quote -> candidates -> scores) render
as an indented tree.
"""

import logging
import sys
import threading
from contextlib import contextmanager


class GlobalIndent:
    """Per-thread indentation state for tree-style logging"""

    _state = threading.local()

    @classmethod
    def level(cls) -> int:
        """Current nesting depth in this thread"""
        return getattr(cls._state, "level", 0)

    @classmethod
    def increase(cls) -> None:
        """Open a nested block"""
        cls._state.level = cls.level() + 1

    @classmethod
    def decrease(cls) -> None:
        """Close the innermost block"""
        if cls.level() > 0:
            cls._state.level = cls.level() - 1

    @classmethod
    def reset(cls) -> None:
        """Reset indentation state of this thread (useful for tests)"""
        cls._state.level = 0

    @classmethod
    def get_indent(cls) -> str:
        """Get current indentation string with tree characters"""
        level = cls.level()
        if level == 0:
            return ""
        return "│   " * (level - 1) + "├──"


class IndentLogger:
    """Logger wrapper that prefixes messages with the current tree indent"""

    def __init__(self, base_logger: logging.Logger) -> None:
        self._logger = base_logger

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(f"{self.indent}{msg}", *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(f"{self.indent}{msg}", *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(f"{self.indent}{msg}", *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(f"{self.indent}{msg}", *args, **kwargs)

    @property
    def indent(self) -> str:
        return GlobalIndent.get_indent()

    @contextmanager
    def indent_block(self, initial_message: str | None = None):
        """
        Context manager for an indented block of log lines

        Args:
            initial_message: Optional message to log at block start
        """
        if initial_message:
            self.debug(initial_message)
        GlobalIndent.increase()
        try:
            yield
        finally:
            GlobalIndent.decrease()


def setup_logging(level=logging.INFO):
    """
    Configure console logging for the anchoring package

    Args:
        level: Logging level (default: INFO)

    Returns:
        IndentLogger: Configured logger with indentation support
    """
    base_logger = logging.getLogger("anchoring")
    base_logger.setLevel(level)
    base_logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)8s %(message)s"))
    base_logger.addHandler(handler)

    return IndentLogger(base_logger)


logger = IndentLogger(logging.getLogger("anchoring"))
