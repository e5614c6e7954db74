"""
Logging System for Symbolic Calculus

Centralised logger with verbosity levels so that library use stays quiet by
default while parser and differentiation diagnostics can be switched on.
"""

import logging
import sys
from typing import Optional
from enum import Enum
from datetime import datetime


class LogLevel(Enum):
    """Enumeration of logging levels for symbolic calculus"""
    SILENT = 0      # No output except critical errors
    MINIMAL = 1     # Warnings and critical info only
    MODERATE = 2    # Parse failures
    DETAILED = 3    # Every successful parse
    VERBOSE = 4     # All information including debug details


class SymbolicCalculusLogger:
    """
    Centralized logger for the parser and expression tree
    """

    def __init__(self, log_level: LogLevel = LogLevel.MINIMAL,
                 log_to_file: bool = False, log_file_path: Optional[str] = None):
        self.log_level = log_level
        self.log_to_file = log_to_file

        self.logger = logging.getLogger('symbolic_calculus')
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()  # Remove any existing handlers

        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )

        # Console handler
        if self.log_level != LogLevel.SILENT:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        # File handler (optional)
        if log_to_file:
            if log_file_path is None:
                log_file_path = f"symbolic_calculus_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
            file_handler = logging.FileHandler(log_file_path)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def _should_log(self, required_level: LogLevel) -> bool:
        """Check if message should be logged based on current log level"""
        return self.log_level.value >= required_level.value

    def critical(self, message: str):
        """Always logged - critical errors and failures"""
        if self.log_level != LogLevel.SILENT:
            self.logger.error(f"CRITICAL: {message}")

    def info(self, message: str, required_level: LogLevel = LogLevel.MINIMAL):
        """General information with configurable level"""
        if self._should_log(required_level):
            self.logger.info(message)

    def warning(self, message: str, required_level: LogLevel = LogLevel.MINIMAL):
        """Warnings - shown from minimal level onwards unless raised"""
        if self._should_log(required_level):
            self.logger.warning(message)

    def debug(self, message: str):
        """Debug information - only in verbose mode"""
        if self._should_log(LogLevel.VERBOSE):
            self.logger.debug(f"DEBUG: {message}")

    def parse_failure(self, text: str, substring: str, reason: Optional[str] = None):
        """Log a rejected input together with the substring that failed"""
        if not self._should_log(LogLevel.MODERATE):
            return
        message = f"PARSE FAILED: {text!r} at {substring!r}"
        if reason:
            message += f" ({reason})"
        self.logger.warning(message)


# Global logger instance
_global_logger: Optional[SymbolicCalculusLogger] = None


def get_logger() -> SymbolicCalculusLogger:
    """Get or create the global logger instance"""
    global _global_logger
    if _global_logger is None:
        _global_logger = SymbolicCalculusLogger()
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global logging level"""
    global _global_logger
    if _global_logger is None:
        _global_logger = SymbolicCalculusLogger(log_level=level)
    else:
        _global_logger.log_level = level


def configure_logging(log_level: LogLevel = LogLevel.MINIMAL,
                      log_to_file: bool = False,
                      log_file_path: Optional[str] = None) -> SymbolicCalculusLogger:
    """Configure the global logging system"""
    global _global_logger
    _global_logger = SymbolicCalculusLogger(
        log_level=log_level,
        log_to_file=log_to_file,
        log_file_path=log_file_path
    )
    return _global_logger


# Convenience functions for common operations
def log_info(message: str, level: LogLevel = LogLevel.MINIMAL):
    """Log info message at specified level"""
    get_logger().info(message, level)


def log_warning(message: str, level: LogLevel = LogLevel.MINIMAL):
    """Log warning message"""
    get_logger().warning(message, level)


def log_debug(message: str):
    """Log debug message"""
    get_logger().debug(message)


def log_parse_failure(text: str, substring: str, reason: Optional[str] = None):
    get_logger().parse_failure(text, substring, reason)
