import logging

import pytest

from symbolic_calculus import parse, ParseError, NotDifferentiableError
from symbolic_calculus.logging_system import (
  LogLevel, configure_logging, set_log_level, get_logger
)


@pytest.fixture
def log_level():
  """Switch the package logger's verbosity for one test, restoring the quiet default after"""
  def _set(level):
    configure_logging(log_level=level)
  yield _set
  configure_logging(log_level=LogLevel.MINIMAL)


def test_default_logger_is_quiet_about_parse_failures(caplog):
  configure_logging()
  with caplog.at_level(logging.DEBUG, logger='symbolic_calculus'):
    with pytest.raises(ParseError):
      parse("1+")
  assert "PARSE FAILED" not in caplog.text


def test_parse_failure_logged_at_moderate(caplog, log_level):
  log_level(LogLevel.MODERATE)
  with caplog.at_level(logging.DEBUG, logger='symbolic_calculus'):
    with pytest.raises(ParseError):
      parse("3*(x+)")
  assert "PARSE FAILED" in caplog.text
  assert "'x+'" in caplog.text


def test_successful_parse_logged_at_detailed(caplog, log_level):
  log_level(LogLevel.DETAILED)
  with caplog.at_level(logging.DEBUG, logger='symbolic_calculus'):
    parse("x + 1")
  assert "Parsed 'x+1' into 3 nodes" in caplog.text


def test_not_differentiable_logged_at_verbose(caplog, log_level):
  log_level(LogLevel.VERBOSE)
  with caplog.at_level(logging.DEBUG, logger='symbolic_calculus'):
    with pytest.raises(NotDifferentiableError):
      parse("x^x").differentiate()
  assert "No derivative rule for POW" in caplog.text


def test_silent_suppresses_everything(caplog, log_level):
  log_level(LogLevel.SILENT)
  with caplog.at_level(logging.DEBUG, logger='symbolic_calculus'):
    with pytest.raises(ParseError):
      parse("()")
    get_logger().warning("should not appear")
  assert caplog.text == ""


def test_set_log_level_updates_global_logger(log_level):
  log_level(LogLevel.MINIMAL)
  set_log_level(LogLevel.VERBOSE)
  assert get_logger().log_level is LogLevel.VERBOSE
