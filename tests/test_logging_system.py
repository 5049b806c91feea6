import pytest

from symbolic_diff import LogLevel, configure_logging, get_logger, set_log_level, parse_expression, differentiate
from symbolic_diff.logging_system import is_verbose, log_info, log_warning, log_debug


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "symbolic_diff.log"
    yield path
    configure_logging(LogLevel.MINIMAL)


def test_helpers_respect_level(log_file):
    logger = configure_logging(LogLevel.MINIMAL, log_to_file=True, log_file_path=str(log_file))
    assert get_logger() is logger
    assert not is_verbose()

    log_info("shown")
    log_info("stage detail", LogLevel.DETAILED)
    log_warning("careful")
    log_debug("trace")
    logger.milestone("done")
    logger.stage("parse", "X")

    content = log_file.read_text()
    assert "shown" in content
    assert "careful" in content
    assert "MILESTONE: done" in content
    assert "stage detail" not in content
    assert "trace" not in content
    assert "PARSE" not in content


def test_silent_level_drops_everything(log_file):
    configure_logging(LogLevel.MINIMAL, log_to_file=True, log_file_path=str(log_file))
    set_log_level(LogLevel.SILENT)
    log_info("hidden")
    get_logger().critical("hidden failure")
    assert log_file.read_text() == ""


def test_verbose_traces_parser_and_differentiator(log_file):
    configure_logging(LogLevel.VERBOSE, log_to_file=True, log_file_path=str(log_file))
    assert is_verbose()
    differentiate(parse_expression("sin(x)"))

    content = log_file.read_text()
    assert "DEBUG: tokens ['sin', '(', 'x', ')']" in content
    assert "DEBUG: differentiate Sin(X)" in content
