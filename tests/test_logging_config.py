import logging
import sys

from _issue_bot.logging_config import ActionsFormatter, setup_logging


def _record(level, msg):
    return logging.LogRecord("_issue_bot.test", level, __file__, 1, msg, None, None)


def test_levels_map_to_workflow_commands():
    formatter = ActionsFormatter(ActionsFormatter.format_str)

    assert formatter.format(_record(logging.DEBUG, "d")) == "::debug::_issue_bot.test - d"
    assert formatter.format(_record(logging.INFO, "i")) == "_issue_bot.test - i"
    assert formatter.format(_record(logging.WARNING, "w")) == "::warning::_issue_bot.test - w"
    assert formatter.format(_record(logging.ERROR, "e")) == "::error::_issue_bot.test - e"


def test_multiline_commands_are_escaped():
    formatter = ActionsFormatter(ActionsFormatter.format_str)
    line = formatter.format(_record(logging.ERROR, "first\nsecond 100%"))

    assert line == "::error::_issue_bot.test - first%0Asecond 100%25"


def test_info_keeps_newlines():
    formatter = ActionsFormatter(ActionsFormatter.format_str)
    assert "\n" in formatter.format(_record(logging.INFO, "a\nb"))


def test_setup_logging_installs_single_handler():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        setup_logging(logging.DEBUG)
        setup_logging(logging.DEBUG)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, ActionsFormatter)
        assert root.handlers[0].stream is sys.stderr
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
