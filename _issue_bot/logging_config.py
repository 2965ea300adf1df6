"""
Logging Config — Issue Template Bot

PURPOSE:
    One place that wires the standard library logging tree for an Actions
    run. Every module logs through logging.getLogger(__name__); this module
    installs the single stderr handler they all end up in.

    ActionsFormatter maps record levels onto GitHub Actions workflow
    commands, so warnings and errors show up as annotations on the run and
    debug lines stay hidden unless step debug logging is turned on.

CALLED BY:
    issue_bot_main.main() — once, before anything else is logged.
"""

import logging
import sys


class ActionsFormatter(logging.Formatter):
    """Formats records as GitHub Actions workflow commands.

    The runner turns ::warning:: / ::error:: lines into annotations on the run
    summary and only shows ::debug:: lines when step debug logging is enabled.
    """

    COMMANDS = {
        logging.DEBUG: "::debug::",
        logging.WARNING: "::warning::",
        logging.ERROR: "::error::",
        logging.CRITICAL: "::error::",
    }

    format_str = "%(name)s - %(message)s"

    def format(self, record):
        message = super().format(record)
        command = self.COMMANDS.get(record.levelno)
        if not command:
            return message
        # Workflow commands end at the first newline unless it is escaped.
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return command + escaped


def setup_logging(level=logging.INFO):
    """Setup centralized logging configuration."""
    root_logger = logging.getLogger()

    # Clear existing handlers to prevent duplicate logs
    if root_logger.handlers:
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ActionsFormatter(ActionsFormatter.format_str))
    root_logger.addHandler(console_handler)

    # urllib3 logs every request at DEBUG, which would leak into ::debug::.
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))

    root_logger.debug("Logging initialized with Actions workflow commands.")
