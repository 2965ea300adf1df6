"""
Errors — Issue Template Bot

Every failure the bot raises on purpose derives from IssueBotError so that
issue_bot_main.main() can report it as a failed Actions step. Compliance
failures are NOT errors; they are normal outcomes that produce a comment.
HTTP failures are left as requests exceptions and propagate unchanged.
"""


class IssueBotError(Exception):
    """Base class for all bot errors."""


class ConfigurationError(IssueBotError):
    """A required setting (token, event path) is missing or unusable."""


class PreconditionError(IssueBotError):
    """The triggering event lacks data the bot cannot run without."""


class MessageTemplateError(IssueBotError):
    """A message template references a substitution token that has no value."""
