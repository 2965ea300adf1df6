"""
Stage 4: Compose Message — Issue Template Bot

PURPOSE:
    Turn the flags from Stage 3 into the Markdown comment the author sees.

    Layout (paragraphs only appear when their flag is set, always in this
    order):
        ## 🤖
        ### Thanks for opening this <issue|pull request>!
        ❌ template notice              (require_template)
        ❌ checkbox notice              (require_checkboxes)
        ⚠️ security disclosure reminder (require_checkboxes, always paired)
        ❌ fields notice                (require_fields)
        🚀 pull request suggestion      (suggest_pr)
        💡 feature encouragement        (encourage_feature)
        --- beta disclaimer
        <!-- hidden identity marker -->

    The hidden marker is how Stage 5 finds the bot's comment again on the
    next run. It also lists the flags that produced the message, for anyone
    reading the raw comment; the bot itself only matches on MARKER_ID.

DESIGN DECISIONS:
    - Message texts contain named tokens like {item_name} or {base_branch}.
      They are resolved against an explicit map built from the Submission
      (see _substitutions). A token that is not in the map raises
      MessageTemplateError: that is a typo in this file, not something to
      paper over at runtime.
    - Links to SECURITY.md / CONTRIBUTING.md are built from the repository
      the bot runs in, so the same action works for any repository using
      these templates.
"""

import logging
import string
from typing import Dict

from _issue_bot.errors import MessageTemplateError
from _issue_bot.models import MessageFlags, Submission
from _issue_bot.template_specs import PLACEHOLDER

logger = logging.getLogger(__name__)

MARKER_ID = "issue-template-bot-meta-tag-id"

GREETING = "## 🤖\n### Thanks for opening this {item_name}!"

TEMPLATE_NOTICE = (
    "❌ Please edit your post and use the provided template when creating a new "
    "{item_name}. This helps everyone to understand your post better and asks for "
    "essential information to quicker review the {item_name}."
)

CHECKBOXES_NOTICE = (
    "❌ Please make sure to check all required checkboxes at the top, otherwise "
    "this {item_name} will be closed."
)

SECURITY_REMINDER = (
    "⚠️ Remember that security vulnerabilities must only be reported confidentially, "
    "see our [Security Policy](https://github.com/{repository}/blob/{base_branch}/SECURITY.md). "
    "If you are not sure whether the issue is a security vulnerability, the safest way "
    "is to treat it as such and submit it confidentially to us for evaluation."
)

FIELDS_NOTICE = (
    "❌ Please fill out all fields with a placeholder `{placeholder}`. If a field "
    "does not apply, write `n/a` instead, otherwise this {item_name} will be closed."
)

SUGGEST_PR_NOTE = (
    "🚀 You can help us to fix this issue faster by opening a pull request with a "
    "failing test. See our [Contribution Guide]"
    "(https://github.com/{repository}/blob/{default_branch}/CONTRIBUTING.md) "
    "for how to make a pull request."
)

ENCOURAGE_FEATURE_NOTE = (
    "💡 Thanks for the suggestion, @{sender}! Features get built faster when someone "
    "picks them up, so if you'd like to give it a try yourself, see our "
    "[Contribution Guide](https://github.com/{repository}/blob/{default_branch}/CONTRIBUTING.md)."
)

DISCLAIMER = "---\n(I'm still in beta, so forgive me if I don't recognize your post correctly.)"


def compose_message(flags: MessageFlags, submission: Submission) -> str:
    """
    Build the comment body for the given flags.

    Args:
        flags: Which notices to include (from Stage 3).
        submission: The issue / PR, source of every substitution value.

    Returns:
        The Markdown comment body, ending with the hidden identity marker.

    Raises:
        MessageTemplateError: a message references an unknown token.
    """
    paragraphs = [GREETING]

    if flags.require_template:
        paragraphs.append(TEMPLATE_NOTICE)

    if flags.require_checkboxes:
        paragraphs.append(CHECKBOXES_NOTICE)
        paragraphs.append(SECURITY_REMINDER)

    if flags.require_fields:
        paragraphs.append(FIELDS_NOTICE)

    if flags.suggest_pr:
        paragraphs.append(SUGGEST_PR_NOTE)

    if flags.encourage_feature:
        paragraphs.append(ENCOURAGE_FEATURE_NOTE)

    paragraphs.append(DISCLAIMER)

    values = _substitutions(submission)
    message = "\n\n".join(fill_placeholders(p, values) for p in paragraphs)
    message += "\n" + identity_marker(flags)

    logger.debug("composed message for flags %s", flags.enabled())
    return message


def identity_marker(flags: MessageFlags) -> str:
    """Hidden HTML comment identifying the bot's comment."""
    enabled = flags.enabled()
    if not enabled:
        return f"<!-- {MARKER_ID} -->"
    return f"<!-- {MARKER_ID}: {','.join(enabled)} -->"


def fill_placeholders(template: str, values: Dict[str, str]) -> str:
    """
    Replace {name} tokens in template with values[name].

    Only bare names are allowed; attribute or index lookups ({a.b}, {a[0]})
    and unknown names raise MessageTemplateError.
    """
    for _literal, field_name, _spec, _conversion in string.Formatter().parse(template):
        if field_name is None:
            continue
        if field_name not in values:
            raise MessageTemplateError(
                f"Unresolved token '{{{field_name}}}' in message template."
            )
    return template.format_map(values)


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS (private to this module)
# ---------------------------------------------------------------------------


def _substitutions(submission: Submission) -> Dict[str, str]:
    """The complete set of tokens message templates may use."""
    return {
        "item_name": submission.kind.display_name,
        "sender": submission.sender,
        "repository": submission.full_name,
        "default_branch": submission.default_branch,
        "base_branch": submission.base_branch,
        "placeholder": PLACEHOLDER,
    }
