"""
Template Specs — Issue Template Bot

PURPOSE:
    The static rule set describing every template the repository ships:
    which "### " headlines a body must contain, which checklist boxes must be
    ticked, and the placeholder token that marks an unfilled field.

    Each subtype is one TemplateSpec value in TEMPLATE_SPECS. Adding a new kind
    of submission means adding a value here; the classifier and validator pick
    it up without code changes.

DEPENDS ON:
    The Markdown templates in .github/ISSUE_TEMPLATE/ and
    .github/pull_request_template.md of the repository running the bot. If a
    headline or checkbox wording changes there, it MUST be updated here too.

DESIGN DECISIONS:
    - The first headline of every spec doubles as its fingerprint: the
      classifier only looks at headline zero to decide which template was
      used, so it must be unique across specs.
    - Checkbox rules accept "x" or "X" and a single optional space on either
      side inside the brackets ("- [x]", "- [ X ]"), since both render as a
      ticked box on GitHub.
    - Only the leading words of each checkbox sentence are matched, so the
      templates can reword the rest (links, punctuation) without breaking
      the bot.
"""

import re
from dataclasses import dataclass
from typing import Tuple

# Literal token the templates put into every field the author must replace.
PLACEHOLDER = "FILL_THIS_OUT"

SUBTYPE_BUG = "bug"
SUBTYPE_FEATURE = "feature"
SUBTYPE_PULL_REQUEST = "pull_request"


def _headline(title: str) -> Tuple[str, str]:
    return title, "### " + re.escape(title)


def _checkbox(sentence_start: str) -> Tuple[str, str]:
    return sentence_start, r"- \[ ?[xX] ?\] " + re.escape(sentence_start)


@dataclass(frozen=True)
class TemplateSpec:
    """
    Rules for one template subtype.

    Attributes:
        subtype:    Identifier, e.g. "bug"
        headlines:  Ordered (label, regex) pairs; headline zero identifies the template
        checkboxes: Ordered (label, regex) pairs that must all be ticked
        placeholder: Token that must not remain anywhere in the body
    """

    subtype: str
    headlines: Tuple[Tuple[str, str], ...]
    checkboxes: Tuple[Tuple[str, str], ...]
    placeholder: str = PLACEHOLDER

    @property
    def fingerprint(self) -> Tuple[str, str]:
        return self.headlines[0]


BUG_TEMPLATE = TemplateSpec(
    subtype=SUBTYPE_BUG,
    headlines=(
        _headline("New Issue Checklist"),
        _headline("Issue Description"),
        _headline("Steps to reproduce"),
        _headline("Actual Outcome"),
        _headline("Expected Outcome"),
        _headline("Environment"),
    ),
    checkboxes=(
        _checkbox("I am not disclosing a"),
        _checkbox("I am not just asking a"),
        _checkbox("I have searched through"),
        _checkbox("I can reproduce the issue"),
    ),
)

FEATURE_TEMPLATE = TemplateSpec(
    subtype=SUBTYPE_FEATURE,
    headlines=(
        _headline("New Feature / Enhancement Checklist"),
        _headline("Current Limitation"),
        _headline("Feature / Enhancement Description"),
        _headline("Example Use Case"),
        _headline("Alternatives / Workarounds"),
    ),
    checkboxes=(
        _checkbox("I am not disclosing a"),
        _checkbox("I am not just asking a"),
        _checkbox("I have searched through"),
    ),
)

PULL_REQUEST_TEMPLATE = TemplateSpec(
    subtype=SUBTYPE_PULL_REQUEST,
    headlines=(
        _headline("New Pull Request Checklist"),
        _headline("Issue Description"),
        _headline("Approach"),
        _headline("TODOs before merging"),
    ),
    checkboxes=(
        _checkbox("I am not disclosing a"),
        _checkbox("I am creating this PR in reference to an"),
    ),
)

# Declaration order is classification priority.
TEMPLATE_SPECS: Tuple[TemplateSpec, ...] = (
    BUG_TEMPLATE,
    FEATURE_TEMPLATE,
    PULL_REQUEST_TEMPLATE,
)
