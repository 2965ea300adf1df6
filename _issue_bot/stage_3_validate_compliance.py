"""
Stage 3: Validate Compliance — Issue Template Bot

PURPOSE:
    Run the template gates on a classified submission, strictly in this order:

      1. Headlines   — every "### " headline of the template is present.
                       Failure -> "missing template" response.
      2. Checkboxes  — every required checklist box is ticked.
                       Failure -> "checkboxes incomplete" response (always
                       with the security disclosure reminder).
      3. Placeholder — the FILL_THIS_OUT token appears nowhere in the body.
                       Failure -> "fields incomplete" response.

    The first failing gate ends the check; later gates are not evaluated.
    An undetermined template (spec is None) skips all three and goes straight
    to the "missing template" response.

    When everything passes, the success response gets the subtype's extras:
    bug reports are nudged towards a pull request with a failing test,
    feature requests get an encouragement note.

CALLED BY:
    issue_bot_main.py — with the Submission from Stage 1 and the TemplateSpec from
    Stage 2.

RETURNS:
    A ComplianceOutcome. Its flags are all Stage 4 needs to build the comment.
"""

import logging
import re
from typing import Optional

from _issue_bot.models import ComplianceOutcome, MessageFlags, Submission, ValidationResult
from _issue_bot.pattern_matcher import all_passed, failed_labels, validate_patterns
from _issue_bot.template_specs import SUBTYPE_BUG, SUBTYPE_FEATURE, TemplateSpec

logger = logging.getLogger(__name__)

CHECK_TEMPLATE = "template"
CHECK_CHECKBOXES = "checkboxes"
CHECK_FIELDS = "fields"


def validate_compliance(
    submission: Submission,
    spec: Optional[TemplateSpec],
) -> ComplianceOutcome:
    """
    Run the headline, checkbox and placeholder gates in order.

    Args:
        submission: The issue / PR being checked.
        spec: The template the body was classified as, or None if undetermined.

    Returns:
        ComplianceOutcome describing the first failed gate, or success.
    """
    body = submission.body

    # -----------------------------------------------------------------------
    # GATE 0: Template must be known
    # -----------------------------------------------------------------------

    if spec is None:
        logger.info("Template undetermined, skipping checks.")
        return ComplianceOutcome(
            subtype=None,
            flags=MessageFlags(require_template=True),
            failed_check=CHECK_TEMPLATE,
        )

    logger.info("Validating %s template.", spec.subtype)

    # -----------------------------------------------------------------------
    # GATE 1: Required headlines
    # -----------------------------------------------------------------------

    results = validate_patterns(spec.headlines, body)
    if not all_passed(results):
        logger.info("Required headlines are missing: %s", failed_labels(results))
        return ComplianceOutcome(
            subtype=spec.subtype,
            flags=MessageFlags(require_template=True),
            failed_check=CHECK_TEMPLATE,
            results=results,
        )
    logger.info("Required headlines were found.")

    # -----------------------------------------------------------------------
    # GATE 2: Required checkboxes
    # -----------------------------------------------------------------------

    results = validate_patterns(spec.checkboxes, body)
    if not all_passed(results):
        logger.info("Required checkboxes are unchecked: %s", failed_labels(results))
        return ComplianceOutcome(
            subtype=spec.subtype,
            flags=MessageFlags(require_checkboxes=True),
            failed_check=CHECK_CHECKBOXES,
            results=results,
        )
    logger.info("Required checkboxes are checked.")

    # -----------------------------------------------------------------------
    # GATE 3: No placeholder left behind
    # -----------------------------------------------------------------------

    results = [
        ValidationResult(
            label=f"No '{spec.placeholder}' left",
            pattern=re.escape(spec.placeholder),
            ok=spec.placeholder not in body,
        )
    ]
    if not all_passed(results):
        logger.info("Required fields are not filled out.")
        return ComplianceOutcome(
            subtype=spec.subtype,
            flags=MessageFlags(require_fields=True),
            failed_check=CHECK_FIELDS,
            results=results,
        )
    logger.info("Required fields are filled out.")

    return ComplianceOutcome(
        subtype=spec.subtype,
        flags=MessageFlags(
            suggest_pr=spec.subtype == SUBTYPE_BUG,
            encourage_feature=spec.subtype == SUBTYPE_FEATURE,
        ),
        results=results,
    )
