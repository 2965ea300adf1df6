"""
Stage 2: Classify Template — Issue Template Bot

PURPOSE:
    Work out which template the author started from by looking for each
    template's first headline (its fingerprint) in the body. Specs are tried
    in TEMPLATE_SPECS declaration order (bug, feature, pull request) and the
    first match wins, so a body carrying two fingerprints is a bug report.

    The item kind plays no part: a pull request written with the bug
    template is checked as a bug report, and an issue written with the pull
    request template is checked as a pull request.

    Pure function, no network access. Returning None means "undetermined",
    which Stage 3 turns into the "missing template" response.
"""

import logging
import re
from typing import Optional, Sequence

from _issue_bot.models import Submission
from _issue_bot.template_specs import TEMPLATE_SPECS, TemplateSpec

logger = logging.getLogger(__name__)


def classify_template(
    submission: Submission,
    specs: Sequence[TemplateSpec] = TEMPLATE_SPECS,
) -> Optional[TemplateSpec]:
    """Return the spec whose fingerprint headline is in the body, or None."""
    for spec in specs:
        _label, pattern = spec.fingerprint
        if re.search(pattern, submission.body):
            logger.info("Template classified as '%s'.", spec.subtype)
            return spec

    logger.info("Template could not be determined.")
    return None
