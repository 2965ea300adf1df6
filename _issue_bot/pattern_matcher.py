"""
Pattern Matcher — Issue Template Bot

Evaluates an ordered list of (label, regex) rules against a block of text.
Every rule is tested on its own with re.search, so no rule's result depends on
another's. Rules are authored in template_specs.py; a malformed expression is
a bug in that file and re.error is allowed to propagate.
"""

import logging
import re
from typing import Iterable, List, Tuple

from _issue_bot.models import ValidationResult

logger = logging.getLogger(__name__)

Rule = Tuple[str, str]


def validate_patterns(rules: Iterable[Rule], text: str) -> List[ValidationResult]:
    """
    Test each rule against the text.

    Args:
        rules: Ordered (label, regex) pairs. Matching is case-sensitive unless
               the expression itself says otherwise.
        text:  The subject text, usually the issue / PR body.

    Returns:
        One ValidationResult per rule, in the same order as the rules.
    """
    results = []
    for label, pattern in rules:
        ok = re.search(pattern, text) is not None
        results.append(ValidationResult(label=label, pattern=pattern, ok=ok))

    logger.debug("validations: %s", [(r.label, r.ok) for r in results])
    return results


def all_passed(results: Iterable[ValidationResult]) -> bool:
    return all(r.ok for r in results)


def failed_labels(results: Iterable[ValidationResult]) -> List[str]:
    return [r.label for r in results if not r.ok]
