"""
Stage 1: Read Event — Issue Template Bot

PURPOSE:
    First stage of the pipeline. Takes the raw GitHub Actions event payload
    (the JSON file at $GITHUB_EVENT_PATH) and decides whether this run has
    anything to do. If it does, it builds the Submission that every later
    stage receives.

    A run is relevant only when:
      - the action is "opened", "reopened" or "edited", and
      - the payload carries an "issue" or a "pull_request" object.
    Anything else (labeled, closed, a push event, ...) is skipped: the stage
    returns None and the run ends successfully without touching GitHub.

CALLED BY:
    issue_bot_main.py — passes the decoded payload and the "owner/repo" slug
    from $GITHUB_REPOSITORY (used only when the payload has no repository).

DESIGN DECISIONS:
    - The sender check comes AFTER the relevance checks. An irrelevant event
      without a sender is still just irrelevant; a relevant one without a
      sender is a PreconditionError, since GitHub always sets it.
    - "issue" wins over "pull_request" when both are present. GitHub never
      sends both, but the order keeps the behaviour defined.
    - A missing or null body becomes "". An empty body then simply fails
      classification and gets the "missing template" response.

RETURNS:
    A Submission, or None when the event should be ignored.
"""

import logging
from typing import Optional

from _issue_bot.errors import PreconditionError
from _issue_bot.models import ItemKind, Submission

logger = logging.getLogger(__name__)

RELEVANT_ACTIONS = ("opened", "reopened", "edited")


def read_event(payload: dict, repository_slug: str = "") -> Optional[Submission]:
    """
    Build the request-scoped Submission from a GitHub event payload.

    Args:
        payload: Decoded event JSON.
        repository_slug: "owner/repo" fallback when the payload has no
                         repository object.

    Returns:
        Submission for a relevant issue / PR event, otherwise None.

    Raises:
        PreconditionError: the event is relevant but has no sender.
    """
    action = payload.get("action")
    if action not in RELEVANT_ACTIONS:
        logger.info("No issue or PR opened, reopened or edited, skipping.")
        return None

    if payload.get("issue") is not None:
        kind = ItemKind.ISSUE
        item = payload["issue"]
    elif payload.get("pull_request") is not None:
        kind = ItemKind.PULL_REQUEST
        item = payload["pull_request"]
    else:
        logger.info("Not a pull request or issue, skipping.")
        return None

    sender = payload.get("sender")
    if not sender:
        raise PreconditionError("No sender provided by GitHub.")

    owner, repo, default_branch = _repository_coordinates(payload, repository_slug)
    base_branch = default_branch
    if kind is ItemKind.PULL_REQUEST:
        base_branch = (item.get("base") or {}).get("ref") or default_branch

    submission = Submission(
        kind=kind,
        number=int(item["number"]),
        owner=owner,
        repo=repo,
        body=item.get("body") or "",
        action=action,
        sender=sender.get("login", "") if isinstance(sender, dict) else str(sender),
        default_branch=default_branch,
        base_branch=base_branch,
        html_url=item.get("html_url") or "",
    )
    logger.debug("submission: %r", submission)
    return submission


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS (private to this module)
# ---------------------------------------------------------------------------


def _repository_coordinates(payload: dict, repository_slug: str):
    """Return (owner, repo, default_branch) from the payload or the slug."""
    repository = payload.get("repository") or {}
    owner = (repository.get("owner") or {}).get("login", "")
    name = repository.get("name", "")

    if not (owner and name) and "/" in repository_slug:
        owner, name = repository_slug.split("/", 1)

    if not (owner and name):
        raise PreconditionError("No repository provided by GitHub.")

    return owner, name, repository.get("default_branch") or "main"
