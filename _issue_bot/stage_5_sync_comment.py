"""
Stage 5: Sync Comment — Issue Template Bot

PURPOSE:
    Final stage. Makes sure the submission carries exactly one bot comment
    with the body from Stage 4:

      1. Page through the item's comments (oldest first) looking for one that
         contains the hidden MARKER_ID. For pull requests the reviews are
         searched as well, since that is where the bot posts on PRs.
      2. Found  -> overwrite that comment in place.
         Missing -> create a new one.

    Issues get a plain issue comment. Pull requests get a review with
    event=COMMENT. The two are different GitHub primitives with different
    endpoints, so every comment found remembers which kind it is and is
    updated through the matching endpoint.

CALLED BY:
    issue_bot_main.py — with a GitHubAPI client, the Submission and the body.

DEPENDS ON:
    - GitHub REST API (via requests library)
    - The token passed to the action as `github-token`, which needs
      issues:write and pull-requests:write

DESIGN DECISIONS:
    - Exactly one write per call: either update or create, never both.
    - No retries. A failed request raises requests.HTTPError, which
      propagates to main() and fails the step.
    - Find-then-write is not atomic. Two runs racing on the same item could
      both create a comment; events for one item rarely overlap, so this
      is accepted.
"""

import logging
from typing import Iterator, Optional

import requests

from _issue_bot.models import CommentKind, ItemKind, StatusComment, Submission
from _issue_bot.stage_4_compose_message import MARKER_ID

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
PER_PAGE = 100


def post_comment(gh: "GitHubAPI", submission: Submission, body: str) -> StatusComment:
    """
    Create the bot comment, or update it if a previous run already posted one.

    Args:
        gh: GitHub client for the submission's repository.
        submission: The issue / PR to comment on.
        body: Comment body from Stage 4 (must contain MARKER_ID).

    Returns:
        The StatusComment as stored by GitHub after the write.
    """
    existing = find_comment(gh, submission, MARKER_ID)
    logger.debug("comment: %r", existing)

    if existing is not None:
        logger.info(
            "Updating comment %s in %s #%s with message:\n\n%s",
            existing.id, submission.kind.value, submission.number, body,
        )
        if existing.kind is CommentKind.REVIEW:
            data = gh.update_review(submission.number, existing.id, body)
        else:
            data = gh.update_issue_comment(existing.id, body)
        return StatusComment(id=data["id"], body=data.get("body") or body, kind=existing.kind)

    logger.info(
        "Adding new comment in %s #%s with message:\n\n%s",
        submission.kind.value, submission.number, body,
    )
    if submission.kind is ItemKind.PULL_REQUEST:
        data = gh.create_review(submission.number, body)
        kind = CommentKind.REVIEW
    else:
        data = gh.create_issue_comment(submission.number, body)
        kind = CommentKind.ISSUE_COMMENT
    return StatusComment(id=data["id"], body=data.get("body") or body, kind=kind)


def find_comment(
    gh: "GitHubAPI",
    submission: Submission,
    text: str,
) -> Optional[StatusComment]:
    """Return the first comment (or PR review) whose body contains text."""
    for comment in gh.list_issue_comments(submission.number):
        if text in (comment.get("body") or ""):
            return StatusComment(
                id=comment["id"], body=comment["body"], kind=CommentKind.ISSUE_COMMENT
            )

    if submission.kind is ItemKind.PULL_REQUEST:
        for review in gh.list_reviews(submission.number):
            if text in (review.get("body") or ""):
                return StatusComment(id=review["id"], body=review["body"], kind=CommentKind.REVIEW)

    return None


# ---------------------------------------------------------------------------
# GITHUB API HELPER CLASS
# ---------------------------------------------------------------------------
# Wraps the GitHub REST API calls needed by this stage. Every request sets a
# timeout and raises on non-2xx responses.
# ---------------------------------------------------------------------------


class GitHubAPI:
    """
    Thin wrapper around GitHub REST API for the operations we need.

    The token needs:
    - issues:write (list, post and edit issue comments)
    - pull-requests:write (list, post and edit PR reviews)
    """

    def __init__(self, owner: str, repo: str, token: str, api_url: str = DEFAULT_API_URL):
        self.owner = owner
        self.repo = repo
        self.base_url = f"{api_url.rstrip('/')}/repos/{owner}/{repo}"
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def list_issue_comments(self, issue_number: int) -> Iterator[dict]:
        """Yield all comments on an issue or PR conversation, oldest first."""
        url = f"{self.base_url}/issues/{issue_number}/comments"
        return self._paginate(url)

    def list_reviews(self, pull_number: int) -> Iterator[dict]:
        """Yield all reviews on a PR, oldest first."""
        url = f"{self.base_url}/pulls/{pull_number}/reviews"
        return self._paginate(url)

    def create_issue_comment(self, issue_number: int, body: str) -> dict:
        """Post a comment on a GitHub Issue."""
        url = f"{self.base_url}/issues/{issue_number}/comments"
        resp = requests.post(url, headers=self.headers, json={"body": body}, timeout=30)
        resp.raise_for_status()
        return resp.json()

    def update_issue_comment(self, comment_id: int, body: str) -> dict:
        """Overwrite the body of an existing issue comment."""
        url = f"{self.base_url}/issues/comments/{comment_id}"
        resp = requests.patch(url, headers=self.headers, json={"body": body}, timeout=30)
        resp.raise_for_status()
        return resp.json()

    def create_review(self, pull_number: int, body: str) -> dict:
        """Post a COMMENT review (no approval, no change request) on a PR."""
        url = f"{self.base_url}/pulls/{pull_number}/reviews"
        data = {"body": body, "event": "COMMENT"}
        resp = requests.post(url, headers=self.headers, json=data, timeout=30)
        resp.raise_for_status()
        return resp.json()

    def update_review(self, pull_number: int, review_id: int, body: str) -> dict:
        """Overwrite the summary body of an existing PR review."""
        url = f"{self.base_url}/pulls/{pull_number}/reviews/{review_id}"
        resp = requests.put(url, headers=self.headers, json={"body": body}, timeout=30)
        resp.raise_for_status()
        return resp.json()

    def _paginate(self, url: str) -> Iterator[dict]:
        """Follow the Link: rel="next" header until the last page."""
        params = {"per_page": PER_PAGE}
        while url:
            resp = requests.get(url, headers=self.headers, params=params, timeout=30)
            resp.raise_for_status()
            yield from resp.json()
            # The next link already carries per_page and page.
            url = resp.links.get("next", {}).get("url")
            params = None
