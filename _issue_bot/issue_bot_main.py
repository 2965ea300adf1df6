"""
Issue Bot Main — Issue Template Bot

PURPOSE:
    Entry point of the GitHub Action. Reads the configuration and the event
    payload from the runner's environment, runs the 5 stages and turns the
    result into the step's exit code.

        Read Event -> Classify Template -> Validate Compliance
        -> Compose Message -> Sync Comment

    Every relevant run writes exactly one comment (create or update). Skipped
    events write nothing and succeed.

CONFIGURATION (environment):
    INPUT_GITHUB-TOKEN  — the action's `github-token` input (required;
                          GITHUB_TOKEN is used when the input is absent)
    GITHUB_EVENT_PATH   — path of the event JSON, set by the runner (required)
    GITHUB_EVENT_NAME   — event name, only logged
    GITHUB_REPOSITORY   — "owner/repo", fallback when the payload lacks it
    GITHUB_API_URL      — REST API root (default https://api.github.com,
                          differs on GitHub Enterprise Server)
    INPUT_LOG-LEVEL     — DEBUG / INFO / WARNING (default INFO)
    INPUT_DRY-RUN       — "true" to log the comment instead of posting it

EXIT CODES:
    0 — comment written, or event skipped
    1 — configuration / precondition / message template error, or a failed
        GitHub API call (reported verbatim)
"""

import json
import logging
import os
import sys
from typing import Optional

import requests

from _issue_bot.errors import ConfigurationError, IssueBotError
from _issue_bot.logging_config import setup_logging
from _issue_bot.stage_1_read_event import read_event
from _issue_bot.stage_2_classify_template import classify_template
from _issue_bot.stage_3_validate_compliance import validate_compliance
from _issue_bot.stage_4_compose_message import compose_message
from _issue_bot.stage_5_sync_comment import DEFAULT_API_URL, GitHubAPI, post_comment

logger = logging.getLogger(__name__)


def run_issue_bot(
    payload: dict,
    github_token: str,
    api_url: str = DEFAULT_API_URL,
    repository_slug: str = "",
    dry_run: bool = False,
) -> Optional[str]:
    """
    Run the full pipeline for one event.

    Args:
        payload: Decoded GitHub event JSON.
        github_token: Token used for every GitHub API call.
        api_url: GitHub REST API root.
        repository_slug: "owner/repo" fallback for payloads without repository.
        dry_run: Compose the comment but do not post it.

    Returns:
        The comment body that was (or, in dry-run mode, would have been)
        posted, or None when the event was skipped.
    """
    submission = read_event(payload, repository_slug)
    if submission is None:
        return None

    logger.info(
        "Checking %s #%s in %s (action: %s, sender: %s) %s",
        submission.kind.display_name, submission.number, submission.full_name,
        submission.action, submission.sender, submission.html_url,
    )

    spec = classify_template(submission)
    outcome = validate_compliance(submission, spec)
    message = compose_message(outcome.flags, submission)

    if dry_run:
        logger.info("Dry run, not posting comment:\n\n%s", message)
        return message

    gh = GitHubAPI(submission.owner, submission.repo, github_token, api_url)
    post_comment(gh, submission, message)
    return message


def main() -> int:
    """Action entry point. Returns the process exit code."""
    level_name = _input("LOG-LEVEL") or os.environ.get("ISSUE_BOT_LOG_LEVEL", "INFO")
    setup_logging(level=_log_level(level_name))

    try:
        github_token = _input("GITHUB-TOKEN") or os.environ.get("GITHUB_TOKEN", "")
        if not github_token:
            raise ConfigurationError("Input required and not supplied: github-token")

        payload = _load_event(os.environ.get("GITHUB_EVENT_PATH", ""))
        logger.debug("event: %s", os.environ.get("GITHUB_EVENT_NAME", "unknown"))
        logger.debug("payload: %s", payload)

        run_issue_bot(
            payload,
            github_token,
            api_url=os.environ.get("GITHUB_API_URL", DEFAULT_API_URL),
            repository_slug=os.environ.get("GITHUB_REPOSITORY", ""),
            dry_run=_input("DRY-RUN", "false").strip().lower() == "true",
        )
    except (IssueBotError, requests.RequestException) as e:
        logger.error(str(e))
        return 1

    return 0


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS (private to this module)
# ---------------------------------------------------------------------------


def _input(name: str, default: str = "") -> str:
    """Read an action input the way the runner exposes it (INPUT_<NAME>)."""
    return os.environ.get(f"INPUT_{name.upper()}", default)


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _load_event(event_path: str) -> dict:
    if not event_path:
        raise ConfigurationError("GITHUB_EVENT_PATH is not set.")
    try:
        with open(event_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read event payload from {event_path}: {e}") from e


if __name__ == "__main__":
    sys.exit(main())
