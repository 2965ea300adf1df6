"""
Models — Issue Template Bot

Plain data carried between the pipeline stages. Everything here is built once
per invocation and never mutated: the Submission is the request-scoped context
that replaces any module-level "current item" state, and is passed explicitly
to every stage.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import List, Optional


class ItemKind(str, Enum):
    """What kind of GitHub item triggered the run."""

    ISSUE = "issue"
    PULL_REQUEST = "pull_request"

    @property
    def display_name(self) -> str:
        return "issue" if self is ItemKind.ISSUE else "pull request"


class CommentKind(str, Enum):
    """The two GitHub comment primitives the bot writes to."""

    ISSUE_COMMENT = "issue_comment"
    REVIEW = "review"


@dataclass(frozen=True)
class Submission:
    """The issue or pull request under evaluation.

    Attributes:
        kind: ItemKind.ISSUE or ItemKind.PULL_REQUEST
        number: Issue / PR number within the repository
        owner: Repository owner login
        repo: Repository name
        body: Markdown body, "" when the author left it empty
        action: Event action (opened, reopened, edited)
        sender: Login of the user who triggered the event
        default_branch: Repository default branch
        base_branch: Target branch of a PR; the default branch for issues
        html_url: Link to the item, shown in the "Checking" log line
    """

    kind: ItemKind
    number: int
    owner: str
    repo: str
    body: str
    action: str
    sender: str
    default_branch: str = "main"
    base_branch: str = "main"
    html_url: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one rule: which pattern was tested and whether it matched."""

    label: str
    pattern: str
    ok: bool


@dataclass(frozen=True)
class MessageFlags:
    """Which paragraphs the composed comment should contain."""

    require_template: bool = False
    require_checkboxes: bool = False
    require_fields: bool = False
    suggest_pr: bool = False
    encourage_feature: bool = False

    def enabled(self) -> List[str]:
        """Names of the flags that are set, in declaration order."""
        return [f.name for f in fields(self) if getattr(self, f.name)]


@dataclass(frozen=True)
class ComplianceOutcome:
    """Result of running the compliance gates on a submission.

    Attributes:
        subtype: Template subtype the body was classified as, None if undetermined
        flags: Message flags describing the response to post
        failed_check: "template", "checkboxes" or "fields"; None on success
        results: Per-rule results of the last check that ran
    """

    subtype: Optional[str]
    flags: MessageFlags
    failed_check: Optional[str] = None
    results: List[ValidationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.failed_check is None


@dataclass(frozen=True)
class StatusComment:
    """The bot's single feedback comment on a submission."""

    id: int
    body: str
    kind: CommentKind
