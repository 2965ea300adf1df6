import itertools
import textwrap

import pytest

from _issue_bot.models import ItemKind, Submission

BUG_BODY = textwrap.dedent("""\
    ### New Issue Checklist
    - [x] I am not disclosing a [vulnerability](https://github.com/acme/server/blob/main/SECURITY.md).
    - [x] I am not just asking a [question](https://github.com/acme/server/blob/main/CONTRIBUTING.md).
    - [x] I have searched through [existing issues](https://github.com/acme/server/issues).
    - [x] I can reproduce the issue with the latest version.

    ### Issue Description
    Saving an object with a nested pointer fails.

    ### Steps to reproduce
    1. Create an object with a pointer.
    2. Save it.

    ### Actual Outcome
    The server responds with 500.

    ### Expected Outcome
    The object is saved.

    ### Environment
    Server version: 5.0.0
    """)

FEATURE_BODY = textwrap.dedent("""\
    ### New Feature / Enhancement Checklist
    - [x] I am not disclosing a [vulnerability](https://github.com/acme/server/blob/main/SECURITY.md).
    - [x] I am not just asking a [question](https://github.com/acme/server/blob/main/CONTRIBUTING.md).
    - [x] I have searched through [existing issues](https://github.com/acme/server/issues).

    ### Current Limitation
    Queries cannot be explained.

    ### Feature / Enhancement Description
    Add an explain option to queries.

    ### Example Use Case
    Debugging slow queries.

    ### Alternatives / Workarounds
    Run explain directly on the database.
    """)

PR_BODY = textwrap.dedent("""\
    ### New Pull Request Checklist
    - [x] I am not disclosing a [vulnerability](https://github.com/acme/server/blob/main/SECURITY.md).
    - [x] I am creating this PR in reference to an [issue](https://github.com/acme/server/issues).

    ### Issue Description
    Closes: #123

    ### Approach
    Resolve nested pointers before saving.

    ### TODOs before merging
    - [x] Add tests
    - [ ] Add changelog entry
    """)


def make_submission(body, kind=ItemKind.ISSUE, **overrides):
    values = dict(
        kind=kind,
        number=42,
        owner="acme",
        repo="server",
        body=body,
        action="opened",
        sender="octocat",
        default_branch="main",
        base_branch="main",
    )
    values.update(overrides)
    return Submission(**values)


def make_payload(action="opened", kind="issue", body=BUG_BODY, sender="octocat", number=42):
    payload = {
        "action": action,
        "repository": {
            "name": "server",
            "owner": {"login": "acme"},
            "default_branch": "main",
        },
    }
    if kind:
        item = {
            "number": number,
            "body": body,
            "html_url": f"https://github.com/acme/server/issues/{number}",
        }
        if kind == "pull_request":
            item["base"] = {"ref": "alpha"}
        payload[kind] = item
    if sender is not None:
        payload["sender"] = {"login": sender}
    return payload


class FakeGitHub:
    """In-memory stand-in for GitHubAPI that records every write."""

    def __init__(self, comments=None, reviews=None):
        self._ids = itertools.count(1000)
        self.comments = list(comments or [])
        self.reviews = list(reviews or [])
        self.writes = []

    def list_issue_comments(self, issue_number):
        return iter(list(self.comments))

    def list_reviews(self, pull_number):
        return iter(list(self.reviews))

    def create_issue_comment(self, issue_number, body):
        comment = {"id": next(self._ids), "body": body}
        self.comments.append(comment)
        self.writes.append(("create_issue_comment", comment["id"]))
        return comment

    def update_issue_comment(self, comment_id, body):
        comment = next(c for c in self.comments if c["id"] == comment_id)
        comment["body"] = body
        self.writes.append(("update_issue_comment", comment_id))
        return comment

    def create_review(self, pull_number, body):
        review = {"id": next(self._ids), "body": body}
        self.reviews.append(review)
        self.writes.append(("create_review", review["id"]))
        return review

    def update_review(self, pull_number, review_id, body):
        review = next(r for r in self.reviews if r["id"] == review_id)
        review["body"] = body
        self.writes.append(("update_review", review_id))
        return review


@pytest.fixture
def fake_github():
    return FakeGitHub()
