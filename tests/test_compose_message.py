import pytest
from conftest import make_submission

from _issue_bot.errors import MessageTemplateError
from _issue_bot.models import ItemKind, MessageFlags
from _issue_bot.stage_4_compose_message import (
    MARKER_ID,
    compose_message,
    fill_placeholders,
    identity_marker,
)


@pytest.fixture
def submission():
    return make_submission("body")


def test_success_message_has_greeting_disclaimer_and_marker(submission):
    message = compose_message(MessageFlags(), submission)

    assert message.startswith("## 🤖\n### Thanks for opening this issue!")
    assert "I'm still in beta" in message
    assert message.endswith(f"<!-- {MARKER_ID} -->")
    assert "❌" not in message


def test_pull_request_greeting():
    pr = make_submission("body", kind=ItemKind.PULL_REQUEST, base_branch="alpha")
    message = compose_message(MessageFlags(), pr)

    assert "### Thanks for opening this pull request!" in message


def test_template_notice(submission):
    message = compose_message(MessageFlags(require_template=True), submission)

    assert "use the provided template" in message
    assert "Security Policy" not in message


def test_checkbox_notice_always_has_security_reminder(submission):
    message = compose_message(MessageFlags(require_checkboxes=True), submission)

    assert "check all required checkboxes" in message
    assert "security vulnerabilities must only be reported confidentially" in message
    assert "https://github.com/acme/server/blob/main/SECURITY.md" in message


def test_security_link_points_at_pull_request_base_branch():
    pr = make_submission("body", kind=ItemKind.PULL_REQUEST, base_branch="alpha")
    message = compose_message(MessageFlags(require_checkboxes=True), pr)

    assert "https://github.com/acme/server/blob/alpha/SECURITY.md" in message


def test_fields_notice_names_placeholder(submission):
    message = compose_message(MessageFlags(require_fields=True), submission)

    assert "`FILL_THIS_OUT`" in message


def test_pr_suggestion_for_bug_reports(submission):
    message = compose_message(MessageFlags(suggest_pr=True), submission)

    assert "opening a pull request with a failing test" in message
    assert "https://github.com/acme/server/blob/main/CONTRIBUTING.md" in message


def test_feature_encouragement_mentions_sender(submission):
    message = compose_message(MessageFlags(encourage_feature=True), submission)

    assert "Thanks for the suggestion, @octocat!" in message


def test_paragraph_order():
    flags = MessageFlags(
        require_template=True,
        require_checkboxes=True,
        require_fields=True,
        suggest_pr=True,
        encourage_feature=True,
    )
    message = compose_message(flags, make_submission("body"))

    markers = [
        "Thanks for opening",
        "use the provided template",
        "check all required checkboxes",
        "security vulnerabilities",
        "FILL_THIS_OUT",
        "failing test",
        "Thanks for the suggestion",
        "I'm still in beta",
        MARKER_ID,
    ]
    positions = [message.index(m) for m in markers]
    assert positions == sorted(positions)


def test_marker_lists_enabled_flags():
    marker = identity_marker(MessageFlags(require_checkboxes=True))
    assert marker == f"<!-- {MARKER_ID}: require_checkboxes -->"


def test_message_is_deterministic(submission):
    flags = MessageFlags(require_fields=True)
    assert compose_message(flags, submission) == compose_message(flags, submission)


def test_fill_placeholders_replaces_known_tokens():
    assert fill_placeholders("Hi {sender} on {branch}", {"sender": "a", "branch": "b"}) == "Hi a on b"


def test_fill_placeholders_keeps_escaped_braces():
    assert fill_placeholders("{{literal}} {x}", {"x": "1"}) == "{literal} 1"


@pytest.mark.parametrize("template", ["{unknown}", "{sender.__class__}", "{sender[0]}", "{}"])
def test_unresolved_token_is_an_error(template):
    with pytest.raises(MessageTemplateError):
        fill_placeholders(template, {"sender": "octocat"})


def test_every_message_template_resolves(submission):
    # All flags on exercises every paragraph's tokens.
    flags = MessageFlags(True, True, True, True, True)
    message = compose_message(flags, submission)
    assert "{" not in message
    assert "}" not in message
