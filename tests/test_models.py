"""
Tests for data models.
"""

from creative_studio.errors import ApiError, ArchiveError, ClipboardError, ValidationError
from creative_studio.models import (
    ErrorKind,
    GeneratedCode,
    GenerationFailure,
    GenerationRequest,
    GenerationSuccess,
    MODEL_ID,
    Notice,
    NoticeLevel,
    Theme,
)
from creative_studio.orchestration import SessionState, get_state_summary


def test_theme_toggled():
    assert Theme.DARK.toggled() == Theme.LIGHT
    assert Theme.LIGHT.toggled() == Theme.DARK


def test_generation_request_hides_credential():
    request = GenerationRequest(prompt_text="A game", credential="sk-secret")

    assert request.model_id == MODEL_ID
    assert "sk-secret" not in repr(request)
    assert "credential" not in request.model_dump()


def test_generated_code_total_tokens():
    assert GeneratedCode(code="x").total_tokens is None
    assert GeneratedCode(code="x", prompt_tokens=10, completion_tokens=4).total_tokens == 14


def test_result_variants():
    ok = GenerationSuccess(generated=GeneratedCode(code="<html></html>"))
    failed = GenerationFailure(message="API Error: 401", status_code=401)

    assert ok.ok and ok.code == "<html></html>"
    assert not failed.ok


def test_notice_constructors():
    assert Notice.success("done").level == NoticeLevel.SUCCESS
    error = Notice.error("bad")
    assert error.is_error
    assert error.title == "Error"


def test_session_state_defaults():
    state = SessionState()

    assert state.prompt_text == ""
    assert not state.is_generating
    assert not state.has_code
    assert not state.has_credential
    assert state.theme == Theme.DARK
    assert not state.panels.settings_visible


def test_state_summary_never_shows_credential():
    state = SessionState(credential="sk-secret", prompt_text="hello")

    summary = get_state_summary(state)

    assert "Credential configured: True" in summary
    assert "sk-secret" not in summary
    assert "sk-secret" not in repr(state)


def test_error_kinds():
    assert ValidationError("Please enter a prompt").kind == ErrorKind.VALIDATION
    assert ClipboardError("No code to copy").kind == ErrorKind.CLIPBOARD
    assert ArchiveError("Failed").kind == ErrorKind.ARCHIVE

    error = ApiError("API Error: 401", status_code=401)
    assert error.kind == ErrorKind.API
    assert error.status_code == 401
    assert str(error) == error.message == "API Error: 401"
