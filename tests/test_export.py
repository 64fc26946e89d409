"""
Tests for clipboard and archive export helpers.
"""

import io
import zipfile

import pytest

from creative_studio.errors import ArchiveError, ClipboardError
from creative_studio.io.export import (
    ARCHIVE_FILENAME,
    ArtifactManager,
    build_archive,
    copy_button_html,
    copy_to_clipboard,
    export_archive,
    project_files,
)
from creative_studio.models import ErrorKind


def test_copy_to_clipboard_writes_text():
    copied = []
    copy_to_clipboard("<html></html>", copied.append)
    assert copied == ["<html></html>"]


def test_copy_empty_text_fails():
    with pytest.raises(ClipboardError) as exc_info:
        copy_to_clipboard("", lambda text: None)
    assert exc_info.value.kind == ErrorKind.CLIPBOARD


def test_copy_rejected_by_clipboard():
    def writer(text):
        raise RuntimeError("permission denied")

    with pytest.raises(ClipboardError):
        copy_to_clipboard("code", writer)


def test_archive_contains_index_html():
    data = build_archive(project_files("<html>OK</html>"))

    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert zf.namelist() == ["index.html"]
        assert zf.read("index.html").decode("utf-8") == "<html>OK</html>"


def test_archive_with_no_files_fails():
    with pytest.raises(ArchiveError):
        build_archive({})


def test_export_archive_hands_bytes_to_saver():
    saved = {}
    export_archive(ARCHIVE_FILENAME, {"index.html": "x", "style.css": "y"}, saved.__setitem__)

    assert list(saved) == [ARCHIVE_FILENAME]
    with zipfile.ZipFile(io.BytesIO(saved[ARCHIVE_FILENAME])) as zf:
        assert sorted(zf.namelist()) == ["index.html", "style.css"]


def test_export_archive_wraps_saver_failure():
    def saver(filename, data):
        raise OSError("disk full")

    with pytest.raises(ArchiveError) as exc_info:
        export_archive(ARCHIVE_FILENAME, project_files("x"), saver)
    assert exc_info.value.kind == ErrorKind.ARCHIVE


def test_artifact_manager_saves_files(tmp_path):
    manager = ArtifactManager(tmp_path / "out")

    html_path = manager.save_html("<html></html>")
    archive_path = manager.save_archive(ARCHIVE_FILENAME, b"PK")

    assert html_path.read_text(encoding="utf-8") == "<html></html>"
    assert archive_path.read_bytes() == b"PK"


def test_copy_button_embeds_code_for_the_browser():
    markup = copy_button_html("<p>a</p><script>x()</script>", "Copy <all>", "abc")

    assert "navigator.clipboard.writeText(text)" in markup
    assert "Failed to copy code" in markup
    assert 'id="copy_btn_abc"' in markup
    assert "Copy &lt;all&gt;" in markup
    assert '"<p>a<\\/p><script>x()<\\/script>"' in markup
    assert markup.count("</script>") == 1


def test_copy_button_without_code_fails():
    with pytest.raises(ClipboardError):
        copy_button_html("", "Copy", "abc")
