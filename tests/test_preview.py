"""
Tests for the preview renderer.
"""

import os
import time

from creative_studio.models import Theme
from creative_studio.rendering.preview import SANDBOX_FLAGS, PreviewRenderer, script_literal


def test_render_writes_document(renderer):
    handle = renderer.render("<html>OK</html>")

    assert handle.path.read_text(encoding="utf-8") == "<html>OK</html>"
    assert handle.url.startswith("file://")
    assert renderer.open_external() == handle.url


def test_render_releases_previous_handle(renderer):
    first = renderer.render("<p>one</p>")
    second = renderer.render("<p>two</p>")

    assert first.released
    assert not first.path.exists()
    assert not second.released
    assert second.path.read_text(encoding="utf-8") == "<p>two</p>"


def test_refresh_without_code_is_noop(renderer):
    assert renderer.refresh() is None
    assert renderer.open_external() is None


def test_refresh_rerenders_current_code(renderer):
    first = renderer.render("<p>same</p>")
    refreshed = renderer.refresh()

    assert refreshed is not first
    assert first.released
    assert refreshed.path.read_text(encoding="utf-8") == "<p>same</p>"


def test_clear_releases_handle(renderer):
    handle = renderer.render("<p>bye</p>")
    renderer.clear()

    assert handle.released
    assert not handle.path.exists()
    assert renderer.code is None
    assert renderer.open_external() is None
    assert renderer.frame_html() == ""


def test_release_is_idempotent(renderer):
    handle = renderer.render("<p>x</p>")
    handle.release()
    handle.release()

    assert handle.released


def test_frame_html_is_sandboxed_and_escaped(renderer):
    renderer.render('<h1 class="t">Hi & bye</h1>')

    markup = renderer.frame_html(height=300, theme=Theme.LIGHT)

    assert f'sandbox="{SANDBOX_FLAGS}"' in markup
    assert "height:300px" in markup
    assert "&lt;h1 class=&quot;t&quot;&gt;Hi &amp; bye&lt;/h1&gt;" in markup
    assert '<h1 class="t">' not in markup


def test_context_manager_clears(tmp_path):
    with PreviewRenderer(tmp_path / "p") as renderer:
        handle = renderer.render("<p>ctx</p>")

    assert handle.released


def test_open_tab_html_ships_code_to_the_browser(renderer):
    assert renderer.open_tab_html() == ""

    renderer.render('<script>alert("hi")</script>')
    markup = renderer.open_tab_html("Open")

    assert 'window.open(url, "_blank")' in markup
    assert "URL.createObjectURL" in markup
    assert "file://" not in markup
    assert '"<script>alert(\\"hi\\")<\\/script>"' in markup
    assert markup.count("</script>") == 1


def test_script_literal_cannot_close_the_script_block():
    assert script_literal("a</script>b") == '"a<\\/script>b"'


def test_prune_stale_keeps_recent_and_current(renderer):
    current = renderer.render("<p>live</p>")
    renderer.preview_dir.mkdir(parents=True, exist_ok=True)
    old = renderer.preview_dir / "preview_abandoned.html"
    old.write_text("<p>old</p>", encoding="utf-8")
    recent = renderer.preview_dir / "preview_other_session.html"
    recent.write_text("<p>recent</p>", encoding="utf-8")
    unrelated = renderer.preview_dir / "notes.html"
    unrelated.write_text("keep", encoding="utf-8")
    two_days_ago = time.time() - 2 * 24 * 60 * 60
    for path in (old, current.path, unrelated):
        os.utime(path, (two_days_ago, two_days_ago))

    removed = renderer.prune_stale()

    assert removed == 1
    assert not old.exists()
    assert recent.exists()
    assert current.path.exists()
    assert unrelated.exists()


def test_prune_stale_without_directory(tmp_path):
    assert PreviewRenderer(tmp_path / "missing").prune_stale() == 0
