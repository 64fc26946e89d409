"""
Sandboxed preview of generated HTML.

Each render writes the document to its own file and hands out a handle that
can be released. The previous handle is released only after the new one has
been acquired, on every refresh and on clear.
"""

import html
import json
import tempfile
import time
from pathlib import Path
from typing import Optional, Union

from creative_studio.models import Theme


SANDBOX_FLAGS = "allow-scripts allow-same-origin"

FRAME_BACKGROUND = {
    Theme.DARK: "#0f172a",
    Theme.LIGHT: "#ffffff",
}

STALE_PREVIEW_SECONDS = 24 * 60 * 60

PREVIEW_PREFIX = "preview_"


def script_literal(text: str) -> str:
    """JavaScript string literal for ``text`` that is safe inside a ``<script>`` block."""
    return json.dumps(text).replace("</", "<\\/")


class PreviewHandle:
    """Revocable reference to one rendered document."""

    def __init__(self, path: Path):
        self.path = path
        self._released = False

    @property
    def url(self) -> str:
        return self.path.resolve().as_uri()

    @property
    def released(self) -> bool:
        return self._released

    def release(self):
        """Delete the backing file. Safe to call more than once."""
        if self._released:
            return
        self.path.unlink(missing_ok=True)
        self._released = True

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return f"PreviewHandle({self.path.name}, {state})"


class PreviewRenderer:
    """Turns code strings into isolated, revocable preview documents."""

    def __init__(self, preview_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the renderer.

        Args:
            preview_dir: Directory for preview documents (a temp dir if omitted).
        """
        if preview_dir is None:
            preview_dir = Path(tempfile.gettempdir()) / "creative_studio_previews"
        self.preview_dir = Path(preview_dir)
        self.code: Optional[str] = None
        self.handle: Optional[PreviewHandle] = None

    def _acquire(self, code: str) -> PreviewHandle:
        self.preview_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            suffix=".html",
            prefix=PREVIEW_PREFIX,
            dir=str(self.preview_dir),
            delete=False,
        ) as f:
            f.write(code)
        return PreviewHandle(Path(f.name))

    def render(self, code: str) -> PreviewHandle:
        """
        Render code into a fresh preview document.

        Args:
            code: Full HTML document.

        Returns:
            Handle for the new document.
        """
        new_handle = self._acquire(code)
        old_handle = self.handle
        self.code = code
        self.handle = new_handle
        if old_handle is not None:
            old_handle.release()
        return new_handle

    def refresh(self) -> Optional[PreviewHandle]:
        """Re-render the current code. Returns None when there is nothing to show."""
        if not self.code:
            return None
        return self.render(self.code)

    def open_external(self) -> Optional[str]:
        """Address of the current document, for opening in a new browser tab."""
        if self.handle is None or self.handle.released:
            return None
        return self.handle.url

    def clear(self):
        """Release the current document and forget the code."""
        if self.handle is not None:
            self.handle.release()
        self.handle = None
        self.code = None

    def frame_html(self, height: int = 600, theme: Theme = Theme.DARK) -> str:
        """
        Markup for an isolated frame showing the current code.

        The document goes into ``srcdoc`` so the frame never shares the host
        page's origin beyond what the sandbox flags allow.

        Args:
            height: Frame height in pixels.
            theme: Palette for the frame border and empty background.

        Returns:
            HTML snippet, or an empty string when there is no code.
        """
        if not self.code:
            return ""
        background = FRAME_BACKGROUND[theme]
        return (
            f'<iframe sandbox="{SANDBOX_FLAGS}" title="Preview" '
            f'style="width:100%;height:{height}px;border:0;background:{background};" '
            f'srcdoc="{html.escape(self.code, quote=True)}"></iframe>'
        )

    def open_tab_html(self, label: str = "Open in new tab") -> str:
        """
        Button markup that opens the current code in a new tab of the viewer's browser.

        The document is shipped as a Blob URL, so nothing on the server's
        filesystem has to be reachable from the client.

        Returns:
            HTML snippet, or an empty string when there is no code.
        """
        if not self.code:
            return ""
        return f"""
<button id="open_preview" style="padding:.35rem .8rem;border:1px solid #ccc;border-radius:6px;background:#fff;cursor:pointer;">
  {html.escape(label)}
</button>
<script>
(() => {{
  const code = {script_literal(self.code)};
  document.getElementById("open_preview").addEventListener("click", () => {{
    const url = URL.createObjectURL(new Blob([code], {{ type: "text/html" }}));
    window.open(url, "_blank");
  }});
}})();
</script>
"""

    def prune_stale(self, max_age_seconds: float = STALE_PREVIEW_SECONDS) -> int:
        """
        Delete preview documents left behind by sessions that never cleared.

        Args:
            max_age_seconds: Files not modified for this long are removed.

        Returns:
            Number of files deleted.
        """
        if not self.preview_dir.is_dir():
            return 0
        cutoff = time.time() - max_age_seconds
        current = self.handle.path if self.handle is not None else None
        removed = 0
        for path in self.preview_dir.glob(f"{PREVIEW_PREFIX}*.html"):
            if path == current:
                continue
            try:
                if path.stat().st_mtime < cutoff:
                    path.unlink()
                    removed += 1
            except FileNotFoundError:
                # Another session removed it first.
                continue
        return removed

    def __enter__(self) -> "PreviewRenderer":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.clear()
