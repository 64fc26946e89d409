"""
Clipboard and archive export helpers for generated code.
"""

import html
import io
import zipfile
from pathlib import Path
from typing import Callable, Dict, Union

from creative_studio.errors import ArchiveError, ClipboardError
from creative_studio.rendering.preview import script_literal


ARCHIVE_FILENAME = "generated-project.zip"
ENTRY_FILENAME = "index.html"

ClipboardWriter = Callable[[str], None]
ArchiveSaver = Callable[[str, bytes], None]


def project_files(code: str) -> Dict[str, str]:
    """Files that make up an exported project."""
    return {ENTRY_FILENAME: code}


def copy_to_clipboard(text: str, writer: ClipboardWriter):
    """
    Copy text to the clipboard through the given writer.

    Args:
        text: Text to copy.
        writer: Callable performing the actual clipboard write.

    Raises:
        ClipboardError: If text is empty or the writer fails.
    """
    if not text:
        raise ClipboardError("No code to copy")
    try:
        writer(text)
    except Exception as e:
        raise ClipboardError(f"Failed to copy code: {e}") from e


def copy_button_html(text: str, label: str, element_id: str) -> str:
    """
    Button markup that copies ``text`` with the browser's clipboard API.

    Success or rejection is reported next to the button, in the browser that
    performed the copy.
    """
    if not text:
        raise ClipboardError("No code to copy")
    button_id = f"copy_btn_{element_id}"
    status_id = f"copy_status_{element_id}"
    return f"""
<div style="display:flex;align-items:center;gap:.5rem;">
  <button id="{button_id}" style="padding:.35rem .8rem;border:1px solid #ccc;border-radius:6px;background:#fff;cursor:pointer;">
    {html.escape(label)}
  </button>
  <span id="{status_id}" style="font-size:.9rem;color:#2e7d32;"></span>
</div>
<script>
(() => {{
  const btn = document.getElementById("{button_id}");
  const status = document.getElementById("{status_id}");
  const text = {script_literal(text)};
  if (!btn) return;
  btn.addEventListener("click", async () => {{
    try {{
      await navigator.clipboard.writeText(text);
      status.style.color = "#2e7d32";
      status.textContent = "Code copied to clipboard!";
      setTimeout(() => {{ status.textContent = ""; }}, 1400);
    }} catch (_err) {{
      status.style.color = "#c62828";
      status.textContent = "Failed to copy code";
    }}
  }});
}})();
</script>
"""


def build_archive(files: Dict[str, str]) -> bytes:
    """
    Build a zip archive in memory.

    Args:
        files: Mapping of archive path to file content.

    Returns:
        Zip archive bytes.

    Raises:
        ArchiveError: If there is nothing to archive or zip creation fails.
    """
    if not files:
        raise ArchiveError("No files to archive")

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
            for path, content in files.items():
                zf.writestr(path, content)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise ArchiveError(f"Failed to create download: {e}") from e
    return buffer.getvalue()


def export_archive(filename: str, files: Dict[str, str], saver: ArchiveSaver):
    """
    Build an archive and hand it to a save action.

    Args:
        filename: Name offered for the downloaded archive.
        files: Mapping of archive path to file content.
        saver: Callable receiving ``(filename, data)``.

    Raises:
        ArchiveError: If building or saving the archive fails.
    """
    data = build_archive(files)
    try:
        saver(filename, data)
    except Exception as e:
        raise ArchiveError(f"Failed to create download: {e}") from e


class ArtifactManager:
    """Manages exported artifacts on disk."""

    def __init__(self, output_dir: Union[str, Path] = "outputs"):
        """
        Initialize artifact manager.

        Args:
            output_dir: Root directory for exported files.
        """
        self.output_dir = Path(output_dir)

    def save_archive(self, filename: str, data: bytes) -> Path:
        """
        Write archive bytes to the output directory.

        Args:
            filename: Archive filename.
            data: Archive bytes.

        Returns:
            Path to saved archive.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        archive_path = self.output_dir / filename
        archive_path.write_bytes(data)
        return archive_path

    def save_html(self, html_content: str, filename: str = ENTRY_FILENAME) -> Path:
        """
        Save generated HTML next to the archive.

        Args:
            html_content: HTML content to save.
            filename: Output filename.

        Returns:
            Path to saved HTML file.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        html_path = self.output_dir / filename
        html_path.write_text(html_content, encoding="utf-8")
        return html_path
