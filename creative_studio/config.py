"""
Runtime configuration loaded from the environment (and a local ``.env`` file).
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


DEFAULT_API_BASE = "https://api.groq.com/openai/v1"
DEFAULT_STORE_PATH = Path.home() / ".creative_studio" / "store.json"
DEFAULT_DEBOUNCE_SECONDS = 0.5


class StudioSettings(BaseModel):
    """Settings shared by the Streamlit app and the CLI."""
    api_key: Optional[str] = None
    api_base: str = DEFAULT_API_BASE
    store_path: Path = DEFAULT_STORE_PATH
    preview_dir: Path = Path(tempfile.gettempdir()) / "creative_studio_previews"
    output_dir: Path = Path("outputs")
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS

    class Config:
        arbitrary_types_allowed = True

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "StudioSettings":
        """
        Build settings from environment variables.

        Args:
            dotenv: Whether to load a ``.env`` file first.

        Returns:
            StudioSettings instance.
        """
        if dotenv:
            load_dotenv()

        defaults = cls()
        return cls(
            api_key=os.getenv("GROQ_API_KEY") or None,
            api_base=os.getenv("STUDIO_API_BASE", defaults.api_base),
            store_path=Path(
                os.getenv("STUDIO_STORE_PATH", str(defaults.store_path))
            ).expanduser(),
            preview_dir=Path(os.getenv("STUDIO_PREVIEW_DIR", str(defaults.preview_dir))),
            output_dir=Path(os.getenv("STUDIO_OUTPUT_DIR", str(defaults.output_dir))),
            debounce_seconds=float(
                os.getenv("STUDIO_DEBOUNCE_SECONDS", str(defaults.debounce_seconds))
            ),
        )
