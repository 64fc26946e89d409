"""
Session state owned by the studio controller.

Only ``prompt_text`` and ``credential`` outlive a session; everything else is
rebuilt on startup.
"""

from typing import Optional

from pydantic import BaseModel, Field

from creative_studio.models import GeneratedCode, ProjectType, StudioStatus, Theme


class PanelState(BaseModel):
    """Visibility of the collapsible panels."""
    settings_visible: bool = False
    examples_visible: bool = False


class SessionState(BaseModel):
    """
    State for one studio session.

    ``status`` is a single lifecycle value; ``error_message`` is attached
    alongside it and cleared on the next successful transition.
    """

    project_type: ProjectType = ProjectType.GAME
    prompt_text: str = ""
    generated_code: str = ""
    status: StudioStatus = StudioStatus.IDLE
    error_message: Optional[str] = None
    credential: str = Field(default="", repr=False)
    panels: PanelState = Field(default_factory=PanelState)
    theme: Theme = Theme.DARK
    last_generation: Optional[GeneratedCode] = None

    @property
    def is_generating(self) -> bool:
        return self.status == StudioStatus.GENERATING

    @property
    def has_code(self) -> bool:
        return bool(self.generated_code)

    @property
    def has_credential(self) -> bool:
        return bool(self.credential)
