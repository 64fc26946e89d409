"""
State machine for the prompt-to-preview studio.

The controller owns a single SessionState and exposes one handler per user
action; the UI and CLI never mutate state directly.
"""

from creative_studio.orchestration.controller import StudioController, placeholder_for
from creative_studio.orchestration.state import PanelState, SessionState
from creative_studio.orchestration.utils import get_state_summary

__all__ = [
    "StudioController",
    "placeholder_for",
    "PanelState",
    "SessionState",
    "get_state_summary",
]
