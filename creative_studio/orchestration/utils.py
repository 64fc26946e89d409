"""
Utility functions for inspecting studio state.
"""

from creative_studio.orchestration.state import SessionState


def get_state_summary(state: SessionState) -> str:
    """
    Get a human-readable summary of the current state.

    Args:
        state: Current SessionState

    Returns:
        Formatted string summary
    """
    summary = []
    summary.append(f"Status: {state.status.value}")
    summary.append(f"Project type: {state.project_type.value}")
    summary.append(f"Prompt length: {len(state.prompt_text)}")
    summary.append(f"Code exists: {state.has_code}")
    summary.append(f"Credential configured: {state.has_credential}")
    summary.append(f"Theme: {state.theme.value}")

    if state.error_message:
        summary.append(f"Error: {state.error_message}")

    if state.last_generation and state.last_generation.total_tokens is not None:
        summary.append(f"Tokens: {state.last_generation.total_tokens}")

    return "\n".join(summary)
