"""
Studio controller: owns the session state and wires user actions to the
generation client, preview renderer, export helpers and persistence.
"""

import threading
from typing import Any, Optional

from creative_studio.config import StudioSettings
from creative_studio.errors import ArchiveError, ClipboardError, ValidationError
from creative_studio.io.export import (
    ARCHIVE_FILENAME,
    ArchiveSaver,
    ClipboardWriter,
    copy_to_clipboard,
    export_archive,
    project_files,
)
from creative_studio.io.store import StudioStore
from creative_studio.models import (
    ExamplePrompt,
    GenerationResult,
    Notice,
    ProjectType,
    StudioStatus,
    Theme,
)
from creative_studio.orchestration.state import SessionState
from creative_studio.pipeline.generation import GenerationClient
from creative_studio.rendering.preview import PreviewHandle, PreviewRenderer


GENERATION_FAILED_MESSAGE = "Failed to generate code. Please check your API key and try again."


def placeholder_for(project_type: ProjectType) -> str:
    return (
        f"Describe your {project_type.value} in detail. For example: 'Create a space "
        "invaders game with colorful graphics and smooth controls' or 'Build a modern "
        "portfolio website with dark theme and smooth animations'"
    )


class StudioController:
    """Single owner of SessionState; every mutation goes through a handler here."""

    def __init__(
        self,
        store: StudioStore,
        client: GenerationClient,
        renderer: PreviewRenderer,
        state: Optional[SessionState] = None,
        fallback_credential: Optional[str] = None,
    ):
        """
        Initialize the controller.

        Args:
            store: Persistence for the credential and the last prompt.
            client: Generation client.
            renderer: Preview renderer.
            state: Initial state (a fresh SessionState if omitted).
            fallback_credential: Externally supplied credential used when none
                is stored. Never written to the store.
        """
        self.store = store
        self.client = client
        self.renderer = renderer
        self.state = state or SessionState()
        self.fallback_credential = fallback_credential
        self._inflight = threading.Lock()
        self._request_token = 0

    @classmethod
    def from_settings(
        cls,
        settings: StudioSettings,
        http_client: Optional[Any] = None,
    ) -> "StudioController":
        """Build a controller from settings, load persisted values and drop stale previews."""
        controller = cls(
            store=StudioStore.at(settings.store_path, debounce_seconds=settings.debounce_seconds),
            client=GenerationClient(api_base=settings.api_base, http_client=http_client),
            renderer=PreviewRenderer(settings.preview_dir),
            fallback_credential=settings.api_key,
        )
        controller.load()
        controller.renderer.prune_stale()
        return controller

    def load(self):
        """Read the persisted credential and last prompt into state."""
        self.state.credential = (
            self.store.load_credential() or self.fallback_credential or ""
        )
        self.state.prompt_text = self.store.load_last_prompt() or ""

    # Input

    def set_prompt(self, text: str):
        self.state.prompt_text = text
        self.store.save_last_prompt(text)

    def set_project_type(self, project_type: ProjectType):
        self.state.project_type = ProjectType(project_type)

    def placeholder_text(self) -> str:
        return placeholder_for(self.state.project_type)

    # Generation

    def _check_can_submit(self):
        if not self.state.prompt_text.strip():
            raise ValidationError("Please enter a prompt")
        if not self.state.credential:
            self.state.panels.settings_visible = True
            raise ValidationError("Please set your Groq API key in settings")

    def submit_prompt(self) -> Optional[Notice]:
        """
        Generate code for the current prompt.

        Returns:
            Notice describing the outcome, or None if the result was discarded
            because the session was cleared while the request was in flight.
        """
        try:
            self._check_can_submit()
        except ValidationError as e:
            return Notice.error(e.message)

        # A second submission while one is in flight is rejected.
        if not self._inflight.acquire(blocking=False):
            return Notice.error("A generation is already in progress")

        self._request_token += 1
        token = self._request_token
        try:
            self.state.status = StudioStatus.GENERATING
            self.state.error_message = None

            result = self.client.generate(self.state.prompt_text, self.state.credential)

            if token != self._request_token:
                return None
            return self._apply_result(result)
        finally:
            if token == self._request_token and self.state.status == StudioStatus.GENERATING:
                self.state.status = StudioStatus.ERROR
                self.state.error_message = GENERATION_FAILED_MESSAGE
            self._inflight.release()

    def _apply_result(self, result: GenerationResult) -> Notice:
        if result.ok:
            self.state.generated_code = result.code
            self.state.last_generation = result.generated
            self.renderer.render(result.code)
            self.state.status = StudioStatus.READY
            return Notice.success("Code generated successfully!")

        self.state.status = StudioStatus.ERROR
        self.state.error_message = GENERATION_FAILED_MESSAGE
        return Notice.error(GENERATION_FAILED_MESSAGE)

    # Session

    def clear(self):
        """Reset to idle and forget the prompt, the code and the preview."""
        self._request_token += 1
        self.state.prompt_text = ""
        self.state.generated_code = ""
        self.state.last_generation = None
        self.state.error_message = None
        self.state.status = StudioStatus.IDLE
        self.renderer.clear()
        self.store.clear_last_prompt()

    def save_credential(self, value: str) -> Notice:
        value = (value or "").strip()
        if not value:
            return Notice.error("Please enter your API key")

        self.store.save_credential(value)
        self.state.credential = value
        self.state.panels.settings_visible = False
        return Notice.success("Settings saved successfully!")

    def select_example(self, example: ExamplePrompt):
        """Load an example into the prompt. Does not start a generation."""
        self.set_prompt(example.prompt)
        self.state.project_type = example.project_type
        self.state.panels.examples_visible = False

    def toggle_settings(self) -> bool:
        self.state.panels.settings_visible = not self.state.panels.settings_visible
        return self.state.panels.settings_visible

    def toggle_examples(self) -> bool:
        self.state.panels.examples_visible = not self.state.panels.examples_visible
        return self.state.panels.examples_visible

    def toggle_theme(self) -> Theme:
        self.state.theme = self.state.theme.toggled()
        return self.state.theme

    # Preview

    def refresh_preview(self) -> Optional[PreviewHandle]:
        if not self.state.generated_code:
            return None
        return self.renderer.render(self.state.generated_code)

    def preview_url(self) -> Optional[str]:
        return self.renderer.open_external()

    # Export

    def copy_code(self, writer: ClipboardWriter) -> Notice:
        try:
            copy_to_clipboard(self.state.generated_code, writer)
        except ClipboardError as e:
            return Notice.error(e.message)
        return Notice.success("Code copied to clipboard!")

    def download_archive(self, saver: ArchiveSaver) -> Notice:
        if not self.state.generated_code:
            return Notice.error("No code to download")
        try:
            export_archive(ARCHIVE_FILENAME, project_files(self.state.generated_code), saver)
        except ArchiveError:
            return Notice.error("Failed to create download")
        return Notice.success("Project downloaded!")

    def close(self):
        """Write any pending prompt edit and release the preview."""
        self.store.flush()
        self.renderer.clear()
