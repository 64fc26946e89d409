"""
Streamlit web interface for AI Creative Studio.

Describe a game or website, generate a self-contained HTML document with a
hosted model, preview it in a sandboxed frame, and copy or download the code.
"""

import hashlib

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

from creative_studio.catalog import EXAMPLE_PROMPTS
from creative_studio.config import StudioSettings
from creative_studio.io.export import copy_button_html
from creative_studio.models import MODEL_ID, ExamplePrompt, Notice, NoticeLevel, ProjectType, Theme
from creative_studio.orchestration import StudioController

# Load environment variables
load_dotenv()

# Page configuration
st.set_page_config(
    page_title="AI Creative Studio",
    page_icon="🪄",
    layout="wide",
    initial_sidebar_state="collapsed"
)

PALETTES = {
    Theme.DARK: {"background": "#0f172a", "card": "#1e293b", "text": "#f8fafc", "muted": "#94a3b8"},
    Theme.LIGHT: {"background": "#ffffff", "card": "#f1f5f9", "text": "#0f172a", "muted": "#64748b"},
}

PROJECT_LABELS = {
    ProjectType.GAME: "🎮 Create Game",
    ProjectType.WEBSITE: "🌐 Create Website",
}


def theme_css(theme: Theme) -> str:
    """Stylesheet for the given theme."""
    palette = PALETTES[theme]
    return f"""
<style>
    .stApp {{
        background-color: {palette['background']};
        color: {palette['text']};
    }}
    .main-header {{
        font-size: 2rem;
        font-weight: 700;
        margin-bottom: 0.25rem;
    }}
    .sub-header {{
        font-size: 1rem;
        color: {palette['muted']};
        margin-bottom: 1.5rem;
    }}
    .empty-state {{
        background-color: {palette['card']};
        color: {palette['muted']};
        border-radius: 0.5rem;
        padding: 4rem 1rem;
        text-align: center;
    }}
</style>
"""


def get_controller() -> StudioController:
    """Per-session controller, created and loaded on first access."""
    if "controller" not in st.session_state:
        controller = StudioController.from_settings(StudioSettings.from_env(dotenv=False))
        st.session_state.controller = controller
        st.session_state.prompt_input = controller.state.prompt_text
        st.session_state.project_type_input = controller.state.project_type.value
        st.session_state.api_key_input = controller.state.credential
        st.session_state.notice = None
    return st.session_state.controller


def show_notice(notice: Notice):
    if notice.level == NoticeLevel.ERROR:
        st.error(f"❌ {notice.title}: {notice.message}")
    elif notice.level == NoticeLevel.SUCCESS:
        st.success(f"✅ {notice.message}")
    else:
        st.info(notice.message)


# Callbacks run before the script re-executes, so they may update widget keys.

def on_prompt_change():
    get_controller().set_prompt(st.session_state.prompt_input)


def on_project_type_change():
    get_controller().set_project_type(ProjectType(st.session_state.project_type_input))


def on_select_example(example: ExamplePrompt):
    controller = get_controller()
    controller.select_example(example)
    st.session_state.prompt_input = controller.state.prompt_text
    st.session_state.project_type_input = controller.state.project_type.value


def on_clear():
    get_controller().clear()
    st.session_state.prompt_input = ""


def on_save_settings():
    controller = get_controller()
    st.session_state.notice = controller.save_credential(st.session_state.api_key_input)


def on_cancel_settings():
    controller = get_controller()
    controller.state.panels.settings_visible = False
    st.session_state.api_key_input = controller.state.credential


def render_copy_button(text: str, label: str, *, key: str):
    """Render a one-click clipboard button for the generated code."""
    element_id = hashlib.sha1(key.encode("utf-8")).hexdigest()[:12]
    components.html(copy_button_html(text, label, element_id), height=42)


def main():
    """Main application entry point."""
    controller = get_controller()
    state = controller.state

    st.markdown(theme_css(state.theme), unsafe_allow_html=True)

    header_col, theme_col, settings_col = st.columns([10, 1, 1])
    with header_col:
        st.markdown('<div class="main-header">🪄 AI Creative Studio</div>', unsafe_allow_html=True)
        st.markdown(
            '<div class="sub-header">Generate Games & Websites with AI</div>',
            unsafe_allow_html=True
        )
    with theme_col:
        st.button(
            "☀️" if state.theme == Theme.DARK else "🌙",
            on_click=controller.toggle_theme,
            help="Toggle theme",
            key="theme_toggle",
        )
    with settings_col:
        st.button("⚙️", on_click=controller.toggle_settings, help="Settings", key="settings_toggle")

    if st.session_state.notice is not None:
        show_notice(st.session_state.notice)
        st.session_state.notice = None

    if state.panels.settings_visible:
        settings_panel()

    st.radio(
        "Project type",
        [t.value for t in ProjectType],
        format_func=lambda value: PROJECT_LABELS[ProjectType(value)],
        horizontal=True,
        key="project_type_input",
        on_change=on_project_type_change,
        label_visibility="collapsed",
    )

    prompt_section(controller)

    if state.panels.examples_visible:
        examples_section()

    st.divider()

    code_col, preview_col = st.columns(2)
    with code_col:
        code_panel(controller)
    with preview_col:
        preview_panel(controller)


def settings_panel():
    """API key entry."""
    # Widget state is dropped while the panel is hidden.
    if "api_key_input" not in st.session_state:
        st.session_state.api_key_input = get_controller().state.credential

    with st.container(border=True):
        st.subheader("Settings")
        st.text_input(
            "Groq API Key *",
            type="password",
            placeholder="Enter your Groq API key",
            key="api_key_input",
        )
        st.caption("ℹ️ Your API key is stored locally and never sent to our servers")
        st.text_input("Model", value=MODEL_ID, disabled=True)

        save_col, cancel_col = st.columns([3, 1])
        with save_col:
            st.button("Save Settings", type="primary", on_click=on_save_settings, width="stretch")
        with cancel_col:
            st.button("Cancel", on_click=on_cancel_settings, width="stretch")


def prompt_section(controller: StudioController):
    """Prompt input with example, clear and generate actions."""
    state = controller.state

    with st.container(border=True):
        title_col, examples_col, clear_col = st.columns([8, 1, 1])
        with title_col:
            st.subheader("Describe Your Project")
        with examples_col:
            st.button("💡 Examples", on_click=controller.toggle_examples, key="examples_toggle")
        with clear_col:
            st.button("🗑️ Clear", on_click=on_clear, key="clear_button")

        st.text_area(
            "Prompt",
            placeholder=controller.placeholder_text(),
            height=130,
            key="prompt_input",
            on_change=on_prompt_change,
            label_visibility="collapsed",
        )

        hint_col, generate_col = st.columns([8, 2])
        with hint_col:
            st.caption("ℹ️ Be as specific as possible for better results")
        with generate_col:
            generate = st.button(
                "🪄 Generate",
                type="primary",
                disabled=state.is_generating,
                width="stretch",
            )

    if generate:
        if st.session_state.prompt_input != state.prompt_text:
            controller.set_prompt(st.session_state.prompt_input)
        with st.spinner("🔄 Generating code..."):
            st.session_state.notice = controller.submit_prompt()
        st.rerun()


def examples_section():
    """Quick-start example cards."""
    with st.container(border=True):
        st.subheader("💡 Example Prompts")
        columns = st.columns(2)
        for index, example in enumerate(EXAMPLE_PROMPTS):
            with columns[index % 2]:
                with st.container(border=True):
                    st.markdown(f"### {example.icon} {example.title}")
                    st.caption(example.description)
                    st.button(
                        f"Use · {example.project_type.value}",
                        key=f"example_{index}",
                        on_click=on_select_example,
                        args=(example,),
                    )


def code_panel(controller: StudioController):
    """Generated code with copy and download actions."""
    state = controller.state
    st.subheader("💻 Generated Code")

    if not state.has_code:
        st.markdown(
            '<div class="empty-state">Your generated code will appear here<br/>'
            '<small>Enter a prompt above and click Generate to start</small></div>',
            unsafe_allow_html=True,
        )
        return

    copy_col, download_col = st.columns(2)
    with copy_col:
        # Copy happens in the viewer's browser; the button reports the outcome itself.
        render_copy_button(state.generated_code, "📋 Copy", key="copy_code")
    with download_col:
        archive = {}
        notice = controller.download_archive(
            lambda filename, data: archive.update(filename=filename, data=data)
        )
        if notice.is_error:
            show_notice(notice)
        else:
            st.download_button(
                "⬇️ Download project",
                data=archive["data"],
                file_name=archive["filename"],
                mime="application/zip",
                key="download_archive",
            )

    st.code(state.generated_code, language="html", line_numbers=True)

    generated = state.last_generation
    if generated is not None:
        caption = f"{generated.model_name} · {generated.generation_timestamp.strftime('%Y-%m-%d %H:%M:%S')}"
        if generated.total_tokens is not None:
            caption += f" · {generated.total_tokens:,} tokens"
        st.caption(caption)


def preview_panel(controller: StudioController):
    """Sandboxed live preview."""
    state = controller.state
    st.subheader("👁️ Live Preview")

    if not state.has_code:
        st.markdown(
            '<div class="empty-state">Live preview will appear here<br/>'
            '<small>Generate code to see your project come to life</small></div>',
            unsafe_allow_html=True,
        )
        return

    refresh_col, open_col = st.columns(2)
    with refresh_col:
        st.button("🔄 Refresh preview", on_click=controller.refresh_preview, key="refresh_preview")
    with open_col:
        components.html(controller.renderer.open_tab_html("↗️ Open in new tab"), height=42)

    components.html(controller.renderer.frame_html(height=560, theme=state.theme), height=580)


if __name__ == "__main__":
    main()
