"""
MaestroWarmup AI - Smart daily warm-ups for Spanish classes

Streamlit application that turns lesson details (optionally pre-filled from
an uploaded lesson document) into a 5-10 minute classroom warm-up, and reads
listening scripts aloud.

Usage:
    streamlit run app.py
"""

import asyncio
import logging

import streamlit as st

from maestrowarmup.ai import GeminiClient
from maestrowarmup.classroom import SessionController
from maestrowarmup.config import ALLOWED_EXTENSIONS, LOG_FORMAT
from maestrowarmup.schemas import ActivityType, ClassType, Step, get_class_profile
from maestrowarmup.viewer import (
    get_class_selector_css,
    get_result_css,
    play_clip,
    render_class_card,
    render_listening_script,
    render_result,
    render_teacher_key,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="MaestroWarmup AI",
    page_icon="🇪🇸",
    layout="centered",
)

# request field -> widget key
FORM_FIELDS = {
    "unit": "field_unit",
    "activity_type": "field_activity_type",
    "vocabulary": "field_vocabulary",
    "learning_targets": "field_learning_targets",
    "lesson_plan": "field_lesson_plan",
}


def run(coro):
    """
    Drive one controller action to completion on the session's event loop.

    The Gemini client's async transport is bound to the loop it first ran
    on, so every action of a session must run on that same loop.
    """
    return st.session_state.runner.run(coro)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "runner" not in st.session_state:
        st.session_state.runner = asyncio.Runner()

    if "controller" not in st.session_state:
        try:
            client = GeminiClient()
        except ValueError as e:
            logger.error(str(e))
            st.session_state.client_error = str(e)
            st.session_state.controller = None
        else:
            st.session_state.client_error = None
            st.session_state.controller = SessionController.from_client(client)
            sync_form_widgets()

    if "upload_key" not in st.session_state:
        st.session_state.upload_key = 0

    if "analyzed_file_id" not in st.session_state:
        st.session_state.analyzed_file_id = None


def sync_form_widgets():
    """Push the controller's request into the form widgets."""
    request = st.session_state.controller.state.request
    for field, key in FORM_FIELDS.items():
        st.session_state[key] = getattr(request, field)


def ensure_form_widgets():
    """Restore widget values Streamlit dropped while step 2 was not shown."""
    request = st.session_state.controller.state.request
    for field, key in FORM_FIELDS.items():
        if key not in st.session_state:
            st.session_state[key] = getattr(request, field)


def on_field_change(field: str):
    st.session_state.controller.update(**{field: st.session_state[FORM_FIELDS[field]]})


def clear_uploader():
    st.session_state.upload_key += 1
    st.session_state.analyzed_file_id = None


# -----------------------------------------------------------------------------
# Header & Notices
# -----------------------------------------------------------------------------

def render_header():
    """Render the app header with the Start Over action."""
    controller = st.session_state.controller

    col1, col2 = st.columns([4, 1])
    with col1:
        st.title("MaestroWarmup AI")
        st.caption("Smart daily exercises for your students")
    with col2:
        if controller.state.step > Step.SELECT_CLASS:
            if st.button("Start Over", use_container_width=True):
                controller.reset()
                clear_uploader()
                sync_form_widgets()
                st.rerun()


def render_notice():
    """Show the last action's alert once."""
    controller = st.session_state.controller
    if controller.state.notice:
        st.warning(controller.state.notice)
        controller.dismiss_notice()


# -----------------------------------------------------------------------------
# Step 1: Class Selection
# -----------------------------------------------------------------------------

def render_class_selection():
    """Render the class profile cards."""
    controller = st.session_state.controller
    selected = controller.state.request.class_type

    st.header("Which class are we preparing for?")
    st.markdown("Select the level to customize the exercise difficulty.")
    st.markdown(get_class_selector_css(), unsafe_allow_html=True)

    columns = st.columns(len(ClassType))
    for column, class_type in zip(columns, ClassType):
        with column:
            st.markdown(render_class_card(class_type, selected=class_type == selected), unsafe_allow_html=True)
            if st.button("Select", key=f"class_{class_type.value}", use_container_width=True):
                controller.select_class(class_type)
                st.rerun()

    st.divider()
    if st.button("Continue to Lesson Details →", type="primary", use_container_width=True):
        controller.continue_to_details()
        st.rerun()


# -----------------------------------------------------------------------------
# Step 2: Lesson Details
# -----------------------------------------------------------------------------

def render_document_import():
    """Render the smart document import section."""
    controller = st.session_state.controller

    st.subheader("Smart Document Import")
    st.caption("Upload a PDF/Text from Google Drive to auto-fill vocabulary and targets.")

    uploaded = st.file_uploader(
        "Supports PDF and TXT files",
        type=sorted(ALLOWED_EXTENSIONS),
        key=f"uploader_{st.session_state.upload_key}",
    )

    if uploaded is not None:
        file_id = getattr(uploaded, "file_id", uploaded.name)
        if file_id != st.session_state.analyzed_file_id:
            st.session_state.analyzed_file_id = file_id
            with st.spinner("AI is scanning your document..."):
                run(controller.upload(uploaded))
            sync_form_widgets()

    attachment = controller.state.request.attachment
    if attachment:
        col1, col2 = st.columns([4, 1])
        with col1:
            status = "Extracting details..." if controller.state.analyzing else "Details extracted and pre-filled below"
            st.markdown(f"**{attachment.extension.upper() or 'FILE'}** · {attachment.name}  \n{status}")
        with col2:
            if not controller.state.analyzing:
                if st.button("Remove", use_container_width=True):
                    controller.remove_attachment()
                    clear_uploader()
                    st.rerun()


def render_detail_form():
    """Render the lesson detail fields and actions."""
    controller = st.session_state.controller
    profile = get_class_profile(controller.state.request.class_type)

    st.markdown(f"**Class:** {profile.name} ({profile.level})")

    col1, col2 = st.columns(2)
    with col1:
        st.text_input(
            "Current Unit",
            placeholder="e.g. Los Deportes, La Familia...",
            key=FORM_FIELDS["unit"],
            on_change=on_field_change,
            args=("unit",),
        )
    with col2:
        st.selectbox(
            "Activity Type",
            list(ActivityType),
            format_func=lambda activity: activity.label,
            key=FORM_FIELDS["activity_type"],
            on_change=on_field_change,
            args=("activity_type",),
        )

    st.text_area(
        "Vocabulary List",
        placeholder="List the specific words for this lesson...",
        key=FORM_FIELDS["vocabulary"],
        on_change=on_field_change,
        args=("vocabulary",),
    )

    col1, col2 = st.columns(2)
    with col1:
        st.text_area(
            "Learning Targets",
            placeholder="What should they achieve?",
            key=FORM_FIELDS["learning_targets"],
            on_change=on_field_change,
            args=("learning_targets",),
        )
    with col2:
        st.text_area(
            "Extra Lesson Details (Optional)",
            placeholder="Any specific context for today?",
            key=FORM_FIELDS["lesson_plan"],
            on_change=on_field_change,
            args=("lesson_plan",),
        )

    st.divider()
    col1, col2 = st.columns([1, 3])
    with col1:
        if st.button("Back", use_container_width=True):
            controller.back()
            st.rerun()
    with col2:
        busy = controller.state.generating or controller.state.analyzing
        if st.button("Generate Warm-up", type="primary", disabled=busy, use_container_width=True):
            with st.spinner("Creating Warm-up..."):
                run(controller.generate())
            st.rerun()


def render_details():
    ensure_form_widgets()
    render_document_import()
    st.divider()
    render_detail_form()


# -----------------------------------------------------------------------------
# Step 3: Result
# -----------------------------------------------------------------------------

def render_result_view():
    """Render the generated warm-up."""
    controller = st.session_state.controller
    state = controller.state
    result = state.result
    if result is None:
        return

    st.markdown(get_result_css(), unsafe_allow_html=True)
    st.markdown(render_result(result, state.request.activity_type), unsafe_allow_html=True)

    if result.has_listening_script:
        st.divider()
        col1, col2 = st.columns([3, 2])
        with col1:
            st.subheader("Teacher Listening Script")
        with col2:
            label = "Speaking..." if state.speaking else "Play Spanish Audio"
            if st.button(label, disabled=state.speaking, use_container_width=True):
                with st.spinner("Generating audio..."):
                    run(controller.play_audio())
                render_notice()
        st.markdown(render_listening_script(result), unsafe_allow_html=True)
        # Re-rendered on every run until the result changes
        if controller.audio_clip is not None:
            play_clip(controller.audio_clip)

    if result.teacher_key:
        with st.expander("Teacher Notes & Key"):
            st.markdown(render_teacher_key(result), unsafe_allow_html=True)

    st.divider()
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Modify Settings", use_container_width=True):
            controller.modify()
            st.rerun()
    with col2:
        label = "Regenerating..." if state.generating else "Regenerate"
        if st.button(label, type="primary", disabled=state.generating, use_container_width=True):
            with st.spinner("Regenerating..."):
                run(controller.regenerate())
            st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()

    if st.session_state.controller is None:
        st.title("MaestroWarmup AI")
        st.error(st.session_state.client_error)
        st.code("echo 'GEMINI_API_KEY=your-key' >> .env")
        return

    render_header()
    render_notice()

    step = st.session_state.controller.state.step
    if step == Step.SELECT_CLASS:
        render_class_selection()
    elif step == Step.EDIT_DETAILS:
        render_details()
    elif step == Step.VIEW_RESULT:
        render_result_view()

    st.divider()
    st.caption("MaestroWarmup AI. Built for language educators. Analyzing and generating with Gemini.")


if __name__ == "__main__":
    main()
