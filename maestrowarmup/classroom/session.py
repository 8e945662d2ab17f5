"""
Session transitions - Pure functions over SessionState.

Every function takes the current state and returns a new one; nothing here
talks to the AI service. The controller sequences these around its awaits.
"""

from typing import Optional

from maestrowarmup.schemas import (
    ClassType,
    FileAttachment,
    LessonMetadata,
    SessionState,
    Step,
    WarmUpRequest,
    WarmUpResult,
)
from maestrowarmup.ai.metadata import merge_metadata

UNIT_REQUIRED_MESSAGE = "Please enter a unit name."
GENERATION_FAILED_MESSAGE = "Failed to generate warm-up. Please try again."
SPEECH_FAILED_MESSAGE = "Speech generation failed."

EDITABLE_FIELDS = {
    "class_type",
    "unit",
    "activity_type",
    "vocabulary",
    "learning_targets",
    "lesson_plan",
}


def initial_state() -> SessionState:
    return SessionState()


def _replace(state: SessionState, **changes) -> SessionState:
    return state.model_copy(update=changes)


def _replace_request(state: SessionState, **changes) -> SessionState:
    return _replace(state, request=state.request.model_copy(update=changes))


# -----------------------------------------------------------------------------
# Navigation
# -----------------------------------------------------------------------------

def select_class(state: SessionState, class_type: ClassType) -> SessionState:
    return _replace_request(state, class_type=ClassType(class_type))


def continue_to_details(state: SessionState) -> SessionState:
    """Step 1 -> 2. Always allowed."""
    if state.step != Step.SELECT_CLASS:
        return state
    return _replace(state, step=Step.EDIT_DETAILS)


def back_to_classes(state: SessionState) -> SessionState:
    """Step 2 -> 1."""
    if state.step != Step.EDIT_DETAILS:
        return state
    return _replace(state, step=Step.SELECT_CLASS)


def modify_settings(state: SessionState) -> SessionState:
    """Step 3 -> 2. The result only lives on the result view, so it is dropped."""
    if state.step != Step.VIEW_RESULT:
        return state
    return _replace(state, step=Step.EDIT_DETAILS, result=None)


def reset(state: SessionState) -> SessionState:
    """
    Start over from class selection.

    Clears the lesson details, attachment and result but keeps the selected
    class profile and activity type. Bumping the epoch marks any call still
    in flight as stale.
    """
    request = WarmUpRequest(
        class_type=state.request.class_type,
        activity_type=state.request.activity_type,
    )
    return SessionState(request=request, epoch=state.epoch + 1)


def notify(state: SessionState, message: str) -> SessionState:
    return _replace(state, notice=message)


def dismiss_notice(state: SessionState) -> SessionState:
    return _replace(state, notice=None)


# -----------------------------------------------------------------------------
# Form editing
# -----------------------------------------------------------------------------

def update_request(state: SessionState, **fields) -> SessionState:
    """Apply field edits to the current request."""
    unknown = set(fields) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown request fields: {', '.join(sorted(unknown))}")
    request = WarmUpRequest.model_validate({**state.request.model_dump(), **fields})
    return _replace(state, request=request)


def attach_file(state: SessionState, attachment: FileAttachment) -> SessionState:
    return _replace_request(state, attachment=attachment)


def remove_attachment(state: SessionState) -> SessionState:
    """Drop the attachment. Not possible while it is being analyzed."""
    if state.analyzing:
        return state
    return _replace_request(state, attachment=None)


def begin_analysis(state: SessionState) -> SessionState:
    return _replace(state, analyzing=True)


def finish_analysis(state: SessionState, metadata: Optional[LessonMetadata] = None) -> SessionState:
    """Clear the analyzing flag, merging any extracted metadata into the form."""
    state = _replace(state, analyzing=False)
    if metadata is not None:
        state = _replace(state, request=merge_metadata(state.request, metadata))
    return state


# -----------------------------------------------------------------------------
# Generation
# -----------------------------------------------------------------------------

def validate_for_generation(state: SessionState) -> Optional[str]:
    """Return a user-facing message if the request cannot be generated yet."""
    if not state.request.unit.strip():
        return UNIT_REQUIRED_MESSAGE
    return None


def can_generate(state: SessionState) -> bool:
    return (
        state.step in (Step.EDIT_DETAILS, Step.VIEW_RESULT)
        and not state.generating
        and not state.analyzing
    )


def begin_generation(state: SessionState) -> SessionState:
    return _replace(state, generating=True, notice=None)


def complete_generation(state: SessionState, result: WarmUpResult) -> SessionState:
    """Show the new result. A previous result is replaced, never merged."""
    return _replace(state, generating=False, result=result, step=Step.VIEW_RESULT)


def fail_generation(state: SessionState, message: str = GENERATION_FAILED_MESSAGE) -> SessionState:
    return _replace(state, generating=False, notice=message)


# -----------------------------------------------------------------------------
# Speech
# -----------------------------------------------------------------------------

def can_play_audio(state: SessionState) -> bool:
    return (
        state.step == Step.VIEW_RESULT
        and state.result is not None
        and state.result.has_listening_script
        and not state.speaking
    )


def begin_speaking(state: SessionState) -> SessionState:
    return _replace(state, speaking=True, notice=None)


def finish_speaking(state: SessionState, notice: Optional[str] = None) -> SessionState:
    return _replace(state, speaking=False, notice=notice)
