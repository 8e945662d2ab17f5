"""
SessionController - Drive session transitions around the AI calls.

The controller owns the current SessionState and the three AI-backed
callables. Each async action snapshots what it needs before awaiting and
applies its completion transition to whatever the state is by then, so
edits made while a call is in flight survive. A reset while a call is in
flight bumps the epoch; the call still runs to completion but its outcome
is discarded.
"""

import logging
from functools import partial
from typing import Any, Awaitable, Callable, Optional

from maestrowarmup.ai import (
    AudioPlayer,
    GeminiClient,
    extract_metadata,
    generate_warmup,
    speak,
)
from maestrowarmup.errors import AttachmentReadError
from maestrowarmup.schemas import (
    ClassType,
    LessonMetadata,
    SessionState,
    Step,
    WarmUpRequest,
    WarmUpResult,
)
from maestrowarmup.utils import read_attachment

from . import session

logger = logging.getLogger(__name__)

WarmupGenerator = Callable[[WarmUpRequest], Awaitable[WarmUpResult]]
MetadataExtractor = Callable[[str, str], Awaitable[LessonMetadata]]
Speaker = Callable[[str], Awaitable[Any]]


class SessionController:
    """
    Session state machine for one teacher's browser session.

    Steps: SELECT_CLASS (1) -> EDIT_DETAILS (2) -> VIEW_RESULT (3).
    """

    def __init__(
        self,
        generator: WarmupGenerator,
        extractor: MetadataExtractor,
        speaker: Speaker,
        state: Optional[SessionState] = None,
    ):
        """
        Args:
            generator: async callable producing a WarmUpResult from a request
            extractor: async callable (base64, mime_type) -> LessonMetadata
            speaker: async callable that reads a script aloud and returns the clip
            state: Starting state (defaults to a fresh session)
        """
        self.generator = generator
        self.extractor = extractor
        self.speaker = speaker
        self.state = state or session.initial_state()
        self.audio_clip = None  # last synthesized clip for the current result

    @classmethod
    def from_client(cls, client: GeminiClient, player: Optional[AudioPlayer] = None) -> "SessionController":
        """
        Wire a controller to the Gemini-backed services.

        ``player`` is called with each new clip; without one, callers render
        ``audio_clip`` themselves.
        """
        async def speaker(text: str):
            return await speak(client, text, player)

        return cls(
            generator=partial(generate_warmup, client),
            extractor=partial(extract_metadata, client),
            speaker=speaker,
        )

    # -------------------------------------------------------------------------
    # Synchronous actions
    # -------------------------------------------------------------------------

    def select_class(self, class_type: ClassType) -> SessionState:
        self.state = session.select_class(self.state, class_type)
        return self.state

    def continue_to_details(self) -> SessionState:
        self.state = session.continue_to_details(self.state)
        return self.state

    def back(self) -> SessionState:
        self.state = session.back_to_classes(self.state)
        return self.state

    def modify(self) -> SessionState:
        self.state = session.modify_settings(self.state)
        self.audio_clip = None
        return self.state

    def reset(self) -> SessionState:
        self.state = session.reset(self.state)
        self.audio_clip = None
        return self.state

    def update(self, **fields) -> SessionState:
        self.state = session.update_request(self.state, **fields)
        return self.state

    def remove_attachment(self) -> SessionState:
        self.state = session.remove_attachment(self.state)
        return self.state

    def dismiss_notice(self) -> SessionState:
        self.state = session.dismiss_notice(self.state)
        return self.state

    def _is_stale(self, epoch: int) -> bool:
        return self.state.epoch != epoch

    # -------------------------------------------------------------------------
    # Async actions
    # -------------------------------------------------------------------------

    async def upload(self, file) -> SessionState:
        """
        Attach an uploaded document and pre-fill the form from it.

        A file that cannot be read leaves the attachment unset. Extraction
        failures are logged and otherwise ignored; the form stays as typed.
        """
        try:
            attachment = read_attachment(file)
        except AttachmentReadError as e:
            logger.warning(f"Ignoring unreadable upload: {e}")
            return self.state

        epoch = self.state.epoch
        self.state = session.begin_analysis(session.attach_file(self.state, attachment))

        metadata = None
        try:
            metadata = await self.extractor(attachment.base64, attachment.mime_type)
        except Exception as e:
            logger.warning(f"Metadata extraction failed for {attachment.name}: {e}")

        if self._is_stale(epoch):
            logger.info(f"Session was reset during analysis of {attachment.name}; discarding metadata")
            return self.state

        self.state = session.finish_analysis(self.state, metadata)
        return self.state

    async def generate(self) -> SessionState:
        """
        Generate a warm-up from the current request.

        A blank unit raises a notice without calling the service. On success
        the session moves to the result view; on failure it stays put with
        a notice.
        """
        if not session.can_generate(self.state):
            logger.debug("Generate ignored: session busy or not on a generating step")
            return self.state

        message = session.validate_for_generation(self.state)
        if message:
            self.state = session.notify(self.state, message)
            return self.state

        snapshot = self.state.request.model_copy(deep=True)
        epoch = self.state.epoch
        self.state = session.begin_generation(self.state)

        try:
            result = await self.generator(snapshot)
        except Exception as e:
            logger.error(f"Generation failed: {e}")
            if not self._is_stale(epoch):
                self.state = session.fail_generation(self.state)
            return self.state

        if self._is_stale(epoch):
            logger.info("Session was reset during generation; discarding result")
            return self.state

        self.state = session.complete_generation(self.state, result)
        self.audio_clip = None
        return self.state

    async def regenerate(self) -> SessionState:
        """Generate again from the result view with the current request."""
        if self.state.step != Step.VIEW_RESULT:
            return self.state
        return await self.generate()

    async def play_audio(self) -> SessionState:
        """Read the current listening script aloud."""
        if not session.can_play_audio(self.state):
            return self.state

        script = self.state.result.listening_script
        epoch = self.state.epoch
        self.state = session.begin_speaking(self.state)
        self.audio_clip = None

        clip = None
        notice = None
        try:
            clip = await self.speaker(script)
        except Exception as e:
            logger.error(f"Speech playback failed: {e}")
            notice = session.SPEECH_FAILED_MESSAGE

        if not self._is_stale(epoch):
            self.audio_clip = clip
            self.state = session.finish_speaking(self.state, notice)
        return self.state
