"""
Tests for SessionController: the async actions and their scenarios.
"""

import asyncio
import io
import json

from maestrowarmup.classroom import SessionController, session
from maestrowarmup.errors import GenerationError, NoAudioDataError
from maestrowarmup.schemas import (
    ActivityType,
    ClassType,
    LessonMetadata,
    Step,
    WarmUpRequest,
    WarmUpResult,
)

from tests.conftest import audio_response, pcm_base64, text_response


class Recorder:
    """Async stand-ins for the three AI services that record their calls."""

    def __init__(self, result=None, metadata=None, generate_error=None, extract_error=None, speak_error=None):
        self.result = result or WarmUpResult(title="Título", instruction="Haz", content="Contenido")
        self.metadata = metadata or LessonMetadata()
        self.generate_error = generate_error
        self.extract_error = extract_error
        self.speak_error = speak_error
        self.generate_calls = []
        self.extract_calls = []
        self.speak_calls = []

    async def generate(self, request):
        self.generate_calls.append(request)
        if self.generate_error:
            raise self.generate_error
        return self.result

    async def extract(self, file_base64, mime_type):
        self.extract_calls.append((file_base64, mime_type))
        if self.extract_error:
            raise self.extract_error
        return self.metadata

    async def speak(self, text):
        self.speak_calls.append(text)
        if self.speak_error:
            raise self.speak_error
        return f"clip:{text}"

    def controller(self, **state_fields):
        controller = SessionController(self.generate, self.extract, self.speak)
        if state_fields:
            controller.state = controller.state.model_copy(update=state_fields)
        return controller


class Upload(io.BytesIO):
    def __init__(self, data, name, type=None):
        super().__init__(data)
        self.name = name
        self.type = type


class BrokenUpload:
    name = "broken.pdf"
    type = "application/pdf"

    def read(self):
        raise OSError("gone")


def on_details(recorder, **request_fields):
    controller = recorder.controller()
    controller.continue_to_details()
    if request_fields:
        controller.update(**request_fields)
    return controller


class TestGenerate:
    def test_blank_unit_blocks_call(self):
        recorder = Recorder()
        controller = on_details(recorder)

        state = asyncio.run(controller.generate())

        assert state.step == Step.EDIT_DETAILS
        assert state.notice == session.UNIT_REQUIRED_MESSAGE
        assert recorder.generate_calls == []

    def test_whitespace_unit_blocks_call(self):
        recorder = Recorder()
        controller = on_details(recorder, unit="   ")

        state = asyncio.run(controller.generate())

        assert state.notice == session.UNIT_REQUIRED_MESSAGE
        assert recorder.generate_calls == []

    def test_padded_unit_is_sent_as_typed(self):
        recorder = Recorder()
        controller = on_details(recorder, unit="  x ")

        state = asyncio.run(controller.generate())

        assert state.step == Step.VIEW_RESULT
        assert recorder.generate_calls[0].unit == "  x "

    def test_success_moves_to_result(self):
        recorder = Recorder()
        controller = on_details(recorder, unit="Los Deportes")

        state = asyncio.run(controller.generate())

        assert state.step == Step.VIEW_RESULT
        assert state.result == recorder.result
        assert not state.generating
        assert recorder.generate_calls[0].unit == "Los Deportes"

    def test_failure_stays_with_notice(self):
        recorder = Recorder(generate_error=GenerationError("boom"))
        controller = on_details(recorder, unit="Los Deportes")

        state = asyncio.run(controller.generate())

        assert state.step == Step.EDIT_DETAILS
        assert state.result is None
        assert not state.generating
        assert state.notice == session.GENERATION_FAILED_MESSAGE

    def test_ignored_while_generating(self):
        recorder = Recorder()
        controller = on_details(recorder, unit="La Casa")
        controller.state = controller.state.model_copy(update={"generating": True})

        asyncio.run(controller.generate())
        assert recorder.generate_calls == []

    def test_ignored_on_class_selection(self):
        recorder = Recorder()
        controller = recorder.controller()
        controller.update(unit="La Casa")
        asyncio.run(controller.generate())
        assert recorder.generate_calls == []

    def test_sends_attachment_again_after_analysis(self):
        recorder = Recorder()
        controller = on_details(recorder)
        asyncio.run(controller.upload(Upload(b"%PDF plan", "plan.pdf", "application/pdf")))
        controller.update(unit="La Ropa")

        asyncio.run(controller.generate())

        assert recorder.generate_calls[0].attachment is not None
        assert recorder.generate_calls[0].attachment.name == "plan.pdf"


class TestRegenerate:
    def test_replaces_result(self):
        first = WarmUpResult(title="Uno", instruction="i", content="c")
        second = WarmUpResult(title="Dos", instruction="i", content="c")
        recorder = Recorder(result=first)
        controller = on_details(recorder, unit="La Comida")
        asyncio.run(controller.generate())

        recorder.result = second
        state = asyncio.run(controller.regenerate())

        assert state.step == Step.VIEW_RESULT
        assert state.result == second
        assert len(recorder.generate_calls) == 2

    def test_failure_keeps_previous_result(self):
        recorder = Recorder()
        controller = on_details(recorder, unit="La Comida")
        asyncio.run(controller.generate())

        recorder.generate_error = GenerationError("boom")
        state = asyncio.run(controller.regenerate())

        assert state.step == Step.VIEW_RESULT
        assert state.result == recorder.result
        assert state.notice == session.GENERATION_FAILED_MESSAGE

    def test_only_from_result_view(self):
        recorder = Recorder()
        controller = on_details(recorder, unit="La Comida")
        asyncio.run(controller.regenerate())
        assert recorder.generate_calls == []

    def test_uses_request_snapshot_from_trigger_time(self):
        release = None
        seen = []

        async def slow_generate(request):
            seen.append(request)
            await release.wait()
            return WarmUpResult(title="t", instruction="i", content="c")

        async def scenario():
            nonlocal release
            release = asyncio.Event()
            recorder = Recorder()
            controller = SessionController(slow_generate, recorder.extract, recorder.speak)
            controller.continue_to_details()
            controller.update(unit="La Playa")

            task = asyncio.create_task(controller.generate())
            await asyncio.sleep(0)
            controller.update(unit="La Montaña")
            release.set()
            await task
            return controller

        controller = asyncio.run(scenario())

        assert seen[0].unit == "La Playa"
        assert controller.state.request.unit == "La Montaña"
        assert controller.state.step == Step.VIEW_RESULT


class TestUpload:
    def test_prefills_blank_fields(self):
        recorder = Recorder(metadata=LessonMetadata(unit="Los Animales", vocabulary="el perro"))
        controller = on_details(recorder)

        state = asyncio.run(controller.upload(Upload(b"%PDF", "animales.pdf", "application/pdf")))

        assert state.request.attachment.name == "animales.pdf"
        assert state.request.unit == "Los Animales"
        assert state.request.vocabulary == "el perro"
        assert not state.analyzing
        assert recorder.extract_calls == [("JVBERg==", "application/pdf")]

    def test_empty_metadata_keeps_typed_unit(self):
        recorder = Recorder(metadata=LessonMetadata(unit=""))
        controller = on_details(recorder, unit="Los Animales")

        state = asyncio.run(controller.upload(Upload(b"%PDF", "a.pdf", "application/pdf")))

        assert state.request.unit == "Los Animales"

    def test_extraction_failure_is_silent(self):
        recorder = Recorder(extract_error=ConnectionError("offline"))
        controller = on_details(recorder, unit="La Casa")

        state = asyncio.run(controller.upload(Upload(b"hola", "vocab.txt", "text/plain")))

        assert state.request.unit == "La Casa"
        assert state.request.attachment is not None
        assert state.notice is None
        assert not state.analyzing

    def test_unreadable_file_leaves_attachment_unset(self):
        recorder = Recorder()
        controller = on_details(recorder)

        state = asyncio.run(controller.upload(BrokenUpload()))

        assert state.request.attachment is None
        assert state.notice is None
        assert recorder.extract_calls == []

    def test_unsupported_file_type_is_ignored(self):
        recorder = Recorder()
        controller = on_details(recorder)

        state = asyncio.run(controller.upload(Upload(b"PK", "slides.pptx", "application/vnd.ms-powerpoint")))

        assert state.request.attachment is None
        assert not state.analyzing
        assert recorder.extract_calls == []

    def test_analyzing_flag_set_during_extraction(self):
        observed = []
        recorder = Recorder()

        async def extract(file_base64, mime_type):
            observed.append(controller.state.analyzing)
            return LessonMetadata()

        controller = SessionController(recorder.generate, extract, recorder.speak)
        controller.continue_to_details()
        asyncio.run(controller.upload(Upload(b"x", "x.txt", "text/plain")))

        assert observed == [True]
        assert not controller.state.analyzing

    def test_remove_attachment(self):
        recorder = Recorder()
        controller = on_details(recorder)
        asyncio.run(controller.upload(Upload(b"x", "x.txt", "text/plain")))
        assert controller.remove_attachment().request.attachment is None


class TestPlayAudio:
    def test_keeps_clip_until_result_changes(self):
        recorder = Recorder(result=WarmUpResult(title="t", instruction="i", content="c", listening_script="Hola"))
        controller = on_details(recorder, unit="La Familia")
        asyncio.run(controller.generate())

        asyncio.run(controller.play_audio())
        assert controller.audio_clip == "clip:Hola"

        controller.dismiss_notice()
        controller.update(vocabulary="la madre")
        assert controller.audio_clip == "clip:Hola"

        asyncio.run(controller.regenerate())
        assert controller.audio_clip is None

    def test_clip_dropped_on_modify_and_reset(self):
        recorder = Recorder(result=WarmUpResult(title="t", instruction="i", content="c", listening_script="Hola"))
        controller = on_details(recorder, unit="La Familia")
        asyncio.run(controller.generate())
        asyncio.run(controller.play_audio())

        controller.modify()
        assert controller.audio_clip is None

        asyncio.run(controller.generate())
        asyncio.run(controller.play_audio())
        controller.reset()
        assert controller.audio_clip is None

    def test_failure_leaves_no_clip(self):
        recorder = Recorder(result=WarmUpResult(title="t", instruction="i", content="c", listening_script="Hola"))
        controller = on_details(recorder, unit="La Familia")
        asyncio.run(controller.generate())
        asyncio.run(controller.play_audio())

        recorder.speak_error = NoAudioDataError("No audio data returned")
        asyncio.run(controller.play_audio())

        assert controller.audio_clip is None

    def test_failure_clears_flag_with_notice(self):
        recorder = Recorder(
            result=WarmUpResult(title="t", instruction="i", content="c", listening_script="Hola"),
            speak_error=NoAudioDataError("No audio data returned"),
        )
        controller = on_details(recorder, unit="La Familia")
        asyncio.run(controller.generate())

        state = asyncio.run(controller.play_audio())

        assert not state.speaking
        assert state.notice == session.SPEECH_FAILED_MESSAGE

    def test_no_script_no_call(self):
        recorder = Recorder()
        controller = on_details(recorder, unit="La Familia")
        asyncio.run(controller.generate())

        asyncio.run(controller.play_audio())

        assert recorder.speak_calls == []

    def test_ignored_while_speaking(self):
        recorder = Recorder(result=WarmUpResult(title="t", instruction="i", content="c", listening_script="Hola"))
        controller = on_details(recorder, unit="La Familia")
        asyncio.run(controller.generate())
        controller.state = controller.state.model_copy(update={"speaking": True})

        asyncio.run(controller.play_audio())

        assert recorder.speak_calls == []

    def test_speaking_flag_set_during_call(self):
        observed = []
        recorder = Recorder(result=WarmUpResult(title="t", instruction="i", content="c", listening_script="Hola"))

        async def speaker(text):
            observed.append(controller.state.speaking)

        controller = SessionController(recorder.generate, recorder.extract, speaker)
        controller.continue_to_details()
        controller.update(unit="La Familia")
        asyncio.run(controller.generate())
        asyncio.run(controller.play_audio())

        assert observed == [True]
        assert not controller.state.speaking


class TestReset:
    def test_reset_from_result(self):
        recorder = Recorder()
        controller = recorder.controller()
        controller.select_class(ClassType.CUMBRE)
        controller.continue_to_details()
        controller.update(unit="El Medio Ambiente", vocabulary="el reciclaje")
        asyncio.run(controller.generate())
        assert controller.state.step == Step.VIEW_RESULT

        state = controller.reset()

        assert state.step == Step.SELECT_CLASS
        assert state.request.class_type == ClassType.CUMBRE
        assert state.request.unit == ""
        assert state.result is None

    def test_in_flight_generation_is_discarded_after_reset(self):
        # The call itself still completes; only its outcome is dropped.
        finished = []

        async def scenario():
            release = asyncio.Event()

            async def slow_generate(request):
                await release.wait()
                finished.append(request.unit)
                return WarmUpResult(title="t", instruction="i", content="c")

            recorder = Recorder()
            controller = SessionController(slow_generate, recorder.extract, recorder.speak)
            controller.continue_to_details()
            controller.update(unit="Las Vacaciones")

            task = asyncio.create_task(controller.generate())
            await asyncio.sleep(0)
            controller.reset()
            release.set()
            await task
            return controller

        controller = asyncio.run(scenario())

        assert finished == ["Las Vacaciones"]
        assert controller.state.step == Step.SELECT_CLASS
        assert controller.state.result is None
        assert not controller.state.generating

    def test_in_flight_analysis_is_discarded_after_reset(self):
        async def scenario():
            release = asyncio.Event()

            async def slow_extract(file_base64, mime_type):
                await release.wait()
                return LessonMetadata(unit="Los Colores")

            recorder = Recorder()
            controller = SessionController(recorder.generate, slow_extract, recorder.speak)
            controller.continue_to_details()

            task = asyncio.create_task(controller.upload(Upload(b"x", "x.txt", "text/plain")))
            await asyncio.sleep(0)
            controller.reset()
            release.set()
            await task
            return controller

        controller = asyncio.run(scenario())

        assert controller.state.request.unit == ""
        assert controller.state.request.attachment is None
        assert not controller.state.analyzing


class TestListeningScenario:
    """Viaje class, La Familia unit, listening activity, end to end through the Gemini wrappers."""

    def test_generate_then_play(self, make_client):
        payload = {
            "title": "Mi Familia",
            "instruction": "Escucha y contesta.",
            "content": "1. ¿Cuántos hermanos hay?\n2. ¿Cómo se llama la madre?\n3. ¿Dónde viven?",
            "listeningScript": "Hola, esta es mi familia.",
        }
        client, fake = make_client(
            text_response(json.dumps(payload)),
            audio_response(pcm_base64(0, 1000, -1000)),
        )
        played = []
        controller = SessionController.from_client(client, played.append)

        controller.select_class(ClassType.VIAJE)
        controller.continue_to_details()
        controller.update(unit="La Familia", activity_type=ActivityType.LISTENING)
        state = asyncio.run(controller.generate())

        assert state.step == Step.VIEW_RESULT
        assert state.result.listening_script == "Hola, esta es mi familia."
        assert "Class Name: Viaje (Intermediate)" in fake.calls[0]["contents"].parts[0].text

        state = asyncio.run(controller.play_audio())

        speech_calls = fake.calls[1:]
        assert len(speech_calls) == 1
        assert speech_calls[0]["contents"].parts[0].text.endswith(": Hola, esta es mi familia.")
        assert len(played) == 1
        assert controller.audio_clip is played[0]
        assert played[0].frame_count == 3
        assert not state.speaking
        assert state.notice is None

    def test_from_client_wraps_generation_errors(self, make_client):
        client, _ = make_client(text_response("not json"))
        controller = SessionController.from_client(client, lambda clip: None)
        controller.continue_to_details()
        controller.update(unit="La Familia")

        state = asyncio.run(controller.generate())

        assert state.step == Step.EDIT_DETAILS
        assert state.notice == session.GENERATION_FAILED_MESSAGE

    def test_request_defaults(self):
        assert SessionController(None, None, None).state.request == WarmUpRequest()
