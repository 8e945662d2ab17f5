"""
Speech synthesizer - Read listening scripts aloud with Gemini TTS.

The TTS model returns headerless 16-bit little-endian PCM at 24 kHz mono.
Samples are normalized to [-1.0, 1.0) floats before playback.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
from google.genai import types as genai_types

from maestrowarmup.config import (
    NUM_CHANNELS,
    PCM_NORMALIZER,
    SAMPLE_RATE,
    SPEECH_MODEL,
    SPEECH_VOICE,
)
from maestrowarmup.errors import AudioDecodeError, NoAudioDataError, SpeechError
from maestrowarmup.utils import format_prompt, load_prompt

from .client import GeminiClient, get_first_inline_data

logger = logging.getLogger(__name__)

BYTES_PER_SAMPLE = 2


@dataclass
class AudioClip:
    """Decoded audio ready for playback."""
    samples: np.ndarray  # float32, shape (frames,) or (frames, channels)
    sample_rate: int
    num_channels: int

    @property
    def frame_count(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration_seconds(self) -> float:
        return self.frame_count / self.sample_rate


AudioPlayer = Callable[[AudioClip], None]


def build_speech_prompt(text: str) -> str:
    return format_prompt(load_prompt("speak")["user_template"], text=text)


def build_speech_config(voice_name: str = SPEECH_VOICE) -> genai_types.GenerateContentConfig:
    return genai_types.GenerateContentConfig(
        response_modalities=["AUDIO"],
        speech_config=genai_types.SpeechConfig(
            voice_config=genai_types.VoiceConfig(
                prebuilt_voice_config=genai_types.PrebuiltVoiceConfig(voice_name=voice_name),
            ),
        ),
    )


def decode_base64_audio(payload: str | bytes) -> bytes:
    """
    Turn an audio payload into raw PCM bytes.

    The REST API carries base64 text; the Python SDK already decodes it to
    bytes, in which case the payload is returned unchanged.
    """
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise AudioDecodeError(f"Audio payload is not valid base64: {e}") from e


def decode_pcm16(
    pcm: bytes,
    sample_rate: int = SAMPLE_RATE,
    num_channels: int = NUM_CHANNELS,
) -> AudioClip:
    """
    Decode interleaved 16-bit little-endian PCM into normalized float samples.

    Raises:
        AudioDecodeError: If the byte count is not a whole number of frames
    """
    frame_size = BYTES_PER_SAMPLE * num_channels
    if len(pcm) % frame_size:
        raise AudioDecodeError(
            f"PCM payload of {len(pcm)} bytes is not a whole number of "
            f"{num_channels}-channel 16-bit frames"
        )

    samples = np.frombuffer(pcm, dtype="<i2").astype(np.float32) / np.float32(PCM_NORMALIZER)
    if num_channels > 1:
        samples = samples.reshape(-1, num_channels)

    return AudioClip(samples=samples, sample_rate=sample_rate, num_channels=num_channels)


async def synthesize_speech(client: GeminiClient, text: str) -> AudioClip:
    """
    Synthesize ``text`` and decode the returned audio.

    Raises:
        NoAudioDataError: If the response has no inline audio
        AudioDecodeError: If the audio cannot be decoded
        SpeechError: On any other failure
    """
    try:
        parts = [genai_types.Part(text=build_speech_prompt(text))]
        response = await client.generate_content(SPEECH_MODEL, parts, build_speech_config())
    except Exception as e:
        logger.error(f"Speech request failed: {e}")
        raise SpeechError(f"Speech request failed: {e}") from e

    payload = get_first_inline_data(response)
    if not payload:
        raise NoAudioDataError("No audio data returned")

    clip = decode_pcm16(decode_base64_audio(payload))
    logger.info(f"Synthesized {clip.duration_seconds:.1f}s of audio")
    return clip


async def speak(client: GeminiClient, text: str, player: Optional[AudioPlayer] = None) -> AudioClip:
    """
    Synthesize ``text`` and hand the clip to ``player``, if given.

    Returns once playback has started; the clip is returned so the caller
    can render it again later.
    """
    clip = await synthesize_speech(client, text)
    if player is not None:
        player(clip)
    return clip
