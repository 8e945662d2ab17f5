"""
MaestroWarmup AI - Gemini-backed operations.

This module provides:
- GeminiClient: async wrapper around google-genai
- extract_metadata / merge_metadata: document pre-fill
- generate_warmup: structured warm-up generation
- synthesize_speech / speak: listening script audio
"""

from .client import (
    GeminiClient,
    get_response_text,
    get_first_inline_data,
)

from .metadata import (
    METADATA_SCHEMA,
    extract_metadata,
    parse_metadata,
    merge_metadata,
)

from .warmup import (
    WARMUP_SCHEMA,
    build_warmup_prompt,
    build_warmup_parts,
    check_listening_script,
    generate_warmup,
)

from .speech import (
    AudioClip,
    AudioPlayer,
    build_speech_prompt,
    build_speech_config,
    decode_base64_audio,
    decode_pcm16,
    synthesize_speech,
    speak,
)

__all__ = [
    # Client
    "GeminiClient",
    "get_response_text",
    "get_first_inline_data",
    # Metadata
    "METADATA_SCHEMA",
    "extract_metadata",
    "parse_metadata",
    "merge_metadata",
    # Warm-up
    "WARMUP_SCHEMA",
    "build_warmup_prompt",
    "build_warmup_parts",
    "check_listening_script",
    "generate_warmup",
    # Speech
    "AudioClip",
    "AudioPlayer",
    "build_speech_prompt",
    "build_speech_config",
    "decode_base64_audio",
    "decode_pcm16",
    "synthesize_speech",
    "speak",
]
