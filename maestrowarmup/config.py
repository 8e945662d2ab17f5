"""
Runtime configuration for MaestroWarmup.

The only external setting is the Gemini API key, read from the environment
(or a .env file at the project root). Everything else is a fixed constant.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")

API_KEY_ENV = "GEMINI_API_KEY"

# Models
METADATA_MODEL = "gemini-3-flash-preview"
WARMUP_MODEL = "gemini-3-pro-preview"
SPEECH_MODEL = "gemini-2.5-flash-preview-tts"

# Speech output. The TTS model returns raw PCM with no header, so these
# must match what the service emits or playback pitch/speed is wrong.
SPEECH_VOICE = "Kore"
SAMPLE_RATE = 24000
NUM_CHANNELS = 1
PCM_NORMALIZER = 32768.0

DEFAULT_MIME_TYPE = "application/pdf"
ALLOWED_EXTENSIONS = {"pdf", "txt"}

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def get_api_key() -> str | None:
    """Return the Gemini API key from the environment, if set."""
    return os.environ.get(API_KEY_ENV)
