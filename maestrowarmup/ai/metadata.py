"""
Metadata extractor - Pre-fill lesson details from an uploaded document.

Extraction is best-effort enrichment: a response that cannot be parsed
yields empty metadata so the form stays usable with blank fields.
"""

import base64
import logging

from google.genai import types as genai_types
from pydantic import ValidationError

from maestrowarmup.config import METADATA_MODEL
from maestrowarmup.schemas import LessonMetadata, WarmUpRequest
from maestrowarmup.utils import extract_json_from_response, load_prompt

from .client import GeminiClient, get_response_text

logger = logging.getLogger(__name__)


METADATA_SCHEMA = genai_types.Schema(
    type=genai_types.Type.OBJECT,
    properties={
        "unit": genai_types.Schema(type=genai_types.Type.STRING),
        "vocabulary": genai_types.Schema(type=genai_types.Type.STRING),
        "learningTargets": genai_types.Schema(type=genai_types.Type.STRING),
    },
)


def build_metadata_config() -> genai_types.GenerateContentConfig:
    return genai_types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=METADATA_SCHEMA,
    )


async def extract_metadata(client: GeminiClient, file_base64: str, mime_type: str) -> LessonMetadata:
    """
    Ask Gemini for the unit title, vocabulary and learning targets of a document.

    Args:
        client: GeminiClient instance
        file_base64: base64-encoded document
        mime_type: MIME type of the document

    Returns:
        LessonMetadata; empty if the response could not be parsed

    Raises:
        Exception: transport errors from the SDK are not caught here
    """
    prompt_config = load_prompt("extract_metadata")
    parts = [
        genai_types.Part.from_bytes(data=base64.b64decode(file_base64), mime_type=mime_type),
        genai_types.Part(text=prompt_config["user_template"]),
    ]

    response = await client.generate_content(METADATA_MODEL, parts, build_metadata_config())
    return parse_metadata(get_response_text(response))


def parse_metadata(text: str | None) -> LessonMetadata:
    """Parse a metadata response, returning empty metadata on any parse failure."""
    try:
        data = extract_json_from_response(text)
        return LessonMetadata.model_validate(data)
    except (ValueError, ValidationError) as e:
        logger.warning(f"Could not parse metadata response, leaving fields blank: {e}")
        return LessonMetadata()


def merge_metadata(request: WarmUpRequest, metadata: LessonMetadata) -> WarmUpRequest:
    """
    Merge extracted metadata into a request.

    Only non-empty extracted values replace form fields; an absent or empty
    value never clears what the teacher already typed.
    """
    updates = {}
    for field in ("unit", "vocabulary", "learning_targets"):
        value = getattr(metadata, field)
        if value and value.strip():
            updates[field] = value
    return request.model_copy(update=updates)
