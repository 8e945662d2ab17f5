"""
Warm-up generator - Build the prompt and request a structured exercise.
"""

import logging
from typing import Any, Optional

from google.genai import types as genai_types

from maestrowarmup.config import WARMUP_MODEL
from maestrowarmup.errors import GenerationError, MissingListeningScriptError
from maestrowarmup.schemas import ActivityType, WarmUpRequest, WarmUpResult
from maestrowarmup.utils import (
    decode_attachment,
    extract_json_from_response,
    format_prompt,
    load_prompt,
)

from .client import GeminiClient, get_response_text

logger = logging.getLogger(__name__)


WARMUP_SCHEMA = genai_types.Schema(
    type=genai_types.Type.OBJECT,
    properties={
        "title": genai_types.Schema(type=genai_types.Type.STRING),
        "instruction": genai_types.Schema(type=genai_types.Type.STRING),
        "content": genai_types.Schema(
            type=genai_types.Type.STRING,
            description="The actual exercise content for students",
        ),
        "teacherKey": genai_types.Schema(
            type=genai_types.Type.STRING,
            description="Answer key or teacher notes",
        ),
        "listeningScript": genai_types.Schema(
            type=genai_types.Type.STRING,
            description="Required if activity type is listening",
        ),
    },
    required=["title", "instruction", "content"],
)


def build_warmup_config() -> genai_types.GenerateContentConfig:
    return genai_types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=WARMUP_SCHEMA,
    )


def build_warmup_prompt(request: WarmUpRequest, prompt_config: Optional[dict[str, Any]] = None) -> str:
    """Render the generation prompt for a request."""
    prompt_config = prompt_config or load_prompt("generate_warmup")
    activity = ActivityType(request.activity_type)
    profile = request.profile

    return format_prompt(
        prompt_config["user_template"],
        class_name=profile.name,
        level=profile.level,
        unit=request.unit,
        activity_type=activity.value,
        vocabulary=request.vocabulary,
        learning_targets=request.learning_targets,
        lesson_plan=request.lesson_plan,
        activity_guidance=prompt_config["activity_guidance"][activity.value],
    )


def build_warmup_parts(
    request: WarmUpRequest,
    prompt_config: Optional[dict[str, Any]] = None,
) -> list[genai_types.Part]:
    """
    Build the content parts for a generation call.

    The attachment is sent again even if it was already analyzed, followed
    by a note telling the model to use it as a formatting reference.
    """
    prompt_config = prompt_config or load_prompt("generate_warmup")
    parts = [genai_types.Part(text=build_warmup_prompt(request, prompt_config))]

    if request.attachment:
        parts.append(genai_types.Part.from_bytes(
            data=decode_attachment(request.attachment),
            mime_type=request.attachment.mime_type,
        ))
        parts.append(genai_types.Part(text=prompt_config["attachment_note"]))

    return parts


def check_listening_script(request: WarmUpRequest, result: WarmUpResult):
    """Listening warm-ups are useless without the script the teacher reads aloud."""
    if request.activity_type == ActivityType.LISTENING and not result.has_listening_script:
        raise MissingListeningScriptError("Listening warm-up was generated without a listening script")


async def generate_warmup(client: GeminiClient, request: WarmUpRequest) -> WarmUpResult:
    """
    Generate a warm-up exercise.

    Args:
        client: GeminiClient instance
        request: Snapshot of the lesson parameters

    Returns:
        Parsed WarmUpResult

    Raises:
        GenerationError: On any transport, parse or validation failure
    """
    try:
        parts = build_warmup_parts(request)
        response = await client.generate_content(WARMUP_MODEL, parts, build_warmup_config())
        data = extract_json_from_response(get_response_text(response))
        result = WarmUpResult.model_validate(data)
    except Exception as e:
        logger.error(f"Warm-up generation failed for unit '{request.unit}': {e}")
        raise GenerationError(f"Warm-up generation failed: {e}") from e

    check_listening_script(request, result)
    logger.info(f"Generated warm-up: {result.title}")
    return result
