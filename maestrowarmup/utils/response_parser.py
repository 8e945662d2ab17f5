"""
Response parsing helpers for Gemini JSON output.

Even in JSON response mode the model occasionally wraps output in a
markdown code block, so parsing tolerates fences and trailing text.
"""

import json
import re
from typing import Any


def extract_json_from_response(text: str | None) -> dict[str, Any]:
    """Extract a JSON object from LLM response text, handling markdown code blocks."""
    if not text:
        raise ValueError("Empty response from API")

    # Try to find JSON in code blocks first
    code_block_pattern = r'```(?:json)?\s*([\s\S]*?)```'
    for match in re.findall(code_block_pattern, text):
        try:
            return _as_object(json.loads(match.strip()))
        except json.JSONDecodeError:
            continue

    # Try to find a raw JSON object at the start
    text = text.strip()
    if text.startswith('{'):
        brace_count = 0
        end_pos = 0
        in_string = False
        escaped = False
        for i, char in enumerate(text):
            if in_string:
                if escaped:
                    escaped = False
                elif char == '\\':
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == '{':
                brace_count += 1
            elif char == '}':
                brace_count -= 1
                if brace_count == 0:
                    end_pos = i + 1
                    break

        if end_pos > 0:
            try:
                return _as_object(json.loads(text[:end_pos]))
            except json.JSONDecodeError:
                pass

    try:
        return _as_object(json.loads(text))
    except json.JSONDecodeError as e:
        raise ValueError(f"Could not extract JSON from response: {e}\n\nResponse:\n{text[:500]}...")


def _as_object(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"Expected a JSON object, got {type(value).__name__}")
    return value
