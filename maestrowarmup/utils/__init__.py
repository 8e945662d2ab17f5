"""MaestroWarmup utilities."""

from .prompt_loader import load_prompt, format_prompt
from .attachment import (
    allowed_file,
    resolve_mime_type,
    encode_attachment,
    read_attachment,
    decode_attachment,
)
from .response_parser import extract_json_from_response

__all__ = [
    "load_prompt",
    "format_prompt",
    "allowed_file",
    "resolve_mime_type",
    "encode_attachment",
    "read_attachment",
    "decode_attachment",
    "extract_json_from_response",
]
