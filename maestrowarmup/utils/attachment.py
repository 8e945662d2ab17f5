"""
Attachment encoder - Turn uploaded lesson documents into base64 payloads.

The payload is sent inline to Gemini both for metadata extraction and as
reference material for warm-up generation.
"""

import base64
import binascii
import logging
import mimetypes
from typing import Optional

from maestrowarmup.config import ALLOWED_EXTENSIONS, DEFAULT_MIME_TYPE
from maestrowarmup.errors import AttachmentReadError
from maestrowarmup.schemas import FileAttachment

logger = logging.getLogger(__name__)


def allowed_file(filename: str) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS


def resolve_mime_type(filename: str, mime_type: Optional[str] = None) -> str:
    """Use the reported MIME type, else guess from the name, else PDF."""
    if mime_type:
        return mime_type
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or DEFAULT_MIME_TYPE


def encode_attachment(name: str, data: bytes, mime_type: Optional[str] = None) -> FileAttachment:
    """
    Encode raw file bytes as a FileAttachment.

    Args:
        name: Original file name
        data: File contents
        mime_type: MIME type reported by the browser, if any

    Returns:
        FileAttachment with base64 payload
    """
    return FileAttachment(
        name=name,
        mime_type=resolve_mime_type(name, mime_type),
        base64=base64.b64encode(data).decode("ascii"),
    )


def read_attachment(file) -> FileAttachment:
    """
    Read an uploaded file object and encode it.

    Accepts anything with a ``name`` and either ``getvalue()`` (Streamlit
    UploadedFile, BytesIO) or ``read()``. A ``type`` attribute, when present,
    is used as the MIME type.

    Raises:
        AttachmentReadError: If the file is not a pdf/txt document or cannot be read
    """
    name = getattr(file, "name", None) or "attachment"
    if not allowed_file(name):
        raise AttachmentReadError(
            f"Unsupported file type for {name}; expected one of: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    try:
        if hasattr(file, "getvalue"):
            data = file.getvalue()
        else:
            data = file.read()
    except (OSError, ValueError) as e:
        raise AttachmentReadError(f"Could not read {name}: {e}") from e

    if not isinstance(data, (bytes, bytearray)):
        raise AttachmentReadError(f"Could not read {name}: expected bytes, got {type(data).__name__}")

    attachment = encode_attachment(name, bytes(data), getattr(file, "type", None))
    logger.info(f"Encoded attachment {name} ({attachment.mime_type}, {len(data)} bytes)")
    return attachment


def decode_attachment(attachment: FileAttachment) -> bytes:
    """Return the original file bytes of an attachment."""
    try:
        return base64.b64decode(attachment.base64, validate=True)
    except binascii.Error as e:
        raise AttachmentReadError(f"Attachment {attachment.name} is not valid base64: {e}") from e
