"""Converts uploaded images into self-contained data: URLs"""
import base64
import binascii
import io
import logging
import re
from typing import Optional
from fastapi import UploadFile
from bs4 import BeautifulSoup
from PIL import Image, UnidentifiedImageError
from promptify_api.models.errors import ApplicationError, ErrorCode

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 2 * 1024 * 1024  # 2MB per file

# SVG is text, Pillow cannot sniff it; detected from the markup instead
SVG_MIME = "image/svg+xml"

_DATA_URL = re.compile(r'^data:image/[a-z0-9.+-]+;base64,([A-Za-z0-9+/]*={0,2})$', re.IGNORECASE)


def is_data_url(value: str) -> bool:
    """True if value is a base64 data:image/... URL that embeds with no network fetch"""
    if not isinstance(value, str):
        return False
    match = _DATA_URL.match(value.strip())
    if not match:
        return False
    try:
        base64.b64decode(match.group(1), validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


# Detects the image MIME type from the bytes using Pillow.
# Returns None when the payload is not a recognizable raster image.
def _sniff_mime(data: bytes) -> Optional[str]:
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError) as e:
        logger.debug(f"[AssetEncoder] Could not identify image: {e}")
        return None


def _is_svg(data: bytes) -> bool:
    """True if the payload is text whose first element is <svg>"""
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return False
    root = BeautifulSoup(text, "html.parser").find(True)
    return root is not None and root.name == "svg"


def encode_image(data: bytes, content_type: Optional[str] = None) -> str:
    """
    Encode image bytes as a data URL.

    The MIME type always comes from the bytes: Pillow for raster formats, an
    <svg> root element for SVG. The declared type is only compared for logging.

    Args:
        data: Raw image bytes
        content_type: Declared MIME type (e.g. from the multipart part), optional

    Returns:
        "data:<mime>;base64,<payload>"

    Raises:
        ApplicationError: INVALID_INPUT if the bytes are empty or not an image
    """
    if not data:
        raise ApplicationError(code=ErrorCode.INVALID_INPUT, message="Uploaded image is empty")

    mime = _sniff_mime(data) or (SVG_MIME if _is_svg(data) else None)
    if mime is None:
        raise ApplicationError(
            code=ErrorCode.INVALID_INPUT,
            message="Uploaded file is not a supported image",
            hint="Upload a PNG, JPEG, GIF, WebP or SVG file.",
        )

    declared = (content_type or "").split(";")[0].strip().lower()
    if declared and declared != mime:
        logger.info(f"[AssetEncoder] Declared type {declared!r} does not match content, using {mime}")

    data_url = f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
    if not is_data_url(data_url):
        raise ApplicationError(
            code=ErrorCode.INVALID_INPUT,
            message=f"Unsupported image type: {mime}",
            hint="Upload a PNG, JPEG, GIF, WebP or SVG file.",
        )
    return data_url


async def read_upload(upload: Optional[UploadFile], max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES) -> Optional[str]:
    """
    Read an optional multipart upload and return it as a data URL.

    Returns None when no file was sent.
    """
    if upload is None or not upload.filename:
        return None
    # Read one byte past the limit so oversized files are detected without buffering them fully
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ApplicationError(
            code=ErrorCode.INVALID_INPUT,
            message=f"Upload '{upload.filename}' exceeds the {max_bytes // 1024} KB limit",
            hint="Compress the image or upload a smaller file.",
        )
    data_url = encode_image(data, upload.content_type)
    logger.info(f"[AssetEncoder] ✓ Encoded {upload.filename} ({len(data)} bytes)")
    return data_url
