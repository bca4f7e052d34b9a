"""Image resize, JPEG re-compression and base64 / JSON-array transport."""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
from io import BytesIO
from typing import Iterable

from PIL import Image, UnidentifiedImageError

from crooked_finger.utils.config import image_jpeg_quality, image_max_dimension
from crooked_finger.utils.logger import get_logger

logger = get_logger()


def fit_within(width: int, height: int, max_dimension: int) -> tuple[int, int]:
    """
    Target size for an image so neither side exceeds `max_dimension`.

    Sizes already within bounds are returned unchanged. Otherwise the long edge
    becomes `max_dimension` and the short edge keeps the aspect ratio.
    """
    if width <= max_dimension and height <= max_dimension:
        return width, height
    aspect = width / height
    if width > height:
        return max_dimension, max(1, round(max_dimension / aspect))
    return max(1, round(max_dimension * aspect)), max_dimension


def _to_rgb(image: Image.Image) -> Image.Image:
    # JPEG has no alpha channel: flatten onto white.
    if image.mode == "P":
        image = image.convert("RGBA")
    if image.mode in ("RGBA", "LA"):
        base = Image.new("RGB", image.size, (255, 255, 255))
        base.paste(image, mask=image.split()[-1])
        return base
    if image.mode != "RGB":
        return image.convert("RGB")
    return image


class ImageCodec:
    """
    Converts images to their transport form and back.

    Encoding is lossy (JPEG). Keep one decoded working copy per image and
    encode from that, never from a previously encoded string.
    """

    def __init__(self, max_dimension: int | None = None, quality: int | None = None) -> None:
        self.max_dimension = max_dimension or image_max_dimension()
        self.quality = quality or image_jpeg_quality()

    def resize(self, image: Image.Image) -> Image.Image:
        width, height = image.size
        target = fit_within(width, height, self.max_dimension)
        if target == (width, height):
            return image
        logger.debug("Downscaling image %dx%d -> %dx%d", width, height, target[0], target[1])
        return image.resize(target, Image.Resampling.LANCZOS)

    def encode(self, image: Image.Image) -> str | None:
        """Resize, JPEG-compress and base64-encode. None if the image cannot be written."""
        try:
            prepared = _to_rgb(self.resize(image))
            buf = BytesIO()
            prepared.save(buf, format="JPEG", quality=self.quality)
        except (OSError, ValueError) as e:
            logger.warning("Failed to convert image to JPEG data: %s", e)
            return None
        jpeg = buf.getvalue()
        logger.debug(
            "Image compressed: %dx%d -> %dx%d, %d KB",
            image.size[0], image.size[1], prepared.size[0], prepared.size[1], len(jpeg) // 1024,
        )
        return base64.b64encode(jpeg).decode("ascii")

    def encode_bytes(self, raw: bytes) -> str | None:
        """Encode raw image file bytes (e.g. a picked photo or a downloaded thumbnail)."""
        try:
            image = Image.open(BytesIO(raw))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            logger.warning("Failed to read image bytes: %s", e)
            return None
        return self.encode(image)

    def decode(self, text: str) -> Image.Image | None:
        """Base64 text back to an image. None on invalid base64 or invalid image data."""
        if not isinstance(text, str):
            return None
        try:
            raw = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError):
            logger.warning("Failed to decode base64 string")
            return None
        try:
            image = Image.open(BytesIO(raw))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError):
            logger.warning("Failed to create image from data")
            return None
        return image

    def encode_all(self, images: Iterable[Image.Image]) -> str | None:
        """JSON array of base64 strings, in input order. Unencodable images are skipped."""
        encoded = [s for s in (self.encode(img) for img in images) if s is not None]
        try:
            return json.dumps(encoded)
        except (TypeError, ValueError) as e:
            logger.warning("Failed to encode images to JSON: %s", e)
            return None

    def decode_all(self, text: str | None) -> list[Image.Image]:
        """
        Images from a JSON array of base64 strings.

        Returns [] when the text is missing or is not a JSON array; individual
        entries that fail to decode are dropped.
        """
        images = [self.decode(e) for e in decode_image_list(text)]
        return [img for img in images if img is not None]

    async def aencode_all(self, images: Iterable[Image.Image]) -> str | None:
        return await asyncio.to_thread(self.encode_all, list(images))

    async def adecode_all(self, text: str | None) -> list[Image.Image]:
        return await asyncio.to_thread(self.decode_all, text)

    @staticmethod
    def estimate_size_kb(text: str) -> int:
        """Approximate size of a base64 payload in KB."""
        return len(text) // 1024


def decode_image_list(text: str | None) -> list[str]:
    """
    Base64 strings from an `imageData` field without decoding pixels.

    Used where images are kept in transport form (pattern library rows).
    """
    if not text:
        return []
    try:
        entries = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return []
    if not isinstance(entries, list):
        return []
    return [e for e in entries if isinstance(e, str)]


def encode_image_list(encoded: list[str]) -> str:
    """Wrap already-encoded base64 strings as the `imageData` JSON array."""
    return json.dumps(list(encoded))
