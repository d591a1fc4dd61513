"""Identification request builder.

Turns a data URI or raw upload bytes into an ``IdentificationRequest``.
The image bytes are passed through untouched: no decoding, resizing or
re-encoding happens here.
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from naturelens.identify.errors import ImageTooLargeError, InvalidImageError

_DATA_URI_RE = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?P<params>(?:;[\w.+-]+=[^;,]*)*);base64,(?P<data>.*)$",
    re.DOTALL,
)
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ImagePayload:
    """A self-describing encoded image: MIME type plus binary content."""

    mime_type: str
    data: bytes

    @classmethod
    def from_data_uri(cls, uri: str | None) -> ImagePayload:
        """Parse a ``data:<mimetype>;base64,<encoded_data>`` string.

        Raises:
            InvalidImageError: If the URI is absent, malformed, or not base64.
        """
        if not uri:
            raise InvalidImageError("No image provided. Please select an image or take a picture first.")

        match = _DATA_URI_RE.match(uri.strip())
        if match is None:
            raise InvalidImageError("The image must be a base64 data URI of the form 'data:<mimetype>;base64,<data>'.")

        try:
            data = base64.b64decode(_WHITESPACE_RE.sub("", match.group("data")), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidImageError("The image data is not valid base64.") from exc

        return cls(mime_type=match.group("mime").lower(), data=data)

    def to_data_uri(self) -> str:
        """Render the payload back into a base64 data URI."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class IdentificationRequest:
    """A single identification call's input. Built per user action, used once."""

    image: ImagePayload


def build_identification_request(
    payload: ImagePayload | None,
    *,
    max_image_bytes: int | None = None,
) -> IdentificationRequest:
    """Validate an image payload and wrap it in an ``IdentificationRequest``.

    Raises:
        InvalidImageError: If the payload is missing, empty, or not a still image.
        ImageTooLargeError: If the payload exceeds ``max_image_bytes``.
    """
    if payload is None or not payload.data:
        raise InvalidImageError("No image provided. Please select an image or take a picture first.")

    if not payload.mime_type.startswith("image/"):
        raise InvalidImageError(f"Unsupported content type '{payload.mime_type}'. Please provide an image.")

    if max_image_bytes is not None and payload.size > max_image_bytes:
        raise ImageTooLargeError(
            f"The image is too large ({payload.size} bytes). The maximum size is {max_image_bytes} bytes."
        )

    return IdentificationRequest(image=payload)
