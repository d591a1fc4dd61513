"""Tagged failures for the identification flow.

Every failure the service can produce is an ``IdentificationError``
subclass. The service returns these as values rather than raising them
past its boundary; callers branch on ``isinstance`` or on ``kind``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from naturelens.identify.results import IdentificationResult


class ErrorKind(StrEnum):
    CONFIGURATION = "configuration"
    INVALID_RESPONSE = "invalid_response"
    NOT_A_PLANT = "not_a_plant"
    TRANSPORT = "transport"
    INVALID_IMAGE = "invalid_image"
    IMAGE_TOO_LARGE = "image_too_large"
    INVALID_REQUEST = "invalid_request"


class IdentificationError(Exception):
    """Base class for all identification failures."""

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Return the uniform error record sent to clients."""
        return {"error": self.message, "kind": self.kind.value}


class ConfigurationError(IdentificationError):
    """The model credential is missing or still a placeholder."""

    kind = ErrorKind.CONFIGURATION


class InvalidResponseError(IdentificationError):
    """The model answered but gave no usable structured output."""

    kind = ErrorKind.INVALID_RESPONSE


class NotAPlantError(IdentificationError):
    """The model classified the subject as something other than a plant."""

    kind = ErrorKind.NOT_A_PLANT

    def __init__(self, description: str, result: IdentificationResult | None = None) -> None:
        super().__init__(f"This doesn't look like a plant. The AI saw: {description}")
        self.description = description
        self.result = result

    def to_dict(self) -> dict[str, Any]:
        record = super().to_dict()
        if self.result is not None:
            record["result"] = self.result.model_dump(by_alias=True)
        return record


class TransportError(IdentificationError):
    """The model call itself failed (network, authentication, quota)."""

    kind = ErrorKind.TRANSPORT


class InvalidImageError(IdentificationError):
    """The submitted image payload is absent or malformed."""

    kind = ErrorKind.INVALID_IMAGE


class ImageTooLargeError(InvalidImageError):
    kind = ErrorKind.IMAGE_TOO_LARGE


class InvalidRequestError(IdentificationError):
    kind = ErrorKind.INVALID_REQUEST
