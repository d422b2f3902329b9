"""Scoring engine error types."""

from __future__ import annotations

from enum import StrEnum
from typing import Self


class ErrorCode(StrEnum):
    """Standardized scoring error codes."""

    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    INVALID_BUFFER = "INVALID_BUFFER"
    INVALID_URL = "INVALID_URL"
    UNKNOWN_PLATFORM = "UNKNOWN_PLATFORM"
    EMPTY_INPUT = "EMPTY_INPUT"
    INFERENCE_TIMEOUT = "INFERENCE_TIMEOUT"
    INFERENCE_FAILED = "INFERENCE_FAILED"
    UNSUPPORTED_PAYLOAD = "UNSUPPORTED_PAYLOAD"
    DECODE_FAILED = "DECODE_FAILED"


class ScoringError(Exception):
    """Base error with a standardized error code."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        """Initialize scoring error.

        Args:
            code: Standardized error code.
            message: Human-readable error message.
        """
        super().__init__(message)
        self.code = code
        self.message = message

    def is_code(self, code: ErrorCode) -> bool:
        """Check if this error matches a specific code."""
        return self.code == code


class ValidationError(ScoringError):
    """Malformed input. The caller's responsibility, never retried."""

    @classmethod
    def invalid_identifier(cls, identifier: str, platform: str, rule: str) -> Self:
        """Create invalid identifier error."""
        return cls(
            ErrorCode.INVALID_IDENTIFIER,
            f"Invalid {platform} identifier {identifier!r}: {rule}",
        )

    @classmethod
    def invalid_buffer(cls, details: str) -> Self:
        """Create invalid pixel buffer error."""
        return cls(ErrorCode.INVALID_BUFFER, f"Invalid pixel buffer: {details}")

    @classmethod
    def invalid_url(cls, url: str) -> Self:
        """Create unrecognized profile URL error."""
        return cls(ErrorCode.INVALID_URL, f"Not a supported profile URL: {url}")

    @classmethod
    def unknown_platform(cls, platform: str) -> Self:
        """Create unknown platform error."""
        return cls(ErrorCode.UNKNOWN_PLATFORM, f"Unknown platform: {platform}")


class EmptyInputError(ScoringError):
    """Empty frame or identifier batch. Fatal to the call."""

    @classmethod
    def for_batch(cls, what: str) -> Self:
        """Create empty batch error."""
        return cls(ErrorCode.EMPTY_INPUT, f"Cannot score an empty {what} batch")


class InferenceUnavailableError(ScoringError):
    """External classifier timed out or failed. Recovered by the engine."""

    @classmethod
    def timeout(cls, seconds: float) -> Self:
        """Create inference timeout error."""
        return cls(ErrorCode.INFERENCE_TIMEOUT, f"Inference timed out after {seconds:.1f}s")

    @classmethod
    def failed(cls, details: str) -> Self:
        """Create inference failure error."""
        return cls(ErrorCode.INFERENCE_FAILED, f"Inference failed: {details}")

    @classmethod
    def unsupported(cls, payload_type: str) -> Self:
        """Create unsupported payload error."""
        return cls(
            ErrorCode.UNSUPPORTED_PAYLOAD,
            f"Classifier does not accept {payload_type} payloads",
        )


class DecodeError(ScoringError):
    """Raw media could not be decoded into a pixel buffer."""

    @classmethod
    def failed(cls, details: str) -> Self:
        """Create decode failure error."""
        return cls(ErrorCode.DECODE_FAILED, f"Could not decode media: {details}")
