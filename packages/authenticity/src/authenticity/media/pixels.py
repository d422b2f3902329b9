"""RGBA pixel buffers and luminance helpers."""

from __future__ import annotations

import io

import numpy as np
from PIL import Image, UnidentifiedImageError
from pydantic import Field, model_validator
from scorer_utils import StrictModel

from authenticity.errors import DecodeError, ValidationError

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


class PixelBuffer(StrictModel):
    """Decoded image or video frame as a width x height x 4 RGBA byte buffer."""

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    data: bytes = Field(repr=False)

    @model_validator(mode="after")
    def _check_length(self) -> PixelBuffer:
        expected = self.pixel_count * 4
        if len(self.data) != expected:
            raise ValidationError.invalid_buffer(
                f"{self.width}x{self.height} RGBA needs {expected} bytes, got {len(self.data)}",
            )
        return self

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelBuffer:
        """Build a buffer from an (H, W, 4) or (H, W, 3) uint8 array."""
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValidationError.invalid_buffer(f"expected (H, W, 3|4) array, got {array.shape}")

        rgba = array.astype(np.uint8, copy=False)
        if rgba.shape[2] == 3:
            alpha = np.full(rgba.shape[:2] + (1,), 255, dtype=np.uint8)
            rgba = np.concatenate([rgba, alpha], axis=2)

        height, width = rgba.shape[:2]
        return cls(width=int(width), height=int(height), data=np.ascontiguousarray(rgba).tobytes())

    def to_array(self) -> np.ndarray:
        """Read-only (H, W, 4) uint8 view of the buffer."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, 4)

    @property
    def pixel_count(self) -> int:
        """Number of pixels in the buffer."""
        return self.width * self.height


def luminance(buffer: PixelBuffer) -> np.ndarray:
    """Per-pixel luminance 0.299R + 0.587G + 0.114B as an (H, W) float array."""
    rgb = buffer.to_array()[..., :3].astype(np.float64)
    return rgb @ LUMA_WEIGHTS


def decode_image(data: bytes) -> PixelBuffer:
    """Decode encoded image bytes (PNG, JPEG, ...) into an RGBA buffer.

    Raises:
        DecodeError: If Pillow cannot read the bytes.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            rgba = image.convert("RGBA")
            return PixelBuffer(width=rgba.width, height=rgba.height, data=rgba.tobytes())
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeError.failed(str(e)) from e
