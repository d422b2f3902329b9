"""Face region detection.

Downstream scoring only uses the number of regions, so any detector that
returns rectangles with a confidence in [0, 1] can be plugged in.
"""

from __future__ import annotations

import math
import threading
from typing import TYPE_CHECKING, Protocol

import cv2
import numpy as np
from scorer_utils import get_logger

from authenticity.media.pixels import luminance
from authenticity.media.types import FaceRegion

if TYPE_CHECKING:
    from authenticity.media.pixels import PixelBuffer

log = get_logger("authenticity.media.faces")

FRONTAL_FACE_CASCADE = "haarcascade_frontalface_default.xml"


class FaceDetector(Protocol):
    """Anything that can locate faces in a pixel buffer."""

    def detect(self, buffer: PixelBuffer) -> list[FaceRegion]:
        """Return zero or more face regions."""
        ...


class HaarCascadeFaceDetector:
    """OpenCV Haar cascade frontal face detector.

    The classifier is loaded once per instance. OpenCV cascades are not
    documented as thread-safe, so detection is serialized with a lock.
    """

    def __init__(
        self,
        cascade_path: str | None = None,
        *,
        scale_factor: float = 1.1,
        min_neighbors: int = 5,
        min_size: int = 30,
    ) -> None:
        """Load the cascade.

        Args:
            cascade_path: Cascade XML file. Defaults to OpenCV's bundled
                frontal face model.
            scale_factor: Image pyramid scale step.
            min_neighbors: Overlapping detections required to keep a face.
            min_size: Smallest face side, in pixels.

        Raises:
            FileNotFoundError: If the cascade cannot be loaded.
        """
        path = cascade_path or cv2.data.haarcascades + FRONTAL_FACE_CASCADE
        self._classifier = cv2.CascadeClassifier(path)
        if self._classifier.empty():
            msg = f"Could not load face cascade: {path}"
            raise FileNotFoundError(msg)

        self._scale_factor = scale_factor
        self._min_neighbors = min_neighbors
        self._min_size = min_size
        self._lock = threading.Lock()

    def detect(self, buffer: PixelBuffer) -> list[FaceRegion]:
        """Detect frontal faces; confidence is the logistic of the cascade weight."""
        if min(buffer.width, buffer.height) < self._min_size:
            return []

        gray = np.clip(luminance(buffer), 0, 255).astype(np.uint8)

        with self._lock:
            rects, _levels, weights = self._classifier.detectMultiScale3(
                gray,
                scaleFactor=self._scale_factor,
                minNeighbors=self._min_neighbors,
                minSize=(self._min_size, self._min_size),
                outputRejectLevels=True,
            )

        regions = [
            FaceRegion(
                x=int(x),
                y=int(y),
                width=int(w),
                height=int(h),
                confidence=_logistic(float(weight)),
            )
            for (x, y, w, h), weight in zip(rects, np.ravel(weights), strict=False)
        ]

        if regions:
            log.debug("faces_detected", count=len(regions), width=buffer.width, height=buffer.height)

        return regions


class NullFaceDetector:
    """Detector that never finds faces."""

    def detect(self, buffer: PixelBuffer) -> list[FaceRegion]:  # noqa: ARG002
        """Return no regions."""
        return []


def _logistic(value: float) -> float:
    bounded = max(-50.0, min(50.0, value))
    return 1.0 / (1.0 + math.exp(-bounded))
