"""Temporal aggregation of per-frame analyses into a video-level result."""

from __future__ import annotations

import math
from statistics import fmean, pvariance
from typing import TYPE_CHECKING

from authenticity.errors import EmptyInputError
from authenticity.media.types import VideoResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from authenticity.media.types import ImageAnalysisResult

CONSISTENCY_SCALE = 15.0


def temporal_consistency(confidences: Sequence[float]) -> float:
    """Map frame-to-frame stability to [0, 100]: 100 - 15 * stddev, floored at 0."""
    if len(confidences) < 2:
        return 100.0
    return max(0.0, 100.0 - CONSISTENCY_SCALE * math.sqrt(pvariance(confidences)))


def aggregate_frames(
    per_frame: Sequence[ImageAnalysisResult],
    suspicious_threshold: float = 60.0,
) -> VideoResult:
    """Average per-frame analyses, in capture order, into a VideoResult.

    Args:
        per_frame: One analysis per frame, ordered by capture time.
        suspicious_threshold: Frames whose manipulation score exceeds this
            are listed in `suspicious_frames`.

    Returns:
        VideoResult with averaged scores and temporal consistency.

    Raises:
        EmptyInputError: If no frames are given.
    """
    if not per_frame:
        raise EmptyInputError.for_batch("frame")

    confidences = [frame.manipulation_score for frame in per_frame]

    return VideoResult(
        frame_count=len(per_frame),
        confidence=fmean(confidences),
        compression=fmean(frame.compression for frame in per_frame),
        resampling=fmean(frame.resampling for frame in per_frame),
        edge_anomaly=fmean(frame.edge_anomaly for frame in per_frame),
        color_anomaly=fmean(frame.color_anomaly for frame in per_frame),
        face_count=fmean(len(frame.face_regions) for frame in per_frame),
        temporal_consistency=temporal_consistency(confidences),
        suspicious_frames=[index for index, score in enumerate(confidences) if score > suspicious_threshold],
    )
