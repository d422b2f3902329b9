"""Pixel-level media analysis: artifact heuristics, faces and temporal aggregation."""

from authenticity.media.artifacts import (
    analyze_image_artifacts,
    color_anomaly_score,
    compression_score,
    edge_anomaly_score,
    resampling_score,
)
from authenticity.media.faces import FaceDetector, HaarCascadeFaceDetector, NullFaceDetector
from authenticity.media.pixels import PixelBuffer, decode_image, luminance
from authenticity.media.temporal import aggregate_frames, temporal_consistency
from authenticity.media.types import FaceRegion, ImageAnalysisResult, VideoResult

__all__ = [
    "FaceDetector",
    "FaceRegion",
    "HaarCascadeFaceDetector",
    "ImageAnalysisResult",
    "NullFaceDetector",
    "PixelBuffer",
    "VideoResult",
    "aggregate_frames",
    "analyze_image_artifacts",
    "color_anomaly_score",
    "compression_score",
    "decode_image",
    "edge_anomaly_score",
    "luminance",
    "resampling_score",
    "temporal_consistency",
]
