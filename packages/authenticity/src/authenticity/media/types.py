"""Media analysis result types."""

from __future__ import annotations

from pydantic import Field, computed_field
from scorer_utils import StrictModel


class FaceRegion(StrictModel):
    """Rectangle around a detected face."""

    x: int = Field(ge=0)
    y: int = Field(ge=0)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    confidence: float = Field(ge=0, le=1)


class ImageAnalysisResult(StrictModel):
    """Per-image (or per-frame) artifact scores, each in [0, 100]."""

    width: int
    height: int
    compression: float = Field(ge=0, le=100)
    resampling: float = Field(ge=0, le=100)
    edge_anomaly: float = Field(ge=0, le=100)
    color_anomaly: float = Field(ge=0, le=100)
    face_regions: list[FaceRegion] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def manipulation_score(self) -> float:
        """Arithmetic mean of the four artifact scores."""
        return (self.compression + self.resampling + self.edge_anomaly + self.color_anomaly) / 4


class VideoResult(StrictModel):
    """Frame-averaged scores plus temporal consistency for a video."""

    frame_count: int = Field(gt=0)
    confidence: float = Field(ge=0, le=100)
    compression: float = Field(ge=0, le=100)
    resampling: float = Field(ge=0, le=100)
    edge_anomaly: float = Field(ge=0, le=100)
    color_anomaly: float = Field(ge=0, le=100)
    face_count: float = Field(ge=0)
    temporal_consistency: float = Field(ge=0, le=100)
    suspicious_frames: list[int] = Field(default_factory=list)

    @property
    def suspicious_ratio(self) -> float:
        """Share of suspicious frames, in [0, 100]."""
        return 100 * len(self.suspicious_frames) / self.frame_count
