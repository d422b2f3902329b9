"""Pixel-domain artifact heuristics for manipulation detection.

All scores are computed on the luminance channel and returned in [0, 100]:

- compression: share of flat 8x8 blocks, typical of heavy block coding
- resampling: periodic one-pixel spikes left by interpolation
- edge anomaly: density of strong Sobel gradients
- color anomaly: unnatural spikes in the luminance histogram
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from authenticity.media.pixels import luminance
from authenticity.media.types import ImageAnalysisResult

if TYPE_CHECKING:
    from authenticity.media.faces import FaceDetector
    from authenticity.media.pixels import PixelBuffer

MAX_SCORE = 100.0

BLOCK_SIZE = 8
FLAT_BLOCK_VARIANCE = 10.0

RESAMPLE_EQUAL_DELTA = 5.0
RESAMPLE_SPIKE_DELTA = 10.0
RESAMPLE_SCALE = 1000.0

EDGE_MAGNITUDE = 128.0
EDGE_SAMPLE_STRIDE = 20
EDGE_SCALE = 10000.0

PEAK_MIN_COUNT = 100
PEAK_WEIGHT = 5.0

# floor() on luminance of grey pixels must not drop a level to rounding
_HISTOGRAM_EPSILON = 1e-9


def analyze_image_artifacts(
    buffer: PixelBuffer,
    face_detector: FaceDetector | None = None,
) -> ImageAnalysisResult:
    """Run every artifact heuristic over one image or frame.

    Args:
        buffer: Decoded RGBA buffer. Never modified.
        face_detector: Optional detector; without one no face regions are reported.

    Returns:
        ImageAnalysisResult with the four artifact scores and face regions.
    """
    lum = luminance(buffer)

    return ImageAnalysisResult(
        width=buffer.width,
        height=buffer.height,
        compression=compression_score(lum),
        resampling=resampling_score(lum),
        edge_anomaly=edge_anomaly_score(lum),
        color_anomaly=color_anomaly_score(lum),
        face_regions=face_detector.detect(buffer) if face_detector is not None else [],
    )


def compression_score(lum: np.ndarray) -> float:
    """Percentage of full 8x8 blocks whose luminance variance is below 10."""
    rows, cols = lum.shape[0] // BLOCK_SIZE, lum.shape[1] // BLOCK_SIZE
    if rows == 0 or cols == 0:
        return 0.0

    blocks = lum[: rows * BLOCK_SIZE, : cols * BLOCK_SIZE].reshape(rows, BLOCK_SIZE, cols, BLOCK_SIZE)
    variances = blocks.var(axis=(1, 3))
    flat_blocks = int(np.count_nonzero(variances < FLAT_BLOCK_VARIANCE))

    return MAX_SCORE * flat_blocks / (rows * cols)


def resampling_score(lum: np.ndarray) -> float:
    """Score row-major triplets whose ends match but whose middle spikes."""
    flat = lum.ravel()
    if flat.size < 3:
        return 0.0

    first, middle, last = flat[:-2], flat[1:-1], flat[2:]
    matches = np.count_nonzero(
        (np.abs(first - last) < RESAMPLE_EQUAL_DELTA) & (np.abs(first - middle) > RESAMPLE_SPIKE_DELTA),
    )

    return min(MAX_SCORE, float(matches) / flat.size * RESAMPLE_SCALE)


def sobel_magnitude(lum: np.ndarray) -> np.ndarray:
    """Sobel gradient magnitude for interior pixels, shape (H - 2, W - 2)."""
    top, mid, bottom = lum[:-2], lum[1:-1], lum[2:]
    left, right = slice(None, -2), slice(2, None)
    centre = slice(1, -1)

    gx = (top[:, right] + 2 * mid[:, right] + bottom[:, right]) - (top[:, left] + 2 * mid[:, left] + bottom[:, left])
    gy = (bottom[:, left] + 2 * bottom[:, centre] + bottom[:, right]) - (top[:, left] + 2 * top[:, centre] + top[:, right])

    return np.hypot(gx, gy)


def edge_anomaly_score(lum: np.ndarray) -> float:
    """Density of strong gradients on a fixed 1-in-20 pixel lattice.

    High-magnitude pixels (> 128) are kept when they fall on the lattice
    (x + 7y) mod 20 == 0, so on average one in twenty strong gradients is
    counted, always the same ones for the same image.
    """
    height, width = lum.shape
    if height < 3 or width < 3:
        return 0.0

    strong = sobel_magnitude(lum) > EDGE_MAGNITUDE
    ys, xs = np.indices(strong.shape)
    # Interior pixel (i, j) sits at image coordinates (i + 1, j + 1)
    on_lattice = ((xs + 1) + 7 * (ys + 1)) % EDGE_SAMPLE_STRIDE == 0
    anomalies = int(np.count_nonzero(strong & on_lattice))

    return min(MAX_SCORE, anomalies / (height * width) * EDGE_SCALE)


def luminance_histogram(lum: np.ndarray) -> np.ndarray:
    """256-bin histogram of floor(luminance)."""
    levels = np.clip(np.floor(lum + _HISTOGRAM_EPSILON), 0, 255).astype(np.int64)
    return np.bincount(levels.ravel(), minlength=256)


def color_anomaly_score(lum: np.ndarray) -> float:
    """Five points per histogram spike (local maximum holding over 100 pixels)."""
    hist = luminance_histogram(lum)
    inner = hist[1:255]
    peaks = np.count_nonzero((inner > hist[:254]) & (inner > hist[2:]) & (inner > PEAK_MIN_COUNT))

    return min(MAX_SCORE, float(peaks) * PEAK_WEIGHT)
