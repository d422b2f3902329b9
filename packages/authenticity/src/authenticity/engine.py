"""Public scoring API.

ScoringEngine wires the deterministic extractors, the optional external
classifiers and the aggregator together for each content type. It owns two
thread pools: one for frame analysis and pairwise similarity, and one for
bounded inference calls, so a hung classifier never holds a worker the
deterministic path needs.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from functools import partial
from statistics import fmean
from typing import TYPE_CHECKING, Self

from scorer_utils import get_logger, get_settings

from authenticity.aggregate import aggregate_profile, negativity_score, risk_level_for, sentiment_from_label
from authenticity.config import default_config, load_config
from authenticity.coordination import detect_coordination
from authenticity.errors import EmptyInputError, ValidationError
from authenticity.heuristic import (
    analyze_linguistic,
    analyze_patterns,
    analyze_structure,
    parse_profile_url,
    validate_identifier,
)
from authenticity.inference import build_classifier, classify_all_with_timeout, classify_with_timeout
from authenticity.media import HaarCascadeFaceDetector, aggregate_frames, analyze_image_artifacts
from authenticity.types import ContentType, Platform, Signal

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from scorer_utils import Settings

    from authenticity.config import EngineConfig
    from authenticity.coordination import CoordinationResult
    from authenticity.inference import Classifier, InferenceResult
    from authenticity.media import FaceDetector, PixelBuffer
    from authenticity.types import ScoreResult

log = get_logger("authenticity.engine")


class ScoringEngine:
    """Authenticity scoring for identifiers, images, videos and queries.

    Example:
        >>> with ScoringEngine() as engine:
        ...     engine.score_identifier("crypto_trading_bot", "twitter").classification
        True
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        classifier: Classifier | None = None,
        image_classifier: Classifier | None = None,
        sentiment_classifier: Classifier | None = None,
        face_detector: FaceDetector | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Create an engine.

        Args:
            config: Lexicons, rules and profiles. Defaults to the embedded tables.
            classifier: Bot-likelihood classifier for identifiers.
            image_classifier: Synthetic-image classifier for images and frames.
            sentiment_classifier: Sentiment classifier for monitoring queries.
            face_detector: Face detector. Defaults to the OpenCV Haar cascade.
            settings: Worker count and inference timeout. Defaults to get_settings().
        """
        self.settings = settings or get_settings()
        self.config = config or default_config()
        self.classifier = classifier
        self.image_classifier = image_classifier
        self.sentiment_classifier = sentiment_classifier
        self.face_detector = face_detector if face_detector is not None else HaarCascadeFaceDetector()
        self._executor = ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="authenticity",
        )
        self._inference_executor = ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="authenticity-inference",
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ScoringEngine:
        """Build an engine from environment settings (config file and LLM model)."""
        settings = settings or get_settings()
        return cls(
            load_config(settings.engine_config_path),
            classifier=build_classifier(settings, "bot"),
            sentiment_classifier=build_classifier(settings, "sentiment"),
            settings=settings,
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Shut both pools down without waiting on hung inference calls."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._inference_executor.shutdown(wait=False, cancel_futures=True)

    def _infer(self, classifier: Classifier | None, payload: str | PixelBuffer) -> InferenceResult | None:
        if classifier is None:
            return None
        return classify_with_timeout(
            classifier,
            payload,
            timeout=self.settings.inference_timeout,
            executor=self._inference_executor,
        )

    def score_identifier(self, identifier: str, platform: Platform | str) -> ScoreResult:
        """Score how likely a username belongs to an automated account.

        Raises:
            ValidationError: If the platform is unknown or the identifier is
                empty or malformed.
        """
        platform = _platform(platform)
        normalized = validate_identifier(identifier, platform, self.config)
        lexicon = self.config.lexicon(platform)

        inference = self._infer(self.classifier, normalized)
        signals: dict[str, float | None] = {
            Signal.STRUCTURE: analyze_structure(normalized, platform),
            Signal.LINGUISTIC: analyze_linguistic(normalized, lexicon),
            Signal.PATTERN: analyze_patterns(normalized),
            Signal.AI_MODEL: inference.score * 100 if inference else None,
        }

        result = aggregate_profile(
            signals,
            self.config.profile(ContentType.IDENTIFIER, platform),
            content_type=ContentType.IDENTIFIER,
            degraded=self.classifier is not None and inference is None,
        )
        log.info(
            "identifier_scored",
            identifier=normalized,
            platform=platform,
            confidence=round(result.confidence, 2),
            classification=result.classification,
            degraded=result.degraded,
        )
        return result

    def score_profile_url(self, url: str) -> ScoreResult:
        """Score the account behind a profile link such as "https://x.com/jack".

        Raises:
            ValidationError: If the URL is not a supported profile link or the
                handle is malformed.
        """
        platform, handle = parse_profile_url(url)
        log.debug("profile_url_parsed", url=url, platform=platform, handle=handle)
        return self.score_identifier(handle, platform)

    def score_image(self, buffer: PixelBuffer) -> ScoreResult:
        """Score an image for manipulation artifacts."""
        analysis = analyze_image_artifacts(buffer, self.face_detector)
        inference = self._infer(self.image_classifier, buffer)

        signals: dict[str, float | None] = {
            Signal.COMPRESSION: analysis.compression,
            Signal.RESAMPLING: analysis.resampling,
            Signal.EDGE_ANOMALY: analysis.edge_anomaly,
            Signal.COLOR_ANOMALY: analysis.color_anomaly,
            Signal.AI_MODEL: inference.score * 100 if inference else None,
            "face_count": float(len(analysis.face_regions)),
        }

        result = aggregate_profile(
            signals,
            self.config.profile(ContentType.IMAGE),
            content_type=ContentType.IMAGE,
            degraded=self.image_classifier is not None and inference is None,
        )
        log.info(
            "image_scored",
            width=buffer.width,
            height=buffer.height,
            confidence=round(result.confidence, 2),
            classification=result.classification,
        )
        return result

    def score_video(self, frames: Sequence[PixelBuffer]) -> ScoreResult:
        """Score a sequence of decoded frames, ordered by capture time.

        Raises:
            EmptyInputError: If no frames are given.
        """
        if not frames:
            raise EmptyInputError.for_batch("frame")

        analyze = partial(analyze_image_artifacts, face_detector=self.face_detector)
        per_frame = list(self._executor.map(analyze, frames))
        video = aggregate_frames(per_frame, self.config.suspicious_frame_threshold)

        ai_score, degraded = self._frame_inference(frames)
        signals: dict[str, float | None] = {
            Signal.COMPRESSION: video.compression,
            Signal.RESAMPLING: video.resampling,
            Signal.EDGE_ANOMALY: video.edge_anomaly,
            Signal.COLOR_ANOMALY: video.color_anomaly,
            Signal.AI_MODEL: ai_score,
            Signal.TEMPORAL_CONSISTENCY: video.temporal_consistency,
            Signal.SUSPICIOUS_FRAMES: video.suspicious_ratio,
            "face_count": video.face_count,
        }

        result = aggregate_profile(
            signals,
            self.config.profile(ContentType.VIDEO),
            content_type=ContentType.VIDEO,
            degraded=degraded,
        )
        log.info(
            "video_scored",
            frames=video.frame_count,
            suspicious_frames=len(video.suspicious_frames),
            temporal_consistency=round(video.temporal_consistency, 2),
            confidence=round(result.confidence, 2),
            classification=result.classification,
        )
        return result

    def _frame_inference(self, frames: Sequence[PixelBuffer]) -> tuple[float | None, bool]:
        """Mean image-classifier score over frames, and whether any call failed."""
        if self.image_classifier is None:
            return None, False

        results = classify_all_with_timeout(
            self.image_classifier,
            frames,
            timeout=self.settings.inference_timeout,
            executor=self._inference_executor,
        )
        scores = [r.score * 100 for r in results if r is not None]
        return (fmean(scores) if scores else None), len(scores) < len(results)

    def score_coordination(self, identifiers: Sequence[str]) -> CoordinationResult:
        """Detect coordinated naming across a batch of identifiers.

        Raises:
            EmptyInputError: If the batch is empty.
            ValidationError: If any identifier is malformed.
        """
        if not identifiers:
            raise EmptyInputError.for_batch("identifier")

        normalized = [validate_identifier(raw, None, self.config) for raw in identifiers]
        settings = self.config.coordination
        return detect_coordination(
            normalized,
            threshold=settings.similarity_threshold,
            pair_weight=settings.pair_weight,
            clustering=settings.clustering,
            group_size=settings.group_size,
            executor=self._executor,
        )

    def score_monitoring(self, query: str) -> ScoreResult:
        """Score the negative-sentiment risk of a monitoring query.

        Without a sentiment classifier (or when it is unavailable) the result
        carries the insufficient-signal reason and no risk level.
        """
        inference = self._infer(self.sentiment_classifier, query.strip())

        if inference is None:
            sentiment_signal = None
            risk_level = None
        else:
            sentiment = sentiment_from_label(inference.label)
            sentiment_signal = negativity_score(sentiment, inference.score)
            risk_level = risk_level_for(sentiment)

        result = aggregate_profile(
            {Signal.SENTIMENT: sentiment_signal},
            self.config.profile(ContentType.MONITORING),
            content_type=ContentType.MONITORING,
            risk_level=risk_level,
            degraded=self.sentiment_classifier is not None and inference is None,
        )
        log.info(
            "monitoring_scored",
            query=query,
            risk_level=risk_level,
            confidence=round(result.confidence, 2),
        )
        return result


def _platform(platform: Platform | str) -> Platform:
    try:
        return Platform(str(platform).lower())
    except ValueError as e:
        raise ValidationError.unknown_platform(str(platform)) from e
