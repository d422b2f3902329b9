"""External inference contract."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from pydantic import Field
from scorer_utils import StrictModel

if TYPE_CHECKING:
    from authenticity.media.pixels import PixelBuffer


class InferenceResult(StrictModel):
    """Label and probability returned by an external classifier."""

    label: str
    score: float = Field(ge=0, le=1)


class Classifier(Protocol):
    """External ML inference adapter.

    Implementations raise InferenceUnavailableError when they cannot answer;
    the engine treats that, any other exception and timeouts as a missing
    signal.
    """

    def classify(self, payload: str | PixelBuffer) -> InferenceResult:
        """Classify a text or image payload."""
        ...
