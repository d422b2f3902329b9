"""Bounded classifier calls and classifier construction."""

from __future__ import annotations

from concurrent.futures import wait
from typing import TYPE_CHECKING

from scorer_utils import get_logger

from authenticity.errors import InferenceUnavailableError
from authenticity.inference.llm import LLMClassifier, Task
from authenticity.inference.registry import get_registry

if TYPE_CHECKING:
    from collections.abc import Sequence
    from concurrent.futures import Executor, Future

    from scorer_utils import Settings

    from authenticity.inference.types import Classifier, InferenceResult
    from authenticity.media.pixels import PixelBuffer

log = get_logger("authenticity.inference.runner")


def classify_with_timeout(
    classifier: Classifier,
    payload: str | PixelBuffer,
    *,
    timeout: float,
    executor: Executor,
) -> InferenceResult | None:
    """Run a classifier call on the pool, giving up after `timeout` seconds.

    Returns None when the call times out or fails for any reason; the caller
    falls back to deterministic signals.
    """
    return classify_all_with_timeout(classifier, [payload], timeout=timeout, executor=executor)[0]


def classify_all_with_timeout(
    classifier: Classifier,
    payloads: Sequence[str | PixelBuffer],
    *,
    timeout: float,
    executor: Executor,
) -> list[InferenceResult | None]:
    """Classify every payload concurrently under one overall deadline.

    All calls are submitted up front. Calls still pending when `timeout`
    expires are cancelled and, like failed calls, yield None in their slot.
    Results keep the order of `payloads`.
    """
    futures = [executor.submit(classifier.classify, payload) for payload in payloads]
    done, pending = wait(futures, timeout=timeout)

    for future in pending:
        future.cancel()
    if pending:
        log.warning("inference_fallback", reason="timeout", timeout=timeout, pending=len(pending))

    return [_outcome(future) if future in done else None for future in futures]


def _outcome(future: Future[InferenceResult]) -> InferenceResult | None:
    try:
        return future.result()
    except InferenceUnavailableError as e:
        log.warning("inference_fallback", reason=e.code, error=e.message)
    except Exception as e:
        log.warning("inference_fallback", reason="error", error=str(e), error_type=type(e).__name__)
    return None


def build_classifier(settings: Settings, task: Task = "bot") -> Classifier | None:
    """Build the configured LLM classifier for a task.

    Returns None when no model is set or the model is not trusted with the
    task.

    Raises:
        ValueError: If INFERENCE_MODEL is not a registered alias.
    """
    if not settings.inference_model:
        return None

    model = get_registry().resolve(settings.inference_model)
    if task not in model.tasks:
        suited = [m.alias for m in get_registry().models_for_task(task)]
        log.warning("model_not_suited_for_task", model=model.alias, task=task, suited=suited)
        return None

    log.info("classifier_configured", model=settings.inference_model, task=task)
    return LLMClassifier(settings.inference_model, task, timeout=settings.inference_timeout)
