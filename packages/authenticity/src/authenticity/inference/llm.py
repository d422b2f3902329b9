"""LLM-backed text classifier via LangChain.

The model is asked for a single JSON object {"label": ..., "score": ...}.
Anything else (provider errors, rate limits, malformed replies) becomes an
InferenceUnavailableError so the engine can fall back to deterministic
signals.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Literal

from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError as PydanticValidationError
from scorer_utils import get_logger

from authenticity.errors import InferenceUnavailableError
from authenticity.inference.registry import get_registry
from authenticity.inference.types import InferenceResult

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

    from authenticity.media.pixels import PixelBuffer

log = get_logger("authenticity.inference.llm")

Task = Literal["bot", "sentiment"]

_TASK_INSTRUCTIONS: dict[str, str] = {
    "bot": """You judge whether a social media username belongs to an automated account.

Return label "bot" or "human" and score = probability (0 to 1) that the account is a bot.
Judge only from the username text: keywords, numbering schemes, templated structure.""",
    "sentiment": """You classify the sentiment of public conversation about a search query.

Return label "positive", "negative" or "neutral" and score = your confidence (0 to 1) in that label.""",
}

CLASSIFICATION_TEMPLATE = ChatPromptTemplate.from_messages([
    (
        "system",
        "{instructions}\n\nOUTPUT FORMAT:\n"
        '{{"label": string, "score": number}}\n\n'
        "Return ONLY the JSON object, no other text.",
    ),
    ("human", "Classify:\n\n{payload}"),
])


class LLMClassifier:
    """External classifier backed by a chat model from the registry."""

    def __init__(
        self,
        model_alias: str,
        task: Task = "bot",
        *,
        timeout: float | None = None,
        chat_model: BaseChatModel | None = None,
    ) -> None:
        """Bind a model alias and task.

        Args:
            model_alias: Registry alias, e.g. "claude-haiku-4.5".
            task: "bot" for bot likelihood, "sentiment" for monitoring.
            timeout: Provider request timeout, in seconds.
            chat_model: Pre-built chat model, mainly for tests.
        """
        self.model_alias = model_alias
        self.task = task
        self._timeout = timeout
        self._chat_model = chat_model

    def _model(self) -> BaseChatModel:
        if self._chat_model is None:
            self._chat_model = get_registry().get_chat_model(self.model_alias, timeout=self._timeout)
        return self._chat_model

    def classify(self, payload: str | PixelBuffer) -> InferenceResult:
        """Classify a text payload.

        Raises:
            InferenceUnavailableError: For image payloads, provider failures
                and replies that are not a valid {label, score} object.
        """
        if not isinstance(payload, str):
            raise InferenceUnavailableError.unsupported(type(payload).__name__)

        messages = CLASSIFICATION_TEMPLATE.format_messages(
            instructions=_TASK_INSTRUCTIONS[self.task],
            payload=payload,
        )
        try:
            response = self._model().invoke(messages)
        except Exception as e:
            _log_error(e, self.model_alias)
            raise InferenceUnavailableError.failed(str(e)) from e

        content = response.content
        if not isinstance(content, str):
            log.error("unexpected_response_type", type=type(content).__name__)
            raise InferenceUnavailableError.failed(f"unexpected response type {type(content).__name__}")

        result = parse_inference_reply(content)
        log.debug("inference_complete", model=self.model_alias, task=self.task, label=result.label)
        return result


def parse_inference_reply(content: str) -> InferenceResult:
    """Parse a model reply into an InferenceResult.

    Raises:
        InferenceUnavailableError: If no valid JSON object can be extracted.
    """
    try:
        data = json.loads(_extract_json(content))
        if isinstance(data, dict) and isinstance(data.get("score"), int):
            data["score"] = float(data["score"])
        return InferenceResult.model_validate(data)
    except (json.JSONDecodeError, PydanticValidationError) as e:
        log.warning("invalid_inference_reply", error=str(e), content=content[:200])
        raise InferenceUnavailableError.failed("malformed classifier reply") from e


def _extract_json(text: str) -> str:
    """Extract a JSON object from LLM response text."""
    text = text.strip()

    # Handle markdown code blocks
    if text.startswith("```"):
        lines = text.split("\n")
        json_lines = []
        in_block = False
        for line in lines:
            if line.startswith("```") and not in_block:
                in_block = True
            elif line.startswith("```") and in_block:
                break
            elif in_block:
                json_lines.append(line)
        text = "\n".join(json_lines)

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        return text[start : end + 1]

    return text


def _log_error(e: Exception, model_alias: str) -> None:
    """Log error with appropriate level based on error type."""
    error_str = str(e).lower()
    if "rate" in error_str or "quota" in error_str or "limit" in error_str:
        log.warning("rate_limit_hit", model=model_alias, action="RETRY_LATER")
    else:
        log.exception("inference_error", model=model_alias, error=str(e))
