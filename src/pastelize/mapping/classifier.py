"""The color-classification seam: protocol, response parsing and a stub."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from pastelize.errors import ClassifierResponseError
from pastelize.mapping.prompts import ClassificationPrompt, FactKind
from pastelize.palette.tokens import PaletteToken, is_palette_token

logger = logging.getLogger(__name__)

_ID_KEYS = ("factId", "fact_id", "id", "variable", "selector", "color")
_TOKEN_KEYS = ("paletteToken", "palette_token", "token", "catppuccinColor")
_REASON_KEYS = ("justification", "reason")


@dataclass(frozen=True)
class ClassificationEntry:
    """One fact assigned to one palette token by the classifier."""

    fact_id: str
    token: PaletteToken
    justification: str = ""
    important: bool | None = None


@runtime_checkable
class Classifier(Protocol):
    """Anything that can assign palette tokens to a batch of facts.

    Implementations may raise; the mapper treats any exception as
    "classifier unavailable" and falls back to heuristics.
    """

    def classify(self, prompt: ClassificationPrompt) -> list[ClassificationEntry]: ...


def _first(raw: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def _entry(fact_id: Any, raw: Any) -> ClassificationEntry | None:
    if isinstance(raw, str):
        token, reason, important = raw, "", None
    elif isinstance(raw, dict):
        fact_id = fact_id if fact_id is not None else _first(raw, _ID_KEYS)
        token = _first(raw, _TOKEN_KEYS)
        reason = _first(raw, _REASON_KEYS) or ""
        important = raw.get("important")
    else:
        return None
    if not isinstance(fact_id, str) or not fact_id:
        return None
    if isinstance(token, str):
        token = token.strip().lower()
    if not is_palette_token(token):
        logger.warning("Classifier returned unknown token %r for %s; ignoring", token, fact_id)
        return None
    return ClassificationEntry(
        fact_id=fact_id,
        token=PaletteToken(token),
        justification=str(reason),
        important=important if isinstance(important, bool) else None,
    )


def parse_classification_response(body: Any) -> list[ClassificationEntry]:
    """Turn a decoded classifier response into entries.

    Accepts ``{"mappings": [...]}``, ``{"mappings": {id: token}}`` or a bare
    list. Entries naming an unknown token are dropped.
    """
    if isinstance(body, dict) and "mappings" in body:
        body = body["mappings"]
    entries: list[ClassificationEntry | None]
    if isinstance(body, list):
        entries = [_entry(None, item) for item in body]
    elif isinstance(body, dict):
        entries = [_entry(key, value) for key, value in body.items()]
    else:
        raise ClassifierResponseError(f"Unexpected classifier response type: {type(body).__name__}")
    return [e for e in entries if e is not None]


class StubClassifier:
    """Classifier that returns canned responses for testing."""

    def __init__(
        self,
        responses: dict[FactKind, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._responses = responses or {}
        self._error = error
        self.prompts: list[ClassificationPrompt] = []

    def classify(self, prompt: ClassificationPrompt) -> list[ClassificationEntry]:
        self.prompts.append(prompt)
        if self._error is not None:
            raise self._error
        return parse_classification_response(self._responses.get(prompt.kind, []))
