"""Classifier backed by an OpenAI-compatible chat-completions endpoint."""
from __future__ import annotations

import json
import logging

import httpx

from pastelize._http import HttpClient, HttpTimeout
from pastelize._retry import RetryPolicy, with_retry
from pastelize.errors import ClassifierError, ClassifierResponseError, TransportError
from pastelize.mapping.classifier import ClassificationEntry, parse_classification_response
from pastelize.mapping.prompts import CLASSIFICATION_SCHEMA, ClassificationPrompt, system_prompt

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com"
DEFAULT_MODEL = "gpt-4o-mini"


class OpenAICompatibleClassifier:
    """Ask a chat model to classify facts, expecting a JSON object back."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        retry_policy: RetryPolicy | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.model = model
        self._retry = retry_policy or RetryPolicy()
        self._client = HttpClient(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=HttpTimeout(request=timeout),
            transport=transport,
        )

    def _request_body(self, prompt: ClassificationPrompt) -> dict:
        user = {
            "schema": CLASSIFICATION_SCHEMA,
            **prompt.to_payload(),
        }
        return {
            "model": self.model,
            "temperature": 0,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": system_prompt()},
                {"role": "user", "content": json.dumps(user)},
            ],
        }

    def classify(self, prompt: ClassificationPrompt) -> list[ClassificationEntry]:
        body = self._request_body(prompt)
        try:
            response = with_retry(
                lambda: self._client.post("/v1/chat/completions", json=body), self._retry
            )
        except TransportError as exc:
            raise ClassifierError(f"Classification request failed: {exc}", cause=exc) from exc

        try:
            content = response.body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ClassifierResponseError("Response has no message content", cause=exc) from exc
        if not isinstance(content, str):
            raise ClassifierResponseError("Response message content is not text")
        try:
            decoded = json.loads(_strip_fences(content))
        except json.JSONDecodeError as exc:
            raise ClassifierResponseError("Response content is not JSON", cause=exc) from exc

        entries = parse_classification_response(decoded)
        logger.info(
            "Classifier %s mapped %d/%d %s facts",
            self.model,
            len(entries),
            len(prompt.facts),
            prompt.kind.value,
        )
        return entries

    def close(self) -> None:
        self._client.close()


def _strip_fences(content: str) -> str:
    """Remove a surrounding markdown code fence, which some models add anyway."""
    text = content.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text
