"""Runtime configuration, read from ``PASTELIZE_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from pastelize._retry import RetryPolicy
from pastelize.errors import ConfigurationError, UnknownVariantError
from pastelize.generator import GENERATORS
from pastelize.mapping.classifier import Classifier
from pastelize.mapping.llm import DEFAULT_BASE_URL, DEFAULT_MODEL, OpenAICompatibleClassifier
from pastelize.mapping.options import DEFAULT_MAX_SELECTORS, MapperOptions
from pastelize.palette.tokens import Flavor, PaletteToken

ENV_PREFIX = "PASTELIZE_"
_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class PastelizeConfig:
    flavor: Flavor = Flavor.MOCHA
    light_flavor: Flavor = Flavor.LATTE
    accent: PaletteToken = PaletteToken.MAUVE
    variant: str = "dynamic"
    include_comments: bool = True
    max_selectors: int = DEFAULT_MAX_SELECTORS
    classifier_base_url: str = DEFAULT_BASE_URL
    classifier_model: str = DEFAULT_MODEL
    classifier_api_key: str | None = None
    timeout: float = 60.0
    max_retries: int = 2

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "flavor", Flavor(self.flavor))
            object.__setattr__(self, "light_flavor", Flavor(self.light_flavor))
            accent = PaletteToken(self.accent)
        except ValueError as exc:
            raise ConfigurationError(str(exc), cause=exc) from exc
        if not accent.is_accent:
            raise ConfigurationError(f"{accent.value!r} is not an accent color")
        object.__setattr__(self, "accent", accent)
        if self.variant not in GENERATORS:
            raise UnknownVariantError(
                f"Unknown generator variant {self.variant!r}; choose one of: {', '.join(GENERATORS)}"
            )
        if self.max_selectors < 0 or self.max_retries < 0 or self.timeout <= 0:
            raise ConfigurationError("max_selectors and max_retries must be >= 0 and timeout > 0")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> PastelizeConfig:
        """Create a config from environment variables.

        Reads ``PASTELIZE_FLAVOR``, ``PASTELIZE_LIGHT_FLAVOR``, ``PASTELIZE_ACCENT``,
        ``PASTELIZE_VARIANT``, ``PASTELIZE_INCLUDE_COMMENTS``,
        ``PASTELIZE_MAX_SELECTORS``, ``PASTELIZE_CLASSIFIER_BASE_URL``,
        ``PASTELIZE_CLASSIFIER_MODEL``, ``PASTELIZE_CLASSIFIER_API_KEY`` (falling
        back to ``OPENAI_API_KEY``), ``PASTELIZE_TIMEOUT`` and
        ``PASTELIZE_MAX_RETRIES``. Keyword *overrides* win over the environment.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            value = env.get(ENV_PREFIX + name)
            return value.strip() if value and value.strip() else None

        values: dict[str, object] = {}
        for name in ("flavor", "light_flavor", "accent", "variant", "classifier_base_url", "classifier_model"):
            raw = get(name.upper())
            if raw is not None:
                values[name] = raw.lower() if name in ("flavor", "light_flavor", "accent") else raw
        api_key = get("CLASSIFIER_API_KEY") or env.get("OPENAI_API_KEY") or None
        if api_key:
            values["classifier_api_key"] = api_key
        if (raw := get("INCLUDE_COMMENTS")) is not None:
            values["include_comments"] = _parse_bool("INCLUDE_COMMENTS", raw)
        if (raw := get("MAX_SELECTORS")) is not None:
            values["max_selectors"] = _parse_number("MAX_SELECTORS", raw, int)
        if (raw := get("MAX_RETRIES")) is not None:
            values["max_retries"] = _parse_number("MAX_RETRIES", raw, int)
        if (raw := get("TIMEOUT")) is not None:
            values["timeout"] = _parse_number("TIMEOUT", raw, float)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_overrides(self, **overrides) -> PastelizeConfig:
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @property
    def uses_classifier(self) -> bool:
        return bool(self.classifier_api_key)

    def mapper_options(self) -> MapperOptions:
        ai = self.uses_classifier
        return MapperOptions(
            use_ai_for_variables=ai,
            use_ai_for_svgs=ai,
            use_ai_for_selectors=ai,
            max_selectors=self.max_selectors,
        )

    def classifier(self) -> Classifier | None:
        """The configured classifier, or None without an API key."""
        if not self.classifier_api_key:
            return None
        return OpenAICompatibleClassifier(
            self.classifier_api_key,
            model=self.classifier_model,
            base_url=self.classifier_base_url,
            timeout=self.timeout,
            retry_policy=RetryPolicy(max_retries=self.max_retries),
        )


def _parse_bool(name: str, raw: str) -> bool:
    lower = raw.lower()
    if lower in _TRUE:
        return True
    if lower in _FALSE:
        return False
    raise ConfigurationError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")


def _parse_number(name: str, raw: str, kind: type[int] | type[float]) -> int | float:
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}", cause=exc) from exc
