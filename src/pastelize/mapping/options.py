"""Mapper feature toggles."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_SELECTORS = 500


@dataclass(frozen=True)
class MapperOptions:
    """Which fact kinds are mapped, and which of them ask the classifier first."""

    enable_variables: bool = True
    enable_svgs: bool = True
    enable_selectors: bool = True
    use_ai_for_variables: bool = False
    use_ai_for_svgs: bool = False
    use_ai_for_selectors: bool = False
    max_selectors: int = DEFAULT_MAX_SELECTORS
    accent_bias: bool = True
    hover_gradients: bool = True

    def __post_init__(self) -> None:
        if self.max_selectors < 0:
            raise ValueError(f"max_selectors must be >= 0, got {self.max_selectors}")

    @property
    def uses_ai(self) -> bool:
        return self.use_ai_for_variables or self.use_ai_for_svgs or self.use_ai_for_selectors
