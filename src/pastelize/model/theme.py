"""The generated theme artifact."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ThemeMetadata:
    url: str
    host: str
    generated_at: datetime
    color_scheme: str
    design_system: str
    generator_version: str
    variant: str
    flavor: str
    accent: str


@dataclass(frozen=True)
class ThemeSections:
    """The rendered text of each output section, in emission order."""

    variables: str = ""
    svgs: str = ""
    selectors: str = ""
    gradients: str = ""
    fallbacks: str = ""

    def as_dict(self) -> dict[str, str]:
        return {
            "variables": self.variables,
            "svgs": self.svgs,
            "selectors": self.selectors,
            "gradients": self.gradients,
            "fallbacks": self.fallbacks,
        }


@dataclass(frozen=True)
class ThemeCoverage:
    """Percentage of facts mapped per kind."""

    variables: int = 0
    svgs: int = 0
    selectors: int = 0

    @property
    def is_zero(self) -> bool:
        return self.variables == 0 and self.svgs == 0 and self.selectors == 0


@dataclass(frozen=True)
class GeneratedTheme:
    text: str
    metadata: ThemeMetadata
    sections: ThemeSections
    coverage: ThemeCoverage
