"""Theme generators and the variant registry."""

from __future__ import annotations

from pastelize.errors import UnknownVariantError
from pastelize.generator.base import GeneratorConfig, ThemeGenerator
from pastelize.generator.host import PLACEHOLDER_HOST, sanitize_host, sanitize_selector
from pastelize.generator.variants import BakedGenerator, DynamicGenerator, RefinedGenerator
from pastelize.model.mapping import MappingResult
from pastelize.model.snapshot import AnalysisSnapshot
from pastelize.model.theme import GeneratedTheme

__all__ = [
    "GENERATORS",
    "PLACEHOLDER_HOST",
    "BakedGenerator",
    "DynamicGenerator",
    "GeneratorConfig",
    "RefinedGenerator",
    "ThemeGenerator",
    "generate_theme",
    "get_generator",
    "sanitize_host",
    "sanitize_selector",
]

GENERATORS: dict[str, type[ThemeGenerator]] = {
    BakedGenerator.name: BakedGenerator,
    DynamicGenerator.name: DynamicGenerator,
    RefinedGenerator.name: RefinedGenerator,
}


def get_generator(name: str) -> ThemeGenerator:
    """Return a generator instance for the variant *name*."""
    try:
        return GENERATORS[name]()
    except KeyError:
        raise UnknownVariantError(
            f"Unknown generator variant {name!r}; choose one of: {', '.join(GENERATORS)}"
        ) from None


def generate_theme(
    snapshot: AnalysisSnapshot,
    mappings: MappingResult,
    config: GeneratorConfig,
) -> GeneratedTheme:
    return get_generator(config.variant).generate(snapshot, mappings, config)
