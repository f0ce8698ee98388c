"""Classification prompt payloads and the response schema."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pastelize.model.facts import SelectorFact, SVGColorFact, VariableFact
from pastelize.model.snapshot import AnalysisSnapshot
from pastelize.palette.accents import cascading_accents
from pastelize.palette.tokens import ACCENTS, Flavor, PaletteToken

__all__ = [
    "CLASSIFICATION_SCHEMA",
    "ClassificationPrompt",
    "FactKind",
    "build_prompt",
    "selector_fact_id",
    "system_prompt",
]


class FactKind(StrEnum):
    VARIABLES = "variables"
    SVGS = "svgs"
    SELECTORS = "selectors"


CLASSIFICATION_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "mappings": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "factId": {"type": "string", "description": "The id of the fact being mapped"},
                    "paletteToken": {
                        "type": "string",
                        "enum": [t.value for t in PaletteToken],
                        "description": "The Catppuccin color name to use",
                    },
                    "justification": {
                        "type": "string",
                        "description": "One short sentence explaining the choice",
                    },
                },
                "required": ["factId", "paletteToken", "justification"],
            },
        },
    },
    "required": ["mappings"],
}

CLASSIFY_SYSTEM = """\
You are a CSS theming expert. Map each color fact from a web page onto one \
Catppuccin palette color. Answer with JSON only, matching the schema you are given.

Palette:
- Base and surfaces: base, mantle, crust, surface0, surface1, surface2
- Text: text, subtext1, subtext0
- Overlays and borders: overlay2, overlay1, overlay0
- Accents: {accents}

Rules:
- Keep page backgrounds on base/mantle/crust and raised areas on surface0-2.
- Keep body text on text/subtext and muted borders on overlay0-2.
- Use the main accent for most interactive elements, the bi-accents sparingly.
- Semantic colors keep their meaning: errors stay red, success stays green.
"""

KIND_INSTRUCTIONS: dict[FactKind, str] = {
    FactKind.VARIABLES: (
        "Each fact is a CSS custom property. Consider its name, its value and how "
        "often it is used."
    ),
    FactKind.SVGS: (
        "Each fact is a color used inside SVG icons. Logos and brand marks may keep "
        "a strong accent; generic icons usually follow the text color."
    ),
    FactKind.SELECTORS: (
        "Each fact is one color property of one CSS selector, identified as "
        "'<selector>|<property>'. Backgrounds of buttons take an accent while their "
        "text stays on base."
    ),
}

FEW_SHOT_EXAMPLES: dict[FactKind, list[dict[str, str]]] = {
    FactKind.VARIABLES: [
        {"factId": "--primary", "paletteToken": "{main}", "justification": "Primary interactive accent"},
        {"factId": "--body-bg", "paletteToken": "base", "justification": "Page background"},
        {"factId": "--muted-text", "paletteToken": "subtext0", "justification": "Secondary text"},
    ],
    FactKind.SVGS: [
        {"factId": "#1DA1F2", "paletteToken": "sapphire", "justification": "Social brand blue"},
        {"factId": "#333333", "paletteToken": "text", "justification": "Dark glyph on light page"},
    ],
    FactKind.SELECTORS: [
        {"factId": ".btn-primary|background-color", "paletteToken": "{main}", "justification": "Primary button"},
        {"factId": ".btn-primary|color", "paletteToken": "base", "justification": "Text on accent"},
        {"factId": ".card|border-color", "paletteToken": "overlay0", "justification": "Subtle border"},
    ],
}


@dataclass(frozen=True)
class ClassificationPrompt:
    """Everything the classifier is told about one kind of fact."""

    kind: FactKind
    context_summary: str
    facts: list[dict[str, Any]]
    instructions: str
    few_shot_examples: list[dict[str, str]] = field(default_factory=list)

    @property
    def fact_ids(self) -> list[str]:
        return [fact["id"] for fact in self.facts]

    def to_payload(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "contextSummary": self.context_summary,
            "factsToClassify": self.facts,
            "instructions": self.instructions,
            "fewShotExamples": self.few_shot_examples,
        }


def selector_fact_id(selector: str, css_property: str) -> str:
    return f"{selector}|{css_property}"


def _context_summary(snapshot: AnalysisSnapshot, flavor: Flavor, main: PaletteToken) -> str:
    cascade = cascading_accents(main)
    design = snapshot.design_system
    parts = [
        f"Website: {snapshot.url}",
        f"Detected mode: {snapshot.color_scheme.value}",
        f"Design system: {design.framework.value} ({round(design.confidence * 100)}% confidence)",
        f"Target flavor: {flavor.value}",
        f"Main accent: {main.value} (bi-accents {cascade.bi1.value}, {cascade.bi2.value})",
    ]
    if snapshot.dominant_colors:
        parts.append("Dominant colors: " + ", ".join(snapshot.dominant_colors[:5]))
    return "\n".join(parts)


def _variable_facts(facts: Sequence[VariableFact]) -> list[dict[str, Any]]:
    return [
        {
            "id": f.name,
            "value": f.computed_value,
            "scope": f.scope.value,
            "frequency": f.frequency,
            "usage": list(f.usage[:5]),
        }
        for f in facts
    ]


def _svg_facts(facts: Sequence[SVGColorFact]) -> list[dict[str, Any]]:
    by_color: dict[str, dict[str, Any]] = {}
    for f in facts:
        entry = by_color.setdefault(
            f.color, {"id": f.color, "types": [], "purposes": [], "count": 0}
        )
        entry["count"] += 1
        if f.color_type.value not in entry["types"]:
            entry["types"].append(f.color_type.value)
        if f.purpose.value not in entry["purposes"]:
            entry["purposes"].append(f.purpose.value)
    return list(by_color.values())


def _selector_facts(facts: Sequence[SelectorFact]) -> list[dict[str, Any]]:
    return [
        {
            "id": selector_fact_id(f.selector, prop),
            "selector": f.selector,
            "property": prop,
            "value": value,
            "category": f.category.value,
            "interactive": f.is_interactive,
        }
        for f in facts
        for prop, value in f.styles.css_items()
    ]


def build_prompt(
    kind: FactKind,
    snapshot: AnalysisSnapshot,
    facts: Sequence[VariableFact] | Sequence[SVGColorFact] | Sequence[SelectorFact],
    flavor: Flavor,
    main_accent: PaletteToken,
) -> ClassificationPrompt:
    """Build the payload for one classifier call over *facts* of *kind*."""
    if kind is FactKind.VARIABLES:
        payload = _variable_facts(facts)  # type: ignore[arg-type]
    elif kind is FactKind.SVGS:
        payload = _svg_facts(facts)  # type: ignore[arg-type]
    else:
        payload = _selector_facts(facts)  # type: ignore[arg-type]
    examples = [
        {**example, "paletteToken": example["paletteToken"].replace("{main}", main_accent.value)}
        for example in FEW_SHOT_EXAMPLES[kind]
    ]
    return ClassificationPrompt(
        kind=kind,
        context_summary=_context_summary(snapshot, flavor, main_accent),
        facts=payload,
        instructions=KIND_INSTRUCTIONS[kind],
        few_shot_examples=examples,
    )


def system_prompt() -> str:
    return CLASSIFY_SYSTEM.format(accents=", ".join(t.value for t in ACCENTS))

