"""Mapper: assigns every extracted color fact to a palette token.

For each fact kind the classifier is consulted first when enabled; whatever
it does not answer (or everything, when it fails) is covered by the
heuristic fallback, so every fact of an enabled kind receives a mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from pastelize.analysis.svg import recolor_svg
from pastelize.mapping.classifier import ClassificationEntry, Classifier
from pastelize.mapping.heuristics import (
    HeuristicContext,
    accent_bearing,
    fallback_selector,
    fallback_svg_color,
    fallback_variable,
    hover_gradient,
    variable_priority,
)
from pastelize.mapping.options import MapperOptions
from pastelize.mapping.prompts import FactKind, build_prompt, selector_fact_id
from pastelize.model.facts import CSS_PROPERTY_NAMES, SelectorFact, SVGColorFact, VariableFact
from pastelize.model.mapping import (
    AccentUsage,
    KindStats,
    MappingResult,
    MappingSource,
    MappingStats,
    ProcessedSVG,
    SelectorMapping,
    SVGColorMapping,
    TokenProperties,
    VariableMapping,
)
from pastelize.model.snapshot import AnalysisSnapshot
from pastelize.palette.accents import ROLE_CYCLE, AccentCascade, AccentRole, cascading_accents
from pastelize.palette.color import normalize_color
from pastelize.palette.tokens import Flavor, PaletteToken

__all__ = ["map_snapshot"]

logger = logging.getLogger(__name__)

_ATTRIBUTE_BY_CSS = {css: attr for attr, css in CSS_PROPERTY_NAMES.items()}


class _Mapper:
    def __init__(
        self,
        snapshot: AnalysisSnapshot,
        flavor: Flavor,
        main_accent: PaletteToken,
        options: MapperOptions,
        classifier: Classifier | None,
    ) -> None:
        self.snapshot = snapshot
        self.flavor = flavor
        self.main_accent = main_accent
        self.options = options
        self.classifier = classifier
        self.cascade = cascading_accents(main_accent)
        self.ctx = HeuristicContext(
            flavor=flavor,
            scheme=snapshot.color_scheme,
            cascade=self.cascade,
            accent_bias=options.accent_bias,
        )

    def _classify(
        self,
        kind: FactKind,
        enabled: bool,
        facts: Sequence[VariableFact] | Sequence[SVGColorFact] | Sequence[SelectorFact],
    ) -> dict[str, ClassificationEntry]:
        if not enabled or self.classifier is None or not facts:
            return {}
        prompt = build_prompt(kind, self.snapshot, facts, self.flavor, self.main_accent)
        try:
            entries = self.classifier.classify(prompt)
        except Exception as exc:
            logger.warning("Classifier unavailable for %s, using fallback: %s", kind.value, exc)
            return {}
        known = set(prompt.fact_ids)
        answered = {e.fact_id: e for e in entries if e.fact_id in known}
        logger.debug("Classifier answered %d/%d %s facts", len(answered), len(known), kind.value)
        return answered

    # -- variables ---------------------------------------------------------

    def variables(self) -> tuple[list[VariableMapping], KindStats]:
        if not self.options.enable_variables:
            return [], KindStats()
        facts = [f for f in self.snapshot.variables if normalize_color(f.computed_value)]
        answered = self._classify(FactKind.VARIABLES, self.options.use_ai_for_variables, facts)
        mappings = []
        for fact in facts:
            entry = answered.get(fact.name)
            if entry is not None:
                token, reason, source = entry.token, entry.justification, MappingSource.AI
            else:
                token, reason = fallback_variable(fact, self.ctx)
                source = MappingSource.FALLBACK
            mappings.append(
                VariableMapping(
                    name=fact.name,
                    original=fact.computed_value,
                    token=token,
                    justification=reason or "classifier choice",
                    priority=variable_priority(fact),
                    source=source,
                )
            )
        return mappings, KindStats(mapped=len(mappings), total=len(facts))

    # -- svgs --------------------------------------------------------------

    def svgs(self) -> tuple[list[SVGColorMapping], list[ProcessedSVG], KindStats]:
        if not self.options.enable_svgs:
            return [], [], KindStats()
        facts = self.snapshot.svg_color_facts()
        answered = {
            normalize_color(key) or key: entry
            for key, entry in self._classify(FactKind.SVGS, self.options.use_ai_for_svgs, facts).items()
        }
        by_color: dict[str, SVGColorMapping] = {}
        for fact in facts:
            if fact.color in by_color:
                continue
            entry = answered.get(fact.color)
            if entry is not None:
                by_color[fact.color] = SVGColorMapping(
                    fact.color, entry.token, entry.justification or "classifier choice", MappingSource.AI
                )
            else:
                token, reason = fallback_svg_color(fact.color, self.ctx)
                by_color[fact.color] = SVGColorMapping(fact.color, token, reason)

        tokens = {color: m.token for color, m in by_color.items()}
        processed: list[ProcessedSVG] = []
        seen: set[tuple[str, str]] = set()
        for svg in self.snapshot.svgs:
            markup, used = recolor_svg(svg, tokens)
            if not used or (svg.selector, markup) in seen:
                continue
            seen.add((svg.selector, markup))
            processed.append(ProcessedSVG(svg.selector, svg.location, svg.markup, markup, used))

        mapped = sum(1 for f in facts if f.color in by_color)
        return list(by_color.values()), processed, KindStats(mapped=mapped, total=len(facts))

    # -- selectors ---------------------------------------------------------

    def selectors(self) -> tuple[list[SelectorMapping], KindStats, int]:
        if not self.options.enable_selectors:
            return [], KindStats(), 0
        colored = sorted(self.snapshot.color_selectors(), key=lambda f: f.frequency, reverse=True)
        facts = colored[: self.options.max_selectors]
        truncated = len(colored) - len(facts)
        if truncated:
            logger.info("Mapping the %d most frequent of %d color selectors", len(facts), len(colored))
        answered = self._classify(FactKind.SELECTORS, self.options.use_ai_for_selectors, facts)

        mappings: list[SelectorMapping] = []
        slot = 0
        for fact in facts:
            bearing, role = accent_bearing(fact, self.ctx)
            if bearing and role is None:
                role = ROLE_CYCLE[slot % len(ROLE_CYCLE)]
                slot += 1
            properties, reason = fallback_selector(fact, self.ctx, role if bearing else None)
            mapping = SelectorMapping(
                selector=fact.selector,
                category=fact.category,
                properties=properties,
                justification=reason,
                specificity=fact.specificity,
                is_accent=bearing,
                accent_role=role if bearing else None,
                hover_gradient=(
                    hover_gradient(fact, role, self.ctx)
                    if bearing and role is not None and fact.is_interactive and self.options.hover_gradients
                    else None
                ),
            )
            mappings.append(self._apply_answers(mapping, fact, answered))
        mapped = sum(1 for m in mappings if not m.properties.is_empty())
        return mappings, KindStats(mapped=mapped, total=len(facts)), truncated

    @staticmethod
    def _apply_answers(
        mapping: SelectorMapping,
        fact: SelectorFact,
        answered: dict[str, ClassificationEntry],
    ) -> SelectorMapping:
        overrides: dict[str, PaletteToken] = {}
        reasons: list[str] = []
        important = False
        for css_name, _ in fact.styles.css_items():
            entry = answered.get(selector_fact_id(fact.selector, css_name))
            if entry is None:
                continue
            overrides[_ATTRIBUTE_BY_CSS[css_name]] = entry.token
            if entry.justification:
                reasons.append(entry.justification)
            important = important or bool(entry.important)
        if not overrides:
            return mapping
        return replace(
            mapping,
            properties=replace(mapping.properties, **overrides),
            justification="; ".join(reasons) or mapping.justification,
            important=important,
            source=MappingSource.AI,
        )


def _accent_usage(
    cascade: AccentCascade,
    tokens: Iterable[PaletteToken],
) -> AccentUsage:
    counts = {AccentRole.MAIN: 0, AccentRole.SECONDARY: 0, AccentRole.TERTIARY: 0}
    for token in tokens:
        role = cascade.role_of(token)
        if role is not None:
            counts[role] += 1
    return AccentUsage(
        main=counts[AccentRole.MAIN],
        secondary=counts[AccentRole.SECONDARY],
        tertiary=counts[AccentRole.TERTIARY],
    )


def _all_tokens(
    variables: Iterable[VariableMapping],
    svgs: Iterable[SVGColorMapping],
    selectors: Iterable[SelectorMapping],
) -> Iterable[PaletteToken]:
    for v in variables:
        yield v.token
    for s in svgs:
        yield s.token
    for sel in selectors:
        for _, token in sel.properties.items():
            yield token


def map_snapshot(
    snapshot: AnalysisSnapshot,
    *,
    flavor: Flavor | str = Flavor.MOCHA,
    main_accent: PaletteToken | str = PaletteToken.MAUVE,
    options: MapperOptions | None = None,
    classifier: Classifier | None = None,
) -> MappingResult:
    """Map every color fact in *snapshot* onto the palette.

    Raises ``ValueError`` if *main_accent* is not one of the 14 accents.
    """
    flavor = Flavor(flavor)
    main_accent = PaletteToken(main_accent)
    mapper = _Mapper(snapshot, flavor, main_accent, options or MapperOptions(), classifier)

    variables, variable_stats = mapper.variables()
    svgs, processed, svg_stats = mapper.svgs()
    selectors, selector_stats, truncated = mapper.selectors()

    stats = MappingStats(
        variables=variable_stats,
        svgs=svg_stats,
        selectors=selector_stats,
        accent_usage=_accent_usage(mapper.cascade, _all_tokens(variables, svgs, selectors)),
        processed_svgs=len(processed),
        truncated_selectors=truncated,
    )
    logger.info(
        "Mapped %d/%d variables, %d/%d svg colors, %d/%d selectors (accent usage %d/%d/%d)",
        variable_stats.mapped,
        variable_stats.total,
        svg_stats.mapped,
        svg_stats.total,
        selector_stats.mapped,
        selector_stats.total,
        stats.accent_usage.main,
        stats.accent_usage.secondary,
        stats.accent_usage.tertiary,
    )
    return MappingResult(
        flavor=flavor,
        main_accent=main_accent,
        variables=tuple(variables),
        svgs=tuple(svgs),
        selectors=tuple(selectors),
        processed_svgs=tuple(processed),
        stats=stats,
    )
