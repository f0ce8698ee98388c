"""Shared theme rendering contract.

Every generator renders one LESS document scoped to the page's host, with
five sections in a fixed order: variables, svgs, selectors, gradients and
fallbacks. Variants only decide how the palette is brought into scope, how a
token is referenced, and whether declarations are forced ``!important``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from pastelize import __version__
from pastelize.generator.host import (
    PLACEHOLDER_HOST,
    namespace_slug,
    sanitize_host,
    sanitize_selector,
    site_name,
)
from pastelize.model.facts import SVGLocation
from pastelize.model.mapping import (
    KindStats,
    MappingResult,
    MappingStats,
    ProcessedSVG,
    SelectorMapping,
    VariableMapping,
)
from pastelize.model.snapshot import AnalysisSnapshot
from pastelize.model.theme import GeneratedTheme, ThemeCoverage, ThemeMetadata, ThemeSections
from pastelize.palette.accents import AccentCascade, cascading_accents
from pastelize.palette.tokens import Flavor, PaletteToken

logger = logging.getLogger(__name__)

INDENT = "  "
LIB_IMPORT = '@import "https://userstyles.catppuccin.com/lib/lib.less";'
REPO_URL = "https://github.com/catppuccin/userstyles"

FLAVOR_LABELS = {
    Flavor.LATTE: "Latte",
    Flavor.FRAPPE: "Frappé",
    Flavor.MACCHIATO: "Macchiato",
    Flavor.MOCHA: "Mocha",
}

# Elements whose text is painted by a clipped gradient; overriding their
# colors would turn the text into a solid block.
GRADIENT_TEXT_GUARDS = (
    '[class*="bg-clip-text"]',
    '[class*="text-transparent"]',
    '[class*="bg-gradient"]',
    '[class*="gradient-text"]',
    ".text-clip",
)
REVERT_PROPERTIES = (
    "color",
    "background",
    "background-color",
    "background-image",
    "-webkit-background-clip",
    "background-clip",
    "-webkit-text-fill-color",
)
_NOT_GRADIENT_TEXT = ':not([class*="bg-clip-text"]):not([class*="text-transparent"])'

# (selectors, ((property, token-or-role), ...)) for elements not mapped explicitly.
# Roles "main", "bi1" and "bi2" resolve through the accent cascade.
FALLBACK_DEFAULTS: tuple[tuple[tuple[str, ...], tuple[tuple[str, str], ...]], ...] = (
    (tuple(f"h{level}" for level in range(1, 7)), (("color", "text"),)),
    (("a",), (("color", "main"),)),
    (("button", '[role="button"]'), (("color", "base"), ("background-color", "main"))),
    (("input:focus", "textarea:focus", "select:focus"), (("outline-color", "bi1"),)),
    ((".badge", ".tag"), (("background-color", "bi2"), ("color", "base"))),
)

SECTION_TITLES = (
    ("variables", "CSS variables"),
    ("svgs", "SVG replacements"),
    ("selectors", "Site selectors"),
    ("gradients", "Hover gradients"),
    ("fallbacks", "Fallback guards"),
)


@dataclass(frozen=True)
class GeneratorConfig:
    """What to scope the theme to and which defaults the header advertises."""

    url: str
    flavor: Flavor = Flavor.MOCHA
    light_flavor: Flavor = Flavor.LATTE
    accent: PaletteToken = PaletteToken.MAUVE
    include_comments: bool = True
    variant: str = "dynamic"
    author: str = "Catppuccin"
    version: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "flavor", Flavor(self.flavor))
        object.__setattr__(self, "light_flavor", Flavor(self.light_flavor))
        accent = PaletteToken(self.accent)
        if not accent.is_accent:
            raise ValueError(f"{accent.value!r} is not an accent color")
        object.__setattr__(self, "accent", accent)


@dataclass(frozen=True)
class RenderContext:
    config: GeneratorConfig
    host: str
    cascade: AccentCascade
    mapped_selectors: frozenset[str] = field(default_factory=frozenset)


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def comment(text: str) -> str:
    return f"/* {text.replace('*/', '* /')} */"


def declaration(name: str, value: str, important: bool = False) -> str:
    return f"{name}: {value}{' !important' if important else ''};"


def block(prelude: str, declarations: Iterable[str]) -> list[str]:
    return [f"{prelude} {{", *(f"{INDENT}{d}" for d in declarations), "}"]


def indent_lines(lines: Iterable[str], depth: int = 1) -> list[str]:
    prefix = INDENT * depth
    return [f"{prefix}{line}" if line else "" for line in lines]


def escape_svg(markup: str) -> str:
    """Prepare SVG markup for a single-quoted LESS ``escape()`` call."""
    escaped = markup.replace("\\", "\\\\").replace("'", "\\'")
    return " ".join(escaped.split())


def coverage_percent(stats: KindStats) -> int:
    if stats.total == 0:
        return 0
    return round(stats.mapped / stats.total * 100)


def theme_coverage(stats: MappingStats) -> ThemeCoverage:
    return ThemeCoverage(
        variables=coverage_percent(stats.variables),
        svgs=coverage_percent(stats.svgs),
        selectors=coverage_percent(stats.selectors),
    )


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ThemeGenerator:
    """Base renderer. Subclasses provide :meth:`palette_procedure`."""

    name = "base"
    force_important = False
    hover_text = PaletteToken.TEXT

    # -- variant hooks -----------------------------------------------------

    def header_options(self, ctx: RenderContext) -> list[str]:
        """Extra ``@var`` lines for the metadata header."""
        return []

    def palette_procedure(self, body: list[str], ctx: RenderContext) -> list[str]:
        """Wrap the rendered sections so the palette variables are in scope."""
        raise NotImplementedError

    def ref(self, token: PaletteToken, ctx: RenderContext) -> str:
        return f"@{token.value}"

    def property_ref(
        self,
        css_name: str,
        token: PaletteToken,
        mapping: SelectorMapping,
        ctx: RenderContext,
    ) -> str:
        return self.ref(token, ctx)

    def important(self, mapping: SelectorMapping) -> bool:
        return self.force_important or mapping.important

    def extra_gradients(self, ctx: RenderContext) -> list[str]:
        return []

    # -- sections ----------------------------------------------------------

    def render_header(self, ctx: RenderContext) -> list[str]:
        config = ctx.config
        slug = namespace_slug(ctx.host)
        version = config.version or datetime.now(timezone.utc).strftime("%Y.%m.%d")
        name = site_name(ctx.host)
        return [
            "/* ==UserStyle==",
            f"@name {name} Catppuccin",
            f"@namespace github.com/catppuccin/userstyles/styles/{slug}",
            f"@homepageURL {REPO_URL}/tree/main/styles/{slug}",
            f"@version {version}",
            f"@updateURL {REPO_URL}/raw/main/styles/{slug}/catppuccin.user.less",
            f"@supportURL {REPO_URL}/issues?q=is%3Aopen+is%3Aissue+label%3A{slug}",
            f"@description Soothing pastel theme for {name}",
            f"@author {config.author}",
            "@license MIT",
            "",
            "@preprocessor less",
            *self.header_options(ctx),
            "==/UserStyle== */",
        ]

    def render_variables(self, variables: Sequence[VariableMapping], ctx: RenderContext) -> list[str]:
        lines: list[str] = []
        for m in variables:
            line = declaration(m.name, self.ref(m.token, ctx), important=True)
            if ctx.config.include_comments and m.justification:
                line += " " + comment(m.justification)
            lines.append(line)
        return lines

    def render_svgs(self, processed: Sequence[ProcessedSVG], ctx: RenderContext) -> list[str]:
        lines: list[str] = []
        seen: set[str] = set()
        for svg in processed:
            if svg.location is SVGLocation.INLINE and svg.selector == "svg":
                continue
            selector = sanitize_selector(svg.selector)
            if selector is None or selector in seen:
                continue
            seen.add(selector)
            prop = "background-image" if svg.location is SVGLocation.BACKGROUND else "content"
            if ctx.config.include_comments:
                lines.append(comment(f"{svg.location.value} svg: " + ", ".join(t.value for t in svg.tokens)))
            lines += block(
                selector,
                [
                    f"@svg: escape('{escape_svg(svg.processed)}');",
                    declaration(prop, 'url("data:image/svg+xml,@{svg}")', important=True),
                ],
            )
            lines.append("")
        return _trim(lines)

    def render_selectors(self, selectors: Sequence[SelectorMapping], ctx: RenderContext) -> list[str]:
        merged: dict[str, dict[str, str]] = {}
        reasons: dict[str, list[str]] = {}
        dropped = 0
        for m in selectors:
            selector = sanitize_selector(m.selector)
            if selector is None:
                dropped += 1
                continue
            decls = merged.setdefault(selector, {})
            for css_name, token in m.properties.css_items():
                decls[css_name] = declaration(
                    css_name, self.property_ref(css_name, token, m, ctx), self.important(m)
                )
            if m.justification and m.justification not in reasons.setdefault(selector, []):
                reasons[selector].append(m.justification)
        if dropped:
            logger.warning("Dropped %d selector(s) that could not be emitted safely", dropped)

        lines: list[str] = []
        for selector, decls in merged.items():
            if not decls:
                continue
            if ctx.config.include_comments and reasons.get(selector):
                lines.append(comment("; ".join(reasons[selector])))
            lines += block(selector, decls.values())
            lines.append("")
        return _trim(lines)

    def render_gradients(self, selectors: Sequence[SelectorMapping], ctx: RenderContext) -> list[str]:
        lines: list[str] = []
        seen: set[str] = set()
        important = self.force_important
        for m in selectors:
            gradient = m.hover_gradient
            if gradient is None:
                continue
            selector = sanitize_selector(m.selector)
            if selector is None or selector == "&" or ":hover" in selector or selector in seen:
                continue
            seen.add(selector)
            start = self.ref(gradient.main, ctx)
            end = self.ref(gradient.secondary, ctx)
            background = (
                f"linear-gradient({gradient.angle}deg, {start}, fade({end}, {round(gradient.opacity * 100)}%))"
            )
            lines += block(
                f"{selector}:hover",
                [
                    declaration("background", background, important),
                    declaration("color", self.ref(self.hover_text, ctx), important),
                ],
            )
            lines.append("")
        lines += self.extra_gradients(ctx)
        return _trim(lines)

    def _resolve(self, name: str, ctx: RenderContext) -> str:
        cascade = ctx.cascade
        roles = {"main": cascade.main, "bi1": cascade.bi1, "bi2": cascade.bi2}
        return self.ref(roles.get(name) or PaletteToken(name), ctx)

    def render_fallbacks(self, ctx: RenderContext) -> list[str]:
        lines: list[str] = []
        if ctx.config.include_comments:
            lines.append(comment("Leave gradient-clipped text alone"))
        lines += block(
            ",\n".join(GRADIENT_TEXT_GUARDS),
            [declaration(prop, "revert", important=True) for prop in REVERT_PROPERTIES],
        )
        for selectors, props in FALLBACK_DEFAULTS:
            remaining = [s for s in selectors if s not in ctx.mapped_selectors]
            if not remaining:
                continue
            lines.append("")
            lines += block(
                ",\n".join(f"{s}{_NOT_GRADIENT_TEXT}" for s in remaining),
                [declaration(prop, self._resolve(value, ctx)) for prop, value in props],
            )
        return lines

    # -- document ----------------------------------------------------------

    def render_document(self, sections: ThemeSections, ctx: RenderContext) -> list[str]:
        body: list[str] = []
        for key, title in SECTION_TITLES:
            text = getattr(sections, key)
            if not text.strip():
                continue
            if ctx.config.include_comments:
                body.append(comment(title))
            body += text.split("\n")
            body.append("")
        body = _trim(body)

        return [
            *self.render_header(ctx),
            "",
            LIB_IMPORT,
            "",
            f'@-moz-document domain("{ctx.host}") {{',
            *indent_lines(self.palette_procedure(body, ctx)),
            "}",
        ]

    def generate(
        self,
        snapshot: AnalysisSnapshot,
        mappings: MappingResult,
        config: GeneratorConfig,
    ) -> GeneratedTheme:
        """Render *mappings* into a theme document for ``config.url``."""
        host = sanitize_host(config.url)
        if host == PLACEHOLDER_HOST:
            logger.warning("No usable host in %r, scoping theme to %s", config.url, host)
        ctx = RenderContext(
            config=config,
            host=host,
            cascade=cascading_accents(mappings.main_accent),
            mapped_selectors=frozenset(
                s for s in (sanitize_selector(m.selector) for m in mappings.selectors) if s
            ),
        )
        sections = ThemeSections(
            variables="\n".join(self.render_variables(mappings.variables, ctx)),
            svgs="\n".join(self.render_svgs(mappings.processed_svgs, ctx)),
            selectors="\n".join(self.render_selectors(mappings.selectors, ctx)),
            gradients="\n".join(self.render_gradients(mappings.selectors, ctx)),
            fallbacks="\n".join(self.render_fallbacks(ctx)),
        )
        text = "\n".join(self.render_document(sections, ctx)) + "\n"
        coverage = theme_coverage(mappings.stats)
        metadata = ThemeMetadata(
            url=config.url,
            host=host,
            generated_at=datetime.now(timezone.utc),
            color_scheme=snapshot.color_scheme.value,
            design_system=snapshot.design_system.framework.value,
            generator_version=__version__,
            variant=self.name,
            flavor=config.flavor.value,
            accent=mappings.main_accent.value,
        )
        logger.info(
            "Generated %s theme for %s (%d lines, coverage %d/%d/%d%%)",
            self.name,
            host,
            text.count("\n"),
            coverage.variables,
            coverage.svgs,
            coverage.selectors,
        )
        return GeneratedTheme(text=text, metadata=metadata, sections=sections, coverage=coverage)


def _trim(lines: list[str]) -> list[str]:
    while lines and not lines[-1]:
        lines.pop()
    return lines
