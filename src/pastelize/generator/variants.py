"""Concrete emission strategies: baked, dynamic and refined."""

from __future__ import annotations

from pastelize.generator.base import (
    FLAVOR_LABELS,
    INDENT,
    RenderContext,
    ThemeGenerator,
    block,
    comment,
    declaration,
    indent_lines,
)
from pastelize.model.mapping import SelectorMapping
from pastelize.palette.accents import AccentRole, cascading_accents
from pastelize.palette.tokens import ACCENTS, PALETTES, Flavor, PaletteToken

ROLE_ALIASES = {
    AccentRole.MAIN: "@accent",
    AccentRole.SECONDARY: "@bi-accent-1",
    AccentRole.TERTIARY: "@bi-accent-2",
}


class BakedGenerator(ThemeGenerator):
    """One fixed flavor and accent, with the palette written out inline."""

    name = "baked"

    def palette_procedure(self, body: list[str], ctx: RenderContext) -> list[str]:
        flavor = ctx.config.flavor
        palette = [declaration(f"@{token.value}", value) for token, value in PALETTES[flavor].items()]
        scheme = "dark" if flavor.is_dark else "light"
        return [
            ":root {",
            *indent_lines(palette),
            f"{INDENT}{declaration('color-scheme', scheme)}",
            "",
            *indent_lines(body),
            "}",
        ]


class DynamicGenerator(ThemeGenerator):
    """User-selectable flavors and accent, applied per color scheme.

    Tokens equal to the main accent or its bi-accents are written as the
    ``@accent``/``@bi-accent-*`` aliases so they follow the user's accent
    choice. Every declaration is ``!important``.
    """

    name = "dynamic"
    force_important = True

    def header_options(self, ctx: RenderContext) -> list[str]:
        config = ctx.config
        dark_default = config.flavor if config.flavor.is_dark else Flavor.MOCHA

        def flavors(default: Flavor) -> str:
            return ", ".join(
                f'"{f.value}:{label}{"*" if f is default else ""}"' for f, label in FLAVOR_LABELS.items()
            )

        accents = ", ".join(
            f'"{a.value}:{a.value.capitalize()}{"*" if a is config.accent else ""}"' for a in ACCENTS
        )
        return [
            f'@var select lightFlavor "Light Flavor" [{flavors(config.light_flavor)}]',
            f'@var select darkFlavor "Dark Flavor" [{flavors(dark_default)}]',
            f'@var select accentColor "Accent" [{accents}]',
        ]

    def ref(self, token: PaletteToken, ctx: RenderContext) -> str:
        cascade = ctx.cascade
        if token is cascade.main:
            return "@accent"
        if token is cascade.bi1:
            return "@bi-accent-1"
        if token is cascade.bi2:
            return "@bi-accent-2"
        return f"@{token.value}"

    def accent_mixins(self, ctx: RenderContext) -> list[str]:
        """One guarded mixin per accent, defining its bi- and sub-bi-accents."""
        lines: list[str] = []
        for accent in ACCENTS:
            cascade = cascading_accents(accent)
            lines += block(
                f"#bi-accents(@accentName) when (@accentName = {accent.value})",
                [
                    declaration("@bi-accent-1", f"@{cascade.bi1.value}"),
                    declaration("@bi-accent-2", f"@{cascade.bi2.value}"),
                    declaration("@bi1-sub-1", f"@{cascade.bi1_subs[0].value}"),
                    declaration("@bi1-sub-2", f"@{cascade.bi1_subs[1].value}"),
                    declaration("@bi2-sub-1", f"@{cascade.bi2_subs[0].value}"),
                    declaration("@bi2-sub-2", f"@{cascade.bi2_subs[1].value}"),
                ],
            )
        return lines

    def extra_gradients(self, ctx: RenderContext) -> list[str]:
        lines: list[str] = []
        if ctx.config.include_comments:
            lines.append(comment("Cascading gradients: badges use bi-accent-1, chips bi-accent-2"))
        for selectors, start, end in (
            ((".badge", ".tag"), "@bi-accent-1", "@bi1-sub-1"),
            ((".chip", ".pill"), "@bi-accent-2", "@bi2-sub-1"),
        ):
            prelude = ",\n".join(f'{s}:not([class*="gradient"]):hover' for s in selectors)
            lines += block(
                prelude,
                [declaration("background", f"linear-gradient(90deg, {start}, fade({end}, 12%))", True)],
            )
            lines.append("")
        return lines

    def palette_procedure(self, body: list[str], ctx: RenderContext) -> list[str]:
        apply = [
            ":root {",
            f"{INDENT}#catppuccin(@darkFlavor);",
            f"{INDENT}@media (prefers-color-scheme: light) {{",
            f"{INDENT * 2}#catppuccin(@lightFlavor);",
            f"{INDENT}}}",
            "}",
        ]
        procedure = [
            "#catppuccin(@flavor) {",
            f"{INDENT}#lib.palette();",
            f"{INDENT}#lib.defaults();",
            f"{INDENT}@accent: @@accentColor;",
            f"{INDENT}#bi-accents(@accentColor);",
            "",
            *indent_lines(body),
            "}",
        ]
        return [*apply, "", *self.accent_mixins(ctx), "", *procedure]


class RefinedGenerator(DynamicGenerator):
    """Dynamic output that avoids accent-on-accent contrast collisions.

    For accent-role selectors the background, border, fill and stroke follow
    the role's alias, while text keeps its fixed token unless that token is
    itself an accent. Hover text sits on the accent, so it uses ``@base``.
    """

    name = "refined"
    hover_text = PaletteToken.BASE

    def property_ref(
        self,
        css_name: str,
        token: PaletteToken,
        mapping: SelectorMapping,
        ctx: RenderContext,
    ) -> str:
        if css_name == "color":
            return self.ref(token, ctx) if token.is_accent else f"@{token.value}"
        if mapping.accent_role is not None and token in ctx.cascade.family:
            return ROLE_ALIASES[mapping.accent_role]
        return self.ref(token, ctx)

