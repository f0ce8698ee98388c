"""Color evidence extracted from a page: variables, SVG colors and selectors."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, fields, replace
from enum import StrEnum


class VariableScope(StrEnum):
    ROOT = "root"
    ELEMENT = "element"
    CLASS = "class"


class SVGColorType(StrEnum):
    FILL = "fill"
    STROKE = "stroke"
    STOP_COLOR = "stop-color"


class SVGLocation(StrEnum):
    INLINE = "inline"
    BACKGROUND = "background"


class SVGPurpose(StrEnum):
    LOGO = "logo"
    ICON = "icon"
    BUTTON = "button"
    NAVIGATION = "navigation"
    SOCIAL = "social"
    ARROW = "arrow"
    OTHER = "other"


class SelectorCategory(StrEnum):
    BUTTON = "button"
    LINK = "link"
    CARD = "card"
    INPUT = "input"
    NAVIGATION = "navigation"
    HEADER = "header"
    FOOTER = "footer"
    SIDEBAR = "sidebar"
    MODAL = "modal"
    ALERT = "alert"
    BADGE = "badge"
    TAB = "tab"
    SWITCH = "switch"
    DROPDOWN = "dropdown"
    CODE = "code"
    TABLE = "table"
    ICON = "icon"
    TEXT = "text"
    BACKGROUND = "background"
    BORDER = "border"
    OTHER = "other"


# Python attribute name -> CSS property name for the five color-bearing properties.
CSS_PROPERTY_NAMES: dict[str, str] = {
    "color": "color",
    "background_color": "background-color",
    "border_color": "border-color",
    "fill": "fill",
    "stroke": "stroke",
}


@dataclass(frozen=True)
class ColorProperties:
    """The closed set of color-bearing properties a selector can carry."""

    color: str | None = None
    background_color: str | None = None
    border_color: str | None = None
    fill: str | None = None
    stroke: str | None = None

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield ``(attribute, value)`` for populated fields only."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                yield f.name, value

    def css_items(self) -> Iterator[tuple[str, str]]:
        for name, value in self.items():
            yield CSS_PROPERTY_NAMES[name], value

    def is_empty(self) -> bool:
        return next(self.items(), None) is None

    def merged(self, other: ColorProperties) -> ColorProperties:
        """Return a copy with *other*'s populated fields laid over this one."""
        return replace(self, **dict(other.items()))


@dataclass(frozen=True)
class VariableFact:
    """A custom property declaration and where it is used."""

    name: str
    value: str
    computed_value: str
    scope: VariableScope
    selector: str
    usage: tuple[str, ...] = ()
    frequency: int = 0


@dataclass(frozen=True)
class SVGColorFact:
    """One color attribute inside an SVG.

    ``color`` is normalized to ``#RRGGBB``; ``raw`` is the literal as written
    in the markup.
    """

    color: str
    color_type: SVGColorType
    location: SVGLocation
    selector: str
    purpose: SVGPurpose = SVGPurpose.OTHER
    raw: str = ""


@dataclass(frozen=True)
class SVGInfo:
    """One vector icon found inline or as a CSS data URI."""

    location: SVGLocation
    selector: str
    markup: str
    colors: tuple[SVGColorFact, ...]
    purpose: SVGPurpose = SVGPurpose.OTHER
    width: str | None = None
    height: str | None = None


@dataclass(frozen=True)
class SelectorFact:
    """A single CSS selector with its current color styles."""

    selector: str
    specificity: int
    category: SelectorCategory
    frequency: int
    is_interactive: bool
    has_visible_background: bool
    has_border: bool
    is_text_only: bool
    styles: ColorProperties
    source_gradient_angle: int | None = None

    @property
    def has_color(self) -> bool:
        return not self.styles.is_empty()


@dataclass(frozen=True)
class SelectorGroup:
    category: SelectorCategory
    selectors: tuple[SelectorFact, ...]
