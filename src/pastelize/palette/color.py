"""Color parsing and the small amount of color math the mapper needs."""
from __future__ import annotations

import colorsys
import re

_HEX_RE = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)
_RGB_RE = re.compile(
    r"^rgba?\(\s*([\d.]+%?)\s*[,\s]\s*([\d.]+%?)\s*[,\s]\s*([\d.]+%?)\s*(?:[,/]\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)
_HSL_RE = re.compile(
    r"^hsla?\(\s*([\d.]+)(?:deg)?\s*[,\s]\s*([\d.]+)%\s*[,\s]\s*([\d.]+)%\s*(?:[,/]\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)
_FIND_RE = re.compile(
    r"#[0-9a-f]{3,8}\b|rgba?\([^)]*\)|hsla?\([^)]*\)|\b[a-z]+\b",
    re.IGNORECASE,
)
# Function calls whose arguments never hold a literal color of their own.
_OPAQUE_RE = re.compile(r"\b(?:var|url|env|attr)\([^)]*\)", re.IGNORECASE)

NAMED_COLORS: dict[str, str] = dict(
    pair.split(":")
    for pair in """
    aliceblue:f0f8ff antiquewhite:faebd7 aqua:00ffff aquamarine:7fffd4 azure:f0ffff
    beige:f5f5dc bisque:ffe4c4 black:000000 blanchedalmond:ffebcd blue:0000ff
    blueviolet:8a2be2 brown:a52a2a burlywood:deb887 cadetblue:5f9ea0 chartreuse:7fff00
    chocolate:d2691e coral:ff7f50 cornflowerblue:6495ed cornsilk:fff8dc crimson:dc143c
    cyan:00ffff darkblue:00008b darkcyan:008b8b darkgoldenrod:b8860b darkgray:a9a9a9
    darkgreen:006400 darkgrey:a9a9a9 darkkhaki:bdb76b darkmagenta:8b008b
    darkolivegreen:556b2f darkorange:ff8c00 darkorchid:9932cc darkred:8b0000
    darksalmon:e9967a darkseagreen:8fbc8f darkslateblue:483d8b darkslategray:2f4f4f
    darkslategrey:2f4f4f darkturquoise:00ced1 darkviolet:9400d3 deeppink:ff1493
    deepskyblue:00bfff dimgray:696969 dimgrey:696969 dodgerblue:1e90ff firebrick:b22222
    floralwhite:fffaf0 forestgreen:228b22 fuchsia:ff00ff gainsboro:dcdcdc
    ghostwhite:f8f8ff gold:ffd700 goldenrod:daa520 gray:808080 grey:808080 green:008000
    greenyellow:adff2f honeydew:f0fff0 hotpink:ff69b4 indianred:cd5c5c indigo:4b0082
    ivory:fffff0 khaki:f0e68c lavender:e6e6fa lavenderblush:fff0f5 lawngreen:7cfc00
    lemonchiffon:fffacd lightblue:add8e6 lightcoral:f08080 lightcyan:e0ffff
    lightgoldenrodyellow:fafad2 lightgray:d3d3d3 lightgreen:90ee90 lightgrey:d3d3d3
    lightpink:ffb6c1 lightsalmon:ffa07a lightseagreen:20b2aa lightskyblue:87cefa
    lightslategray:778899 lightslategrey:778899 lightsteelblue:b0c4de lightyellow:ffffe0
    lime:00ff00 limegreen:32cd32 linen:faf0e6 magenta:ff00ff maroon:800000
    mediumaquamarine:66cdaa mediumblue:0000cd mediumorchid:ba55d3 mediumpurple:9370db
    mediumseagreen:3cb371 mediumslateblue:7b68ee mediumspringgreen:00fa9a
    mediumturquoise:48d1cc mediumvioletred:c71585 midnightblue:191970 mintcream:f5fffa
    mistyrose:ffe4e1 moccasin:ffe4b5 navajowhite:ffdead navy:000080 oldlace:fdf5e6
    olive:808000 olivedrab:6b8e23 orange:ffa500 orangered:ff4500 orchid:da70d6
    palegoldenrod:eee8aa palegreen:98fb98 paleturquoise:afeeee palevioletred:db7093
    papayawhip:ffefd5 peachpuff:ffdab9 peru:cd853f pink:ffc0cb plum:dda0dd
    powderblue:b0e0e6 purple:800080 rebeccapurple:663399 red:ff0000 rosybrown:bc8f8f
    royalblue:4169e1 saddlebrown:8b4513 salmon:fa8072 sandybrown:f4a460 seagreen:2e8b57
    seashell:fff5ee sienna:a0522d silver:c0c0c0 skyblue:87ceeb slateblue:6a5acd
    slategray:708090 slategrey:708090 snow:fffafa springgreen:00ff7f steelblue:4682b4
    tan:d2b48c teal:008080 thistle:d8bfd8 tomato:ff6347 turquoise:40e0d0 violet:ee82ee
    wheat:f5deb3 white:ffffff whitesmoke:f5f5f5 yellow:ffff00 yellowgreen:9acd32
    """.split()
)

# Values that are legal in color properties but carry no color of their own.
NON_COLOR_KEYWORDS = frozenset(
    {"transparent", "none", "inherit", "initial", "unset", "revert", "currentcolor", "auto"}
)


def _channel(raw: str) -> int:
    if raw.endswith("%"):
        return round(min(float(raw[:-1]), 100.0) * 2.55)
    return min(round(float(raw)), 255)


def normalize_color(value: str | None) -> str | None:
    """Return *value* as an uppercase ``#RRGGBB`` string, or None.

    Accepts hex (3, 4, 6 or 8 digits), rgb()/rgba(), hsl()/hsla() and CSS
    named colors. Alpha channels are dropped.
    """
    if not value:
        return None
    text = value.strip().lower()
    if text.endswith("!important"):
        text = text[: -len("!important")].strip()

    m = _HEX_RE.match(text)
    if m:
        digits = m.group(1)
        if len(digits) in (3, 4):
            digits = "".join(c * 2 for c in digits[:3])
        return f"#{digits[:6].upper()}"

    m = _RGB_RE.match(text)
    if m:
        try:
            r, g, b = (_channel(m.group(i)) for i in (1, 2, 3))
        except ValueError:
            return None
        return f"#{r:02X}{g:02X}{b:02X}"

    m = _HSL_RE.match(text)
    if m:
        try:
            h = float(m.group(1)) % 360 / 360
            s = min(float(m.group(2)), 100.0) / 100
            l = min(float(m.group(3)), 100.0) / 100
        except ValueError:
            return None
        r, g, b = colorsys.hls_to_rgb(h, l, s)
        return f"#{round(r * 255):02X}{round(g * 255):02X}{round(b * 255):02X}"

    named = NAMED_COLORS.get(text)
    if named:
        return f"#{named.upper()}"
    return None


def is_color_value(value: str | None) -> bool:
    """True if *value* is a literal color (not a keyword or ``var()``)."""
    return normalize_color(value) is not None


def find_color(value: str | None) -> str | None:
    """Return the first color literal inside a shorthand value, normalized."""
    if not value:
        return None
    direct = normalize_color(value)
    if direct:
        return direct
    for m in _FIND_RE.finditer(_OPAQUE_RE.sub(" ", value)):
        found = normalize_color(m.group(0))
        if found:
            return found
    return None


def parse_rgb(value: str) -> tuple[int, int, int] | None:
    hex_value = normalize_color(value)
    if hex_value is None:
        return None
    return (
        int(hex_value[1:3], 16),
        int(hex_value[3:5], 16),
        int(hex_value[5:7], 16),
    )


def _hls(value: str) -> tuple[float, float, float] | None:
    rgb = parse_rgb(value)
    if rgb is None:
        return None
    return colorsys.rgb_to_hls(*(c / 255 for c in rgb))


def lightness(value: str) -> float | None:
    hls = _hls(value)
    return None if hls is None else hls[1]


def saturation(value: str) -> float | None:
    hls = _hls(value)
    return None if hls is None else hls[2]


def is_dark_color(value: str) -> bool:
    """Average-channel darkness test used for page scheme detection."""
    rgb = parse_rgb(value)
    if rgb is None:
        return False
    return sum(rgb) / 3 < 128


def is_chromatic(value: str) -> bool:
    """True for colors saturated and mid-toned enough to read as a hue."""
    hls = _hls(value)
    if hls is None:
        return False
    _, l, s = hls
    return s >= 0.25 and 0.15 < l < 0.92


def rgb_distance(a: str, b: str) -> float:
    ra, rb = parse_rgb(a), parse_rgb(b)
    if ra is None or rb is None:
        return float("inf")
    return sum((x - y) ** 2 for x, y in zip(ra, rb)) ** 0.5
