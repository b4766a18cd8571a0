# styles.py

import copy

# Named styles for every widget on the kiosk. Fonts are Tk font tuples;
# negative sizes are pixels, which keeps the layout fixed on any DPI.
DEFAULT_STYLES = {
    "window":  {"bg": "black"},
    "button":  {"fg": "white", "bg": "blue", "font": ("terminal", -50), "border": 5},
    "clock":   {"fg": "white", "font": ("terminal", -250)},
    "day":     {"fg": "lawngreen", "font": ("terminal", -100)},
    "red":     {"fg": "red", "font": ("terminal", -60)},          # today / errors
    "blue":    {"fg": "royalblue", "font": ("terminal", -60)},    # other days
    "neutral": {"fg": "royalblue", "font": ("terminal", -60)},    # blank slots
}

_ALLOWED_KEYS = {"fg", "bg", "font", "border"}
_REQUIRED_KEYS = {
    "window": ("bg",),
    "button": ("fg", "bg", "font"),
}
_LABEL_KEYS = ("fg", "font")


class StyleError(ValueError):
    """A style definition is unusable; the kiosk can't start without it."""


def _check_font(where, font):
    if not isinstance(font, (list, tuple)) or len(font) < 2:
        raise StyleError(f"{where}.font: expected [family, size, ...], got {font!r}")
    family, size = font[0], font[1]
    if not isinstance(family, str) or not family:
        raise StyleError(f"{where}.font: family must be a non-empty string")
    if isinstance(size, bool) or not isinstance(size, int) or size == 0:
        raise StyleError(f"{where}.font: size must be a non-zero integer, got {size!r}")
    for extra in font[2:]:
        if not isinstance(extra, str):
            raise StyleError(f"{where}.font: modifiers must be strings, got {extra!r}")


def validate_styles(styles: dict) -> dict:
    """
    Structural check of a style table. Raises StyleError naming the first
    bad entry (e.g. "styles.red.font: ..."). Colour names are left to Tk,
    which rejects unknown ones when they are applied.
    """
    if not isinstance(styles, dict):
        raise StyleError("styles: expected an object")
    for name in DEFAULT_STYLES:
        if name not in styles:
            raise StyleError(f"styles.{name}: missing")
    for name, props in styles.items():
        where = f"styles.{name}"
        if not isinstance(props, dict):
            raise StyleError(f"{where}: expected an object")
        unknown = set(props) - _ALLOWED_KEYS
        if unknown:
            raise StyleError(f"{where}: unknown keys {sorted(unknown)}")
        for key in _REQUIRED_KEYS.get(name, _LABEL_KEYS):
            if key not in props:
                raise StyleError(f"{where}.{key}: missing")
        for key in ("fg", "bg"):
            if key in props and (not isinstance(props[key], str) or not props[key]):
                raise StyleError(f"{where}.{key}: expected a colour string")
        if "font" in props:
            _check_font(where, props["font"])
        if "border" in props:
            b = props["border"]
            if isinstance(b, bool) or not isinstance(b, int) or b < 0:
                raise StyleError(f"{where}.border: expected a non-negative integer")
    return styles


def merge_styles(overrides=None) -> dict:
    """DEFAULT_STYLES with per-style overrides from config.json, validated."""
    if overrides is not None and not isinstance(overrides, dict):
        raise StyleError("styles: expected an object")
    styles = copy.deepcopy(DEFAULT_STYLES)
    for name, props in (overrides or {}).items():
        if isinstance(props, dict) and isinstance(styles.get(name), dict):
            styles[name].update(props)
        else:
            styles[name] = props
    for props in styles.values():
        # JSON gives lists; Tk is happier with tuples
        if isinstance(props, dict) and isinstance(props.get("font"), list):
            props["font"] = tuple(props["font"])
    return validate_styles(styles)
