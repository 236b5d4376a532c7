"""Message bar color and icon tokens."""

import logging
from dataclasses import dataclass, fields

from messagebar.errors import ConfigError

log = logging.getLogger("messagebar.ui.theme")

RGB = tuple[int, int, int]

# Icons the renderer knows how to draw
ICONS = ("check", "warning", "info", "none")


@dataclass(frozen=True)
class Theme:
    """Opaque presentation tokens; nothing in the core reads them."""

    content_background: RGB = (18, 18, 18)
    success_container: RGB = (200, 230, 201)
    success_content: RGB = (27, 94, 32)
    error_container: RGB = (255, 218, 214)
    error_content: RGB = (65, 0, 2)
    success_icon: str = "check"
    error_icon: str = "warning"

    @classmethod
    def from_dict(cls, data: dict) -> "Theme":
        kwargs = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.name.endswith("_icon"):
                if value not in ICONS:
                    log.warning("Unknown icon %r for %s, keeping default", value, f.name)
                    continue
                kwargs[f.name] = value
            else:
                kwargs[f.name] = to_rgb(value)
        return cls(**kwargs)

    def container_color(self, is_error: bool) -> RGB:
        return self.error_container if is_error else self.success_container

    def content_color(self, is_error: bool) -> RGB:
        return self.error_content if is_error else self.success_content

    def icon(self, is_error: bool) -> str:
        return self.error_icon if is_error else self.success_icon


def to_rgb(value) -> RGB:
    """Accept ``[r, g, b]`` or ``"#rrggbb"``."""
    if isinstance(value, str):
        text = value.lstrip("#")
        if len(text) != 6:
            raise ConfigError(f"Invalid hex color {value!r}")
        try:
            return tuple(int(text[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise ConfigError(f"Invalid hex color {value!r}") from None
    try:
        r, g, b = (int(c) for c in value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid color {value!r}") from None
    if not all(0 <= c <= 255 for c in (r, g, b)):
        raise ConfigError(f"Color components must be 0-255, got {value!r}")
    return (r, g, b)
