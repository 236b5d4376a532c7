"""Message bar renderer.

Draws the banner over a PIL content frame: icon, message text clamped to
the configured number of lines, and a "Copy" button for errors. The
renderer only reads a Message and a visibility flag; it owns no timing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont

from messagebar.config import MessageBarConfig, MessageBarPosition
from messagebar.state import Message, MessageKind

log = logging.getLogger("messagebar.ui.message_bar")

ELLIPSIS = "…"
COPY_LABEL = "Copy"
CONFIRMATION_LABEL = "Copied!"
ICON_SIZE = 16
ICON_GAP = 12
LINE_SPACING = 2

Box = tuple[int, int, int, int]


@dataclass(frozen=True)
class BarLayout:
    """Pixel geometry of one rendered bar (boxes are x0, y0, x1, y1)."""

    bar: Box
    icon: Box
    text_origin: tuple[int, int]
    lines: list[str]
    line_height: int
    copy_button: Box | None


def _contains(box: Box, x: int, y: int) -> bool:
    x0, y0, x1, y1 = box
    return x0 <= x < x1 and y0 <= y < y1


class MessageBarRenderer:
    """Composites the message bar onto content frames."""

    def __init__(self, config: MessageBarConfig | None = None):
        self.config = config or MessageBarConfig()
        self._font: ImageFont.FreeTypeFont | None = None
        self._font_small: ImageFont.FreeTypeFont | None = None
        self._load_fonts()

    def _load_fonts(self) -> None:
        try:
            self._font = ImageFont.truetype(
                "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", 14
            )
            self._font_small = ImageFont.truetype(
                "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 12
            )
        except OSError:
            log.warning("DejaVu fonts not found, using default bitmap font")
            self._font = ImageFont.load_default()
            self._font_small = self._font

    # --- Layout ---

    def _line_height(self, font) -> int:
        top, bottom = font.getbbox("Ag")[1::2]
        return max(bottom - top, 1) + LINE_SPACING

    def clamp_text(self, text: str, max_width: int, max_lines: int) -> list[str]:
        """Wrap ``text`` to ``max_width`` pixels, ellipsizing past ``max_lines``."""
        font = self._font
        lines: list[str] = []
        for paragraph in text.split("\n"):
            current = ""
            for word in paragraph.split(" "):
                candidate = f"{current} {word}" if current else word
                if font.getlength(candidate) <= max_width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                # Break words wider than the whole line
                while font.getlength(word) > max_width and len(word) > 1:
                    cut = len(word)
                    while cut > 1 and font.getlength(word[:cut]) > max_width:
                        cut -= 1
                    lines.append(word[:cut])
                    word = word[cut:]
                current = word
            lines.append(current)

        if len(lines) <= max_lines:
            return lines

        kept = lines[:max_lines]
        last = kept[-1]
        while last and font.getlength(last + ELLIPSIS) > max_width:
            last = last[:-1]
        kept[-1] = last.rstrip() + ELLIPSIS
        return kept

    def layout(self, size: tuple[int, int], message: Message) -> BarLayout | None:
        """Geometry of the bar for ``message`` on a frame of ``size``."""
        if message.kind is MessageKind.EMPTY:
            return None
        cfg = self.config
        width, height = size
        is_error = message.kind is MessageKind.ERROR
        pad_x, pad_y = cfg.horizontal_padding, cfg.vertical_padding

        copy_w = 0
        if is_error:
            copy_w = int(self._font_small.getlength(COPY_LABEL)) + pad_x * 2

        text_x = pad_x + ICON_SIZE + ICON_GAP
        text_w = max(width - text_x - pad_x - copy_w, 1)
        max_lines = cfg.error_max_lines if is_error else cfg.success_max_lines
        lines = self.clamp_text(message.text, text_w, max_lines)
        line_h = self._line_height(self._font)

        inner_h = max(ICON_SIZE, line_h * len(lines))
        bar_h = min(inner_h + pad_y * 2, height)
        y0 = 0 if cfg.position is MessageBarPosition.TOP else height - bar_h
        bar = (0, y0, width, y0 + bar_h)

        mid_y = y0 + bar_h // 2
        icon = (pad_x, mid_y - ICON_SIZE // 2, pad_x + ICON_SIZE, mid_y + ICON_SIZE // 2)
        text_origin = (text_x, mid_y - (line_h * len(lines)) // 2)

        copy_button = None
        if is_error:
            copy_button = (width - copy_w, y0, width, y0 + bar_h)

        return BarLayout(bar, icon, text_origin, lines, line_h, copy_button)

    def copy_button_box(self, size: tuple[int, int], message: Message) -> Box | None:
        """Hit box of the copy button; ``None`` unless ``message`` is an error."""
        layout = self.layout(size, message)
        return layout.copy_button if layout else None

    def hit_copy_button(self, size: tuple[int, int], message: Message, x: int, y: int) -> bool:
        box = self.copy_button_box(size, message)
        return box is not None and _contains(box, x, y)

    # --- Drawing ---

    def render(self, frame: Image.Image, message: Message, visible: bool,
               show_confirmation: bool = False) -> Image.Image:
        """Return ``frame`` with the bar drawn on a copy when visible."""
        layout = self.layout(frame.size, message) if visible else None
        if layout is None and not show_confirmation:
            return frame

        img = frame.convert("RGB")  # always a new image
        draw = ImageDraw.Draw(img)

        if layout is not None:
            self._draw_bar(draw, layout, message)
        if show_confirmation:
            self._draw_confirmation(draw, img.size)
        return img

    def _draw_bar(self, draw: ImageDraw.ImageDraw, layout: BarLayout, message: Message) -> None:
        theme = self.config.theme
        is_error = message.kind is MessageKind.ERROR
        fg = theme.content_color(is_error)

        draw.rectangle(layout.bar, fill=theme.container_color(is_error))
        self._draw_icon(draw, theme.icon(is_error), layout.icon, fg)

        x, y = layout.text_origin
        for line in layout.lines:
            draw.text((x, y), line, fill=fg, font=self._font)
            y += layout.line_height

        if layout.copy_button is not None:
            x0, y0, x1, y1 = layout.copy_button
            draw.text(
                (x1 - self.config.horizontal_padding, (y0 + y1) // 2), COPY_LABEL,
                fill=fg, font=self._font_small, anchor="rm",
            )

    def _draw_icon(self, draw: ImageDraw.ImageDraw, icon: str, box: Box, color) -> None:
        x0, y0, x1, y1 = box
        w, h = x1 - x0, y1 - y0
        if icon == "check":
            draw.line(
                [(x0 + w * 0.1, y0 + h * 0.55), (x0 + w * 0.4, y0 + h * 0.85),
                 (x0 + w * 0.9, y0 + h * 0.2)],
                fill=color, width=2,
            )
        elif icon == "warning":
            draw.polygon([(x0 + w // 2, y0), (x1, y1), (x0, y1)], outline=color)
            draw.line([(x0 + w // 2, y0 + h * 0.35), (x0 + w // 2, y0 + h * 0.7)],
                      fill=color, width=2)
            draw.point((x0 + w // 2, y1 - 3), fill=color)
        elif icon == "info":
            draw.ellipse(box, outline=color)
            draw.line([(x0 + w // 2, y0 + h * 0.45), (x0 + w // 2, y1 - 3)], fill=color)
            draw.point((x0 + w // 2, y0 + 4), fill=color)

    def _draw_confirmation(self, draw: ImageDraw.ImageDraw, size: tuple[int, int]) -> None:
        # Opposite edge from the bar so it never covers the message
        width, height = size
        theme = self.config.theme
        text_w = int(self._font_small.getlength(CONFIRMATION_LABEL))
        line_h = self._line_height(self._font_small)
        pill_w, pill_h = text_w + 24, line_h + 12
        cx = width // 2
        if self.config.position is MessageBarPosition.TOP:
            y1 = height - 12
            y0 = y1 - pill_h
        else:
            y0 = 12
            y1 = y0 + pill_h
        draw.rounded_rectangle(
            [cx - pill_w // 2, y0, cx + pill_w // 2, y1],
            radius=pill_h // 2, fill=(50, 50, 50),
        )
        draw.text((cx, (y0 + y1) // 2), CONFIRMATION_LABEL,
                  fill=(230, 230, 230), font=self._font_small, anchor="mm")
