"""Pictures of a group's couples and of a member's favor ranking."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from os import PathLike

from PIL import Image, ImageDraw, ImageFont

from .favor import slice_name

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
BAR_BACK = (150, 150, 150)
BAR_FILL = (231, 27, 100)

ROSTER_TITLE = "群老婆列表"
RANKING_TITLE = "你的好感度排行列表"
DIVIDER = "————————————————————"

_FONT_SIZE = 50
_ROSTER_WIDTH = 1500
_RANKING_WIDTH = 1150
_RANKING_ROWS = 10

FontSource = "str | PathLike[str] | None"


def _load_font(font: str | PathLike[str] | None, size: int):
    if font is None:
        try:
            return ImageFont.load_default(size=size)
        except TypeError:
            return ImageFont.load_default()
    return ImageFont.truetype(str(font), size)


def _measure(draw: ImageDraw.ImageDraw, text: str, face) -> tuple[float, float]:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=face)
    return right - left, bottom - top


def render_roster(
    rows: Iterable[tuple[str, str, str, str]],
    font: str | PathLike[str] | None = None,
) -> Image.Image:
    """Draw today's couples as (username, user id, targetname, target id) rows."""
    rows = list(rows)
    if not rows:
        raise ValueError("今天还没有人结婚哦")
    number = max(len(rows), 10)
    image = Image.new("RGB", (_ROSTER_WIDTH, 250 + _FONT_SIZE * number), WHITE)
    draw = ImageDraw.Draw(image)
    title = _load_font(font, _FONT_SIZE * 2)
    width, height = _measure(draw, ROSTER_TITLE, title)
    draw.text(((_ROSTER_WIDTH - width) / 2, 160 - height), ROSTER_TITLE, fill=BLACK, font=title)
    draw.text((0, 250 - height), DIVIDER, fill=BLACK, font=title)
    body = _load_font(font, _FONT_SIZE)
    _, height = _measure(draw, "焯", body)

    def measure(ch: str) -> float:
        return draw.textlength(ch, font=body)

    for i, (username, user, targetname, target) in enumerate(rows):
        y = 260 + 50 * i - height
        draw.text((0, y), slice_name(username, measure), fill=BLACK, font=body)
        draw.text((350, y), f"({user})", fill=BLACK, font=body)
        draw.text((700, y), "←→", fill=BLACK, font=body)
        draw.text((800, y), slice_name(targetname, measure), fill=BLACK, font=body)
        draw.text((1150, y), f"({target})", fill=BLACK, font=body)
    return image


def render_favor_ranking(
    entries: Iterable[tuple[int, int]],
    names: Mapping[int, str],
    font: str | PathLike[str] | None = None,
) -> Image.Image:
    """Draw up to ten (member, favor) entries as labelled bars."""
    entries = list(entries)
    number = min(len(entries), _RANKING_ROWS)
    image = Image.new("RGB", (_RANKING_WIDTH, 170 + 120 * number), WHITE)
    draw = ImageDraw.Draw(image)
    title = _load_font(font, _FONT_SIZE * 2)
    width, height = _measure(draw, RANKING_TITLE, title)
    draw.text(((1100 - width) / 2, 100 - height), RANKING_TITLE, fill=BLACK, font=title)
    draw.text((0, 160 - height), DIVIDER, fill=BLACK, font=title)
    body = _load_font(font, _FONT_SIZE)
    _, body_height = _measure(draw, "焯", body)
    drawn = 0
    for member, favor in entries:
        if drawn >= _RANKING_ROWS:
            break
        if member == 0:
            continue
        label = f"{names.get(member, str(member))}({member})"
        draw.text((10, 180 + 120 * drawn - body_height), label, fill=BLACK, font=body)
        bar_y = 240 + 120 * drawn
        draw.text((1020, bar_y - body_height), str(favor), fill=BLACK, font=body)
        top = bar_y - height / 2
        draw.rectangle([10, top, 10 + 1000 - 1, top + 50 - 1], fill=BAR_BACK)
        filled = favor * 10
        if filled > 0:
            draw.rectangle([10, top, 10 + filled - 1, top + 50 - 1], fill=BAR_FILL)
        drawn += 1
    return image