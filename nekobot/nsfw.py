"""Verdicts on image classification scores."""

from __future__ import annotations

from dataclasses import dataclass

HSO_IMAGE = "https://gchat.qpic.cn/gchatpic_new//--4234EDEC5F147A4C319A41149D7E0EA9/0"

_THRESHOLD = 0.3


@dataclass(frozen=True)
class Picture:
    """Class probabilities reported by an image classifier."""

    drawings: float = 0.0
    hentai: float = 0.0
    neutral: float = 0.0
    porn: float = 0.0
    sexy: float = 0.0


def _flags(p: Picture) -> list[str]:
    labels = (("hentai", p.hentai), ("porn", p.porn), ("hso", p.sexy))
    return [name for name, score in labels if score > _THRESHOLD]


def judge(p: Picture) -> str:
    """Describe a picture for an explicit rating request."""
    if p.neutral > _THRESHOLD:
        return "普通哦"
    drawn = p.drawings > _THRESHOLD or p.neutral < _THRESHOLD
    verdict = "二次元" if drawn else "三次元"
    return verdict + "".join(f" {flag}" for flag in _flags(p))


def autojudge(p: Picture) -> str | None:
    """Return a comment for an unsolicited picture, or None to stay quiet."""
    if p.neutral > _THRESHOLD:
        return None
    flags = _flags(p)
    if not flags:
        return None
    verdict = "二次元" if p.drawings > _THRESHOLD else "三次元"
    return verdict + "".join(f" {flag}" for flag in flags)