"""Tarot readings: single draws, multi-card draws and spreads."""

from __future__ import annotations

import json
import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

BED = "https://gitcode.net/shudorcl/zbp-tarot/-/raw/master/"
REVERSE_DIR = "Reverse/"
REASONS = (
    "您抽到的是~\n",
    "锵锵锵，塔罗牌的预言是~\n",
    "诶，让我看看您抽到了~\n",
)
POSITIONS = ("『正位』", "『逆位』")
MAX_DRAW = 20
MAJOR_COUNT = 22
MINOR_COUNT = 55
MIXED_KIND = "混合"

_MINOR_SUITS = "[圣杯|星币|宝剑|权杖] [0-10|侍从|骑士|王后|国王]"

JsonSource = Union[str, bytes, bytearray, Mapping[str, Any]]


@dataclass(frozen=True)
class Card:
    """One tarot card and its meanings."""

    name: str
    description: str = ""
    reverse_description: str = ""
    img_url: str = ""

    def image_url(self, reversed_: bool = False) -> str:
        return BED + (REVERSE_DIR if reversed_ else "") + self.img_url

    def image_name(self, reversed_: bool = False) -> str:
        """Name under which the card's picture is cached."""
        return REVERSE_DIR[:-1] + self.name if reversed_ else self.name


@dataclass(frozen=True)
class Formation:
    """A spread: how many cards it holds and what each position means."""

    cards_num: int
    is_cut: bool = False
    represent: tuple[tuple[str, ...], ...] = ()

    @property
    def labels(self) -> tuple[str, ...]:
        return self.represent[0] if self.represent else ()


@dataclass(frozen=True)
class DrawnCard:
    """A card as it came out of the deck, upright or reversed."""

    card: Card
    reversed: bool
    reason: str = ""
    label: str = ""

    @property
    def position(self) -> str:
        return POSITIONS[1 if self.reversed else 0]

    @property
    def description(self) -> str:
        return self.card.reverse_description if self.reversed else self.card.description

    @property
    def image_url(self) -> str:
        return self.card.image_url(self.reversed)

    @property
    def image_name(self) -> str:
        return self.card.image_name(self.reversed)

    @property
    def text(self) -> str:
        return f"{self.reason}{self.position}的『{self.card.name}』\n其释义为: {self.description}"


def _card_range(kind: str) -> tuple[int, int]:
    if "小" in kind:
        return MAJOR_COUNT, MINOR_COUNT
    if kind == MIXED_KIND:
        return 0, MAJOR_COUNT + MINOR_COUNT
    return 0, MAJOR_COUNT


def _distinct(count: int, length: int, rng: random.Random):
    if count > length:
        raise ValueError("抽取张数过多")
    seen: set[int] = set()
    while len(seen) < count:
        j = rng.randrange(length)
        if j in seen:
            continue
        seen.add(j)
        yield j


@dataclass
class TarotDeck:
    """All cards, keyed by their index, and the known spreads."""

    cards: dict[str, Card]
    formations: dict[str, Formation]
    _by_name: dict[str, Card] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_name = {card.name: card for card in self.cards.values()}

    @property
    def major_arcana_names(self) -> list[str]:
        return [
            self.cards[str(i)].name if str(i) in self.cards else ""
            for i in range(MAJOR_COUNT)
        ]

    @property
    def formation_names(self) -> list[str]:
        return list(self.formations)

    def _card(self, index: int) -> Card:
        try:
            return self.cards[str(index)]
        except KeyError:
            raise LookupError(f"no card with index {index}") from None

    def draw(self, n: int, kind: str, rng: random.Random) -> list[DrawnCard]:
        """Draw n distinct cards of the given kind, each upright or reversed."""
        if n <= 0:
            raise ValueError("张数必须为正")
        if n > MAX_DRAW:
            raise ValueError("抽取张数过多")
        start, length = _card_range(kind)
        drawn = []
        for j in _distinct(n, length, rng):
            reversed_ = rng.randrange(2) == 1
            card = self._card(j + start)
            reason = rng.choice(REASONS)
            drawn.append(DrawnCard(card, reversed_, reason))
        return drawn

    def interpret(self, name: str) -> str:
        """Both meanings of the named card."""
        card = self._by_name.get(name)
        if card is None:
            raise LookupError(f"没有找到{name}噢~")
        return (
            f"{name}的含义是~\n『正位』:{card.description}"
            f"\n『逆位』:{card.reverse_description}"
        )

    def card_image_url(self, name: str) -> str:
        card = self._by_name.get(name)
        if card is None:
            raise LookupError(f"没有找到{name}噢~")
        return card.image_url()

    def spread(
        self, kind: str, formation: str, rng: random.Random
    ) -> tuple[list[DrawnCard], str]:
        """Lay out a named spread; return the cards and the reading text."""
        info = self.formations.get(formation)
        if info is None:
            raise LookupError(
                f"没有找到{formation}噢~\n现有牌阵列表: \n" + "\n".join(self.formation_names)
            )
        start, length = _card_range(kind)
        labels = info.labels
        drawn: list[DrawnCard] = []
        lines: list[str] = []
        for i, j in enumerate(_distinct(info.cards_num, length, rng)):
            reversed_ = rng.randrange(2) == 1
            label = labels[i] if i < len(labels) else ""
            card = DrawnCard(self._card(j + start), reversed_, label=label)
            drawn.append(card)
            lines.append(
                f"{label}:{card.position}的『{card.card.name}』\n其释义为: \n{card.description}\n"
            )
        return drawn, "".join(lines)

    def card_list_text(self) -> str:
        """Overview of all card names."""
        major = self.major_arcana_names
        return (
            "塔罗牌列表\n大阿尔卡纳:\n"
            + " ".join(major[:7])
            + "\n"
            + " ".join(major[7:14])
            + "\n"
            + " ".join(major[14:22])
            + "\n小阿尔卡纳:\n"
            + _MINOR_SUITS
        )


def _parse(data: JsonSource) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    return data


def load_deck(cards_data: JsonSource, formations_data: JsonSource) -> TarotDeck:
    """Build a deck from the card and spread JSON documents."""
    cards = {}
    for key, entry in _parse(cards_data).items():
        info = entry.get("info") or {}
        cards[str(key)] = Card(
            name=str(entry.get("name", "")),
            description=str(info.get("description", "")),
            reverse_description=str(info.get("reverseDescription", "")),
            img_url=str(info.get("imgUrl", "")),
        )
    formations = {
        str(name): Formation(
            cards_num=int(entry.get("cards_num", 0)),
            is_cut=bool(entry.get("is_cut", False)),
            represent=tuple(tuple(str(x) for x in row) for row in entry.get("represent") or ()),
        )
        for name, entry in _parse(formations_data).items()
    }
    return TarotDeck(cards, formations)


def parse_draw_count(text: str) -> int:
    """Read a count such as "3张"; an empty string means one card."""
    if not text:
        return 1
    digits = text[:-1] if text.endswith("张") else text
    try:
        n = int(digits)
    except ValueError:
        raise ValueError(f"invalid card count: {text!r}") from None
    if n <= 0:
        raise ValueError("张数必须为正")
    if n > MAX_DRAW:
        raise ValueError("抽取张数过多")
    return n