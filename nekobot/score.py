"""Daily sign-in: experience levels, coin rewards and rankings."""

from __future__ import annotations

import random
import sqlite3
from dataclasses import dataclass, field
from datetime import datetime
from os import PathLike

SCORE_MAX = 1200
SIGN_IN_MAX = 1
RANK_ARRAY = (0, 10, 20, 50, 100, 200, 350, 550, 750, 1000, 1200)

MSG_ALREADY = "今天你已经签到过了！"
MSG_LEVEL_CAPPED = "你的等级已经达到上限"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS score (
    uid INTEGER PRIMARY KEY,
    score INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS sign_in (
    uid INTEGER PRIMARY KEY,
    count INTEGER NOT NULL DEFAULT 0,
    updated_at TEXT
);
"""


class ScoreStore:
    """Persistent experience scores and sign-in counters."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self._conn = sqlite3.connect(path)
        with self._conn:
            self._conn.executescript(_SCHEMA)

    def __enter__(self) -> ScoreStore:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def score_of(self, uid: int) -> int:
        """Experience of a member, creating the record at 0 when new."""
        with self._conn:
            row = self._conn.execute("SELECT score FROM score WHERE uid = ?", (uid,)).fetchone()
            if row is None:
                self._conn.execute("INSERT INTO score (uid, score) VALUES (?, 0)", (uid,))
                return 0
            return row[0]

    def set_score(self, uid: int, score: int) -> None:
        with self._conn:
            self._conn.execute(
                "INSERT INTO score (uid, score) VALUES (?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET score = excluded.score",
                (uid, score),
            )

    def sign_in_of(self, uid: int) -> tuple[int, datetime | None]:
        """Sign-in count and last update time, creating the record when new."""
        with self._conn:
            row = self._conn.execute(
                "SELECT count, updated_at FROM sign_in WHERE uid = ?", (uid,)
            ).fetchone()
            if row is None:
                self._conn.execute("INSERT INTO sign_in (uid, count) VALUES (?, 0)", (uid,))
                return 0, None
        count, stamp = row
        return count, datetime.fromisoformat(stamp) if stamp else None

    def set_sign_in(self, uid: int, count: int, now: datetime) -> None:
        with self._conn:
            self._conn.execute(
                "INSERT INTO sign_in (uid, count, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET count = excluded.count, "
                "updated_at = excluded.updated_at",
                (uid, count, now.isoformat()),
            )

    def top_scores(self, n: int) -> list[tuple[int, int]]:
        """The n highest scores as (uid, score), highest first."""
        rows = self._conn.execute(
            "SELECT uid, score FROM score ORDER BY score DESC LIMIT ?", (n,)
        ).fetchall()
        return [(uid, score) for uid, score in rows]

    def close(self) -> None:
        self._conn.close()


@dataclass
class Wallet:
    """Coin balances of members."""

    balances: dict[int, int] = field(default_factory=dict)

    def balance(self, uid: int) -> int:
        return self.balances.get(uid, 0)

    def add(self, uid: int, amount: int) -> None:
        self.balances[uid] = self.balance(uid) + amount

    def ranking(self, uids) -> list[tuple[int, int]]:
        """Known balances of the given members as (uid, money), richest first."""
        entries = [(uid, self.balances[uid]) for uid in dict.fromkeys(uids) if uid in self.balances]
        entries.sort(key=lambda entry: entry[1], reverse=True)
        return entries


@dataclass(frozen=True)
class SignInResult:
    """Outcome of a sign-in attempt."""

    already_signed: bool
    level: int
    rank: int
    added: int
    balance: int
    next_rank_score: int
    capped: bool = False

    @property
    def progress_text(self) -> str:
        return f"{self.level}/{self.next_rank_score}"


def get_rank(count: int) -> int:
    """Rank reached with the given experience, or -1 beyond the table."""
    for k, v in enumerate(RANK_ARRAY):
        if count == v:
            return k
        if count < v:
            return k - 1
    return -1


def hour_word(hour: int) -> str:
    """Greeting for the hour of the day."""
    if 6 <= hour < 12:
        return "早上好"
    if 12 <= hour < 14:
        return "中午好"
    if 14 <= hour < 19:
        return "下午好"
    if 19 <= hour < 24:
        return "晚上好"
    if 0 <= hour < 6:
        return "凌晨好"
    return ""


def _next_rank_score(rank: int) -> int:
    return RANK_ARRAY[rank + 1] if rank < len(RANK_ARRAY) - 1 else SCORE_MAX


def sign_in(
    store: ScoreStore, wallet: Wallet, uid: int, now: datetime, rng: random.Random
) -> SignInResult:
    """Sign a member in for the day, raising level and paying coins."""
    count, updated = store.sign_in_of(uid)
    same_day = updated is not None and updated.date() == now.date()
    if count >= SIGN_IN_MAX and same_day:
        level = store.score_of(uid)
        rank = get_rank(level)
        return SignInResult(
            already_signed=True,
            level=level,
            rank=rank,
            added=0,
            balance=wallet.balance(uid),
            next_rank_score=_next_rank_score(rank),
        )
    if not same_day:
        store.set_sign_in(uid, 0, now)
    store.set_sign_in(uid, count + 1, now)
    level = store.score_of(uid) + 1
    capped = level > SCORE_MAX
    if capped:
        level = SCORE_MAX
    store.set_score(uid, level)
    rank = get_rank(level)
    added = 1 + rng.randrange(10) + rank * 5
    wallet.add(uid, added)
    return SignInResult(
        already_signed=False,
        level=level,
        rank=rank,
        added=added,
        balance=wallet.balance(uid),
        next_rank_score=_next_rank_score(rank),
        capped=capped,
    )