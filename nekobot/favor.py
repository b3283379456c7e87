"""Mutual favorability scores and skill cooldown records."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from datetime import datetime
from os import PathLike

FAVOR_MAX = 100
FAVOR_MIN = 0
NAME_WIDTH_LIMIT = 350
ELLIPSIS = "......"


def _keys(uid: int, target: int) -> tuple[str, str]:
    return f"{uid}+{target}+{uid}", f"{target}+{uid}+{target}"


class FavorBook:
    """Symmetric favorability between pairs of members."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self._conn = sqlite3.connect(path)
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS favorability "
                "(userinfo TEXT PRIMARY KEY, favor INTEGER NOT NULL DEFAULT 0)"
            )

    def __enter__(self) -> FavorBook:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _find(self, uid: int, target: int) -> tuple[str, int] | None:
        return self._conn.execute(
            "SELECT userinfo, favor FROM favorability WHERE userinfo IN (?, ?) LIMIT 1",
            _keys(uid, target),
        ).fetchone()

    def get(self, uid: int, target: int) -> int:
        """Current favor of the pair, creating it at 0 when new."""
        with self._conn:
            found = self._find(uid, target)
            if found is None:
                self._conn.execute(
                    "INSERT INTO favorability (userinfo, favor) VALUES (?, 0)",
                    (_keys(uid, target)[0],),
                )
                return 0
            return found[1]

    def change(self, uid: int, target: int, score: int) -> int:
        """Add score to the pair's favor and return the new value."""
        with self._conn:
            found = self._find(uid, target)
            if found is None:
                self._conn.execute(
                    "INSERT INTO favorability (userinfo, favor) VALUES (?, ?)",
                    (_keys(uid, target)[0], score),
                )
                return score
            key, favor = found
            favor = min(FAVOR_MAX, max(FAVOR_MIN, favor + score))
            self._conn.execute(
                "UPDATE favorability SET favor = ? WHERE userinfo = ?", (favor, key)
            )
            return favor

    def ranking(self, uid: int) -> list[tuple[int, int]]:
        """Everyone uid has a score with, as (member, favor), highest first."""
        me = str(uid)
        entries: list[tuple[int, int]] = []
        for key, favor in self._conn.execute("SELECT userinfo, favor FROM favorability"):
            parts = key.split("+")
            if len(parts) < 2 or me not in parts[:2]:
                continue
            other = parts[1] if parts[0] == me else parts[0]
            entries.append((int(other), favor))
        entries.sort(key=lambda entry: entry[1], reverse=True)
        return entries

    def close(self) -> None:
        self._conn.close()


class CooldownSheet:
    """Timestamps of skill use per group, member and skill."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self._conn = sqlite3.connect(path)
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS cdsheet "
                "(time INTEGER, group_id INTEGER, user_id INTEGER, mode_id INTEGER)"
            )

    def __enter__(self) -> CooldownSheet:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def record(self, gid: int, uid: int, mode: int, now: datetime) -> None:
        with self._conn:
            self._conn.execute(
                "INSERT INTO cdsheet (time, group_id, user_id, mode_id) VALUES (?, ?, ?, ?)",
                (int(now.timestamp()), gid, uid, mode),
            )

    def ready(self, gid: int, uid: int, mode: int, hours: float, now: datetime) -> bool:
        """True when the skill may be used; expired records are cleared."""
        where = "WHERE group_id = ? AND user_id = ? AND mode_id = ?"
        params = (gid, uid, mode)
        with self._conn:
            row = self._conn.execute(
                f"SELECT time FROM cdsheet {where} ORDER BY rowid LIMIT 1", params
            ).fetchone()
            if row is None:
                return True
            if (now.timestamp() - row[0]) / 3600 > hours:
                self._conn.execute(f"DELETE FROM cdsheet {where}", params)
                return True
            return False

    def close(self) -> None:
        self._conn.close()


def slice_name(name: str, measure: Callable[[str], float]) -> str:
    """Shorten a name whose drawn width would exceed the column."""
    total = 0
    last_fit = 0
    for i, ch in enumerate(name):
        total += int(measure(ch))
        if total > NAME_WIDTH_LIMIT:
            return name[: max(last_fit - 1, 0)] + ELLIPSIS
        last_fit = i
    return name