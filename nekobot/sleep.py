"""Sleep tracker: good-morning and good-night rankings per group."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta
from os import PathLike

_SCHEMA = """
CREATE TABLE IF NOT EXISTS sleep_manage (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    group_id INTEGER,
    user_id INTEGER,
    sleep_time TEXT
)
"""


def _stamp(moment: datetime) -> str:
    return moment.isoformat(sep=" ", timespec="microseconds")


def _strip_clock(now: datetime, hour_offset: int) -> datetime:
    return now - timedelta(hours=hour_offset, minutes=now.minute, seconds=now.second)


class SleepStore:
    """Persistent record of each member's last sleep or wake time."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self._conn = sqlite3.connect(path)
        with self._conn:
            self._conn.execute(_SCHEMA)

    def __enter__(self) -> SleepStore:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _touch(self, gid: int, uid: int, now: datetime, since: datetime) -> tuple[int, timedelta]:
        elapsed = timedelta(0)
        with self._conn:
            row = self._conn.execute(
                "SELECT sleep_time FROM sleep_manage WHERE group_id = ? AND user_id = ? "
                "ORDER BY id LIMIT 1",
                (gid, uid),
            ).fetchone()
            if row is None:
                self._conn.execute(
                    "INSERT INTO sleep_manage (group_id, user_id, sleep_time) VALUES (?, ?, ?)",
                    (gid, uid, _stamp(now)),
                )
            else:
                elapsed = now - datetime.fromisoformat(row[0])
                self._conn.execute(
                    "UPDATE sleep_manage SET sleep_time = ? WHERE group_id = ? AND user_id = ?",
                    (_stamp(now), gid, uid),
                )
            (position,) = self._conn.execute(
                "SELECT COUNT(*) FROM sleep_manage "
                "WHERE group_id = ? AND sleep_time <= ? AND sleep_time >= ?",
                (gid, _stamp(now), _stamp(since)),
            ).fetchone()
        return position, elapsed

    def sleep(self, gid: int, uid: int, now: datetime) -> tuple[int, timedelta]:
        """Record going to bed; return rank tonight and time awake."""
        if now.hour >= 21:
            since = _strip_clock(now, now.hour - 21)
        elif now.hour <= 3:
            since = _strip_clock(now, now.hour + 3)
        else:
            since = datetime.min
        return self._touch(gid, uid, now, since)

    def get_up(self, gid: int, uid: int, now: datetime) -> tuple[int, timedelta]:
        """Record waking up; return rank this morning and time asleep."""
        return self._touch(gid, uid, now, _strip_clock(now, now.hour - 6))

    def close(self) -> None:
        self._conn.close()


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def time_duration(delta: timedelta) -> tuple[int, int, int]:
    """Split a duration into whole hours, minutes and seconds."""
    us = delta // timedelta(microseconds=1)
    hour_us, minute_us, second_us = 3600 * 10**6, 60 * 10**6, 10**6
    hours = _trunc_div(us, hour_us)
    minutes = _trunc_div(us - hours * hour_us, minute_us)
    seconds = _trunc_div(us - hours * hour_us - minutes * minute_us, second_us)
    return hours, minutes, seconds


def is_morning(hour: int) -> bool:
    """Good mornings count from 6 to 12 o'clock."""
    return 6 <= hour <= 12


def is_evening(hour: int) -> bool:
    """Good nights count from 21 to 3 o'clock."""
    return hour >= 21 or hour <= 3


def _unknown(hours: int, minutes: int, seconds: int) -> bool:
    return (hours, minutes, seconds) == (0, 0, 0) or hours >= 24


def good_morning_text(position: int, duration: timedelta) -> str:
    h, m, s = time_duration(duration)
    if _unknown(h, m, s):
        return f"早安成功！你是今天第{position}个起床的"
    return f"早安成功！你的睡眠时长为{h}时{m}分{s}秒,你是今天第{position}个起床的"


def good_night_text(position: int, duration: timedelta) -> str:
    h, m, s = time_duration(duration)
    if _unknown(h, m, s):
        return f"晚安成功！你是今天第{position}个睡觉的"
    return f"晚安成功！你的清醒时长为{h}时{m}分{s}秒,你是今天第{position}个睡觉的"