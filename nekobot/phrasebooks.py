"""Read-only phrase databases: fortune slips, lovesick diaries, Japanese grammar."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from os import PathLike

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kuji (
    id INTEGER PRIMARY KEY,
    text TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS tiangou (
    id INTEGER PRIMARY KEY,
    text TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS grammar (
    id INTEGER PRIMARY KEY,
    tag TEXT NOT NULL DEFAULT '',
    name TEXT NOT NULL DEFAULT '',
    pronunciation TEXT NOT NULL DEFAULT '',
    usage TEXT NOT NULL DEFAULT '',
    meaning TEXT NOT NULL DEFAULT '',
    explanation TEXT NOT NULL DEFAULT '',
    example TEXT NOT NULL DEFAULT '',
    grammar_url TEXT NOT NULL DEFAULT ''
);
"""

_GRAMMAR_COLUMNS = (
    "id, tag, name, pronunciation, usage, meaning, explanation, example, grammar_url"
)


@dataclass(frozen=True)
class Grammar:
    """One Japanese grammar point."""

    id: int
    tag: str
    name: str
    pronunciation: str
    usage: str
    meaning: str
    explanation: str
    example: str
    grammar_url: str = ""

    def describe(self) -> str:
        return (
            f"ID:\n{self.id}\n\n标签:\n{self.tag}\n\n语法名:\n{self.name}\n\n"
            f"发音:\n{self.pronunciation}\n\n用法:\n{self.usage}\n\n"
            f"意思:\n{self.meaning}\n\n解说:\n{self.explanation}\n\n示例:\n{self.example}"
        )


class PhraseDB:
    """Random lookups in a SQLite file of phrase tables."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self._conn = sqlite3.connect(path)
        with self._conn:
            self._conn.executescript(_SCHEMA)

    def __enter__(self) -> PhraseDB:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def kuji(self, number: int) -> str:
        """Text of the fortune slip with the given number."""
        row = self._conn.execute("SELECT text FROM kuji WHERE id = ?", (number,)).fetchone()
        if row is None:
            raise LookupError(f"no fortune slip numbered {number}")
        return row[0]

    def _random_grammar(self, where: str, params: tuple[str, ...]) -> Grammar | None:
        row = self._conn.execute(
            f"SELECT {_GRAMMAR_COLUMNS} FROM grammar WHERE {where} ORDER BY RANDOM() LIMIT 1",
            params,
        ).fetchone()
        return Grammar(*row) if row is not None else None

    def random_grammar_by_tag(self, tag: str) -> Grammar | None:
        """A random grammar point whose tag contains the text, or None."""
        return self._random_grammar("tag LIKE ?", (f"%{tag}%",))

    def random_grammar_by_keyword(self, keyword: str) -> Grammar | None:
        """A random grammar point whose name or reading contains the text, or None."""
        pattern = f"%{keyword}%"
        return self._random_grammar("(name LIKE ? OR pronunciation LIKE ?)", (pattern, pattern))

    def random_tiangou(self) -> str:
        """A random diary entry."""
        row = self._conn.execute(
            "SELECT text FROM tiangou ORDER BY RANDOM() LIMIT 1"
        ).fetchone()
        if row is None:
            raise LookupError("the diary table is empty")
        return row[0]

    def close(self) -> None:
        self._conn.close()