import sqlite3

import pytest

from nekobot.phrasebooks import Grammar, PhraseDB


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "phrases.db"
    PhraseDB(path).close()
    conn = sqlite3.connect(path)
    with conn:
        conn.execute("INSERT INTO kuji (id, text) VALUES (?, ?)", (7, "第七签 大吉"))
        conn.execute("INSERT INTO tiangou (id, text) VALUES (?, ?)", (1, "今天又是想你的一天"))
        conn.execute(
            "INSERT INTO grammar (id, tag, name, pronunciation, usage, meaning, explanation, "
            "example, grammar_url) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (3, "N3", "ようになる", "yauninaru", "动词+ようになる", "变得", "说明", "例句", "u"),
        )
    conn.close()
    return path


def test_kuji(db_path):
    with PhraseDB(db_path) as db:
        assert db.kuji(7) == "第七签 大吉"
        with pytest.raises(LookupError):
            db.kuji(8)


def test_tiangou(db_path):
    with PhraseDB(db_path) as db:
        assert db.random_tiangou() == "今天又是想你的一天"


def test_tiangou_empty(tmp_path):
    with PhraseDB(tmp_path / "empty.db") as db:
        with pytest.raises(LookupError):
            db.random_tiangou()


def test_grammar_by_tag(db_path):
    with PhraseDB(db_path) as db:
        found = db.random_grammar_by_tag("3")
        assert found is not None
        assert found.id == 3
        assert found.name == "ようになる"
        assert db.random_grammar_by_tag("N1") is None


def test_grammar_by_keyword(db_path):
    with PhraseDB(db_path) as db:
        by_reading = db.random_grammar_by_keyword("yauni")
        by_name = db.random_grammar_by_keyword("になる")
        assert by_reading == by_name
        assert by_reading.grammar_url == "u"
        assert db.random_grammar_by_keyword("zzz") is None


def test_describe_layout():
    g = Grammar(5, "tag", "name", "pron", "use", "mean", "expl", "ex", "url")
    text = g.describe()
    assert text.startswith("ID:\n5\n\n标签:\ntag\n\n语法名:\nname")
    assert text.endswith("解说:\nexpl\n\n示例:\nex")
    assert "url" not in text