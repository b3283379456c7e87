import random
from datetime import datetime, timedelta

import pytest

from nekobot.score import (
    RANK_ARRAY,
    SCORE_MAX,
    ScoreStore,
    Wallet,
    get_rank,
    hour_word,
    sign_in,
)


@pytest.fixture
def store(tmp_path):
    s = ScoreStore(tmp_path / "score.db")
    yield s
    s.close()


@pytest.mark.parametrize("index", range(len(RANK_ARRAY)))
def test_get_rank_exact_thresholds(index):
    assert get_rank(RANK_ARRAY[index]) == index


def test_get_rank_between_and_beyond():
    assert get_rank(RANK_ARRAY[1] + 1) == 1
    assert get_rank(SCORE_MAX + 1) == -1
    assert get_rank(-1) == -1


@pytest.mark.parametrize(
    "hour,word",
    [(6, "早上好"), (12, "中午好"), (14, "下午好"), (19, "晚上好"), (0, "凌晨好"), (25, "")],
)
def test_hour_word(hour, word):
    assert hour_word(hour) == word


def test_score_round_trip(store):
    assert store.score_of(7) == 0
    store.set_score(7, 42)
    assert store.score_of(7) == 42


def test_sign_in_record_round_trip(store):
    assert store.sign_in_of(3) == (0, None)
    now = datetime(2022, 11, 21, 8, 30)
    store.set_sign_in(3, 2, now)
    assert store.sign_in_of(3) == (2, now)


def test_top_scores_ordered_and_limited(store):
    for uid, score in [(1, 5), (2, 50), (3, 20)]:
        store.set_score(uid, score)
    top = store.top_scores(2)
    assert [uid for uid, _ in top] == [2, 3]
    assert top[0][1] >= top[1][1]


def test_wallet_ranking():
    wallet = Wallet()
    wallet.add(1, 10)
    wallet.add(2, 30)
    wallet.add(1, -4)
    assert wallet.balance(1) == 6
    assert wallet.ranking([1, 2, 99]) == [(2, 30), (1, 6)]


def test_first_sign_in(store):
    wallet = Wallet()
    now = datetime(2022, 11, 21, 9, 0)
    result = sign_in(store, wallet, 5, now, random.Random(1))
    assert not result.already_signed
    assert result.level == 1
    assert result.rank == 0
    assert 1 <= result.added <= 10
    assert result.balance == result.added == wallet.balance(5)
    assert result.next_rank_score == RANK_ARRAY[1]
    assert store.score_of(5) == 1


def test_second_sign_in_same_day_refused(store):
    wallet = Wallet()
    now = datetime(2022, 11, 21, 9, 0)
    first = sign_in(store, wallet, 5, now, random.Random(1))
    again = sign_in(store, wallet, 5, now + timedelta(hours=2), random.Random(2))
    assert again.already_signed
    assert again.added == 0
    assert again.balance == first.balance
    assert store.score_of(5) == 1


def test_sign_in_next_day_raises_level(store):
    wallet = Wallet()
    now = datetime(2022, 11, 21, 9, 0)
    sign_in(store, wallet, 5, now, random.Random(1))
    result = sign_in(store, wallet, 5, now + timedelta(days=1), random.Random(1))
    assert not result.already_signed
    assert result.level == 2
    assert store.score_of(5) == 2


def test_sign_in_caps_level(store):
    wallet = Wallet()
    store.set_score(8, SCORE_MAX)
    result = sign_in(store, wallet, 8, datetime(2022, 11, 21, 9, 0), random.Random(3))
    assert result.capped
    assert result.level == SCORE_MAX
    assert result.rank == len(RANK_ARRAY) - 1
    assert result.next_rank_score == SCORE_MAX
    assert result.added >= 1 + result.rank * 5
    assert result.progress_text == f"{SCORE_MAX}/{SCORE_MAX}"