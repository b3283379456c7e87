import pytest

from nekobot.listing import (
    BAR_BACK,
    BAR_FILL,
    BLACK,
    render_favor_ranking,
    render_roster,
)


def _rows(n):
    return [(f"user{i}", str(i + 1), f"wife{i}", str(i + 100)) for i in range(n)]


def test_roster_width_and_minimum_height():
    one = render_roster(_rows(1))
    ten = render_roster(_rows(10))
    assert one.size[0] == 1500
    assert one.size == ten.size


def test_roster_grows_past_ten_rows():
    ten = render_roster(_rows(10))
    twelve = render_roster(_rows(12))
    assert twelve.size[1] > ten.size[1]
    assert twelve.size[0] == ten.size[0]


def test_roster_draws_text():
    image = render_roster([("群友", "1", "老婆", "2")])
    assert BLACK in set(image.getdata())


def test_roster_empty_is_rejected():
    with pytest.raises(ValueError):
        render_roster([])


def test_ranking_draws_filled_bar():
    image = render_favor_ranking([(2, 40)], {2: "Bob"})
    colours = set(image.getdata())
    assert BAR_FILL in colours
    assert BAR_BACK in colours
    assert image.size[0] == 1150


def test_ranking_zero_favor_has_no_fill():
    image = render_favor_ranking([(2, 0)], {2: "Bob"})
    assert BAR_FILL not in set(image.getdata())


def test_ranking_skips_member_zero():
    image = render_favor_ranking([(0, 40)], {})
    assert BAR_FILL not in set(image.getdata())


def test_ranking_height_capped_at_ten_entries():
    ten = render_favor_ranking([(i, 10) for i in range(1, 11)], {})
    twelve = render_favor_ranking([(i, 10) for i in range(1, 13)], {})
    three = render_favor_ranking([(i, 10) for i in range(1, 4)], {})
    assert ten.size == twelve.size
    assert three.size[1] < ten.size[1]