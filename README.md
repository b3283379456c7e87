# nekobot

Pastime logic for a group chat bot, as a plain library. You pass in group ids,
user ids, the current time and a `random.Random`. You get back reply texts,
numbers or images. Where a request cannot be met, the functions raise
`ValueError` or `LookupError` with the message to show.

## Install

```
pip install nekobot
```

To run the test suite, install the `test` extra and run `pytest`:

```
pip install "nekobot[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `nekobot.nsfw` | `Picture` holds an image classifier's scores. `judge` turns them into a verdict. `autojudge` returns a comment only when a picture is flagged, and `None` otherwise. |
| `nekobot.cutter` | `cut_too_long` cuts program output after 30 line breaks or about 1000 characters and appends a truncation mark. |
| `nekobot.sleep` | `SleepStore` records good nights and good mornings per group and returns the member's place in the ranking and the time since the last record. `is_morning` and `is_evening` check the allowed hours. `time_duration`, `good_morning_text` and `good_night_text` build the replies. |
| `nekobot.favor` | `FavorBook` keeps a symmetric affection score for each pair of members, clamped to 0–100 on change. `CooldownSheet` records skill use and says when a skill is ready again. `slice_name` shortens names that would be drawn too wide. |
| `nekobot.listing` | `render_roster` draws a list of couples and `render_favor_ranking` draws up to ten affection bars, both as Pillow images. |
| `nekobot.score` | Daily sign-in. `ScoreStore` keeps experience and sign-in counts, `Wallet` keeps coin balances, and `sign_in` returns a `SignInResult`. `get_rank` and `hour_word` are helpers. |
| `nekobot.tarot` | `load_deck` builds a `TarotDeck` from card and spread JSON. The deck can `draw` cards, `interpret` a card, lay out a `spread` and give a `card_list_text`. `parse_draw_count` reads counts such as `"3张"`. |
| `nekobot.phrasebooks` | `PhraseDB` looks up fortune slips (`kuji`), random diary lines (`random_tiangou`) and Japanese grammar notes (`random_grammar_by_tag`, `random_grammar_by_keyword`, returning `Grammar`). |

Every store takes a path to an SQLite file. Use `":memory:"` for a store that
only needs to last for the session. Each store can be closed with `close()` or
used as a context manager.

## Examples

Signing in:

```python
import random
from datetime import datetime

from nekobot.score import ScoreStore, Wallet, sign_in

with ScoreStore(":memory:") as store:
    wallet = Wallet()
    result = sign_in(store, wallet, 42, datetime.now(), random.Random())
    print(result.level, result.added, result.balance, result.progress_text)
```

Drawing tarot cards:

```python
import random

from nekobot.tarot import load_deck

cards = {str(i): {"name": f"card {i}", "info": {"description": "up", "reverseDescription": "down", "imgUrl": f"{i}.png"}} for i in range(77)}
formations = {"圣三角": {"cards_num": 3, "is_cut": False, "represent": [["过去", "现在", "未来"]]}}
deck = load_deck(cards, formations)

for drawn in deck.draw(3, "塔罗牌", random.Random()):
    print(drawn.text)

cards_out, reading = deck.spread("混合", "圣三角", random.Random())
print(reading)
```

Affection and cooldowns:

```python
from datetime import datetime

from nekobot.favor import FavorBook, CooldownSheet

with FavorBook(":memory:") as favors, CooldownSheet(":memory:") as cooldowns:
    favors.change(1, 2, 5)
    print(favors.get(2, 1))        # 5, the score is shared by both members
    now = datetime.now()
    cooldowns.record(100, 1, 5, now)
    print(cooldowns.ready(100, 1, 5, 12, now))  # False until 12 hours have passed
```

## What the package does not do

- It has no chat connection, command parser or bot process, and no command to run. The caller matches messages and sends the replies.
- It downloads nothing. Card images, fonts, background pictures and the phrase databases must be supplied by the caller. `nekobot.listing` uses Pillow's default font unless it is given a font file.
- `Wallet` keeps balances in memory only.
- It has no marriage registry and no rules for a marriage game. `FavorBook`, `CooldownSheet`, `slice_name` and the images in `nekobot.listing` are the parts it provides for such a game.