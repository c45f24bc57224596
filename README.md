# animeapi

Small clients and helpers for chat bots: AI chat replies, a text-to-speech
lookup, Bilibili queries, NetEase music search, online code running, a local
random-image pool, emoji transcription, and the "niuniu" chat-group game with
its own coin wallet.

Every client is a plain function or class. Network failures and service
errors are raised as exceptions.

## Requirements

Python 3.10 or newer. The package depends on `requests` and `pillow`.

## Modules at a glance

| Module | What it does |
| --- | --- |
| `animeapi.aireply` | Chat reply services sharing the `AIReply` interface in `aireply.base`: `ChatGPT`, `LolimiAi`, `QYK`, `XiaoAi` |
| `animeapi.tts.base` | The `TTS` interface (`speak(key, text)` and `str()`) |
| `animeapi.tts.lolimi` | `tts(name, text)` returns the URL of synthesized audio; `SOUND_LIST` names the speakers |
| `animeapi.bilibili.api` | User search, member cards, dynamics, articles, live rooms, videos, AI video summaries, medal walls, guards |
| `animeapi.bilibili.types` | Endpoint templates, record classes (`Medal`, `SearchResult`, `VtbDetail`, `GuardUser`) and `CookieConfig` |
| `animeapi.bilibili.wbi` | WBI request signing (`sign_url`, `wbi_sign`) |
| `animeapi.bilibili.util` | `human_num` and `get_real_url` |
| `animeapi.setu` | A random-image `Pool` backed by a local folder |
| `animeapi.neteasemusic` | Song and lyric search and download |
| `animeapi.runoob` | Run code snippets online with `RunOOB` |
| `animeapi.emozi` | Encode Chinese text into emoji transcriptions and back |
| `animeapi.huggingface` | `push` and `status` calls for queue-based Spaces |
| `animeapi.novelai` | Image generation with `NovalAI` and `Payload` |
| `animeapi.nsfw` | `classify(url)` returning a `Picture` of scores |
| `animeapi.tl` | `translate(target)` |
| `animeapi.wallet` | A per-user coin wallet stored in SQLite |
| `animeapi.niu` | The niuniu game: `models` for players, props and storage, `game` for the commands, `utils` for the random rules |

## Examples

### Formatting counts

```python
from animeapi.bilibili.util import human_num

human_num(9999)     # "9999"
human_num(123456)   # "12.35万"
```

### Bilibili lookups

Card queries (`get_video_info`, `get_article_info`, `get_live_room_info`,
`get_member_card`, `get_dynamic_detail`) return the card as a `dict`.
Functions that take a `CookieConfig` send its cookie; pass `None` to send none.

```python
from animeapi.bilibili.api import get_video_info, get_medal_wall, APINeedCookieError
from animeapi.bilibili.types import CookieConfig, sort_medals

card = get_video_info("BV1xx411c7mD")   # an av number works too

config = CookieConfig("config.json")
config.set("placeholder")               # written to config.json
try:
    medals = sort_medals(get_medal_wall(config, "12345"))
except APINeedCookieError:
    print("log in first")
```

`CookieConfig.load` raises `FileNotFoundError` when no cookie is held and the
file does not exist.

### Wallet

The wallet keeps its data in SQLite. Unless told otherwise it uses
`data/wallet/wallet.db`; point it at a storage of your choice first:

```python
from animeapi import wallet

wallet.use_storage(wallet.Storage("wallet.db"))
wallet.set_wallet_name("coins")

wallet.insert_wallet_of(1001, 200)
wallet.get_wallet_of(1001)                       # 200
wallet.get_group_wallet_of(True, 1001, 1002)     # richest first
```

A wallet never goes below zero: taking more than it holds leaves it empty.
`Storage(":memory:")` keeps everything in memory.

### The niuniu game

The game stores players in `data/niuniu/niuniu.db` unless given a database.

```python
from animeapi import wallet
from animeapi.niu import game
from animeapi.niu.models import NiuDatabase, NiuError

wallet.use_storage(wallet.Storage("wallet.db"))
game.use_database(NiuDatabase("niuniu.db"))

group, alice, bob = 1, 1001, 1002
print(game.register(group, alice))
print(game.register(group, bob))

print(game.hit_glue(group, alice, ""))
message, bob_length = game.jj(group, alice, bob, "")
print(game.view(group, alice, "Alice"))
print(game.bag(group, alice))

try:
    game.register(group, alice)
except NiuError as err:
    print(err)   # already registered
```

Items bought with `game.store(gid, uid, n)` (1 to 4) are spent by passing
their name as the `prop` argument: 伟哥 or 媚药 to `game.hit_glue`,
击剑神器 or 击剑神稽 to `game.jj`. `game.sell` turns a long enough niuniu
into coins and puts it up for auction; `game.show_auction` and `game.auction`
list and buy them. Every refused action raises `NiuError` with a message
meant for the player.

### Running code online

```python
from animeapi.runoob import RunOOB, TEMPLATES

runner = RunOOB("token")
output = runner.run(TEMPLATES["python"], "python", "")
```

An unknown language raises `ValueError`; a compiler error or a bad HTTP
status raises `RuntimeError`.

### Music

```python
from animeapi.neteasemusic import search_music, download_lrc

songs = search_music("晴天", 5)          # {"title - artist": song_id, ...}
for title, song_id in songs.items():
    download_lrc(song_id, title, "music")  # writes music/<title>.lrc
```

`download_music` saves `<path>/<name>.mp3`; files already present are left
alone.

### Emoji transcription

```python
from animeapi.emozi import User, anonymous, EmoziError

user = anonymous()
encoded, choices = user.marshal(False, "你好，世界！")
decoded = user.unmarshal(False, encoded)

password = "password"
member = User("name", password)
member.login()
```

Anonymous use is rate limited by the service. A refused request raises
`EmoziError`.

### Random images

```python
from animeapi.setu import Pool, SetuError

pool = Pool("pool", None, None, 60)
try:
    path = pool.roll_local("landscape")
except SetuError as err:
    print(err)   # no such type, or the folder is empty
```

With a `rolimg` callable that names an image and a `getdat` callable that
fetches its bytes, `roll` downloads a fresh GIF, JPEG, PNG or WebP image into
the pool, names it after its difference hash, and falls back to a stored one
when anything fails or takes longer than the timeout in seconds.
`default_pool()` returns a shared pool under `data/setupool`.

### Chat replies

Every reply class follows `AIReply`: `talk(uid, msg, nickname)` returns a
reply that may carry CQ codes, `talk_plain(uid, msg, nickname)` returns plain
text, and `str(bot)` names the service. Extra positional arguments to the
constructors are banned words; a reply containing one is replaced by an error
message. Network failures come back as a reply starting with `ERROR:`.

```python
from animeapi.aireply.lolimi import LolimiAi, C4O_URL, C4O_BOT_NAME

bot = LolimiAi(C4O_URL, C4O_BOT_NAME, "placeholder", False, 10, "banned")
print(bot.talk_plain(0, "你好", "Alice"))
```

A `memory_limit` of 1 or more makes `LolimiAi` send the recent conversation
with every message.

## What the package does not do

- It has no Pixiv lookups, rankings or downloads, and no reverse image search.
- `animeapi.tts.base.TTS` has no implementation here: `animeapi.tts.lolimi.tts`
  only returns an audio URL and saves nothing.
- There is no command-line program and no server; everything is called from
  Python.

## Tests

The test suite uses `pytest` and `responses`, installed through the `test`
extra. No test talks to a real service.