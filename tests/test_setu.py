import io
import time

import pytest
from PIL import Image

from animeapi.setu import (
    DEFAULT_IMAGE_URL,
    EMPTY_TYPE,
    NIL_FOLDER,
    NO_SUCH_TYPE,
    Pool,
    SetuError,
    default_pool,
)

SOURCE = "https://pic.example.com/large/picture.jpg"


def _image_bytes(fmt="JPEG", pixel=None):
    image = Image.new("RGB", (90, 40))
    for x in range(90):
        for y in range(40):
            value = pixel if pixel is not None else x * 255 // 89
            image.putpixel((x, y), (value, value, value))
    buf = io.BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


def _pool(tmp_path, data=None, rolimg=None, getdat=None, timeout=5.0):
    if data is not None:
        rolimg = rolimg or (lambda typ: SOURCE)
        getdat = getdat or (lambda source: data)
    return Pool(str(tmp_path / "pool"), rolimg, getdat, timeout)


def test_empty_folder_is_refused():
    with pytest.raises(SetuError, match=NIL_FOLDER):
        Pool("", None, None, 1)


def test_folder_is_created_with_trailing_slash(tmp_path):
    pool = Pool(str(tmp_path / "p"), None, None, 1)
    assert pool.folder == str(tmp_path / "p") + "/"
    assert (tmp_path / "p").is_dir()


def test_roll_fails_without_type_folder_then_stores(tmp_path):
    data = _image_bytes()
    pool = _pool(tmp_path, data)
    with pytest.raises(FileNotFoundError):
        pool.roll("a")
    (tmp_path / "pool" / "a").mkdir()
    path = pool.roll("a")
    prefix = str(tmp_path / "pool") + "/a/"
    assert path.startswith(prefix)
    name = path[len(prefix):]
    assert name.endswith(".jpeg")
    assert len(name.split(".")[0]) == 5
    with open(path, "rb") as fh:
        assert fh.read() == data
    assert pool.roll("a") == path


def test_uniform_image_name_is_pinned(tmp_path):
    pool = _pool(tmp_path, _image_bytes("PNG", pixel=128))
    (tmp_path / "pool" / "a").mkdir()
    assert pool.roll("a").endswith("/a/\u4e00\u4e00\u4e00\u4e00\u4e00.png")


def test_increasing_gradient_name_is_pinned(tmp_path):
    pool = _pool(tmp_path, _image_bytes("PNG"))
    (tmp_path / "pool" / "a").mkdir()
    assert pool.roll("a").endswith("/a/" + "\u8dff" * 4 + "\u8dc0.png")


def test_roll_without_source_picks_local(tmp_path):
    pool = Pool(str(tmp_path / "pool"), None, None, 1)
    (tmp_path / "pool" / "a").mkdir()
    (tmp_path / "pool" / "a" / "x.png").write_bytes(b"x")
    assert pool.roll("a") == pool.folder + "a/x.png"


def test_failing_source_falls_back_to_local(tmp_path):
    def broken(typ):
        raise RuntimeError("down")

    pool = Pool(str(tmp_path / "pool"), broken, lambda s: b"", 1)
    (tmp_path / "pool" / "a").mkdir()
    (tmp_path / "pool" / "a" / "x.png").write_bytes(b"x")
    assert pool.roll("a") == pool.folder + "a/x.png"


def test_failing_fetch_falls_back_to_local(tmp_path):
    def broken(source):
        raise OSError("down")

    pool = Pool(str(tmp_path / "pool"), lambda t: SOURCE, broken, 1)
    (tmp_path / "pool" / "a").mkdir()
    (tmp_path / "pool" / "a" / "x.png").write_bytes(b"x")
    assert pool.roll("a") == pool.folder + "a/x.png"


def test_slow_source_times_out_to_local(tmp_path):
    def slow(typ):
        time.sleep(1)
        return SOURCE

    pool = Pool(str(tmp_path / "pool"), slow, lambda s: b"", 0.05)
    (tmp_path / "pool" / "a").mkdir()
    (tmp_path / "pool" / "a" / "x.png").write_bytes(b"x")
    assert pool.roll("a") == pool.folder + "a/x.png"


def test_undecodable_data_falls_back_to_local(tmp_path):
    pool = _pool(tmp_path, b"not an image")
    (tmp_path / "pool" / "a").mkdir()
    with pytest.raises(SetuError, match=EMPTY_TYPE):
        pool.roll("a")


def test_roll_local_errors(tmp_path):
    pool = Pool(str(tmp_path / "pool"), None, None, 1)
    with pytest.raises(SetuError, match=NO_SUCH_TYPE):
        pool.roll_local("missing")
    (tmp_path / "pool" / "empty").mkdir()
    with pytest.raises(SetuError, match=EMPTY_TYPE):
        pool.roll_local("empty")
    (tmp_path / "pool" / "dirs" / "sub").mkdir(parents=True)
    with pytest.raises(SetuError, match=EMPTY_TYPE):
        pool.roll_local("dirs")


def test_roll_local_picks_files_only(tmp_path):
    pool = Pool(str(tmp_path / "pool"), None, None, 1)
    folder = tmp_path / "pool" / "mix"
    (folder / "sub").mkdir(parents=True)
    for name in ("a.png", "b.png"):
        (folder / name).write_bytes(b"x")
    picks = {pool.roll_local("mix") for _ in range(30)}
    assert picks <= {pool.folder + "mix/a.png", pool.folder + "mix/b.png"}
    assert picks


def test_default_pool_is_shared(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    pool = default_pool()
    assert pool is default_pool()
    assert pool.folder == "data/setupool/"
    assert pool.rolimg("cat") == DEFAULT_IMAGE_URL
    assert (tmp_path / "data" / "setupool" / "cat").is_dir()