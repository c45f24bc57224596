import random

import pytest

from animeapi.niu.models import (
    INVALID_PROP_TYPE,
    INVALID_PROP_USAGE_SCOPE,
    NO_NIUNIU,
    NO_NIUNIU_IN_AUCTION,
    PROP_NOT_FOUND,
    AuctionInfo,
    NiuDatabase,
    NiuError,
    UserInfo,
    filter_users,
    ranking,
)


def make_user():
    return UserInfo(uid=123, length=12, weige=2)


def test_apply_prop_without_item_fails():
    user = make_user()
    with pytest.raises(NiuError, match="你还没有媚药呢,不能使用"):
        user.apply_prop("媚药")
    assert user.weige == 2
    assert user.philter == 0


def test_check_prop_unknown_prop():
    user = make_user()
    with pytest.raises(NiuError, match=PROP_NOT_FOUND):
        user.check_props("击剑", "jj")


def test_process_niuniu_action_unknown_prop():
    user = make_user()
    with pytest.raises(NiuError, match=PROP_NOT_FOUND):
        user.process_niuniu_action("11")
    assert user.length == 12


def test_check_props_scopes():
    user = make_user()
    with pytest.raises(NiuError, match=INVALID_PROP_USAGE_SCOPE):
        user.check_props("伟哥", "jj")
    with pytest.raises(NiuError, match=INVALID_PROP_USAGE_SCOPE):
        user.check_props("击剑神器", "dajiao")
    with pytest.raises(NiuError, match=INVALID_PROP_TYPE):
        user.check_props("伟哥", "other")
    assert user.check_props("伟哥", "dajiao") is None


def test_apply_prop_decrements():
    user = make_user()
    user.apply_prop("伟哥")
    assert user.weige == 1
    with pytest.raises(NiuError, match=PROP_NOT_FOUND):
        user.apply_prop("nothing")


@pytest.mark.parametrize(
    "n, price, name, amount",
    [(1, 300, "weige", 5), (2, 300, "philter", 5), (3, 500, "artifact", 2), (4, 500, "shenji", 2)],
)
def test_purchase_item(n, price, name, amount):
    user = UserInfo(uid=1)
    assert user.purchase_item(n) == price
    assert getattr(user, name) == amount


def test_purchase_invalid_item():
    user = UserInfo(uid=1)
    with pytest.raises(NiuError, match="无效的选择"):
        user.purchase_item(9)


def test_weige_grows():
    random.seed(1)
    user = make_user()
    message = user.process_niuniu_action("伟哥")
    assert user.weige == 1
    assert user.length >= 12
    assert "cm" in message


def test_philter_shrinks():
    random.seed(2)
    user = UserInfo(uid=1, length=12, philter=1)
    user.process_niuniu_action("媚药")
    assert user.philter == 0
    assert user.length <= 12


def test_plain_action_changes_bounded():
    random.seed(3)
    for _ in range(20):
        user = UserInfo(uid=1, length=12)
        message = user.process_niuniu_action("")
        assert message
        assert abs(user.length - 12) <= 4


def test_jj_with_shenji():
    random.seed(4)
    me = UserInfo(uid=1, length=20, shenji=1)
    other = UserInfo(uid=2, length=10)
    message = me.process_jj_action(other, "击剑神稽")
    assert me.shenji == 0
    assert me.length <= 20
    assert other.length >= 10
    assert message


def test_jj_with_artifact():
    random.seed(5)
    me = UserInfo(uid=1, length=20, artifact=1)
    other = UserInfo(uid=2, length=10)
    me.process_jj_action(other, "击剑神器")
    assert me.artifact == 0
    assert me.length >= 20
    assert other.length <= 10


def test_jj_with_dajiao_prop_rejected():
    me = UserInfo(uid=1, length=20, weige=1)
    other = UserInfo(uid=2, length=10)
    with pytest.raises(NiuError, match=INVALID_PROP_USAGE_SCOPE):
        me.process_jj_action(other, "伟哥")
    assert me.weige == 1


def test_filter_and_ranking():
    users = [UserInfo(uid=1, length=5), UserInfo(uid=2, length=-3),
             UserInfo(uid=3, length=9), UserInfo(uid=4, length=0)]
    assert [u.uid for u in filter_users(users, True)] == [1, 3]
    assert [u.uid for u in filter_users(users, False)] == [2, 4]
    assert ranking(users, 5, 1) == 2
    assert ranking(users, 9, 3) == 1
    assert ranking(users, -3, 2) == 1
    assert ranking(users, 5, 99) == -1


def test_database_round_trip():
    db = NiuDatabase(":memory:")
    with pytest.raises(NiuError, match=NO_NIUNIU):
        db.get(1, 5)
    user = UserInfo(uid=5, length=7.5, weige=3)
    db.set(1, user)
    assert db.get(1, 5) == user
    user.length = 8.0
    db.set(1, user)
    assert db.get(1, 5).length == 8.0
    db.set(1, UserInfo(uid=6, length=1.0))
    assert [u.uid for u in db.all_of_group(1)] == [5, 6]
    db.delete(1, 5)
    with pytest.raises(NiuError):
        db.get(1, 5)
    with pytest.raises(NiuError):
        db.all_of_group(2)


def test_database_in_file(tmp_path):
    path = tmp_path / "sub" / "niu.db"
    db = NiuDatabase(path)
    db.set(3, UserInfo(uid=1, length=2.0))
    assert NiuDatabase(path).get(3, 1).length == 2.0


def test_auctions():
    db = NiuDatabase(":memory:")
    with pytest.raises(NiuError, match=NO_NIUNIU_IN_AUCTION):
        db.all_auctions(1)
    first = AuctionInfo(user_id=1, length=20.0, money=400)
    second = AuctionInfo(user_id=2, length=30.0, money=600)
    db.set_auction(1, first)
    db.set_auction(1, second)
    assert first.id != second.id
    assert db.all_auctions(1) == [first, second]
    db.delete_auction(1, first.id)
    assert db.all_auctions(1) == [second]


def test_new_length_range():
    db = NiuDatabase(":memory:")
    for _ in range(50):
        value = db.new_length()
        assert 1 <= value < 10