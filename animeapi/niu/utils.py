"""Random rules of the niuniu game."""

from __future__ import annotations

import math
import random

from animeapi.wallet import get_wallet_name


def _log2(x):
    if x == 0:
        return -math.inf
    return math.log2(x)


def random_choice(options):
    """Return one of ``options`` at random."""
    return random.choice(options)


def profit(length):
    """Return ``(money, sold, message)`` for selling a niuniu of ``length``."""
    if 0 < length <= 15:
        return 0, False, random_choice([
            "你的牛牛太小啦",
            "这么小的牛牛就要肩负起这么大的责任吗？快去打胶吧！",
        ])
    if length > 15:
        money = int(length * 10)
        name = get_wallet_name()
        return money, True, random_choice([
            f"你的牛牛已经离你而去了,你赚取了{money}个{name}",
            f"啊！你的牛☞已经没啦🤣,为了这点钱就出卖你的牛牛可真不值,你赚取了{money}个{name}",
        ])
    if -15 <= length <= 0:
        return 0, False, random_choice([
            "你的牛牛太小啦",
            "这么小的牛牛就要肩负起这么大的责任吗？快去找别人玩吧！",
        ])
    if length < -15:
        money = int(abs(length * 10))
        name = get_wallet_name()
        return money, True, random_choice([
            f"此世做了女孩子来世来当男孩子(bushi),你赚取了{money}个{name}",
            f"呜呜呜,不哭不哭当女孩子不委屈的,你赚取了{money}个{name}",
        ])
    return 0, False, ""


def hit_glue_niuniu(length):
    """Play one round without props; return ``(message, new_length)``."""
    probability = random.randrange(101)
    reduce = abs(hit_glue(length))
    if probability <= 40:
        length += reduce
        return random_choice([
            f"你嘿咻嘿咻一下，促进了牛牛发育，牛牛增加{reduce:.2f}cm了呢！",
            f"你打了个舒服痛快的🦶呐，牛牛增加了{reduce:.2f}cm呢！",
        ]), length
    if probability <= 60:
        return random_choice([
            "你打了个🦶，但是什么变化也没有，好奇怪捏~",
            "你的牛牛刚开始变长了，可过了一会又回来了，什么变化也没有，好奇怪捏~",
        ]), length
    length -= reduce
    if length < 0:
        return random_choice([
            f"哦吼！？看来你的牛牛凹进去了{reduce:.2f}cm呢！",
            f"你突发恶疾！你的牛牛凹进去了{reduce:.2f}cm！",
            f"笑死，你因为打🦶过度导致牛牛凹进去了{reduce:.2f}cm！🤣🤣🤣",
        ]), length
    return random_choice([
        f"阿哦，你过度打🦶，牛牛缩短{reduce:.2f}cm了呢！",
        f"你的牛牛变长了很多，你很激动地继续打🦶，然后牛牛缩短了{reduce:.2f}cm呢！",
        f"小打怡情，大打伤身，强打灰飞烟灭！你过度打🦶，牛牛缩短了{reduce:.2f}cm捏！",
    ]), length


def generate_random_string(length):
    """Return a comment matching ``length``."""
    if length <= -100:
        return "wtf？你已经进化成魅魔了！魅魔在击剑时有20%的几率消耗自身长度吞噬对方牛牛呢。"
    if length <= -50:
        return "嗯....好像已经穿过了身体吧..从另一面来看也可以算是凸出来的吧?"
    if length <= -25:
        return random_choice([
            "这名女生，你的身体很健康哦！",
            "WOW,真的凹进去了好多呢！",
            "你已经是我们女孩子的一员啦！",
        ])
    if length <= -10:
        return random_choice([
            "你已经是一名女生了呢，",
            "从女生的角度来说，你发育良好(,",
            "你醒啦？你已经是一名女孩子啦！",
            "唔...可以放进去一根手指了都...",
        ])
    if length <= 0:
        return random_choice([
            "安了安了，不要伤心嘛，做女生有什么不好的啊。",
            "不哭不哭，摸摸头，虽然很难再长出来，但是请不要伤心啦啊！",
            "加油加油！我看好你哦！",
            "你醒啦？你现在已经是一名女孩子啦！",
        ])
    if length <= 10:
        return random_choice([
            "你行不行啊？细狗！",
            "虽然短，但是小小的也很可爱呢。",
            "像一只蚕宝宝。",
            "长大了。",
        ])
    if length <= 25:
        return random_choice([
            "唔...没话说",
            "已经很长了呢！",
        ])
    if length <= 50:
        return random_choice([
            "话说这种真的有可能吗？",
            "厚礼谢！",
        ])
    if length <= 100:
        return random_choice([
            "已经突破天际了嘛...",
            "唔...这玩意应该不会变得比我高吧？",
            "你这个长度会死人的...！",
            "你马上要进化成牛头人了！！",
            "你是什么怪物，不要过来啊！！",
        ])
    return "惊世骇俗！你已经进化成牛头人了！牛头人在击剑时有20%的几率消耗自身长度吞噬对方牛牛呢。"


def fencing(my_length, oppo_length):
    """Fight; return ``(message, my_new_length, oppo_new_length)``."""
    devour_limit = 0.27
    probability = random.randint(1, 100)
    lucky = 10 < probability <= 20

    if oppo_length <= -100 and my_length > 0 and lucky:
        change = hit_glue(oppo_length) + random.random() * _log2(abs(0.5 * (my_length + oppo_length)))
        my_length = (my_length + change) * 0.85
        return f"对方身为魅魔诱惑了你，你同化成魅魔！当前长度{-my_length:.2f}cm！", -my_length, oppo_length

    if oppo_length >= 100 and my_length > 0 and lucky:
        change = min(abs(devour_limit * my_length), abs(1.5 * my_length))
        my_length = (my_length + change) * 0.85
        return f"对方以牛头人的荣誉摧毁了你的牛牛！当前长度{my_length:.2f}cm！", my_length, oppo_length

    if my_length <= -100 and oppo_length > 0 and lucky:
        change = hit_glue(my_length + oppo_length) + random.random() * _log2(
            abs(0.5 * (my_length + oppo_length))
        )
        oppo_length -= change
        my_length = (my_length - change) * 0.85
        return f"你身为魅魔诱惑了对方，吞噬了对方部分长度！当前长度{my_length:.2f}cm！", my_length, oppo_length

    if my_length >= 100 and oppo_length > 0 and lucky:
        my_length = (my_length - oppo_length) * 0.85
        oppo_length = 0.01
        return f"你以牛头人的荣誉摧毁了对方的牛牛！当前长度{my_length:.2f}cm！", my_length, oppo_length

    return determine_result_by_skill(my_length, oppo_length)


def determine_result_by_skill(my_length, oppo_length):
    """Decide a fight by the win probability of the two lengths."""
    probability = random.randint(1, 100)
    win_probability = calculate_win_probability(my_length, oppo_length) * 100
    return apply_skill(my_length, oppo_length, probability <= win_probability)


def calculate_win_probability(height_a, height_b):
    """Return the chance that the first length wins, never below 0.01."""
    p_a = 0.9
    high = max(height_a, height_b)
    low = min(height_a, height_b)
    if low == 0:
        ratio = math.copysign(math.inf, high) if high else math.nan
    else:
        ratio = high / low
    reduction = p_a * (0.1 * (ratio - 1))
    adjusted = p_a - reduction
    if math.isnan(adjusted):
        return math.nan
    return max(adjusted, 0.01)


def apply_skill(my_length, oppo_length, increase):
    """Move length between the fighters; the winner is mine when ``increase``."""
    reduce = fence(oppo_length)
    if reduce == 0:
        reduce = random.random() + float(random.randrange(3))
    if increase:
        my_length += reduce
        oppo_length -= 0.8 * reduce
        if my_length < 0:
            return f"哦吼！？你的牛牛在长大欸！长大了{reduce:.2f}cm！", my_length, oppo_length
        return (
            f"你以绝对的长度让对方屈服了呢！你的长度增加{reduce:.2f}cm，当前长度{my_length:.2f}cm！",
            my_length,
            oppo_length,
        )
    my_length -= reduce
    oppo_length += 0.8 * reduce
    if my_length < 0:
        return f"哦吼！？看来你的牛牛因为击剑而凹进去了呢🤣🤣🤣！凹进去了{reduce:.2f}cm！", my_length, oppo_length
    return (
        f"对方以绝对的长度让你屈服了呢！你的长度减少{reduce:.2f}cm，当前长度{my_length:.2f}cm！",
        my_length,
        oppo_length,
    )


def fence(rd):
    """Return a whole number of centimetres lost in a fight against ``rd``."""
    rd = abs(rd)
    if rd == 0:
        rd = 1
    r = hit_glue(rd) * 2 + random.random() * math.log2(rd)
    return float(int(r * random.random()))


def hit_glue(length):
    """Return a random change scaled to the size of ``length``."""
    if length == 0:
        length = 0.1
    length = abs(length)
    if 1 < length <= 10:
        return random.random() * math.log2(length * 2)
    if 10 < length <= 100:
        return random.random() * math.log2(length * 1.5)
    if 100 < length <= 1000:
        return random.random() * (math.log10(length * 1.5) * 2)
    if length > 1000:
        return random.random() * (math.log10(length) * 2)
    return random.random()