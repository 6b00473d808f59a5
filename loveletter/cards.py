"""
牌的定义与牌组

情书 (Love Letter) 使用 16 张牌，共 8 种，按强度从低到高:
- 士兵 5 张, 小丑 2 张, 骑士 2 张, 女祭司 2 张, 巫师 2 张
- 将军、大臣、公主 各 1 张

牌堆是一个元组，总是从末尾摸牌 (包括开局烧掉的那张)
"""
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from collections import Counter
import numpy as np

from .errors import WrongCards, WrongNumber


class Card(IntEnum):
    """牌面值 (同时也是强度，用于比大小)"""
    SOLDIER = 1
    CLOWN = 2
    KNIGHT = 3
    PRIESTESS = 4
    WIZARD = 5
    GENERAL = 6
    MINISTER = 7
    PRINCESS = 8

    def __str__(self) -> str:
        return CARD_NAMES[self]


# 牌面值到显示名称的映射
CARD_NAMES: Dict[int, str] = {
    1: "Soldier",
    2: "Clown",
    3: "Knight",
    4: "Priestess",
    5: "Wizard",
    6: "General",
    7: "Minister",
    8: "Princess",
}

# 显示名称 (小写) 到牌的映射
NAME_TO_CARD: Dict[str, int] = {v.lower(): k for k, v in CARD_NAMES.items()}

# 每种牌的数量
CARD_COUNTS: Dict[Card, int] = {
    Card.SOLDIER: 5,
    Card.CLOWN: 2,
    Card.KNIGHT: 2,
    Card.PRIESTESS: 2,
    Card.WIZARD: 2,
    Card.GENERAL: 1,
    Card.MINISTER: 1,
    Card.PRINCESS: 1,
}

# 完整牌组 (16 张)
FULL_DECK: Tuple[Card, ...] = (
    Card.SOLDIER, Card.SOLDIER, Card.SOLDIER, Card.SOLDIER, Card.SOLDIER,
    Card.CLOWN, Card.CLOWN,
    Card.KNIGHT, Card.KNIGHT,
    Card.PRIESTESS, Card.PRIESTESS,
    Card.WIZARD, Card.WIZARD,
    Card.GENERAL,
    Card.MINISTER,
    Card.PRINCESS,
)

CARDS_IN_DECK = len(FULL_DECK)

# 洗牌函数: 接收一组牌，返回它的一个排列 (不得修改输入)
Shuffler = Callable[[Sequence[Card]], List[Card]]


def parse_card(text: str) -> Card:
    """
    将字符串解析为牌

    Args:
        text: 牌名 (不区分大小写，如 "wizard") 或牌面值 (如 "5")

    Returns:
        对应的牌

    Raises:
        ValueError: 无法识别
    """
    s = text.strip().lower()
    if s.isdigit():
        return Card(int(s))
    if s in NAME_TO_CARD:
        return Card(NAME_TO_CARD[s])
    raise ValueError(f"Unknown card: {text!r}")


def validate(cards: Sequence[Card]) -> Tuple[Card, ...]:
    """
    校验一组牌是否恰好是一副完整的牌

    Args:
        cards: 牌列表 (任意顺序)

    Returns:
        牌的元组 (保持原顺序)

    Raises:
        WrongNumber: 牌数不是 16
        WrongCards: 牌的组成不对
    """
    if len(cards) != CARDS_IN_DECK:
        raise WrongNumber(len(cards))
    if Counter(cards) != Counter(FULL_DECK):
        raise WrongCards()
    return tuple(Card(c) for c in cards)


def validate_subset(cards: Sequence[Card]) -> bool:
    """
    检查一组牌能否从完整牌组中逐张取出

    用于校验残局 (手牌 + 剩余牌堆)，不要求 16 张齐全，
    但任何一种牌都不能超过完整牌组中的数量
    """
    remaining = Counter(FULL_DECK)
    for card in cards:
        if remaining[card] <= 0:
            return False
        remaining[card] -= 1
    return True


def make_shuffler(seed: Optional[int] = None) -> Shuffler:
    """
    创建基于 numpy 随机数生成器的洗牌函数

    Args:
        seed: 随机种子，相同种子产生相同的洗牌序列

    Returns:
        洗牌函数
    """
    rng = np.random.default_rng(seed)

    def _shuffle(cards: Sequence[Card]) -> List[Card]:
        order = rng.permutation(len(cards))
        return [cards[i] for i in order]

    return _shuffle


def shuffle(cards: Sequence[Card], shuffler: Optional[Shuffler] = None) -> Tuple[Card, ...]:
    """
    返回洗过的新牌组，不修改输入

    Args:
        cards: 牌列表
        shuffler: 洗牌函数，None 则使用无种子的 numpy 生成器

    Returns:
        洗牌后的元组
    """
    if shuffler is None:
        shuffler = make_shuffler()
    shuffled = tuple(shuffler(tuple(cards)))
    if Counter(shuffled) != Counter(cards):
        raise ValueError("Shuffler must return a permutation of its input")
    return shuffled


def new_deck(shuffler: Optional[Shuffler] = None) -> Tuple[Card, ...]:
    """创建一副洗好的完整牌组"""
    return shuffle(FULL_DECK, shuffler)


def draw(stack: Sequence[Card]) -> Tuple[Tuple[Card, ...], Optional[Card]]:
    """
    从牌堆末尾摸一张牌

    Args:
        stack: 牌堆

    Returns:
        (剩余牌堆, 摸到的牌)，牌堆为空时摸到的牌为 None
    """
    if not stack:
        return tuple(stack), None
    return tuple(stack[:-1]), stack[-1]


def cards_to_str(cards: Sequence[Card]) -> str:
    """将牌列表转换为可读字符串，如 "Soldier, Wizard" """
    return ", ".join(CARD_NAMES[c] for c in cards)
