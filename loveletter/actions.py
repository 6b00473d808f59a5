"""
出法与动作

Play: 玩家声明的出牌方式 (无效果 / 攻击某座位 / 猜某座位的手牌)
Action: 一张牌在规则上 "想要" 造成的效果，与当前的保护状态无关

resolve_play 是纯函数，只查表，不读取回合状态
"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional

from .cards import Card
from .errors import BadActionForCard, BadGuess, SelfTarget


class PlayType(Enum):
    """出牌方式"""
    NO_EFFECT = "no_effect"  # 无目标
    ATTACK = "attack"        # 攻击一个座位
    GUESS = "guess"          # 猜一个座位的手牌


@dataclass(frozen=True)
class Play:
    """
    玩家声明的出法

    Attributes:
        play_type: 出牌方式
        target: 目标座位 (ATTACK / GUESS)
        guess: 猜测的牌 (GUESS)
    """
    play_type: PlayType
    target: Optional[int] = None
    guess: Optional[Card] = None

    @classmethod
    def no_effect(cls) -> 'Play':
        return cls(PlayType.NO_EFFECT)

    @classmethod
    def attack(cls, target: int) -> 'Play':
        return cls(PlayType.ATTACK, target=target)

    @classmethod
    def guess_card(cls, target: int, guess: Card) -> 'Play':
        return cls(PlayType.GUESS, target=target, guess=guess)

    def __str__(self) -> str:
        if self.play_type == PlayType.ATTACK:
            return f"attack player {self.target}"
        if self.play_type == PlayType.GUESS:
            return f"guess player {self.target} has {self.guess}"
        return "no effect"


class ActionType(Enum):
    """动作类型"""
    NO_CHANGE = "no_change"                  # 什么都不发生
    PROTECT = "protect"                      # 保护自己
    SWAP_HANDS = "swap_hands"                # 与目标交换手牌
    ELIMINATE_PLAYER = "eliminate_player"    # 目标出局
    FORCE_DISCARD = "force_discard"          # 目标弃牌重摸
    FORCE_REVEAL = "force_reveal"            # 目标向发起者亮牌
    ELIMINATE_WEAKER = "eliminate_weaker"    # 比大小，小的出局
    ELIMINATE_ON_GUESS = "eliminate_on_guess"  # 猜中则目标出局


@dataclass(frozen=True)
class Action:
    """
    不可变动作表示

    Attributes:
        action_type: 动作类型
        source: 发起者座位 (SWAP_HANDS / FORCE_REVEAL / ELIMINATE_WEAKER)
        target: 受影响的座位
        guess: 猜测的牌 (ELIMINATE_ON_GUESS)
    """
    action_type: ActionType
    source: Optional[int] = None
    target: Optional[int] = None
    guess: Optional[Card] = None

    @classmethod
    def no_change(cls) -> 'Action':
        return cls(ActionType.NO_CHANGE)

    @classmethod
    def protect(cls, seat: int) -> 'Action':
        return cls(ActionType.PROTECT, target=seat)

    @classmethod
    def swap_hands(cls, source: int, target: int) -> 'Action':
        return cls(ActionType.SWAP_HANDS, source=source, target=target)

    @classmethod
    def eliminate_player(cls, seat: int) -> 'Action':
        return cls(ActionType.ELIMINATE_PLAYER, target=seat)

    @classmethod
    def force_discard(cls, seat: int) -> 'Action':
        return cls(ActionType.FORCE_DISCARD, target=seat)

    @classmethod
    def force_reveal(cls, source: int, target: int) -> 'Action':
        return cls(ActionType.FORCE_REVEAL, source=source, target=target)

    @classmethod
    def eliminate_weaker(cls, source: int, target: int) -> 'Action':
        return cls(ActionType.ELIMINATE_WEAKER, source=source, target=target)

    @classmethod
    def eliminate_on_guess(cls, target: int, guess: Card) -> 'Action':
        return cls(ActionType.ELIMINATE_ON_GUESS, target=target, guess=guess)


# 攻击型出法: 牌 -> 动作构造函数 (发起者, 目标)
ATTACK_ACTIONS = {
    Card.CLOWN: Action.force_reveal,
    Card.KNIGHT: Action.eliminate_weaker,
    Card.WIZARD: lambda source, target: Action.force_discard(target),
    Card.GENERAL: Action.swap_hands,
}

# 可以以自己为目标的牌
SELF_TARGETABLE = frozenset({Card.WIZARD})


def resolve_play(current_seat: int, played_card: Card, play: Play) -> Action:
    """
    将出牌声明转换为动作

    Args:
        current_seat: 出牌者座位
        played_card: 打出的牌
        play: 出法

    Returns:
        动作

    Raises:
        SelfTarget: 以自己为目标 (巫师除外)
        BadActionForCard: 该牌不支持这种出法
        BadGuess: 猜士兵
    """
    if play.play_type == PlayType.NO_EFFECT:
        if played_card == Card.PRIESTESS:
            return Action.protect(current_seat)
        if played_card == Card.MINISTER:
            return Action.no_change()
        if played_card == Card.PRINCESS:
            # 弃掉公主即出局
            return Action.eliminate_player(current_seat)
        raise BadActionForCard(play, played_card)

    if play.play_type == PlayType.ATTACK:
        if play.target is None:
            raise BadActionForCard(play, played_card)
        if play.target == current_seat and played_card not in SELF_TARGETABLE:
            raise SelfTarget(play.target, played_card)
        make_action = ATTACK_ACTIONS.get(played_card)
        if make_action is None:
            raise BadActionForCard(play, played_card)
        return make_action(current_seat, play.target)

    if play.play_type == PlayType.GUESS:
        if play.target is None or play.guess is None:
            raise BadActionForCard(play, played_card)
        if play.target == current_seat:
            raise SelfTarget(play.target, played_card)
        if played_card != Card.SOLDIER:
            raise BadActionForCard(play, played_card)
        if play.guess == Card.SOLDIER:
            raise BadGuess()
        return Action.eliminate_on_guess(play.target, play.guess)

    raise BadActionForCard(play, played_card)
