"""
错误类型

所有错误都可恢复，由调用方处理:
- DeckError: 牌组校验失败
- PlayerError: 玩家状态转换失败 (仅内部使用，由 Round 转换为 PlayError)
- RoundError: 回合构造失败
- PlayError: 单次出牌非法，回合状态不变，可重新提示
"""
from typing import Tuple


class LoveLetterError(Exception):
    """所有规则引擎错误的基类"""
    pass


# ============================================================================
# 牌组
# ============================================================================


class DeckError(LoveLetterError):
    """牌组不合法"""
    pass


class WrongNumber(DeckError):
    """牌数不是 16"""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Deck must have 16 cards, got {count}")


class WrongCards(DeckError):
    """牌数正确但牌的组成不对"""

    def __init__(self):
        super().__init__("Cards do not match the deck composition")


# ============================================================================
# 玩家
# ============================================================================


class PlayerError(LoveLetterError):
    pass


class Inactive(PlayerError):
    """玩家已出局"""

    def __init__(self):
        super().__init__("Player is no longer active")


class NoSuchCard(PlayerError):
    """打出的牌不在手中"""

    def __init__(self, chosen, hand: Tuple):
        self.chosen = chosen
        self.hand = hand
        super().__init__(f"{chosen!r} is not one of {hand!r}")


# ============================================================================
# 回合构造
# ============================================================================


class RoundError(LoveLetterError):
    pass


class InvalidPlayers(RoundError):
    """玩家数不在 2-4 之间"""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Invalid number of players: {count}")


class BadDeck(RoundError):
    """手牌与牌堆不能由一副完整的牌组成"""

    def __init__(self):
        super().__init__("Cards do not form a valid (sub-)deck")


class RoundInProgress(RoundError):
    """回合尚未结束时查询结果"""

    def __init__(self):
        super().__init__("Round is still in progress")


# ============================================================================
# 出牌
# ============================================================================


class PlayError(LoveLetterError):
    """
    单次出牌非法

    抛出时回合不会推进，调用方可以对同一座位重新提示
    """
    pass


class InvalidPlayer(PlayError):
    """目标座位不存在"""

    def __init__(self, seat: int):
        self.seat = seat
        super().__init__(f"No such player: {seat}")


class InactivePlayer(PlayError):
    """目标座位已出局"""

    def __init__(self, seat: int):
        self.seat = seat
        super().__init__(f"Player {seat} is no longer in the round")


class CardNotFound(PlayError):
    """决策函数返回了不在手中的牌"""

    def __init__(self, chosen, hand: Tuple):
        self.chosen = chosen
        self.hand = hand
        super().__init__(f"Cannot play {chosen!r}: hand is {hand!r}")


class SelfTarget(PlayError):
    """该牌不能以自己为目标"""

    def __init__(self, seat: int, card):
        self.seat = seat
        self.card = card
        super().__init__(f"Player {seat} cannot target themselves with {card!r}")


class BadActionForCard(PlayError):
    """该牌不支持这种出法"""

    def __init__(self, play, card):
        self.play = play
        self.card = card
        super().__init__(f"{play!r} is not a valid play for {card!r}")


class BadGuess(PlayError):
    """不能猜士兵"""

    def __init__(self):
        super().__init__("Cannot guess Soldier")
