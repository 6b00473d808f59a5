"""
事件解析与应用

Action 是意图，Event 是结果:
- resolve_action: 根据当前的保护状态把动作转换为实际发生的事件
- apply_event: 把事件应用到回合上，可能产生一个后续事件

保护检查只在 resolve_action 中做一次，apply_event 不再检查
"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

from .cards import Card
from .actions import Action, ActionType
from .errors import BadGuess

if TYPE_CHECKING:
    from .round import Round


class EventType(Enum):
    """事件类型"""
    NO_CHANGE = "no_change"
    PROTECTED = "protected"
    SWAPPED_HANDS = "swapped_hands"
    PLAYER_ELIMINATED = "player_eliminated"
    FORCED_DISCARD = "forced_discard"
    FORCED_REVEAL = "forced_reveal"


@dataclass(frozen=True)
class Event:
    """
    不可变事件表示

    Attributes:
        event_type: 事件类型
        source: 发起者座位 (SWAPPED_HANDS / FORCED_REVEAL)
        target: 受影响的座位
    """
    event_type: EventType
    source: Optional[int] = None
    target: Optional[int] = None

    @classmethod
    def no_change(cls) -> 'Event':
        return cls(EventType.NO_CHANGE)

    @classmethod
    def protected(cls, seat: int) -> 'Event':
        return cls(EventType.PROTECTED, target=seat)

    @classmethod
    def swapped_hands(cls, source: int, target: int) -> 'Event':
        return cls(EventType.SWAPPED_HANDS, source=source, target=target)

    @classmethod
    def player_eliminated(cls, seat: int) -> 'Event':
        return cls(EventType.PLAYER_ELIMINATED, target=seat)

    @classmethod
    def forced_discard(cls, seat: int) -> 'Event':
        return cls(EventType.FORCED_DISCARD, target=seat)

    @classmethod
    def forced_reveal(cls, source: int, target: int) -> 'Event':
        return cls(EventType.FORCED_REVEAL, source=source, target=target)

    @property
    def is_no_change(self) -> bool:
        return self.event_type == EventType.NO_CHANGE

    def __str__(self) -> str:
        t = self.event_type
        if t == EventType.PROTECTED:
            return f"player {self.target} is protected"
        if t == EventType.SWAPPED_HANDS:
            return f"players {self.source} and {self.target} swapped hands"
        if t == EventType.PLAYER_ELIMINATED:
            return f"player {self.target} is eliminated"
        if t == EventType.FORCED_DISCARD:
            return f"player {self.target} discarded their hand"
        if t == EventType.FORCED_REVEAL:
            return f"player {self.target} showed their hand to player {self.source}"
        return "nothing happens"


# 被保护时会退化为 NO_CHANGE 的单目标动作
_TARGETED_EVENTS = {
    ActionType.SWAP_HANDS: lambda a: Event.swapped_hands(a.source, a.target),
    ActionType.ELIMINATE_PLAYER: lambda a: Event.player_eliminated(a.target),
    ActionType.FORCE_DISCARD: lambda a: Event.forced_discard(a.target),
    ActionType.FORCE_REVEAL: lambda a: Event.forced_reveal(a.source, a.target),
}


def resolve_action(round_: 'Round', action: Action) -> Event:
    """
    将动作解析为实际发生的事件

    Args:
        round_: 当前回合
        action: 动作

    Returns:
        事件

    Raises:
        InvalidPlayer: 目标座位不存在
        InactivePlayer: 目标已出局
        BadGuess: 猜士兵
    """
    t = action.action_type

    if t == ActionType.NO_CHANGE:
        return Event.no_change()

    if t == ActionType.PROTECT:
        # 保护自己不受保护状态影响
        round_.get_player(action.target)
        return Event.protected(action.target)

    if t in _TARGETED_EVENTS:
        target = round_.get_player(action.target)
        if target.protected:
            return Event.no_change()
        return _TARGETED_EVENTS[t](action)

    if t == ActionType.ELIMINATE_WEAKER:
        source_hand = round_.get_hand(action.source)
        target = round_.get_player(action.target)
        if target.protected:
            return Event.no_change()
        if source_hand < target.hand:
            return Event.player_eliminated(action.source)
        if source_hand > target.hand:
            return Event.player_eliminated(action.target)
        return Event.no_change()

    if t == ActionType.ELIMINATE_ON_GUESS:
        if action.guess == Card.SOLDIER:
            raise BadGuess()
        target = round_.get_player(action.target)
        if target.protected:
            return Event.no_change()
        if target.hand == action.guess:
            return Event.player_eliminated(action.target)
        return Event.no_change()

    raise ValueError(f"Unknown action: {action!r}")


def apply_event(round_: 'Round', event: Event) -> Tuple['Round', Optional[Event]]:
    """
    把事件应用到回合上

    被迫弃掉公主时玩家直接出局 (不再摸牌)，并返回已生效的后续事件
    PLAYER_ELIMINATED；这是唯一会产生后续事件的情况

    Args:
        round_: 当前回合
        event: 事件

    Returns:
        (新回合, 后续事件或 None)
    """
    t = event.event_type

    if t in (EventType.NO_CHANGE, EventType.FORCED_REVEAL):
        # 亮牌只通过回调通知，不改变状态
        return round_, None

    if t == EventType.PROTECTED:
        return round_.update_player(event.target, lambda p: p.protect(True)), None

    if t == EventType.PLAYER_ELIMINATED:
        return round_.update_player(event.target, lambda p: p.eliminate()), None

    if t == EventType.SWAPPED_HANDS:
        source = round_.get_player(event.source)
        target = round_.get_player(event.target)
        new_source, new_target = source.swap_hands(target)
        new_round = round_.with_player(event.source, new_source).with_player(event.target, new_target)
        return new_round, None

    if t == EventType.FORCED_DISCARD:
        seat = event.target
        player = round_.get_player(seat)
        if player.hand == Card.PRINCESS:
            new_round = round_.update_player(seat, lambda p: p.eliminate())
            return new_round, Event.player_eliminated(seat)

        # 牌堆已空时摸不到牌，玩家手中无牌 (烧掉的牌不参与)
        new_round, new_card = round_.draw()
        new_round = new_round.update_player(seat, lambda p: p.discard_and_draw(new_card))
        return new_round, None

    raise ValueError(f"Unknown event: {event!r}")
