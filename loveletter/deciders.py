"""
决策函数

Round.handle_turn 通过一个可调用对象询问当前座位要打哪张牌、怎么打。
宿主程序提供交互式实现 (见 scripts/play.py)，测试提供脚本化实现
"""
from typing import Iterable, List, Tuple, TYPE_CHECKING
import logging

from .cards import Card
from .actions import Play

if TYPE_CHECKING:
    from .round import Round, Turn

logger = logging.getLogger(__name__)


class Decider:
    """决策者基类"""

    def __init__(self, name: str = "decider"):
        self.name = name

    def decide(self, round_: 'Round', turn: 'Turn') -> Tuple[Card, Play]:
        """选择要打出的牌和出法"""
        raise NotImplementedError

    def reset(self):
        """重置状态"""
        pass

    def __call__(self, round_: 'Round', turn: 'Turn') -> Tuple[Card, Play]:
        return self.decide(round_, turn)


class ScriptedDecider(Decider):
    """
    按预定顺序给出决策

    用于测试和复盘，每次调用消耗一个决策
    """

    def __init__(self, decisions: Iterable[Tuple[Card, Play]], name: str = "scripted"):
        super().__init__(name)
        self._decisions: List[Tuple[Card, Play]] = list(decisions)
        self._index = 0
        self.turns: List['Turn'] = []

    @property
    def remaining(self) -> int:
        return len(self._decisions) - self._index

    def decide(self, round_: 'Round', turn: 'Turn') -> Tuple[Card, Play]:
        if self._index >= len(self._decisions):
            raise ValueError(f"{self.name}: no decision left for player {turn.seat}")
        decision = self._decisions[self._index]
        self._index += 1
        self.turns.append(turn)
        logger.debug(f"{self.name}: player {turn.seat} plays {decision[0]} ({decision[1]})")
        return decision

    def reset(self):
        self._index = 0
        self.turns = []


class RevealLog:
    """记录小丑亮牌通知，可作为 reveal_card 回调"""

    def __init__(self):
        self.reveals: List[Tuple[int, Card]] = []

    def __call__(self, seat: int, card: Card) -> None:
        self.reveals.append((seat, card))

    def __len__(self) -> int:
        return len(self.reveals)
