"""
回合结果

回合结束时所有玩家状态的快照，用于计算幸存者和赢家
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .cards import Card
from .player import Player


@dataclass(frozen=True)
class RoundResult:
    """
    结束时的回合快照

    Attributes:
        players: 各座位的最终状态
        burn_card: 开局烧掉的牌 (残局构造的回合为 None)
    """
    players: Tuple[Player, ...]
    burn_card: Optional[Card] = None

    def survivors(self) -> List[Tuple[int, Card]]:
        """所有仍持有手牌的座位及其手牌"""
        return [
            (seat, player.hand)
            for seat, player in enumerate(self.players)
            if player.hand is not None
        ]

    def winners(self) -> List[Tuple[int, Card]]:
        """手牌最大的幸存者，平局时全部返回"""
        survivors = self.survivors()
        if not survivors:
            return []
        best = max(card for _, card in survivors)
        return [(seat, card) for seat, card in survivors if card == best]
