"""
玩家 (座位) 状态

不可变数据结构，所有状态转换都返回新的 Player
"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .cards import Card
from .errors import Inactive, NoSuchCard


@dataclass(frozen=True)
class Player:
    """
    一个座位的状态

    Attributes:
        hand: 手牌，None 表示已出局
        protected: 是否处于女祭司保护中
        discards: 弃牌堆，按打出顺序排列 (最后一张是最近弃掉的)
    """
    hand: Optional[Card]
    protected: bool = False
    discards: Tuple[Card, ...] = ()

    @property
    def active(self) -> bool:
        """是否仍在本回合中"""
        return self.hand is not None

    def protect(self, protected: bool) -> 'Player':
        """设置保护状态"""
        return replace(self, protected=protected)

    def eliminate(self) -> 'Player':
        """
        出局: 手牌进入弃牌堆

        不检查保护状态，保护已在事件解析时处理过
        """
        if self.hand is None:
            return self
        return replace(self, hand=None, discards=self.discards + (self.hand,))

    def swap_hands(self, other: 'Player') -> Tuple['Player', 'Player']:
        """
        与另一名玩家交换手牌

        Returns:
            (交换后的自己, 交换后的对方)

        Raises:
            Inactive: 任意一方已出局
        """
        if not self.active or not other.active:
            raise Inactive()
        return replace(self, hand=other.hand), replace(other, hand=self.hand)

    def discard_and_draw(self, new_card: Optional[Card]) -> 'Player':
        """
        弃掉手牌并换上 new_card

        new_card 为 None 时 (无牌可摸) 玩家因此出局
        """
        if self.hand is None:
            raise Inactive()
        return replace(self, hand=new_card, discards=self.discards + (self.hand,))

    def play_card(self, drawn: Card, chosen: Card) -> 'Player':
        """
        从手牌和刚摸到的牌中打出 chosen，留下另一张

        Args:
            drawn: 本回合摸到的牌
            chosen: 要打出的牌

        Returns:
            新状态

        Raises:
            Inactive: 玩家已出局
            NoSuchCard: chosen 不是这两张牌之一
        """
        if self.hand is None:
            raise Inactive()
        if chosen == self.hand:
            kept = drawn
        elif chosen == drawn:
            kept = self.hand
        else:
            raise NoSuchCard(chosen, (self.hand, drawn))
        return replace(self, hand=kept, discards=self.discards + (chosen,))
