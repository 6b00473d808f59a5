"""
一个回合的核心状态机

回合在只剩一名玩家，或牌堆摸空且最后一名玩家出完牌后结束。
赢家是最后幸存的玩家，或手牌最大的玩家 (可能并列)。

状态: NOT_STARTED -> PLAYER_READY (逐回合循环) -> ROUND_OVER

使用不可变数据结构，每次转换返回新的 Round，
出牌非法时原回合不变，调用方可直接重试
"""
from enum import Enum
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Tuple
import logging

from .cards import Card, Shuffler, draw, make_shuffler, new_deck, validate, validate_subset
from .player import Player
from .actions import Play, resolve_play
from .events import Event, EventType, apply_event, resolve_action
from .result import RoundResult
from .config import RoundConfig, valid_player_count
from .errors import (
    BadDeck,
    CardNotFound,
    DeckError,
    Inactive,
    InactivePlayer,
    InvalidPlayer,
    InvalidPlayers,
    NoSuchCard,
    RoundInProgress,
)

logger = logging.getLogger(__name__)


class Phase(Enum):
    """回合阶段"""
    NOT_STARTED = "not_started"
    PLAYER_READY = "player_ready"  # 某座位刚摸了一张牌，等待决策
    ROUND_OVER = "round_over"


@dataclass(frozen=True)
class Turn:
    """
    当前回合描述

    Attributes:
        seat: 行动座位
        hand: 原来的手牌
        drawn: 刚摸到的牌
    """
    seat: int
    hand: Card
    drawn: Card


class OutcomeType(Enum):
    BUSTED_OUT = "busted_out"  # 大臣爆牌，未经决策直接出局
    PLAYED = "played"


@dataclass(frozen=True)
class TurnOutcome:
    """
    一次 handle_turn 的结果

    Attributes:
        outcome_type: 结果类型
        seat: 行动座位
        card: 打出的牌 (PLAYED)
        play: 出法 (PLAYED)
        events: 本回合依次发生的事件 (主事件，然后是后续事件)
    """
    outcome_type: OutcomeType
    seat: int
    card: Optional[Card] = None
    play: Optional[Play] = None
    events: Tuple[Event, ...] = ()

    @classmethod
    def busted_out(cls, seat: int) -> 'TurnOutcome':
        return cls(OutcomeType.BUSTED_OUT, seat)

    @classmethod
    def played(cls, seat: int, card: Card, play: Play, events: Sequence[Event]) -> 'TurnOutcome':
        return cls(OutcomeType.PLAYED, seat, card, play, tuple(events))


# 决策函数: (回合, 当前回合描述) -> (要打出的牌, 出法)
DecidePlay = Callable[['Round', Turn], Tuple[Card, Play]]

# 亮牌通知: (被亮牌的座位, 手牌) -> None
RevealCard = Callable[[int, Card], None]

# 与大臣同在手中就会爆牌的牌
MINISTER_BUST_CARDS = frozenset({Card.WIZARD, Card.GENERAL, Card.PRINCESS})


def minister_bust(a: Card, b: Card) -> bool:
    """两张手牌中一张是大臣、另一张是巫师/将军/公主时爆牌"""
    if a == Card.MINISTER and b == Card.MINISTER:
        raise AssertionError("Called with two Ministers")
    if a == Card.MINISTER:
        return b in MINISTER_BUST_CARDS
    if b == Card.MINISTER:
        return a in MINISTER_BUST_CARDS
    return False


@dataclass(frozen=True)
class Round:
    """
    不可变回合状态

    Attributes:
        players: 各座位状态，下标即座位号，构造后长度不变
        stack: 剩余牌堆，从末尾摸牌
        phase: 回合阶段
        current_seat: 当前行动座位 (PLAYER_READY)
        drawn_card: 当前座位摸到的牌 (PLAYER_READY)
        result: 结束时的快照 (ROUND_OVER)
        burn_card: 开局烧掉的牌
    """
    players: Tuple[Player, ...]
    stack: Tuple[Card, ...]
    phase: Phase = Phase.NOT_STARTED
    current_seat: Optional[int] = None
    drawn_card: Optional[Card] = None
    result: Optional[RoundResult] = None
    burn_card: Optional[Card] = None

    # ------------------------------------------------------------------
    # 构造
    # ------------------------------------------------------------------

    @classmethod
    def new(cls, num_players: int, shuffler: Optional[Shuffler] = None) -> 'Round':
        """
        用洗好的新牌组创建回合

        Args:
            num_players: 玩家数
            shuffler: 洗牌函数，测试时可注入

        Raises:
            InvalidPlayers: 玩家数不在 2-4 之间
        """
        if not valid_player_count(num_players):
            raise InvalidPlayers(num_players)
        return cls.from_deck(num_players, new_deck(shuffler))

    @classmethod
    def from_config(cls, config: RoundConfig) -> 'Round':
        config.validate()
        return cls.new(config.num_players, make_shuffler(config.seed))

    @classmethod
    def from_deck(cls, num_players: int, cards: Sequence[Card]) -> 'Round':
        """
        用一副已排好序的完整牌组创建回合

        先从末尾烧掉一张，再依次给每个座位发一张

        Raises:
            InvalidPlayers: 玩家数不合法
            BadDeck: 不是一副完整的牌
        """
        if not valid_player_count(num_players):
            raise InvalidPlayers(num_players)
        try:
            stack = validate(cards)
        except DeckError as e:
            raise BadDeck() from e

        stack, burn_card = draw(stack)
        players = []
        for _ in range(num_players):
            stack, card = draw(stack)
            players.append(Player(card))

        return cls(players=tuple(players), stack=stack, burn_card=burn_card)

    @classmethod
    def from_manual(
        cls,
        hands: Sequence[Optional[Card]],
        stack: Sequence[Card],
        current_seat: Optional[int] = None,
    ) -> 'Round':
        """
        创建一个进行中的回合 (残局)

        Args:
            hands: 各座位手牌，None 表示已出局
            stack: 剩余牌堆，从末尾摸牌
            current_seat: None 表示回合尚未开始；否则该座位从牌堆顶摸了
                一张牌正在行动，下一次 handle_turn 从它之后的座位开始

        Raises:
            InvalidPlayers: 玩家数不合法
            BadDeck: 牌不能由一副完整的牌组成，或标记了当前座位但牌堆为空
            ValueError: current_seat 不存在或已出局
        """
        if not valid_player_count(len(hands)):
            raise InvalidPlayers(len(hands))
        all_cards = list(stack) + [c for c in hands if c is not None]
        if not validate_subset(all_cards):
            raise BadDeck()
        if current_seat is not None and not 0 <= current_seat < len(hands):
            raise ValueError(f"No such seat: {current_seat}")
        if current_seat is not None and hands[current_seat] is None:
            raise ValueError(f"Seat {current_seat} is no longer in the round")

        players = tuple(Player(hand) for hand in hands)
        remaining = tuple(stack)

        if current_seat is None:
            return cls(players=players, stack=remaining)

        remaining, card = draw(remaining)
        if card is None:
            raise BadDeck()
        return cls(
            players=players,
            stack=remaining,
            phase=Phase.PLAYER_READY,
            current_seat=current_seat,
            drawn_card=card,
        )

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def num_cards_remaining(self) -> int:
        return len(self.stack)

    @property
    def num_players_remaining(self) -> int:
        return sum(1 for p in self.players if p.active)

    @property
    def is_over(self) -> bool:
        return self.phase == Phase.ROUND_OVER

    def hands(self) -> List[Optional[Card]]:
        return [p.hand for p in self.players]

    def discards(self, seat: int) -> Tuple[Card, ...]:
        """某座位的弃牌堆 (出局的座位也可查询)"""
        if not 0 <= seat < self.num_players:
            raise InvalidPlayer(seat)
        return self.players[seat].discards

    def all_discards(self) -> List[Tuple[Card, ...]]:
        return [p.discards for p in self.players]

    def get_player(self, seat: int) -> Player:
        """
        获取仍在回合中的座位

        Raises:
            InvalidPlayer: 座位不存在
            InactivePlayer: 座位已出局
        """
        if not 0 <= seat < self.num_players:
            raise InvalidPlayer(seat)
        player = self.players[seat]
        if not player.active:
            raise InactivePlayer(seat)
        return player

    def get_hand(self, seat: int) -> Card:
        return self.get_player(seat).hand

    def round_result(self) -> RoundResult:
        """
        回合结果 (回合已结束或下一步就会结束时)

        Raises:
            RoundInProgress: 还有玩家要行动
        """
        if self.phase == Phase.ROUND_OVER:
            return self.result
        finished, turn = self.next_player()
        if turn is not None:
            raise RoundInProgress()
        return finished.result

    def survivors(self) -> List[Tuple[int, Card]]:
        return self.round_result().survivors()

    def winners(self) -> List[Tuple[int, Card]]:
        """回合结束时的赢家及其手牌"""
        return self.round_result().winners()

    # ------------------------------------------------------------------
    # 状态转换
    # ------------------------------------------------------------------

    def with_player(self, seat: int, player: Player) -> 'Round':
        players = list(self.players)
        players[seat] = player
        return replace(self, players=tuple(players))

    def update_player(self, seat: int, updater: Callable[[Player], Player]) -> 'Round':
        """
        用 updater 更新一个仍在回合中的座位

        Raises:
            InvalidPlayer / InactivePlayer: 座位不可用
            CardNotFound: updater 打出了不在手中的牌
        """
        player = self.get_player(seat)
        try:
            new_player = updater(player)
        except Inactive as e:
            raise InactivePlayer(seat) from e
        except NoSuchCard as e:
            raise CardNotFound(e.chosen, e.hand) from e
        return self.with_player(seat, new_player)

    def draw(self) -> Tuple['Round', Optional[Card]]:
        stack, card = draw(self.stack)
        return replace(self, stack=stack), card

    def _next_seat(self) -> Optional[int]:
        """当前座位之后第一个仍在回合中的座位，不足两人时为 None"""
        if self.num_players_remaining <= 1:
            return None
        start = -1 if self.current_seat is None else self.current_seat
        for i in range(1, self.num_players + 1):
            seat = (start + i) % self.num_players
            if self.players[seat].active:
                return seat
        return None

    def _finish(self) -> 'Round':
        return replace(
            self,
            phase=Phase.ROUND_OVER,
            current_seat=None,
            drawn_card=None,
            result=RoundResult(self.players, self.burn_card),
        )

    def next_player(self) -> Tuple['Round', Optional[Turn]]:
        """
        轮到下一个座位

        不足两人或牌堆已空时回合结束 (不摸牌)；否则为下一个座位摸牌，
        并清除它的保护状态 (女祭司的保护在自己的下一回合开始时失效)

        Returns:
            (新回合, 当前回合描述)，回合结束时描述为 None
        """
        if self.phase == Phase.ROUND_OVER:
            return self, None

        seat = self._next_seat()
        if seat is None or not self.stack:
            logger.debug("Round over")
            return self._finish(), None

        new_round, card = self.draw()
        player = new_round.players[seat]
        # _next_seat 只返回仍在场的座位
        if not player.active:
            raise AssertionError(f"Activated disabled player {seat}")

        new_round = replace(
            new_round,
            phase=Phase.PLAYER_READY,
            current_seat=seat,
            drawn_card=card,
        ).with_player(seat, player.protect(False))

        logger.debug(f"Player {seat} holds {player.hand} and draws {card}")
        return new_round, Turn(seat, player.hand, card)

    def handle_turn(
        self,
        decide_play: DecidePlay,
        reveal_card: Optional[RevealCard] = None,
    ) -> Optional[Tuple['Round', TurnOutcome]]:
        """
        推进一个回合

        Args:
            decide_play: 决策函数，返回要打出的牌 (手牌或刚摸的牌) 和出法
            reveal_card: 小丑亮牌时的通知，返回值被忽略

        Returns:
            (新回合, 结果)；回合已结束则返回 None

        Raises:
            PlayError: 出牌非法，本回合 (self) 不变，可以重试
        """
        new_round, turn = self.next_player()
        if turn is None:
            return None

        if minister_bust(turn.hand, turn.drawn):
            new_round = new_round.update_player(
                turn.seat,
                lambda p: p.play_card(turn.drawn, turn.drawn).eliminate(),
            )
            logger.debug(f"Player {turn.seat} busted out with the Minister")
            return new_round, TurnOutcome.busted_out(turn.seat)

        card, play = decide_play(new_round, turn)

        new_round = new_round.update_player(turn.seat, lambda p: p.play_card(turn.drawn, card))
        action = resolve_play(turn.seat, card, play)
        event = resolve_action(new_round, action)

        if event.event_type == EventType.FORCED_REVEAL and reveal_card is not None:
            reveal_card(event.target, new_round.get_hand(event.target))

        events = [event]
        new_round, follow_up = apply_event(new_round, event)
        if follow_up is not None:
            events.append(follow_up)

        logger.debug(f"Player {turn.seat} played {card} ({play}): {', '.join(str(e) for e in events)}")
        return new_round, TurnOutcome.played(turn.seat, card, play, events)
