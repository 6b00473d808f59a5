#!/usr/bin/env python3
"""
对战脚本 (热座模式，所有座位都由人操作)

Usage:
    python scripts/play.py                 # 2 人
    python scripts/play.py --players 4     # 4 人
    python scripts/play.py --seed 42 -v    # 固定洗牌，输出调试日志
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Sequence, Tuple, TypeVar

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from loveletter import (
    Card,
    Decider,
    LoveLetterError,
    OutcomeType,
    Play,
    PlayError,
    Round,
    RoundConfig,
    cards_to_str,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 需要选择目标的牌
ATTACK_CARDS = (Card.CLOWN, Card.KNIGHT, Card.WIZARD, Card.GENERAL)

# 士兵可以猜的牌
GUESSABLE_CARDS = [c for c in Card if c != Card.SOLDIER]


def parse_args():
    parser = argparse.ArgumentParser(description="Love Letter (one round, hot seat)")

    parser.add_argument("--players", type=int, default=2, help="Number of players (2-4)")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    return parser.parse_args()


def repeated_prompt(prompt: str, parser: Callable[[str], T]) -> T:
    """反复提示直到输入能被解析"""
    while True:
        text = input(prompt)
        try:
            return parser(text)
        except ValueError as e:
            print(e)


def read_int_in_range(text: str, upper: int) -> int:
    """解析 1..upper 的整数，返回从 0 开始的下标"""
    message = f"Please enter a number between 1 and {upper}"
    try:
        value = int(text.strip())
    except ValueError:
        raise ValueError(message)
    if not 1 <= value <= upper:
        raise ValueError(message)
    return value - 1


def choose_from_list(prompt: str, items: Sequence[T], label: Callable[[T], str] = str) -> T:
    """列出选项并让玩家选择一个"""
    lines = [prompt]
    for i, item in enumerate(items):
        lines.append(f"  {i + 1}. {label(item)}")
    lines.append(">>> ")
    idx = repeated_prompt("\n".join(lines), lambda x: read_int_in_range(x, len(items)))
    return items[idx]


def player_name(seat: int) -> str:
    return f"Player #{seat + 1}"


def print_table(round_: Round):
    """打印公开信息: 各座位状态与弃牌"""
    print("\n" + "=" * 60)
    print(f"牌堆剩余: {round_.num_cards_remaining}")
    for seat, player in enumerate(round_.players):
        status = "出局" if not player.active else ("受保护" if player.protected else "在场")
        print(f"  {player_name(seat)} [{status}] 弃牌: {cards_to_str(player.discards) or '-'}")
    print("=" * 60)


class HumanDecider(Decider):
    """通过终端询问当前座位的玩家"""

    def __init__(self, name: str = "human"):
        super().__init__(name)

    def decide(self, round_: Round, turn) -> Tuple[Card, Play]:
        print_table(round_)
        print(f"\n{player_name(turn.seat)} 的回合")
        print(f"手牌: {turn.hand}    摸到: {turn.drawn}")

        card = choose_from_list("打出哪张牌?", [turn.hand, turn.drawn])
        others = [s for s in range(round_.num_players) if s != turn.seat]

        if card == Card.SOLDIER:
            target = choose_from_list("猜谁?", others, player_name)
            guess = choose_from_list("猜哪张牌?", GUESSABLE_CARDS)
            return card, Play.guess_card(target, guess)

        if card in ATTACK_CARDS:
            # 巫师可以以自己为目标
            seats = list(range(round_.num_players)) if card == Card.WIZARD else others
            target = choose_from_list("目标是谁?", seats, player_name)
            return card, Play.attack(target)

        return card, Play.no_effect()


def reveal_card(seat: int, card: Card):
    """亮牌只给发起者看"""
    print(f"\n[仅发起者可见] {player_name(seat)} 的手牌是 {card}")


def describe_outcome(outcome) -> str:
    if outcome.outcome_type == OutcomeType.BUSTED_OUT:
        return f"{player_name(outcome.seat)} 手持大臣爆牌出局!"
    events = "; ".join(str(e) for e in outcome.events)
    return f"{player_name(outcome.seat)} 打出 {outcome.card} ({outcome.play}): {events}"


def play_round(args):
    """进行一个回合"""
    config = RoundConfig(num_players=args.players, seed=args.seed)
    round_ = Round.from_config(config)
    decider = HumanDecider()

    while True:
        try:
            step = round_.handle_turn(decider, reveal_card)
        except PlayError as e:
            # 回合没有推进，同一座位重新选择
            print(f"\n非法出牌: {e}，请重试")
            continue

        if step is None:
            break
        round_, outcome = step
        print("\n" + describe_outcome(outcome))

    result = round_.round_result()
    print("\n" + "=" * 60)
    for seat, card in result.survivors():
        print(f"{player_name(seat)} 最终手牌: {card}")
    if result.burn_card is not None:
        print(f"烧掉的牌: {result.burn_card}")
    winners = ", ".join(f"{player_name(s)} ({c})" for s, c in result.winners())
    print(f"回合结束! 胜者: {winners}")
    print("=" * 60)


def main():
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    print("=" * 60)
    print("Love Letter")
    print("=" * 60)

    try:
        play_round(args)
    except LoveLetterError as e:
        logger.error(f"Cannot start round: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
