"""事件解析与应用测试"""
import pytest
from dataclasses import replace

from loveletter.cards import Card
from loveletter.actions import Action
from loveletter.events import EventType, Event, resolve_action, apply_event
from loveletter.round import Round
from loveletter.errors import BadGuess, InactivePlayer, InvalidPlayer


def make_round(hands, stack=(Card.SOLDIER, Card.SOLDIER), protected=()):
    """用给定手牌创建回合，protected 中的座位处于保护状态"""
    round_ = Round.from_manual(hands, stack)
    for seat in protected:
        round_ = round_.update_player(seat, lambda p: p.protect(True))
    return round_


class TestEvent:
    """Event 数据类测试"""

    def test_no_change(self):
        assert Event.no_change().is_no_change is True
        assert Event.protected(0).is_no_change is False

    def test_fields(self):
        event = Event.forced_reveal(0, 1)
        assert event.event_type == EventType.FORCED_REVEAL
        assert event.source == 0
        assert event.target == 1

    def test_str(self):
        assert str(Event.player_eliminated(1)) == "player 1 is eliminated"


class TestResolveTargets:
    """目标校验测试"""

    def test_invalid_player(self):
        round_ = make_round([Card.CLOWN, Card.KNIGHT])
        with pytest.raises(InvalidPlayer) as exc_info:
            resolve_action(round_, Action.force_discard(5))
        assert exc_info.value.seat == 5

    def test_inactive_player(self):
        round_ = make_round([Card.CLOWN, Card.KNIGHT, None])
        with pytest.raises(InactivePlayer) as exc_info:
            resolve_action(round_, Action.eliminate_player(2))
        assert exc_info.value.seat == 2

    def test_negative_seat(self):
        round_ = make_round([Card.CLOWN, Card.KNIGHT])
        with pytest.raises(InvalidPlayer):
            resolve_action(round_, Action.swap_hands(0, -1))


class TestResolveUnprotected:
    """无保护时的事件解析"""

    @pytest.fixture
    def round_(self):
        return make_round([Card.KNIGHT, Card.PRINCESS, Card.CLOWN])

    def test_no_change(self, round_):
        assert resolve_action(round_, Action.no_change()) == Event.no_change()

    def test_protect(self, round_):
        assert resolve_action(round_, Action.protect(0)) == Event.protected(0)

    def test_swap(self, round_):
        assert resolve_action(round_, Action.swap_hands(0, 1)) == Event.swapped_hands(0, 1)

    def test_eliminate(self, round_):
        assert resolve_action(round_, Action.eliminate_player(2)) == Event.player_eliminated(2)

    def test_force_discard(self, round_):
        assert resolve_action(round_, Action.force_discard(1)) == Event.forced_discard(1)

    def test_force_reveal(self, round_):
        assert resolve_action(round_, Action.force_reveal(0, 1)) == Event.forced_reveal(0, 1)

    def test_weaker_source_loses(self, round_):
        # 骑士 < 公主
        assert resolve_action(round_, Action.eliminate_weaker(0, 1)) == Event.player_eliminated(0)

    def test_weaker_target_loses(self, round_):
        # 骑士 > 小丑
        assert resolve_action(round_, Action.eliminate_weaker(0, 2)) == Event.player_eliminated(2)

    def test_weaker_tie(self):
        round_ = make_round([Card.SOLDIER, Card.SOLDIER])
        assert resolve_action(round_, Action.eliminate_weaker(0, 1)) == Event.no_change()

    def test_guess_right(self, round_):
        action = Action.eliminate_on_guess(1, Card.PRINCESS)
        assert resolve_action(round_, action) == Event.player_eliminated(1)

    def test_guess_wrong(self, round_):
        action = Action.eliminate_on_guess(1, Card.MINISTER)
        assert resolve_action(round_, action) == Event.no_change()

    def test_guess_soldier(self, round_):
        with pytest.raises(BadGuess):
            resolve_action(round_, Action.eliminate_on_guess(1, Card.SOLDIER))

    def test_guess_soldier_checked_before_target(self, round_):
        with pytest.raises(BadGuess):
            resolve_action(round_, Action.eliminate_on_guess(9, Card.SOLDIER))


class TestResolveProtected:
    """目标受保护时事件退化为 NO_CHANGE"""

    @pytest.fixture
    def round_(self):
        return make_round([Card.KNIGHT, Card.SOLDIER], protected=(1,))

    @pytest.mark.parametrize("action", [
        Action.swap_hands(0, 1),
        Action.eliminate_player(1),
        Action.force_discard(1),
        Action.force_reveal(0, 1),
        Action.eliminate_weaker(0, 1),
        Action.eliminate_on_guess(1, Card.CLOWN),
    ])
    def test_blocked(self, round_, action):
        assert resolve_action(round_, action) == Event.no_change()

    def test_guess_right_still_blocked(self, round_):
        round_ = make_round([Card.KNIGHT, Card.PRINCESS], protected=(1,))
        action = Action.eliminate_on_guess(1, Card.PRINCESS)
        assert resolve_action(round_, action) == Event.no_change()

    def test_protect_self_while_protected(self, round_):
        assert resolve_action(round_, Action.protect(1)) == Event.protected(1)

    def test_weaker_blocked_even_if_source_loses(self):
        round_ = make_round([Card.SOLDIER, Card.PRINCESS], protected=(1,))
        assert resolve_action(round_, Action.eliminate_weaker(0, 1)) == Event.no_change()


class TestApplyEvent:
    """事件应用测试"""

    def test_no_change_is_identity(self):
        round_ = make_round([Card.KNIGHT, Card.CLOWN])
        new_round, follow_up = apply_event(round_, Event.no_change())
        assert new_round == round_
        assert follow_up is None

    def test_reveal_is_identity(self):
        round_ = make_round([Card.KNIGHT, Card.CLOWN])
        new_round, follow_up = apply_event(round_, Event.forced_reveal(0, 1))
        assert new_round == round_
        assert follow_up is None

    def test_protected(self):
        round_ = make_round([Card.KNIGHT, Card.CLOWN])
        new_round, _ = apply_event(round_, Event.protected(0))
        assert new_round.players[0].protected is True
        assert new_round.players[1].protected is False

    def test_eliminated(self):
        round_ = make_round([Card.KNIGHT, Card.CLOWN])
        new_round, _ = apply_event(round_, Event.player_eliminated(1))
        assert new_round.players[1].active is False
        assert new_round.discards(1) == (Card.CLOWN,)

    def test_swapped(self):
        round_ = make_round([Card.KNIGHT, Card.CLOWN])
        new_round, _ = apply_event(round_, Event.swapped_hands(0, 1))
        assert new_round.hands() == [Card.CLOWN, Card.KNIGHT]

    def test_forced_discard_draws(self):
        round_ = make_round([Card.KNIGHT, Card.CLOWN], stack=(Card.SOLDIER, Card.GENERAL))
        new_round, follow_up = apply_event(round_, Event.forced_discard(1))
        assert follow_up is None
        assert new_round.hands() == [Card.KNIGHT, Card.GENERAL]
        assert new_round.discards(1) == (Card.CLOWN,)
        assert new_round.stack == (Card.SOLDIER,)

    def test_forced_discard_princess(self):
        round_ = make_round([Card.WIZARD, Card.PRINCESS])
        new_round, follow_up = apply_event(round_, Event.forced_discard(1))
        assert follow_up == Event.player_eliminated(1)
        assert new_round.players[1].active is False
        assert new_round.discards(1) == (Card.PRINCESS,)
        # 公主被弃时不摸牌
        assert new_round.stack == round_.stack

    def test_forced_discard_ignores_burn_card(self):
        round_ = make_round([Card.WIZARD, Card.KNIGHT], stack=())
        round_ = replace(round_, burn_card=Card.PRINCESS)
        new_round, follow_up = apply_event(round_, Event.forced_discard(1))
        assert follow_up is None
        assert new_round.hands()[1] is None
        assert new_round.burn_card == Card.PRINCESS
        assert new_round.discards(1) == (Card.KNIGHT,)

    def test_forced_discard_nothing_left(self):
        round_ = make_round([Card.WIZARD, Card.CLOWN], stack=())
        new_round, follow_up = apply_event(round_, Event.forced_discard(1))
        assert follow_up is None
        assert new_round.players[1].active is False
        assert new_round.discards(1) == (Card.CLOWN,)

    def test_does_not_modify_original(self):
        round_ = make_round([Card.KNIGHT, Card.CLOWN])
        apply_event(round_, Event.player_eliminated(1))
        assert round_.players[1].active is True
