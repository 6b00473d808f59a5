"""决策函数测试"""
import pytest

from loveletter.cards import Card
from loveletter.actions import Play
from loveletter.round import Round, Turn
from loveletter.deciders import Decider, ScriptedDecider, RevealLog


class TestDecider:
    """Decider 基类测试"""

    def test_decide_not_implemented(self):
        round_ = Round.new(2)
        with pytest.raises(NotImplementedError):
            Decider()(round_, Turn(0, Card.SOLDIER, Card.CLOWN))

    def test_subclass(self):
        class AlwaysDrawn(Decider):
            def decide(self, round_, turn):
                return turn.drawn, Play.no_effect()

        round_ = Round.from_manual([Card.KNIGHT, Card.CLOWN], [Card.SOLDIER, Card.PRIESTESS])
        new_round, outcome = round_.handle_turn(AlwaysDrawn("drawn"))
        assert outcome.card == Card.PRIESTESS
        assert new_round.players[0].protected is True


class TestScriptedDecider:
    """ScriptedDecider 测试"""

    def test_in_order(self):
        decider = ScriptedDecider([
            (Card.CLOWN, Play.attack(1)),
            (Card.SOLDIER, Play.guess_card(0, Card.KNIGHT)),
        ])
        turn = Turn(0, Card.CLOWN, Card.SOLDIER)
        assert decider(None, turn) == (Card.CLOWN, Play.attack(1))
        assert decider.remaining == 1
        assert decider(None, turn) == (Card.SOLDIER, Play.guess_card(0, Card.KNIGHT))
        assert decider.remaining == 0
        assert decider.turns == [turn, turn]

    def test_exhausted(self):
        decider = ScriptedDecider([])
        with pytest.raises(ValueError):
            decider(None, Turn(1, Card.CLOWN, Card.SOLDIER))

    def test_reset(self):
        decider = ScriptedDecider([(Card.CLOWN, Play.attack(1))])
        decider(None, Turn(0, Card.CLOWN, Card.SOLDIER))
        decider.reset()
        assert decider.remaining == 1
        assert decider.turns == []


class TestRevealLog:

    def test_records(self):
        log = RevealLog()
        log(1, Card.GENERAL)
        log(2, Card.SOLDIER)
        assert log.reveals == [(1, Card.GENERAL), (2, Card.SOLDIER)]
        assert len(log) == 2
