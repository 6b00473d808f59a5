"""
loveletter - 情书 (Love Letter) 单回合规则引擎 (纯游戏逻辑)

Modules:
    cards: 牌定义、牌组校验与洗牌
    player: 座位状态
    actions: 出法与动作解析
    events: 事件解析与应用
    round: 回合状态机
    result: 回合结果
    config: 回合配置
    deciders: 决策函数
    errors: 错误类型
"""
from .cards import (
    Card,
    CARD_NAMES,
    CARD_COUNTS,
    FULL_DECK,
    CARDS_IN_DECK,
    Shuffler,
    parse_card,
    validate,
    validate_subset,
    make_shuffler,
    shuffle,
    new_deck,
    draw,
    cards_to_str,
)

from .player import Player

from .actions import (
    PlayType,
    Play,
    ActionType,
    Action,
    resolve_play,
)

from .events import (
    EventType,
    Event,
    resolve_action,
    apply_event,
)

from .result import RoundResult

from .round import (
    Phase,
    Turn,
    OutcomeType,
    TurnOutcome,
    Round,
    minister_bust,
)

from .config import (
    RoundConfig,
    MIN_PLAYERS,
    MAX_PLAYERS,
)

from .deciders import (
    Decider,
    ScriptedDecider,
    RevealLog,
)

from .errors import (
    LoveLetterError,
    DeckError,
    WrongNumber,
    WrongCards,
    PlayerError,
    Inactive,
    NoSuchCard,
    RoundError,
    InvalidPlayers,
    BadDeck,
    RoundInProgress,
    PlayError,
    InvalidPlayer,
    InactivePlayer,
    CardNotFound,
    SelfTarget,
    BadActionForCard,
    BadGuess,
)

__all__ = [
    # cards
    "Card",
    "CARD_NAMES",
    "CARD_COUNTS",
    "FULL_DECK",
    "CARDS_IN_DECK",
    "Shuffler",
    "parse_card",
    "validate",
    "validate_subset",
    "make_shuffler",
    "shuffle",
    "new_deck",
    "draw",
    "cards_to_str",
    # player
    "Player",
    # actions
    "PlayType",
    "Play",
    "ActionType",
    "Action",
    "resolve_play",
    # events
    "EventType",
    "Event",
    "resolve_action",
    "apply_event",
    # result
    "RoundResult",
    # round
    "Phase",
    "Turn",
    "OutcomeType",
    "TurnOutcome",
    "Round",
    "minister_bust",
    # config
    "RoundConfig",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    # deciders
    "Decider",
    "ScriptedDecider",
    "RevealLog",
    # errors
    "LoveLetterError",
    "DeckError",
    "WrongNumber",
    "WrongCards",
    "PlayerError",
    "Inactive",
    "NoSuchCard",
    "RoundError",
    "InvalidPlayers",
    "BadDeck",
    "RoundInProgress",
    "PlayError",
    "InvalidPlayer",
    "InactivePlayer",
    "CardNotFound",
    "SelfTarget",
    "BadActionForCard",
    "BadGuess",
]
