"""
回合配置

情书的配置很少: 只有玩家数和随机种子
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import InvalidPlayers

# 玩家数范围
MIN_PLAYERS = 2
MAX_PLAYERS = 4


def valid_player_count(num_players: int) -> bool:
    return MIN_PLAYERS <= num_players <= MAX_PLAYERS


@dataclass
class RoundConfig:
    """
    回合配置

    Attributes:
        num_players: 玩家数 (2-4)
        seed: 洗牌随机种子，None 表示不固定
    """
    num_players: int = 2
    seed: Optional[int] = None

    def validate(self) -> 'RoundConfig':
        if not valid_player_count(self.num_players):
            raise InvalidPlayers(self.num_players)
        return self

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'RoundConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "num_players": self.num_players,
            "seed": self.seed,
        }
