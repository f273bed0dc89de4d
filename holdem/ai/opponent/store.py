"""
对手模型存储

按玩家ID保存对手模型。由会话创建并注入决策引擎，生命周期与一局游戏相同。
"""

import logging
import threading
from typing import Dict, Optional

from ..types import DecisionConfig
from .model import OpponentModel, OpponentStats

__all__ = ['OpponentModelStore']

logger = logging.getLogger(__name__)


class OpponentModelStore:
    """
    线程安全的对手模型表

    决策引擎只读取；统计记录器通过 ``update`` 写入最新计数。
    """

    def __init__(self, config: Optional[DecisionConfig] = None):
        self._config = config or DecisionConfig()
        self._models: Dict[str, OpponentModel] = {}
        self._lock = threading.RLock()

    def update(self, player_id: str, stats: OpponentStats) -> OpponentModel:
        """用统计快照替换玩家的计数"""
        with self._lock:
            snapshot = OpponentStats(**vars(stats))
            model = self._models.get(player_id)
            if model is None:
                model = OpponentModel(player_id, snapshot, self._config)
                self._models[player_id] = model
            else:
                model.stats = snapshot
            return model

    def get(self, player_id: str) -> Optional[OpponentModel]:
        with self._lock:
            return self._models.get(player_id)

    def get_or_create(self, player_id: str) -> OpponentModel:
        with self._lock:
            if player_id not in self._models:
                self._models[player_id] = OpponentModel(player_id, OpponentStats(), self._config)
            return self._models[player_id]

    def reset(self) -> None:
        with self._lock:
            logger.debug(f"清空{len(self._models)}个对手模型")
            self._models.clear()

    def __contains__(self, player_id: str) -> bool:
        with self._lock:
            return player_id in self._models

    def __len__(self) -> int:
        with self._lock:
            return len(self._models)
