"""
holdem - 德州扑克规则与策略核心

包含牌组、牌型评估、下注轮次、边池计算、手牌生命周期引擎，
以及基于蒙特卡洛胜率和对手建模的AI决策引擎。

Subpackages:
    core: 纯领域逻辑（不依赖ai/application）
    ai: 胜率估算、对手建模与决策
    application: 配置、统计记录与对局会话
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
