"""
Core Module - 纯领域逻辑层

该模块包含德州扑克的核心规则逻辑。
核心模块只能依赖其他核心模块，不能依赖ai层或应用层。

Modules:
    deck: 牌组管理和发牌逻辑
    eval: 牌型评估和手牌比较
    player: 玩家状态与AI参数
    betting: 单轮下注状态机
    pot: 底池与边池分层计算
    showdown: 摊牌与奖池分配
    engine: 手牌生命周期引擎
    rules: 牌桌规则与锦标赛配置
    invariant: 数学不变量检查
    events: 领域事件系统
"""

__all__ = []
