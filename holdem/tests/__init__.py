"""
Tests Module - 测试框架

Test Categories:
    unit/: 单元测试 - 测试单个模块功能
    property/: 性质测试 - 用hypothesis验证数学不变量
    integration/: 集成测试 - 测试整手牌与会话流程
    anti_cheat/: 测试辅助 - 确保测试使用真实的核心对象
"""

__all__ = []
