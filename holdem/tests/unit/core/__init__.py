"""核心层单元测试"""
