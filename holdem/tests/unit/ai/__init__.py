"""AI层单元测试"""
