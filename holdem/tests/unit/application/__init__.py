"""应用层单元测试"""
