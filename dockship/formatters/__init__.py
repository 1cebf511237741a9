"""结果格式化模块"""
