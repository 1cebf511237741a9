"""Docker镜像构建与晋升工具包"""

# 导入loguru并配置logger
from loguru import logger

from .constants import LOG_FORMAT

# 移除默认处理器
logger.remove()
# 添加标准输出处理器
logger.add(
    sink=lambda msg: print(msg, end=""),  # 使用标准输出
    format=LOG_FORMAT,
    colorize=True,
    level="INFO",
)

# 导入其他模块
from .cli import app, main

__version__ = "0.1.0"

__all__ = [
    "app",
    "logger",
    "main",
]
