"""Docker镜像管理器模块

该模块包含各种管理器类，用于登录仓库、构建和晋升Docker镜像。
"""

from .base_manager import BaseManager
from .config_manager import ConfigError, ConfigManager
from .image_manager import ImageManager
from .pipeline import BasePipeline, BuildPipeline, PromotionPipeline

__all__ = [
    "BaseManager",
    "ConfigManager",
    "ConfigError",
    "ImageManager",
    "BasePipeline",
    "BuildPipeline",
    "PromotionPipeline",
]
