"""流水线模块

该子包包含镜像构建流水线和镜像晋升流水线。
"""

from .base import BasePipeline
from .build import BuildPipeline
from .promote import PromotionPipeline

__all__ = [
    "BasePipeline",
    "BuildPipeline",
    "PromotionPipeline",
]
