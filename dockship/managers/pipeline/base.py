"""流水线基础类"""

from typing import Callable, Dict, List, Optional, Tuple

from loguru import logger

from ...utils import write_github_outputs
from ..image_manager import ImageManager

Step = Tuple[str, Callable[[], None]]


class BasePipeline:
    """
    流水线基类

    流水线由按顺序执行的步骤组成。任一步骤抛出 PipelineError 都会中止后续步骤，
    已产生的副作用（例如已推送的标签）不会回滚。
    """

    name: str = "流水线"

    def __init__(self, image_manager: Optional[ImageManager] = None) -> None:
        """
        初始化流水线

        Args:
            image_manager: 镜像管理器，默认在第一次需要时创建
        """
        self._image_manager = image_manager
        self.outputs: Dict[str, str] = {}

    @property
    def image_manager(self) -> ImageManager:
        """镜像管理器，延迟创建以保证输入验证先于连接Docker"""
        if self._image_manager is None:
            self._image_manager = ImageManager()
        return self._image_manager

    def steps(self) -> List[Step]:
        """返回流水线步骤列表"""
        raise NotImplementedError

    def run(self) -> Dict[str, str]:
        """
        依次执行所有步骤

        Returns:
            Dict[str, str]: 流水线输出

        Raises:
            PipelineError: 任一步骤失败时抛出
        """
        steps = self.steps()
        for index, (description, step) in enumerate(steps, start=1):
            logger.info(f"[{index}/{len(steps)}] {description}")
            step()
        logger.success(f"{self.name}完成")
        return self.outputs

    def emit_outputs(self) -> None:
        """记录输出并写入GitHub Actions步骤输出"""
        for key, value in self.outputs.items():
            logger.info(f"输出 {key}={value}")
        write_github_outputs(self.outputs)
