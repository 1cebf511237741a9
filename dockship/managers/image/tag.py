"""镜像标签管理相关功能"""

import docker
from loguru import logger

from .base import ImageTagError
from .utils import parse_image_name


class ImageTagger:
    """镜像标签管理器类"""

    def __init__(self, docker_client):
        """
        初始化镜像标签管理器

        Args:
            docker_client: Docker客户端实例
        """
        self.docker_client = docker_client

    def tag(self, source_tag: str, new_tag: str) -> None:
        """
        为本地镜像添加新标签

        Args:
            source_tag: 源镜像，格式为 "仓库名:标签"
            new_tag: 新标签，格式为 "仓库名:标签"

        Raises:
            ImageTagError: 源镜像不存在或添加标签失败时抛出
        """
        repository, tag = parse_image_name(new_tag)
        try:
            image = self.docker_client.images.get(source_tag)
        except docker.errors.ImageNotFound as e:
            raise ImageTagError(f"本地镜像 {source_tag} 不存在: {e}") from e
        except docker.errors.APIError as e:
            raise ImageTagError(f"获取镜像 {source_tag} 失败: {e}") from e

        try:
            tagged = image.tag(repository, tag=tag)
        except docker.errors.APIError as e:
            raise ImageTagError(f"为镜像 {source_tag} 添加标签 {new_tag} 失败: {e}") from e
        if not tagged:
            raise ImageTagError(f"为镜像 {source_tag} 添加标签 {new_tag} 失败")

        logger.success(f"已为镜像 {source_tag} 添加标签 {new_tag}")
