"""镜像拉取相关功能"""

import docker
from loguru import logger

from .base import ImagePullError
from .utils import parse_image_name


class ImagePuller:
    """镜像拉取器类"""

    def __init__(self, docker_client):
        """
        初始化镜像拉取器

        Args:
            docker_client: Docker客户端实例
        """
        self.docker_client = docker_client

    def pull(self, image_ref: str) -> None:
        """
        从远程仓库拉取镜像

        Args:
            image_ref: 镜像引用，格式为 "仓库名:标签"

        Raises:
            ImagePullError: 拉取失败时抛出
        """
        repository, tag = parse_image_name(image_ref)
        logger.warning(f"开始拉取镜像 {image_ref}...")
        try:
            for line in self.docker_client.api.pull(repository, tag=tag, stream=True, decode=True):
                if "error" in line:
                    raise ImagePullError(f"拉取镜像 {image_ref} 失败: {line['error']}")
                elif "status" in line:
                    # 逐层进度只在调试时输出
                    if "id" in line:
                        logger.debug(f"{line['id']}: {line['status']}")
                    else:
                        logger.info(line["status"])
        except docker.errors.APIError as e:
            raise ImagePullError(f"拉取镜像 {image_ref} 失败: {e}") from e

        logger.success(f"镜像 {image_ref} 拉取成功")
