"""基础管理器类"""

from typing import Optional

import docker
from docker.client import DockerClient
from loguru import logger


class BaseManager:
    """所有管理器类的基类，包含共享的属性和方法"""

    docker_client: DockerClient

    def __init__(self, docker_client: Optional[DockerClient] = None) -> None:
        """
        初始化基础管理器

        Args:
            docker_client: Docker客户端实例，默认从环境变量创建
        """
        if docker_client is not None:
            self.docker_client = docker_client
            return

        # 初始化Docker客户端
        try:
            self.docker_client = docker.from_env()
            logger.debug("Docker客户端初始化成功")
        except docker.errors.DockerException as e:
            logger.error(f"Docker客户端初始化失败: {e}")
            raise
