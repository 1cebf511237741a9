"""镜像推送相关功能"""

from typing import List

import docker
from loguru import logger

from .base import ImagePushError
from .utils import parse_image_name


class ImagePusher:
    """镜像推送器类"""

    def __init__(self, docker_client):
        """
        初始化镜像推送器

        Args:
            docker_client: Docker客户端实例
        """
        self.docker_client = docker_client

    def push(self, image_ref: str) -> None:
        """
        推送单个镜像到远程仓库

        Args:
            image_ref: 镜像引用，格式为 "仓库名:标签"

        Raises:
            ImagePushError: 推送失败时抛出
        """
        repository, tag = parse_image_name(image_ref)
        logger.warning(f"开始推送镜像 {image_ref}...")
        push_output: List[str] = []
        try:
            for line in self.docker_client.images.push(
                repository, tag=tag, stream=True, decode=True
            ):
                if "error" in line:
                    error_msg = line["error"]
                    logger.error(f"推送错误: {error_msg}")

                    # 提供更友好的错误信息
                    if "denied" in error_msg.lower():
                        logger.error("访问被拒绝，请检查仓库凭据和推送权限")
                    elif "not found" in error_msg.lower():
                        logger.error("镜像或仓库未找到，请检查名称是否正确")

                    raise ImagePushError(f"推送镜像 {image_ref} 失败: {error_msg}")
                elif "status" in line:
                    if "id" in line:
                        logger.debug(f"{line['id']}: {line['status']}")
                    else:
                        logger.info(line["status"])
                    push_output.append(line["status"])
        except docker.errors.ImageNotFound as e:
            raise ImagePushError(f"本地镜像 {image_ref} 不存在: {e}") from e
        except docker.errors.APIError as e:
            raise ImagePushError(f"推送镜像 {image_ref} 失败: {e}") from e

        # 检查推送结果
        if any("digest: sha256" in line for line in push_output):
            logger.success(f"镜像 {image_ref} 推送成功")
        else:
            logger.warning(f"镜像 {image_ref} 推送输出中没有摘要信息，请检查输出")
