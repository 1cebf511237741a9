"""镜像构建相关功能"""

import os
import subprocess
from typing import List

import docker
from loguru import logger

from ...utils import command_error_details, stream_command
from .base import BuildParameters, ImageBuildError
from .utils import format_image_reference


class ImageBuilder:
    """镜像构建器类"""

    def __init__(self, docker_client) -> None:
        """
        初始化镜像构建器

        Args:
            docker_client: Docker客户端实例
        """
        self.docker_client = docker_client

    @staticmethod
    def uses_buildx(params: BuildParameters) -> bool:
        """多平台构建或使用构建缓存时需要 buildx"""
        return bool(params["platforms"] or params["cache_from"] or params["cache_to"])

    def build(self, params: BuildParameters) -> bool:
        """
        构建Docker镜像

        Args:
            params: 构建参数

        Returns:
            bool: 镜像是否已在构建过程中推送（仅 buildx 构建会直接推送）

        Raises:
            ImageBuildError: 构建失败时抛出
        """
        image_ref = format_image_reference(params["image_name"], params["image_tag"])
        logger.warning(f"开始构建镜像 {image_ref}...")

        if self.uses_buildx(params):
            self._build_with_buildx(params)
            pushed = params["push"]
        else:
            self._build_with_progress(params, image_ref)
            pushed = False

        logger.success(f"镜像 {image_ref} 构建成功")
        return pushed

    def buildx_command(self, params: BuildParameters) -> List[str]:
        """
        生成 docker buildx build 命令

        Args:
            params: 构建参数

        Returns:
            List[str]: 命令及参数列表
        """
        image_ref = format_image_reference(params["image_name"], params["image_tag"])
        command = [
            "docker",
            "buildx",
            "build",
            "--file",
            params["dockerfile"],
            "--tag",
            image_ref,
        ]
        if params["platforms"]:
            command += ["--platform", ",".join(params["platforms"])]
        for key, value in params["build_args"].items():
            command += ["--build-arg", f"{key}={value}"]
        for key, value in params["labels"].items():
            command += ["--label", f"{key}={value}"]
        if params["cache_from"]:
            command += ["--cache-from", params["cache_from"]]
        if params["cache_to"]:
            command += ["--cache-to", params["cache_to"]]

        if params["push"]:
            command.append("--push")
        elif len(params["platforms"]) > 1:
            # 多平台镜像无法加载到本地镜像库，结果只保留在构建缓存中
            logger.warning("多平台构建且未推送，镜像不会加载到本地")
        else:
            command.append("--load")

        command.append(params["context"])
        return command

    def _build_with_buildx(self, params: BuildParameters) -> None:
        """
        使用 docker buildx 构建镜像

        Raises:
            ImageBuildError: 构建失败时抛出
        """
        command = self.buildx_command(params)
        try:
            stream_command(command)
        except subprocess.CalledProcessError as e:
            raise ImageBuildError(f"构建镜像失败:\n{command_error_details(e)}") from e
        except OSError as e:
            raise ImageBuildError(f"无法执行 docker buildx: {e}") from e

    def _build_with_progress(self, params: BuildParameters, image_ref: str) -> None:
        """
        通过Docker API构建镜像并显示进度

        Args:
            params: 构建参数
            image_ref: 镜像引用

        Raises:
            ImageBuildError: 构建失败时抛出
        """
        try:
            build_result = self.docker_client.api.build(
                path=params["context"],
                dockerfile=os.path.abspath(params["dockerfile"]),
                tag=image_ref,
                buildargs=params["build_args"],
                labels=params["labels"] or None,
                decode=True,
                rm=True,
            )

            # 处理构建输出
            for line in build_result:
                if "stream" in line:
                    log_line = line["stream"].strip()
                    if log_line:
                        logger.info(log_line)
                elif "error" in line:
                    raise ImageBuildError(f"构建镜像失败: {line['error']}")
                elif "status" in line:
                    logger.info(line["status"])
        except docker.errors.APIError as e:
            raise ImageBuildError(f"构建镜像失败: {e}") from e
