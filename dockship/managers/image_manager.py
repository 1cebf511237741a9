"""镜像管理器类 - 门面模式实现"""

from typing import Optional

from docker.client import DockerClient

from .base_manager import BaseManager
from .image.auth import RegistryAuthenticator
from .image.base import BuildParameters
from .image.build import ImageBuilder
from .image.pull import ImagePuller
from .image.push import ImagePusher
from .image.tag import ImageTagger


class ImageManager(BaseManager):
    """镜像管理器类，用于登录仓库以及构建、拉取、标签和推送镜像"""

    def __init__(self, docker_client: Optional[DockerClient] = None) -> None:
        """
        初始化镜像管理器

        Args:
            docker_client: Docker客户端实例，默认从环境变量创建
        """
        super().__init__(docker_client)

        # 初始化子组件
        self.authenticator = RegistryAuthenticator(self.docker_client)
        self.builder = ImageBuilder(self.docker_client)
        self.puller = ImagePuller(self.docker_client)
        self.tagger = ImageTagger(self.docker_client)
        self.pusher = ImagePusher(self.docker_client)

    def login(
        self, registry: str, username: Optional[str] = None, password: Optional[str] = None
    ) -> bool:
        """
        登录Docker仓库，未提供密码时跳过

        Returns:
            bool: 是否执行了登录

        Raises:
            RegistryLoginError: 登录失败时抛出
        """
        return self.authenticator.login(registry, username, password)

    def build_image(self, params: BuildParameters) -> bool:
        """
        构建Docker镜像

        Returns:
            bool: 镜像是否已在构建过程中推送

        Raises:
            ImageBuildError: 构建失败时抛出
        """
        return self.builder.build(params)

    def pull_image(self, image_ref: str) -> None:
        """拉取镜像，失败时抛出 ImagePullError"""
        self.puller.pull(image_ref)

    def tag_image(self, source_tag: str, new_tag: str) -> None:
        """为镜像添加新标签，失败时抛出 ImageTagError"""
        self.tagger.tag(source_tag, new_tag)

    def push_image(self, image_ref: str) -> None:
        """推送镜像，失败时抛出 ImagePushError"""
        self.pusher.push(image_ref)
