"""镜像仓库登录相关功能"""

import os
import subprocess
from typing import Optional

from loguru import logger

from ...constants import DEFAULT_REGISTRY, ENV_VARS, ERROR_MESSAGES
from ...utils import command_error_details, run_command
from .base import InputValidationError, RegistryLoginError


class RegistryAuthenticator:
    """仓库登录器类"""

    def __init__(self, docker_client) -> None:
        """
        初始化仓库登录器

        Args:
            docker_client: Docker客户端实例
        """
        self.docker_client = docker_client

    def resolve_username(self, registry: str, username: Optional[str]) -> Optional[str]:
        """
        确定登录用户名

        未指定用户名且仓库为默认仓库时，使用GITHUB_ACTOR。

        Args:
            registry: 仓库地址
            username: 显式指定的用户名

        Returns:
            Optional[str]: 用户名
        """
        if username:
            return username
        if registry == DEFAULT_REGISTRY:
            actor = os.environ.get(ENV_VARS["actor"]) or None
            if actor:
                logger.debug(f"未指定用户名，使用 {ENV_VARS['actor']}: {actor}")
            return actor
        return None

    def login(
        self, registry: str, username: Optional[str] = None, password: Optional[str] = None
    ) -> bool:
        """
        登录Docker仓库

        密码通过标准输入传给 docker login，不会出现在命令行参数和日志中。
        登录成功后重新加载Docker客户端的凭据配置。

        Args:
            registry: 仓库地址
            username: 仓库用户名
            password: 仓库密码

        Returns:
            bool: 是否执行了登录，未提供密码时返回False

        Raises:
            InputValidationError: 有密码但无法确定用户名时抛出
            RegistryLoginError: 登录失败时抛出
        """
        if not password:
            logger.info(f"未提供密码，跳过登录仓库 {registry}")
            return False

        username = self.resolve_username(registry, username)
        if not username:
            raise InputValidationError(ERROR_MESSAGES["username_missing"].format(registry))

        logger.info(f"正在登录仓库 {registry} 用户名: {username}")
        try:
            run_command(
                ["docker", "login", registry, "--username", username, "--password-stdin"],
                input_text=password,
            )
        except subprocess.CalledProcessError as e:
            details = command_error_details(e)
            if "unauthorized" in details.lower():
                logger.error("认证失败，请检查用户名和密码是否正确")
            raise RegistryLoginError(f"登录仓库 {registry} 失败: {details}") from e
        except OSError as e:
            raise RegistryLoginError(f"无法执行 docker login: {e}") from e

        # 让SDK客户端读取新写入的凭据
        self.docker_client.api.reload_config()
        logger.success(f"登录仓库 {registry} 成功")
        return True
