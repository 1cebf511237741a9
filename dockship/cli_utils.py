"""CLI工具模块，包含CLI命令行接口的辅助函数"""

import os
import sys
from functools import wraps
from typing import Any, Callable, Dict, Optional, TypeVar, cast

import docker
import typer
from dotenv import load_dotenv
from loguru import logger

from .constants import DEFAULT_FILES, LOG_FORMAT
from .managers.config_manager import ConfigManager
from .managers.image.base import PipelineError
from .utils import running_in_github_actions

F = TypeVar("F", bound=Callable[..., Any])

# 错误类别的中文名称
CATEGORY_NAMES: Dict[str, str] = {
    "validation": "输入验证",
    "parse": "输入解析",
    "auth": "仓库认证",
    "build": "镜像构建",
    "transfer": "镜像传输",
    "pipeline": "流水线",
}


def set_log_level(verbose: bool) -> None:
    """
    重新配置日志级别

    Args:
        verbose: 是否输出调试日志
    """
    logger.remove()
    logger.add(
        sink=lambda msg: print(msg, end=""),
        format=LOG_FORMAT,
        colorize=True,
        level="DEBUG" if verbose else "INFO",
    )


def load_env_file(path: Optional[str] = None) -> bool:
    """
    加载 .env 文件中的环境变量，已存在的环境变量不会被覆盖

    Args:
        path: .env 文件路径，默认为当前目录下的 .env

    Returns:
        bool: 是否加载了文件
    """
    env_file = path or DEFAULT_FILES["env_file"]
    if not os.path.isfile(env_file):
        return False
    logger.debug(f"加载环境变量文件 {env_file}")
    return load_dotenv(env_file, override=False)


def get_config_manager(ctx: typer.Context) -> ConfigManager:
    """
    获取当前命令的配置管理器

    Args:
        ctx: typer上下文

    Returns:
        ConfigManager: 配置管理器，未指定配置文件时只包含默认值
    """
    obj = ctx.ensure_object(dict)
    if "config_manager" not in obj:
        obj["config_manager"] = ConfigManager()
    return cast(ConfigManager, obj["config_manager"])


def collect_options(**options: Optional[str]) -> Dict[str, Optional[str]]:
    """将空字符串参数视为未指定"""
    return {key: (value if value != "" else None) for key, value in options.items()}


def report_failure(message: str) -> None:
    """
    输出失败信息，在GitHub Actions中同时输出错误注解

    Args:
        message: 错误信息
    """
    logger.error(message)
    if running_in_github_actions():
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        print(f"::error title=dockship::{escaped}")


def handle_pipeline_errors(func: F) -> F:
    """
    将流水线错误转换为非零退出码的装饰器

    Args:
        func: 被装饰的命令函数

    Returns:
        Callable: 装饰后的函数
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PipelineError as e:
            category = CATEGORY_NAMES.get(e.category, e.category)
            report_failure(f"{category}错误: {e}")
            sys.exit(1)
        except docker.errors.DockerException as e:
            report_failure(f"无法连接到Docker: {e}")
            sys.exit(1)

    return cast(F, wrapper)
