"""常量配置模块"""

from typing import Dict, List, Optional, TypedDict

# 默认仓库（GitHub Container Registry）
DEFAULT_REGISTRY: str = "ghcr.io"
DEFAULT_TAG: str = "latest"


# 文件相关
class DefaultFiles(TypedDict):
    dockerfile: str
    context: str
    config_file: str
    env_file: str


DEFAULT_FILES: DefaultFiles = {
    "dockerfile": "Dockerfile",
    "context": ".",
    "config_file": "dockship.yml",
    "env_file": ".env",
}


# 环境变量名称
class EnvVars(TypedDict):
    actor: str
    output: str
    step_summary: str
    github_actions: str
    registry_password: str
    source_password: str
    target_password: str


ENV_VARS: EnvVars = {
    "actor": "GITHUB_ACTOR",
    "output": "GITHUB_OUTPUT",
    "step_summary": "GITHUB_STEP_SUMMARY",
    "github_actions": "GITHUB_ACTIONS",
    "registry_password": "REGISTRY_PASSWORD",
    "source_password": "SOURCE_PASSWORD",
    "target_password": "TARGET_PASSWORD",
}


# 流水线默认配置
class BuildConfig(TypedDict):
    dockerfile: str
    context: str
    image_name: Optional[str]
    image_tag: str
    registry: Optional[str]
    push: str
    platforms: Optional[str]
    build_args: Optional[str]
    cache_from: Optional[str]
    cache_to: Optional[str]
    labels: Optional[str]
    registry_username: Optional[str]
    registry_password: Optional[str]


class PromoteConfig(TypedDict):
    source_image: Optional[str]
    source_tag: Optional[str]
    target_image: Optional[str]
    target_tag: Optional[str]
    source_registry: Optional[str]
    target_registry: Optional[str]
    source_username: Optional[str]
    source_password: Optional[str]
    target_username: Optional[str]
    target_password: Optional[str]
    additional_tags: Optional[str]
    skip_pull: str


class DefaultConfig(TypedDict):
    build: BuildConfig
    promote: PromoteConfig


DEFAULT_CONFIG: DefaultConfig = {
    "build": {
        "dockerfile": DEFAULT_FILES["dockerfile"],
        "context": DEFAULT_FILES["context"],
        "image_name": None,
        "image_tag": DEFAULT_TAG,
        "registry": None,  # 未指定时从镜像名称推断
        "push": "false",
        "platforms": None,
        "build_args": None,
        "cache_from": None,
        "cache_to": None,
        "labels": None,
        "registry_username": None,
        "registry_password": None,
    },
    "promote": {
        "source_image": None,
        "source_tag": None,
        "target_image": None,
        "target_tag": None,
        "source_registry": None,
        "target_registry": None,
        "source_username": None,
        "source_password": None,
        "target_username": None,
        "target_password": None,
        "additional_tags": None,
        "skip_pull": "false",
    },
}

# 配置文件中不允许出现的键（密码只能来自命令行或环境变量）
SECRET_CONFIG_KEYS: List[str] = ["registry_password", "source_password", "target_password"]

# 布尔输入的合法取值
TRUE_VALUES: List[str] = ["true", "1", "yes", "on"]
FALSE_VALUES: List[str] = ["false", "0", "no", "off", ""]

# 输出名称
class OutputNames(TypedDict):
    build_image: str
    promoted_image: str


OUTPUT_NAMES: OutputNames = {
    "build_image": "image",
    "promoted_image": "promoted-image",
}

# 错误消息
ERROR_MESSAGES: Dict[str, str] = {
    "required": "缺少必需的输入: {}",
    "invalid_bool": "输入 {} 的值无效: '{}'，应为 true 或 false",
    "invalid_json": "输入 {} 不是合法的JSON: {}",
    "not_object": "输入 {} 必须是JSON对象，实际为 {}",
    "nested_value": "输入 {} 中键 '{}' 的值必须是字符串、数字或布尔值",
    "dockerfile_missing": "Dockerfile不存在: {}",
    "context_missing": "构建上下文目录不存在: {}",
    "username_missing": "登录 {} 需要用户名",
    "target_password": "推送到目标仓库需要提供 target-password",
    "invalid_image": "输入 {} 不是有效的镜像名称: '{}'",
    "image_has_tag": "输入 {} 不能包含标签: '{}'，请通过对应的标签输入指定",
    "invalid_tag": "输入 {} 的标签无效: '{}'",
    "config_missing": "配置文件不存在: {}",
    "config_invalid": "配置验证失败: {}",
}

# 日志格式
LOG_FORMAT: str = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
