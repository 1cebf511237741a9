"""镜像管理基础类型定义"""

from typing import Dict, List, Optional, TypedDict


class PipelineError(Exception):
    """流水线错误基类，category 表示错误类别"""

    category: str = "pipeline"


class InputValidationError(PipelineError):
    """输入验证错误"""

    category = "validation"


class InputParseError(PipelineError):
    """输入解析错误"""

    category = "parse"


class RegistryLoginError(PipelineError):
    """仓库登录错误"""

    category = "auth"


class ImageBuildError(PipelineError):
    """镜像构建错误"""

    category = "build"


class ImagePullError(PipelineError):
    """镜像拉取错误"""

    category = "transfer"


class ImageTagError(PipelineError):
    """镜像标签错误"""

    category = "transfer"


class ImagePushError(PipelineError):
    """镜像推送错误"""

    category = "transfer"


class ImageReference(TypedDict):
    """镜像引用类型"""
    registry: Optional[str]
    repository: str
    tag: str


class RegistryCredentials(TypedDict):
    """仓库凭据类型"""
    username: Optional[str]
    password: Optional[str]


class BuildParameters(TypedDict):
    """构建参数类型"""
    image_name: str
    image_tag: str
    dockerfile: str
    context: str
    platforms: List[str]
    build_args: Dict[str, str]
    labels: Dict[str, str]
    cache_from: Optional[str]
    cache_to: Optional[str]
    push: bool


class PromotionParameters(TypedDict):
    """镜像晋升参数类型"""
    source_image: str
    source_tag: str
    target_image: str
    target_tag: str
    source_registry: str
    target_registry: str
    tags: List[str]
    skip_pull: bool
    source_credentials: RegistryCredentials
    target_credentials: RegistryCredentials
