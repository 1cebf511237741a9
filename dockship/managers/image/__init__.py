"""Docker镜像管理相关功能模块

该子包包含镜像管理相关的各个功能模块，如登录、构建、拉取、标签和推送。
"""

from .auth import RegistryAuthenticator
from .base import (
    BuildParameters,
    ImageBuildError,
    ImagePullError,
    ImagePushError,
    ImageReference,
    ImageTagError,
    InputParseError,
    InputValidationError,
    PipelineError,
    PromotionParameters,
    RegistryCredentials,
    RegistryLoginError,
)
from .build import ImageBuilder
from .pull import ImagePuller
from .push import ImagePusher
from .tag import ImageTagger
from .utils import (
    build_tag_list,
    format_image_reference,
    parse_bool,
    parse_image_name,
    parse_image_reference,
    parse_json_mapping,
    require_image_name,
    require_tag,
    resolve_registry,
)

__all__ = [
    "PipelineError",
    "InputValidationError",
    "InputParseError",
    "RegistryLoginError",
    "ImageBuildError",
    "ImagePullError",
    "ImageTagError",
    "ImagePushError",
    "ImageReference",
    "RegistryCredentials",
    "BuildParameters",
    "PromotionParameters",
    "RegistryAuthenticator",
    "ImageBuilder",
    "ImagePuller",
    "ImagePusher",
    "ImageTagger",
    "build_tag_list",
    "format_image_reference",
    "parse_bool",
    "parse_image_name",
    "parse_image_reference",
    "parse_json_mapping",
    "require_image_name",
    "require_tag",
    "resolve_registry",
]
