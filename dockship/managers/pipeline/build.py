"""镜像构建流水线"""

import os
from typing import List, Mapping, Optional, cast

from loguru import logger

from ...constants import DEFAULT_FILES, DEFAULT_TAG, ERROR_MESSAGES, OUTPUT_NAMES
from ...formatters.summary import format_build_summary
from ..image.base import BuildParameters, InputValidationError
from ..image.utils import (
    format_image_reference,
    parse_bool,
    parse_json_mapping,
    require_image_name,
    require_tag,
    resolve_registry,
    split_list,
)
from ..image_manager import ImageManager
from .base import BasePipeline, Step


class BuildPipeline(BasePipeline):
    """构建镜像并按需推送"""

    name = "镜像构建流水线"

    def __init__(
        self, config: Mapping[str, Optional[str]], image_manager: Optional[ImageManager] = None
    ) -> None:
        """
        初始化构建流水线

        Args:
            config: 合并后的构建配置，键名与 constants.BuildConfig 一致
            image_manager: 镜像管理器
        """
        super().__init__(image_manager)
        self.config = config
        self.params: Optional[BuildParameters] = None
        self.registry: Optional[str] = None
        self.pushed = False

    def steps(self) -> List[Step]:
        return [
            ("验证输入", self.validate),
            ("解析构建参数和标签", self.parse_inputs),
            ("解析仓库", self.resolve_registry),
            ("登录仓库", self.authenticate),
            ("构建镜像", self.build),
            ("推送镜像", self.push),
            ("输出结果", self.emit),
        ]

    def _value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self.config.get(key)
        if value is None or not str(value).strip():
            return default
        return str(value).strip()

    def validate(self) -> None:
        """
        验证构建输入

        Raises:
            InputValidationError: 缺少镜像名称、布尔值无效或文件不存在时抛出
        """
        image_name = require_image_name("image-name", self.config.get("image_name"))
        image_tag = require_tag("image-tag", self._value("image_tag", DEFAULT_TAG))
        dockerfile = cast(str, self._value("dockerfile", DEFAULT_FILES["dockerfile"]))
        context = cast(str, self._value("context", DEFAULT_FILES["context"]))
        push = parse_bool("push", self.config.get("push"))

        # 远程上下文（例如git地址）交给构建器处理
        remote_context = "://" in context
        if not remote_context and not os.path.isdir(context):
            raise InputValidationError(ERROR_MESSAGES["context_missing"].format(context))
        dockerfile = self._locate_dockerfile(dockerfile, context, remote_context)

        self.params = {
            "image_name": image_name,
            "image_tag": image_tag,
            "dockerfile": dockerfile,
            "context": context,
            "platforms": split_list(self.config.get("platforms")),
            "build_args": {},
            "labels": {},
            "cache_from": self._value("cache_from"),
            "cache_to": self._value("cache_to"),
            "push": push,
        }

    @staticmethod
    def _locate_dockerfile(dockerfile: str, context: str, remote_context: bool) -> str:
        """
        查找Dockerfile

        路径先按当前工作目录解析（与 docker build -f 相同），
        不存在时再在本地构建上下文中查找。

        Raises:
            InputValidationError: 两处都找不到时抛出
        """
        if os.path.isfile(dockerfile):
            return dockerfile
        if not remote_context and not os.path.isabs(dockerfile):
            candidate = os.path.join(context, dockerfile)
            if os.path.isfile(candidate):
                logger.debug(f"在构建上下文中找到 Dockerfile: {candidate}")
                return candidate
        raise InputValidationError(ERROR_MESSAGES["dockerfile_missing"].format(dockerfile))

    def parse_inputs(self) -> None:
        """
        解析JSON格式的构建参数和标签

        Raises:
            InputParseError: JSON格式错误时抛出
        """
        params = self._require_params()
        params["build_args"] = parse_json_mapping("build-args", self.config.get("build_args"))
        params["labels"] = parse_json_mapping("labels", self.config.get("labels"))
        if params["build_args"]:
            logger.info(f"构建参数: {', '.join(params['build_args'])}")
        if params["labels"]:
            logger.info(f"镜像标签: {', '.join(params['labels'])}")

    def resolve_registry(self) -> None:
        """确定登录和推送使用的仓库"""
        params = self._require_params()
        self.registry = resolve_registry(params["image_name"], self._value("registry"))
        logger.info(f"目标仓库: {self.registry}")

    def authenticate(self) -> None:
        """提供了仓库密码时登录仓库"""
        self.image_manager.login(
            cast(str, self.registry),
            self._value("registry_username"),
            self.config.get("registry_password") or None,
        )

    def build(self) -> None:
        """构建镜像，buildx 构建在需要时直接推送"""
        self.pushed = self.image_manager.build_image(self._require_params())

    def push(self) -> None:
        """push 为 true 且镜像尚未推送时推送镜像"""
        params = self._require_params()
        if not params["push"]:
            logger.info("push 为 false，跳过推送")
            return
        if self.pushed:
            logger.info("镜像已在构建过程中推送")
            return
        self.image_manager.push_image(self.image_ref)
        self.pushed = True

    def emit(self) -> None:
        """输出镜像引用"""
        self.outputs[OUTPUT_NAMES["build_image"]] = self.image_ref
        self.emit_outputs()
        format_build_summary(self.image_ref, self._require_params(), self.pushed)

    @property
    def image_ref(self) -> str:
        params = self._require_params()
        return format_image_reference(params["image_name"], params["image_tag"])

    def _require_params(self) -> BuildParameters:
        if self.params is None:
            raise InputValidationError("构建参数尚未验证")
        return self.params
