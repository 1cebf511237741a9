"""镜像晋升流水线"""

from typing import List, Mapping, Optional

from loguru import logger

from ...constants import ERROR_MESSAGES, OUTPUT_NAMES
from ...formatters.summary import format_promotion_summary
from ..image.base import InputValidationError, PipelineError, PromotionParameters
from ..image.utils import (
    build_tag_list,
    format_image_reference,
    parse_bool,
    require_image_name,
    require_tag,
    resolve_registry,
)
from ..image_manager import ImageManager
from .base import BasePipeline, Step


class PromotionPipeline(BasePipeline):
    """
    将已构建的镜像以新标签推送到目标仓库

    步骤：验证输入、解析仓库和凭据、登录源仓库和目标仓库、拉取源镜像、
    逐个打标签并推送、输出主标签对应的镜像引用。
    """

    name = "镜像晋升流水线"

    def __init__(
        self, config: Mapping[str, Optional[str]], image_manager: Optional[ImageManager] = None
    ) -> None:
        """
        初始化晋升流水线

        Args:
            config: 合并后的晋升配置，键名与 constants.PromoteConfig 一致
            image_manager: 镜像管理器
        """
        super().__init__(image_manager)
        self.config = config
        self.params: Optional[PromotionParameters] = None
        self.pushed: List[str] = []

    def steps(self) -> List[Step]:
        return [
            ("验证输入", self.validate),
            ("解析仓库和凭据", self.resolve),
            ("登录仓库", self.authenticate),
            ("获取源镜像", self.acquire_source),
            ("添加标签并推送", self.tag_and_push),
            ("输出结果", self.emit),
        ]

    def _value(self, key: str) -> Optional[str]:
        value = self.config.get(key)
        if value is None or not str(value).strip():
            return None
        return str(value).strip()

    def validate(self) -> None:
        """
        验证晋升输入，在任何外部调用之前执行

        Raises:
            InputValidationError: 缺少必需输入、缺少目标仓库密码或布尔值无效时抛出
        """
        source_image = require_image_name("source-image", self.config.get("source_image"))
        source_tag = require_tag("source-tag", self.config.get("source_tag"))
        target_image = require_image_name("target-image", self.config.get("target_image"))
        target_tag = require_tag("target-tag", self.config.get("target_tag"))
        tags = build_tag_list(target_tag, self.config.get("additional_tags"))
        for tag in tags[1:]:
            require_tag("additional-tags", tag)
        skip_pull = parse_bool("skip-pull", self.config.get("skip_pull"))

        target_password = self.config.get("target_password")
        if not target_password:
            raise InputValidationError(ERROR_MESSAGES["target_password"])

        self.params = {
            "source_image": source_image,
            "source_tag": source_tag,
            "target_image": target_image,
            "target_tag": target_tag,
            "source_registry": "",
            "target_registry": "",
            "tags": tags,
            "skip_pull": skip_pull,
            "source_credentials": {
                "username": self._value("source_username"),
                "password": self.config.get("source_password") or None,
            },
            "target_credentials": {
                "username": self._value("target_username"),
                "password": target_password,
            },
        }

    def resolve(self) -> None:
        """解析源仓库和目标仓库"""
        params = self._require_params()
        params["source_registry"] = resolve_registry(
            params["source_image"], self._value("source_registry")
        )
        params["target_registry"] = resolve_registry(
            params["target_image"], self._value("target_registry")
        )
        logger.info(f"源仓库: {params['source_registry']}，目标仓库: {params['target_registry']}")
        logger.info(f"待推送标签: {', '.join(params['tags'])}")

    def authenticate(self) -> None:
        """提供了源仓库密码时登录源仓库，然后登录目标仓库"""
        params = self._require_params()
        source = params["source_credentials"]
        target = params["target_credentials"]
        self.image_manager.login(params["source_registry"], source["username"], source["password"])
        self.image_manager.login(params["target_registry"], target["username"], target["password"])

    def acquire_source(self) -> None:
        """skip-pull 为 false 时拉取源镜像，否则假定镜像已在本地"""
        params = self._require_params()
        if params["skip_pull"]:
            logger.info(f"skip-pull 为 true，使用本地镜像 {self.source_ref}")
            return
        self.image_manager.pull_image(self.source_ref)

    def tag_and_push(self) -> None:
        """
        按顺序为每个标签打标签并推送

        任一标签失败时中止，之前已推送的标签保留在仓库中。

        Raises:
            ImageTagError: 打标签失败时抛出
            ImagePushError: 推送失败时抛出
        """
        params = self._require_params()
        for tag in params["tags"]:
            target_ref = format_image_reference(params["target_image"], tag)
            try:
                self.image_manager.tag_image(self.source_ref, target_ref)
                self.image_manager.push_image(target_ref)
            except PipelineError:
                if self.pushed:
                    logger.error(f"晋升未完成，以下镜像已推送且不会回滚: {', '.join(self.pushed)}")
                raise
            self.pushed.append(target_ref)

    def emit(self) -> None:
        """输出主标签对应的镜像引用"""
        self.outputs[OUTPUT_NAMES["promoted_image"]] = self.promoted_image
        self.emit_outputs()
        format_promotion_summary(self.source_ref, self.promoted_image, self.pushed)

    @property
    def source_ref(self) -> str:
        params = self._require_params()
        return format_image_reference(params["source_image"], params["source_tag"])

    @property
    def promoted_image(self) -> str:
        params = self._require_params()
        return format_image_reference(params["target_image"], params["target_tag"])

    def _require_params(self) -> PromotionParameters:
        if self.params is None:
            raise InputValidationError("晋升参数尚未验证")
        return self.params
