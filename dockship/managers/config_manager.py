"""配置管理器类"""

import json
import os
from typing import Any, Dict, Mapping, Optional, Type, Union, cast

import yaml
from loguru import logger

from ..constants import DEFAULT_CONFIG, ERROR_MESSAGES, SECRET_CONFIG_KEYS
from .image.base import InputValidationError


class ConfigError(InputValidationError):
    """配置错误"""

    pass


ValidationStructure = Dict[str, Union[Type[Any], "ValidationStructure"]]


def generate_validation_structure(config_template: Mapping[str, Any]) -> ValidationStructure:
    """
    从配置模板生成验证结构

    Args:
        config_template: 配置模板

    Returns:
        ValidationStructure: 验证结构
    """
    validation_structure: ValidationStructure = {}

    for key, value in config_template.items():
        if isinstance(value, dict):
            validation_structure[key] = generate_validation_structure(value)
        elif value is None:
            validation_structure[key] = str
        else:
            validation_structure[key] = type(value)

    return validation_structure


def _normalize_value(value: Any) -> Optional[str]:
    """将配置文件中的标量值转为字符串，映射转为JSON字符串"""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, dict):
        return json.dumps(value)
    if isinstance(value, list):
        return ",".join(str(item) for item in value)
    raise ConfigError(f"不支持的配置值类型: {type(value).__name__}")


class ConfigManager:
    """配置管理器类，合并默认值、配置文件和命令行参数"""

    config_file: Optional[str]
    file_config: Dict[str, Dict[str, Optional[str]]]
    REQUIRED_CONFIG_FIELDS: ValidationStructure

    def __init__(self, config_file: Optional[str] = None) -> None:
        """
        初始化配置管理器

        Args:
            config_file: 配置文件路径（YAML或JSON），默认为None
        """
        self.config_file = config_file
        self.file_config = {}

        # 初始化验证结构
        self.REQUIRED_CONFIG_FIELDS = generate_validation_structure(DEFAULT_CONFIG)

        if config_file:
            self.load_config()

    def load_config(self) -> Dict[str, Dict[str, Optional[str]]]:
        """
        加载配置文件

        Returns:
            Dict: 规范化后的配置

        Raises:
            ConfigError: 配置加载失败时抛出
        """
        if not self.config_file or not os.path.exists(self.config_file):
            raise ConfigError(ERROR_MESSAGES["config_missing"].format(self.config_file))

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(ERROR_MESSAGES["config_invalid"].format(e)) from e

        self.file_config = self.validate_config(raw_config)
        logger.debug(f"已加载配置文件 {self.config_file}")
        return self.file_config

    def validate_config(self, config: Any) -> Dict[str, Dict[str, Optional[str]]]:
        """
        验证配置结构并规范化取值

        配置文件只能包含已知的流水线和输入名称，且不能包含密码。

        Args:
            config: 从文件读取的配置

        Returns:
            Dict: 规范化后的配置

        Raises:
            ConfigError: 配置验证失败时抛出
        """
        if not isinstance(config, dict):
            raise ConfigError(ERROR_MESSAGES["config_invalid"].format("顶层必须是映射"))

        normalized: Dict[str, Dict[str, Optional[str]]] = {}
        for section, values in config.items():
            expected = self.REQUIRED_CONFIG_FIELDS.get(section)
            if not isinstance(expected, dict):
                raise ConfigError(ERROR_MESSAGES["config_invalid"].format(f"未知的配置节: {section}"))
            if values is None:
                values = {}
            if not isinstance(values, dict):
                raise ConfigError(
                    ERROR_MESSAGES["config_invalid"].format(f"配置节 {section} 应为映射")
                )

            normalized[section] = {}
            for key, value in values.items():
                option = str(key).replace("-", "_")
                if option in SECRET_CONFIG_KEYS:
                    raise ConfigError(
                        ERROR_MESSAGES["config_invalid"].format(f"配置文件中不能包含密码: {key}")
                    )
                if option not in expected:
                    raise ConfigError(
                        ERROR_MESSAGES["config_invalid"].format(f"未知的配置项: {section}.{key}")
                    )
                normalized[section][option] = _normalize_value(value)

        return normalized

    def resolve(
        self, section: str, overrides: Mapping[str, Optional[str]]
    ) -> Dict[str, Optional[str]]:
        """
        合并某个流水线的配置

        优先级：命令行参数 > 配置文件 > 默认值。值为None的参数视为未指定。

        Args:
            section: 流水线名称（build 或 promote）
            overrides: 命令行参数

        Returns:
            Dict[str, Optional[str]]: 合并后的配置
        """
        defaults = cast(Mapping[str, Optional[str]], DEFAULT_CONFIG.get(section, {}))
        resolved: Dict[str, Optional[str]] = dict(defaults)
        resolved.update(self.file_config.get(section, {}))
        for key, value in overrides.items():
            if value is not None:
                resolved[key] = value
        return resolved
