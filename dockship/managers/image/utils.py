"""镜像管理工具函数"""

import json
import re
from typing import Dict, List, Optional, Tuple

from ...constants import DEFAULT_REGISTRY, DEFAULT_TAG, ERROR_MESSAGES, FALSE_VALUES, TRUE_VALUES
from .base import ImageReference, InputParseError, InputValidationError

# Docker标签格式：字母、数字、下划线开头，最长128个字符
TAG_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$")


def parse_image_name(image_name: str, default_tag: str = DEFAULT_TAG) -> Tuple[str, str]:
    """
    解析镜像名称，分离仓库名和标签

    只有最后一个 "/" 之后的冒号才被视为标签分隔符，
    因此 "localhost:5000/app" 中的端口不会被当作标签。

    Args:
        image_name: 镜像名称，格式为 "仓库名:标签"
        default_tag: 未包含标签时使用的默认标签

    Returns:
        Tuple[str, str]: 仓库名和标签
    """
    last_segment = image_name.rsplit("/", 1)[-1]
    if ":" in last_segment:
        repository, tag = image_name.rsplit(":", 1)
    else:
        repository = image_name
        tag = default_tag
    return repository, tag


def registry_from_reference(reference: str) -> Optional[str]:
    """
    从镜像引用中提取仓库主机

    第一个 "/" 之前的部分包含 "." 或 ":" 时才视为仓库主机，
    例如 "ghcr.io/owner/app" 或 "localhost:5000/app"。
    "owner/app"、"localhost/app" 以及不含 "/" 的引用都没有仓库主机。

    Args:
        reference: 镜像引用

    Returns:
        Optional[str]: 仓库主机，未包含时返回None
    """
    if "/" not in reference:
        return None
    first_segment = reference.split("/", 1)[0]
    if "." in first_segment or ":" in first_segment:
        return first_segment
    return None


def resolve_registry(reference: str, override: Optional[str] = None) -> str:
    """
    解析镜像所属的仓库

    Args:
        reference: 镜像引用
        override: 显式指定的仓库，非空时原样返回

    Returns:
        str: 仓库主机，无法从引用中推断时返回默认仓库
    """
    if override:
        return override
    return registry_from_reference(reference) or DEFAULT_REGISTRY


def parse_image_reference(reference: str, default_tag: str = DEFAULT_TAG) -> ImageReference:
    """
    解析完整的镜像引用

    Args:
        reference: 镜像引用，例如 "ghcr.io/owner/app:v1"
        default_tag: 未包含标签时使用的默认标签

    Returns:
        ImageReference: 解析结果，引用中没有仓库主机时 registry 为None

    Raises:
        InputValidationError: 仓库名或标签为空时抛出
    """
    name, tag = parse_image_name(reference.strip(), default_tag)
    registry = registry_from_reference(name)
    repository = name.split("/", 1)[1] if registry else name
    if not repository or not tag:
        raise InputValidationError(f"无效的镜像引用: '{reference}'")
    return {"registry": registry, "repository": repository, "tag": tag}


def format_image_reference(image: str, tag: str) -> str:
    """拼接镜像名称和标签"""
    return f"{image}:{tag}"


def split_list(raw: Optional[str]) -> List[str]:
    """
    解析逗号分隔的列表，去掉空白和空项，保留顺序和重复项

    Args:
        raw: 逗号分隔的字符串

    Returns:
        List[str]: 列表项
    """
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def build_tag_list(target_tag: str, additional_tags: Optional[str] = None) -> List[str]:
    """
    生成要推送的标签列表

    主标签在前，附加标签按输入顺序排列，不去重。

    Args:
        target_tag: 主标签
        additional_tags: 逗号分隔的附加标签

    Returns:
        List[str]: 标签列表
    """
    return [target_tag] + split_list(additional_tags)


def parse_bool(name: str, value: Optional[str], default: bool = False) -> bool:
    """
    解析字符串形式的布尔输入

    Args:
        name: 输入名称，用于错误提示
        value: 输入值
        default: 值为None时的默认值

    Returns:
        bool: 解析结果

    Raises:
        InputValidationError: 无法识别的取值
    """
    if value is None:
        return default
    normalized = str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise InputValidationError(ERROR_MESSAGES["invalid_bool"].format(name, value))


def parse_json_mapping(name: str, raw: Optional[str]) -> Dict[str, str]:
    """
    将JSON对象字符串解析为键值对

    字符串原样保留；数字和布尔值按JSON写法转为字符串（例如 true、1.5）；
    null 转为空字符串。嵌套的对象或数组不被接受。

    Args:
        name: 输入名称，用于错误提示
        raw: JSON对象字符串

    Returns:
        Dict[str, str]: 键值对，输入为空时返回空字典

    Raises:
        InputParseError: JSON格式错误或不是扁平对象时抛出
    """
    if raw is None or not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InputParseError(ERROR_MESSAGES["invalid_json"].format(name, e)) from e

    if not isinstance(data, dict):
        raise InputParseError(ERROR_MESSAGES["not_object"].format(name, type(data).__name__))

    result: Dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = value
        elif value is None:
            result[key] = ""
        elif isinstance(value, (bool, int, float)):
            result[key] = json.dumps(value)
        else:
            raise InputParseError(ERROR_MESSAGES["nested_value"].format(name, key))
    return result


def require_value(name: str, value: Optional[str]) -> str:
    """
    返回必需的输入值

    Raises:
        InputValidationError: 值为空时抛出
    """
    if value is None or not str(value).strip():
        raise InputValidationError(ERROR_MESSAGES["required"].format(name))
    return str(value).strip()


def require_image_name(name: str, value: Optional[str]) -> str:
    """
    返回必需的镜像名称（不含标签）

    名称的每一段都不能为空，仓库名不能为空，最后一段不能带标签，
    标签只能通过对应的标签输入指定。

    Args:
        name: 输入名称，用于错误提示
        value: 镜像名称，例如 "ghcr.io/owner/app"

    Returns:
        str: 去掉首尾空白的镜像名称

    Raises:
        InputValidationError: 名称为空、格式无效或包含标签时抛出
    """
    image = require_value(name, value)
    if not all(image.split("/")) or any(char.isspace() for char in image):
        raise InputValidationError(ERROR_MESSAGES["invalid_image"].format(name, image))
    if ":" in image.rsplit("/", 1)[-1]:
        raise InputValidationError(ERROR_MESSAGES["image_has_tag"].format(name, image))
    try:
        parse_image_reference(image)
    except InputValidationError as e:
        raise InputValidationError(ERROR_MESSAGES["invalid_image"].format(name, image)) from e
    return image


def require_tag(name: str, value: Optional[str]) -> str:
    """
    返回合法的镜像标签

    Raises:
        InputValidationError: 标签为空或不符合Docker标签格式时抛出
    """
    tag = require_value(name, value)
    if not TAG_PATTERN.match(tag):
        raise InputValidationError(ERROR_MESSAGES["invalid_tag"].format(name, tag))
    return tag
