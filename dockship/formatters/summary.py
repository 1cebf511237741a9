"""流水线结果格式化模块"""

from typing import List

from loguru import logger

from ..managers.image.base import BuildParameters
from ..utils import append_step_summary


def format_build_summary(image_ref: str, params: BuildParameters, pushed: bool) -> None:
    """格式化并显示构建结果

    Args:
        image_ref: 镜像引用
        params: 构建参数
        pushed: 镜像是否已推送
    """
    platforms = ", ".join(params["platforms"]) or "本机架构"
    logger.info("\n构建结果:")
    logger.info(f"  镜像: {image_ref}")
    logger.info(f"  平台: {platforms}")
    logger.info(f"  已推送: {'是' if pushed else '否'}")

    append_step_summary(
        [
            "### 镜像构建",
            "",
            "| 项目 | 值 |",
            "| --- | --- |",
            f"| 镜像 | `{image_ref}` |",
            f"| 平台 | {platforms} |",
            f"| 已推送 | {'是' if pushed else '否'} |",
        ]
    )


def format_promotion_summary(source_ref: str, promoted_image: str, pushed: List[str]) -> None:
    """格式化并显示晋升结果

    Args:
        source_ref: 源镜像引用
        promoted_image: 主标签对应的镜像引用
        pushed: 已推送的镜像引用
    """
    logger.info("\n晋升结果:")
    logger.info(f"  源镜像: {source_ref}")
    logger.info(f"  晋升镜像: {promoted_image}")
    for image_ref in pushed:
        logger.info(f"  - {image_ref}")

    lines = [
        "### 镜像晋升",
        "",
        f"源镜像 `{source_ref}` 已晋升为 `{promoted_image}`",
        "",
    ]
    lines += [f"- `{image_ref}`" for image_ref in pushed]
    append_step_summary(lines)
