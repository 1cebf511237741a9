"""CLI命令行接口模块"""

from typing import Optional

import typer
from loguru import logger

from dockship.cli_utils import (
    collect_options,
    get_config_manager,
    handle_pipeline_errors,
    load_env_file,
    set_log_level,
)
from dockship.constants import ENV_VARS, OUTPUT_NAMES
from dockship.managers.config_manager import ConfigManager
from dockship.managers.pipeline import BuildPipeline, PromotionPipeline

# 创建CLI应用
app = typer.Typer(
    help="Docker镜像构建与晋升工具",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback()
@handle_pipeline_errors
def main_callback(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, "-c", "--config", help="配置文件路径（YAML或JSON）"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="输出调试日志"),
):
    """Docker镜像构建与晋升工具"""
    set_log_level(verbose)
    load_env_file()
    ctx.ensure_object(dict)
    ctx.obj["config_manager"] = ConfigManager(config)


@app.command("build")
@handle_pipeline_errors
def build_image(
    ctx: typer.Context,
    dockerfile: Optional[str] = typer.Option(None, "--dockerfile", help="Dockerfile路径，默认 Dockerfile"),
    context: Optional[str] = typer.Option(None, "--context", help="构建上下文，默认当前目录"),
    image_name: Optional[str] = typer.Option(None, "--image-name", help="镜像名称（必需）"),
    image_tag: Optional[str] = typer.Option(None, "--image-tag", help="镜像标签，默认 latest"),
    registry: Optional[str] = typer.Option(None, "--registry", help="仓库地址，默认从镜像名称推断"),
    push: Optional[str] = typer.Option(None, "--push", help="构建后是否推送 (true/false)"),
    platforms: Optional[str] = typer.Option(None, "--platforms", help="目标平台，逗号分隔"),
    build_args: Optional[str] = typer.Option(None, "--build-args", help="构建参数，JSON对象"),
    cache_from: Optional[str] = typer.Option(None, "--cache-from", help="buildx 缓存来源"),
    cache_to: Optional[str] = typer.Option(None, "--cache-to", help="buildx 缓存目标"),
    labels: Optional[str] = typer.Option(None, "--labels", help="镜像标签元数据，JSON对象"),
    registry_username: Optional[str] = typer.Option(None, "--registry-username", help="仓库用户名"),
    registry_password: Optional[str] = typer.Option(
        None, "--registry-password", envvar=ENV_VARS["registry_password"], help="仓库密码"
    ),
):
    """构建Docker镜像并按需推送"""
    options = collect_options(
        dockerfile=dockerfile,
        context=context,
        image_name=image_name,
        image_tag=image_tag,
        registry=registry,
        push=push,
        platforms=platforms,
        build_args=build_args,
        cache_from=cache_from,
        cache_to=cache_to,
        labels=labels,
        registry_username=registry_username,
        registry_password=registry_password,
    )
    config = get_config_manager(ctx).resolve("build", options)
    outputs = BuildPipeline(config).run()
    logger.success(f"镜像 {outputs[OUTPUT_NAMES['build_image']]} 处理完成")


@app.command("promote")
@handle_pipeline_errors
def promote_image(
    ctx: typer.Context,
    source_image: Optional[str] = typer.Option(None, "--source-image", help="源镜像名称（必需）"),
    source_tag: Optional[str] = typer.Option(None, "--source-tag", help="源镜像标签（必需）"),
    target_image: Optional[str] = typer.Option(None, "--target-image", help="目标镜像名称（必需）"),
    target_tag: Optional[str] = typer.Option(None, "--target-tag", help="目标镜像主标签（必需）"),
    source_registry: Optional[str] = typer.Option(None, "--source-registry", help="源仓库地址"),
    target_registry: Optional[str] = typer.Option(None, "--target-registry", help="目标仓库地址"),
    source_username: Optional[str] = typer.Option(None, "--source-username", help="源仓库用户名"),
    source_password: Optional[str] = typer.Option(
        None, "--source-password", envvar=ENV_VARS["source_password"], help="源仓库密码"
    ),
    target_username: Optional[str] = typer.Option(None, "--target-username", help="目标仓库用户名"),
    target_password: Optional[str] = typer.Option(
        None, "--target-password", envvar=ENV_VARS["target_password"], help="目标仓库密码"
    ),
    additional_tags: Optional[str] = typer.Option(None, "--additional-tags", help="附加标签，逗号分隔"),
    skip_pull: Optional[str] = typer.Option(None, "--skip-pull", help="是否跳过拉取源镜像 (true/false)"),
):
    """将已构建的镜像以新标签晋升到目标仓库"""
    options = collect_options(
        source_image=source_image,
        source_tag=source_tag,
        target_image=target_image,
        target_tag=target_tag,
        source_registry=source_registry,
        target_registry=target_registry,
        source_username=source_username,
        source_password=source_password,
        target_username=target_username,
        target_password=target_password,
        additional_tags=additional_tags,
        skip_pull=skip_pull,
    )
    config = get_config_manager(ctx).resolve("promote", options)
    outputs = PromotionPipeline(config).run()
    logger.success(f"镜像已晋升为 {outputs[OUTPUT_NAMES['promoted_image']]}")


def main():
    """主入口函数"""
    app()


if __name__ == "__main__":
    main()
