"""工具函数模块"""

import os
import shlex
import subprocess
from collections import deque
from typing import Deque, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from .constants import ENV_VARS

# 流式命令失败时保留的输出行数
STREAM_TAIL_LINES = 50


def run_command(
    args: Sequence[str],
    check: bool = True,
    input_text: Optional[str] = None,
    cwd: Optional[str] = None,
) -> Tuple[int, str, str]:
    """
    运行命令并返回结果

    Args:
        args: 命令及参数列表
        check: 是否检查返回码
        input_text: 写入标准输入的内容（例如密码）
        cwd: 工作目录

    Returns:
        (返回码, 标准输出, 标准错误)

    Raises:
        subprocess.CalledProcessError: check为True且命令失败时抛出
    """
    command = list(args)
    logger.debug(f"执行命令: {shlex.join(command)}")

    process = subprocess.Popen(
        command,
        stdin=subprocess.PIPE if input_text is not None else None,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        universal_newlines=True,
        cwd=cwd,
    )

    # 获取输出
    stdout, stderr = process.communicate(input=input_text)
    return_code = process.returncode

    # 检查返回码
    if check and return_code != 0:
        logger.error(f"命令执行失败: {shlex.join(command)}")
        raise subprocess.CalledProcessError(return_code, command, stdout, stderr)

    return return_code, stdout, stderr


def stream_command(args: Sequence[str], cwd: Optional[str] = None) -> None:
    """
    运行命令并实时输出日志

    标准错误合并到标准输出。命令失败时，异常的output中包含最后几行输出。

    Args:
        args: 命令及参数列表
        cwd: 工作目录

    Raises:
        subprocess.CalledProcessError: 命令返回非零时抛出
    """
    command = list(args)
    logger.debug(f"执行命令: {shlex.join(command)}")

    tail: Deque[str] = deque(maxlen=STREAM_TAIL_LINES)
    process = subprocess.Popen(
        command,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        universal_newlines=True,
        cwd=cwd,
    )
    assert process.stdout is not None
    for line in process.stdout:
        log_line = line.rstrip()
        if log_line:
            logger.info(log_line)
            tail.append(log_line)
    return_code = process.wait()

    if return_code != 0:
        logger.error(f"命令执行失败: {shlex.join(command)}")
        raise subprocess.CalledProcessError(return_code, command, "\n".join(tail))


def command_error_details(error: subprocess.CalledProcessError) -> str:
    """提取命令失败时的错误文本，优先使用标准错误"""
    stderr = (error.stderr or "").strip()
    stdout = (error.output or "").strip()
    return stderr or stdout or str(error)


def write_github_outputs(values: Mapping[str, str]) -> bool:
    """
    写入GitHub Actions步骤输出

    Args:
        values: 输出名称和值

    Returns:
        bool: 是否写入了输出文件（未设置GITHUB_OUTPUT时返回False）
    """
    output_file = os.environ.get(ENV_VARS["output"])
    if not output_file:
        logger.debug("未设置GITHUB_OUTPUT，跳过写入步骤输出")
        return False

    with open(output_file, "a", encoding="utf-8") as handle:
        for key, value in values.items():
            handle.write(f"{key}={value}\n")
    return True


def append_step_summary(lines: List[str]) -> bool:
    """
    追加Markdown内容到GitHub Actions任务摘要

    Args:
        lines: Markdown行

    Returns:
        bool: 是否写入了摘要文件
    """
    summary_file = os.environ.get(ENV_VARS["step_summary"])
    if not summary_file:
        return False

    with open(summary_file, "a", encoding="utf-8") as handle:
        handle.write("\n".join(lines) + "\n")
    return True


def running_in_github_actions() -> bool:
    """是否运行在GitHub Actions中"""
    return os.environ.get(ENV_VARS["github_actions"], "").lower() == "true"
