"""
命令行接口的单元测试
"""
from unittest.mock import MagicMock, call

import pytest
from typer.testing import CliRunner

from dockship.cli import app
from dockship.managers.image_manager import ImageManager

runner = CliRunner()

PROMOTE_ARGS = [
    "promote",
    "--source-image", "ghcr.io/o/app",
    "--source-tag", "v1",
    "--target-image", "ghcr.io/o/app",
    "--target-tag", "staging",
]


@pytest.fixture
def manager(monkeypatch, tmp_path):
    """替换流水线创建的镜像管理器，并在临时目录中运行"""
    monkeypatch.chdir(tmp_path)
    manager = MagicMock(spec=ImageManager)
    manager.build_image.return_value = False
    monkeypatch.setattr("dockship.managers.pipeline.base.ImageManager", lambda: manager)
    return manager


class TestCli:
    """CLI 测试"""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "build" in result.output
        assert "promote" in result.output

    def test_promote(self, manager):
        result = runner.invoke(
            app,
            PROMOTE_ARGS + ["--additional-tags", "latest"],
            env={"TARGET_PASSWORD": "token"},
        )

        assert result.exit_code == 0, result.output
        assert manager.push_image.call_args_list == [
            call("ghcr.io/o/app:staging"),
            call("ghcr.io/o/app:latest"),
        ]
        assert "ghcr.io/o/app:staging" in result.output

    def test_promote_without_target_password(self, manager):
        result = runner.invoke(app, PROMOTE_ARGS)

        assert result.exit_code == 1
        assert "target-password" in result.output
        assert manager.mock_calls == []

    def test_github_error_annotation(self, manager):
        result = runner.invoke(app, PROMOTE_ARGS, env={"GITHUB_ACTIONS": "true"})
        assert result.exit_code == 1
        assert "::error title=dockship::" in result.output

    def test_empty_options_are_ignored(self, manager):
        """空字符串参数等同于未指定"""
        result = runner.invoke(
            app,
            PROMOTE_ARGS + ["--source-registry", "", "--skip-pull", ""],
            env={"TARGET_PASSWORD": "token"},
        )
        assert result.exit_code == 0, result.output
        manager.pull_image.assert_called_once_with("ghcr.io/o/app:v1")

    def test_build(self, manager, tmp_path):
        (tmp_path / "Dockerfile").write_text("FROM alpine\n", encoding="utf-8")
        result = runner.invoke(
            app,
            ["build", "--image-name", "ghcr.io/o/app", "--image-tag", "v2", "--push", "true"],
        )

        assert result.exit_code == 0, result.output
        manager.build_image.assert_called_once()
        manager.push_image.assert_called_once_with("ghcr.io/o/app:v2")

    def test_build_with_malformed_build_args(self, manager, tmp_path):
        (tmp_path / "Dockerfile").write_text("FROM alpine\n", encoding="utf-8")
        result = runner.invoke(
            app, ["build", "--image-name", "ghcr.io/o/app", "--build-args", "{not json}"]
        )

        assert result.exit_code == 1
        assert "build-args" in result.output
        manager.build_image.assert_not_called()

    def test_config_file(self, manager, tmp_path):
        """配置文件提供默认输入，命令行参数优先"""
        (tmp_path / "Dockerfile").write_text("FROM alpine\n", encoding="utf-8")
        (tmp_path / "dockship.yml").write_text(
            "build:\n  image-name: ghcr.io/o/app\n  image-tag: from-file\n", encoding="utf-8"
        )
        result = runner.invoke(app, ["--config", "dockship.yml", "build", "--image-tag", "v3"])

        assert result.exit_code == 0, result.output
        params = manager.build_image.call_args[0][0]
        assert params["image_name"] == "ghcr.io/o/app"
        assert params["image_tag"] == "v3"

    def test_missing_config_file(self, manager):
        result = runner.invoke(app, ["--config", "missing.yml", "build"])
        assert result.exit_code == 1
        assert "missing.yml" in result.output

    def test_env_file(self, manager, tmp_path):
        """.env 文件中的密码会被读取"""
        (tmp_path / ".env").write_text("TARGET_PASSWORD=from-dotenv\n", encoding="utf-8")
        result = runner.invoke(app, PROMOTE_ARGS)

        assert result.exit_code == 0, result.output
        assert call.login("ghcr.io", None, "from-dotenv") in manager.mock_calls
