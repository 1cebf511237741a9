"""
配置管理器的单元测试
"""
import json

import pytest

from dockship.managers.config_manager import ConfigError, ConfigManager


@pytest.fixture
def write_config(tmp_path):
    def _write(content, name="dockship.yml"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


class TestConfigManager:
    """ConfigManager 测试"""

    def test_defaults_without_file(self):
        config = ConfigManager().resolve("build", {})
        assert config["dockerfile"] == "Dockerfile"
        assert config["context"] == "."
        assert config["image_tag"] == "latest"
        assert config["push"] == "false"
        assert config["image_name"] is None

    def test_load_yaml(self, write_config):
        path = write_config(
            "build:\n"
            "  image-name: ghcr.io/o/app\n"
            "  push: true\n"
            "  platforms:\n"
            "    - linux/amd64\n"
            "    - linux/arm64\n"
            "  build-args:\n"
            "    VERSION: '1.0'\n"
            "    JOBS: 4\n"
            "promote:\n"
            "  additional_tags: stable,prod\n"
        )
        manager = ConfigManager(path)

        build = manager.resolve("build", {})
        assert build["image_name"] == "ghcr.io/o/app"
        assert build["push"] == "true"
        assert build["platforms"] == "linux/amd64,linux/arm64"
        assert json.loads(build["build_args"]) == {"VERSION": "1.0", "JOBS": 4}
        assert manager.resolve("promote", {})["additional_tags"] == "stable,prod"

    def test_load_json(self, write_config):
        """JSON 文件同样可以作为配置"""
        path = write_config('{"promote": {"skip-pull": false}}', name="dockship.json")
        assert ConfigManager(path).resolve("promote", {})["skip_pull"] == "false"

    def test_precedence(self, write_config):
        """命令行参数 > 配置文件 > 默认值"""
        path = write_config("build:\n  image-name: from-file\n  image-tag: v1\n")
        config = ConfigManager(path).resolve(
            "build", {"image_name": "from-cli", "image_tag": None}
        )
        assert config["image_name"] == "from-cli"
        assert config["image_tag"] == "v1"
        assert config["dockerfile"] == "Dockerfile"

    def test_empty_file(self, write_config):
        path = write_config("")
        assert ConfigManager(path).file_config == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="配置文件不存在"):
            ConfigManager(str(tmp_path / "missing.yml"))

    def test_invalid_yaml(self, write_config):
        path = write_config("build: [unclosed\n")
        with pytest.raises(ConfigError):
            ConfigManager(path)

    @pytest.mark.parametrize(
        "content",
        [
            "- build\n",
            "deploy:\n  image-name: app\n",
            "build: app\n",
            "build:\n  image: app\n",
        ],
    )
    def test_invalid_structure(self, write_config, content):
        with pytest.raises(ConfigError):
            ConfigManager(write_config(content))

    @pytest.mark.parametrize(
        "content",
        [
            "build:\n  registry-password: secret\n",
            "promote:\n  target_password: secret\n",
        ],
    )
    def test_passwords_are_rejected(self, write_config, content):
        """配置文件中不能包含密码"""
        with pytest.raises(ConfigError, match="密码"):
            ConfigManager(write_config(content))

    def test_config_error_is_validation_error(self, tmp_path):
        with pytest.raises(ConfigError) as excinfo:
            ConfigManager(str(tmp_path / "missing.yml"))
        assert excinfo.value.category == "validation"
