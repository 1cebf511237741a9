"""
镜像晋升流水线的单元测试
"""
from unittest.mock import MagicMock, call

import pytest

from dockship.managers.image.base import (
    ImagePullError,
    ImagePushError,
    InputValidationError,
)
from dockship.managers.image_manager import ImageManager
from dockship.managers.pipeline.promote import PromotionPipeline


def make_config(**overrides):
    config = {
        "source_image": "ghcr.io/o/app",
        "source_tag": "v1",
        "target_image": "ghcr.io/o/app",
        "target_tag": "staging",
        "source_registry": None,
        "target_registry": None,
        "source_username": None,
        "source_password": None,
        "target_username": None,
        "target_password": "token",
        "additional_tags": None,
        "skip_pull": "false",
    }
    config.update(overrides)
    return config


@pytest.fixture
def manager():
    """记录调用顺序的模拟镜像管理器"""
    return MagicMock(spec=ImageManager)


class TestPromotionPipeline:
    """PromotionPipeline 测试"""

    def test_scenario_against_docker_client(
        self, image_manager, docker_client, login_calls, monkeypatch
    ):
        """拉取 v1，推送 staging 和 latest，输出 staging"""
        monkeypatch.setenv("GITHUB_ACTOR", "octocat")
        pipeline = PromotionPipeline(
            make_config(additional_tags="latest"), image_manager=image_manager
        )
        outputs = pipeline.run()

        assert outputs == {"promoted-image": "ghcr.io/o/app:staging"}
        docker_client.api.pull.assert_called_once_with(
            "ghcr.io/o/app", tag="v1", stream=True, decode=True
        )
        assert docker_client.images.push.call_args_list == [
            call("ghcr.io/o/app", tag="staging", stream=True, decode=True),
            call("ghcr.io/o/app", tag="latest", stream=True, decode=True),
        ]
        assert pipeline.pushed == ["ghcr.io/o/app:staging", "ghcr.io/o/app:latest"]
        # 只登录了目标仓库
        assert len(login_calls) == 1
        assert login_calls[0]["args"][2] == "ghcr.io"

    def test_call_order(self, manager):
        """登录、拉取在前，每个标签先打标签再推送"""
        PromotionPipeline(
            make_config(additional_tags="stable,prod", target_username="bot"),
            image_manager=manager,
        ).run()

        assert manager.mock_calls == [
            call.login("ghcr.io", None, None),
            call.login("ghcr.io", "bot", "token"),
            call.pull_image("ghcr.io/o/app:v1"),
            call.tag_image("ghcr.io/o/app:v1", "ghcr.io/o/app:staging"),
            call.push_image("ghcr.io/o/app:staging"),
            call.tag_image("ghcr.io/o/app:v1", "ghcr.io/o/app:stable"),
            call.push_image("ghcr.io/o/app:stable"),
            call.tag_image("ghcr.io/o/app:v1", "ghcr.io/o/app:prod"),
            call.push_image("ghcr.io/o/app:prod"),
        ]

    def test_skip_pull(self, manager):
        """skip-pull 为 true 时不拉取"""
        PromotionPipeline(make_config(skip_pull="true"), image_manager=manager).run()
        manager.pull_image.assert_not_called()
        manager.push_image.assert_called_once_with("ghcr.io/o/app:staging")

    def test_output_ignores_additional_tags(self, manager):
        outputs = PromotionPipeline(
            make_config(target_image="quay.io/team/app", additional_tags="a,b,c"),
            image_manager=manager,
        ).run()
        assert outputs["promoted-image"] == "quay.io/team/app:staging"

    def test_registries_are_resolved(self, manager):
        """源仓库和目标仓库分别解析，显式指定的仓库优先"""
        pipeline = PromotionPipeline(
            make_config(
                source_image="localhost:5000/app",
                source_password="local",
                source_username="me",
                target_image="myorg/app",
                target_registry="docker.io",
            ),
            image_manager=manager,
        )
        pipeline.run()

        assert pipeline.params["source_registry"] == "localhost:5000"
        assert pipeline.params["target_registry"] == "docker.io"
        assert manager.login.call_args_list == [
            call("localhost:5000", "me", "local"),
            call("docker.io", None, "token"),
        ]

    @pytest.mark.parametrize("password", [None, ""])
    def test_missing_target_password_fails_before_any_call(self, manager, password):
        with pytest.raises(InputValidationError, match="target-password"):
            PromotionPipeline(make_config(target_password=password), image_manager=manager).run()
        assert manager.mock_calls == []

    @pytest.mark.parametrize("key", ["source_image", "source_tag", "target_image", "target_tag"])
    def test_missing_required_input(self, manager, key):
        with pytest.raises(InputValidationError):
            PromotionPipeline(make_config(**{key: ""}), image_manager=manager).run()
        assert manager.mock_calls == []

    def test_pull_failure_aborts(self, manager):
        manager.pull_image.side_effect = ImagePullError("manifest unknown")
        with pytest.raises(ImagePullError):
            PromotionPipeline(make_config(), image_manager=manager).run()
        manager.tag_image.assert_not_called()
        manager.push_image.assert_not_called()

    def test_push_failure_keeps_earlier_tags(self, manager):
        """第二个标签推送失败时中止，第一个标签不回滚"""
        manager.push_image.side_effect = [None, ImagePushError("denied"), None]
        pipeline = PromotionPipeline(
            make_config(additional_tags="stable,prod"), image_manager=manager
        )

        with pytest.raises(ImagePushError):
            pipeline.run()

        assert pipeline.pushed == ["ghcr.io/o/app:staging"]
        assert manager.push_image.call_count == 2
        assert pipeline.outputs == {}

    def test_writes_github_output(self, manager, tmp_path, monkeypatch):
        output_file = tmp_path / "output"
        summary_file = tmp_path / "summary"
        monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))
        monkeypatch.setenv("GITHUB_STEP_SUMMARY", str(summary_file))

        PromotionPipeline(make_config(additional_tags="latest"), image_manager=manager).run()

        assert output_file.read_text(encoding="utf-8") == "promoted-image=ghcr.io/o/app:staging\n"
        summary = summary_file.read_text(encoding="utf-8")
        assert "`ghcr.io/o/app:latest`" in summary

    @pytest.mark.parametrize(
        "key, value",
        [
            ("target_image", "ghcr.io/"),
            ("source_image", "quay.io/"),
            ("target_image", "ghcr.io/o/app:v2"),
            ("source_image", "ghcr.io//app"),
        ],
    )
    def test_invalid_image_fails_before_any_call(self, manager, key, value):
        """仓库名为空或镜像名称自带标签时，在登录、拉取和推送之前失败"""
        with pytest.raises(InputValidationError, match=key.replace("_", "-")):
            PromotionPipeline(make_config(**{key: value}), image_manager=manager).run()
        assert manager.mock_calls == []

    @pytest.mark.parametrize(
        "overrides, name",
        [
            ({"target_tag": "bad:tag"}, "target-tag"),
            ({"source_tag": "feature/x"}, "source-tag"),
            ({"additional_tags": "stable,no spaces"}, "additional-tags"),
        ],
    )
    def test_invalid_tag_fails_before_any_call(self, manager, overrides, name):
        with pytest.raises(InputValidationError, match=name):
            PromotionPipeline(make_config(**overrides), image_manager=manager).run()
        assert manager.mock_calls == []
