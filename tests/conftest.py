"""测试公共夹具"""

from unittest.mock import MagicMock

import pytest

from dockship.constants import ENV_VARS
from dockship.managers.image_manager import ImageManager


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """移除可能来自CI环境的变量"""
    for name in ENV_VARS.values():
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def docker_client():
    """模拟的Docker客户端，拉取、构建和推送都返回成功的输出"""
    client = MagicMock()
    client.api.pull.side_effect = lambda *args, **kwargs: iter(
        [{"status": "Pulling from o/app"}, {"status": "Status: Downloaded newer image"}]
    )
    client.api.build.side_effect = lambda *args, **kwargs: iter(
        [{"stream": "Step 1/2 : FROM alpine\n"}, {"stream": "Successfully built abc123\n"}]
    )
    client.images.push.side_effect = lambda repository, tag=None, **kwargs: iter(
        [{"status": "Pushed", "id": "abc123"}, {"status": f"{tag}: digest: sha256:0123 size: 528"}]
    )
    client.images.get.return_value.tag.return_value = True
    return client


@pytest.fixture
def image_manager(docker_client):
    """使用模拟客户端的镜像管理器"""
    return ImageManager(docker_client)


@pytest.fixture
def login_calls(monkeypatch):
    """记录 docker login 调用而不实际执行"""
    calls = []

    def fake_run_command(args, check=True, input_text=None, cwd=None):
        calls.append({"args": list(args), "input_text": input_text})
        return 0, "Login Succeeded", ""

    monkeypatch.setattr("dockship.managers.image.auth.run_command", fake_run_command)
    return calls
