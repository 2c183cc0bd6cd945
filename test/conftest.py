import pytest

from webappstack import Config


@pytest.fixture
def config_settings():
    return {
        "webapp:string": "bar",
        "webapp:int": "1",
        "webapp:bool": "False",
        "webapp:password": "hunter2",
        "other:string": "baz",
    }


@pytest.fixture
def mock_config(config_settings):
    return Config("webapp", config_settings, secret_keys=["webapp:password"])


@pytest.fixture
def solution_root(tmp_path):
    (tmp_path / "publish").mkdir()
    (tmp_path / "publish" / "EasyAzureWebApp.dll").write_bytes(b"\0")
    return tmp_path
