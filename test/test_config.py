# Copyright 2016-2024, Pulumi Corporation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import pytest

import webappstack
from webappstack import Config, ConfigMissingError, ConfigTypeError, ConfigurationError
from webappstack.runtime import load_stack_config


@pytest.mark.parametrize(
    "key,default",
    [
        ("string", None),
        ("bar", "baz"),
        ("doesnt-exist", None),
    ],
)
def test_config_with_defaults(key, default, mock_config, config_settings):
    expected = config_settings.get(f"webapp:{key}", default)
    assert mock_config.get(key, default) == expected


@webappstack.runtime.test
async def test_get_secret(mock_config):
    result = mock_config.get_secret("password")
    assert await result.future() == "hunter2"
    assert await result.is_secret()
    assert mock_config.get_secret("doesnt-exist") is None


@webappstack.runtime.test
async def test_require_secret(mock_config):
    result = mock_config.require_secret("string")
    assert await result.future() == "bar"
    assert await result.is_secret()


def test_namespaces_are_separate(mock_config, config_settings):
    other = Config("other", config_settings)
    assert mock_config.get("string") == "bar"
    assert other.get("string") == "baz"
    assert other.full_key("string") == "other:string"


def test_typed_getters(mock_config):
    assert mock_config.get_int("int") == 1
    assert mock_config.require_int("int") == 1
    assert mock_config.get_bool("bool") is False
    assert mock_config.require_bool("bool") is False
    assert mock_config.get_int("doesnt-exist", 7) == 7


def test_type_errors(mock_config):
    with pytest.raises(ConfigTypeError) as e:
        mock_config.get_int("string")
    assert e.value.key == "webapp:string"
    assert e.value.expect_type == "int"

    with pytest.raises(ConfigTypeError):
        mock_config.require_bool("int")


def test_missing_values(mock_config):
    with pytest.raises(ConfigMissingError) as e:
        mock_config.require("doesnt-exist")
    assert e.value.key == "webapp:doesnt-exist"
    assert not e.value.secret

    with pytest.raises(ConfigMissingError) as e:
        mock_config.require_secret("doesnt-exist")
    assert e.value.secret


def test_config_errors_are_configuration_errors():
    assert issubclass(ConfigMissingError, ConfigurationError)
    assert issubclass(ConfigTypeError, ConfigurationError)


def test_load_stack_config(tmp_path):
    path = tmp_path / "Pulumi.dev.yaml"
    path.write_text(
        "config:\n"
        "  webapp:solutionRoot: /src/app\n"
        "  webapp:sasValidityDays: 30\n"
        "  webapp:softDelete: true\n"
        "  webapp:tags:\n"
        "    - a\n"
        "    - b\n"
        "  webapp:apiKey:\n"
        "    secure: s3cr3t\n",
        encoding="utf-8",
    )

    values, secret_keys = load_stack_config(path)

    assert values == {
        "webapp:solutionRoot": "/src/app",
        "webapp:sasValidityDays": "30",
        "webapp:softDelete": "true",
        "webapp:tags": '["a", "b"]',
        "webapp:apiKey": "s3cr3t",
    }
    assert secret_keys == {"webapp:apiKey"}

    config = Config("webapp", values, secret_keys)
    assert config.require_int("sasValidityDays") == 30
    assert config.require_bool("softDelete") is True


def test_load_empty_stack_config(tmp_path):
    path = tmp_path / "Pulumi.empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_stack_config(path) == ({}, set())


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "config: [1, 2]\n",
        "config:\n  solutionRoot: /src\n",
        "config: {unbalanced\n",
    ],
)
def test_load_malformed_stack_config(tmp_path, content):
    path = tmp_path / "Pulumi.bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_stack_config(path)


def test_load_missing_stack_config(tmp_path):
    with pytest.raises(ConfigurationError):
        load_stack_config(tmp_path / "Pulumi.missing.yaml")
