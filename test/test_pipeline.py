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

from webappstack import (
    Config,
    ConfigMissingError,
    ConfigTypeError,
    ConfigurationError,
    DeploymentError,
    StackPipeline,
)
from webappstack.runtime import MockProvider
from webappstack.stacks import HARDENED, SIMPLE, WebAppArgs

from helpers import HOSTNAME, WebAppMocks


def write_stack_config(path, solution_root, **extra):
    lines = [
        "config:",
        f"  webapp:solutionRoot: {solution_root}",
        "  webapp:publishPath: publish",
    ]
    lines += [f"  {k}: {v}" for k, v in extra.items()]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_from_config_file(tmp_path, solution_root):
    path = write_stack_config(
        tmp_path / "Pulumi.dev.yaml",
        solution_root,
        **{"webapp:variant": SIMPLE, "webapp:sasValidityDays": 7, "webappstack:parallel": 2},
    )

    pipeline = StackPipeline.from_config_file(path, MockProvider(WebAppMocks()))

    assert pipeline.variant == SIMPLE
    assert pipeline.args.solution_root == str(solution_root)
    assert pipeline.args.publish_path == "publish"
    assert pipeline.args.sas_validity_days == 7
    assert pipeline.settings.stack == "dev"
    assert pipeline.settings.project == "webapp"
    assert pipeline.settings.parallel == 2


def test_defaults(solution_root):
    config = Config("webapp", {"webapp:solutionRoot": str(solution_root)})

    pipeline = StackPipeline.from_config(config, MockProvider(WebAppMocks()))

    assert pipeline.variant == HARDENED
    assert pipeline.args.sas_validity_days == 365
    assert pipeline.args.publish_path.endswith("publish")
    assert pipeline.settings.parallel is None


def test_solution_root_is_required():
    with pytest.raises(ConfigMissingError) as e:
        StackPipeline.from_config(Config("webapp", {}), MockProvider(WebAppMocks()))
    assert e.value.key == "webapp:solutionRoot"


def test_validity_must_be_an_integer(solution_root):
    config = Config("webapp", {"webapp:solutionRoot": str(solution_root), "webapp:sasValidityDays": "a year"})
    with pytest.raises(ConfigTypeError):
        StackPipeline.from_config(config, MockProvider(WebAppMocks()))


def test_unknown_variant(solution_root):
    config = Config("webapp", {"webapp:solutionRoot": str(solution_root), "webapp:variant": "legacy"})
    with pytest.raises(ConfigurationError):
        StackPipeline.from_config(config, MockProvider(WebAppMocks()))


def test_missing_solution_root_submits_nothing(tmp_path):
    mocks = WebAppMocks()
    pipeline = StackPipeline(WebAppArgs(str(tmp_path / "missing")), MockProvider(mocks))

    with pytest.raises(ConfigurationError):
        pipeline.up()
    assert mocks.events == []
    assert mocks.calls == []


@pytest.mark.parametrize("variant", [SIMPLE, HARDENED])
def test_up_returns_the_web_app_url(solution_root, variant):
    pipeline = StackPipeline(WebAppArgs(str(solution_root), publish_path="publish"), MockProvider(WebAppMocks()), variant)

    result = pipeline.up()

    assert result.succeeded
    assert result.outputs == {"webAppUrl": f"https://{HOSTNAME}"}


def test_failed_deployment_raises(solution_root):
    mocks = WebAppMocks(fail=["storage"])
    pipeline = StackPipeline(WebAppArgs(str(solution_root), publish_path="publish"), MockProvider(mocks))

    with pytest.raises(DeploymentError) as e:
        pipeline.up()

    assert e.value.first_failure == "storage"
    assert "files" in e.value.report.aborted_by("storage")
    assert "read-code-blob" in e.value.failed
    assert "deployment failed" in str(e.value)
    # The plan does not depend on storage, so it still materializes.
    assert mocks.started("easy-azure-webapp-plan")


def test_stack_is_named_after_the_config_file(tmp_path, solution_root):
    path = write_stack_config(tmp_path / "Pulumi.dev.yaml", solution_root)
    pipeline = StackPipeline.from_config_file(path, MockProvider(WebAppMocks()))

    result = pipeline.up()

    assert result.succeeded
    assert result.name == "dev"
    assert result.outputs == {"webAppUrl": f"https://{HOSTNAME}"}


def test_stack_name_defaults_to_the_variant(solution_root):
    pipeline = StackPipeline(WebAppArgs(str(solution_root), publish_path="publish"), MockProvider(WebAppMocks()), SIMPLE)

    assert pipeline.up().name == SIMPLE


@pytest.mark.parametrize("parallel", [0, -2])
def test_parallel_must_be_positive(tmp_path, solution_root, parallel):
    path = write_stack_config(tmp_path / "Pulumi.dev.yaml", solution_root, **{"webappstack:parallel": parallel})

    with pytest.raises(ConfigTypeError) as e:
        StackPipeline.from_config_file(path, MockProvider(WebAppMocks()))

    assert e.value.key == "webappstack:parallel"
    assert isinstance(e.value, ConfigurationError)
