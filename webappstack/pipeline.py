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

"""
Runs the web app stack from configuration to a deployed URL.
"""
import asyncio
import os
from typing import Optional, Union

from . import log
from .config import Config, ConfigTypeError
from .errors import ConfigurationError, DeploymentError
from .provider import Provider
from .runtime.config import load_stack_config
from .runtime.settings import Settings, configure, get_engine, get_settings
from .runtime.stack import Stack, StackResult
from .stacks.web_app import (
    DEFAULT_PUBLISH_PATH,
    DEFAULT_SAS_VALIDITY_DAYS,
    HARDENED,
    VARIANTS,
    WebAppArgs,
    web_app_stack,
)

CONFIG_NAMESPACE = "webapp"
RUNTIME_CONFIG_NAMESPACE = "webappstack"
WEB_APP_URL = "webAppUrl"


class StackPipeline:
    """
    StackPipeline declares one variant of the web app stack, materializes it against a provider and
    surfaces its single output, the web app's URL.
    """

    args: WebAppArgs
    variant: str
    provider: Provider
    settings: Optional[Settings]

    def __init__(
        self,
        args: WebAppArgs,
        provider: Provider,
        variant: str = HARDENED,
        settings: Optional[Settings] = None,
    ) -> None:
        if variant not in VARIANTS:
            raise ConfigurationError(
                f"unknown stack variant '{variant}'; expected one of: {', '.join(VARIANTS)}"
            )
        self.args = args
        self.provider = provider
        self.variant = variant
        self.settings = settings

    @staticmethod
    def from_config(
        webapp: Config,
        provider: Provider,
        runtime: Optional[Config] = None,
        stack: Optional[str] = None,
    ) -> "StackPipeline":
        """
        Builds a pipeline from the `webapp` configuration namespace and, optionally, the `webappstack`
        runtime namespace.

        :raises ConfigMissingError: `webapp:solutionRoot` is not set.
        :raises ConfigTypeError: A value has the wrong type.
        """
        args = WebAppArgs(
            solution_root=webapp.require("solutionRoot"),
            publish_path=webapp.get("publishPath", DEFAULT_PUBLISH_PATH),
            sas_validity_days=webapp.get_int("sasValidityDays", DEFAULT_SAS_VALIDITY_DAYS),
            location=webapp.get("location"),
        )
        parallel = runtime.get_int("parallel") if runtime is not None else None
        if parallel is not None and parallel < 1:
            raise ConfigTypeError(runtime.full_key("parallel"), str(parallel), "positive int")
        settings = Settings(project=CONFIG_NAMESPACE, stack=stack, engine=get_engine(), parallel=parallel)
        return StackPipeline(args, provider, webapp.get("variant", HARDENED), settings)

    @staticmethod
    def from_config_file(path: Union[str, "os.PathLike[str]"], provider: Provider) -> "StackPipeline":
        """
        Builds a pipeline from a stack configuration file, such as `Pulumi.dev.yaml`.  The stack is named
        after the file.
        """
        values, secret_keys = load_stack_config(path)
        stack = os.path.splitext(os.path.basename(os.fspath(path)))[0]
        if stack.startswith("Pulumi."):
            stack = stack[len("Pulumi."):]
        return StackPipeline.from_config(
            Config(CONFIG_NAMESPACE, values, secret_keys),
            provider,
            Config(RUNTIME_CONFIG_NAMESPACE, values, secret_keys),
            stack,
        )

    def _validate(self) -> None:
        root = self.args.solution_root
        if not os.path.isdir(root):
            raise ConfigurationError(f"solution root directory '{root}' does not exist")

    async def up_async(self) -> StackResult:
        """
        Materializes the stack.

        :raises ConfigurationError: The configuration or the declared graph is invalid; nothing was submitted.
        :raises DeploymentError: One or more resources failed to materialize.
        """
        if self.settings is not None:
            configure(self.settings)
        self._validate()

        settings = get_settings()
        project = settings.project or CONFIG_NAMESPACE
        stack = settings.stack or self.variant

        log.info(f"deploying the {self.variant} web app stack {project}/{stack}")
        result = await Stack(stack).run(web_app_stack(self.args, self.variant), self.provider)
        if not result.succeeded:
            raise DeploymentError(result.report)
        log.info(f"{WEB_APP_URL}: {result.outputs.get(WEB_APP_URL)}")
        return result

    def up(self) -> StackResult:
        return asyncio.run(self.up_async())

    async def web_app_url(self) -> str:
        result = await self.up_async()
        return result.outputs[WEB_APP_URL]
