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
Declares the resource graph of a zip-deployed Azure web app and drives it to completion through an
asynchronous provider.
"""

# Make all module members inside of this package available as package members.
from .asset import (
    Archive,
    FileArchive,
)

from .config import (
    Config,
    ConfigMissingError,
    ConfigTypeError,
)

from .errors import (
    ConfigurationError,
    DanglingReferenceError,
    DependencyCycleError,
    DeploymentError,
    DuplicateResourceError,
    InputPropertyError,
    MaterializationError,
    ProviderError,
    ResolutionError,
    RunError,
    UnresolvedDependencyError,
)

from .invoke import (
    InvokeOptions,
    invoke,
)

from .resource import (
    Resource,
    CustomResource,
    ResourceOptions,
)

from .output import (
    Output,
    Input,
    Inputs,
)

from .log import (
    debug,
    info,
    warn,
    error,
)

from .provider import (
    CallArgs,
    Provider,
    ResourceArgs,
)

from .runtime.stack import (
    DeploymentReport,
    Stack,
    StackResult,
    export,
)

from .pipeline import (
    StackPipeline,
)

from . import runtime, azure, references, stacks

__all__ = [
    # asset
    "Archive",
    "FileArchive",
    # config
    "Config",
    "ConfigMissingError",
    "ConfigTypeError",
    # errors
    "ConfigurationError",
    "DanglingReferenceError",
    "DependencyCycleError",
    "DeploymentError",
    "DuplicateResourceError",
    "InputPropertyError",
    "MaterializationError",
    "ProviderError",
    "ResolutionError",
    "RunError",
    "UnresolvedDependencyError",
    # invoke
    "InvokeOptions",
    "invoke",
    # resource
    "Resource",
    "CustomResource",
    "ResourceOptions",
    # output
    "Output",
    "Input",
    "Inputs",
    # log
    "debug",
    "info",
    "warn",
    "error",
    # provider
    "CallArgs",
    "Provider",
    "ResourceArgs",
    # stack
    "DeploymentReport",
    "Stack",
    "StackResult",
    "export",
    # pipeline
    "StackPipeline",
    # sub-modules
    "runtime",
    "azure",
    "references",
    "stacks",
]
