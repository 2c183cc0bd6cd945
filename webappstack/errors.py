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

from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from .runtime.stack import DeploymentReport


class RunError(Exception):
    """
    Can be used for terminating a program abruptly, but resulting in a clean exit rather than the usual
    verbose unhandled error logic which emits the source program text and complete stack trace.
    """


class ConfigurationError(RunError):
    """
    Raised when the declared topology or its configuration is invalid. Configuration errors are always
    detected before any call is made to the provider.
    """


class DanglingReferenceError(ConfigurationError):
    def __init__(self, resource: str, reference: str):
        """
        Indicates that `resource` reads from, or depends on, `reference`, which was never declared in the
        stack being built.
        """
        self.resource = resource
        self.reference = reference
        super().__init__(
            f"resource '{resource}' references '{reference}', which is not declared in this stack"
        )


class DuplicateResourceError(ConfigurationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"a resource named '{name}' is already declared in this stack")


class DependencyCycleError(ConfigurationError):
    def __init__(self, cycle: Sequence[str]):
        self.cycle = list(cycle)
        super().__init__("dependency cycle detected: " + " -> ".join(self.cycle))


class ResolutionError(Exception):
    """
    Base class for failures to resolve an output because something upstream of it never materialized.
    """


class UnresolvedDependencyError(ResolutionError):
    def __init__(self, resource: str, dependency: str):
        """
        Indicates that `resource` was never attempted because `dependency` (one of its direct or
        transitive inputs) failed.
        """
        self.resource = resource
        self.dependency = dependency
        super().__init__(
            f"resource '{resource}' was not materialized: unresolved dependency '{dependency}'"
        )


class ProviderError(Exception):
    """
    Base class for errors reported by, or at, the provider boundary.
    """


class MaterializationError(ProviderError):
    def __init__(self, resource: str, cause: BaseException):
        self.resource = resource
        self.cause = cause
        super().__init__(f"resource '{resource}' failed to materialize: {cause}")


class InputPropertyError(ProviderError):
    def __init__(self, property_path: str, reason: str):
        """
        Can be used to indicate that a resource was given a bad input property.
        """
        self.property_path = property_path
        self.reason = reason
        super().__init__(f"{property_path}: {reason}")


class DeploymentError(RunError):
    """
    Raised by a pipeline when one or more resources failed to materialize. The attached report names the
    first failing resource and the dependents that were aborted because of it.
    """

    report: "DeploymentReport"

    def __init__(self, report: "DeploymentReport"):
        self.report = report
        super().__init__(report.summary())

    @property
    def failed(self) -> List[str]:
        return self.report.failed

    @property
    def first_failure(self) -> Optional[str]:
        return self.report.first_failure
