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
Support for declaring a stack of resources and driving it to completion.
"""
import asyncio
from collections import deque
from typing import TYPE_CHECKING, Any, Callable, Deque, Dict, List, Optional

from .. import log
from ..errors import ConfigurationError, RunError, UnresolvedDependencyError
from ..output import Output
from ..provider import Provider
from . import settings
from .graph import DependencyGraph
from .resource import ResourceState, fail, materialize, transition

if TYPE_CHECKING:
    from ..output import Input
    from ..resource import Resource


class DeploymentReport:
    """
    The outcome of materializing a stack: the final state of every node and, on failure, which node failed
    first and which dependents were aborted because of it.
    """

    states: Dict[str, ResourceState]
    errors: Dict[str, BaseException]
    failure_order: List[str]

    def __init__(
        self,
        graph: DependencyGraph,
        states: Dict[str, ResourceState],
        errors: Dict[str, BaseException],
        failure_order: List[str],
    ) -> None:
        self._graph = graph
        self.states = states
        self.errors = errors
        self.failure_order = failure_order

    @property
    def succeeded(self) -> bool:
        return all(s == ResourceState.READY for s in self.states.values())

    @property
    def failed(self) -> List[str]:
        return list(self.failure_order)

    @property
    def first_failure(self) -> Optional[str]:
        """
        The first resource that failed on its own account, rather than because a dependency failed.
        """
        for name in self.failure_order:
            if not isinstance(self.errors[name], UnresolvedDependencyError):
                return name
        return None

    @property
    def aborted(self) -> List[str]:
        """
        Every resource that was never attempted because one of its dependencies failed, in topological order.
        """
        return [
            n
            for n in self._graph.topological_order()
            if isinstance(self.errors.get(n), UnresolvedDependencyError)
        ]

    def aborted_by(self, name: str) -> List[str]:
        """
        The aborted resources that (transitively) depend on `name`, in topological order.
        """
        downstream = self._graph.transitive_dependents(name)
        return [n for n in self.aborted if n in downstream]

    def summary(self) -> str:
        if self.succeeded:
            return f"{len(self.states)} resources ready"
        first = self.first_failure
        lines = [f"deployment failed: {len(self.failure_order)} of {len(self.states)} resources failed"]
        for name in self.failure_order:
            if isinstance(self.errors[name], UnresolvedDependencyError):
                continue
            lines.append(f"  {name}: {self.errors[name]}")
            aborted = self.aborted_by(name)
            if aborted:
                lines.append("    aborted dependents: " + ", ".join(aborted))
        if first is None and self.aborted:
            lines.append("  aborted: " + ", ".join(self.aborted))
        return "\n".join(lines)


class StackResult:
    """
    The exported outputs of a stack run together with its deployment report.
    """

    name: str
    outputs: Dict[str, Any]
    report: DeploymentReport

    def __init__(self, name: str, outputs: Dict[str, Any], report: DeploymentReport) -> None:
        self.name = name
        self.outputs = outputs
        self.report = report

    @property
    def succeeded(self) -> bool:
        return self.report.succeeded


class Stack:
    """
    A Stack collects the resources declared by a program, builds their dependency graph and materializes
    it.  Resources declared while `run` is executing the program register with this stack.
    """

    name: str
    _resources: List["Resource"]
    _outputs: Deque["asyncio.Future"]
    _exports: Dict[str, "Input[Any]"]
    _claims: Dict[Any, str]
    _graph: Optional[DependencyGraph]

    def __init__(self, name: str = "stack") -> None:
        self.name = name
        self._resources = []
        self._outputs = deque()
        self._exports = {}
        self._claims = {}
        self._graph = None
        self._invoke_count = 0
        self._failure_order: List[str] = []

    def register(self, res: "Resource") -> None:
        self._resources.append(res)

    def export(self, name: str, value: "Input[Any]") -> None:
        self._exports[name] = value

    def claim(self, key: Any, owner: str) -> Optional[str]:
        """
        Records that `owner` holds `key`.  Returns the previous owner if the key was already claimed by a
        different resource.
        """
        previous = self._claims.get(key)
        if previous is not None and previous != owner:
            return previous
        self._claims[key] = owner
        return None

    def _next_invoke_name(self, token: str) -> str:
        self._invoke_count += 1
        return f"{token}#{self._invoke_count}"

    @property
    def resources(self) -> List["Resource"]:
        return list(self._resources)

    @property
    def graph(self) -> Optional[DependencyGraph]:
        return self._graph

    async def run(self, func: Callable[[], None], provider: Provider) -> StackResult:
        """
        Runs `func` to declare the stack's resources, validates the resulting graph and materializes it
        against `provider`.

        :raises ConfigurationError: The declared graph is invalid; nothing was submitted to the provider.
        """
        token = settings.set_root_stack(self)
        try:
            try:
                func()
                self._graph = DependencyGraph.build(self._resources)
            except Exception as e:
                # Nothing has been submitted yet; fail every declared output so no reader waits forever.
                if isinstance(e, ConfigurationError):
                    log.error(str(e))
                for res in self._resources:
                    fail(res, e)
                raise

            log.debug(f"materializing {len(self._graph)} resources")
            await self._materialize(self._graph, provider)
            outputs = await self._resolve_exports()
        finally:
            await self._drain()
            settings.reset_root_stack(token)

        report = DeploymentReport(
            self._graph,
            {r._name: r._state for r in self._resources},
            {r._name: r._error for r in self._resources if r._error is not None},
            self._failure_order,
        )
        if report.succeeded:
            log.info(report.summary())
        else:
            log.error(report.summary())
        return StackResult(self.name, outputs, report)

    async def _materialize(self, graph: DependencyGraph, provider: Provider) -> None:
        self._failure_order = []
        parallel = settings.get_settings().parallel
        semaphore = asyncio.Semaphore(parallel or max(len(graph), 1))
        done: Dict[str, asyncio.Future] = {
            name: asyncio.get_running_loop().create_future() for name in graph
        }

        async def run_node(name: str) -> None:
            res = graph.resource(name)
            transition(res, ResourceState.PENDING)
            try:
                for dep in sorted(graph.dependencies(name)):
                    failed_dep = await done[dep]
                    if failed_dep is not None:
                        err = UnresolvedDependencyError(name, failed_dep)
                        fail(res, err)
                        log.debug(str(err), resource=res)
                        self._failure_order.append(name)
                        done[name].set_result(failed_dep)
                        return

                async with semaphore:
                    await materialize(res, provider)
            except Exception as e:  # pylint: disable=broad-except
                # Failures are recorded on the resource and in the report; independent branches carry on.
                log.error(str(e), resource=res)
                self._failure_order.append(name)
                done[name].set_result(name)
                return
            done[name].set_result(None)

        await asyncio.gather(*[run_node(name) for name in graph.topological_order()])

    async def _resolve_exports(self) -> Dict[str, Any]:
        outputs: Dict[str, Any] = {}
        for name, value in self._exports.items():
            try:
                outputs[name] = await Output.from_input(value).future()
            except Exception as e:  # pylint: disable=broad-except
                log.debug(f"export '{name}' is unavailable: {e}")
        return outputs

    async def _drain(self) -> None:
        # Await every outstanding output so failed cells are observed; their errors are already reported
        # through the resources that own them.
        while self._outputs:
            pending = list(self._outputs)
            self._outputs.clear()
            await asyncio.gather(*pending, return_exceptions=True)


def export(name: str, value: Any) -> None:
    """
    Exports a named stack output.

    :param str name: The name to assign to this output.
    :param Any value: The value of this output.
    """
    stack = settings.get_root_stack()
    if stack is None:
        raise RunError("Failed to export output. Exports must be declared while a stack is being constructed")
    stack.export(name, value)
