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
The dependency graph between declared resources.

Two kinds of edges are tracked: data edges, inferred from the outputs a resource reads in its inputs,
and control edges, declared explicitly with `ResourceOptions.depends_on`.  Their union determines the
order in which resources may be materialized.
"""
from typing import (
    TYPE_CHECKING,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
)

from ..errors import (
    ConfigurationError,
    DanglingReferenceError,
    DependencyCycleError,
    DuplicateResourceError,
)

if TYPE_CHECKING:
    from ..resource import Resource


class DependencyGraph:
    """
    An immutable, validated, acyclic graph of named nodes.
    """

    _nodes: List[str]
    _data: Dict[str, Set[str]]
    _control: Dict[str, Set[str]]
    _dependents: Dict[str, Set[str]]
    _order: List[str]
    _resources: Dict[str, "Resource"]

    def __init__(
        self,
        nodes: Sequence[str],
        data_edges: Optional[Mapping[str, Iterable[str]]] = None,
        control_edges: Optional[Mapping[str, Iterable[str]]] = None,
    ) -> None:
        """
        :param Sequence[str] nodes: The node names, in declaration order.
        :param Mapping[str,Iterable[str]] data_edges: For each node, the nodes whose outputs it reads.
        :param Mapping[str,Iterable[str]] control_edges: For each node, the nodes it explicitly depends on.
        :raises DuplicateResourceError: A node name appears twice.
        :raises DanglingReferenceError: An edge points at a node that is not in `nodes`.
        :raises DependencyCycleError: The edges form a cycle.
        """
        seen: Set[str] = set()
        for name in nodes:
            if name in seen:
                raise DuplicateResourceError(name)
            seen.add(name)

        self._nodes = list(nodes)
        self._data = _edge_map(self._nodes, data_edges or {})
        self._control = _edge_map(self._nodes, control_edges or {})
        self._resources = {}

        self._dependents = {n: set() for n in self._nodes}
        for n in self._nodes:
            for dep in self.dependencies(n):
                self._dependents[dep].add(n)

        cycle = self._find_cycle()
        if cycle is not None:
            raise DependencyCycleError(cycle)

        self._order = self._topological_sort()

    @staticmethod
    def build(resources: Sequence["Resource"]) -> "DependencyGraph":
        """
        Builds the graph for a set of declared resources.  Every resource a declaration reads from or
        depends on must itself be part of `resources`; otherwise a `DanglingReferenceError` is raised
        and no graph is produced.
        """
        declared = set(resources)
        data_edges: Dict[str, Set[str]] = {}
        control_edges: Dict[str, Set[str]] = {}
        for res in resources:
            data = res._data_dependencies()
            control = res._control_dependencies()
            for dep in data | control:
                if dep not in declared:
                    raise DanglingReferenceError(res._name, dep._name)
            data_edges[res._name] = {d._name for d in data}
            control_edges[res._name] = {d._name for d in control}

        graph = DependencyGraph([r._name for r in resources], data_edges, control_edges)
        graph._resources = {r._name: r for r in resources}
        return graph

    def resource(self, name: str) -> "Resource":
        return self._resources[name]

    def data_dependencies(self, name: str) -> Set[str]:
        return set(self._data[name])

    def control_dependencies(self, name: str) -> Set[str]:
        return set(self._control[name])

    def dependencies(self, name: str) -> Set[str]:
        """
        Returns the direct dependencies of `name` across both edge kinds.
        """
        return self._data[name] | self._control[name]

    def dependents(self, name: str) -> Set[str]:
        """
        Returns the nodes that directly depend on `name`.
        """
        return set(self._dependents[name])

    def transitive_dependents(self, name: str) -> Set[str]:
        """
        Returns every node that directly or indirectly depends on `name`.
        """
        result: Set[str] = set()
        stack = list(self._dependents[name])
        while stack:
            n = stack.pop()
            if n in result:
                continue
            result.add(n)
            stack.extend(self._dependents[n])
        return result

    def transitive_dependencies(self, name: str) -> Set[str]:
        result: Set[str] = set()
        for n in _with_transitive_deps(name, self.dependencies, set()):
            result.add(n)
        result.discard(name)
        return result

    def topological_order(self) -> List[str]:
        """
        Returns an order in which every node appears after all of its dependencies.  Nodes with no
        ordering constraint between them keep their declaration order.
        """
        return list(self._order)

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._nodes)

    def _topological_sort(self) -> List[str]:
        position = {n: i for i, n in enumerate(self._nodes)}
        remaining = {n: len(self.dependencies(n)) for n in self._nodes}
        ready = [n for n in self._nodes if remaining[n] == 0]
        order: List[str] = []
        while ready:
            ready.sort(key=position.__getitem__)
            n = ready.pop(0)
            order.append(n)
            for dependent in self._dependents[n]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    ready.append(dependent)
        return order

    def _find_cycle(self) -> Optional[List[str]]:
        # Iterative three-colour depth first search; returns the first cycle found.
        white, grey, black = 0, 1, 2
        colour = {n: white for n in self._nodes}
        for root in self._nodes:
            if colour[root] != white:
                continue
            path: List[str] = []
            stack = [(root, iter(sorted(self.dependencies(root))))]
            colour[root] = grey
            path.append(root)
            while stack:
                node, children = stack[-1]
                child = next(children, None)
                if child is None:
                    colour[node] = black
                    path.pop()
                    stack.pop()
                    continue
                if colour[child] == grey:
                    return path[path.index(child):] + [child]
                if colour[child] == white:
                    colour[child] = grey
                    path.append(child)
                    stack.append((child, iter(sorted(self.dependencies(child)))))
        return None


def _edge_map(nodes: List[str], edges: Mapping[str, Iterable[str]]) -> Dict[str, Set[str]]:
    known = set(nodes)
    result: Dict[str, Set[str]] = {n: set() for n in nodes}
    for source, targets in edges.items():
        if source not in known:
            raise ConfigurationError(f"edges declared for unknown resource '{source}'")
        for target in targets:
            if target not in known:
                raise DanglingReferenceError(source, target)
            result[source].add(target)
    return result


def _with_transitive_deps(name: str, deps, visited: Set[str]) -> Iterable[str]:
    if name in visited:
        return

    visited.add(name)
    yield name

    for x in deps(name):
        yield from _with_transitive_deps(x, deps, visited)
