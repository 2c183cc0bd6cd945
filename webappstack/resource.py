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

"""The Resource module, containing all resource-related definitions."""

import asyncio
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
    Union,
)

from .errors import RunError
from .output import Output, OutputData, collect_resources
from .runtime.settings import get_root_stack

if TYPE_CHECKING:
    from .output import Input, Inputs
    from .runtime.resource import ResourceState
    from .runtime.stack import Stack


class ResourceOptions:
    """
    ResourceOptions is a bag of optional settings that control a resource's behavior.
    """

    depends_on: Optional[Union[Sequence["Resource"], "Resource"]]
    """
    If provided, declares that the currently-constructing resource depends on the given resources, in
    addition to the resources it reads outputs from.
    """

    id: Optional["Input[str]"]
    """
    An optional existing ID to load, rather than create.
    """

    # pylint: disable=redefined-builtin
    def __init__(
        self,
        depends_on: Optional[Union[Sequence["Resource"], "Resource"]] = None,
        id: Optional["Input[str]"] = None,
    ) -> None:
        """
        :param Optional[Union[Sequence[Resource],Resource]] depends_on: If provided, declares that the
               currently-constructing resource depends on the given resources.
        :param Optional[Input[str]] id: An optional existing ID to load, rather than create.
        """
        self.depends_on = depends_on
        self.id = id

    def _depends_on_list(self) -> List["Resource"]:
        if self.depends_on is None:
            return []
        if isinstance(self.depends_on, Resource):
            return [self.depends_on]
        return list(self.depends_on)

    @staticmethod
    def merge(
        opts1: Optional["ResourceOptions"],
        opts2: Optional["ResourceOptions"],
    ) -> "ResourceOptions":
        """
        merge produces a new ResourceOptions object with the respective attributes of the `opts1`
        instance in it with the attributes of `opts2` merged over them.

        Both the `opts1` instance and the `opts2` instance will be unchanged.  Both of `opts1` and
        `opts2` can be `None`, in which case its attributes are ignored.

        `depends_on` lists are concatenated; `id` from `opts2` wins when set.
        """
        opts1 = ResourceOptions() if opts1 is None else opts1
        opts2 = ResourceOptions() if opts2 is None else opts2

        if not isinstance(opts1, ResourceOptions):
            raise TypeError("Expected opts1 to be a ResourceOptions instance")
        if not isinstance(opts2, ResourceOptions):
            raise TypeError("Expected opts2 to be a ResourceOptions instance")

        depends_on = opts1._depends_on_list() + [
            r for r in opts2._depends_on_list() if r not in opts1._depends_on_list()
        ]
        return ResourceOptions(
            depends_on=depends_on or None,
            id=opts2.id if opts2.id is not None else opts1.id,
        )


class Resource:
    """
    Resource is the declaration of one node in the deployment graph: a type token, a unique name and a
    mapping of input properties, each either a literal or an Output read from another resource.  Declaring
    a resource performs no I/O; it only registers the node with the stack under construction.
    """

    _type: str
    """
    The type of the resource.
    """

    _name: str
    """
    The name assigned to the resource at construction.
    """

    _props: Dict[str, Any]
    _opts: ResourceOptions
    _stack: "Stack"
    _resolvers: Dict[str, "asyncio.Future[OutputData[Any]]"]
    _state: "ResourceState"
    _error: Optional[BaseException]

    _kind = "create"
    """
    How the node is materialized: "create", "read" or "invoke".
    """

    _output_properties: Tuple[str, ...] = ()
    """
    The names of the output properties the provider reports for this resource type.
    """

    _additional_secret_outputs: Tuple[str, ...] = ()
    """
    Output properties that always carry secret data, whether or not the provider tags them.
    """

    def __init__(
        self,
        t: str,
        name: str,
        props: Optional["Inputs"] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        """
        :param str t: The type of this resource.
        :param str name: The name of this resource.
        :param Optional[Inputs] props: An optional mapping of input properties for the resource.
        :param Optional[ResourceOptions] opts: Optional set of :class:`ResourceOptions` to use for this
               resource.
        """
        from .runtime.resource import ResourceState  # pylint: disable=import-outside-toplevel

        if props is None:
            props = {}
        if not t:
            raise TypeError("Missing resource type argument")
        if not isinstance(t, str):
            raise TypeError("Expected resource type to be a string")
        if not name:
            raise TypeError("Missing resource name argument")
        if not isinstance(name, str):
            raise TypeError("Expected resource name to be a string")
        if not isinstance(props, Mapping):
            raise TypeError("Expected resource properties to be a mapping")
        if opts is None:
            opts = ResourceOptions()
        elif not isinstance(opts, ResourceOptions):
            raise TypeError(
                "Expected resource options to be a ResourceOptions instance"
            )

        stack = get_root_stack()
        if stack is None:
            raise RunError(
                f"Resource '{name}' must be declared while a stack is being constructed"
            )

        self._type = t
        self._name = name
        self._props = {k: v for k, v in props.items() if v is not None}
        self._opts = opts
        self._stack = stack
        self._resolvers = {}
        self._state = ResourceState.DECLARED
        self._error = None

        if opts.id is not None and self._kind == "create":
            self._kind = "read"

        for prop in self._declared_outputs():
            self.__dict__[prop] = self._output(prop)

        stack.register(self)

    def _declared_outputs(self) -> Tuple[str, ...]:
        return self._output_properties

    def _output(self, prop: str) -> "Output[Any]":
        future: asyncio.Future[OutputData[Any]] = (
            asyncio.get_running_loop().create_future()
        )
        self._resolvers[prop] = future
        return Output({self}, future)

    def _data_dependencies(self) -> Set["Resource"]:
        """
        The resources this resource reads outputs from, inferred from its inputs.
        """
        deps = collect_resources(self._props)
        if self._opts.id is not None:
            deps |= collect_resources(self._opts.id)
        deps.discard(self)
        return deps

    def _control_dependencies(self) -> Set["Resource"]:
        """
        The resources this resource was explicitly declared to depend on.
        """
        deps = set()
        for dep in self._opts._depends_on_list():
            if not isinstance(dep, Resource):
                raise TypeError(
                    f"'depends_on' of resource '{self._name}' must only contain Resources"
                )
            deps.add(dep)
        return deps

    def _check(self, inputs: Dict[str, Any]) -> None:
        """
        Validates resolved inputs just before they are submitted to the provider.  Subclasses raise
        `InputPropertyError` to reject them.
        """

    def _record(self, resource_id: Optional[str], outputs: Dict[str, Any]) -> None:
        """
        Called once the resource has materialized, with its id and the merged inputs and provider outputs.
        """

    @property
    def state(self) -> "ResourceState":
        return self._state

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name!r} ({self._state.value})>"


class CustomResource(Resource):
    """
    CustomResource is a resource whose create and read operations are managed by performing external
    operations on some physical entity through the provider.
    """

    def _declared_outputs(self) -> Tuple[str, ...]:
        return ("id",) + self._output_properties

    @property
    def id(self) -> "Output[str]":
        """
        id is the provider-assigned unique ID for this managed resource.  It is set once the resource
        has been materialized.
        """
        return self.__dict__["id"]
