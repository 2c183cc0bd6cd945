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
import asyncio
from functools import reduce
from inspect import isawaitable
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Set,
    TypeVar,
    Union,
    cast,
    overload,
)

from .runtime import settings

if TYPE_CHECKING:
    from .resource import Resource

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
U = TypeVar("U")

Input = Union[T, Awaitable[T], "Output[T]"]
Inputs = Mapping[str, Input[Any]]


class OutputData(Generic[T]):
    """
    The resolved contents of an Output cell.
    """

    value: T
    """
    The concrete value of the output.
    """
    secret: bool
    """
    Whether or not the output should be treated as containing secret data. Secret outputs are tagged when
    flowing across the provider boundary so they are never rendered in plaintext in logs or reports.
    """

    def __init__(self, value: T, secret: Optional[bool] = None) -> None:
        self.value = value
        self.secret = False if secret is None else secret


class Output(Generic[T_co]):
    """
    Output is a single-assignment cell holding a value produced by materializing one or more Resources.
    An Output value can be provided when constructing new Resources, allowing that new Resource to know
    both the value as well as the Resources the value came from.  The set of Resources is known as soon
    as the Output is declared, which is what lets the dependency graph be built and validated before
    anything is materialized.  The value itself becomes available only once every one of those Resources
    has been materialized.
    """

    _resources: Set["Resource"]
    """
    The resources this output reads from.
    """

    _data: "asyncio.Future[OutputData[T_co]]"
    """
    The future internal data for this Output.
    """

    def __init__(
        self,
        resources: Set["Resource"],
        data: Awaitable[OutputData],
    ) -> None:
        self._resources = set(resources)
        self._data = asyncio.ensure_future(data)
        settings.track_output(self._data)

    def resources(self) -> Set["Resource"]:
        return set(self._resources)

    async def future(self) -> T_co:
        data = await self._data
        return data.value

    async def is_secret(self) -> bool:
        data = await self._data
        return data.secret

    def apply(self, func: Callable[[T_co], Input[U]]) -> "Output[U]":
        """
        Transforms the data of the output with the provided func.  The result remains an
        Output so that dependent resources can be properly tracked.

        'func' is not allowed to make resources.

        'func' can return other Outputs.  Resources read by an Output returned this way are awaited but
        do not add edges to the dependency graph; declare such dependencies explicitly with `depends_on`.

        :param Callable[[T_co],Input[U]] func: A function that will, given this Output's value, transform the value to
               an Input of some kind, where an Input is either a prompt value, a Future, or another Output of the given
               type.
        :return: A transformed Output obtained from running the transformation function on this Output's value.
        :rtype: Output[U]
        """

        async def run() -> OutputData[U]:
            data = await self._data
            transformed = func(cast(T_co, data.value))

            if isinstance(transformed, Output):
                transformed_data = await transformed._data
                return OutputData(
                    cast(U, transformed_data.value), data.secret or transformed_data.secret
                )

            if isawaitable(transformed):
                return OutputData(cast(U, await transformed), data.secret)

            return OutputData(cast(U, transformed), data.secret)

        return Output(self._resources, run())

    def __getattr__(self, item: str) -> "Output[Any]":  # type: ignore
        """
        Syntax sugar for retrieving attributes off of outputs.

        :param str item: An attribute name.
        :return: An Output of this Output's underlying value's property with the given name.
        :rtype: Output[Any]
        """
        if item.startswith("__"):
            raise AttributeError(item)
        return self.apply(lambda v: getattr(v, item))  # type: ignore

    def __getitem__(self, key: Any) -> "Output[Any]":
        """
        Syntax sugar for looking up attributes dynamically off of outputs.
        """
        return self.apply(lambda v: v[key])  # type: ignore

    def __iter__(self) -> Any:
        """
        Output instances are not iterable, but since they implement __getitem__ we need to explicitly prevent
        iteration by implementing __iter__ to raise a TypeError.
        """
        raise TypeError(
            "'Output' object is not iterable, consider iterating the underlying value inside an 'apply'"
        )

    @staticmethod
    def from_input(val: Input[T_co]) -> "Output[T_co]":
        """
        Takes an Input value and produces an Output value from it, deeply unwrapping nested Input values through nested
        lists and dicts.  Nested objects of other types (including Resources) are not deeply unwrapped.

        :param Input[T_co] val: An Input to be converted to an Output.
        :return: A deeply-unwrapped Output that is guaranteed to not contain any Input values.
        :rtype: Output[T_co]
        """

        if isinstance(val, Output):
            return val

        if val and isinstance(val, dict):
            keys = list(val.keys())
            values = list(val.values())
            o_values: Output[list] = Output.all(*values)
            o_dict = o_values.apply(lambda vs: dict(zip(keys, vs)))
            return cast(Output[T_co], o_dict)

        if val and isinstance(val, list):
            o_list: Output[list] = Output.all(*val)
            return cast(Output[T_co], o_list)

        if isawaitable(val):

            async def get_data(val: Awaitable[T]) -> OutputData[T]:
                o: Output[T] = Output.from_input(await val)
                return await o._data

            return Output(set(), get_data(val))

        return Output._prompt(val)

    @staticmethod
    def _prompt(val: Any) -> "Output[Any]":
        # Prompt values are trivially known and not secret.
        data_future: asyncio.Future[OutputData[Any]] = (
            asyncio.get_running_loop().create_future()
        )
        data_future.set_result(OutputData(val, False))
        return Output(set(), data_future)

    @staticmethod
    def unsecret(val: "Output[T]") -> "Output[T]":
        """
        Takes an existing Output and returns a new Output with the same value that is not marked as secret.
        """

        async def get_data() -> OutputData[T]:
            data = await val._data
            return OutputData(data.value, False)

        return Output(val._resources, get_data())

    @staticmethod
    def secret(val: Input[T]) -> "Output[T]":
        """
        Takes an Input value and produces an Output value from it, deeply unwrapping nested Input values as necessary.
        It also marks the returned Output as a secret, so its contents are tagged as such at the provider boundary.

        :param Input[T] val: An Input to be converted to an Secret Output.
        :return: A deeply-unwrapped Output that is marked as a Secret.
        :rtype: Output[T]
        """
        inner = Output.from_input(val)

        async def get_data() -> OutputData[T]:
            data = await inner._data
            return OutputData(data.value, True)

        return Output(inner._resources, get_data())

    @overload
    @staticmethod
    def all(*args: Input[T]) -> "Output[List[T]]":  # type: ignore
        ...

    @overload
    @staticmethod
    def all(**kwargs: Input[T]) -> "Output[Dict[str, T]]":
        ...

    @staticmethod
    def all(*args: Input[T], **kwargs: Input[T]):
        """
        Produces an Output of a list (if args i.e a list of inputs are supplied)
        or dict (if kwargs i.e. keyworded arguments are supplied).

        This function can be used to combine multiple, separate Inputs into a single
        Output which can then be used as the target of `apply`. Resource dependencies
        are preserved in the returned Output.

        Examples::

            Output.all(foo, bar) -> Output[[foo, bar]]
            Output.all(foo=foo, bar=bar) -> Output[{"foo": foo, "bar": bar}]

        :param Input[T] args: A list of Inputs to convert.
        :param Input[T] kwargs: A list of named Inputs to convert.
        :return: An output of list or dict, converted from unnamed or named Inputs respectively.
        """

        async def gather_dict(outputs: Dict[str, "Output[T]"]) -> OutputData:
            data_list: List[OutputData[T]] = await asyncio.gather(
                *[o._data for o in outputs.values()]
            )
            secret = any(data.secret for data in data_list)
            value = {k: d.value for (k, d) in zip(outputs.keys(), data_list)}
            return OutputData(value, secret)

        async def gather_list(outputs: List["Output[T]"]) -> OutputData:
            data_list: List[OutputData[T]] = await asyncio.gather(
                *[o._data for o in outputs]
            )
            secret = any(data.secret for data in data_list)
            return OutputData([data.value for data in data_list], secret)

        if args and kwargs:
            raise ValueError(
                "Output.all() was supplied a mix of named and unnamed inputs"
            )

        if kwargs:
            named = {k: Output.from_input(v) for k, v in kwargs.items()}
            return Output(_union_resources(named.values()), gather_dict(named))
        outputs = [Output.from_input(x) for x in args]
        return Output(_union_resources(outputs), gather_list(outputs))

    @staticmethod
    def concat(*args: Input[str]) -> "Output[str]":
        """
        Concatenates a collection of Input[str] into a single Output[str].

        This function takes a sequence of Input[str], stringifies each, and concatenates all values
        into one final string. This can be used like so:

            url = Output.concat("https://", app.default_site_hostname)

        :param Input[str] args: A list of string Inputs to concatenate.
        :return: A concatenated output string.
        :rtype: Output[str]
        """

        transformed_items: List[Output[str]] = [Output.from_input(v) for v in args]
        return Output.all(*transformed_items).apply(lambda vs: "".join(str(v) for v in vs))  # type: ignore

    @staticmethod
    def format(
        format_string: Input[str], *args: Input[object], **kwargs: Input[object]
    ) -> "Output[str]":
        """
        Perform a string formatting operation.

        This has the same semantics as `str.format` except it handles Input types.
        """

        o_format = Output.from_input(format_string)
        o_args = Output.all(*args) if args else Output.from_input([])
        o_kwargs = Output.all(**kwargs) if kwargs else Output.from_input({})
        return Output.all(o_format, o_args, o_kwargs).apply(
            lambda parts: parts[0].format(*parts[1], **parts[2])
        )

    def __str__(self) -> str:
        return """Calling __str__ on an Output[T] is not supported.

To get the value of an Output[T] as an Output[str] consider:
1. o.apply(lambda v: f"prefix{v}suffix")"""


def _union_resources(outputs: Any) -> Set["Resource"]:
    return reduce(lambda acc, o: acc | o._resources, outputs, set())


def collect_resources(val: Any) -> Set["Resource"]:
    """
    Returns every resource that `val` reads from, looking through nested lists and dicts.
    """
    if isinstance(val, Output):
        return val.resources()
    if isinstance(val, dict):
        return reduce(
            lambda acc, kv: acc | collect_resources(kv[0]) | collect_resources(kv[1]),
            val.items(),
            set(),
        )
    if isinstance(val, (list, tuple)):
        return reduce(lambda acc, v: acc | collect_resources(v), val, set())
    return set()
