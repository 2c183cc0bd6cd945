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
Mocks for testing.
"""
import asyncio
import functools
import logging
from abc import ABC, abstractmethod
from inspect import isawaitable
from typing import Any, Dict, List, NamedTuple, Optional, Set, Tuple

from .. import log
from ..provider import CallArgs, Provider, ResourceArgs
from . import rpc
from .settings import Settings, configure


def test(fn):
    """
    Runs a test function, driving it to completion on a fresh event loop when it is a coroutine function.
    """

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        result = fn(*args, **kwargs)
        if isawaitable(result):
            return asyncio.run(result)
        return result

    return wrapper


class MockResourceArgs:
    """
    MockResourceArgs is used to construct a new_resource Mock
    """

    typ: str
    name: str
    inputs: dict
    resource_id: Optional[str]
    secret_keys: Set[str]

    def __init__(
        self,
        typ: str,
        name: str,
        inputs: dict,
        resource_id: Optional[str] = None,
        secret_keys: Optional[Set[str]] = None,
    ) -> None:
        """
        :param str typ: The token that indicates which resource type is being constructed. This token is of the form "package:module:type".
        :param str name: The logical name of the resource instance.
        :param dict inputs: The inputs for the resource.
        :param str resource_id: The physical identifier of an existing resource to read.
        :param set secret_keys: The names of the inputs that carry secret data.
        """
        self.typ = typ
        self.name = name
        self.inputs = inputs
        self.resource_id = resource_id
        self.secret_keys = secret_keys if secret_keys is not None else set()


class MockCallArgs:
    """
    MockCallArgs is used to construct a call Mock
    """

    token: str
    args: dict

    def __init__(self, token: str, args: dict) -> None:
        """
        :param str token: The token that indicates which function is being called. This token is of the form "package:module:function".
        :param dict args: The arguments provided to the function call.
        """
        self.token = token
        self.args = args


class Mocks(ABC):
    """
    Mocks is an abstract class that allows subclasses to replace operations normally implemented by the cloud
    provider with their own implementations. This can be used during testing to ensure that calls to provider
    functions and resource constructors return predictable values.  Either method may be a coroutine function,
    in which case it is awaited.
    """

    @abstractmethod
    def call(self, args: MockCallArgs) -> dict:
        """
        call mocks provider-implemented function calls (e.g. azure.core.get_client_config).

        :param MockCallArgs args.
        """
        return {}

    @abstractmethod
    def new_resource(self, args: MockResourceArgs) -> Tuple[Optional[str], dict]:
        """
        new_resource mocks resource construction and read calls. This function should return the physical
        identifier and the output properties for the resource being constructed.

        :param MockResourceArgs args.
        """
        return "", {}


class MockProvider(Provider):
    """
    A Provider that answers every request from a Mocks instance.  Requests and responses cross the same
    Struct encoding a real provider would see.
    """

    class ResourceRegistration(NamedTuple):
        name: str
        id: str
        state: dict

    mocks: Mocks
    resources: Dict[str, ResourceRegistration]
    calls: List[MockCallArgs]

    def __init__(self, mocks: Mocks):
        self.mocks = mocks
        self.resources = {}
        self.calls = []

    async def create(self, args: ResourceArgs) -> Tuple[str, Dict[str, Any]]:
        resource_args = MockResourceArgs(
            typ=args.typ,
            name=args.name,
            inputs=args.inputs,
            secret_keys=args.secret_keys,
        )
        id_, state = await _maybe_await(self.mocks.new_resource(resource_args))
        if id_ is None:
            id_ = f"{args.name}_id"

        state = rpc.deserialize_properties(rpc.serialize_properties(state))
        self.resources[id_] = MockProvider.ResourceRegistration(args.name, id_, {**args.inputs, **state})
        return id_, state

    async def read(self, args: ResourceArgs) -> Tuple[str, Dict[str, Any]]:
        resource_args = MockResourceArgs(
            typ=args.typ,
            name=args.name,
            inputs=args.inputs,
            resource_id=args.resource_id,
            secret_keys=args.secret_keys,
        )
        id_, state = await _maybe_await(self.mocks.new_resource(resource_args))
        if id_ is None:
            id_ = args.resource_id

        registered = self.resources.get(args.resource_id or "")
        if registered is None and not state:
            raise Exception(f"unknown resource {args.resource_id}")
        if registered is not None:
            state = {**registered.state, **state}
        return id_, rpc.deserialize_properties(rpc.serialize_properties(state))

    async def call(self, args: CallArgs) -> Dict[str, Any]:
        call_args = MockCallArgs(token=args.token, args=args.args)
        self.calls.append(call_args)
        ret = await _maybe_await(self.mocks.call(call_args))
        return rpc.deserialize_properties(rpc.serialize_properties(ret))


async def _maybe_await(value: Any) -> Any:
    if isawaitable(value):
        return await value
    return value


def set_mocks(
    mocks: Mocks,
    project: Optional[str] = None,
    stack: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
    parallel: Optional[int] = None,
) -> MockProvider:
    """
    set_mocks configures the runtime for testing and returns a provider that uses the given mocks.
    """
    settings = Settings(
        project=project if project is not None else "project",
        stack=stack if stack is not None else "stack",
        engine=log.LogEngine(logger),
        parallel=parallel,
    )
    configure(settings)
    return MockProvider(mocks)
