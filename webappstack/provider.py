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
The provider boundary. Everything that talks to the cloud control plane lives behind a Provider; the
rest of the package treats it as an opaque asynchronous materializer.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Set, Tuple

from google.protobuf import struct_pb2

from .runtime import rpc


class ResourceArgs:
    """
    ResourceArgs describes one resource submitted to a provider.
    """

    typ: str
    name: str
    properties: struct_pb2.Struct
    resource_id: Optional[str]

    def __init__(
        self,
        typ: str,
        name: str,
        properties: struct_pb2.Struct,
        resource_id: Optional[str] = None,
    ) -> None:
        """
        :param str typ: The token that indicates which resource type is being materialized, of the form "package:module:type".
        :param str name: The logical name of the resource instance.
        :param Struct properties: The serialized inputs for the resource.
        :param Optional[str] resource_id: The physical identifier of an existing resource to read.
        """
        self.typ = typ
        self.name = name
        self.properties = properties
        self.resource_id = resource_id

    @property
    def inputs(self) -> Dict[str, Any]:
        """
        The deserialized inputs, with secret values unwrapped.
        """
        props = rpc.deserialize_properties(self.properties)
        return {k: rpc.unwrap_rpc_secret(v) for k, v in props.items()}

    @property
    def secret_keys(self) -> Set[str]:
        props = rpc.deserialize_properties(self.properties)
        return {k for k, v in props.items() if rpc.is_rpc_secret(v)}


class CallArgs:
    """
    CallArgs describes one provider function call, such as looking up the current client configuration.
    """

    token: str
    args: Dict[str, Any]

    def __init__(self, token: str, args: Dict[str, Any]) -> None:
        """
        :param str token: The token that indicates which function is being called, of the form "package:module:function".
        :param dict args: The arguments provided to the function call.
        """
        self.token = token
        self.args = args


class Provider(ABC):
    """
    Provider materializes descriptors against a cloud control plane. Each method may suspend for as long as
    the remote operation takes and raises to report that the operation was rejected.
    """

    @abstractmethod
    async def create(self, args: ResourceArgs) -> Tuple[str, Dict[str, Any]]:
        """
        Creates (or updates) the resource described by `args` and returns its physical id together with its
        output properties.
        """

    @abstractmethod
    async def read(self, args: ResourceArgs) -> Tuple[str, Dict[str, Any]]:
        """
        Reads back the current state of the existing resource `args.resource_id`.
        """

    @abstractmethod
    async def call(self, args: CallArgs) -> Dict[str, Any]:
        """
        Invokes a provider function and returns its result.
        """
