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
Support for serializing and deserializing properties going into or flowing
out of the provider boundary.
"""
from typing import Any, Dict, List, Mapping, Optional, Set

from google.protobuf import struct_pb2

from ..asset import FileArchive
from ..errors import InputPropertyError

_special_sig_key = "4dabf18193072939515e22adb298388d"
"""
_special_sig_key is sometimes used to encode type identity inside of a map.
"""

_special_archive_sig = "0def7320c3a5731c473e5ecbe6d01bc7"
"""
special_archive_sig is a randomly assigned hash used to identify archives in maps.
"""

_special_secret_sig = "1b47061264138c4ac30d75fd1eb44270"
"""
special_secret_sig is a randomly assigned hash used to identify secrets in maps.
"""


def serialize_properties(
    props: Mapping[str, Any], secret_keys: Optional[Set[str]] = None
) -> struct_pb2.Struct:
    """
    Serializes a dictionary of already-resolved property values into a protobuf `Struct`. Top level
    properties named in `secret_keys` are wrapped with the secret signature.
    """
    secret_keys = secret_keys or set()
    obj: Dict[str, Any] = {}
    for k, v in props.items():
        if not isinstance(k, str):
            raise InputPropertyError(str(k), "property names must be strings")
        value = serialize_property(v, k)
        if k in secret_keys:
            value = wrap_rpc_secret(value)
        obj[k] = value

    struct = struct_pb2.Struct()
    struct.update(obj)
    return struct


def serialize_property(value: Any, property_path: str = "") -> Any:
    """
    Converts a single resolved value into the plain structure a protobuf `Struct` can hold.
    """
    if value is None or isinstance(value, (str, bool)):
        return value

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, FileArchive):
        return {_special_sig_key: _special_archive_sig, "path": value.path}

    if isinstance(value, (list, tuple)):
        return [
            serialize_property(v, f"{property_path}[{i}]") for i, v in enumerate(value)
        ]

    if isinstance(value, dict):
        obj = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise InputPropertyError(
                    property_path, f"dictionary keys must be strings, got {type(k).__name__}"
                )
            obj[k] = serialize_property(v, f"{property_path}.{k}" if property_path else k)
        return obj

    raise InputPropertyError(
        property_path, f"unexpected input of type {type(value).__name__}"
    )


def deserialize_properties(props_struct: struct_pb2.Struct) -> Any:
    """
    Deserializes a protobuf `struct_pb2.Struct` into a Python dictionary containing normal
    Python types.
    """
    if _special_sig_key in props_struct:
        if props_struct[_special_sig_key] == _special_archive_sig:
            if "path" in props_struct:
                return FileArchive(str(props_struct["path"]))
            raise AssertionError(
                "Invalid archive encountered when unmarshalling resource property"
            )
        if props_struct[_special_sig_key] == _special_secret_sig:
            return wrap_rpc_secret(deserialize_property(props_struct["value"]))
        raise AssertionError(
            "Unrecognized signature when unmarshalling resource property"
        )

    output = {}
    for k, v in list(props_struct.items()):
        value = deserialize_property(v)
        # We treat values that deserialize to "None" as if they don't exist.
        if value is not None:
            output[k] = value

    return output


def deserialize_property(value: Any) -> Any:
    """
    Deserializes a single protobuf value (either `Struct` or `ListValue`) into idiomatic
    Python values.
    """
    if isinstance(value, struct_pb2.ListValue):
        values: List[Any] = [deserialize_property(v) for v in value]  # type: ignore
        return values

    if isinstance(value, struct_pb2.Struct):
        return deserialize_properties(value)

    return value


def is_rpc_secret(value: Any) -> bool:
    """
    Returns if a given python value is actually a wrapped secret.
    """
    return (
        isinstance(value, dict)
        and _special_sig_key in value
        and value[_special_sig_key] == _special_secret_sig
    )


def wrap_rpc_secret(value: Any) -> Any:
    """
    Given a value, wrap it as a secret value if it isn't already a secret, otherwise return the value unmodified.
    """
    if is_rpc_secret(value):
        return value

    return {
        _special_sig_key: _special_secret_sig,
        "value": value,
    }


def unwrap_rpc_secret(value: Any) -> Any:
    """
    Given a value, if it is a wrapped secret value, return the underlying, otherwise return the value unmodified.
    """
    if is_rpc_secret(value):
        return value["value"]

    return value
