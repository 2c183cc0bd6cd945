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
Materialization of a single declared resource against the provider.
"""
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Set, Tuple

from .. import log
from ..errors import InputPropertyError, MaterializationError
from ..output import Output, OutputData
from ..provider import CallArgs, Provider, ResourceArgs
from . import rpc, settings

if TYPE_CHECKING:
    from ..resource import Resource


class ResourceState(str, Enum):
    """
    The lifecycle of a node: declared -> pending -> materializing -> ready | failed.
    """

    DECLARED = "declared"
    PENDING = "pending"
    MATERIALIZING = "materializing"
    READY = "ready"
    FAILED = "failed"


_TRANSITIONS = {
    ResourceState.DECLARED: {ResourceState.PENDING, ResourceState.FAILED},
    ResourceState.PENDING: {ResourceState.MATERIALIZING, ResourceState.FAILED},
    ResourceState.MATERIALIZING: {ResourceState.READY, ResourceState.FAILED},
    ResourceState.READY: set(),
    ResourceState.FAILED: set(),
}


def transition(res: "Resource", state: ResourceState) -> None:
    if state not in _TRANSITIONS[res._state]:
        raise AssertionError(
            f"illegal state transition for '{res._name}': {res._state.value} -> {state.value}"
        )
    if settings.excessive_debug_output:
        log.debug(f"{res._state.value} -> {state.value}", resource=res)
    res._state = state


async def resolve_inputs(res: "Resource") -> Tuple[Dict[str, Any], Set[str]]:
    """
    Awaits every input property of `res` and returns the resolved values together with the names of the
    properties that carry secret data.  Properties that resolve to None are omitted.
    """
    inputs: Dict[str, Any] = {}
    secret_keys: Set[str] = set()
    for k, v in res._props.items():
        data = await Output.from_input(v)._data
        if data.value is None:
            continue
        inputs[k] = data.value
        if data.secret:
            secret_keys.add(k)
    return inputs, secret_keys


async def materialize(res: "Resource", provider: Provider) -> None:
    """
    Submits `res` to the provider and resolves its outputs.  The caller guarantees that every dependency of
    `res` is ready.  On failure the resource and all of its outputs are failed and the error is re-raised.
    """
    try:
        inputs, secret_keys = await resolve_inputs(res)
        res._check(inputs)
        properties = rpc.serialize_properties(inputs, secret_keys)

        transition(res, ResourceState.MATERIALIZING)
        log.debug(f"materializing ({res._kind})", resource=res)
        resource_id, outputs = await _submit(res, provider, inputs, properties)

        # Outputs cross the same boundary as inputs and are normalized the same way.
        outputs = rpc.deserialize_properties(rpc.serialize_properties(outputs))
        state = {**inputs, **{k: rpc.unwrap_rpc_secret(v) for k, v in outputs.items()}}
        secret_keys |= {k for k, v in outputs.items() if rpc.is_rpc_secret(v)}
        res._record(resource_id, state)
    except (InputPropertyError, MaterializationError) as e:
        fail(res, e)
        raise
    except Exception as e:
        err = MaterializationError(res._name, e)
        fail(res, err)
        raise err from e

    resolve(res, resource_id, state, secret_keys)
    transition(res, ResourceState.READY)
    log.debug("ready", resource=res)


async def _submit(
    res: "Resource",
    provider: Provider,
    inputs: Dict[str, Any],
    properties: Any,
) -> Tuple[Optional[str], Dict[str, Any]]:
    if res._kind == "invoke":
        token = getattr(res, "_token")
        result = await provider.call(CallArgs(token, inputs))
        return None, {"result": result}

    if res._kind == "read":
        resource_id = await Output.from_input(res._opts.id).future()
        return await provider.read(
            ResourceArgs(res._type, res._name, properties, resource_id)
        )

    return await provider.create(ResourceArgs(res._type, res._name, properties))


def resolve(
    res: "Resource",
    resource_id: Optional[str],
    state: Dict[str, Any],
    secret_keys: Set[str],
) -> None:
    """
    Resolves each output cell of `res` from its materialized state.
    """
    for prop, future in res._resolvers.items():
        if future.done():
            continue
        value = resource_id if prop == "id" else state.get(prop)
        secret = prop in secret_keys or prop in res._additional_secret_outputs
        future.set_result(OutputData(value, secret))


def fail(res: "Resource", err: BaseException) -> None:
    """
    Marks `res` as failed and fails every one of its output cells with `err`.
    """
    if res._state != ResourceState.FAILED:
        transition(res, ResourceState.FAILED)
    res._error = err
    for future in res._resolvers.values():
        if not future.done():
            future.set_exception(err)
