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
Provider function calls, such as looking up the current client configuration.
"""
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence, Union

from .errors import RunError
from .output import Output
from .resource import Resource, ResourceOptions
from .runtime.settings import get_root_stack

if TYPE_CHECKING:
    from .output import Inputs


class InvokeOptions:
    """
    InvokeOptions is a bag of options that control the behavior of a call to `invoke`.
    """

    depends_on: Optional[Union[Sequence[Resource], Resource]]
    """
    If provided, the call is not made until the given resources are ready.
    """

    name: Optional[str]
    """
    An optional name for the call's node in the dependency graph.  Defaults to the token and a counter.
    """

    def __init__(
        self,
        depends_on: Optional[Union[Sequence[Resource], Resource]] = None,
        name: Optional[str] = None,
    ) -> None:
        self.depends_on = depends_on
        self.name = name


class Invoke(Resource):
    """
    A provider function call.  A call is a node in the dependency graph like any resource: its arguments may
    read other resources' outputs and it is not made until the graph has been validated.  Its single output,
    `result`, holds the dictionary the provider returned.
    """

    _kind = "invoke"
    _output_properties = ("result",)

    _token: str
    result: Output[Dict[str, Any]]

    def __init__(self, token: str, name: str, args: "Inputs", opts: Optional[ResourceOptions] = None) -> None:
        self._token = token
        super().__init__(token, name, args, opts)


def invoke(
    token: str,
    args: Optional["Inputs"] = None,
    opts: Optional[InvokeOptions] = None,
) -> Output[Dict[str, Any]]:
    """
    invoke dynamically invokes the function, `token`, which is offered by the provider.  The inputs can be
    a bag of computed values (Ts or Awaitable[T]s), and the result is an Output of the returned dictionary.
    """
    if not token:
        raise TypeError("Missing invoke token argument")

    stack = get_root_stack()
    if stack is None:
        raise RunError(f"Function '{token}' must be invoked while a stack is being constructed")

    if opts is None:
        opts = InvokeOptions()
    name = opts.name if opts.name is not None else stack._next_invoke_name(token)
    call = Invoke(token, name, args or {}, ResourceOptions(depends_on=opts.depends_on))
    return call.result
