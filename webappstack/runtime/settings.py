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
Runtime settings and the per-context state needed while a stack is being declared and run.
"""
from __future__ import annotations

import asyncio
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .stack import Stack


# excessive_debug_output enables, well, pretty excessive debug output pertaining to resources and properties.
excessive_debug_output = False


class Settings:
    """
    A bag of properties for configuring the runtime.
    """

    def __init__(
        self,
        project: Optional[str] = None,
        stack: Optional[str] = None,
        engine: Optional[Any] = None,
        parallel: Optional[int] = None,
    ):
        if parallel is not None and parallel < 1:
            raise ValueError("parallel must be a positive integer")

        self.project = project
        self.stack = stack
        self.engine = engine
        self.parallel = parallel


_SETTINGS: ContextVar[Settings] = ContextVar("settings")
_ROOT_STACK: ContextVar[Optional["Stack"]] = ContextVar("root_stack", default=None)


def configure(settings: Settings) -> None:
    """
    Configure sets the current settings for this context.
    """
    _SETTINGS.set(settings)


def get_settings() -> Settings:
    settings = _SETTINGS.get(None)
    if settings is None:
        settings = Settings()
        _SETTINGS.set(settings)
    return settings


def get_engine() -> Optional[Any]:
    """
    Returns the log sink, if any, that diagnostics should be sent to.
    """
    return get_settings().engine


def get_root_stack() -> Optional["Stack"]:
    """
    Returns the stack whose resources are currently being declared, if any.
    """
    return _ROOT_STACK.get()


def set_root_stack(stack: Optional["Stack"]) -> Any:
    """
    Sets the stack that newly declared resources register with. Returns a token for `reset_root_stack`.
    """
    return _ROOT_STACK.set(stack)


def reset_root_stack(token: Any) -> None:
    _ROOT_STACK.reset(token)


def track_output(task: "asyncio.Future") -> None:
    """
    Remembers an output's pending work on the current stack so it can be drained before the stack finishes.
    """
    stack = _ROOT_STACK.get()
    if stack is not None:
        stack._outputs.append(task)
