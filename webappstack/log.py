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
Utility functions for logging messages to the diagnostic stream of a deployment.
"""
import logging
import sys
from typing import Optional, TYPE_CHECKING

from .runtime.settings import get_engine

if TYPE_CHECKING:
    from .resource import Resource

DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR

_PREFIXES = {DEBUG: "debug", INFO: "info", WARNING: "warning", ERROR: "error"}


class LogEngine:
    """
    LogEngine forwards diagnostics to a standard library logger.
    """

    logger: logging.Logger

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger if logger is not None else logging.getLogger("webappstack")

    def Log(self, severity: int, message: str) -> None:
        self.logger.log(severity, message)


def debug(msg: str, resource: Optional['Resource'] = None) -> None:
    """
    Logs a message to the debug channel, associating it with a resource if provided.

    :param str msg: The message to log.
    :param Optional[Resource] resource: If provided, associate this message with the given resource.
    """
    _log(DEBUG, msg, resource)


def info(msg: str, resource: Optional['Resource'] = None) -> None:
    """
    Logs a message to the info channel, associating it with a resource if provided.

    :param str msg: The message to log.
    :param Optional[Resource] resource: If provided, associate this message with the given resource.
    """
    _log(INFO, msg, resource)


def warn(msg: str, resource: Optional['Resource'] = None) -> None:
    """
    Logs a message to the warning channel, associating it with a resource if provided.

    :param str msg: The message to log.
    :param Optional[Resource] resource: If provided, associate this message with the given resource.
    """
    _log(WARNING, msg, resource)


def error(msg: str, resource: Optional['Resource'] = None) -> None:
    """
    Logs a message to the error channel, associating it with a resource if provided.

    :param str msg: The message to log.
    :param Optional[Resource] resource: If provided, associate this message with the given resource.
    """
    _log(ERROR, msg, resource)


def _log(severity: int, message: str, resource: Optional['Resource']) -> None:
    if resource is not None:
        message = f"{resource._type}::{resource._name}: {message}"

    engine = get_engine()
    if engine is not None:
        engine.Log(severity, message)
    else:
        print(f"{_PREFIXES[severity]}: {message}", file=sys.stderr)
