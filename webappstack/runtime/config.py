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
Runtime support for reading stack configuration files.  Please use webappstack.Config instead.
"""
import json
import os
from typing import Any, Dict, NamedTuple, Set, Union

import yaml

from ..errors import ConfigurationError


class StackConfig(NamedTuple):
    values: Dict[str, str]
    """
    Fully qualified configuration keys (`namespace:key`) mapped to their string values.
    """

    secret_keys: Set[str]
    """
    The keys whose values were marked `secure` in the file.
    """


def load_stack_config(path: Union[str, "os.PathLike[str]"]) -> StackConfig:
    """
    Reads a stack configuration file of the form::

        config:
          webapp:solutionRoot: /src/easy-azure-webapp
          webapp:variant: hardened
          webapp:apiKey:
            secure: s3cr3t

    Scalar values are kept as strings, the way they would be typed on a command line; lists and mappings
    are stored as JSON.

    :raises ConfigurationError: The file is missing, is not valid YAML or has an unexpected shape.
    """
    path = os.fspath(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"stack configuration file '{path}' does not exist") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"stack configuration file '{path}' is not valid YAML: {e}") from e

    if doc is None:
        return StackConfig({}, set())
    if not isinstance(doc, dict):
        raise ConfigurationError(f"stack configuration file '{path}' must contain a mapping")

    config = doc.get("config") or {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"'config' in '{path}' must be a mapping")

    values: Dict[str, str] = {}
    secret_keys: Set[str] = set()
    for key, value in config.items():
        if not isinstance(key, str) or ":" not in key:
            raise ConfigurationError(
                f"configuration key '{key}' in '{path}' must be of the form 'namespace:key'"
            )
        if isinstance(value, dict) and set(value.keys()) == {"secure"}:
            secret_keys.add(key)
            value = value["secure"]
        values[key] = _to_config_string(value)

    return StackConfig(values, secret_keys)


def _to_config_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    if value is None:
        return ""
    return str(value)
