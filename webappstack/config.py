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
The config module contains all configuration management functionality.
"""
from typing import Callable, Iterable, Mapping, Optional

from . import errors, log
from .output import Output


class Config:
    """
    Config is a bag of related configuration state.  Each bag contains any number of configuration variables, indexed by
    simple keys, and each has a name that uniquely identifies it; two bags with different names do not share values for
    variables that otherwise share the same key.  For example, a bag whose name is `webapp`, with keys `a`, `b`,
    and `c`, is entirely separate from a bag whose name is `webappstack` with the same simple key names.  Each key has a
    fully qualified name, such as `webapp:a`, ..., and `webappstack:a`, respectively.

    Values are supplied explicitly, usually from `runtime.config.load_stack_config`; a Config never reads the
    process environment.
    """

    name: str
    """
    The configuration bag's logical name that uniquely identifies it.
    """

    def __init__(
        self,
        name: str,
        values: Optional[Mapping[str, str]] = None,
        secret_keys: Optional[Iterable[str]] = None,
    ) -> None:
        """
        :param str name: The configuration bag's logical name that uniquely identifies it.
        :param Optional[Mapping[str,str]] values: Fully qualified keys mapped to their values.
        :param Optional[Iterable[str]] secret_keys: The fully qualified keys whose values are secrets.
        """
        if not name:
            raise TypeError("Missing config name argument")
        if not isinstance(name, str):
            raise TypeError("Expected name to be a string")
        self.name = name
        self._values = dict(values or {})
        self._secret_keys = set(secret_keys or [])

    def _get(
        self,
        key: str,
        use: Optional[Callable] = None,
        instead_of: Optional[Callable] = None,
    ) -> Optional[str]:
        full_key = self.full_key(key)
        if use is not None and full_key in self._secret_keys:
            assert instead_of is not None
            log.warn(
                f"Configuration '{full_key}' value is a secret; "
                + f"use `{use.__name__}` instead of `{instead_of.__name__}`"
            )
        return self._values.get(full_key)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Returns an optional configuration value by its key,
        a default value if that key is unset and a default is provided,
        or None if it doesn't exist.

        :param str key: The requested configuration key.
        :param Optional[str] default: An optional fallback value to use if the given configuration key is not set.
        :return: The configuration key's value, or None if one does not exist.
        :rtype: Optional[str]
        """
        config_candidate = self._get(key, self.get_secret, self.get)
        return config_candidate if config_candidate is not None else default

    def get_secret(self, key: str, default: Optional[str] = None) -> Optional[Output[str]]:
        """
        Returns an optional configuration value by its key, marked as a secret,
        a default value if that key is unset and a default is provided,
        or None if it doesn't exist.
        """
        config_candidate = self._get(key)
        v = config_candidate if config_candidate is not None else default
        if v is None:
            return None
        return Output.secret(v)

    def _get_bool(
        self,
        key: str,
        use: Optional[Callable] = None,
        instead_of: Optional[Callable] = None,
    ) -> Optional[bool]:
        v = self._get(key, use, instead_of)
        if v is None:
            return None
        if v in ["true", "True"]:
            return True
        if v in ["false", "False"]:
            return False
        raise ConfigTypeError(self.full_key(key), v, "bool")

    def get_bool(self, key: str, default: Optional[bool] = None) -> Optional[bool]:
        """
        Returns an optional configuration value, as a bool, by its key,
        a default value if that key is unset and a default is provided,
        or None if it doesn't exist.
        If the configuration value isn't a legal boolean, this function will throw an error.

        :param str key: The requested configuration key.
        :param Optional[bool] default: An optional fallback value to use if the given configuration key is not set.
        :return: The configuration key's value, or None if one does not exist.
        :rtype: Optional[bool]
        :raises ConfigTypeError: The configuration value existed but couldn't be coerced to bool.
        """
        config_candidate = self._get_bool(key, self.require_bool, self.get_bool)
        return config_candidate if config_candidate is not None else default

    def _get_int(
        self,
        key: str,
        use: Optional[Callable] = None,
        instead_of: Optional[Callable] = None,
    ) -> Optional[int]:
        v = self._get(key, use, instead_of)
        if v is None:
            return None
        try:
            return int(v)
        except Exception as e:
            raise ConfigTypeError(self.full_key(key), v, "int") from e

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """
        Returns an optional configuration value, as an int, by its key,
        a default value if that key is unset and a default is provided,
        or None if it doesn't exist.
        If the configuration value isn't a legal int, this function will throw an error.

        :param str key: The requested configuration key.
        :param Optional[int] default: An optional fallback value to use if the given configuration key is not set.
        :return: The configuration key's value, or None if one does not exist.
        :rtype: Optional[int]
        :raises ConfigTypeError: The configuration value existed but couldn't be coerced to int.
        """
        config_candidate = self._get_int(key, self.require_int, self.get_int)
        return config_candidate if config_candidate is not None else default

    def require(self, key: str) -> str:
        """
        Returns a configuration value by its given key.  If it doesn't exist, an error is thrown.

        :param str key: The requested configuration key.
        :return: The configuration key's value.
        :rtype: str
        :raises ConfigMissingError: The configuration value did not exist.
        """
        v = self._get(key, self.require_secret, self.require)
        if v is None:
            raise ConfigMissingError(self.full_key(key), False)
        return v

    def require_secret(self, key: str) -> Output[str]:
        """
        Returns a configuration value, marked as a secret by its given key.  If it doesn't exist, an error
        is thrown.

        :raises ConfigMissingError: The configuration value did not exist.
        """
        v = self._get(key)
        if v is None:
            raise ConfigMissingError(self.full_key(key), True)
        return Output.secret(v)

    def require_bool(self, key: str) -> bool:
        """
        Returns a configuration value, as a bool, by its given key.  If it doesn't exist, or the
        configuration value is not a legal bool, an error is thrown.

        :raises ConfigMissingError: The configuration value did not exist.
        :raises ConfigTypeError: The configuration value existed but couldn't be coerced to bool.
        """
        v = self._get_bool(key)
        if v is None:
            raise ConfigMissingError(self.full_key(key), False)
        return v

    def require_int(self, key: str) -> int:
        """
        Returns a configuration value, as an int, by its given key.  If it doesn't exist, or the
        configuration value is not a legal int, an error is thrown.

        :raises ConfigMissingError: The configuration value did not exist.
        :raises ConfigTypeError: The configuration value existed but couldn't be coerced to int.
        """
        v = self._get_int(key)
        if v is None:
            raise ConfigMissingError(self.full_key(key), False)
        return v

    def full_key(self, key: str) -> str:
        """
        Turns a simple configuration key into a fully resolved one, by prepending the bag's name.

        :param str key: The name of the configuration key.
        :return: The name of the configuration key, prefixed with the bag's name.
        :rtype: str
        """
        return f"{self.name}:{key}"


class ConfigTypeError(errors.ConfigurationError):
    """
    Indicates a configuration value is of the wrong type.
    """

    key: str
    """
    The name of the key whose value was ill-typed.
    """

    value: str
    """
    The ill-typed value.
    """

    expect_type: str
    """
    The expected type of this value.
    """

    def __init__(self, key: str, value: str, expect_type: str) -> None:
        self.key = key
        self.value = value
        self.expect_type = expect_type
        super().__init__(f"Configuration '{key}' value '{value}' is not a valid '{expect_type}'")


class ConfigMissingError(errors.ConfigurationError):
    """
    Indicates a configuration value is missing.
    """

    key: str
    """
    The name of the missing configuration key.
    """

    secret: bool
    """
    If this is a secret configuration key.
    """

    def __init__(self, key: str, secret: bool) -> None:
        self.key = key
        self.secret = secret
        super().__init__(
            f"Missing required configuration variable '{key}'\n"
            + f"\tplease add it to the stack configuration file{' as a secure value' if secret else ''}"
        )
