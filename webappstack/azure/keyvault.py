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

from typing import Any, Dict, Optional, Sequence, Union

from ..errors import InputPropertyError
from ..output import Input, Output
from ..resource import CustomResource, ResourceOptions

DEPLOYER_SECRET_PERMISSIONS = ["delete", "get", "list", "set"]


def _policy_key(key_vault_id: str, object_id: str) -> tuple:
    return ("azure:keyvault/accessPolicy", key_vault_id, object_id)


class KeyVaultAccessPolicyArgs:
    """
    An access policy declared inline on a key vault.
    """

    def __init__(
        self,
        tenant_id: Input[str],
        object_id: Input[str],
        secret_permissions: Input[Sequence[str]],
    ) -> None:
        self.tenant_id = tenant_id
        self.object_id = object_id
        self.secret_permissions = secret_permissions

    def to_input(self) -> Dict[str, Any]:
        return {
            "tenant_id": self.tenant_id,
            "object_id": self.object_id,
            "secret_permissions": list(self.secret_permissions)
            if isinstance(self.secret_permissions, (list, tuple))
            else self.secret_permissions,
        }


class KeyVault(CustomResource):
    """
    A key vault.  Access is granted either with inline `access_policies` or with separate
    :class:`AccessPolicy` resources; a given principal may hold only one policy per vault either way.
    """

    _output_properties = ("name", "vault_uri")

    name: Output[str]
    vault_uri: Output[str]
    """
    The URI of the vault, ending with a slash, e.g. `https://kv.vault.azure.net/`.
    """

    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        tenant_id: Input[str],
        sku_name: Input[str] = "standard",
        access_policies: Optional[Union[KeyVaultAccessPolicyArgs, Sequence[KeyVaultAccessPolicyArgs]]] = None,
        soft_delete_enabled: Optional[Input[bool]] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        if isinstance(access_policies, KeyVaultAccessPolicyArgs):
            access_policies = [access_policies]
        props = {
            "resource_group_name": resource_group_name,
            "sku_name": sku_name,
            "tenant_id": tenant_id,
            "access_policies": [p.to_input() for p in access_policies] if access_policies else None,
            "soft_delete_enabled": soft_delete_enabled,
        }
        super().__init__("azure:keyvault/keyVault:KeyVault", resource_name, props, opts)

    def _check(self, inputs: Dict[str, Any]) -> None:
        seen = set()
        for i, policy in enumerate(inputs.get("access_policies", [])):
            object_id = policy.get("object_id")
            if object_id in seen:
                raise InputPropertyError(
                    f"access_policies[{i}].object_id",
                    f"principal '{object_id}' already has an access policy on this key vault",
                )
            seen.add(object_id)

    def _record(self, resource_id: Optional[str], outputs: Dict[str, Any]) -> None:
        for policy in outputs.get("access_policies", []):
            self._stack.claim(_policy_key(resource_id, policy.get("object_id")), self._name)


class AccessPolicy(CustomResource):
    """
    A key vault access policy for a single principal.
    """

    _output_properties = ()

    def __init__(
        self,
        resource_name: str,
        key_vault_id: Input[str],
        tenant_id: Input[str],
        object_id: Input[str],
        secret_permissions: Input[Union[str, Sequence[str]]],
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        if isinstance(secret_permissions, str):
            secret_permissions = [secret_permissions]
        props = {
            "key_vault_id": key_vault_id,
            "tenant_id": tenant_id,
            "object_id": object_id,
            "secret_permissions": list(secret_permissions)
            if isinstance(secret_permissions, tuple)
            else secret_permissions,
        }
        super().__init__("azure:keyvault/accessPolicy:AccessPolicy", resource_name, props, opts)

    def _check(self, inputs: Dict[str, Any]) -> None:
        key = _policy_key(inputs.get("key_vault_id"), inputs.get("object_id"))
        owner = self._stack.claim(key, self._name)
        if owner is not None:
            raise InputPropertyError(
                "object_id",
                f"principal '{inputs.get('object_id')}' already has an access policy on key vault "
                f"'{inputs.get('key_vault_id')}' (declared by '{owner}')",
            )


class Secret(CustomResource):
    """
    A key vault secret.  Its value is always treated as secret data.
    """

    _output_properties = ("name", "version")

    name: Output[str]
    version: Output[str]

    def __init__(
        self,
        resource_name: str,
        key_vault_id: Input[str],
        value: Input[str],
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        props = {
            "key_vault_id": key_vault_id,
            "value": Output.secret(value),
        }
        super().__init__("azure:keyvault/secret:Secret", resource_name, props, opts)
