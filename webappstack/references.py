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
Pure functions deriving the strings that tie the deployed resources together, and their Output-lifted forms.
"""
from .output import Input, Output

KEY_VAULT_REFERENCE_FORMAT = "@Microsoft.KeyVault(SecretUri={})"

CONTAINER_SCOPE_FORMAT = (
    "/subscriptions/{subscription_id}"
    "/resourcegroups/{resource_group}"
    "/providers/Microsoft.Storage/storageAccounts/{account}"
    "/blobServices/default/containers/{container}"
)


def secret_uri(vault_uri: str, name: str, version: str) -> str:
    """
    Returns the retrieval URL of one version of a key vault secret.  `vault_uri` is the vault's base URI as
    reported by the provider, which already ends with a slash.
    """
    return f"{vault_uri}secrets/{name}/{version}"


def key_vault_reference(url: str) -> str:
    """
    Renders an app setting value that the web app resolves from key vault at runtime.
    """
    return KEY_VAULT_REFERENCE_FORMAT.format(url)


def container_scope(subscription_id: str, resource_group: str, account: str, container: str) -> str:
    """
    Returns the authorization scope naming a single blob container.
    """
    return CONTAINER_SCOPE_FORMAT.format(
        subscription_id=subscription_id,
        resource_group=resource_group,
        account=account,
        container=container,
    )


def https_url(hostname: str) -> str:
    return f"https://{hostname}"


def secret_uri_output(vault_uri: Input[str], name: Input[str], version: Input[str]) -> Output[str]:
    return Output.all(vault_uri, name, version).apply(lambda args: secret_uri(*args))


def key_vault_reference_output(url: Input[str]) -> Output[str]:
    return Output.from_input(url).apply(key_vault_reference)


def container_scope_output(
    subscription_id: Input[str],
    resource_group: Input[str],
    account: Input[str],
    container: Input[str],
) -> Output[str]:
    return Output.all(subscription_id, resource_group, account, container).apply(
        lambda args: container_scope(*args)
    )


def https_url_output(hostname: Input[str]) -> Output[str]:
    return Output.from_input(hostname).apply(https_url)
