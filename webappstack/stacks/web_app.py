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
The web app stack: a zip-deployed web app whose package URL is kept in key vault and whose blob is readable
only by the app's own identity.

Two variants are offered.  `simple` grants the deployer access with a policy declared inline on the vault.
`hardened` enables soft delete on the vault and grants the deployer access with a separate policy that the
secret waits for.
"""
import os
from datetime import datetime
from typing import Callable, Optional

from .. import references
from ..asset import FileArchive
from ..azure import appservice, authorization, core, keyvault, storage
from ..errors import ConfigurationError
from ..output import Output
from ..resource import ResourceOptions
from ..runtime.stack import export

SIMPLE = "simple"
HARDENED = "hardened"
VARIANTS = (SIMPLE, HARDENED)

DEFAULT_PUBLISH_PATH = "src/Services/EasyAzureWebApp/bin/Debug/netcoreapp3.1/publish"
DEFAULT_SAS_VALIDITY_DAYS = 365


class WebAppArgs:
    """
    The inputs of the web app stack.
    """

    solution_root: str
    """
    The directory the published application is found under.
    """

    publish_path: str
    """
    The path of the published application relative to `solution_root`.
    """

    sas_validity_days: int
    location: Optional[str]
    now: Optional[datetime]
    """
    The time the blob's read signature becomes valid; the current time when not given.
    """

    def __init__(
        self,
        solution_root: str,
        publish_path: str = DEFAULT_PUBLISH_PATH,
        sas_validity_days: int = DEFAULT_SAS_VALIDITY_DAYS,
        location: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> None:
        if not solution_root:
            raise ConfigurationError("a solution root directory is required")
        self.solution_root = os.fspath(solution_root)
        self.publish_path = publish_path
        self.sas_validity_days = sas_validity_days
        self.location = location
        self.now = now

    @property
    def archive_path(self) -> str:
        return os.path.join(self.solution_root, self.publish_path)


class WebApp:
    """
    Declares every resource of the web app stack and exports `webAppUrl`.  Must be constructed while a stack
    is being declared.
    """

    web_app_url: Output[str]

    def __init__(self, args: WebAppArgs, variant: str = HARDENED) -> None:
        if variant not in VARIANTS:
            raise ConfigurationError(
                f"unknown stack variant '{variant}'; expected one of: {', '.join(VARIANTS)}"
            )
        self.variant = variant

        self.resource_group = core.ResourceGroup("rg-easy-azure-webapp", location=args.location)

        client_config = core.get_client_config()
        tenant_id = client_config.tenant_id
        deployer = client_config.object_id

        self.storage_account = storage.Account(
            "storage",
            resource_group_name=self.resource_group.name,
            account_replication_type="LRS",
            account_tier="Standard",
        )

        self.storage_container = storage.Container(
            "files",
            storage_account_name=self.storage_account.name,
            container_access_type="private",
        )

        self.code_blob = storage.Blob(
            "zip",
            storage_account_name=self.storage_account.name,
            storage_container_name=self.storage_container.name,
            type="Block",
            source=FileArchive(args.archive_path),
        )

        deployer_permissions = list(keyvault.DEPLOYER_SECRET_PERMISSIONS)
        if variant == SIMPLE:
            self.key_vault = keyvault.KeyVault(
                "key-vault",
                resource_group_name=self.resource_group.name,
                sku_name="standard",
                tenant_id=tenant_id,
                access_policies=keyvault.KeyVaultAccessPolicyArgs(
                    tenant_id=tenant_id,
                    object_id=deployer,
                    secret_permissions=deployer_permissions,
                ),
            )
            self.key_vault_policy = None
            secret_opts = None
        else:
            self.key_vault = keyvault.KeyVault(
                "key-vault",
                resource_group_name=self.resource_group.name,
                sku_name="standard",
                tenant_id=tenant_id,
                soft_delete_enabled=True,
            )
            self.key_vault_policy = keyvault.AccessPolicy(
                "key-vault-policy",
                key_vault_id=self.key_vault.id,
                tenant_id=tenant_id,
                object_id=deployer,
                secret_permissions=deployer_permissions,
            )
            # The deployer can only write the secret once its policy exists.
            secret_opts = ResourceOptions(depends_on=[self.key_vault_policy])

        self.code_blob_secret = keyvault.Secret(
            "zip-secret",
            key_vault_id=self.key_vault.id,
            value=storage.signed_blob_read_url(
                self.code_blob,
                self.storage_account,
                validity_days=args.sas_validity_days,
                now=args.now,
            ),
            opts=secret_opts,
        )

        code_blob_secret_url = references.secret_uri_output(
            self.key_vault.vault_uri,
            self.code_blob_secret.name,
            self.code_blob_secret.version,
        )

        self.app_service_plan = appservice.Plan(
            "easy-azure-webapp-plan",
            resource_group_name=self.resource_group.name,
            kind="App",
            sku=appservice.PlanSkuArgs(tier="Basic", size="B1"),
        )

        self.app_service = appservice.AppService(
            "easy-azure-webapp",
            resource_group_name=self.resource_group.name,
            app_service_plan_id=self.app_service_plan.id,
            identity=appservice.AppServiceIdentityArgs(type="SystemAssigned"),
            app_settings={
                "WEBSITE_RUN_FROM_ZIP": references.key_vault_reference_output(code_blob_secret_url),
            },
        )

        self.app_service_get = appservice.AppService.get(
            "easy-azure-webapp-get",
            self.app_service.id,
            resource_group_name=self.resource_group.name,
            app_service_plan_id=self.app_service_plan.id,
            opts=ResourceOptions(depends_on=self.app_service),
        )

        principal_id = self.app_service_get.identity.apply(lambda identity: identity["principal_id"])

        self.app_policy = keyvault.AccessPolicy(
            "app-policy",
            key_vault_id=self.key_vault.id,
            tenant_id=tenant_id,
            object_id=principal_id,
            secret_permissions="get",
        )

        subscription = core.get_subscription()
        scope = references.container_scope_output(
            subscription.subscription_id,
            self.resource_group.name,
            self.storage_account.name,
            self.storage_container.name,
        )

        self.code_blob_permission = authorization.Assignment(
            "read-code-blob",
            principal_id=principal_id,
            scope=scope,
            role_definition_name=authorization.STORAGE_BLOB_DATA_READER,
            opts=ResourceOptions(
                depends_on=[self.app_service_get, self.app_policy, self.storage_container]
            ),
        )

        self.web_app_url = references.https_url_output(self.app_service.default_site_hostname)
        export("webAppUrl", self.web_app_url)


def web_app_stack(args: WebAppArgs, variant: str = HARDENED) -> Callable[[], None]:
    """
    Returns a stack definition function declaring the web app stack, for use with `Stack.run`.
    """

    def define() -> None:
        WebApp(args, variant)

    return define
