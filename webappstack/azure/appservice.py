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

from typing import Any, Dict, Mapping, Optional

from ..output import Input, Output
from ..resource import CustomResource, ResourceOptions


class PlanSkuArgs:
    def __init__(self, tier: Input[str], size: Input[str]) -> None:
        self.tier = tier
        self.size = size

    def to_input(self) -> Dict[str, Any]:
        return {"tier": self.tier, "size": self.size}


class Plan(CustomResource):
    """
    An App Service plan: the compute the web app runs on.
    """

    _output_properties = ("name",)

    name: Output[str]

    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        sku: PlanSkuArgs,
        kind: Input[str] = "App",
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        props = {
            "resource_group_name": resource_group_name,
            "kind": kind,
            "sku": sku.to_input(),
        }
        super().__init__("azure:appservice/plan:Plan", resource_name, props, opts)


class AppServiceIdentityArgs:
    def __init__(self, type: Input[str] = "SystemAssigned") -> None:  # pylint: disable=redefined-builtin
        self.type = type

    def to_input(self) -> Dict[str, Any]:
        return {"type": self.type}


class AppService(CustomResource):
    """
    A web app.  With a `SystemAssigned` identity the provider reports the app's principal in
    `identity.principal_id` once it exists; read it back with :meth:`AppService.get`.
    """

    _output_properties = ("name", "default_site_hostname", "identity")

    name: Output[str]
    default_site_hostname: Output[str]
    identity: Output[Dict[str, Any]]
    """
    The managed identity of the app: `type`, and once created, `principal_id` and `tenant_id`.
    """

    def __init__(
        self,
        resource_name: str,
        resource_group_name: Optional[Input[str]] = None,
        app_service_plan_id: Optional[Input[str]] = None,
        identity: Optional[AppServiceIdentityArgs] = None,
        app_settings: Optional[Mapping[str, Input[str]]] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        props = {
            "resource_group_name": resource_group_name,
            "app_service_plan_id": app_service_plan_id,
            "identity": identity.to_input() if identity is not None else None,
            "app_settings": dict(app_settings) if app_settings is not None else None,
        }
        super().__init__("azure:appservice/appService:AppService", resource_name, props, opts)

    @staticmethod
    def get(
        resource_name: str,
        id: Input[str],  # pylint: disable=redefined-builtin
        resource_group_name: Optional[Input[str]] = None,
        app_service_plan_id: Optional[Input[str]] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> "AppService":
        """
        Get an existing AppService resource's state with the given name, id, and optional extra
        properties used to qualify the lookup.  The lookup is a read-only node in the graph that runs once
        the app behind `id` exists.

        :param str resource_name: The unique name of the resulting resource.
        :param Input[str] id: The unique provider ID of the resource to lookup.
        :param ResourceOptions opts: Options for the resource.
        """
        opts = ResourceOptions.merge(opts, ResourceOptions(id=id))
        return AppService(
            resource_name,
            resource_group_name=resource_group_name,
            app_service_plan_id=app_service_plan_id,
            opts=opts,
        )
