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

from typing import Any, Dict, Optional

from ..invoke import InvokeOptions, invoke
from ..output import Input, Output
from ..resource import CustomResource, ResourceOptions


class ResourceGroup(CustomResource):
    """
    A container holding related resources.
    """

    _output_properties = ("name", "location")

    name: Output[str]
    """
    The name of the resource group, as assigned by the provider.
    """

    location: Output[str]

    def __init__(
        self,
        resource_name: str,
        location: Optional[Input[str]] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        props = {
            "location": location,
        }
        super().__init__("azure:core/resourceGroup:ResourceGroup", resource_name, props, opts)


class GetClientConfigResult:
    """
    The credentials the deployment is running as.
    """

    def __init__(self, client_id: str, object_id: str, subscription_id: str, tenant_id: str) -> None:
        self.client_id = client_id
        self.object_id = object_id
        self.subscription_id = subscription_id
        self.tenant_id = tenant_id


class GetSubscriptionResult:
    def __init__(self, subscription_id: str, display_name: Optional[str] = None, tenant_id: Optional[str] = None) -> None:
        self.subscription_id = subscription_id
        self.display_name = display_name
        self.tenant_id = tenant_id


def get_client_config(opts: Optional[InvokeOptions] = None) -> Output[GetClientConfigResult]:
    """
    Use this function to access the configuration of the deploying principal: its tenant and object id.
    """
    result = invoke("azure:core/getClientConfig:getClientConfig", {}, opts)
    return result.apply(_client_config)


def get_subscription(
    subscription_id: Optional[Input[str]] = None,
    opts: Optional[InvokeOptions] = None,
) -> Output[GetSubscriptionResult]:
    """
    Use this function to access information about an existing subscription; the current one when
    `subscription_id` is not given.
    """
    args = {"subscription_id": subscription_id}
    result = invoke("azure:core/getSubscription:getSubscription", args, opts)
    return result.apply(_subscription)


def _client_config(r: Dict[str, Any]) -> GetClientConfigResult:
    return GetClientConfigResult(
        client_id=r.get("client_id"),
        object_id=r.get("object_id"),
        subscription_id=r.get("subscription_id"),
        tenant_id=r.get("tenant_id"),
    )


def _subscription(r: Dict[str, Any]) -> GetSubscriptionResult:
    return GetSubscriptionResult(
        subscription_id=r.get("subscription_id"),
        display_name=r.get("display_name"),
        tenant_id=r.get("tenant_id"),
    )
