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

import asyncio
import functools
import logging
import random
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pytest

from webappstack import CustomResource, Input, ResourceOptions
from webappstack.runtime import MockCallArgs, MockResourceArgs, Mocks


def supress_unobserved_task_logging():
    """Suppresses logs about faulted unobserved tasks.

    This scope of this setting necessarily bleeds beyond this test; it
    has to do so because the undesired logs appear after the entire
    `pytest` program terminates, not after a particular module
    terminates.
    """
    logging.getLogger("asyncio").setLevel(logging.CRITICAL)


# If calling code imports this module to use `raises`, it probably needs this.
supress_unobserved_task_logging()


def raises(exception_type):
    """Decorates a test by wrapping its body in `pytest.raises`."""

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            with pytest.raises(exception_type):
                return fn(*args, **kwargs)

        return wrapper

    return decorator


class Thing(CustomResource):
    """
    A generic resource for exercising the runtime: one input, `value`, echoed back as the output `value`.
    """

    _output_properties = ("value",)

    def __init__(self, name: str, value: Optional[Input[Any]] = None, opts: Optional[ResourceOptions] = None):
        super().__init__("test:index:Thing", name, {"value": value}, opts)


class RecordingMocks(Mocks):
    """
    Echoes inputs back as outputs and records when each request starts and ends.  Names in `fail` are
    rejected; `delay` optionally returns how long each request should take.
    """

    def __init__(self, fail: Iterable[str] = (), delay=None) -> None:
        self.fail = set(fail)
        self.delay = delay
        self.events: List[Tuple[str, str]] = []
        self.inputs: Dict[str, dict] = {}
        self.secret_keys: Dict[str, set] = {}
        self.active = 0
        self.max_active = 0

    def started(self, name: str) -> bool:
        return ("start", name) in self.events

    def index(self, event: str, name: str) -> int:
        return self.events.index((event, name))

    def outputs(self, args: MockResourceArgs) -> dict:
        return dict(args.inputs)

    def call_result(self, args: MockCallArgs) -> dict:
        return {}

    async def new_resource(self, args: MockResourceArgs):
        self.events.append(("start", args.name))
        self.inputs[args.name] = args.inputs
        self.secret_keys[args.name] = args.secret_keys
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delay(args.name) if self.delay is not None else 0)
            if args.name in self.fail:
                self.events.append(("fail", args.name))
                raise Exception(f"{args.name} was rejected")
            outputs = self.outputs(args)
        finally:
            self.active -= 1
        self.events.append(("end", args.name))
        return args.resource_id or f"{args.name}-id", outputs

    async def call(self, args: MockCallArgs):
        self.events.append(("call", args.token))
        await asyncio.sleep(self.delay(args.token) if self.delay is not None else 0)
        return self.call_result(args)


DEPLOYER = "deployer-object-id"
APP_PRINCIPAL = "app-principal-id"
TENANT = "tenant-abc"
SUBSCRIPTION = "sub-123"
SAS_TOKEN = "?sv=2019-12-12&ss=b&srt=o&sp=r&sig=abc"

RESOURCE_GROUP = "rg-easy-azure-webappa1b2c3"
STORAGE_ACCOUNT = "storage5f3e7d"
CONTAINER = "files-77a0c1"
BLOB = "zip-0e9d"
VAULT = "key-vault-9c1b"
SECRET_VERSION = "v1"
HOSTNAME = "easy-azure-webapp-3f1a.azurewebsites.net"


class WebAppMocks(RecordingMocks):
    """
    Answers the web app stack's requests with provider-assigned names, the way the cloud would.
    """

    def __init__(self, fail: Iterable[str] = (), delay=None, principal_id: str = APP_PRINCIPAL) -> None:
        super().__init__(fail, delay)
        self.principal_id = principal_id
        self.calls: List[MockCallArgs] = []

    def outputs(self, args: MockResourceArgs) -> dict:
        if args.resource_id is not None:
            # Reads report what the provider already knows about the resource.
            return {}
        typ = args.typ
        if typ == "azure:core/resourceGroup:ResourceGroup":
            return {"name": RESOURCE_GROUP, "location": "westeurope"}
        if typ == "azure:storage/account:Account":
            return {
                "name": STORAGE_ACCOUNT,
                "primary_blob_endpoint": f"https://{STORAGE_ACCOUNT}.blob.core.windows.net/",
                "primary_connection_string": f"DefaultEndpointsProtocol=https;AccountName={STORAGE_ACCOUNT};AccountKey=key",
            }
        if typ == "azure:storage/container:Container":
            return {"name": CONTAINER}
        if typ == "azure:storage/blob:Blob":
            inputs = args.inputs
            return {
                "name": BLOB,
                "url": f"https://{inputs['storage_account_name']}.blob.core.windows.net/"
                f"{inputs['storage_container_name']}/{BLOB}",
            }
        if typ == "azure:keyvault/keyVault:KeyVault":
            return {"name": VAULT, "vault_uri": f"https://{VAULT}.vault.azure.net/"}
        if typ == "azure:keyvault/secret:Secret":
            return {"name": args.name, "version": SECRET_VERSION}
        if typ == "azure:appservice/plan:Plan":
            return {"name": f"{args.name}-1"}
        if typ == "azure:appservice/appService:AppService":
            return {
                "name": args.name,
                "default_site_hostname": HOSTNAME,
                "identity": {"type": "SystemAssigned", "principal_id": self.principal_id, "tenant_id": TENANT},
            }
        if typ == "azure:authorization/assignment:Assignment":
            return {"name": "0b2d6f0e-assignment"}
        return {}

    def call_result(self, args: MockCallArgs) -> dict:
        self.calls.append(args)
        if args.token == "azure:core/getClientConfig:getClientConfig":
            return {
                "client_id": "client",
                "object_id": DEPLOYER,
                "subscription_id": SUBSCRIPTION,
                "tenant_id": TENANT,
            }
        if args.token == "azure:core/getSubscription:getSubscription":
            return {"subscription_id": SUBSCRIPTION, "display_name": "Pay-As-You-Go"}
        if args.token == "azure:storage/getAccountSAS:getAccountSAS":
            return {"sas": SAS_TOKEN}
        return {}


def random_delays(seed: int):
    rng = random.Random(seed)
    return lambda _: rng.uniform(0, 0.003)
