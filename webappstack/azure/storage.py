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

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from ..asset import Archive, FileArchive
from ..errors import ConfigurationError, InputPropertyError
from ..invoke import InvokeOptions, invoke
from ..output import Input, Output
from ..resource import CustomResource, ResourceOptions

SAS_DATE_FORMAT = "%Y-%m-%d"


class Account(CustomResource):
    """
    A storage account.
    """

    _output_properties = ("name", "primary_blob_endpoint", "primary_connection_string")
    _additional_secret_outputs = ("primary_connection_string",)

    name: Output[str]
    primary_blob_endpoint: Output[str]
    primary_connection_string: Output[str]

    def __init__(
        self,
        resource_name: str,
        resource_group_name: Input[str],
        account_replication_type: Input[str] = "LRS",
        account_tier: Input[str] = "Standard",
        location: Optional[Input[str]] = None,
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        props = {
            "resource_group_name": resource_group_name,
            "account_replication_type": account_replication_type,
            "account_tier": account_tier,
            "location": location,
        }
        super().__init__("azure:storage/account:Account", resource_name, props, opts)


class Container(CustomResource):
    """
    A blob container within a storage account.
    """

    _output_properties = ("name",)

    name: Output[str]

    def __init__(
        self,
        resource_name: str,
        storage_account_name: Input[str],
        container_access_type: Input[str] = "private",
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        props = {
            "storage_account_name": storage_account_name,
            "container_access_type": container_access_type,
        }
        super().__init__("azure:storage/container:Container", resource_name, props, opts)


class Blob(CustomResource):
    """
    A blob uploaded from a local archive.  The archive must exist when the blob is materialized.
    """

    _output_properties = ("name", "url")

    name: Output[str]
    url: Output[str]

    def __init__(
        self,
        resource_name: str,
        storage_account_name: Input[str],
        storage_container_name: Input[str],
        source: Input[Archive],
        type: Input[str] = "Block",  # pylint: disable=redefined-builtin
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        props = {
            "storage_account_name": storage_account_name,
            "storage_container_name": storage_container_name,
            "type": type,
            "source": source,
        }
        super().__init__("azure:storage/blob:Blob", resource_name, props, opts)

    def _check(self, inputs: Dict[str, Any]) -> None:
        source = inputs.get("source")
        if isinstance(source, FileArchive) and not source.exists():
            raise InputPropertyError("source", f"archive path '{source.path}' does not exist")


class GetAccountSASResult:
    def __init__(self, sas: str, connection_string: Optional[str] = None) -> None:
        self.sas = sas
        self.connection_string = connection_string


def get_account_sas(
    connection_string: Input[str],
    start: Input[str],
    expiry: Input[str],
    https_only: Input[bool] = True,
    permissions: Optional[Input[Dict[str, bool]]] = None,
    resource_types: Optional[Input[Dict[str, bool]]] = None,
    services: Optional[Input[Dict[str, bool]]] = None,
    opts: Optional[InvokeOptions] = None,
) -> Output[GetAccountSASResult]:
    """
    Use this function to obtain a Shared Access Signature (SAS Token) for an existing storage account.
    The defaults grant read access to blob objects only.
    """
    args = {
        "connection_string": connection_string,
        "https_only": https_only,
        "start": start,
        "expiry": expiry,
        "resource_types": resource_types if resource_types is not None else {
            "service": False,
            "container": False,
            "object": True,
        },
        "services": services if services is not None else {
            "blob": True,
            "queue": False,
            "table": False,
            "file": False,
        },
        "permissions": permissions if permissions is not None else {
            "read": True,
            "write": False,
            "delete": False,
            "list": False,
            "add": False,
            "create": False,
            "update": False,
            "process": False,
        },
    }
    result = invoke("azure:storage/getAccountSAS:getAccountSAS", args, opts)
    return Output.secret(
        result.apply(lambda r: GetAccountSASResult(r.get("sas"), r.get("connection_string")))
    )


def sas_window(validity_days: int, now: Optional[datetime] = None) -> Dict[str, str]:
    """
    Returns the `start` and `expiry` dates of a signature valid from `now` for `validity_days` days.
    """
    if isinstance(validity_days, bool) or not isinstance(validity_days, int) or validity_days < 1:
        raise ConfigurationError(
            f"signature validity must be a positive number of days, got {validity_days!r}"
        )
    start = now if now is not None else datetime.now(timezone.utc)
    expiry = start + timedelta(days=validity_days)
    return {
        "start": start.strftime(SAS_DATE_FORMAT),
        "expiry": expiry.strftime(SAS_DATE_FORMAT),
    }


def signed_blob_read_url(
    blob: Blob,
    account: Account,
    validity_days: int = 365,
    now: Optional[datetime] = None,
) -> Output[str]:
    """
    Returns a secret URL granting time-bounded read access to `blob`: the blob's URL followed by a
    read-only account SAS token.
    """
    window = sas_window(validity_days, now)
    sas = get_account_sas(
        connection_string=account.primary_connection_string,
        start=window["start"],
        expiry=window["expiry"],
    )
    return Output.secret(Output.all(blob.url, sas.sas).apply(lambda args: f"{args[0]}{args[1]}"))
