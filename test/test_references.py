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

import random
import string
from datetime import datetime, timezone

import pytest

import webappstack
from webappstack import ConfigurationError, Output, references
from webappstack.azure.storage import sas_window


def test_secret_uri():
    assert (
        references.secret_uri("https://kv.vault.azure.net/", "zip-secret", "v1")
        == "https://kv.vault.azure.net/secrets/zip-secret/v1"
    )


def test_key_vault_reference_is_byte_exact():
    url = "https://kv.vault.azure.net/secrets/zip-secret/v1"
    assert references.key_vault_reference(url) == "@Microsoft.KeyVault(SecretUri=https://kv.vault.azure.net/secrets/zip-secret/v1)"


def test_https_url():
    assert references.https_url("myapp.azurewebsites.net") == "https://myapp.azurewebsites.net"


def _component(rng: random.Random) -> str:
    return "".join(rng.choice(string.ascii_lowercase + string.digits + "-") for _ in range(rng.randint(1, 24)))


@pytest.mark.parametrize("seed", range(10))
def test_container_scope_matches_template(seed):
    rng = random.Random(seed)
    sub, rg, acct, container = (_component(rng) for _ in range(4))

    scope = references.container_scope(sub, rg, acct, container)

    assert scope == (
        f"/subscriptions/{sub}/resourcegroups/{rg}/providers/Microsoft.Storage"
        f"/storageAccounts/{acct}/blobServices/default/containers/{container}"
    )
    assert scope.split("/")[1::2] == [
        "subscriptions",
        "resourcegroups",
        "providers",
        "storageAccounts",
        "blobServices",
        "containers",
    ]


@webappstack.runtime.test
async def test_lifted_references():
    vault_uri = Output.from_input("https://kv.vault.azure.net/")
    url = references.secret_uri_output(vault_uri, "zip-secret", Output.secret("v1"))

    reference = references.key_vault_reference_output(url)

    assert await reference.future() == "@Microsoft.KeyVault(SecretUri=https://kv.vault.azure.net/secrets/zip-secret/v1)"
    assert await reference.is_secret()
    assert await references.https_url_output("myapp.azurewebsites.net").future() == "https://myapp.azurewebsites.net"
    assert await references.container_scope_output("s", "r", "a", "c").future() == references.container_scope("s", "r", "a", "c")


def test_sas_window():
    window = sas_window(30, datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert window == {"start": "2024-01-01", "expiry": "2024-01-31"}


@pytest.mark.parametrize("days", [0, -1, True, "365"])
def test_sas_window_must_be_bounded(days):
    with pytest.raises(ConfigurationError):
        sas_window(days)
