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

from typing import Optional

from ..output import Input, Output
from ..resource import CustomResource, ResourceOptions

STORAGE_BLOB_DATA_READER = "Storage Blob Data Reader"


class Assignment(CustomResource):
    """
    Grants a role to a principal at a scope.
    """

    _output_properties = ("name",)

    name: Output[str]

    def __init__(
        self,
        resource_name: str,
        principal_id: Input[str],
        scope: Input[str],
        role_definition_name: Input[str],
        opts: Optional[ResourceOptions] = None,
    ) -> None:
        props = {
            "principal_id": principal_id,
            "scope": scope,
            "role_definition_name": role_definition_name,
        }
        super().__init__("azure:authorization/assignment:Assignment", resource_name, props, opts)
