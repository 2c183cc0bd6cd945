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
The runtime implementation of the webappstack library.  This handles things like declaring stacks,
building their dependency graph and materializing resources through a provider.
"""

from .settings import (
    Settings,
    configure,
    get_root_stack,
    get_settings,
)

from .config import (
    StackConfig,
    load_stack_config,
)

from .mocks import (
    MockCallArgs,
    MockProvider,
    MockResourceArgs,
    Mocks,
    set_mocks,
    test,
)
