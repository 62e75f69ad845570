# SPDX-License-Identifier: Apache-2.0
# Copyright 2026 Ague Samuel Amen
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

import pytest

from emulation_loader import EmulationLoader, EnvironmentSnapshot, SimulatedHost, load_settings


@pytest.fixture(autouse=True)
def _fresh_loader():
    EmulationLoader._reset_instance()
    yield
    EmulationLoader._reset_instance()


@pytest.fixture
def settings():
    return load_settings()


@pytest.fixture
def compatible_env() -> EnvironmentSnapshot:
    return EnvironmentSnapshot(runtime_version="7.4", host_version="5.8", platform_version="5.0")


@pytest.fixture
def host(compatible_env) -> SimulatedHost:
    return SimulatedHost(compatible_env)
