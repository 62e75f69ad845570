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

"""
emulation_loader - activation gate for the Authorize.Net Emulation gateway

Exposes the public API:

    from emulation_loader import (
        EmulationLoader, ActivationGate, NoticeQueue, NoticeSeverity,
        EnvironmentSnapshot, VersionRequirement, check, compare_versions,
        Host, HostEvent, SimulatedHost, load_settings,
    )
"""
from __future__ import annotations

__version__ = "1.0.0"

from .versions import compare_versions, parse_version
from .compatibility import (
    CompatibilityResult,
    EnvironmentSnapshot,
    VersionRequirement,
    check,
    format_compatibility_report,
)
from .notices import Notice, NoticeQueue, NoticeSeverity
from .errors import (
    EntryPointError,
    FatalActivationError,
    FrameworkError,
    LoaderError,
    SingletonMisuseError,
)
from .config import LoaderSettings, load_settings
from .host import Host, HostEvent, SimulatedHost
from .gate import ActivationGate, GateState
from .loader import EmulationLoader

__all__ = [
    "__version__",
    "compare_versions",
    "parse_version",
    "CompatibilityResult",
    "EnvironmentSnapshot",
    "VersionRequirement",
    "check",
    "format_compatibility_report",
    "Notice",
    "NoticeQueue",
    "NoticeSeverity",
    "EntryPointError",
    "FrameworkError",
    "FatalActivationError",
    "LoaderError",
    "SingletonMisuseError",
    "LoaderSettings",
    "load_settings",
    "Host",
    "HostEvent",
    "SimulatedHost",
    "ActivationGate",
    "GateState",
    "EmulationLoader",
]
