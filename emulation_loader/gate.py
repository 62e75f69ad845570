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
Activation gate

Two policy tiers:

- runtime version: hard. Activation is refused, and an already active
  plugin is deactivated if the runtime drifts below the minimum.
- host and platform versions: advisory. An error notice explains what to
  upgrade, the plugin stays active but is never initialised.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .compatibility import RUNTIME, CompatibilityResult, check
from .config import LoaderSettings
from .errors import FatalActivationError
from .host import Host
from .notices import NoticeQueue, NoticeSeverity

logger = logging.getLogger(__name__)

BAD_ENVIRONMENT_NOTICE = "bad_environment"
UPDATE_HOST_NOTICE = "update_host"
UPDATE_PLATFORM_NOTICE = "update_platform"


class GateState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CHECKED = "checked"
    ACTIVATED = "activated"
    DEACTIVATED = "deactivated"


class ActivationGate:
    def __init__(self, host: Host, settings: LoaderSettings) -> None:
        self.host = host
        self.settings = settings
        self.notices = NoticeQueue()
        self.state = GateState.UNINITIALIZED

    # Checks
    def check_environment_result(self) -> CompatibilityResult:
        return check(self.host.environment(), [self.settings.runtime])

    def check_plugins_result(self) -> CompatibilityResult:
        return check(self.host.environment(), [self.settings.host, self.settings.platform])

    def is_environment_compatible(self) -> bool:
        return self.check_environment_result().overall_satisfied

    def is_host_compatible(self) -> bool:
        return check(self.host.environment(), [self.settings.host]).overall_satisfied

    def is_platform_compatible(self) -> bool:
        return check(self.host.environment(), [self.settings.platform]).overall_satisfied

    def plugins_compatible(self) -> bool:
        """Host and platform compatible. The runtime is gated separately."""
        return self.check_plugins_result().overall_satisfied

    def environment_message(self, result: Optional[CompatibilityResult] = None) -> str:
        result = result or self.check_environment_result()
        detected = result.detected.get(RUNTIME) or "unknown"
        return (
            f"The minimum {self.settings.runtime.display_name} version required for "
            f"this plugin is {self.settings.runtime.minimum_version}. "
            f"You are running {detected}."
        )

    # Hooks
    def begin_request(self) -> None:
        self.notices = NoticeQueue()

    def on_activation_attempt(self) -> None:
        result = self.check_environment_result()
        self.state = GateState.CHECKED
        if result.overall_satisfied:
            self.state = GateState.ACTIVATED
            logger.info("%s activated", self.settings.plugin_name)
            return

        self.deactivate()
        message = (
            f"{self.settings.plugin_name} could not be activated. "
            f"{self.environment_message(result)}"
        )
        logger.warning(message)
        raise FatalActivationError(message)

    def on_every_request_check(self) -> None:
        result = self.check_environment_result()
        if result.overall_satisfied:
            if self.state == GateState.UNINITIALIZED:
                self.state = GateState.CHECKED
            return
        if not self.host.is_plugin_active(self.settings.plugin_id):
            return

        self.deactivate()
        message = (
            f"{self.settings.plugin_name} has been deactivated. "
            f"{self.environment_message(result)}"
        )
        logger.warning(message)
        self.notices.enqueue(BAD_ENVIRONMENT_NOTICE, NoticeSeverity.ERROR, message)

    def on_host_version_check(self) -> None:
        if self.is_host_compatible():
            return
        req = self.settings.host
        update_url = self.host.admin_url(self.settings.host_update_path)
        logger.warning(
            "%s requires %s %s or higher",
            self.settings.plugin_name,
            req.display_name,
            req.minimum_version,
        )
        self.notices.enqueue(
            UPDATE_HOST_NOTICE,
            NoticeSeverity.ERROR,
            f"{self.settings.plugin_name} requires {req.display_name} version "
            f"{req.minimum_version} or higher. Please "
            f'<a href="{update_url}">update {req.display_name} »</a>',
        )

    def on_platform_version_check(self) -> None:
        if self.is_platform_compatible():
            return
        req = self.settings.platform
        update_url = self.host.admin_url(self.settings.host_update_path)
        download_url = self.settings.platform_download_url.format(
            version=req.minimum_version
        )
        logger.warning(
            "%s requires %s %s or higher",
            self.settings.plugin_name,
            req.display_name,
            req.minimum_version,
        )
        self.notices.enqueue(
            UPDATE_PLATFORM_NOTICE,
            NoticeSeverity.ERROR,
            f"{self.settings.plugin_name} requires {req.display_name} version "
            f"{req.minimum_version} or higher. Please "
            f'<a href="{update_url}">update {req.display_name}</a> to the latest '
            f'version, or <a href="{download_url}">download the minimum required '
            f"version »</a>",
        )

    def add_plugin_notices(self) -> None:
        self.on_host_version_check()
        self.on_platform_version_check()

    def output_notices(self) -> str:
        return self.notices.render()

    def deactivate(self) -> None:
        self.host.deactivate_plugin(self.settings.plugin_id)
        self.host.suppress_activation_notice()
        self.state = GateState.DEACTIVATED


__all__ = [
    "BAD_ENVIRONMENT_NOTICE",
    "UPDATE_HOST_NOTICE",
    "UPDATE_PLATFORM_NOTICE",
    "GateState",
    "ActivationGate",
]
