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
Host application seam

The loader never talks to the host directly: it registers callbacks for a
handful of lifecycle events and asks a few questions (is the plugin
active, what versions are installed). ``Host`` is that contract.

``SimulatedHost`` is an in-memory host. It dispatches hooks in priority
order and drives a whole request, so the loader can be exercised end to
end without a real host application.
"""

from __future__ import annotations

import dataclasses
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from .compatibility import EnvironmentSnapshot
from .errors import FatalActivationError

logger = logging.getLogger(__name__)


class HostEvent(str, Enum):
    # filter: handlers receive and return the list of extra plugin headers
    REGISTER = "register"
    ACTIVATION_ATTEMPT = "activation_attempt"
    REQUEST_INIT = "request_init"
    # handlers return an HTML fragment (or nothing)
    NOTICE_RENDER = "notice_render"
    ALL_PLUGINS_LOADED = "all_plugins_loaded"


class Host(ABC):
    """Operations the loader needs from the host application."""

    @abstractmethod
    def add_hook(
        self, event: HostEvent, callback: Callable[..., Any], priority: int = 10
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def is_plugin_active(self, plugin_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def deactivate_plugin(self, plugin_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def suppress_activation_notice(self) -> None:
        """Hide the host's own "plugin activated" message for this request."""
        raise NotImplementedError

    @abstractmethod
    def environment(self) -> EnvironmentSnapshot:
        raise NotImplementedError

    @abstractmethod
    def admin_url(self, path: str = "") -> str:
        raise NotImplementedError

    @abstractmethod
    def doing_it_wrong(self, function: str, message: str, version: str) -> None:
        """Report a developer mistake."""
        raise NotImplementedError


class SimulatedHost(Host):
    """In-memory host application."""

    def __init__(
        self,
        environment: Optional[EnvironmentSnapshot] = None,
        site_url: str = "http://localhost",
    ) -> None:
        self._environment = environment or EnvironmentSnapshot()
        self.site_url = site_url.rstrip("/")
        self._hooks: Dict[HostEvent, List[Tuple[int, int, Callable[..., Any]]]] = {}
        self._seq = 0
        self.active_plugins: set[str] = set()
        self.activation_notice_visible = False
        self.stop_message: Optional[str] = None
        self.wrong_usages: List[Tuple[str, str, str]] = []

    # Hooks
    def add_hook(
        self, event: HostEvent, callback: Callable[..., Any], priority: int = 10
    ) -> None:
        self._seq += 1
        self._hooks.setdefault(HostEvent(event), []).append(
            (int(priority), self._seq, callback)
        )

    def callbacks(self, event: HostEvent) -> List[Callable[..., Any]]:
        entries = sorted(self._hooks.get(HostEvent(event), []), key=lambda e: e[:2])
        return [cb for _, _, cb in entries]

    def fire(self, event: HostEvent) -> List[Any]:
        return [cb() for cb in self.callbacks(event)]

    def plugin_headers(self) -> List[str]:
        headers: List[str] = []
        for cb in self.callbacks(HostEvent.REGISTER):
            headers = list(cb(headers))
        return headers

    # Environment
    def environment(self) -> EnvironmentSnapshot:
        return self._environment

    def set_environment(self, environment: EnvironmentSnapshot) -> None:
        self._environment = environment

    def update_environment(self, **versions: Optional[str]) -> None:
        self._environment = dataclasses.replace(self._environment, **versions)

    # Plugins
    def is_plugin_active(self, plugin_id: str) -> bool:
        return plugin_id in self.active_plugins

    def deactivate_plugin(self, plugin_id: str) -> None:
        self.active_plugins.discard(plugin_id)

    def suppress_activation_notice(self) -> None:
        self.activation_notice_visible = False

    def activate_plugin(self, plugin_id: str) -> bool:
        """Run the activation hooks, then mark the plugin active.

        A ``FatalActivationError`` stops the activation on the spot: its
        message is kept in ``stop_message``, no further hook runs and the
        plugin stays inactive.
        """
        self.stop_message = None
        try:
            self.fire(HostEvent.ACTIVATION_ATTEMPT)
        except FatalActivationError as exc:
            self.stop_message = exc.message
            self.active_plugins.discard(plugin_id)
            self.activation_notice_visible = False
            logger.warning("Activation of %s stopped: %s", plugin_id, exc.message)
            return False
        self.active_plugins.add(plugin_id)
        self.activation_notice_visible = True
        return True

    def run_request(self, admin: bool = True) -> str:
        """Run one request and return the rendered admin notices."""
        self.fire(HostEvent.ALL_PLUGINS_LOADED)
        if not admin:
            return ""
        self.fire(HostEvent.REQUEST_INIT)
        fragments = self.fire(HostEvent.NOTICE_RENDER)
        return "\n".join(f for f in fragments if f)

    # Misc
    def admin_url(self, path: str = "") -> str:
        return f"{self.site_url}/wp-admin/{path.lstrip('/')}"

    def doing_it_wrong(self, function: str, message: str, version: str) -> None:
        self.wrong_usages.append((function, message, version))
        logger.warning("%s was called incorrectly. %s (%s)", function, message, version)


__all__ = ["HostEvent", "Host", "SimulatedHost"]
