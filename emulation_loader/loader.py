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
Plugin loader

``EmulationLoader`` is the single, process-wide bootstrap of the payment
gateway plugin. It wires the activation gate into the host lifecycle and,
once the environment is known to be compatible, initialises the real
plugin exactly once.

    from emulation_loader import EmulationLoader

    loader = EmulationLoader.get_instance(host)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Iterable, List, Optional

from .config import LoaderSettings, load_settings
from .errors import LoaderError, SingletonMisuseError
from .framework import FrameworkLoader, framework_version_namespace, resolve_entry_point
from .gate import ActivationGate
from .host import Host, HostEvent

# Default logger configuration (low verbosity when embedded in a host)
_logger = logging.getLogger("emulation_loader")
if not _logger.handlers:
    _handler = logging.StreamHandler()
    _formatter = logging.Formatter("[%(levelname)s] %(message)s")
    _handler.setFormatter(_formatter)
    _logger.addHandler(_handler)
    _logger.setLevel(logging.INFO)

logger = logging.getLogger(__name__)

DOCUMENTATION_HEADER = "Documentation URI"


class EmulationLoader:
    """Singleton bootstrap of the plugin."""

    _instance: ClassVar[Optional["EmulationLoader"]] = None
    _constructing: ClassVar[bool] = False

    def __new__(cls, *args: Any, **kwargs: Any) -> "EmulationLoader":
        if not cls._constructing:
            message = f"You cannot create instances of {cls.__name__} directly, use get_instance()."
            logger.warning(message)
            raise SingletonMisuseError(message)
        return super().__new__(cls)

    def __init__(
        self,
        host: Host,
        settings: Optional[LoaderSettings] = None,
        entry_point: Optional[Callable[[], Any]] = None,
        framework: Optional[FrameworkLoader] = None,
    ) -> None:
        self.host = host
        self.settings = settings or load_settings()
        self.gate = ActivationGate(host, self.settings)
        self.framework = framework or FrameworkLoader(self.settings.framework)
        self._entry_point = entry_point
        self._initialized = False
        self.plugin: Any = None

        host.add_hook(HostEvent.REGISTER, self.add_documentation_header)
        host.add_hook(HostEvent.ACTIVATION_ATTEMPT, self.gate.on_activation_attempt)
        host.add_hook(HostEvent.REQUEST_INIT, self.gate.begin_request, priority=0)
        host.add_hook(HostEvent.REQUEST_INIT, self.gate.on_every_request_check)
        host.add_hook(HostEvent.REQUEST_INIT, self.gate.add_plugin_notices)
        host.add_hook(HostEvent.NOTICE_RENDER, self.gate.output_notices, priority=15)

        # initialise only once the host has loaded every plugin
        if self.gate.is_environment_compatible():
            host.add_hook(HostEvent.ALL_PLUGINS_LOADED, self.initialize)

    @classmethod
    def get_instance(
        cls,
        host: Optional[Host] = None,
        settings: Optional[LoaderSettings] = None,
        entry_point: Optional[Callable[[], Any]] = None,
        framework: Optional[FrameworkLoader] = None,
    ) -> "EmulationLoader":
        """
        Return the loader, creating it on first call.

        The arguments are only used by the first call; ``host`` is required
        then.
        """
        if cls._instance is None:
            if host is None:
                raise LoaderError("A host is required to create the plugin loader")
            cls._constructing = True
            try:
                cls._instance = cls(host, settings, entry_point, framework)
            finally:
                cls._constructing = False
        return cls._instance

    @classmethod
    def _reset_instance(cls) -> None:
        cls._instance = None

    # Singleton guards
    def _misuse(self, function: str, message: str) -> SingletonMisuseError:
        logger.warning("%s: %s", function, message)
        self.host.doing_it_wrong(function, message, self.settings.plugin_version)
        return SingletonMisuseError(message)

    def __copy__(self) -> "EmulationLoader":
        raise self._misuse(
            "__copy__", f"You cannot clone instances of {type(self).__name__}."
        )

    def __deepcopy__(self, memo: dict) -> "EmulationLoader":
        raise self._misuse(
            "__deepcopy__", f"You cannot clone instances of {type(self).__name__}."
        )

    def __reduce_ex__(self, protocol: Any) -> Any:
        raise self._misuse(
            "__reduce_ex__", f"You cannot serialize instances of {type(self).__name__}."
        )

    def __setstate__(self, state: Any) -> None:
        raise self._misuse(
            "__setstate__", f"You cannot unserialize instances of {type(self).__name__}."
        )

    # Initialisation
    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> Any:
        """
        Initialise the plugin, at most once per process.

        Skipped silently while the runtime, the host or the platform is too
        old: the user has already been told through an admin notice.
        """
        if self._initialized:
            logger.debug("%s already initialised", self.settings.plugin_name)
            return self.plugin
        if not self.gate.is_environment_compatible():
            logger.debug(
                "Skipping initialisation of %s: %s",
                self.settings.plugin_name,
                self.gate.environment_message(),
            )
            return None
        if not self.gate.plugins_compatible():
            logger.debug(
                "Skipping initialisation of %s: unmet %s",
                self.settings.plugin_name,
                ", ".join(self.gate.check_plugins_result().unmet()),
            )
            return None

        self.load_framework()
        entry_point = self._entry_point or resolve_entry_point(self.settings.entry_point)

        self._initialized = True
        self.plugin = entry_point()
        logger.info("%s initialised", self.settings.plugin_name)
        return self.plugin

    def load_framework(self) -> List[str]:
        return self.framework.load()

    def get_framework_version(self) -> str:
        return self.settings.framework.version

    def get_framework_version_namespace(self) -> str:
        return framework_version_namespace(self.get_framework_version())

    def add_documentation_header(self, headers: Iterable[str]) -> List[str]:
        headers = list(headers)
        if DOCUMENTATION_HEADER not in headers:
            headers.append(DOCUMENTATION_HEADER)
        return headers


__all__ = ["DOCUMENTATION_HEADER", "EmulationLoader"]
