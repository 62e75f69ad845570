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
Payment framework and plugin entry point

The gateway itself is built on a versioned plugin framework that other
plugins may ship too. Framework classes are imported only when no module
has provided them yet, so whichever plugin loads first wins and the
others reuse it.
"""

from __future__ import annotations

import importlib
import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, List

from .config import FrameworkSpec
from .errors import EntryPointError, FrameworkError

logger = logging.getLogger(__name__)


def framework_version_namespace(version: str) -> str:
    """Return ``version`` in namespace form: "5.10.4" -> "v5_10_4"."""
    return "v" + version.replace(".", "_")


@dataclass(frozen=True)
class FrameworkClass:
    name: str
    module: str

    def exists(self) -> bool:
        module = sys.modules.get(self.module)
        return module is not None and isinstance(getattr(module, self.name, None), type)


class FrameworkLoader:
    """Loads the framework base classes for one framework version."""

    def __init__(self, spec: FrameworkSpec) -> None:
        self.spec = spec
        self.namespace = framework_version_namespace(spec.version)
        prefix = ".".join(p for p in (spec.package, self.namespace) if p)
        self.classes: List[FrameworkClass] = [
            FrameworkClass(name=name, module=f"{prefix}.{module}" if prefix else module)
            for name, module in spec.classes
        ]

    def load(self) -> List[str]:
        """
        Import the framework classes that are not loaded yet.

        Returns:
            Names of the classes this call loaded
        """
        loaded = []
        for cls in self.classes:
            if cls.exists():
                logger.debug("Framework class %s already loaded", cls.name)
                continue
            try:
                importlib.import_module(cls.module)
            except ImportError as e:
                raise FrameworkError(f"Cannot import framework module {cls.module!r}: {e}") from e
            if not cls.exists():
                raise FrameworkError(f"{cls.module} does not define {cls.name}")
            logger.info("Loaded framework class %s from %s", cls.name, cls.module)
            loaded.append(cls.name)
        return loaded


def resolve_entry_point(target: str) -> Callable[[], Any]:
    """
    Resolve a ``"package.module:attribute"`` string to a callable.

    Raises:
        EntryPointError: malformed string, import failure or non callable
    """
    module_name, sep, attr_path = str(target or "").partition(":")
    module_name = module_name.strip()
    attr_path = attr_path.strip()
    if not sep or not module_name or not attr_path:
        raise EntryPointError(f"Invalid entry point {target!r}, expected 'module:attribute'")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise EntryPointError(f"Cannot import entry point module {module_name!r}: {e}") from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise EntryPointError(f"Entry point {target!r} not found") from e

    if not callable(obj):
        raise EntryPointError(f"Entry point {target!r} is not callable")
    return obj


__all__ = [
    "framework_version_namespace",
    "FrameworkClass",
    "FrameworkLoader",
    "resolve_entry_point",
]
