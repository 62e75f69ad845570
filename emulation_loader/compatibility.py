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
Compatibility Module - Environment checks against minimum versions

The environment is read from the host as an ``EnvironmentSnapshot`` and
checked against a list of ``VersionRequirement``. Nothing here is cached:
the host or the platform can be upgraded or downgraded while the process
is alive, so every call re-derives its result from the snapshot it gets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from .versions import compare_versions, is_unknown_version

logger = logging.getLogger(__name__)

RUNTIME = "runtime"
HOST = "host"
PLATFORM = "platform"


@dataclass(frozen=True)
class VersionRequirement:
    """Minimum version for one component of the environment.

    component_name: one of ``runtime``, ``host``, ``platform``
    minimum_version: None (or empty) disables the requirement
    label: display name used in messages (ex: "PHP", "WordPress")
    """

    component_name: str
    minimum_version: Optional[str] = None
    label: str = ""

    @property
    def enabled(self) -> bool:
        return not is_unknown_version(self.minimum_version)

    @property
    def display_name(self) -> str:
        return self.label or self.component_name


@dataclass(frozen=True)
class EnvironmentSnapshot:
    """Versions reported by the host for a single check.

    ``platform_version`` is None when the platform is not loaded at all.
    """

    runtime_version: Optional[str] = None
    host_version: Optional[str] = None
    platform_version: Optional[str] = None

    def version_of(self, component_name: str) -> Optional[str]:
        if component_name == RUNTIME:
            return self.runtime_version
        if component_name == HOST:
            return self.host_version
        if component_name == PLATFORM:
            return self.platform_version
        raise KeyError(f"Unknown environment component: {component_name!r}")


@dataclass
class CompatibilityResult:
    """Result of a compatibility check."""

    satisfied: Dict[str, bool] = field(default_factory=dict)
    detected: Dict[str, Optional[str]] = field(default_factory=dict)
    required: Dict[str, Optional[str]] = field(default_factory=dict)

    @property
    def overall_satisfied(self) -> bool:
        return all(self.satisfied.values())

    def is_satisfied(self, component_name: str) -> bool:
        return self.satisfied.get(component_name, True)

    def unmet(self) -> list[str]:
        return [name for name, ok in self.satisfied.items() if not ok]


def check(
    environment: EnvironmentSnapshot, requirements: Iterable[VersionRequirement]
) -> CompatibilityResult:
    """
    Check an environment snapshot against a set of requirements.

    Args:
        environment: Versions reported by the host
        requirements: Requirements to evaluate; disabled ones always pass

    Returns:
        CompatibilityResult with one entry per requirement
    """
    result = CompatibilityResult()
    for req in requirements:
        detected = environment.version_of(req.component_name)
        ok = True
        if req.enabled:
            ok = compare_versions(detected, req.minimum_version)
        result.satisfied[req.component_name] = ok
        result.detected[req.component_name] = detected
        result.required[req.component_name] = req.minimum_version
        logger.debug(
            "%s: detected=%s required=%s -> %s",
            req.display_name,
            detected if detected is not None else "unknown",
            req.minimum_version if req.enabled else "none",
            "ok" if ok else "unmet",
        )
    return result


def format_compatibility_report(
    result: CompatibilityResult,
    requirements: Iterable[VersionRequirement],
    title: str = "Compatibility Report",
) -> str:
    """
    Build a formatted compatibility report.

    Args:
        result: Result returned by ``check``
        requirements: Requirements the result was computed from
        title: Title for the report
    """
    requirements = list(requirements)
    lines = ["=" * 70, title, "=" * 70]

    met = sum(1 for r in requirements if result.is_satisfied(r.component_name))
    lines.append("")
    lines.append(f"Summary: {met} satisfied, {len(requirements) - met} unmet")
    lines.append("")

    for req in requirements:
        name = req.component_name
        detected = result.detected.get(name) or "unknown"
        status = "OK   " if result.is_satisfied(name) else "UNMET"
        if req.enabled:
            lines.append(
                f"{status} {req.display_name} v{detected} "
                f"(requires v{req.minimum_version} or higher)"
            )
        else:
            lines.append(
                f"{status} {req.display_name} v{detected} (no minimum required)"
            )

    lines.append("")
    lines.append("=" * 70)
    return "\n".join(lines)


__all__ = [
    "RUNTIME",
    "HOST",
    "PLATFORM",
    "VersionRequirement",
    "EnvironmentSnapshot",
    "CompatibilityResult",
    "check",
    "format_compatibility_report",
]
