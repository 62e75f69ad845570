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
Version comparison helpers

Dotted numeric versions are compared segment by segment, the shorter one
padded with zero segments, so "5.2" and "5.2.0" are equal.
"""

from __future__ import annotations

from typing import Optional, Tuple


def is_unknown_version(value: object) -> bool:
    if value is None:
        return True
    if not isinstance(value, str):
        return True
    return value.strip().lower() in ("", "unknown", "none", "n/a")


def parse_version(version_string: str) -> Optional[Tuple[int, ...]]:
    """
    Parse a version string into a tuple of integers.

    Supports formats:
    - "7.4.3" -> (7, 4, 3)
    - "5.2" -> (5, 2)
    - "4.0.0+" -> (4, 0, 0) [+ means "or higher"]
    - "7.4.3-ubuntu1" -> (7, 4, 3)
    - "5.6+build123" -> (5, 6)

    Returns:
        The numeric segments, or None when the string is not a version
    """
    if is_unknown_version(version_string):
        return None
    try:
        s = version_string.strip()
        if s.endswith("+"):
            s = s[:-1].strip()
        s = s.split("+")[0].split("-")[0]
        return tuple(int(part) for part in s.split("."))
    except (ValueError, AttributeError):
        return None


def _pad(parts: Tuple[int, ...], size: int) -> Tuple[int, ...]:
    return parts + (0,) * (size - len(parts))


def compare_versions(actual: Optional[str], required: Optional[str]) -> bool:
    """
    Check whether ``actual >= required``.

    Args:
        actual: Detected version string, may be None or malformed
        required: Minimum version string; None or empty means no minimum

    Returns:
        True if the requirement is met. A missing or malformed actual
        version never meets a defined minimum.
    """
    if is_unknown_version(required):
        return True
    req_tuple = parse_version(required)
    if req_tuple is None:
        return True
    curr_tuple = parse_version(actual) if isinstance(actual, str) else None
    if curr_tuple is None:
        return False

    size = max(len(curr_tuple), len(req_tuple))
    return _pad(curr_tuple, size) >= _pad(req_tuple, size)


__all__ = [
    "is_unknown_version",
    "parse_version",
    "compare_versions",
]
