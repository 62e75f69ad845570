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
Admin notices

Problems are detected while the request initialises and displayed later,
when the host renders its notices. ``NoticeQueue`` keeps the notices in
between: keyed, first-seen order, re-adding a key replaces the message in
place.

Rendering escapes every message. The only markup that survives is an
``<a href="...">`` link with an http(s) or relative URL.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List
from urllib.parse import urlsplit


class NoticeSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Notice:
    key: str
    severity: NoticeSeverity
    message: str

    @property
    def css_class(self) -> str:
        return self.severity.value


_LINK_OPEN = re.compile(r"""<a\s+href\s*=\s*(["'])(?P<href>[^"'<>]*)\1\s*>""", re.IGNORECASE)
_LINK_CLOSE = re.compile(r"</a\s*>", re.IGNORECASE)
_ALLOWED_SCHEMES = ("", "http", "https")


def _is_safe_href(href: str) -> bool:
    try:
        scheme = urlsplit(href.strip()).scheme.lower()
    except ValueError:
        return False
    return scheme in _ALLOWED_SCHEMES


def sanitize_message(message: str) -> str:
    """Escape a notice message, keeping only whitelisted link tags."""
    out: List[str] = []
    pos = 0
    open_links = 0
    text = str(message)

    while pos < len(text):
        m_open = _LINK_OPEN.search(text, pos)
        m_close = _LINK_CLOSE.search(text, pos)
        candidates = [m for m in (m_open, m_close) if m is not None]
        if not candidates:
            break
        m = min(candidates, key=lambda c: c.start())
        out.append(html.escape(text[pos : m.start()]))

        if m is m_open:
            href = m.group("href")
            if _is_safe_href(href):
                out.append(f'<a href="{html.escape(href.strip(), quote=True)}">')
                open_links += 1
            else:
                out.append(html.escape(m.group(0)))
        elif open_links:
            out.append("</a>")
            open_links -= 1
        else:
            out.append(html.escape(m.group(0)))
        pos = m.end()

    out.append(html.escape(text[pos:]))
    out.append("</a>" * open_links)
    return "".join(out)


def render_notice(notice: Notice) -> str:
    return (
        f'<div class="{html.escape(notice.css_class, quote=True)}">'
        f"<p>{sanitize_message(notice.message)}</p>"
        "</div>"
    )


class NoticeQueue:
    """Ordered, keyed collection of pending notices for one request."""

    def __init__(self) -> None:
        self._notices: dict[str, Notice] = {}

    def enqueue(self, key: str, severity: NoticeSeverity | str, message: str) -> Notice:
        key = str(key).strip()
        if not key:
            raise ValueError("Notice key is required")
        notice = Notice(key=key, severity=NoticeSeverity(severity), message=message)
        # dict assignment to an existing key keeps its position
        self._notices[key] = notice
        return notice

    def drain_and_render(self) -> List[Notice]:
        """Return the pending notices in first-seen order. Does not clear."""
        return list(self._notices.values())

    def render(self) -> str:
        return "\n".join(render_notice(n) for n in self._notices.values())

    def clear(self) -> None:
        self._notices.clear()

    def get(self, key: str) -> Notice | None:
        return self._notices.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._notices

    def __len__(self) -> int:
        return len(self._notices)

    def __iter__(self) -> Iterator[Notice]:
        return iter(list(self._notices.values()))


__all__ = [
    "NoticeSeverity",
    "Notice",
    "NoticeQueue",
    "sanitize_message",
    "render_notice",
]
