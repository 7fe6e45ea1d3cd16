# Copyright 2026 Firefly Software Solutions Inc.
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
"""RequestContext — immutable per-request snapshot consumed by the resolver.

Framework-agnostic: accepts any mapping of header name to value(s), an
iterable of ``(name, value)`` pairs, or an object exposing ``multi_items()``
(Starlette ``Headers``).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

ORIGIN_HEADER = "origin"


def _normalise_headers(headers: Any) -> dict[str, tuple[str, ...]]:
    if headers is None:
        return {}
    if hasattr(headers, "multi_items"):
        pairs: Iterable[tuple[str, Any]] = headers.multi_items()
    elif isinstance(headers, Mapping):
        pairs = headers.items()
    else:
        pairs = headers

    collected: dict[str, list[str]] = {}
    for name, value in pairs:
        values = collected.setdefault(str(name).lower(), [])
        if isinstance(value, (list, tuple)):
            values.extend(str(v) for v in value)
        else:
            values.append(str(value))
    return {name: tuple(values) for name, values in collected.items()}


@dataclass(frozen=True)
class RequestContext:
    """Raw path, canonical (alias-resolved) path and case-insensitive headers."""

    raw_path: str
    canonical_path: str
    headers: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, raw_path: str, canonical_path: str | None = None, headers: Any = None) -> RequestContext:
        """Create a context; ``canonical_path`` defaults to ``raw_path``."""
        return cls(
            raw_path=raw_path,
            canonical_path=raw_path if canonical_path is None else canonical_path,
            headers=MappingProxyType(_normalise_headers(headers)),
        )

    def get_all(self, name: str) -> tuple[str, ...]:
        return self.headers.get(name.lower(), ())

    def get(self, name: str, default: str | None = None) -> str | None:
        values = self.get_all(name)
        return values[0] if values else default

    @property
    def origin(self) -> str | None:
        """First ``Origin`` header value, or ``None`` when absent or empty."""
        return self.get(ORIGIN_HEADER) or None

    @property
    def aliased(self) -> bool:
        return self.raw_path != self.canonical_path
