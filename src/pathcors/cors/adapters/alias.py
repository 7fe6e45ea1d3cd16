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
"""Alias resolver adapters."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType


class IdentityAliasResolver:
    """No aliasing: the canonical path is the request path."""

    def resolve(self, path: str) -> str:
        return path


class MappingAliasResolver:
    """Static ``alias -> system path`` table; unknown paths resolve to themselves."""

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        self._aliases = MappingProxyType({str(k): str(v) for k, v in (aliases or {}).items()})

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def resolve(self, path: str) -> str:
        return self._aliases.get(path, path)
