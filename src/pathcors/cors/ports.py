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
"""Ports for the capabilities the resolver consumes but does not own."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PathMatcher(Protocol):
    """Boolean path predicate.

    ``patterns`` may hold several patterns separated by newlines; ``*`` is a
    wildcard. The resolver treats the result as opaque.
    """

    def match_path(self, path: str, patterns: str) -> bool: ...


@runtime_checkable
class AliasResolver(Protocol):
    """Maps a request path to its canonical (system) path."""

    def resolve(self, path: str) -> str: ...
