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
"""OncePerRequestFilter — base class for WebFilter with URL-pattern scoping.

Framework-agnostic: reads ``request.url.path`` via attribute access so no
Starlette import is needed here.
"""

from __future__ import annotations

import abc
from collections.abc import Sequence
from fnmatch import fnmatch
from typing import Any

from pathcors.web.ports.filter import CallNext


class OncePerRequestFilter(abc.ABC):
    """Abstract base class for :class:`WebFilter` implementations.

    Attributes:
        url_patterns: Glob patterns the filter applies to. Empty means all paths.
        exclude_patterns: Glob patterns skipped even when ``url_patterns`` match.
    """

    url_patterns: Sequence[str] = ()
    exclude_patterns: Sequence[str] = ()

    def is_enabled(self) -> bool:
        """Hook for filters that can be switched off by configuration."""
        return True

    def applies_to(self, path: str) -> bool:
        if self.url_patterns and not any(fnmatch(path, p) for p in self.url_patterns):
            return False
        return not any(fnmatch(path, p) for p in self.exclude_patterns)

    def should_not_filter(self, request: Any) -> bool:
        return not self.is_enabled() or not self.applies_to(request.url.path)

    @abc.abstractmethod
    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        """Execute the filter logic. Must call ``await call_next(request)`` to proceed."""
        ...
