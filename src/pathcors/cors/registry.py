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
"""PolicyRegistry — holds the active PolicySet and swaps it on reload."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from pathcors.cors.policy import PolicySet

logger = structlog.get_logger("pathcors.cors.registry")


class PolicyRegistry:
    """Reference to the current immutable :class:`PolicySet`.

    Readers take ``current`` without locking and keep using that snapshot for
    the whole request; ``reload`` replaces the reference, never the contents.
    """

    def __init__(self, policies: PolicySet | None = None) -> None:
        self._current = policies or PolicySet()
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def current(self) -> PolicySet:
        return self._current

    @property
    def generation(self) -> int:
        """Number of reloads applied since creation."""
        return self._generation

    def reload(self, policies: PolicySet) -> PolicySet:
        """Install *policies* as the active snapshot and return the previous one."""
        with self._lock:
            previous = self._current
            self._current = policies
            self._generation += 1
        logger.info("cors_policies_reloaded", rules=len(policies), generation=self._generation)
        return previous

    def reload_from(self, domains: Mapping[str, Any] | None, rules: Iterable[str] | str | None = ()) -> PolicySet:
        """Parse configuration first, then swap; a parse error leaves the active snapshot untouched."""
        return self.reload(PolicySet.from_config(domains, rules))
