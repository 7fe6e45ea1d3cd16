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
"""DrupalPathMatcher — newline-separated wildcard path patterns.

Pattern syntax:
- one pattern per line (``\\n``, ``\\r\\n`` or ``\\r``); blank lines ignored
- ``*`` matches any run of characters, including ``/`` and nothing at all
- ``<front>`` matches the configured front page path
- every other character is literal and the whole path must match
"""

from __future__ import annotations

import functools
import re

FRONT_TOKEN = "<front>"


class DrupalPathMatcher:
    """Default :class:`~pathcors.cors.ports.PathMatcher` adapter.

    Compiled expressions are cached per pattern block; the cache is safe to
    share between concurrent requests.
    """

    def __init__(self, front_page: str = "/", cache_size: int = 256) -> None:
        self._front_page = front_page
        self._compile = functools.lru_cache(maxsize=cache_size)(self._build_regex)

    @property
    def front_page(self) -> str:
        return self._front_page

    def match_path(self, path: str, patterns: str) -> bool:
        regex = self._compile(patterns)
        return regex is not None and regex.fullmatch(path) is not None

    def _build_regex(self, patterns: str) -> re.Pattern[str] | None:
        alternatives = []
        for line in patterns.splitlines():
            line = line.strip()
            if not line:
                continue
            if line == FRONT_TOKEN:
                alternatives.append(re.escape(self._front_page))
            else:
                alternatives.append(".*".join(re.escape(chunk) for chunk in line.split("*")))

        if not alternatives:
            return None
        return re.compile("(?:" + "|".join(alternatives) + ")", re.DOTALL)
