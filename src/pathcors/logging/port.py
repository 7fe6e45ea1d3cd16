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
"""LoggingPort — how pathcors entry points configure and obtain loggers.

``create_app`` and the CLI build one implementation (``StructlogAdapter`` by
default) and hand it the loaded :class:`Config`, which carries
``pathcors.logging.format`` and ``pathcors.logging.level.*``.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pathcors.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Logging backend used by the application factory and the CLI."""

    def configure(self, config: Config) -> None:
        """Apply renderer and levels from ``pathcors.logging``."""
        ...

    def get_logger(self, name: str) -> Any: ...

    def set_level(self, name: str, level: str) -> None:
        """Set the level of one stdlib logger, e.g. ``pathcors.cors``."""
        ...
