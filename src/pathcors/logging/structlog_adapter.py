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
"""StructlogAdapter — default LoggingPort implementation using structlog.

Request-scoped fields (``cors_path``, ``cors_origin``) are carried through
``structlog.contextvars`` so resolver log lines emitted deep inside a request
can be correlated without threading the request through every call.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from pathcors.core.config import Config

_REQUEST_KEYS = ("cors_path", "cors_origin")


def bind_request_context(path: str, origin: str | None) -> None:
    """Bind the current request's path and origin to every log line in this context."""
    structlog.contextvars.bind_contextvars(cors_path=path, cors_origin=origin)


def clear_request_context() -> None:
    structlog.contextvars.unbind_contextvars(*_REQUEST_KEYS)


def _build_processors(log_format: str) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if log_format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


class StructlogAdapter:
    """Default logging adapter backed by structlog."""

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}

    @property
    def log_format(self) -> str:
        return self._format

    def configure(self, config: Config) -> None:
        """Configure structlog from the ``pathcors.logging`` section.

        ``pathcors.logging.level.root`` sets the stdlib root level; any other
        key under ``level`` is a logger name (e.g. ``pathcors.cors: DEBUG``).
        Unknown formats fall back to the console renderer.
        """
        level_section = dict(config.get_section("pathcors.logging.level"))
        self._root_level = str(level_section.pop("root", "INFO")).upper()
        self._module_levels = {k: str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("pathcors.logging.format", "console")).lower()

        structlog.configure(
            processors=_build_processors(self._format),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=getattr(logging, self._root_level, logging.INFO),
            force=True,
        )

        for module, level in self._module_levels.items():
            self.set_level(module, level)

    def get_logger(self, name: str) -> Any:
        """Get a structlog BoundLogger by name."""
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set the log level for a specific stdlib logger."""
        log_level = getattr(logging, level.upper(), logging.INFO)
        logging.getLogger(name).setLevel(log_level)
