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
"""Starlette application factory with the CORS response filter installed."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from pathcors.config.properties.cors import CorsProperties
from pathcors.core.config import Config
from pathcors.cors.service import CorsService
from pathcors.logging.port import LoggingPort
from pathcors.logging.structlog_adapter import StructlogAdapter
from pathcors.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from pathcors.web.adapters.starlette.filters.cors_filter import CorsResponseFilter
from pathcors.web.ports.filter import WebFilter


def create_cors_filter(config: Config | None = None, service: CorsService | None = None) -> CorsResponseFilter:
    """Build a :class:`CorsResponseFilter` from configuration.

    An explicit *service* replaces the one derived from ``pathcors.cors``;
    the enabled / redirect switches still come from *config*.
    """
    props = (config or Config({})).bind(CorsProperties)
    return CorsResponseFilter(
        service or CorsService.from_properties(props),
        enabled=props.enabled,
        decorate_redirects=props.decorate_redirects,
    )


def create_app(
    routes: Sequence[BaseRoute] = (),
    config: Config | None = None,
    service: CorsService | None = None,
    filters: Sequence[WebFilter] = (),
    logging_port: LoggingPort | None = None,
    debug: bool = False,
    **kwargs: Any,
) -> Starlette:
    """Create a Starlette application whose responses get path-based CORS headers.

    Extra *filters* join the same chain and are ordered with ``@order``
    alongside the CORS filter. Logging is configured from *config* through
    *logging_port* (a ``StructlogAdapter`` unless given). Remaining keyword
    arguments go to ``Starlette``.
    """
    if config is None:
        config = Config({})
    logging_port = logging_port or StructlogAdapter()
    logging_port.configure(config)

    chain: list[WebFilter] = [create_cors_filter(config, service), *filters]
    return Starlette(
        debug=debug,
        routes=list(routes),
        middleware=[Middleware(WebFilterChainMiddleware, filters=chain)],
        **kwargs,
    )
