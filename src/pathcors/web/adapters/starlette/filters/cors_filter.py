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
"""CORS response filter — decorates responses with path-based CORS headers."""

from __future__ import annotations

from typing import cast

import structlog
from starlette.requests import Request
from starlette.responses import Response

from pathcors.container.ordering import HIGHEST_PRECEDENCE, order
from pathcors.cors.service import CorsService
from pathcors.logging.structlog_adapter import bind_request_context, clear_request_context
from pathcors.web.filters import OncePerRequestFilter
from pathcors.web.ports.filter import CallNext

logger = structlog.get_logger("pathcors.web")


def is_redirect(response: Response) -> bool:
    return 300 <= response.status_code < 400 and "location" in response.headers


@order(HIGHEST_PRECEDENCE + 400)
class CorsResponseFilter(OncePerRequestFilter):
    """Sets the resolved ``Access-Control-Allow-*`` headers on eligible responses.

    Resolved values overwrite headers of the same name already present on the
    response. Redirects are left untouched unless ``decorate_redirects`` is set.
    """

    def __init__(
        self,
        service: CorsService,
        enabled: bool = True,
        decorate_redirects: bool = False,
    ) -> None:
        self._service = service
        self._enabled = enabled
        self._decorate_redirects = decorate_redirects

    @property
    def service(self) -> CorsService:
        return self._service

    def is_enabled(self) -> bool:
        return self._enabled

    def is_eligible(self, response: Response) -> bool:
        return self._decorate_redirects or not is_redirect(response)

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        response = cast(Response, await call_next(request))
        if not self.is_eligible(response):
            return response

        path = request.url.path
        bind_request_context(path, request.headers.get("origin"))
        try:
            headers = self._service.resolve(path, request.headers)
        finally:
            clear_request_context()

        for name, value in headers.items():
            response.headers[name] = value
        if headers:
            logger.debug("cors_headers_applied", path=path, headers=sorted(headers))
        return response
