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
"""PolicyResolver — decides which CORS headers a response gets.

Every rule whose pattern matches the canonical path (or, when aliasing changed
it, the raw path) contributes its own header values. The contributions are
then folded in configuration order, one header name at a time, so a later
rule overrides only the headers it actually sets:

    /api/*     -> "|GET,POST"
    /api/feed  -> "https://a.com"

    GET /api/feed  =>  Allow-Methods: "GET, POST", Allow-Origin: "https://a.com"

Empty values (including "0") never reach the result and never replace an
earlier rule's value.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from pathcors.cors.context import RequestContext
from pathcors.cors.headers import (
    ALLOW_CREDENTIALS,
    ALLOW_HEADERS,
    ALLOW_METHODS,
    ALLOW_ORIGIN,
    ResolvedHeaders,
)
from pathcors.cors.policy import ParsedPolicy, PolicySet
from pathcors.cors.ports import PathMatcher
from pathcors.kernel.exceptions import PathCorsException, PathMatchingException

logger = structlog.get_logger("pathcors.cors.resolver")


class PolicyResolver:
    """Stateless resolver; one instance can serve concurrent requests.

    Args:
        matcher: Path matcher used for every pattern test.
        strict_origin: When ``True``, a request ``Origin`` that is neither
            listed nor mirrored leaves ``Access-Control-Allow-Origin`` unset
            for that rule. With the default ``False`` such a request gets the
            first configured origin, so "an unlisted origin is not set by the
            rule" only holds in strict mode; the origin itself is never
            echoed in either mode.
    """

    def __init__(self, matcher: PathMatcher, strict_origin: bool = False) -> None:
        self._matcher = matcher
        self._strict_origin = strict_origin

    @property
    def strict_origin(self) -> bool:
        return self._strict_origin

    def resolve(
        self,
        context: RequestContext,
        policies: PolicySet | Mapping[str, str],
    ) -> ResolvedHeaders:
        if not isinstance(policies, PolicySet):
            policies = PolicySet.from_mapping(policies)

        per_pattern: dict[str, dict[str, str | None]] = {}
        for rule in policies:
            if not self._matches(context, rule.pattern):
                continue
            per_pattern[rule.pattern] = self._rule_headers(rule.policy, context.origin)
            logger.debug("cors_rule_matched", pattern=rule.pattern, headers=per_pattern[rule.pattern])

        resolved: ResolvedHeaders = {}
        for headers in per_pattern.values():
            for name, value in headers.items():
                # "0" is an empty value, as it is for settings fields.
                if value and value != "0":
                    resolved[name] = value
        return resolved

    def _matches(self, context: RequestContext, pattern: str) -> bool:
        path = context.canonical_path
        try:
            if self._matcher.match_path(path, pattern):
                return True
            if context.aliased:
                path = context.raw_path
                return bool(self._matcher.match_path(path, pattern))
            return False
        except PathCorsException:
            raise
        except Exception as exc:
            raise PathMatchingException(
                f"Path matcher failed for path '{path}' against pattern '{pattern}': {exc}",
                code="CORS_MATCH_001",
                context={"path": path, "pattern": pattern},
            ) from exc

    def _rule_headers(self, policy: ParsedPolicy, request_origin: str | None) -> dict[str, str | None]:
        headers: dict[str, str | None] = {}
        if policy.origins:
            headers[ALLOW_ORIGIN] = self._origin_value(policy, request_origin)
        if policy.methods:
            headers[ALLOW_METHODS] = policy.allow_methods
        if policy.headers:
            headers[ALLOW_HEADERS] = policy.allow_headers
        if policy.credentials is not None:
            headers[ALLOW_CREDENTIALS] = policy.credentials
        return headers

    def _origin_value(self, policy: ParsedPolicy, request_origin: str | None) -> str | None:
        if request_origin:
            if request_origin in policy.origins or policy.mirror:
                return request_origin
            if self._strict_origin:
                return None
        # No usable request origin: advertise the first configured one.
        return policy.origins[0]
