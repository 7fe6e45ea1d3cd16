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
"""CorsService — wires alias resolution, the policy registry and the resolver."""

from __future__ import annotations

from typing import Any

from pathcors.config.properties.cors import CorsProperties
from pathcors.core.config import Config
from pathcors.cors.adapters.alias import IdentityAliasResolver, MappingAliasResolver
from pathcors.cors.adapters.path_matcher import DrupalPathMatcher
from pathcors.cors.context import RequestContext
from pathcors.cors.headers import ResolvedHeaders
from pathcors.cors.policy import PolicySet
from pathcors.cors.ports import AliasResolver, PathMatcher
from pathcors.cors.registry import PolicyRegistry
from pathcors.cors.resolver import PolicyResolver
from pathcors.kernel.exceptions import AliasResolutionException, PathCorsException


class CorsService:
    """Computes the CORS headers for a request path and its headers."""

    def __init__(
        self,
        registry: PolicyRegistry,
        resolver: PolicyResolver,
        alias_resolver: AliasResolver | None = None,
    ) -> None:
        self.registry = registry
        self.resolver = resolver
        self.alias_resolver = alias_resolver or IdentityAliasResolver()

    @classmethod
    def from_properties(
        cls,
        props: CorsProperties,
        matcher: PathMatcher | None = None,
        alias_resolver: AliasResolver | None = None,
    ) -> CorsService:
        """Build a service from bound ``pathcors.cors`` properties.

        Explicit *matcher* / *alias_resolver* arguments win over the defaults
        derived from ``front_page`` and ``aliases``.
        """
        registry = PolicyRegistry(PolicySet.from_config(props.domains, props.rules))
        resolver = PolicyResolver(
            matcher or DrupalPathMatcher(front_page=props.front_page),
            strict_origin=props.strict_origin,
        )
        if alias_resolver is None:
            alias_resolver = MappingAliasResolver(props.aliases) if props.aliases else IdentityAliasResolver()
        return cls(registry, resolver, alias_resolver)

    @classmethod
    def from_config(cls, config: Config, **kwargs: Any) -> CorsService:
        return cls.from_properties(config.bind(CorsProperties), **kwargs)

    def canonical_path(self, raw_path: str) -> str:
        try:
            return self.alias_resolver.resolve(raw_path)
        except PathCorsException:
            raise
        except Exception as exc:
            raise AliasResolutionException(
                f"Alias resolver failed for path '{raw_path}': {exc}",
                code="CORS_ALIAS_001",
                context={"path": raw_path},
            ) from exc

    def build_context(self, raw_path: str, headers: Any = None) -> RequestContext:
        return RequestContext.build(raw_path, self.canonical_path(raw_path), headers)

    def resolve(self, raw_path: str, headers: Any = None) -> ResolvedHeaders:
        """Resolve headers against the snapshot active at call time."""
        return self.resolver.resolve(self.build_context(raw_path, headers), self.registry.current)
