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
"""Path-based CORS policy resolution."""

from pathcors.cors.context import RequestContext
from pathcors.cors.headers import (
    ALLOW_CREDENTIALS,
    ALLOW_HEADERS,
    ALLOW_METHODS,
    ALLOW_ORIGIN,
    CORS_HEADERS,
    ResolvedHeaders,
)
from pathcors.cors.policy import MIRROR, ParsedPolicy, PolicyRule, PolicySet, format_multiple_value_header, parse_rule_lines
from pathcors.cors.ports import AliasResolver, PathMatcher
from pathcors.cors.registry import PolicyRegistry
from pathcors.cors.resolver import PolicyResolver
from pathcors.cors.service import CorsService

__all__ = [
    "ALLOW_CREDENTIALS",
    "ALLOW_HEADERS",
    "ALLOW_METHODS",
    "ALLOW_ORIGIN",
    "AliasResolver",
    "CORS_HEADERS",
    "CorsService",
    "MIRROR",
    "ParsedPolicy",
    "PathMatcher",
    "PolicyRegistry",
    "PolicyResolver",
    "PolicyRule",
    "PolicySet",
    "RequestContext",
    "ResolvedHeaders",
    "format_multiple_value_header",
    "parse_rule_lines",
]
