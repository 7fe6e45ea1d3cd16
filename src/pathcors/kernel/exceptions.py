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
"""Exception hierarchy for pathcors.

Categories:
- ConfigurationException: invalid CORS configuration detected at load time
- InfrastructureException: failures of injected capabilities (path matcher,
  alias resolver) that the resolver cannot recover from

Malformed settings strings are never raised; they degrade to "no header".
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class PathCorsException(Exception):
    """Base exception for all pathcors errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_CONFIG_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(PathCorsException):
    """CORS configuration has a shape that cannot be turned into rules."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(PathCorsException):
    """An injected capability failed while processing a request."""


class PathMatchingException(InfrastructureException):
    """The path matcher raised while testing a path against a pattern."""


class AliasResolutionException(InfrastructureException):
    """The alias resolver raised while resolving a request path."""
