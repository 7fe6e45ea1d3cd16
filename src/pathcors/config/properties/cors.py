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
"""CORS configuration properties (pathcors.cors.*)."""

from __future__ import annotations

from dataclasses import dataclass, field

from pathcors.core.config import config_properties


@config_properties(prefix="pathcors.cors")
@dataclass
class CorsProperties:
    """Configuration for path-based CORS header decoration.

    ``domains`` maps a path pattern block to a ``origins|methods|headers|credentials``
    settings string. ``rules`` accepts the single-line form
    ``pattern|origins|methods|headers|credentials`` and is applied after
    ``domains``.
    """

    enabled: bool = True
    strict_origin: bool = False
    decorate_redirects: bool = False
    front_page: str = "/"
    domains: dict = field(default_factory=dict)
    rules: list = field(default_factory=list)
    aliases: dict = field(default_factory=dict)
