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
"""Policy rules — parsing of ``origins|methods|headers|credentials`` settings.

A settings string has four optional ``|``-separated fields. Missing trailing
fields are empty and fields beyond the fourth are ignored, so a malformed
string never raises; it simply yields fewer headers.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from pathcors.kernel.exceptions import ConfigurationException

logger = structlog.get_logger("pathcors.cors.policy")

MIRROR = "<mirror>"
SETTINGS_FIELDS = 4


def _present(value: str) -> bool:
    # "0" counts as an empty field, matching how the settings format has always been read.
    return value != "" and value != "0"


def _split_list(value: str) -> tuple[str, ...]:
    return tuple(token.strip() for token in value.split(","))


def format_multiple_value_header(value: str) -> str:
    """Normalise a comma-separated list: ``"get, post ,PUT"`` -> ``"get, post, PUT"``."""
    return ", ".join(_split_list(value))


@dataclass(frozen=True)
class ParsedPolicy:
    """Immutable parsed form of a settings string.

    Empty tuples / ``None`` mean the corresponding field was absent.
    """

    origins: tuple[str, ...] = ()
    methods: tuple[str, ...] = ()
    headers: tuple[str, ...] = ()
    credentials: str | None = None

    @property
    def mirror(self) -> bool:
        """``True`` when the origin list contains the ``<mirror>`` token."""
        return MIRROR in self.origins

    @property
    def allow_methods(self) -> str | None:
        return ", ".join(self.methods) if self.methods else None

    @property
    def allow_headers(self) -> str | None:
        return ", ".join(self.headers) if self.headers else None

    @classmethod
    def parse(cls, settings: str | None) -> ParsedPolicy:
        raw = settings or ""
        fields = raw.split("|")
        if len(fields) > SETTINGS_FIELDS:
            logger.debug("cors_settings_malformed", settings=raw, field_count=len(fields))
        fields = (fields + [""] * SETTINGS_FIELDS)[:SETTINGS_FIELDS]
        origins, methods, headers, credentials = fields

        return cls(
            origins=_split_list(origins) if _present(origins) else (),
            methods=_split_list(methods) if _present(methods) else (),
            headers=_split_list(headers) if _present(headers) else (),
            credentials=credentials.strip() if _present(credentials) else None,
        )


@dataclass(frozen=True)
class PolicyRule:
    """A path pattern block bound to its raw settings string and parsed policy."""

    pattern: str
    settings: str
    policy: ParsedPolicy = field(compare=False)

    @classmethod
    def of(cls, pattern: str, settings: str | None) -> PolicyRule:
        settings = settings or ""
        return cls(pattern=pattern, settings=settings, policy=ParsedPolicy.parse(settings))


@dataclass(frozen=True)
class PolicySet:
    """Immutable, ordered snapshot of policy rules.

    Iteration order is configuration order and decides which rule wins when
    several match the same request.
    """

    rules: tuple[PolicyRule, ...] = ()

    def __iter__(self) -> Iterator[PolicyRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __bool__(self) -> bool:
        return bool(self.rules)

    def as_mapping(self) -> dict[str, str]:
        """Return the ordered ``pattern -> settings`` mapping."""
        return {rule.pattern: rule.settings for rule in self.rules}

    @classmethod
    def from_mapping(cls, domains: Mapping[str, Any] | None) -> PolicySet:
        """Build a snapshot from an ordered ``pattern -> settings`` mapping."""
        return cls(tuple(PolicyRule.of(p, s) for p, s in _validated(domains).items()))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> PolicySet:
        """Build a snapshot from ``pattern|origins|methods|headers|credentials`` lines."""
        return cls.from_mapping(parse_rule_lines(lines))

    @classmethod
    def from_config(cls, domains: Mapping[str, Any] | None, rules: Iterable[str] | str | None = ()) -> PolicySet:
        """Combine the mapping form and the line form, mapping entries first.

        A pattern repeated in ``rules`` takes the later settings but keeps the
        position of its first occurrence.
        """
        merged = _validated(domains)
        merged.update(parse_rule_lines(rules))
        return cls.from_mapping(merged)


def parse_rule_lines(lines: Iterable[str] | str | None) -> dict[str, str]:
    """Parse single-line rules into an ordered ``pattern -> settings`` mapping.

    ``None`` (an empty ``rules:`` key) means no rules. Blank lines are
    skipped. A line whose pattern part is empty is rejected.
    """
    if lines is None:
        return {}
    if isinstance(lines, str):
        lines = lines.splitlines()
    elif isinstance(lines, Mapping) or not isinstance(lines, Iterable):
        raise ConfigurationException(
            f"CORS rules must be a list of lines or a text block, got {type(lines).__name__}",
            code="CORS_CONFIG_002",
        )

    parsed: dict[str, str] = {}
    for number, line in enumerate(lines, start=1):
        if not isinstance(line, str):
            raise ConfigurationException(
                f"CORS rule #{number} must be a string, got {type(line).__name__}",
                code="CORS_CONFIG_002",
                context={"line": number},
            )
        if not line.strip():
            continue
        pattern, _, settings = line.strip().partition("|")
        pattern = pattern.strip()
        if not pattern:
            raise ConfigurationException(
                f"CORS rule #{number} has no path pattern: {line!r}",
                code="CORS_CONFIG_003",
                context={"line": number, "rule": line},
            )
        parsed[pattern] = settings
    return parsed


def _validated(domains: Mapping[str, Any] | None) -> dict[str, str]:
    if domains is None:
        return {}
    if not isinstance(domains, Mapping):
        raise ConfigurationException(
            f"CORS domains must be a mapping of path pattern to settings, got {type(domains).__name__}",
            code="CORS_CONFIG_001",
        )

    validated: dict[str, str] = {}
    for pattern, settings in domains.items():
        if not isinstance(pattern, str) or not pattern:
            raise ConfigurationException(
                f"CORS path pattern must be a non-empty string, got {pattern!r}",
                code="CORS_CONFIG_001",
                context={"pattern": pattern},
            )
        validated[pattern] = "" if settings is None else str(settings)
    return validated
