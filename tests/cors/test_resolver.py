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
"""Tests for PolicyResolver — matching, origin reflection and per-header merge."""

from __future__ import annotations

import pytest

from pathcors.cors.adapters.path_matcher import DrupalPathMatcher
from pathcors.cors.context import RequestContext
from pathcors.cors.headers import (
    ALLOW_CREDENTIALS,
    ALLOW_HEADERS,
    ALLOW_METHODS,
    ALLOW_ORIGIN,
    CORS_HEADERS,
)
from pathcors.cors.policy import PolicySet
from pathcors.cors.resolver import PolicyResolver
from pathcors.kernel.exceptions import InfrastructureException, PathMatchingException

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolver(strict_origin: bool = False) -> PolicyResolver:
    return PolicyResolver(DrupalPathMatcher(), strict_origin=strict_origin)


def _ctx(path: str = "/api/items", origin: str | None = None, canonical: str | None = None) -> RequestContext:
    headers = {"Origin": origin} if origin is not None else {}
    return RequestContext.build(path, canonical, headers)


class RecordingMatcher:
    def __init__(self, matches: set[tuple[str, str]]) -> None:
        self.matches = matches
        self.calls: list[tuple[str, str]] = []

    def match_path(self, path: str, patterns: str) -> bool:
        self.calls.append((path, patterns))
        return (path, patterns) in self.matches


class BrokenMatcher:
    def match_path(self, path: str, patterns: str) -> bool:
        raise RuntimeError("regex engine exploded")


# ---------------------------------------------------------------------------
# No match / empty configuration
# ---------------------------------------------------------------------------


class TestNoMatch:
    def test_empty_configuration_yields_no_headers(self):
        assert _resolver().resolve(_ctx(), {}) == {}

    def test_unmatched_pattern_yields_no_headers(self):
        domains = {"/other/*": "https://a.com|GET|X-Token|true"}
        assert _resolver().resolve(_ctx("/api/items", origin="https://a.com"), domains) == {}

    def test_accepts_policy_set_and_mapping_alike(self):
        domains = {"/api/*": "https://a.com|GET"}
        resolver = _resolver()
        assert resolver.resolve(_ctx(), domains) == resolver.resolve(_ctx(), PolicySet.from_mapping(domains))


# ---------------------------------------------------------------------------
# Origin handling
# ---------------------------------------------------------------------------


class TestStaticOrigin:
    def test_first_candidate_without_request_origin(self):
        headers = _resolver().resolve(_ctx(), {"/api/*": "https://a.com, https://b.com"})
        assert headers == {ALLOW_ORIGIN: "https://a.com"}

    def test_empty_origin_field_never_sets_origin(self):
        headers = _resolver().resolve(_ctx(origin="https://a.com"), {"/api/*": "|GET"})
        assert ALLOW_ORIGIN not in headers
        assert headers == {ALLOW_METHODS: "GET"}

    def test_empty_request_origin_uses_static_branch(self):
        headers = _resolver().resolve(_ctx(origin=""), {"/api/*": "https://a.com,https://b.com"})
        assert headers[ALLOW_ORIGIN] == "https://a.com"


class TestOriginReflection:
    def test_listed_origin_is_reflected(self):
        headers = _resolver().resolve(_ctx(origin="https://b.com"), {"/api/*": "https://a.com, https://b.com"})
        assert headers[ALLOW_ORIGIN] == "https://b.com"

    def test_mirror_reflects_any_origin(self):
        headers = _resolver().resolve(_ctx(origin="https://x.com"), {"/api/*": "<mirror>"})
        assert headers[ALLOW_ORIGIN] == "https://x.com"

    def test_mirror_anywhere_in_list_reflects(self):
        headers = _resolver().resolve(_ctx(origin="https://x.com"), {"/api/*": "https://a.com, <mirror>"})
        assert headers[ALLOW_ORIGIN] == "https://x.com"

    def test_unlisted_origin_is_never_reflected(self):
        headers = _resolver().resolve(_ctx(origin="https://evil.com"), {"/api/*": "https://a.com"})
        assert headers.get(ALLOW_ORIGIN) != "https://evil.com"

    def test_unlisted_origin_falls_back_to_first_candidate(self):
        headers = _resolver().resolve(_ctx(origin="https://evil.com"), {"/api/*": "https://a.com, https://b.com"})
        assert headers[ALLOW_ORIGIN] == "https://a.com"

    def test_strict_origin_leaves_unlisted_origin_unset(self):
        headers = _resolver(strict_origin=True).resolve(
            _ctx(origin="https://evil.com"), {"/api/*": "https://a.com|GET"}
        )
        assert ALLOW_ORIGIN not in headers
        assert headers[ALLOW_METHODS] == "GET"

    def test_strict_origin_still_reflects_listed_origin(self):
        headers = _resolver(strict_origin=True).resolve(_ctx(origin="https://a.com"), {"/api/*": "https://a.com"})
        assert headers[ALLOW_ORIGIN] == "https://a.com"

    def test_reflection_is_exact(self):
        headers = _resolver().resolve(_ctx(origin="https://A.com"), {"/api/*": "https://a.com, https://b.com"})
        assert headers[ALLOW_ORIGIN] == "https://a.com"

    def test_reflected_zero_origin_is_dropped(self):
        headers = _resolver().resolve(_ctx(origin="0"), {"/api/*": "https://a.com,0|GET"})
        assert ALLOW_ORIGIN not in headers
        assert headers[ALLOW_METHODS] == "GET"

    def test_reflected_zero_origin_keeps_earlier_rule_value(self):
        policies = {"/api/*": "https://a.com", "/api/items": "0,https://b.com"}
        headers = _resolver().resolve(_ctx(origin="0"), policies)
        assert headers[ALLOW_ORIGIN] == "https://a.com"


# ---------------------------------------------------------------------------
# Methods / headers / credentials
# ---------------------------------------------------------------------------


class TestListFields:
    def test_methods_are_trimmed_and_joined(self):
        headers = _resolver().resolve(_ctx(), {"/api/*": "|get, post ,PUT"})
        assert headers[ALLOW_METHODS] == "get, post, PUT"

    def test_headers_are_trimmed_and_joined(self):
        headers = _resolver().resolve(_ctx(), {"/api/*": "||Content-Type ,Authorization"})
        assert headers[ALLOW_HEADERS] == "Content-Type, Authorization"

    def test_credentials_are_trimmed_verbatim(self):
        headers = _resolver().resolve(_ctx(), {"/api/*": "|||  true "})
        assert headers == {ALLOW_CREDENTIALS: "true"}

    def test_full_settings_string(self):
        headers = _resolver().resolve(
            _ctx(origin="https://app.example.com"),
            {"/api/*": "<mirror>|GET,POST|Content-Type|true"},
        )
        assert headers == {
            ALLOW_ORIGIN: "https://app.example.com",
            ALLOW_METHODS: "GET, POST",
            ALLOW_HEADERS: "Content-Type",
            ALLOW_CREDENTIALS: "true",
        }

    def test_only_cors_header_names_are_emitted(self):
        headers = _resolver().resolve(_ctx(origin="https://x.com"), {"/api/*": "<mirror>|GET|X-A|true|extra|more"})
        assert set(headers) <= set(CORS_HEADERS)

    def test_whitespace_only_fields_are_not_emitted(self):
        headers = _resolver().resolve(_ctx(), {"/api/*": " | | | "})
        assert headers == {}


# ---------------------------------------------------------------------------
# Merge across several matching rules
# ---------------------------------------------------------------------------


class TestPerHeaderMerge:
    def test_later_rule_overrides_only_the_headers_it_sets(self):
        domains = {
            "/api/*": "|GET,POST",
            "/api/items": "https://a.com",
        }
        headers = _resolver().resolve(_ctx("/api/items"), domains)
        assert headers == {ALLOW_METHODS: "GET, POST", ALLOW_ORIGIN: "https://a.com"}

    def test_last_matching_rule_wins_per_header(self):
        domains = {
            "/api/*": "https://a.com|GET|X-One|true",
            "/api/items": "https://b.com|POST",
        }
        headers = _resolver().resolve(_ctx("/api/items"), domains)
        assert headers == {
            ALLOW_ORIGIN: "https://b.com",
            ALLOW_METHODS: "POST",
            ALLOW_HEADERS: "X-One",
            ALLOW_CREDENTIALS: "true",
        }

    def test_configuration_order_decides_not_specificity(self):
        domains = {
            "/api/items": "https://specific.com",
            "/api/*": "https://generic.com",
        }
        headers = _resolver().resolve(_ctx("/api/items"), domains)
        assert headers[ALLOW_ORIGIN] == "https://generic.com"

    def test_empty_later_value_keeps_earlier_value(self):
        domains = {
            "/api/*": "https://a.com",
            "/api/items": " ,https://b.com",
        }
        headers = _resolver().resolve(_ctx("/api/items"), domains)
        assert headers[ALLOW_ORIGIN] == "https://a.com"

    def test_non_matching_rules_do_not_contribute(self):
        domains = {
            "/api/*": "|GET",
            "/admin/*": "|DELETE",
        }
        headers = _resolver().resolve(_ctx("/api/items"), domains)
        assert headers == {ALLOW_METHODS: "GET"}


# ---------------------------------------------------------------------------
# Raw vs canonical path
# ---------------------------------------------------------------------------


class TestAliasedPaths:
    def test_canonical_path_match_applies(self):
        headers = _resolver().resolve(_ctx("/about-us", canonical="/node/1"), {"/node/*": "https://a.com"})
        assert headers[ALLOW_ORIGIN] == "https://a.com"

    def test_raw_path_match_applies_when_alias_differs(self):
        headers = _resolver().resolve(_ctx("/about-us", canonical="/node/1"), {"/about-*": "https://a.com"})
        assert headers[ALLOW_ORIGIN] == "https://a.com"

    def test_raw_path_checked_only_when_alias_differs(self):
        matcher = RecordingMatcher(set())
        PolicyResolver(matcher).resolve(_ctx("/api/items"), {"/api/*": "https://a.com"})
        assert matcher.calls == [("/api/items", "/api/*")]

    def test_canonical_path_checked_first(self):
        matcher = RecordingMatcher({("/node/1", "/node/*")})
        PolicyResolver(matcher).resolve(_ctx("/about-us", canonical="/node/1"), {"/node/*": "https://a.com"})
        assert matcher.calls == [("/node/1", "/node/*")]


# ---------------------------------------------------------------------------
# Purity / failures
# ---------------------------------------------------------------------------


class TestResolverProperties:
    def test_resolution_is_idempotent(self):
        policies = PolicySet.from_mapping({"/api/*": "<mirror>|GET|X-A|true", "/api/items": "|POST"})
        ctx = _ctx(origin="https://x.com")
        resolver = _resolver()
        assert resolver.resolve(ctx, policies) == resolver.resolve(ctx, policies)

    def test_result_is_a_fresh_dict(self):
        policies = PolicySet.from_mapping({"/api/*": "https://a.com"})
        resolver = _resolver()
        first = resolver.resolve(_ctx(), policies)
        first[ALLOW_ORIGIN] = "mutated"
        assert resolver.resolve(_ctx(), policies)[ALLOW_ORIGIN] == "https://a.com"


class TestMatcherFailure:
    def test_matcher_errors_propagate_as_path_matching_exception(self):
        resolver = PolicyResolver(BrokenMatcher())
        with pytest.raises(PathMatchingException) as exc_info:
            resolver.resolve(_ctx(), {"/api/*": "https://a.com"})
        assert exc_info.value.context == {"path": "/api/items", "pattern": "/api/*"}
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_path_matching_exception_is_infrastructure(self):
        assert issubclass(PathMatchingException, InfrastructureException)
