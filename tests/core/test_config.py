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
"""Tests for Config loading, placeholders and CorsProperties binding."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest

from pathcors.config.properties.cors import CorsProperties
from pathcors.core.config import Config, config_properties


class TestConfig:
    def test_get_nested_value(self):
        config = Config({"pathcors": {"cors": {"front_page": "/home"}}})
        assert config.get("pathcors.cors.front_page") == "/home"

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("PATHCORS_CORS_FRONT_PAGE", "/env")
        config = Config({"pathcors": {"cors": {"front_page": "/file"}}})
        assert config.get("pathcors.cors.front_page") == "/env"

    def test_placeholder_with_default(self):
        config = Config({"origin": "${PATHCORS_TEST_UNSET_ORIGIN:https://a.com}"})
        assert config.get("origin") == "https://a.com"

    def test_placeholder_from_config(self):
        config = Config({"site": {"origin": "https://a.com"}, "cors": "${site.origin}|GET"})
        assert config.get("cors") == "https://a.com|GET"

    def test_unresolvable_placeholder_raises(self):
        with pytest.raises(ValueError):
            Config({"x": "${PATHCORS_TEST_NOPE}"}).get("x")

    def test_get_section_preserves_order(self):
        config = Config({"d": {"/b": "1", "/a": "2"}})
        assert list(config.get_section("d")) == ["/b", "/a"]


class TestConfigFiles:
    def test_yaml_file_with_packaged_defaults(self, tmp_path: Path):
        path = tmp_path / "cors.yaml"
        path.write_text('pathcors:\n  cors:\n    domains:\n      "/api/*": "<mirror>|GET"\n')
        config = Config.from_file(path)
        assert config.get("pathcors.cors.domains") == {"/api/*": "<mirror>|GET"}
        assert config.get("pathcors.logging.format") == "console"
        assert config.loaded_sources[0].startswith("pathcors-defaults.yaml")

    def test_toml_file(self, tmp_path: Path):
        path = tmp_path / "cors.toml"
        path.write_text('[pathcors.cors.domains]\n"/api/*" = "https://a.com"\n')
        config = Config.from_file(path, load_defaults=False)
        assert config.get("pathcors.cors.domains") == {"/api/*": "https://a.com"}

    def test_profile_overlay(self, tmp_path: Path):
        (tmp_path / "cors.yaml").write_text("pathcors:\n  cors:\n    strict_origin: false\n")
        (tmp_path / "cors-prod.yaml").write_text("pathcors:\n  cors:\n    strict_origin: true\n")
        config = Config.from_file(tmp_path / "cors.yaml", active_profiles=["prod"])
        assert config.get("pathcors.cors.strict_origin") is True

    def test_from_sources_merges_config_dir_then_root(self, tmp_path: Path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "pathcors.yaml").write_text("pathcors:\n  cors:\n    front_page: /a\n")
        (tmp_path / "pathcors.yaml").write_text("pathcors:\n  cors:\n    front_page: /b\n")
        config = Config.from_sources(tmp_path)
        assert config.get("pathcors.cors.front_page") == "/b"
        assert len(config.loaded_sources) == 3

    def test_pathcors_named_file_uses_sources(self, tmp_path: Path):
        (tmp_path / "pathcors.yaml").write_text("pathcors:\n  cors:\n    front_page: /root\n")
        config = Config.from_file(tmp_path / "pathcors.yaml")
        assert config.get("pathcors.cors.front_page") == "/root"

    def test_missing_file_yields_defaults_only(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("pathcors.cors.enabled") is True


class TestConfigBinding:
    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            x: int = 1

        with pytest.raises(ValueError):
            Config({}).bind(Plain)

    def test_bind_custom_dataclass(self):
        @config_properties(prefix="app.limits")
        @dataclass
        class Limits:
            size: int = 1
            ratio: float = 0.5

        limits = Config({"app": {"limits": {"size": "10"}}}).bind(Limits)
        assert limits.size == 10
        assert limits.ratio == 0.5

    def test_cors_properties_defaults(self):
        props = Config({}).bind(CorsProperties)
        assert props == CorsProperties()
        assert props.enabled is True
        assert props.domains == {}

    def test_cors_properties_from_section(self):
        config = Config({
            "pathcors": {
                "cors": {
                    "domains": {"/api/*": "https://a.com", "/public": "<mirror>"},
                    "rules": ["/x|https://x.com"],
                    "front_page": "/home",
                    "decorate_redirects": True,
                }
            }
        })
        props = config.bind(CorsProperties)
        assert list(props.domains) == ["/api/*", "/public"]
        assert props.rules == ["/x|https://x.com"]
        assert props.front_page == "/home"
        assert props.decorate_redirects is True

    def test_env_override_for_bool_switch(self, monkeypatch):
        monkeypatch.setenv("PATHCORS_CORS_ENABLED", "false")
        props = Config({"pathcors": {"cors": {"enabled": True}}}).bind(CorsProperties)
        assert props.enabled is False
