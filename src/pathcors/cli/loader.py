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
"""Shared options and config loading for CLI commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from pathcors.core.config import Config
from pathcors.cors.service import CorsService
from pathcors.kernel.exceptions import ConfigurationException
from pathcors.logging.port import LoggingPort
from pathcors.logging.structlog_adapter import StructlogAdapter


def config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add ``--config`` and ``--profile`` options to a command."""
    func = click.option(
        "--profile",
        "profiles",
        multiple=True,
        help="Active profile overlay (repeatable).",
    )(func)
    return click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Configuration file (YAML or TOML). Defaults to pathcors.* in the current directory.",
    )(func)


def load_config(
    config_path: Path | None,
    profiles: tuple[str, ...] = (),
    logging_port: LoggingPort | None = None,
) -> Config:
    """Load configuration and apply its ``pathcors.logging`` settings."""
    if config_path is None:
        config = Config.from_sources(Path.cwd(), active_profiles=list(profiles))
    else:
        config = Config.from_file(config_path, active_profiles=list(profiles))
    (logging_port or StructlogAdapter()).configure(config)
    return config


def load_service(config: Config) -> CorsService:
    try:
        return CorsService.from_config(config)
    except ConfigurationException as exc:
        raise click.ClickException(str(exc)) from exc
