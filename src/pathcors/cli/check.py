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
"""'pathcors check' — Show the CORS headers a request would receive."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from pathcors.cli.console import console
from pathcors.cli.loader import config_options, load_config, load_service


def _parse_header(value: str) -> tuple[str, str]:
    name, sep, header_value = value.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected NAME:VALUE, got {value!r}", param_hint="--header")
    return name.strip(), header_value.strip()


@click.command()
@click.argument("path")
@click.option("--origin", default=None, help="Value of the request Origin header.")
@click.option("--header", "extra_headers", multiple=True, help="Extra request header as NAME:VALUE (repeatable).")
@config_options
def check_command(
    path: str,
    origin: str | None,
    extra_headers: tuple[str, ...],
    config_path: Path | None,
    profiles: tuple[str, ...],
) -> None:
    """Resolve the CORS headers for a request to PATH."""
    service = load_service(load_config(config_path, profiles))

    headers = [_parse_header(h) for h in extra_headers]
    if origin is not None:
        headers.append(("Origin", origin))

    canonical = service.canonical_path(path)
    if canonical != path:
        console.print(f"[dim]{path} resolves to {canonical}[/dim]")

    resolved = service.resolve(path, headers)
    if not resolved:
        console.print(f"[warning]No CORS headers[/warning] for {path}")
        return

    table = Table(title=f"CORS headers for {path}", border_style="dim")
    table.add_column("Header", style="info")
    table.add_column("Value")
    for name, value in resolved.items():
        table.add_row(name, value)
    console.print(table)
