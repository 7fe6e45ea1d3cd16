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
"""'pathcors rules' — List configured rules in evaluation order."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from pathcors.cli.console import console
from pathcors.cli.loader import config_options, load_config, load_service


@click.command()
@config_options
def rules_command(config_path: Path | None, profiles: tuple[str, ...]) -> None:
    """List CORS rules; later rows win per header when several match."""
    service = load_service(load_config(config_path, profiles))
    policies = service.registry.current

    if not policies:
        console.print("[warning]No CORS rules configured[/warning]")
        return

    table = Table(title="CORS rules", border_style="dim", show_lines=True)
    table.add_column("#", style="dim")
    table.add_column("Pattern", style="info")
    table.add_column("Origins")
    table.add_column("Methods")
    table.add_column("Headers")
    table.add_column("Credentials")

    for index, rule in enumerate(policies, start=1):
        policy = rule.policy
        table.add_row(
            str(index),
            rule.pattern,
            ", ".join(policy.origins) or "-",
            policy.allow_methods or "-",
            policy.allow_headers or "-",
            policy.credentials or "-",
        )
    console.print(table)
