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
"""pathcors CLI — inspect CORS rules and the headers they produce."""

from __future__ import annotations

import click

from pathcors.cli.console import print_banner


class PathCorsCLI(click.Group):
    """Click group that shows the banner on help."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        print_banner()
        super().format_help(ctx, formatter)


@click.group(cls=PathCorsCLI)
@click.version_option(package_name="pathcors")
def cli() -> None:
    """pathcors — path-based CORS header tooling."""


from pathcors.cli.check import check_command  # noqa: E402
from pathcors.cli.rules import rules_command  # noqa: E402

cli.add_command(check_command, name="check")
cli.add_command(rules_command, name="rules")
