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
"""flyaop CLI — run the users service and inspect its routes."""

from __future__ import annotations

import asyncio

import click

from flyaop.config.properties import ServerProperties
from flyaop.users.application import create_users_app, load_config, start_context
from flyaop.web.controller import ControllerRegistrar


@click.group()
@click.version_option(package_name="flyaop")
def cli() -> None:
    """flyaop — aspect-oriented users service."""


@cli.command("run")
@click.option("--host", default=None, help="Bind address (default: flyaop.server.host).")
@click.option("--port", default=None, type=int, help="Port number (default: flyaop.server.port).")
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False), help="YAML config file.")
@click.option("--profile", "profiles", multiple=True, help="Active profile overlay (repeatable).")
def run_command(host: str | None, port: int | None, config_path: str | None, profiles: tuple[str, ...]) -> None:
    """Start the users service with uvicorn."""
    import uvicorn

    config = load_config(config_path, list(profiles))
    server = config.bind(ServerProperties)
    app = asyncio.run(create_users_app(config))
    uvicorn.run(app, host=host or server.host, port=port or server.port, log_level="warning")


@cli.command("routes")
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False), help="YAML config file.")
def routes_command(config_path: str | None) -> None:
    """Print the HTTP routes exposed by the users service."""
    config = load_config(config_path)
    ctx = asyncio.run(start_context(config))
    for meta in ControllerRegistrar().collect_route_metadata(ctx):
        click.echo(f"{meta.http_method:<6} {meta.path:<24} {meta.controller}.{meta.handler_name}")


if __name__ == "__main__":
    cli()
