# SPDX-License-Identifier: Apache-2.0
# Copyright 2026 Ague Samuel Amen
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

"""
emulation-loader - diagnostics for the plugin loader

Usage:
    emulation-loader report --runtime 7.4 --host-version 5.8 --platform-version 5.0
    emulation-loader simulate --runtime 6.4 --host-version 5.2 --platform-version 4.0
    emulation-loader --config ./emulation_loader.yml report ...

Both commands exit with 0 when the environment is compatible, 1 otherwise.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .compatibility import EnvironmentSnapshot, check, format_compatibility_report
from .config import LoaderSettings, load_settings
from .errors import LoaderError
from .framework import FrameworkLoader
from .host import SimulatedHost
from .loader import EmulationLoader


def _environment_options(func):
    func = click.option(
        "--platform-version",
        default=None,
        help="Installed platform version. Omit when the platform is not loaded.",
    )(func)
    func = click.option("--host-version", default=None, help="Host application version.")(func)
    func = click.option("--runtime", default=None, help="Runtime version.")(func)
    return func


def _snapshot(
    runtime: Optional[str], host_version: Optional[str], platform_version: Optional[str]
) -> EnvironmentSnapshot:
    return EnvironmentSnapshot(
        runtime_version=runtime,
        host_version=host_version,
        platform_version=platform_version,
    )


@click.group()
@click.version_option(__version__, prog_name="emulation-loader")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Loader configuration file, or a directory containing one.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """Check whether an environment can run the payment gateway plugin."""
    if verbose:
        logging.getLogger("emulation_loader").setLevel(logging.DEBUG)
    try:
        ctx.obj = load_settings(config_path)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--config") from e


@cli.command()
@_environment_options
@click.pass_obj
def report(
    settings: LoaderSettings,
    runtime: Optional[str],
    host_version: Optional[str],
    platform_version: Optional[str],
) -> None:
    """Print a compatibility report for the given versions."""
    requirements = [settings.runtime, settings.host, settings.platform]
    result = check(_snapshot(runtime, host_version, platform_version), requirements)
    click.echo(
        format_compatibility_report(
            result, requirements, title=f"{settings.plugin_name} - Compatibility Report"
        )
    )
    if not result.overall_satisfied:
        raise SystemExit(1)


@cli.command()
@_environment_options
@click.option(
    "--dry-run/--no-dry-run",
    default=True,
    show_default=True,
    help="Do not import the framework or call the real entry point.",
)
@click.pass_obj
def simulate(
    settings: LoaderSettings,
    runtime: Optional[str],
    host_version: Optional[str],
    platform_version: Optional[str],
    dry_run: bool,
) -> None:
    """Activate the plugin and run one admin request on a simulated host."""
    host = SimulatedHost(_snapshot(runtime, host_version, platform_version))

    entry_point = None
    framework = None
    if dry_run:
        entry_point = lambda: click.echo("Entry point invoked (dry run).")  # noqa: E731
        framework = FrameworkLoader(dataclasses.replace(settings.framework, classes=()))
    loader = EmulationLoader.get_instance(
        host, settings, entry_point=entry_point, framework=framework
    )

    if not host.activate_plugin(settings.plugin_id):
        click.echo(f"Activation stopped: {host.stop_message}", err=True)
        raise SystemExit(1)
    click.echo(f"{settings.plugin_name} activated.")

    try:
        rendered = host.run_request(admin=True)
    except LoaderError as e:
        raise click.ClickException(str(e)) from e
    click.echo(rendered or "No notices.")
    active = host.is_plugin_active(settings.plugin_id)
    click.echo(f"Active: {'yes' if active else 'no'}")
    click.echo(f"Initialised: {'yes' if loader.is_initialized else 'no'}")
    if not (active and loader.is_initialized):
        raise SystemExit(1)


def main() -> None:
    cli(prog_name="emulation-loader")


__all__ = ["cli", "main"]
