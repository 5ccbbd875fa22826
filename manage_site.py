#!/usr/bin/env python3
"""Site configuration management CLI tool."""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Ensure project root is in path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

load_dotenv('.env')

from blogsite.config.loader import dump_site_config, load_site_config
from blogsite.constants import (
    BUNDLED_PLUGINS_DIR,
    EXTRA_PLUGIN_PATHS,
    INSTALLED_PLUGINS_DIR,
    LOG_FORMAT,
    LOG_LEVEL,
    SITE_CONFIG_FILE,
)
from blogsite.errors import PluginError, SiteConfigError
from blogsite.models.site import SiteConfig
from blogsite.plugins.host import PluginHost

console = Console()


def get_config(args) -> SiteConfig:
    """Load the site config named by --config (or SITE_CONFIG), exiting on error."""
    try:
        return load_site_config(args.config)
    except SiteConfigError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def get_host(config: SiteConfig) -> PluginHost:
    """Create a PluginHost for a loaded config."""
    return PluginHost(
        config=config,
        bundled_dir=BUNDLED_PLUGINS_DIR,
        installed_dir=INSTALLED_PLUGINS_DIR,
        extra_paths=EXTRA_PLUGIN_PATHS,
    )


def get_activated_host(config: SiteConfig) -> PluginHost:
    host = get_host(config)
    try:
        host.activate_all()
    except PluginError as e:
        console.print(f"[red]Plugin error: {e}[/red]")
        sys.exit(1)
    return host


def cmd_show(args):
    """Show site metadata and social links."""
    meta = get_config(args).site_metadata

    console.print(Panel(
        f"[bold]{meta.title}[/bold]\n"
        f"{meta.description}\n\n"
        f"Owner: {meta.name}\n"
        f"URL:   {meta.site_url}\n"
        f"Hero:  {meta.hero.heading} (max width {meta.hero.max_width}px)",
        title="Site metadata",
    ))

    table = Table(title="Social links")
    table.add_column("Name")
    table.add_column("URL")
    for link in meta.social:
        table.add_row(link.name, link.url)
    console.print(table)


def cmd_validate(args):
    """Validate the site config and activate every plugin it names."""
    config = get_config(args)
    host = get_activated_host(config)
    console.print(
        f"[green]Site config OK:[/green] '{config.site_metadata.title}', "
        f"{len(host.activations)} plugin(s) activated."
    )


def cmd_plugins(args):
    """List plugin activations in declaration order."""
    host = get_activated_host(get_config(args))

    table = Table(title="Plugin activations")
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Type")
    table.add_column("Source")
    table.add_column("State")
    table.add_column("Version")
    for info in host.list_plugins():
        table.add_row(
            str(info["position"]), info["id"], info["type"],
            info["source"], info["state"], info["version"],
        )
    console.print(table)


def cmd_info(args):
    """Show detailed information about one activated plugin."""
    host = get_activated_host(get_config(args))
    info = host.get_plugin_info(args.plugin_id)
    if not info:
        console.print(f"Plugin '{args.plugin_id}' is not activated by the site config.")
        sys.exit(1)

    print(f"Plugin: {info['id']}")
    print(f"  Name:        {info['name']}")
    print(f"  Version:     {info['version']}")
    print(f"  Type:        {info['type']}")
    print(f"  Description: {info['description']}")
    print(f"  Source:      {info['source']}")
    print(f"  Path:        {info['path']}")
    print(f"  Position:    {info['position']}")
    print(f"  Options:     {json.dumps(info['options'], indent=4, ensure_ascii=False)}")
    if info.get("summary"):
        print(f"  Summary:     {json.dumps(info['summary'], indent=4, ensure_ascii=False)}")


def cmd_export(args):
    """Export the site config as JSON or YAML."""
    config = get_config(args)
    try:
        path = dump_site_config(config, args.output)
    except SiteConfigError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    print(f"Site config written to {path}")


def cmd_doctor(args):
    """Run health checks on the site config and plugins."""
    issues = []

    if not BUNDLED_PLUGINS_DIR.exists():
        issues.append(f"Bundled plugins directory missing: {BUNDLED_PLUGINS_DIR}")

    try:
        config = load_site_config(args.config)
    except SiteConfigError as e:
        issues.append(str(e))
        config = None

    if config is not None:
        host = get_host(config)
        for plugin in host.shadowed:
            issues.append(
                f"Plugin '{plugin.id}' at {plugin.path} is shadowed by an earlier search path"
            )

        if not config.site_metadata.site_url.startswith("https://"):
            issues.append(f"siteUrl is not https: {config.site_metadata.site_url}")
        if not config.plugins:
            issues.append("No plugins activated")

        try:
            host.activate_all()
        except PluginError as e:
            issues.append(f"Plugin '{e.plugin_id}': {e}")

    if issues:
        print(f"Found {len(issues)} issue(s):")
        for i, issue in enumerate(issues, 1):
            print(f"  {i}. {issue}")
        sys.exit(1)
    else:
        print(f"All checks passed. {len(config.plugins)} plugin(s) activated.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Blog Site Config Manager")
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=SITE_CONFIG_FILE,
        help=f"Site declaration (.py, .json, .yaml); default: {SITE_CONFIG_FILE}",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("show", help="Show site metadata")
    subparsers.add_parser("validate", help="Validate config and activate plugins")
    subparsers.add_parser("plugins", help="List plugin activations")

    info_parser = subparsers.add_parser("info", help="Show plugin details")
    info_parser.add_argument("plugin_id", help="Plugin identifier, as in 'resolve'")

    export_parser = subparsers.add_parser("export", help="Export config as JSON or YAML")
    export_parser.add_argument("output", type=Path, help="Output file (.json, .yaml, .yml)")

    subparsers.add_parser("doctor", help="Run health checks")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper()),
        format=LOG_FORMAT,
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    commands = {
        "show": cmd_show,
        "validate": cmd_validate,
        "plugins": cmd_plugins,
        "info": cmd_info,
        "export": cmd_export,
        "doctor": cmd_doctor,
    }

    commands[args.command](args)


if __name__ == "__main__":
    main()
