#!/usr/bin/env python3
"""Entry point for the create-x402 CLI."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from create_x402 import __version__
from create_x402.adapters.github_source import GitHubTemplateSource
from create_x402.adapters.rich_reporter import RichStatusReporter
from create_x402.adapters.subprocess_runner import SubprocessRunner
from create_x402.app.errors import InstallExitError, ScaffoldError
from create_x402.app.installer.service import InstallerService
from create_x402.app.scaffold.service import ScaffoldResult, ScaffoldService
from create_x402.cli.prompts import InteractivePrompter, SelectionCancelled
from create_x402.domain.template import Selection, TemplateCatalog, resolve_locator
from create_x402.resources import load_default_catalog
from create_x402.settings import SETTINGS
from create_x402.utils.telemetry import record_event

INSTALL_PROGRESS = ("resolving", "fetching packages", "linking", "running scripts")


def build_parser(catalog: TemplateCatalog) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-x402",
        description="Scaffold a new x402 project from an example template",
    )
    parser.add_argument("project_name", nargs="?", help="Directory to create (prompted when omitted)")
    parser.add_argument(
        "-t",
        "--template",
        choices=catalog.identifiers(),
        metavar="TEMPLATE",
        help="Template identifier (prompted when omitted; see --list)",
    )
    parser.add_argument("--skip-install", action="store_true", help="Do not run npm install")
    parser.add_argument("--list", action="store_true", help="List available templates and exit")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON (with --list)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _build_prompter(console: Console) -> InteractivePrompter:
    return InteractivePrompter(console)


def _build_service(catalog: TemplateCatalog, console: Console) -> ScaffoldService:
    reporter = RichStatusReporter(console)
    installer = InstallerService(
        runner=SubprocessRunner(),
        reporter=reporter,
        command=SETTINGS.npm_command,
        progress_items=INSTALL_PROGRESS,
    )
    return ScaffoldService(
        catalog=catalog,
        source=GitHubTemplateSource(SETTINGS),
        installer=installer,
        reporter=reporter,
        settings=SETTINGS,
    )


def _list_cmd(catalog: TemplateCatalog, *, as_json: bool, console: Console) -> int:
    payload = [
        {
            "id": template.identifier,
            "title": template.title,
            "description": template.description,
            "source": str(resolve_locator(template, SETTINGS.examples_base)),
        }
        for template in catalog
    ]
    if as_json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0
    for item in payload:
        console.print(f"[cyan]{escape(item['id'])}[/cyan]\t{escape(item['title'])}")
        if item["description"]:
            console.print(f"  [dim]{escape(item['description'])}[/dim]")
    return 0


def _collect_selection(args: argparse.Namespace, catalog: TemplateCatalog, prompter: InteractivePrompter) -> Selection:
    template_id = args.template or prompter.select_template(catalog)
    project_name = (args.project_name or "").strip()
    if not project_name:
        project_name = prompter.name_project(catalog.get(template_id).default_project_name())
    return Selection(template=template_id, project_name=project_name)


def _print_summary(console: Console, result: ScaffoldResult) -> None:
    name = escape(result.selection.project_name)
    if result.manifest.changed:
        packages = ", ".join(result.manifest.packages)
        console.print(
            f"\n[yellow]Note:[/yellow] workspace dependencies now point at 'latest' "
            f"([dim]{escape(packages)}[/dim]); check that they are published."
        )
    console.print(f"\n[green]Success![/green] [bold]{name}[/bold] is ready.")
    console.print("\nNext steps:")
    console.print(f"  [cyan]cd {name}[/cyan]")
    if not result.installed:
        console.print("  [cyan]npm install[/cyan]")
    console.print("  Configure your [dim].env[/dim] file")
    console.print("  [cyan]npm run dev[/cyan]\n")


def main(argv: list[str] | None = None, *, catalog: TemplateCatalog | None = None) -> int:
    catalog = catalog if catalog is not None else load_default_catalog()
    parser = build_parser(catalog)
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    console = Console()
    err_console = Console(stderr=True)

    if args.list:
        return _list_cmd(catalog, as_json=args.json, console=console)

    console.print("\n[bold bright_cyan]create-x402[/bold bright_cyan] [dim]•[/dim] [grey50]Scaffold a new x402 project[/grey50]\n")

    try:
        selection = _collect_selection(args, catalog, _build_prompter(console))
    except SelectionCancelled:
        console.print("\n[yellow]Cancelled.[/yellow]")
        record_event(SETTINGS, "scaffold.cancel")
        return 0
    record_event(SETTINGS, "scaffold.select", {"template": selection.template})

    service = _build_service(catalog, console)
    try:
        result = service.create(selection, cwd=Path.cwd(), install=not args.skip_install)
    except InstallExitError as exc:
        if exc.stderr.strip():
            err_console.print(escape(exc.stderr.strip()), style="red")
        if exc.stdout.strip():
            err_console.print(escape(exc.stdout.strip()))
        record_event(SETTINGS, "scaffold.error", {"kind": type(exc).__name__, "exit_code": exc.exit_code}, level="error")
        return exc.exit_code
    except ScaffoldError as exc:
        err_console.print(f"\n[red]{escape(str(exc))}[/red]")
        record_event(SETTINGS, "scaffold.error", {"kind": type(exc).__name__, "exit_code": exc.exit_code}, level="error")
        return exc.exit_code

    record_event(
        SETTINGS,
        "scaffold.complete",
        {"template": selection.template, "source": str(result.locator), "installed": result.installed},
    )
    _print_summary(console, result)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    sys.exit(main())
