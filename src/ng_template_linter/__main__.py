from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .config import LinterConfig
from .config import load_config
from .config import select_rules
from .logging import LogConfig
from .logging import configure_logging
from .reporting import JsonSerializer
from .reporting import ScanReport
from .reporting import diagnostic_model
from .reporting import print_diagnostics
from .resources import COMPONENT_SUFFIXES
from .resources import TemplateSource
from .resources import iter_template_files
from .resources import load_component_templates
from .resources import load_external_template
from .validation.rules import DEPRECATION_RULES
from .validation.template import scan

EXIT_CLEAN = 0
EXIT_DIAGNOSTICS = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ng-template-linter",
        description=(
            "Report deprecated Angular Material API usages in Angular "
            "templates and component files."
        ),
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help=(
            "Template files, component files (*.ts) or directories to scan "
            "(directories are searched for *.html)."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="TOML config file (a pyproject.toml or a standalone file).",
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="RULE",
        help="Disable a rule by name. Can be given more than once.",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default=None,
        help="Output format (overrides the config file).",
    )
    parser.add_argument(
        "--show-source",
        action="store_true",
        help="Show the offending source line under each text diagnostic.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output to stderr.",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="Print the available rules and exit.",
    )
    return parser


def _load_templates(path: Path) -> list[TemplateSource]:
    if path.suffix.lower() in COMPONENT_SUFFIXES:
        return load_component_templates(path)
    fragment = load_external_template(path)
    return [TemplateSource(fragment, fragment.text)]


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = console or Console()

    if args.list_rules:
        for rule in DEPRECATION_RULES:
            console.print(f"{rule.name}: {rule.message.render()}", markup=False)
        return EXIT_CLEAN

    if not args.paths:
        parser.print_usage(sys.stderr)
        return EXIT_ERROR

    try:
        config = load_config(args.config) if args.config else LinterConfig()
        config.disabled_rules.extend(args.disable)
        rules = select_rules(config)
    except (OSError, ValueError) as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        return EXIT_ERROR

    log_level = logging.DEBUG if args.verbose else config.log_level
    logger = configure_logging(LogConfig(log_level=log_level))
    output_format = args.format or config.output_format

    report = ScanReport()
    for root in args.paths:
        if not root.exists():
            console.print(f"[red]✗[/red] Path not found: {escape(str(root))}")
            return EXIT_ERROR
        for path in iter_template_files(root):
            try:
                templates = _load_templates(path)
            except (OSError, UnicodeDecodeError) as e:
                reason = escape(str(e))
                console.print(
                    f"[red]✗[/red] Could not read {escape(str(path))}: {reason}"
                )
                return EXIT_ERROR
            report.files += 1
            for template in templates:
                diagnostics = scan(template.fragment, rules)
                logger.debug(
                    "Scanned %s (%s): %d diagnostic(s)",
                    template.fragment.path,
                    template.fragment.kind.name.lower(),
                    len(diagnostics),
                )
                if output_format == "text":
                    print_diagnostics(
                        console,
                        diagnostics,
                        template.source,
                        show_source=args.show_source,
                    )
                report.diagnostics.extend(
                    diagnostic_model(d, template.source) for d in diagnostics
                )

    if output_format == "json":
        console.print(
            JsonSerializer().encode(report).decode(),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    else:
        found = len(report.diagnostics)
        console.print(
            f"{found} deprecation(s) found in {report.files} file(s).",
            style="bold" if found else "green",
        )

    return EXIT_DIAGNOSTICS if report.has_diagnostics else EXIT_CLEAN


if __name__ == "__main__":
    raise SystemExit(main())
