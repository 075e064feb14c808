"""
Command line entry point for rtype-maped.
Usage: python -m rtype_maped <command> ...
"""

import argparse
import logging
import sys
from typing import List, Optional

import orjson

from . import __version__
from .levels.exporter import LevelExporter
from .registry.resolver import TypeRegistryResolver
from .settings import AppSettings
from .utils.logging_config import setup_logging

logger = logging.getLogger(f"{__name__}.main")


def _cmd_export(args: argparse.Namespace, settings: AppSettings) -> int:
    exporter = LevelExporter(
        settings,
        server_config_path=args.server_config,
        client_config_path=args.client_config,
    )
    opened = exporter.open_editor_file(args.level)
    if not opened.parsed:
        logger.error(f"Cannot export {args.level}: level could not be read")
        return 1

    report = exporter.export_runtime_levels(opened.document, args.output_dir)
    for result in (report.server, report.client):
        status = "OK" if result.ok else f"FAILED ({result.error})"
        print(f"{status}: {result.path}")
    return 0 if report.ok else 1


def _cmd_convert(args: argparse.Namespace, settings: AppSettings) -> int:
    exporter = LevelExporter(settings)
    opened = exporter.open_editor_file(args.level)
    if not opened.parsed:
        logger.error(f"Cannot convert {args.level}: level could not be read")
        return 1

    saved = exporter.save_editor_file(opened.document, args.output)
    if not saved.ok:
        print(f"FAILED ({saved.error}): {saved.path}")
        return 1
    print(f"OK: {saved.path}")
    return 0


def _cmd_registry(args: argparse.Namespace, settings: AppSettings) -> int:
    resolver = TypeRegistryResolver()
    forward = resolver.load_forward(args.config)
    inverse = resolver.invert(forward.refs)

    payload = {
        "source": str(forward.source),
        "forward": forward.refs,
        "inverse": {str(ref): name for ref, name in sorted(inverse.names.items())},
        "diagnostics": [d.message for d in (*forward.diagnostics, *inverse.diagnostics)],
    }
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))
    sys.stdout.write("\n")
    return 0 if forward.loaded else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rtype-maped", description="R-Type level serialization tools"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd", required=True)

    export = sub.add_parser("export", help="Write server and client levels from an editor file")
    export.add_argument("level", help="Editor level file (wave or legacy shape)")
    export.add_argument("--output-dir", default=None, help="Directory for the exported files")
    export.add_argument("--server-config", default=None, help="Server game config path")
    export.add_argument("--client-config", default=None, help="Client game config path")
    export.set_defaults(func=_cmd_export)

    convert = sub.add_parser("convert", help="Re-encode an editor file in the current shape")
    convert.add_argument("level", help="Editor level file to read")
    convert.add_argument("output", help="Editor level file to write")
    convert.set_defaults(func=_cmd_convert)

    registry = sub.add_parser("registry", help="Show the type registry of a game config")
    registry.add_argument("config", help="Game config JSON")
    registry.set_defaults(func=_cmd_registry)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    try:
        settings = AppSettings()
        setup_logging(settings)
        logger.debug(f"Configuration loaded from {settings.file_path}")

        validation = settings.validate()
        for warning in validation.warnings:
            logger.debug(f"Configuration warning: {warning}")
        if not validation.is_valid:
            logger.error("Configuration validation failed:")
            for error in validation.errors:
                logger.error(f"  {error}")
            return 1

        return args.func(args, settings)

    except Exception:
        logger.exception("Unhandled exception in main")
        return 1


if __name__ == "__main__":
    sys.exit(main())
