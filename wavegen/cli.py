"""CLI entrypoints for wavegen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .errors import EntityNotFound, LookupFailure, ParseError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_folder_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f",
        "--folder",
        required=True,
        type=Path,
        help="Folder searched recursively for VHDL sources.",
    )


def _add_keep_going_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Skip files that fail to parse instead of aborting.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wavegen",
        description="Generate GTKWave display scripts from annotated VHDL testbenches.",
    )
    _add_verbose_option(parser)
    parser.add_argument("--log-file", type=Path, default=None, help="Also write debug logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write the TCL script for one testbench entity.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_folder_option(generate_parser)
    generate_parser.add_argument(
        "-t",
        "--testbench",
        required=True,
        help="Name of the entity whose signals are displayed.",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        required=True,
        type=Path,
        help="Path of the generated TCL script.",
    )
    generate_parser.add_argument(
        "--prefix",
        default=None,
        help="Hierarchy prefix for signal names; '{entity}' expands to the testbench name.",
    )
    generate_parser.add_argument(
        "--zoom-fit",
        action="store_true",
        default=None,
        help="Zoom to fit the whole trace after loading signals.",
    )
    _add_keep_going_option(generate_parser)

    list_parser = subparsers.add_parser(
        "list",
        help="List the entities found under a folder.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_folder_option(list_parser)
    _add_keep_going_option(list_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for wavegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()

    if args.command == "generate":
        try:
            outcome = orchestrator.run_generate(
                args.folder,
                args.testbench,
                args.output,
                keep_going=bool(args.keep_going),
                zoom_fit=args.zoom_fit,
                signal_prefix=args.prefix,
            )
        except EntityNotFound:
            parser.exit(1, "Could not find the entity.\n")
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, ParseError, LookupFailure) as exc:
            parser.exit(1, f"wavegen generate failed: {exc}\nRun with --verbose for more details.\n")
        print("Found the testbench.")
        print(f"Generated {_relativize(outcome.path)}.")
    elif args.command == "list":
        try:
            summaries = orchestrator.run_list(args.folder, keep_going=bool(args.keep_going))
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, ParseError) as exc:
            parser.exit(1, f"wavegen list failed: {exc}\nRun with --verbose for more details.\n")
        if not summaries:
            print("No entities found.")
        for summary in summaries:
            architecture = summary.architecture or "-"
            print(
                f"{summary.name}\t{architecture}\t{summary.signal_count} signals\t{_relativize(summary.path)}"
            )
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
