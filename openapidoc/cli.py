"""CLI entrypoints for openapidoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import OpenAPIDocError
from .generator import Generator
from .logging import configure_logging
from .output import render_document
from .validation import validate_openapi_doc


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openapidoc",
        description="Generate OpenAPI 3 documents from @openapi annotated docstrings.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Merge annotated fragments with the base definition into one document.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the source root (defaults to current directory).",
    )
    generate_parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a .openapidoc.yml file (defaults to the one in the source root).",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the document to this file instead of stdout.",
    )
    generate_parser.add_argument(
        "-f",
        "--format",
        choices=("json", "yaml"),
        default=None,
        help="Output format (defaults to the configured format, or json).",
    )
    generate_parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Skip OpenAPI structural validation of the merged document.",
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate an existing OpenAPI document (JSON or YAML).",
    )
    _add_verbose_option(validate_parser, suppress_default=True)
    validate_parser.add_argument("file", type=Path, help="Document to validate.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for openapidoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    if args.command == "generate":
        generator = Generator()
        try:
            result = generator.run_and_write(
                args.path,
                output=args.output,
                fmt=args.format,
                validate=False if args.skip_validation else None,
                config_path=args.config,
            )
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except OpenAPIDocError as exc:
            parser.exit(1, f"openapidoc generate failed: {exc}\nRun with --verbose for more details.\n")
        if result.output_path is not None:
            print(f"OpenAPI document written to {_relativize(result.output_path)}")
        else:
            print(render_document(result.document, result.format, indent=2))
    elif args.command == "validate":
        try:
            validate_openapi_doc(args.file.read_bytes())
        except OSError as exc:
            parser.exit(1, f"{exc}\n")
        except OpenAPIDocError as exc:
            parser.exit(1, f"{exc}\n")
        print(f"{args.file} is a valid OpenAPI 3 document")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
