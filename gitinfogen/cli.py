"""CLI entrypoints for gitinfogen commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .config import CONFIG_FILENAME, ConfigError, GitInfoConfig, load_config
from .diagnostics import SourceLocation
from .emitter import CodeEmitter
from .generator import GitInformationGenerator
from .git.inspector import GitCommandQueries, RepositoryInspector
from .logging import configure_logging, get_logger
from .metadata import GitMetadata, MetadataExtractor
from .models import GeneratedUnit, TargetDescriptor
from .process import ProcessStartError

logger = get_logger("cli")


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


def _add_repository_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to .gitinfogen.yml (defaults to the one in the repository root).",
    )
    parser.add_argument(
        "--git",
        dest="git_executable",
        default=None,
        help="Git executable to invoke (overrides configuration and GITINFOGEN_GIT).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs, including diagnostics, to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitinfogen",
        description="Inject git branch, commit hash and tags into C# partial types.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate git information units for the configured targets.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_repository_options(generate_parser)
    generate_parser.add_argument("--target", default=None, help="Simple name of the type to extend.")
    generate_parser.add_argument("--namespace", default="", help="Namespace containing the target type.")
    generate_parser.add_argument(
        "--full-name",
        default="",
        help="Full identifier of the target used to name the artifact.",
    )
    generate_parser.add_argument("--kind", default="class", help="Type keyword (class, struct, record).")
    generate_parser.add_argument(
        "--type-parameter",
        dest="type_parameters",
        action="append",
        default=[],
        help="Generic parameter of the target type; repeat for each one.",
    )
    generate_parser.add_argument(
        "--location",
        type=_parse_location,
        default=None,
        help="Declaration position reported with warnings, as PATH:LINE:COL.",
    )
    generate_parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory receiving generated files (overrides configuration).",
    )
    generate_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print generated units instead of writing them.",
    )
    generate_parser.add_argument(
        "--warnings-as-errors",
        action="store_true",
        help="Exit with status 1 when a GITINFO01 warning is reported.",
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Print the git metadata that would be injected as JSON.",
    )
    _add_verbose_option(show_parser, suppress_default=True)
    _add_repository_options(show_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for gitinfogen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    repo_path = Path(args.path)
    if not repo_path.is_dir():
        parser.exit(1, f"{repo_path} is not a directory\n")
    try:
        config = load_config(Path(args.config) if args.config else repo_path / CONFIG_FILENAME)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    executable = args.git_executable or config.git.executable
    queries = GitCommandQueries(repo_path, executable=executable)

    if args.command == "generate":
        targets = _collect_targets(args, config)
        if not targets:
            parser.exit(1, "No targets to generate. Pass --target or list targets in .gitinfogen.yml.\n")
        output_dir = Path(args.output_dir) if args.output_dir else config.output.directory
        generator = GitInformationGenerator(
            queries,
            emitter=CodeEmitter(templates_dir=config.output.templates_dir),
        )
        warnings = 0
        try:
            for target in targets:
                result = generator.generate(target)
                for diagnostic in result.diagnostics:
                    print(diagnostic.format(), file=sys.stderr)
                warnings += len(result.diagnostics)
                if args.stdout:
                    print(f"// {result.unit.name}")
                    print(result.unit.text, end="")
                elif write_unit(result.unit, output_dir):
                    print(f"Generated {_relativize(output_dir / result.unit.name)}")
                else:
                    logger.info("%s already up to date", result.unit.name)
        except ProcessStartError as exc:
            parser.exit(1, f"gitinfogen generate failed: {exc}\n")
        if warnings and args.warnings_as_errors:
            parser.exit(1, f"{warnings} warning(s) treated as errors\n")
    elif args.command == "show":
        try:
            metadata = _show_metadata(queries)
        except ProcessStartError as exc:
            parser.exit(1, f"gitinfogen show failed: {exc}\n")
        print(json.dumps(metadata.to_dict(), indent=2))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def write_unit(unit: GeneratedUnit, directory: Path) -> bool:
    """Write ``unit`` into ``directory`` unless an identical file exists."""
    path = directory / unit.name
    if path.exists() and path.read_text(encoding="utf-8") == unit.text:
        return False
    directory.mkdir(parents=True, exist_ok=True)
    path.write_text(unit.text, encoding="utf-8")
    return True


def _collect_targets(args: argparse.Namespace, config: GitInfoConfig) -> List[TargetDescriptor]:
    targets: List[TargetDescriptor] = []
    if args.target:
        targets.append(
            TargetDescriptor(
                name=args.target,
                namespace=args.namespace,
                full_name=args.full_name,
                kind=args.kind,
                type_parameters=tuple(args.type_parameters),
                location=args.location,
            )
        )
    targets.extend(config.targets)
    return targets


def _parse_location(value: str) -> SourceLocation:
    path, sep_line, rest = value.rpartition(":")
    path, sep_col, line = path.rpartition(":")
    if not (sep_line and sep_col and path):
        raise argparse.ArgumentTypeError(f"expected PATH:LINE:COL, got {value!r}")
    try:
        return SourceLocation(path=path, line=int(line), column=int(rest))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected PATH:LINE:COL, got {value!r}") from exc


def _show_metadata(queries: GitCommandQueries) -> GitMetadata:
    inspector = RepositoryInspector(queries)
    if not inspector.is_usable():
        logger.warning("%s is not a usable git repository; fields are empty", queries.repo_path)
        return GitMetadata()
    return MetadataExtractor(inspector).extract()


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
