"""
Command-line interface for protgen.

Usage:
    protgen generate [source] [--preset <file>] [--prefix <prefix>] [-o <output>]
    protgen tokens <source> [--json]
    protgen parse <source> [--json]
    protgen preset new <file> [--source <source>]
    protgen preset show <file> [--json]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from protgen import __version__
from protgen.core.generator import GeneratorConfig, generate
from protgen.core.parser import parse_prototypes
from protgen.core.preset import Preset
from protgen.core.tokenizer import tokenize
from protgen.errors import ProtGenError

logger = logging.getLogger(__name__)

# (flag, attribute, option name, help)
OPTION_FLAGS = [
    ("--prefix", "prefix", "Prefix", "Prefix for signature macros and typedefs"),
    ("--load-macro", "load_macro", "LoadMacro", "Macro resolving a library symbol"),
    ("--lib-handle", "load_lib_handle", "LoadLibHandle", "Library handle expression"),
    ("--lib-name", "load_lib_name", "LoadLibName", "Library name expression"),
    (
        "--field-prefix",
        "load_lib_field_prefix",
        "LoadLibFieldPrefix",
        "Prefix of the field receiving each function pointer",
    ),
]


def _add_option_arguments(parser: argparse.ArgumentParser) -> None:
    for flag, dest, _option, help_text in OPTION_FLAGS:
        parser.add_argument(flag, dest=dest, help=help_text)


def _option_overrides(args: argparse.Namespace) -> dict[str, str]:
    """Collect option values given explicitly on the command line."""
    overrides = {}
    for _flag, dest, option, _help in OPTION_FLAGS:
        value = getattr(args, dest, None)
        if value is not None:
            overrides[option] = value
    return overrides


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="protgen",
        description="Generate dynamic-loading boilerplate from C function prototypes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate code for prototypes in a header snippet
  protgen generate ./prototypes.h --prefix MYLIB__FUNC_

  # Generate from stdin using a saved preset
  echo "int add(int a, int b)" | protgen generate - --preset win32.preset

  # Show how a declaration is tokenized
  protgen tokens ./prototypes.h

  # Save the default options and some sources as a preset
  protgen preset new win32.preset --source ./prototypes.h
""",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"protgen {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate code from function prototypes",
        description="Render prototypes, declarations and load statements.",
    )
    generate_parser.add_argument(
        "source",
        nargs="?",
        help="File with prototypes, or '-' for stdin (default: preset sources)",
    )
    generate_parser.add_argument(
        "--preset",
        type=Path,
        help="Preset file supplying options and, without a source, prototypes",
    )
    _add_option_arguments(generate_parser)
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write generated code to this file instead of stdout",
    )

    # tokens command
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Show the token stream of a source",
        description="Tokenize prototype source and print each token.",
    )
    tokens_parser.add_argument(
        "source",
        help="File with prototypes, or '-' for stdin",
    )
    tokens_parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    # parse command
    parse_parser = subparsers.add_parser(
        "parse",
        help="Show parsed function prototypes",
        description="Parse prototype source and print the prototype records.",
    )
    parse_parser.add_argument(
        "source",
        help="File with prototypes, or '-' for stdin",
    )
    parse_parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    # preset command
    preset_parser = subparsers.add_parser(
        "preset",
        help="Create or inspect preset files",
        description="Manage presets bundling options with example sources.",
    )
    preset_subparsers = preset_parser.add_subparsers(
        dest="preset_command", help="Preset commands"
    )

    new_parser = preset_subparsers.add_parser(
        "new",
        help="Write a new preset",
        description="Write a preset from the default options and given overrides.",
    )
    new_parser.add_argument(
        "preset_path",
        type=Path,
        help="Preset file to create",
    )
    new_parser.add_argument(
        "--source",
        help="File with prototypes to store in the preset, or '-' for stdin",
    )
    new_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing preset file",
    )
    _add_option_arguments(new_parser)

    show_parser = preset_subparsers.add_parser(
        "show",
        help="Print a preset",
        description="Print the settings and sources of a preset.",
    )
    show_parser.add_argument(
        "preset_path",
        type=Path,
        help="Preset file to read",
    )
    show_parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    return parser


def read_source(source: str) -> str:
    """Read prototype source from a file path, or stdin for '-'."""
    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.is_file():
        raise ProtGenError(f"Source file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ProtGenError(f"Cannot read source {path}: {e}") from e


def cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate command."""
    config = GeneratorConfig.defaults()
    source_text = None

    try:
        if args.preset:
            preset = Preset.load(args.preset)
            config = config.merged(preset.properties)
            source_text = preset.source_text
        if args.source:
            source_text = read_source(args.source)
    except ProtGenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if source_text is None:
        print("Error: No source given (pass a file, '-' or --preset)", file=sys.stderr)
        return 1

    config = config.merged(_option_overrides(args))

    errors = config.validate()
    if errors:
        print("Configuration errors:", file=sys.stderr)
        for err in errors:
            print(f"  - {err}", file=sys.stderr)
        return 1

    output = generate(source_text, config)
    failed = output.startswith("Error: ")

    if failed:
        print(output, end="", file=sys.stderr)
        return 1

    if args.output:
        try:
            args.output.write_text(output, encoding="utf-8")
        except OSError as e:
            print(f"Error: Cannot write output {args.output}: {e}", file=sys.stderr)
            return 1
        print(f"Generated code written to: {args.output}")
    else:
        print(output, end="")

    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command."""
    try:
        tokens = tokenize(read_source(args.source))
    except ProtGenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([tok.to_dict() for tok in tokens], indent=2))
    else:
        for tok in tokens:
            print(f"{tok.line}:{tok.column}\t{tok.kind.name}\t{tok.value}")

    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle the parse command."""
    try:
        prototypes = parse_prototypes(tokenize(read_source(args.source)))
    except ProtGenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([proto.to_dict() for proto in prototypes], indent=2))
    else:
        if not prototypes:
            print("(no prototypes)")
        for proto in prototypes:
            print(f"Function: {proto.name}")
            print(f"  Returns: {' '.join(proto.returns) if proto.returns else '(none)'}")
            for index, arg in enumerate(proto.args):
                print(f"  Arg {index}: {' '.join(arg) if arg else '(empty)'}")

    return 0


def cmd_preset_new(args: argparse.Namespace) -> int:
    """Handle the preset new command."""
    preset_path = args.preset_path

    if preset_path.exists() and not args.force:
        print(
            f"Error: Preset already exists: {preset_path} (use --force)",
            file=sys.stderr,
        )
        return 1

    config = GeneratorConfig.defaults().merged(_option_overrides(args))
    errors = config.validate()
    if errors:
        print("Configuration errors:", file=sys.stderr)
        for err in errors:
            print(f"  - {err}", file=sys.stderr)
        return 1

    try:
        source = read_source(args.source) if args.source else None
        preset = Preset.from_config(config, source)
        preset.save(preset_path)
    except ProtGenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Preset written to: {preset_path}")
    print(f"  Settings: {len(preset.properties)}")
    print(f"  Source lines: {len(preset.sources)}")
    return 0


def cmd_preset_show(args: argparse.Namespace) -> int:
    """Handle the preset show command."""
    try:
        preset = Preset.load(args.preset_path)
    except ProtGenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(preset.to_dict(), indent=2))
    else:
        print(f"Preset: {args.preset_path}")
        print("  Settings:")
        for key, value in preset.properties.items():
            print(f"    {key}={value}")
        print("  Sources:")
        if preset.sources:
            for line in preset.sources:
                print(f"    {line}")
        else:
            print("    (none)")

    return 0


def cmd_preset(args: argparse.Namespace) -> int:
    """Dispatch preset subcommands."""
    handlers = {
        "new": cmd_preset_new,
        "show": cmd_preset_show,
    }
    handler = handlers.get(args.preset_command)
    if handler is None:
        print("Error: Expected a preset command: new, show", file=sys.stderr)
        return 1
    return handler(args)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "generate": cmd_generate,
        "tokens": cmd_tokens,
        "parse": cmd_parse,
        "preset": cmd_preset,
    }

    handler = commands.get(args.command)
    if handler:
        logger.debug("Running command %r", args.command)
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
