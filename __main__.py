"""CLI entry point for gridwire.

This module acts as the central entry point for the project's CLI tools.
It delegates commands to the compilation pipeline or runs specific tasks.
"""

import argparse
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

from gridwire.config import EnvVar, get_environment, get_image_base_dir
from gridwire.core import get_logger, setup_logging
from gridwire.errors import GridwireError
from gridwire.lexer import TokenType, tokenize
from gridwire.parser import parse
from gridwire.render import render
from gridwire.themes import DEFAULT_THEME, get_theme, list_themes

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


def _read_source(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Cannot read {path}: {e}")
        return None


def _report(error: GridwireError) -> int:
    """Print a located error with its source excerpt."""
    indent = get_environment(EnvVar.EXCERPT_INDENT)
    print(f"{error.kind} error: {error.format(indent=indent)}", file=sys.stderr)
    return 1


# =============================================================================
# Compile Command
# =============================================================================


def cmd_compile(args: argparse.Namespace) -> int:
    """Handle the compile command."""
    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        document = parse(source)
    except GridwireError as e:
        return _report(e)

    base_path = None
    if get_environment(EnvVar.EMBED_IMAGES) and not args.no_images:
        base_path = get_image_base_dir(source_path=args.file, override=args.base_dir)
    svg_text = render(document, base_path=base_path)

    if args.output == "-":
        sys.stdout.write(svg_text)
        return 0

    suffix = get_environment(EnvVar.OUTPUT_SUFFIX)
    output = Path(args.output) if args.output else args.file.with_suffix(suffix)
    try:
        output.write_text(svg_text, encoding="utf-8")
    except OSError as e:
        logger.error(f"Cannot write {output}: {e}")
        return 1

    logger.info(f"Wrote {output} ({len(document.components)} components)")
    return 0


def handle_compile_command(argv: list[str]) -> int:
    """Handle compile command with argument parsing."""
    parser = argparse.ArgumentParser(
        prog="python . compile",
        description="Compile a gridwire source file to SVG",
    )
    parser.add_argument("file", type=Path, help="Source file")
    parser.add_argument(
        "-o",
        "--output",
        help="Output path ('-' for stdout, default: source path with .svg suffix)",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        help="Directory for relative img sources (default: source directory)",
    )
    parser.add_argument(
        "--no-images",
        action="store_true",
        help="Draw placeholders instead of embedding img sources",
    )
    return cmd_compile(parser.parse_args(argv))


# =============================================================================
# Check Command
# =============================================================================


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the check command."""
    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        document = parse(source)
    except GridwireError as e:
        return _report(e)

    metadata = document.metadata
    print(
        f"{args.file}: OK ({len(document.components)} components, "
        f"{metadata.cols}x{metadata.rows} grid, "
        f"{metadata.ratio[0]}:{metadata.ratio[1]})"
    )
    return 0


def handle_check_command(argv: list[str]) -> int:
    """Handle check command with argument parsing."""
    parser = argparse.ArgumentParser(
        prog="python . check",
        description="Parse and validate a gridwire source file",
    )
    parser.add_argument("file", type=Path, help="Source file")
    return cmd_check(parser.parse_args(argv))


# =============================================================================
# Tokens Command
# =============================================================================


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command."""
    source = _read_source(args.file)
    if source is None:
        return 1

    try:
        tokens = tokenize(source)
    except GridwireError as e:
        return _report(e.with_source(source))

    for token in tokens:
        value = "" if token.type in (TokenType.NEWLINE, TokenType.EOF) else token.value
        print(f"{str(token.location):>7}  {token.type.name:<11} {value}")
    return 0


def handle_tokens_command(argv: list[str]) -> int:
    """Handle tokens command with argument parsing."""
    parser = argparse.ArgumentParser(
        prog="python . tokens",
        description="Dump the token stream of a gridwire source file",
    )
    parser.add_argument("file", type=Path, help="Source file")
    return cmd_tokens(parser.parse_args(argv))


# =============================================================================
# Themes Command
# =============================================================================


def cmd_themes() -> int:
    """List theme presets."""
    print(f"{'Theme':<10} {'Stroke':>6} {'Radius':>6} {'Font':>5}  Background")
    for name in list_themes():
        theme = get_theme(name)
        marker = " (default)" if name == DEFAULT_THEME else ""
        print(
            f"{name:<10} {theme.stroke_width:>6g} {theme.border_radius:>6g} "
            f"{theme.font_size:>5g}  {theme.default_bg}{marker}"
        )
    return 0


# =============================================================================
# Test Command
# =============================================================================


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments and test tier options.

    Usage:
        python . test                # Run all tests
        python . test --unit         # Run only unit tests (fast, no I/O)
        python . test --integration  # Run integration tests (file system)
        python . test --all          # Run all tests explicitly
        python . test -v             # Run with verbose output
        python . test -k "parser"    # Run tests matching pattern

    Test Tiers:
        unit        - Pure tests with no I/O
        integration - Tests touching the file system or spawning the CLI
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--integration": ["-m", "integration"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []

    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python . {command} [args]")
    print("\n=== Compilation ===")
    print("  compile    Compile a source file to SVG")
    print("  check      Parse and validate a source file")
    print("  tokens     Dump the token stream of a source file")
    print("  themes     List theme presets")
    print("\n=== Development ===")
    print("  test       Run pytest with tier options")
    print("\nExamples:")
    print("  python . compile wireframe.gw              # Writes wireframe.svg")
    print("  python . compile wireframe.gw -o -         # SVG to stdout")
    print("  python . compile page.gw --base-dir assets # Resolve images in assets/")
    print("  python . check wireframe.gw")
    print("  python . test --unit")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        show_help()
        return 1

    command = args[0]
    rest_args = args[1:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "compile": lambda: handle_compile_command(rest_args),
        "check": lambda: handle_check_command(rest_args),
        "tokens": lambda: handle_tokens_command(rest_args),
        "themes": cmd_themes,
        "test": lambda: cmd_test(rest_args),
    }

    if command in commands:
        setup_logging(get_environment(EnvVar.LOG_LEVEL))
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
