#!/usr/bin/env python3
"""
neonlight - Incremental syntax highlighting engine

Command line front end: highlight one file with the editor's pattern tables
and themes, and print the result.

Philosophy:
    - Same rules everywhere: the CLI uses exactly the tables the editor uses
    - Best-effort lexical colouring, not parsing
    - Oversized files are passed through uncoloured rather than slowing down

Usage:
    neonlight FILE [--language LANG] [--theme NAME] [--scheme light|dark]
                   [--format terminal|html|spans|outline]

Examples:
    # Colour a Swift file in the terminal
    neonlight Sources/App.swift

    # Standalone HTML with the dark palette
    neonlight script.py --scheme dark --format html > script.html

    # Inspect the raw spans
    neonlight notes.md --format spans -vv

    # Table of contents
    neonlight main.c --format outline
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from .config import appsettings
from .lib import LOG, state_connectToLogger, __version__
from .lib.outline import outline_build
from .lib.render import RENDER_FORMATS, document_render
from .lib.theme import ThemeError, theme_load
from .lib.tokenizer import Tokenizer
from .models import ProgramState, pipeline, Snapshot, language_detect, language_resolve
from .models.language import Language


# Define CLI arguments
parser = ArgumentParser(
    description="neonlight - regex-driven syntax highlighting for editor documents",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument("inputFile", type=str, help="File to highlight")

parser.add_argument(
    "--language",
    default=None,
    type=str,
    help="Language identifier (swift, python, ...). Detected from the file name if omitted",
)

parser.add_argument("--theme", default=appsettings.default_theme, type=str, help="Theme name")

parser.add_argument(
    "--themesDir",
    default=appsettings.themes_dir,
    type=str,
    help="Directory containing <theme>/theme.yaml definitions",
)

parser.add_argument(
    "--scheme",
    default=appsettings.color_scheme,
    choices=["light", "dark"],
    help="Colour scheme the theme is resolved for",
)

parser.add_argument(
    "--format",
    default="terminal",
    choices=[*RENDER_FORMATS, "outline"],
    help="Output format",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the input file and resolve language and theme.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the input file
            - resolvedLanguage: Forced or detected Language
            - resolvedTheme: Loaded Theme
            - envOK: True if environment is valid

    Exits:
        1 if the file is missing, the language is unknown or the theme fails to load
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = Path(state.inputFile)
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.inputSourceFile = input_file

    if state.language:
        state.resolvedLanguage = language_resolve(state.language)
        if state.resolvedLanguage is None:
            known = ", ".join(language.value for language in Language)
            print(f"Error: Unknown language '{state.language}' (known: {known})", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
    else:
        fallback = language_resolve(appsettings.default_language) or Language.PLAINTEXT
        state.resolvedLanguage = language_detect(input_file, default=fallback)
    LOG(f"Language: {state.resolvedLanguage.value}", level=2)

    try:
        state.resolvedTheme = theme_load(state.theme, state.scheme, state.themesDir)
    except ThemeError as e:
        print(f"Error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    LOG(f"Theme: {state.resolvedTheme!r}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the input file.

    Returns:
        ProgramState with added field:
            - sourceText: File contents

    Exits:
        1 if the file cannot be read or decoded
    """
    state = inputstate.copy()

    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def source_highlight(inputstate: ProgramState) -> ProgramState:
    """
    Tokenize and render the source text.

    Oversized sources are passed through uncoloured, exactly as the editor
    skips recolouring them.

    Returns:
        ProgramState with added fields:
            - spans: Computed spans (empty when bypassed or for outline output)
            - rendered: Text to print
    """
    state = inputstate.copy()

    if state.format == "outline":
        entries = outline_build(state.sourceText, state.resolvedLanguage)
        state.spans = []
        state.rendered = "\n".join(entry.label for entry in entries)
        LOG(f"Outline: {len(entries)} entries", level=2)
        return state

    tokenizer = Tokenizer(appsettings)
    result = tokenizer.snapshot_tokenize(
        Snapshot(text=state.sourceText, language=state.resolvedLanguage, theme=state.resolvedTheme)
    )
    state.spans = result.spans
    if result.bypassed:
        LOG("Source exceeds highlight limit, printing uncoloured", level=1)
        state.rendered = state.sourceText
        return state

    LOG(f"Computed {len(result.spans)} spans ({result.skipped_rules} rules skipped)", level=2)
    state.rendered = document_render(
        state.sourceText, state.resolvedLanguage, state.resolvedTheme, state.format, tokenizer
    )
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Write the rendered output to stdout.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()
    output = state.rendered
    sys.stdout.write(output if output.endswith("\n") or not output else output + "\n")
    LOG(f"Done: {state.inputSourceFile}", level=3)
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - highlight one file and print it.

    Orchestrates the pipeline:
        1. env_check: Validate file, resolve language and theme
        2. source_read: Read the file
        3. source_highlight: Tokenize and render
        4. results_report: Print the result

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        Process exit status (0 on success)
    """
    options: Namespace = parser.parse_args(argv)
    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_read, source_highlight, results_report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
