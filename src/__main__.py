#!/usr/bin/env python3
"""
dcecomp - Component markup compiler

Scans a project for custom component definitions and compiles them into a
component catalog.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Markup:
    Authors announce a component with the #DCECOMP marker followed by one
    JSON object, either inside a comment of a .js/.ts file or anywhere in a
    .dcecomp file:

        /* #DCECOMP {
             "class": "Door",
             "properties": [
               { "name": "speed", "type": "number", "default": 1.5 }
             ]
           } */

    In scripts "import-file" defaults to the script's own path relative to
    the project root (without extension).

Usage:
    dcecomp inputdir/ outputdir/

    All components found under inputdir/ are written to
    outputdir/components.json; problems go to outputdir/problems.txt.

Examples:
    # Basic compilation
    dcecomp . output/

    # Four worker threads, verbose output
    dcecomp . output/ --workers 4 -vv
"""

import json
import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import MarkupCompiler, ComponentRegistry, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
      _
   __| | ___ ___  ___ ___  _ __ ___  _ __
  / _` |/ __/ _ \/ __/ _ \| '_ ` _ \| '_ \
 | (_| | (_|  __/ (_| (_) | | | | | | |_) |
  \__,_|\___\___|\___\___/|_| |_| |_| .__/
                                    |_|
  Component markup compiler
"""

# Define CLI arguments
parser = ArgumentParser(
    description="dcecomp - compile #DCECOMP component markup into a component catalog",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--outputFile",
    default="components.json",
    type=str,
    help="Component catalog filename (relative to outputdir)",
)

parser.add_argument(
    "--problemsFile",
    default="problems.txt",
    type=str,
    help="Problems report filename (relative to outputdir)",
)

parser.add_argument(
    "--workers",
    default=None,
    type=int,
    help="Threads used to process files. Defaults to DCECOMP_WORKERS or 1",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment.

    Verifies that the input directory exists and creates the output
    directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with envOK set

    Exits:
        1 if the input directory is missing
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Project root: {state.inputdir}", level=2)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def files_enumerate(root: Path, extensions: List[str]) -> List[Path]:
    """
    List all files below `root` with one of `extensions`, lexically sorted.

    Args:
        root: Directory to search recursively
        extensions: File extensions including the dot (e.g., ".ts")

    Returns:
        Sorted list of matching file paths
    """
    wanted = {ext.lower() for ext in extensions}
    return sorted(
        path for path in root.rglob("*")
        if path.is_file() and path.suffix.lower() in wanted
    )


def sources_find(inputstate: ProgramState) -> ProgramState:
    """
    Discover candidate files under the project root.

    Args:
        inputstate: Program state with a validated inputdir

    Returns:
        ProgramState with added field:
            - candidateFiles: Script and markup files to scan
    """

    state = inputstate.copy()

    LOG("Searching for candidate files...", level=1)
    state.candidateFiles = files_enumerate(state.inputdir, appsettings.candidateExtensions_list())
    LOG(f"Found {len(state.candidateFiles)} candidate file(s)", level=2)
    return state


def markup_compile(inputstate: ProgramState) -> ProgramState:
    """
    Compile all markup in the candidate files into a component registry.

    Args:
        inputstate: Program state with candidateFiles

    Returns:
        ProgramState with added fields:
            - registry: ComponentRegistry with all valid components
            - problems: List of problems found
    """

    state = inputstate.copy()

    LOG("Compiling component markup...", level=1)

    state.registry = ComponentRegistry()
    compiler = MarkupCompiler(
        registry=state.registry,
        project_root=state.inputdir,
        workers=state.workers,
    )
    state.problems = compiler.compile(state.candidateFiles)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Write the component catalog and the problems report.

    Args:
        inputstate: Program state with registry and problems populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if no registry is available
    """
    state: ProgramState = inputstate.copy()
    if state.registry is None:
        print("Error: Compilation failed", file=sys.stderr)
        sys.exit(1)

    catalog = [
        {
            "category": entry.category,
            "visibleInMenu": entry.visibleInMenu,
            "definition": entry.definition.asDict(),
        }
        for entry in state.registry.entries_list()
    ]
    catalog_file = state.outputdir / state.outputFile
    catalog_file.write_text(json.dumps(catalog, indent=2) + "\n", encoding="utf-8")

    problems_file = state.outputdir / state.problemsFile
    problems_file.write_text("".join(f"{problem}\n" for problem in state.problems), encoding="utf-8")

    if state.verbosity >= 1:
        LOG("\n✓ Compilation finished", level=1)
        LOG(f"  Components: {len(catalog)} -> {catalog_file}", level=1)
        LOG(f"  Problems:   {len(state.problems)} -> {problems_file}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="dcecomp - Component markup compiler",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile component markup found under inputdir.

    Orchestrates the full compilation pipeline:
        1. env_check: Validate paths and environment
        2. sources_find: Discover .js/.ts/.dcecomp files
        3. markup_compile: Extract, validate and register components
        4. results_report: Write catalog and problems report

    Args:
        options: CLI arguments from argparse
        inputdir: Project root to scan
        outputdir: Directory where the catalog will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, sources_find, markup_compile, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
