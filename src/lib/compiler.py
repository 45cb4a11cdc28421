"""
Compiler for #DCECOMP component markup

Drives the markup pipeline over a set of candidate files and feeds every
valid component definition into the component registry.

Per file (independent of all other files):
    read -> comment filter (scripts) -> scan -> extract -> decode
         -> validate -> upsert

Problems never stop the pass: unreadable files, invalid JSON and schema
violations are collected and reported together at the end.
"""

from concurrent.futures import ThreadPoolExecutor
from contextvars import copy_context
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from loguru import logger

from ..models.components import ComponentDefinition
from ..models.parser import SourceFile
from ..models.problems import ComponentSchemaError, Problem
from .log import LOG, problems_report
from .parser import MarkupParser
from .registry import ComponentRegistry
from .schema import component_validate


@dataclass
class FileResult:
    """
    Outcome of processing one file

    Attributes:
        path: Source file path
        definitions: Valid component definitions in source order
        problems: Problems found in the file
    """
    path: str
    definitions: List[ComponentDefinition] = field(default_factory=list)
    problems: List[Problem] = field(default_factory=list)


class MarkupCompiler:
    """
    Compiles #DCECOMP markup from source files into registry entries

    Responsibilities:
    - Read candidate files and pick the scanning mode per extension
    - Run parser and schema validator per occurrence
    - Upsert valid definitions in a stable (lexical path) order
    - Collect and report all problems
    """

    def __init__(
        self,
        registry: Optional[ComponentRegistry] = None,
        project_root: Optional[Union[str, Path]] = None,
        workers: Optional[int] = None,
        marker: Optional[str] = None,
        category: Optional[str] = None,
    ) -> None:
        """
        Initialize compiler

        Args:
            registry: Registry to upsert into (a new one if None)
            project_root: Root that default import paths are relative to
            workers: Threads used to process files (configured value if None)
            marker: Marker token (configured value if None)
            category: Registry category (configured value if None)
        """
        from ..config import appsettings

        self.registry = registry if registry is not None else ComponentRegistry()
        self.project_root = str(project_root) if project_root is not None else None
        self.workers = workers if workers is not None else appsettings.workers
        self.marker = marker if marker is not None else appsettings.marker
        self.category = category if category is not None else appsettings.registry_category
        self.upsert_count = 0

    def compile(self, paths: Iterable[Union[str, Path]]) -> List[Problem]:
        """
        Compile all markup found in `paths`

        Files are handled in lexical path order, so when two occurrences
        share a component name the one processed last wins, whatever the
        number of workers.

        Args:
            paths: Candidate file paths (from file discovery)

        Returns:
            All problems found, in processing order
        """
        try:
            ordered = sorted(str(path) for path in paths)
            LOG(f"Compiling markup from {len(ordered)} file(s)", level=2)

            if self.workers > 1 and len(ordered) > 1:
                # Each task runs in a copy of this context so LOG keeps its verbosity
                contexts = [copy_context() for _ in ordered]
                with ThreadPoolExecutor(max_workers=self.workers) as pool:
                    results = list(pool.map(
                        lambda context, path: context.run(self.file_process, path),
                        contexts,
                        ordered,
                    ))
            else:
                results = [self.file_process(path) for path in ordered]

            problems: List[Problem] = []
            for result in results:
                problems.extend(result.problems)
                for definition in result.definitions:
                    self.definition_upsert(definition)

            problems_report(problems)
            LOG(
                f"{self.upsert_count} component(s) registered, {len(problems)} problem(s)",
                level=2,
            )
            return problems

        except Exception as e:
            logger.exception("Markup compilation aborted")
            return [Problem(str(e), "")]

    def file_process(self, path: str) -> FileResult:
        """
        Run the whole pipeline for one file

        Any failure past the read is recorded against the file, so one file
        never stops the others.

        Args:
            path: Source file path

        Returns:
            FileResult with the valid definitions and the problems
        """
        from ..config import appsettings

        result = FileResult(path=path)

        try:
            # newline='' keeps \r and \r\n so offsets stay file offsets
            with open(path, encoding='utf-8', newline='') as handle:
                source_file = SourceFile(
                    path=path,
                    kind=appsettings.sourceKind_resolve(path),
                    text=handle.read(),
                )
        except (OSError, UnicodeDecodeError) as e:
            result.problems.append(Problem(str(e), path))
            return result

        LOG(f"Read {len(source_file.text)} characters from {path}", level=3)

        try:
            parsed = MarkupParser(
                source_file.text,
                source_file.path,
                kind=source_file.kind,
                marker=self.marker,
                project_root=self.project_root,
            ).parse()
            result.problems.extend(parsed.problems)

            for markup in parsed.markups:
                try:
                    result.definitions.append(component_validate(markup))
                except ComponentSchemaError as cse:
                    result.problems.append(cse.problem())
        except Exception as e:
            logger.opt(exception=e).debug(f"{path}: processing failed")
            result.problems.append(Problem(str(e), path))

        return result

    def definition_upsert(self, definition: ComponentDefinition) -> None:
        """Push one definition into the registry (set or overwrite)"""
        key = definition.componentName
        self.registry.upsert(key, definition, category=self.category, visibleInMenu=True)
        self.upsert_count += 1
        LOG(f"Registered component '{key}' from {definition.importPath}", level=2)


def markup_compile(
    paths: Iterable[Union[str, Path]],
    registry: Optional[ComponentRegistry] = None,
    project_root: Optional[Union[str, Path]] = None,
) -> List[Problem]:
    """Compile markup from `paths` into `registry` and return the problems"""
    return MarkupCompiler(registry=registry, project_root=project_root).compile(paths)
