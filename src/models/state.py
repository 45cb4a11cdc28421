"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the compilation pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the compilation progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, outputFile, problemsFile, workers
        - env_check: envOK
        - sources_find: candidateFiles
        - markup_compile: registry, problems
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Project root that is searched for candidate files
        outputdir: Directory the component catalog is written to
        verbosity: Logging verbosity level (1-3)
        outputFile: Catalog filename (JSON, relative to outputdir)
        problemsFile: Problems report filename (relative to outputdir)
        workers: Threads used to process files (None = configured default)
        envOK: Environment validation passed
        candidateFiles: Files to scan, in lexical order
        registry: ComponentRegistry filled by compilation
        problems: Problems found by compilation
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    outputFile: str = field(default="components.json")
    problemsFile: str = field(default="problems.txt")
    workers: Optional[int] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    candidateFiles: List[Path] = field(default_factory=list)
    registry: Optional[Any] = field(default=None)  # ComponentRegistry at runtime
    problems: List[Any] = field(default_factory=list)  # List[Problem] at runtime

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments
            inputdir: Directory containing source files
            outputdir: Directory for compilation output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Only keep options that are ProgramState fields
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            sources_find,
            markup_compile,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
