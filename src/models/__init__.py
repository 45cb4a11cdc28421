"""
Models package for dcecomp

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .components import (
    AUTHOR_TYPE_NAMES,
    ComponentDefinition,
    ComponentRegistryEntry,
    PropertyDefinition,
    PropertyType,
    Quaternion,
    Vector3,
)
from .parser import (
    CommentMode,
    DecodedMarkup,
    LocatedValue,
    MarkerOccurrence,
    ParseResult,
    RawFragment,
    SourceFile,
    SourceKind,
)
from .problems import ComponentSchemaError, Problem

__all__ = [
    "ProgramState",
    "pipeline",
    "AUTHOR_TYPE_NAMES",
    "ComponentDefinition",
    "ComponentRegistryEntry",
    "PropertyDefinition",
    "PropertyType",
    "Quaternion",
    "Vector3",
    "CommentMode",
    "DecodedMarkup",
    "LocatedValue",
    "MarkerOccurrence",
    "ParseResult",
    "RawFragment",
    "SourceFile",
    "SourceKind",
    "ComponentSchemaError",
    "Problem",
]
