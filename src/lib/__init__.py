"""
dcecomp - Component markup compiler

Extracts #DCECOMP component definitions from source comments and markup files.
"""

__version__ = "1.0.0"

from .parser import MarkupParser
from .compiler import MarkupCompiler
from .registry import ComponentRegistry
from .log import LOG, state_connectToLogger

__all__ = ["MarkupParser", "MarkupCompiler", "ComponentRegistry", "LOG", "state_connectToLogger", "__version__"]
