"""
dcecomp - Component markup compiler

Extracts #DCECOMP component definitions embedded in JavaScript/TypeScript
comments and .dcecomp files, validates them and registers them as custom
components.
"""

__version__ = "1.0.0"

from .lib import MarkupParser, MarkupCompiler, ComponentRegistry, LOG, state_connectToLogger

__all__ = ["MarkupParser", "MarkupCompiler", "ComponentRegistry", "LOG", "state_connectToLogger", "__version__"]
