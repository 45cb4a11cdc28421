"""
Problem reporting models and the fixed diagnostic messages

Every problem found while compiling markup is advisory: it is collected and
reported, but never stops the rest of the pass.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .parser import LocatedValue


MESSAGE_INVALID_JSON = "A #DCECOMP marker was not followed by valid JSON"

MESSAGE_CLASS_NOT_PRESENT = "A component has to have a class, that contains the name of the component class"
MESSAGE_CLASS_WRONG_TYPE = "Class has to be a string, that contains the class name of the component"
MESSAGE_COMPONENT_WRONG_TYPE = "Component has to be a string, that contains the component name"
MESSAGE_IMPORT_FILE_NOT_PRESENT = (
    "A component in a .dcecomp file has to have a import-file property, that contains "
    "the path to the file to import the component from relative to the project root"
)
MESSAGE_IMPORT_FILE_WRONG_TYPE = (
    "Import file has to be a string, that contains the path to the file to import "
    "the component from relative to the project root"
)
MESSAGE_PROPERTIES_WRONG_TYPE = "Properties has to be an array of property definitions"
MESSAGE_PROPERTY_WRONG_TYPE = "A property has to be an object, that contains a name and a type"
MESSAGE_PROPERTY_NAME_NOT_PRESENT = "The property has to have a name"
MESSAGE_PROPERTY_NAME_WRONG_TYPE = "The property name has to be a string"
MESSAGE_PROPERTY_TYPE_NOT_PRESENT = "The property has to have a type"
MESSAGE_PROPERTY_TYPE_WRONG_TYPE = "The property type has to be a string"
MESSAGE_PROPERTY_TYPE_WRONG_OPTION = 'Type has to be one of the following values: "string", "number", "vector3"'
MESSAGE_DEFAULT_WRONG_TYPE_STRING = "The default of a property of type string has to be a string"
MESSAGE_DEFAULT_WRONG_TYPE_INT = "The default of a property of type int has to be an number"
MESSAGE_DEFAULT_WRONG_TYPE_NUMBER = "The default of a property of type number has to be a number"
MESSAGE_DEFAULT_WRONG_TYPE_BOOL = "The default of a property of type bool has to be a bool"
MESSAGE_DEFAULT_WRONG_TYPE_VECTOR3 = "The default of a property of type vector3 has to be an array of three numbers"


@dataclass(frozen=True)
class Problem:
    """
    One problem found while compiling markup

    Attributes:
        description: Fixed, human-readable message
        path: File the problem belongs to ("" when unknown)
        line: 1-based line, -1 when unknown
        column: 1-based column, -1 when unknown

    Example:
        >>> str(Problem("The property has to have a name", "a.ts", 3, 7))
        'The property has to have a name at a.ts:3:7'
    """
    description: str
    path: str = ""
    line: int = -1
    column: int = -1

    @property
    def location(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"

    def __str__(self) -> str:
        return f"{self.description} at {self.location}"


class ComponentSchemaError(Exception):
    """
    Raised when decoded markup violates the component schema

    Carries the offending token's position when one is known, else that of
    the enclosing object.
    """

    def __init__(
        self,
        description: str,
        path: str,
        token: Optional['LocatedValue'] = None,
    ) -> None:
        self.description = description
        self.path = path
        self.line = token.line if token is not None else -1
        self.column = token.column if token is not None else -1
        super().__init__(f"{description}\n  at {self.location}")

    @property
    def location(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"

    def problem(self) -> Problem:
        """Convert to a reportable Problem"""
        return Problem(self.description, self.path, self.line, self.column)
