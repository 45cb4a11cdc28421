"""
Component schema validation

Turns a decoded markup object into a ComponentDefinition. Validation is
fail-fast per occurrence: the first violated rule raises a
ComponentSchemaError located at the offending token (or at the enclosing
object when a required field is missing).

Schema:
    { "class": string,                          required
      "component": string,                      optional, defaults to class
      "import-file": string,                    required
      "properties": [                           optional, defaults to []
        { "name": string,                       required
          "type": "string"|"number"|"vector3",  required
          "default": <matches type>             optional
        }, ...
      ]
    }
"""

from typing import List, Optional

from ..models.components import (
    AUTHOR_TYPE_NAMES,
    ComponentDefinition,
    PropertyDefinition,
    PropertyType,
)
from ..models.parser import DecodedMarkup, LocatedValue
from ..models.problems import (
    ComponentSchemaError,
    MESSAGE_CLASS_NOT_PRESENT,
    MESSAGE_CLASS_WRONG_TYPE,
    MESSAGE_COMPONENT_WRONG_TYPE,
    MESSAGE_IMPORT_FILE_NOT_PRESENT,
    MESSAGE_IMPORT_FILE_WRONG_TYPE,
    MESSAGE_PROPERTIES_WRONG_TYPE,
    MESSAGE_PROPERTY_NAME_NOT_PRESENT,
    MESSAGE_PROPERTY_NAME_WRONG_TYPE,
    MESSAGE_PROPERTY_TYPE_NOT_PRESENT,
    MESSAGE_PROPERTY_TYPE_WRONG_OPTION,
    MESSAGE_PROPERTY_TYPE_WRONG_TYPE,
    MESSAGE_PROPERTY_WRONG_TYPE,
)
from .values import default_resolve


CLASS_KEY = 'class'
COMPONENT_KEY = 'component'
IMPORT_FILE_KEY = 'import-file'
PROPERTIES_KEY = 'properties'
NAME_KEY = 'name'
TYPE_KEY = 'type'
DEFAULT_KEY = 'default'


class ComponentValidator:
    """
    Validator for one decoded markup object

    Example:
        >>> validator = ComponentValidator(markup)
        >>> definition = validator.validate()
        >>> definition.componentName
        'Door'
    """

    def __init__(self, markup: DecodedMarkup) -> None:
        self.markup = markup
        self.path = markup.sourcePath

    def validate(self) -> ComponentDefinition:
        """
        Validate the markup and build its ComponentDefinition

        Returns:
            ComponentDefinition with properties in declaration order

        Raises:
            ComponentSchemaError: On the first violated rule
        """
        data = self.markup.root

        class_value = self.string_require(
            data, CLASS_KEY, MESSAGE_CLASS_NOT_PRESENT, MESSAGE_CLASS_WRONG_TYPE
        )
        component_value = self.string_optional(data, COMPONENT_KEY, MESSAGE_COMPONENT_WRONG_TYPE)
        import_file_value = self.string_require(
            data, IMPORT_FILE_KEY, MESSAGE_IMPORT_FILE_NOT_PRESENT, MESSAGE_IMPORT_FILE_WRONG_TYPE
        )
        properties = self.properties_validate(data.get(PROPERTIES_KEY))

        return ComponentDefinition(
            classId=class_value,
            componentName=component_value if component_value is not None else class_value,
            importPath=import_file_value,
            properties=properties,
        )

    def string_require(
        self, data: LocatedValue, key: str, missing_message: str, wrong_type_message: str
    ) -> str:
        """Required string member; missing errors point at the object"""
        token = data.get(key)
        if token is None:
            raise ComponentSchemaError(missing_message, self.path, data)
        if not isinstance(token.value, str):
            raise ComponentSchemaError(wrong_type_message, self.path, token)
        return token.value

    def string_optional(
        self, data: LocatedValue, key: str, wrong_type_message: str
    ) -> Optional[str]:
        """Optional string member; None when absent"""
        token = data.get(key)
        if token is None:
            return None
        if not isinstance(token.value, str):
            raise ComponentSchemaError(wrong_type_message, self.path, token)
        return token.value

    def properties_validate(self, token: Optional[LocatedValue]) -> List[PropertyDefinition]:
        """Validate the properties array; absent means no properties"""
        if token is None:
            return []
        if not token.isArray():
            raise ComponentSchemaError(MESSAGE_PROPERTIES_WRONG_TYPE, self.path, token)
        return [self.property_validate(item) for item in token.value]

    def property_validate(self, data: LocatedValue) -> PropertyDefinition:
        """Validate one element of the properties array"""
        if not data.isObject():
            raise ComponentSchemaError(MESSAGE_PROPERTY_WRONG_TYPE, self.path, data)

        name = self.string_require(
            data, NAME_KEY, MESSAGE_PROPERTY_NAME_NOT_PRESENT, MESSAGE_PROPERTY_NAME_WRONG_TYPE
        )

        type_token = data.get(TYPE_KEY)
        if type_token is None:
            raise ComponentSchemaError(MESSAGE_PROPERTY_TYPE_NOT_PRESENT, self.path, data)
        property_type = self.type_resolve(type_token)

        default = default_resolve(property_type, data.get(DEFAULT_KEY), self.path)

        return PropertyDefinition(name=name, type=property_type, default=default)

    def type_resolve(self, token: LocatedValue) -> PropertyType:
        """Map the author's "type" string to a PropertyType"""
        if not isinstance(token.value, str):
            raise ComponentSchemaError(MESSAGE_PROPERTY_TYPE_WRONG_TYPE, self.path, token)
        property_type = AUTHOR_TYPE_NAMES.get(token.value)
        if property_type is None:
            raise ComponentSchemaError(MESSAGE_PROPERTY_TYPE_WRONG_OPTION, self.path, token)
        return property_type


def component_validate(markup: DecodedMarkup) -> ComponentDefinition:
    """Validate decoded markup into a ComponentDefinition (raises ComponentSchemaError)"""
    return ComponentValidator(markup).validate()
