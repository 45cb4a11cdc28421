"""
Component definition models

Typed structures produced by the schema validator and stored in the
component registry. Mirrors the shape an editor-side component catalog
expects: a class id, a display name, an import path and an ordered list of
typed properties with their default values.
"""

import uuid
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


class PropertyType(Enum):
    """
    Value types a component property can carry

    Only STRING, FLOAT and VECTOR3 can be selected by markup authors (see
    AUTHOR_TYPE_NAMES); the rest are reachable through internal defaults.
    """
    NONE = "none"
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOLEAN = "boolean"
    VECTOR3 = "vector3"
    QUATERNION = "quaternion"
    ASSET = "asset"


# Markup "type" field value -> PropertyType
AUTHOR_TYPE_NAMES: Dict[str, PropertyType] = {
    'string': PropertyType.STRING,
    'number': PropertyType.FLOAT,
    'vector3': PropertyType.VECTOR3,
}


@dataclass(frozen=True)
class Vector3:
    """Three-component vector, read positionally from [x, y, z]"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion; the default instance is the identity rotation"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


PropertyValue = Union[None, str, int, float, bool, Vector3, Quaternion, uuid.UUID]


@dataclass(frozen=True)
class PropertyDefinition:
    """
    One typed property of a custom component

    Attributes:
        name: Property name as written by the author
        type: Resolved PropertyType
        default: Default value, shaped according to type
                 (str, int, float, bool, Vector3, Quaternion, UUID or None)
    """
    name: str
    type: PropertyType
    default: PropertyValue


@dataclass(frozen=True)
class ComponentDefinition:
    """
    Validated description of a custom component

    Attributes:
        classId: Component class name (markup "class")
        componentName: Display/registry name (markup "component"),
                       falls back to classId
        importPath: Path to import the component from, relative to the
                    project root and without extension
        properties: Property definitions in declaration order
    """
    classId: str
    componentName: str
    importPath: str
    properties: List[PropertyDefinition] = field(default_factory=list)

    def asDict(self) -> Dict[str, Any]:
        """Plain JSON-serializable representation"""
        return {
            'class': self.classId,
            'component': self.componentName,
            'import-file': self.importPath,
            'properties': [
                {
                    'name': prop.name,
                    'type': prop.type.value,
                    'default': value_toJson(prop.default),
                }
                for prop in self.properties
            ],
        }


@dataclass(frozen=True)
class ComponentRegistryEntry:
    """
    Registry record for one available component

    Attributes:
        definition: The component definition
        category: Add-component menu category
        visibleInMenu: Whether the component is offered in the add menu
    """
    definition: ComponentDefinition
    category: str = "Custom"
    visibleInMenu: bool = True

    @property
    def key(self) -> str:
        return self.definition.componentName


def value_toJson(value: PropertyValue) -> Optional[Any]:
    """Convert a typed property value to its JSON form"""
    if isinstance(value, Vector3):
        return [value.x, value.y, value.z]
    if isinstance(value, Quaternion):
        return [value.x, value.y, value.z, value.w]
    if isinstance(value, uuid.UUID):
        return str(value)
    return value
