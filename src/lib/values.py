"""
Typed property values

Resolves the default value of a component property from its PropertyType:
either the type's zero value when the author gives no default, or the
author's JSON value checked and converted to the type's shape.
"""

import math
import uuid
from typing import Callable, Dict, Optional

from ..models.components import PropertyType, PropertyValue, Quaternion, Vector3
from ..models.parser import LocatedValue
from ..models.problems import (
    ComponentSchemaError,
    MESSAGE_DEFAULT_WRONG_TYPE_BOOL,
    MESSAGE_DEFAULT_WRONG_TYPE_INT,
    MESSAGE_DEFAULT_WRONG_TYPE_NUMBER,
    MESSAGE_DEFAULT_WRONG_TYPE_STRING,
    MESSAGE_DEFAULT_WRONG_TYPE_VECTOR3,
)


EMPTY_ASSET = uuid.UUID(int=0)


def number_is(value: object) -> bool:
    """JSON number check; booleans are not numbers here"""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def default_for(property_type: PropertyType) -> PropertyValue:
    """
    Zero value of a property type

    Example:
        >>> default_for(PropertyType.VECTOR3)
        Vector3(x=0.0, y=0.0, z=0.0)
    """
    defaults: Dict[PropertyType, Callable[[], PropertyValue]] = {
        PropertyType.NONE: lambda: None,
        PropertyType.STRING: lambda: "",
        PropertyType.INT: lambda: 0,
        PropertyType.FLOAT: lambda: 0.0,
        PropertyType.BOOLEAN: lambda: False,
        PropertyType.VECTOR3: Vector3,
        PropertyType.QUATERNION: Quaternion,
        PropertyType.ASSET: lambda: EMPTY_ASSET,
    }
    return defaults[property_type]()


def string_coerce(token: LocatedValue, path: str) -> str:
    if not isinstance(token.value, str):
        raise ComponentSchemaError(MESSAGE_DEFAULT_WRONG_TYPE_STRING, path, token)
    return token.value


def int_coerce(token: LocatedValue, path: str) -> int:
    # Any finite number is accepted and narrowed
    if not number_is(token.value) or (isinstance(token.value, float) and not math.isfinite(token.value)):
        raise ComponentSchemaError(MESSAGE_DEFAULT_WRONG_TYPE_INT, path, token)
    return int(token.value)


def float_coerce(token: LocatedValue, path: str) -> float:
    if not number_is(token.value):
        raise ComponentSchemaError(MESSAGE_DEFAULT_WRONG_TYPE_NUMBER, path, token)
    try:
        return float(token.value)
    except OverflowError:
        raise ComponentSchemaError(MESSAGE_DEFAULT_WRONG_TYPE_NUMBER, path, token)


def bool_coerce(token: LocatedValue, path: str) -> bool:
    if not isinstance(token.value, bool):
        raise ComponentSchemaError(MESSAGE_DEFAULT_WRONG_TYPE_BOOL, path, token)
    return token.value


def vector3_coerce(token: LocatedValue, path: str) -> Vector3:
    """Read [x, y, z] positionally"""
    items = token.value
    if not isinstance(items, list) or len(items) != 3:
        raise ComponentSchemaError(MESSAGE_DEFAULT_WRONG_TYPE_VECTOR3, path, token)
    for item in items:
        if not number_is(item.value):
            raise ComponentSchemaError(MESSAGE_DEFAULT_WRONG_TYPE_VECTOR3, path, item)
    try:
        x, y, z = (float(item.value) for item in items)
    except OverflowError:
        raise ComponentSchemaError(MESSAGE_DEFAULT_WRONG_TYPE_VECTOR3, path, token)
    return Vector3(x, y, z)


def quaternion_coerce(token: LocatedValue, path: str) -> Quaternion:
    # TODO: read [x, y, z, w] once quaternion properties are author-selectable
    return Quaternion()


def asset_coerce(token: LocatedValue, path: str) -> uuid.UUID:
    # TODO: resolve asset references once asset properties are author-selectable
    return EMPTY_ASSET


COERCERS: Dict[PropertyType, Callable[[LocatedValue, str], PropertyValue]] = {
    PropertyType.NONE: lambda token, path: None,
    PropertyType.STRING: string_coerce,
    PropertyType.INT: int_coerce,
    PropertyType.FLOAT: float_coerce,
    PropertyType.BOOLEAN: bool_coerce,
    PropertyType.VECTOR3: vector3_coerce,
    PropertyType.QUATERNION: quaternion_coerce,
    PropertyType.ASSET: asset_coerce,
}


def value_coerce(property_type: PropertyType, token: LocatedValue, path: str) -> PropertyValue:
    """
    Check an author-supplied default against a property type

    Args:
        property_type: Resolved type of the property
        token: The "default" JSON value with its position
        path: Source file, for error reporting

    Returns:
        Value shaped for the type

    Raises:
        ComponentSchemaError: If the value does not fit the type
    """
    return COERCERS[property_type](token, path)


def default_resolve(
    property_type: PropertyType, token: Optional[LocatedValue], path: str
) -> PropertyValue:
    """Author default if given, else the type's zero value"""
    if token is None:
        return default_for(property_type)
    return value_coerce(property_type, token, path)
