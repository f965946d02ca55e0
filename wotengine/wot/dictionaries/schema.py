#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Wrapper classes for data schema dictionaries defined in the Scripting API.
Each DataType maps to one concrete class and values are validated structurally against them.
"""

import jsonschema
import jsonschema.exceptions

from wotengine.utils.utils import merge_args_kwargs_dict
from wotengine.wot.dictionaries.base import WotBaseDict
from wotengine.wot.enums import DataType
from wotengine.wot.exceptions import SchemaViolationError
from wotengine.wot.validation import InvalidDescription


class DataSchemaDict(WotBaseDict):
    """Represents the common properties of a value type definition."""

    class Meta:
        fields = {
            "description",
            "title",
            "type",
            "const",
            "unit",
            "enum",
            "readOnly",
            "writeOnly"
        }

        defaults = {
            "readOnly": False,
            "writeOnly": False
        }

    @classmethod
    def build(cls, *args, **kwargs):
        """Builds an instance of the appropriate subclass for the given DataType."""

        init_dict = merge_args_kwargs_dict(args, kwargs)

        klass_type = init_dict.get("type")
        klass = DATA_SCHEMA_CLASSES.get(klass_type)

        if not klass:
            raise InvalidDescription("Unknown type: {}".format(klass_type))

        return klass(*args, **kwargs)

    def validate(self, value):
        """Validates the given value against this schema (recursively for nested schemas).
        Raises SchemaViolationError if the value does not conform."""

        validator = jsonschema.Draft7Validator(self.to_dict())
        error = jsonschema.exceptions.best_match(validator.iter_errors(value))

        if error is not None:
            raise SchemaViolationError(error.message, path=list(error.absolute_path))

    def is_valid(self, value):
        """Returns True if the given value conforms to this schema."""

        try:
            self.validate(value)
            return True
        except SchemaViolationError:
            return False


class BooleanSchemaDict(DataSchemaDict):
    """Properties to describe a boolean type."""

    @property
    def type(self):
        """The type property represents the value type enumerated in DataType."""

        return DataType.BOOLEAN


class NumberSchemaDict(DataSchemaDict):
    """Properties to describe a numeric type."""

    class Meta:
        fields = DataSchemaDict.Meta.fields.union({
            "minimum",
            "maximum"
        })

        defaults = DataSchemaDict.Meta.defaults

    @property
    def type(self):
        """The type property represents the value type (a member of DataType)."""

        return DataType.NUMBER


class IntegerSchemaDict(NumberSchemaDict):
    """Properties to describe an integer type."""

    @property
    def type(self):
        """The type property represents the value type enumerated in DataType."""

        return DataType.INTEGER


class StringSchemaDict(DataSchemaDict):
    """Properties to describe a string type."""

    class Meta:
        fields = DataSchemaDict.Meta.fields.union({
            "minLength",
            "maxLength",
            "pattern"
        })

        defaults = DataSchemaDict.Meta.defaults

    @property
    def type(self):
        """The type property represents the value type enumerated in DataType."""

        return DataType.STRING


class ObjectSchemaDict(DataSchemaDict):
    """Properties to describe an object type."""

    class Meta:
        fields = DataSchemaDict.Meta.fields.union({
            "properties",
            "required"
        })

        defaults = DataSchemaDict.Meta.defaults

    @property
    def type(self):
        """The type property represents the value type enumerated in DataType."""

        return DataType.OBJECT

    @property
    def properties(self):
        """Data schema nested definitions."""

        if "properties" not in self._init:
            return None

        return {
            key: DataSchemaDict.build(val)
            for key, val in self._init["properties"].items()
        }


class ArraySchemaDict(DataSchemaDict):
    """Properties to describe an array type."""

    class Meta:
        fields = DataSchemaDict.Meta.fields.union({
            "items",
            "minItems",
            "maxItems"
        })

        defaults = DataSchemaDict.Meta.defaults

    @property
    def type(self):
        """The type property represents the value type enumerated in DataType."""

        return DataType.ARRAY

    @property
    def items(self):
        """Used to define the characteristics of an array."""

        return DataSchemaDict.build(self._init["items"]) if "items" in self._init else None


class NullSchemaDict(DataSchemaDict):
    """Properties to describe the null type.
    The only valid value for this type is None."""

    @property
    def type(self):
        """The type property represents the value type enumerated in DataType."""

        return DataType.NULL


DATA_SCHEMA_CLASSES = {
    DataType.BOOLEAN: BooleanSchemaDict,
    DataType.INTEGER: IntegerSchemaDict,
    DataType.NUMBER: NumberSchemaDict,
    DataType.STRING: StringSchemaDict,
    DataType.OBJECT: ObjectSchemaDict,
    DataType.ARRAY: ArraySchemaDict,
    DataType.NULL: NullSchemaDict
}
