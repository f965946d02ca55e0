#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Base class for WoT dictionaries.
"""

import copy

from wotengine.utils.utils import merge_args_kwargs_dict, to_camel, to_snake
from wotengine.wot.semantic import annotate

SEMANTIC_INIT_KEYS = ("semanticTypes", "metadata")


class WotBaseDict(object):
    """Base class for all WoT data types represented
    as dictionaries in the Scripting API specification.

    Fields are declared in the inner Meta class (fields, required, defaults).
    Dictionaries that set Meta.annotated keep every key that is not one of their
    known fields as an opaque annotation (e.g. @type, @context or prefixed terms),
    and fold the semanticTypes and metadata init keys into those annotations."""

    class Meta:
        fields = set()
        required = set()
        defaults = dict()

    def __init__(self, *args, **kwargs):
        """Constructor.
        Will raise ValueError if there is some required field missing."""

        init_dict = merge_args_kwargs_dict(args, kwargs)
        annotated = getattr(self.Meta, "annotated", False)
        known = self.known_fields()

        self._init = {}
        self._annotations = {}

        semantic = {}

        for key, val in init_dict.items():
            name_camel = to_camel(key)

            if annotated and name_camel in SEMANTIC_INIT_KEYS:
                semantic[name_camel] = val
            elif annotated and (key.startswith("@") or name_camel not in known):
                self._annotations[key] = copy.deepcopy(val)
            else:
                self._init[name_camel] = val

        if semantic:
            self._annotations = annotate(
                self._annotations,
                semantic_types=semantic.get("semanticTypes"),
                metadata=semantic.get("metadata"))

        missing = sorted(set(getattr(self.Meta, "required", set())).difference(self._init))

        if missing:
            raise ValueError("Missing required field: {}".format(", ".join(missing)))

    def __getattr__(self, name):
        """Transforms the field name to camelCase and
        attemps to retrieve it from the internal dict."""

        name_camel = to_camel(name)

        if name_camel not in self.Meta.fields:
            raise AttributeError(name)

        if name_camel in self._init:
            return self._init[name_camel]

        return getattr(self.Meta, "defaults", {}).get(name_camel, None)

    @classmethod
    def known_fields(cls):
        """Keys that are handled as fields (the rest are annotations on annotated dictionaries)."""

        return set(cls.Meta.fields)

    @property
    def annotations(self):
        """Dict of the keys that are kept as opaque metadata."""

        return copy.deepcopy(self._annotations)

    def to_dict(self):
        """Returns the pure dict (JSON-serializable) representation of this WoT dictionary.
        Annotations are included but never override a field. Defaults are only
        serialized for the fields that are backed by a property."""

        ret = self.annotations
        members = dir(self)

        for name_camel in self.Meta.fields:
            name_snake = to_snake(name_camel)
            is_computed = name_snake in members and getattr(self, name_snake) is not None

            if name_camel not in self._init and not is_computed:
                continue

            ret[name_camel] = _serialize(getattr(self, name_snake))

        return ret


def _serialize(value):
    """Turns WoT dictionaries (also inside lists and dicts) into plain dicts."""

    if hasattr(value, "to_dict"):
        return value.to_dict()

    if isinstance(value, list):
        return [_serialize(item) for item in value]

    if isinstance(value, dict):
        return {key: _serialize(val) for key, val in value.items()}

    return value
