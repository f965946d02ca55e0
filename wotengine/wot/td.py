#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Classes that represent the JSON serialization format of a Thing Description document.
"""

import json

from wotengine.wot.dictionaries.thing import ThingFragment
from wotengine.wot.thing import Thing
from wotengine.wot.validation import SCHEMA_THING, InvalidDescription, validate_document


class ThingDescription(object):
    """Class that represents a Thing Description document.
    Contains logic to validate and transform a Thing to a serialized TD and vice versa."""

    def __init__(self, doc):
        """Constructor.
        Validates that the document conforms to the TD schema."""

        try:
            self._doc = json.loads(doc) if isinstance(doc, (str, bytes)) else doc
        except ValueError as ex:
            raise InvalidDescription("Malformed TD document: {}".format(ex))

        if not isinstance(self._doc, dict):
            raise InvalidDescription("The TD document must be an object")

        try:
            self._thing_fragment = ThingFragment(self._doc)
            normalized = self._thing_fragment.to_dict()
        except InvalidDescription:
            raise
        except ValueError as ex:
            raise InvalidDescription(str(ex))

        self.validate(doc=normalized)

    @classmethod
    def validate(cls, doc):
        """Validates the given Thing Description document against its schema.
        Raises InvalidDescription if validation fails."""

        validate_document(doc, SCHEMA_THING)

    @classmethod
    def from_thing(cls, thing):
        """Builds an instance of a JSON-serialized Thing Description from a Thing object."""

        return ThingDescription(thing.thing_fragment.to_dict())

    def __getattr__(self, name):
        """Search for members that raised an AttributeError in
        the internal ThingFragment before propagating the exception."""

        if name.startswith("_"):
            raise AttributeError(name)

        return getattr(self._thing_fragment, name)

    def to_dict(self):
        """Returns the JSON Thing Description as a dict."""

        return self._thing_fragment.to_dict()

    def to_str(self):
        """Returns the JSON Thing Description as a string."""

        return json.dumps(self._thing_fragment.to_dict())

    def to_thing_fragment(self):
        """Returns a ThingFragment dictionary built from this TD."""

        return self._thing_fragment

    def build_thing(self):
        """Builds a new Thing object from the serialized Thing Description."""

        return Thing(thing_fragment=ThingFragment(self.to_dict()))

    def get_forms(self, name):
        """Returns a list of FormDict for the interaction that matches the given name."""

        if name in self.properties:
            return self.get_property_forms(name)

        if name in self.actions:
            return self.get_action_forms(name)

        if name in self.events:
            return self.get_event_forms(name)

        return []

    def get_property_forms(self, name):
        """Returns a list of FormDict for the property that matches the given name."""

        return self.properties[name].forms

    def get_action_forms(self, name):
        """Returns a list of FormDict for the action that matches the given name."""

        return self.actions[name].forms

    def get_event_forms(self, name):
        """Returns a list of FormDict for the event that matches the given name."""

        return self.events[name].forms
