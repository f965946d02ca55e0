#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Storage of the interactions, handlers and Property values of an ExposedThing.
"""

import logging

import tornado.locks

from wotengine.wot.constants import WILDCARD_HANDLER
from wotengine.wot.dictionaries.interaction import PropertyFragmentDict, ActionFragmentDict, EventFragmentDict
from wotengine.wot.enums import InteractionTypes, HandlerKeys
from wotengine.wot.exceptions import NotFoundError, AlreadyExistsError
from wotengine.wot.validation import InvalidDescription, is_valid_safe_name, validate_fragment

HANDLER_INTERACTION_TYPES = {
    HandlerKeys.RETRIEVE_PROPERTY: InteractionTypes.PROPERTY,
    HandlerKeys.UPDATE_PROPERTY: InteractionTypes.PROPERTY,
    HandlerKeys.INVOKE_ACTION: InteractionTypes.ACTION
}

FRAGMENT_CLASSES = {
    InteractionTypes.PROPERTY: PropertyFragmentDict,
    InteractionTypes.ACTION: ActionFragmentDict,
    InteractionTypes.EVENT: EventFragmentDict
}


class InteractionStore(object):
    """Keeps the interactions of a Thing together with the user handlers
    and the last known value of each Property.

    Handlers are registered per interaction name or for every
    interaction of a type using the wildcard name."""

    def __init__(self, thing):
        self._thing = thing
        self._values = {}
        self._locks = {}
        self._handlers = {key: {} for key in HandlerKeys.list()}
        self._handlers_wildcard = {key: None for key in HandlerKeys.list()}
        self._logr = logging.getLogger(__name__)

        for name in self._thing.properties:
            self._values[name] = None
            self._locks[name] = tornado.locks.Lock()

    @property
    def thing(self):
        """Thing that contains the stored interactions."""

        return self._thing

    @classmethod
    def _fragment_dict(cls, interaction_type, fragment):
        """Validates the given fragment (dict or fragment dictionary)
        and returns the corresponding fragment dictionary instance."""

        init_class = FRAGMENT_CLASSES[interaction_type]

        if isinstance(fragment, init_class):
            doc = fragment.to_dict()
        elif isinstance(fragment, dict):
            doc = fragment
        else:
            raise InvalidDescription("Invalid {} fragment: {}".format(interaction_type, fragment))

        validate_fragment(interaction_type, doc)

        return init_class(doc)

    def get(self, interaction_type, name):
        """Returns the interaction of the given type and name.
        Raises NotFoundError if it does not exist."""

        interaction = self._interactions(interaction_type).get(name)

        if interaction is None:
            raise NotFoundError("Unknown {}: {}".format(interaction_type, name))

        return interaction

    def contains(self, interaction_type, name):
        """Returns True if an interaction of the given type and name exists."""

        return name in self._interactions(interaction_type)

    def define(self, interaction_type, name, fragment, value=None):
        """Adds a new interaction from the given fragment.
        An initial value may be given for Properties and is validated against its schema.
        Raises AlreadyExistsError if the name is already taken for the interaction type."""

        if not is_valid_safe_name(name):
            raise InvalidDescription("Invalid interaction name: {}".format(name))

        if name in self._interactions(interaction_type):
            raise AlreadyExistsError("Duplicate {}: {}".format(interaction_type, name))

        fragment_dict = self._fragment_dict(interaction_type, fragment)

        if interaction_type == InteractionTypes.PROPERTY and value is not None:
            fragment_dict.data_schema.validate(value)

        interaction = self._thing.build_interaction(interaction_type, name, fragment_dict)
        self._thing.add_interaction(interaction)

        if interaction_type == InteractionTypes.PROPERTY:
            self._values[name] = value
            self._locks[name] = tornado.locks.Lock()

        self._logr.debug("Defined {} <{}> on {}".format(interaction_type, name, self._thing.id))

        return interaction

    def undefine(self, interaction_type, name):
        """Removes an existing interaction together with its specific handlers and value.
        Raises NotFoundError if it does not exist."""

        if self._thing.remove_interaction(name, interaction_type) is None:
            raise NotFoundError("Unknown {}: {}".format(interaction_type, name))

        for handler_type, intrct_type in HANDLER_INTERACTION_TYPES.items():
            if intrct_type == interaction_type:
                self._handlers[handler_type].pop(name, None)

        if interaction_type == InteractionTypes.PROPERTY:
            self._values.pop(name, None)
            self._locks.pop(name, None)

        self._logr.debug("Removed {} <{}> from {}".format(interaction_type, name, self._thing.id))

    def _interactions(self, interaction_type):
        return {
            InteractionTypes.PROPERTY: self._thing.properties,
            InteractionTypes.ACTION: self._thing.actions,
            InteractionTypes.EVENT: self._thing.events
        }[interaction_type]

    def set_handler(self, handler_type, name, handler):
        """Sets the handler of the given type for one interaction or,
        when the name is the wildcard (or None), for all of them.
        Setting a None handler removes the previous one."""

        if handler_type not in HANDLER_INTERACTION_TYPES:
            raise ValueError("Unknown handler type: {}".format(handler_type))

        if handler is not None and not callable(handler):
            raise TypeError("Handler is not callable")

        if name is None or name == WILDCARD_HANDLER:
            self._handlers_wildcard[handler_type] = handler
            return

        self.get(HANDLER_INTERACTION_TYPES[handler_type], name)

        if handler is None:
            self._handlers[handler_type].pop(name, None)
        else:
            self._handlers[handler_type][name] = handler

    def resolve_handler(self, handler_type, name):
        """Returns the specific handler for the interaction, the
        wildcard handler if there is no specific one, or None."""

        specific = self._handlers[handler_type].get(name)

        return specific if specific is not None else self._handlers_wildcard[handler_type]

    def get_value(self, name):
        """Returns the cached value of a Property."""

        self.get(InteractionTypes.PROPERTY, name)

        return self._values.get(name)

    def set_value(self, name, value):
        """Updates the cached value of a Property."""

        self.get(InteractionTypes.PROPERTY, name)
        self._values[name] = value

    def property_lock(self, name):
        """Returns the lock that serializes the commits of a Property value."""

        self.get(InteractionTypes.PROPERTY, name)

        return self._locks.setdefault(name, tornado.locks.Lock())

