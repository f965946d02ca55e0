#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Class that represents a Thing.
"""

import hashlib
import itertools
import uuid

from slugify import slugify

from wotengine.utils.utils import to_camel
from wotengine.wot.dictionaries.thing import ThingFragment
from wotengine.wot.enums import InteractionTypes
from wotengine.wot.exceptions import AlreadyExistsError
from wotengine.wot.interaction import Property, Action, Event, INTERACTION_CLASSES


class Thing(object):
    """An abstraction of a physical or virtual entity whose metadata
    and interfaces are described by a WoT Thing Description.
    Interaction names are unique within each type of interaction."""

    THING_FRAGMENT_WRITABLE_FIELDS = {
        "version",
        "name",
        "description",
        "support",
        "created",
        "lastModified",
        "base",
        "links",
        "security"
    }

    assert THING_FRAGMENT_WRITABLE_FIELDS.issubset(ThingFragment.Meta.fields)

    def __init__(self, thing_fragment=None, **kwargs):
        self._thing_fragment = thing_fragment if thing_fragment else ThingFragment(**kwargs)
        self._properties = {}
        self._actions = {}
        self._events = {}
        self._init_fragment_interactions()

    def __getattr__(self, name):
        """Search for members that raised an AttributeError in
        the private ThingFragment before propagating the exception."""

        if name.startswith("_"):
            raise AttributeError(name)

        return getattr(self._thing_fragment, name)

    def __setattr__(self, name, value):
        """Setter for ThingFragment attributes."""

        name_camel = to_camel(name)

        if name_camel not in self.THING_FRAGMENT_WRITABLE_FIELDS:
            return super(Thing, self).__setattr__(name, value)

        return self._thing_fragment.__setattr__(name, value)

    def _init_fragment_interactions(self):
        """Adds the interactions declared in the ThingFragment to the instance private dicts."""

        for name, prop_fragment in self._thing_fragment.properties.items():
            self.add_interaction(Property(thing=self, name=name, init_dict=prop_fragment))

        for name, action_fragment in self._thing_fragment.actions.items():
            self.add_interaction(Action(thing=self, name=name, init_dict=action_fragment))

        for name, event_fragment in self._thing_fragment.events.items():
            self.add_interaction(Event(thing=self, name=name, init_dict=event_fragment))

    def _interaction_dict(self, interaction_type):
        return {
            InteractionTypes.PROPERTY: self._properties,
            InteractionTypes.ACTION: self._actions,
            InteractionTypes.EVENT: self._events
        }[interaction_type]

    @property
    def thing_fragment(self):
        """The ThingFragment dictionary of this Thing.
        Contains the current interactions with their Forms."""

        doc = self._thing_fragment.to_dict()

        doc.update({
            "properties": {key: val.to_dict() for key, val in self.properties.items()},
            "actions": {key: val.to_dict() for key, val in self.actions.items()},
            "events": {key: val.to_dict() for key, val in self.events.items()}
        })

        return ThingFragment(doc)

    @property
    def id(self):
        """Thing ID."""

        return self._thing_fragment.id

    @property
    def name(self):
        """Thing name."""

        return self._thing_fragment.name

    @property
    def uuid(self):
        """Thing UUID in hex string format (e.g. a5220c5f-6bcb-4675-9c67-a2b1adc280b7).
        This value is deterministic and derived from the Thing ID.
        It may be of use when URL-unsafe chars are not acceptable."""

        hasher = hashlib.md5()
        hasher.update(self.id.encode())
        bytes_id_hash = hasher.digest()

        return str(uuid.UUID(bytes=bytes_id_hash))

    @property
    def url_name(self):
        """Returns the URL-safe name of this Thing.
        The URL name of a Thing is always unique and stable as long as the ID is unique."""

        return slugify("{}-{}".format(self.name, self.uuid))

    @property
    def properties(self):
        """Properties interactions."""

        return self._properties

    @property
    def actions(self):
        """Actions interactions."""

        return self._actions

    @property
    def events(self):
        """Events interactions."""

        return self._events

    @property
    def interactions(self):
        """Sequence of interactions linked to this thing."""

        return itertools.chain(
            self._properties.values(),
            self._actions.values(),
            self._events.values())

    def find_interaction(self, name, interaction_type=None):
        """Finds an existing Interaction by name.
        The name argument may be the original name or the URL-safe version.
        The search may be restricted to one type of interaction."""

        def is_match(intrct):
            if interaction_type is not None and intrct.interaction_type != interaction_type:
                return False

            return intrct.name == name or intrct.url_name == name

        return next((intrct for intrct in self.interactions if is_match(intrct)), None)

    def build_interaction(self, interaction_type, name, init_dict):
        """Builds a new Interaction of the given type linked to this Thing."""

        klass = INTERACTION_CLASSES[interaction_type]

        return klass(thing=self, name=name, init_dict=init_dict)

    def add_interaction(self, interaction):
        """Add a new Interaction.
        Raises AlreadyExistsError if an Interaction of the same type has the same name."""

        if not isinstance(interaction, (Property, Event, Action)):
            raise ValueError("Not an Interaction")

        if interaction.thing is not self:
            raise ValueError("Interaction linked to another Thing")

        intrct_type = interaction.interaction_type

        if interaction.name in self._interaction_dict(intrct_type):
            raise AlreadyExistsError("Duplicate {}: {}".format(intrct_type, interaction.name))

        self._interaction_dict(intrct_type)[interaction.name] = interaction

    def remove_interaction(self, name, interaction_type):
        """Removes an existing Interaction of the given type by name.
        Returns the removed Interaction or None if it did not exist."""

        return self._interaction_dict(interaction_type).pop(name, None)
