#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Classes that represent Interaction instances accessed on a ExposedThing.
"""

from collections import UserDict


class ExposedThingInteractionDict(UserDict):
    """A dictionary that provides lazy access to the objects that implement
    the Interaction interface for each interaction in a given ExposedThing."""

    def __init__(self, *args, **kwargs):
        self._exposed_thing = kwargs.pop("exposed_thing")
        UserDict.__init__(self, *args, **kwargs)

    def __getitem__(self, name):
        """Lazily build and return an object that implements the Interaction interface."""

        if name not in self.interaction_dict:
            raise KeyError("Unknown interaction: {}".format(name))

        return self.thing_interaction_class(self._exposed_thing, name)

    def __len__(self):
        return len(self.interaction_dict)

    def __contains__(self, item):
        return item in self.interaction_dict

    def __iter__(self):
        return iter(list(self.interaction_dict))

    @property
    def interaction_dict(self):
        """Returns the Interaction objects of the Thing by name."""

        raise NotImplementedError()

    @property
    def thing_interaction_class(self):
        """Returns the class that implements the
        Interaction interface for this type of interaction."""

        raise NotImplementedError()


class ExposedThingProperty(object):
    """The ThingProperty interface implementation for ExposedThing objects."""

    def __init__(self, exposed_thing, name):
        self._exposed_thing = exposed_thing
        self._name = name

    def __getattr__(self, name):
        """Search for members that raised an AttributeError in
        the private init dict before propagating the exception."""

        if name.startswith("_"):
            raise AttributeError(name)

        return getattr(self._exposed_thing.thing.properties[self._name], name)

    async def read(self):
        """Fetches the value of the Property."""

        return await self._exposed_thing.read_property(self._name)

    async def write(self, value):
        """Attempts to set the value of the Property."""

        await self._exposed_thing.write_property(self._name, value)

    def subscribe(self, *args, **kwargs):
        """Subscribe to an stream of events emitted when the property value changes."""

        return self._exposed_thing.on_property_change(self._name).subscribe(*args, **kwargs)


class ExposedThingAction(object):
    """The ThingAction interface implementation for ExposedThing objects."""

    def __init__(self, exposed_thing, name):
        self._exposed_thing = exposed_thing
        self._name = name

    def __getattr__(self, name):
        """Search for members that raised an AttributeError in
        the private init dict before propagating the exception."""

        if name.startswith("_"):
            raise AttributeError(name)

        return getattr(self._exposed_thing.thing.actions[self._name], name)

    async def invoke(self, input_value=None):
        """Starts the Action interaction with the given input value."""

        return await self._exposed_thing.invoke_action(self._name, input_value)


class ExposedThingEvent(object):
    """The ThingEvent interface implementation for ExposedThing objects."""

    def __init__(self, exposed_thing, name):
        self._exposed_thing = exposed_thing
        self._name = name

    def __getattr__(self, name):
        """Search for members that raised an AttributeError in
        the private init dict before propagating the exception."""

        if name.startswith("_"):
            raise AttributeError(name)

        return getattr(self._exposed_thing.thing.events[self._name], name)

    def emit(self, payload=None):
        """Emits an instance of this Event with the given payload."""

        self._exposed_thing.emit_event(self._name, payload)

    def subscribe(self, *args, **kwargs):
        """Subscribe to an stream of emissions of this event."""

        return self._exposed_thing.on_event(self._name).subscribe(*args, **kwargs)


class ExposedThingPropertyDict(ExposedThingInteractionDict):
    """A dictionary that provides lazy access to the objects that implement
    the ThingProperty interface for each property in a given ExposedThing."""

    @property
    def interaction_dict(self):
        return self._exposed_thing.thing.properties

    @property
    def thing_interaction_class(self):
        return ExposedThingProperty


class ExposedThingActionDict(ExposedThingInteractionDict):
    """A dictionary that provides lazy access to the objects that implement
    the ThingAction interface for each action in a given ExposedThing."""

    @property
    def interaction_dict(self):
        return self._exposed_thing.thing.actions

    @property
    def thing_interaction_class(self):
        return ExposedThingAction


class ExposedThingEventDict(ExposedThingInteractionDict):
    """A dictionary that provides lazy access to the objects that implement
    the ThingEvent interface for each event in a given ExposedThing."""

    @property
    def interaction_dict(self):
        return self._exposed_thing.thing.events

    @property
    def thing_interaction_class(self):
        return ExposedThingEvent
