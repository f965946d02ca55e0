#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Class that represents a Thing consumed by a servient.
"""

import copy
import logging
import threading

import rx

from wotengine.wot.consumed.interaction_map import (
    ConsumedThingActionDict,
    ConsumedThingEventDict,
    ConsumedThingPropertyDict,
)
from wotengine.wot.exceptions import NotFoundError, NotAllowedError


class ConsumedThing(object):
    """An entity that serves to interact with a Thing.
    An application uses this class when it acts as a *client* of the Thing.
    Requests are sent through the Protocol Binding client selected by the Servient."""

    def __init__(self, servient, td):
        self._servient = servient
        self._td = td
        self._listeners = {}
        self._listeners_lock = threading.Lock()
        self._logr = logging.getLogger(__name__)

    def __str__(self):
        return "<{}> {}".format(self.__class__.__name__, self.td.id)

    def __getattr__(self, name):
        """Search for members that raised an AttributeError in
        the private ThingFragment instance before propagating the exception."""

        if name.startswith("_"):
            raise AttributeError(name)

        return getattr(self.td.to_thing_fragment(), name)

    def _get_property_fragment(self, name):
        properties = self.td.properties

        if name not in properties:
            raise NotFoundError("Unknown property: {}".format(name))

        return properties[name]

    @property
    def servient(self):
        """Returns the Servient that contains this Consumed Thing."""

        return self._servient

    @property
    def td(self):
        """Returns the ThingDescription instance that represents
        the TD that this Consumed Thing is based on."""

        return self._td

    def get_thing_description(self):
        """Returns the Thing Description of the consumed Thing as a dict."""

        return copy.deepcopy(self.td.to_dict())

    async def invoke_action(self, name, input_value=None, timeout=None):
        """Takes the Action name from the name argument and the list of parameters,
        then requests from the underlying platform and the Protocol Bindings to invoke
        the Action on the remote Thing and return the result."""

        if name not in self.td.actions:
            raise NotFoundError("Unknown action: {}".format(name))

        client = self.servient.select_client(self.td, name)

        return await client.invoke_action(self.td, name, input_value, timeout=timeout)

    async def write_property(self, name, value, timeout=None):
        """Takes the Property name as the name argument and the new value as the value
        argument, then requests from the underlying platform and the Protocol Bindings
        to update the Property on the remote Thing."""

        if not self._get_property_fragment(name).writable:
            raise NotAllowedError("Property is not writable: {}".format(name))

        client = self.servient.select_client(self.td, name)

        await client.write_property(self.td, name, value, timeout=timeout)

    async def read_property(self, name, timeout=None):
        """Takes the Property name as the name argument, then requests from the
        underlying platform and the Protocol Bindings to retrieve the Property
        on the remote Thing and return the result."""

        self._get_property_fragment(name)
        client = self.servient.select_client(self.td, name)

        return await client.read_property(self.td, name, timeout=timeout)

    def on_event(self, name):
        """Returns an Observable for the Event specified in the name argument,
        allowing subscribing to and unsubscribing from notifications."""

        if name not in self.td.events:
            return rx.throw(NotFoundError("Unknown event: {}".format(name)))

        client = self.servient.select_client(self.td, name)

        return client.on_event(self.td, name)

    def on_property_change(self, name):
        """Returns an Observable for the Property specified in the name argument,
        allowing subscribing to and unsubscribing from notifications."""

        if name not in self.td.properties:
            return rx.throw(NotFoundError("Unknown property: {}".format(name)))

        client = self.servient.select_client(self.td, name)

        return client.on_property_change(self.td, name)

    def on_td_change(self):
        """Returns an Observable, allowing subscribing to and unsubscribing
        from notifications to the Thing Description."""

        interaction_names = list(self.td.properties) + list(self.td.actions) + list(self.td.events)

        client = next((
            item for item in self.servient.clients.values()
            if any(item.is_supported_interaction(self.td, name) for name in interaction_names)
        ), None)

        if client is None:
            client = self.servient.default_client

        return client.on_td_change(self.td)

    def add_listener(self, event_name, listener):
        """Subscribes the listener function to the Event with the given name.
        Returns a reference to the same object for supporting chaining."""

        disposable = self.on_event(event_name).subscribe(on_next=listener)

        with self._listeners_lock:
            self._listeners.setdefault(event_name, []).append((listener, disposable))

        return self

    def remove_listener(self, event_name, listener):
        """Unsubscribes the given listener function from the Event with the given name."""

        with self._listeners_lock:
            items = self._listeners.get(event_name, [])
            removed = [item for item in items if item[0] is listener]
            self._listeners[event_name] = [item for item in items if item[0] is not listener]

        for _, disposable in removed:
            disposable.dispose()

        return self

    def remove_all_listeners(self, event_name=None):
        """Unsubscribes all the listeners of the Event with the given name
        (or of every Event if no name is given)."""

        with self._listeners_lock:
            if event_name is None:
                removed = [item for items in self._listeners.values() for item in items]
                self._listeners = {}
            else:
                removed = self._listeners.pop(event_name, [])

        for _, disposable in removed:
            disposable.dispose()

        return self

    @property
    def properties(self):
        """Returns a dictionary of ThingProperty items."""

        return ConsumedThingPropertyDict(consumed_thing=self)

    @property
    def actions(self):
        """Returns a dictionary of ThingAction items."""

        return ConsumedThingActionDict(consumed_thing=self)

    @property
    def events(self):
        """Returns a dictionary of ThingEvent items."""

        return ConsumedThingEventDict(consumed_thing=self)

    def subscribe(self, *args, **kwargs):
        """Subscribes to changes on the TD of this thing."""

        return self.on_td_change().subscribe(*args, **kwargs)
