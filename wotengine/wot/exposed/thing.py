#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Classes that represent Things exposed by a servient.
"""

import copy
import functools
import logging

import rx

from wotengine.utils.utils import to_camel
from wotengine.wot.enums import \
    TDChangeMethod, \
    TDChangeType, \
    InteractionTypes, \
    HandlerKeys, \
    HubChannels, \
    ThingState
from wotengine.wot.events import \
    EmittedEvent, \
    ThingDescriptionChangeEmittedEvent, \
    ThingDescriptionChangeEventInit
from wotengine.wot.exceptions import NotFoundError, NotAllowedError, DestroyedError
from wotengine.wot.exposed.dispatcher import RequestDispatcher
from wotengine.wot.exposed.hub import ObservableHub
from wotengine.wot.exposed.interactions import \
    ExposedThingPropertyDict, \
    ExposedThingActionDict, \
    ExposedThingEventDict
from wotengine.wot.exposed.store import InteractionStore
from wotengine.wot.td import ThingDescription
from wotengine.wot.thing import Thing

TD_CHANGE_TYPES = {
    InteractionTypes.PROPERTY: TDChangeType.PROPERTY,
    InteractionTypes.ACTION: TDChangeType.ACTION,
    InteractionTypes.EVENT: TDChangeType.EVENT
}

HANDLER_TD_CHANGE_TYPES = {
    HandlerKeys.RETRIEVE_PROPERTY: TDChangeType.PROPERTY,
    HandlerKeys.UPDATE_PROPERTY: TDChangeType.PROPERTY,
    HandlerKeys.INVOKE_ACTION: TDChangeType.ACTION
}


def _alive_only(func):
    """Decorator that raises DestroyedError when the ExposedThing has been destroyed."""

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        if self.state == ThingState.DESTROYED:
            raise DestroyedError()

        return func(self, *args, **kwargs)

    return wrapper


def _created_only(func):
    """Decorator that raises NotAllowedError unless the ExposedThing is in the created state."""

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        if self.state == ThingState.DESTROYED:
            raise DestroyedError()

        if self.state != ThingState.CREATED:
            raise NotAllowedError("Operation only allowed before the Thing is exposed")

        return func(self, *args, **kwargs)

    return wrapper


class ExposedThing(object):
    """An entity that serves to define the behavior of a Thing.
    An application uses this class when it acts as the Thing 'server'.

    The ExposedThing goes through the states created, exposed and destroyed.
    Interactions may be added and handlers set until it is destroyed,
    while removals and metadata updates are only permitted in the created state."""

    def __init__(self, servient, thing):
        self._servient = servient
        self._thing = thing
        self._store = InteractionStore(thing)
        self._hub = ObservableHub()
        self._dispatcher = RequestDispatcher(store=self._store, hub=self._hub)
        self._state = ThingState.CREATED
        self._td = None
        self._logr = logging.getLogger(__name__)

    def __str__(self):
        return "<{}> {}".format(self.__class__.__name__, self.id)

    def __getattr__(self, name):
        """Search for members that raised an AttributeError in
        the private Thing instance before propagating the exception."""

        if name.startswith("_"):
            raise AttributeError(name)

        return getattr(self.thing, name)

    def __setattr__(self, name, value):
        """Setter for ThingFragment attributes.
        Metadata may only be updated before the Thing is exposed."""

        name_camel = to_camel(name)

        if name_camel not in Thing.THING_FRAGMENT_WRITABLE_FIELDS:
            return super(ExposedThing, self).__setattr__(name, value)

        self._set_metadata(name, value)

    @_created_only
    def _set_metadata(self, name, value):
        self._thing.__setattr__(name, value)
        self._td = None

    def _emit_td_change(self, td_change_type, method, name, data=None):
        """Invalidates the cached TD and notifies the TD change subscribers."""

        self._td = None

        event_init = ThingDescriptionChangeEventInit(
            td_change_type=td_change_type,
            method=method,
            name=name,
            data=data,
            description=self.get_thing_description())

        self._hub.emit(HubChannels.TD_CHANGE, None, ThingDescriptionChangeEmittedEvent(init=event_init))

    def _add_interaction(self, interaction_type, name, fragment, value=None):
        interaction = self._store.define(interaction_type, name, fragment, value=value)

        self._emit_td_change(
            td_change_type=TD_CHANGE_TYPES[interaction_type],
            method=TDChangeMethod.ADD,
            name=name,
            data=interaction.interaction_fragment.to_dict())

    def _remove_interaction(self, interaction_type, name):
        self._store.undefine(interaction_type, name)

        self._emit_td_change(
            td_change_type=TD_CHANGE_TYPES[interaction_type],
            method=TDChangeMethod.REMOVE,
            name=name)

    def _set_handler(self, handler_type, name, handler):
        self._store.set_handler(handler_type, name, handler)

        self._emit_td_change(
            td_change_type=HANDLER_TD_CHANGE_TYPES[handler_type],
            method=TDChangeMethod.CHANGE,
            name=name)

        return self

    @property
    def id(self):
        """Returns the ID of the Thing."""

        return self._thing.id

    @property
    def servient(self):
        """Servient that contains this ExposedThing."""

        return self._servient

    @property
    def thing(self):
        """Returns the object that represents the Thing beneath this ExposedThing."""

        return self._thing

    @property
    def state(self):
        """Current lifecycle state (an item of ThingState)."""

        return self._state

    @property
    def is_exposed(self):
        """True if the ExposedThing is serving requests."""

        return self._state == ThingState.EXPOSED

    @property
    def properties(self):
        """Returns a dictionary of ThingProperty items."""

        return ExposedThingPropertyDict(exposed_thing=self)

    @property
    def actions(self):
        """Returns a dictionary of ThingAction items."""

        return ExposedThingActionDict(exposed_thing=self)

    @property
    def events(self):
        """Returns a dictionary of ThingEvent items."""

        return ExposedThingEventDict(exposed_thing=self)

    @property
    def thing_description(self):
        """The ThingDescription of the current state of the Thing.
        It is rebuilt lazily after each change."""

        if self._td is None:
            self._td = ThingDescription.from_thing(self._thing)

        return self._td

    @_alive_only
    def get_thing_description(self):
        """Returns the Thing Description of the Thing as a dict."""

        return copy.deepcopy(self.thing_description.to_dict())

    @_alive_only
    async def read_property(self, name):
        """Takes the Property name as the name argument and returns its value.
        The read handler is used if defined, otherwise the last stored value is returned."""

        return await self._dispatcher.read_property(name)

    @_alive_only
    async def write_property(self, name, value):
        """Takes the Property name as the name argument and the new value as the
        value argument and updates the Property after validating the value."""

        await self._dispatcher.write_property(name, value)

    @_alive_only
    async def invoke_action(self, name, input_value=None):
        """Invokes an Action with the given parameters and yields with the invocation result."""

        return await self._dispatcher.invoke_action(name, input_value)

    def on_event(self, name):
        """Returns an Observable for the Event specified in the name argument,
        allowing subscribing to and unsubscribing from notifications."""

        if self._state == ThingState.DESTROYED:
            return rx.throw(DestroyedError())

        if not self._store.contains(InteractionTypes.EVENT, name):
            return rx.throw(NotFoundError("Unknown event: {}".format(name)))

        return self._hub.observable(HubChannels.EVENT, name)

    def on_property_change(self, name):
        """Returns an Observable for the Property specified in the name argument,
        allowing subscribing to and unsubscribing from notifications."""

        if self._state == ThingState.DESTROYED:
            return rx.throw(DestroyedError())

        if not self._store.contains(InteractionTypes.PROPERTY, name):
            return rx.throw(NotFoundError("Unknown property: {}".format(name)))

        prop = self._store.get(InteractionTypes.PROPERTY, name)

        if not prop.interaction_fragment.observable:
            return rx.throw(NotAllowedError("Property is not observable: {}".format(name)))

        return self._hub.observable(HubChannels.PROPERTY_CHANGE, name)

    def on_td_change(self):
        """Returns an Observable, allowing subscribing to and unsubscribing
        from notifications to the Thing Description."""

        if self._state == ThingState.DESTROYED:
            return rx.throw(DestroyedError())

        return self._hub.observable(HubChannels.TD_CHANGE, None)

    @_alive_only
    def expose(self):
        """Start serving external requests for the Thing, so that
        WoT interactions using Properties, Actions and Events will be possible."""

        self._servient.enable_exposed_thing(self._thing.id)
        self._state = ThingState.EXPOSED

        return self

    start = expose

    @_alive_only
    def destroy(self):
        """Stop serving external requests for the Thing and destroy the object.
        The Thing is removed from the Servient and all the subscriptions are completed.
        Note that eventual unregistering should be done before invoking this method."""

        self._state = ThingState.DESTROYED

        try:
            self._servient.destroy_exposed_thing(self._thing.id)
        except NotFoundError:
            self._logr.debug("ExposedThing {} was not registered".format(self._thing.id))

        self._hub.complete_all()

        return self

    stop = destroy

    @_alive_only
    def emit_event(self, event_name, payload=None):
        """Emits an the event initialized with the event name specified by
        the event_name argument and data specified by the payload argument.
        The payload is validated against the data schema of the Event."""

        event = self._store.get(InteractionTypes.EVENT, event_name)
        data_schema = event.interaction_fragment.data

        if data_schema is not None:
            data_schema.validate(payload)

        self._hub.emit(HubChannels.EVENT, event_name, EmittedEvent(name=event_name, init=payload))

    @_alive_only
    def add_property(self, name, property_init, value=None, read_handler=None, write_handler=None):
        """Adds a Property defined by the argument and updates the Thing Description.
        Takes a PropertyFragmentDict (or a dict), an optional initial value and
        optional read and write handlers for the new Property."""

        self._add_interaction(InteractionTypes.PROPERTY, name, property_init, value=value)

        if read_handler:
            self.set_property_read_handler(name, read_handler)

        if write_handler:
            self.set_property_write_handler(name, write_handler)

        return self

    @_created_only
    def remove_property(self, name):
        """Removes the Property specified by the name argument,
        updates the Thing Description and returns the object."""

        self._remove_interaction(InteractionTypes.PROPERTY, name)

        return self

    @_alive_only
    def add_action(self, name, action_init, action_handler=None):
        """Adds an Action to the Thing object as defined by the action
        argument of type ActionFragmentDict and updates the Thing Description."""

        self._add_interaction(InteractionTypes.ACTION, name, action_init)

        if action_handler:
            self.set_action_handler(name, action_handler)

        return self

    @_created_only
    def remove_action(self, name):
        """Removes the Action specified by the name argument,
        updates the Thing Description and returns the object."""

        self._remove_interaction(InteractionTypes.ACTION, name)

        return self

    @_alive_only
    def add_event(self, name, event_init):
        """Adds an event to the Thing object as defined by the event argument
        of type EventFragmentDict and updates the Thing Description."""

        self._add_interaction(InteractionTypes.EVENT, name, event_init)

        return self

    @_created_only
    def remove_event(self, name):
        """Removes the event specified by the name argument,
        updates the Thing Description and returns the object."""

        self._remove_interaction(InteractionTypes.EVENT, name)

        return self

    @_alive_only
    def set_action_handler(self, name, action_handler):
        """Sets the handler function for the Action matched by name
        (or for all the Actions when name is the wildcard).
        Returns a reference to the same object for supporting chaining."""

        return self._set_handler(HandlerKeys.INVOKE_ACTION, name, action_handler)

    @_alive_only
    def set_property_read_handler(self, name, read_handler):
        """Sets the handler function for reading the Property matched by name
        (or all the Properties when name is the wildcard).
        Returns a reference to the same object for supporting chaining."""

        return self._set_handler(HandlerKeys.RETRIEVE_PROPERTY, name, read_handler)

    @_alive_only
    def set_property_write_handler(self, name, write_handler):
        """Sets the handler function for writing the Property matched by name
        (or all the Properties when name is the wildcard).
        Returns a reference to the same object for supporting chaining."""

        return self._set_handler(HandlerKeys.UPDATE_PROPERTY, name, write_handler)

    @_alive_only
    async def register(self, directory_url):
        """Registers the Thing Description of this ExposedThing in a Thing Directory."""

        await self._servient.directory_client.register(directory_url, self.get_thing_description())

    @_alive_only
    async def unregister(self, directory_url):
        """Removes the Thing Description of this ExposedThing from a Thing Directory."""

        await self._servient.directory_client.unregister(directory_url, self._thing.id)

    def subscribe(self, *args, **kwargs):
        """Subscribes to changes on the TD of this thing."""

        return self.on_td_change().subscribe(*args, **kwargs)
