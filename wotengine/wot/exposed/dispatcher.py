#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Dispatching of read, write and invoke requests to the user handlers of an ExposedThing.
"""

import asyncio
import logging
import uuid

from wotengine.utils.futures import resolve
from wotengine.wot.enums import InteractionTypes, InteractionVerbs, HandlerKeys, RequestState, HubChannels
from wotengine.wot.events import PropertyChangeEmittedEvent, PropertyChangeEventInit
from wotengine.wot.exceptions import \
    NotAllowedError, \
    SchemaViolationError, \
    UndefinedHandlerError, \
    HandlerFailureError


class InteractionRequest(object):
    """An inbound request on an interaction that moves through the states
    received, validating, executing and then completed or failed."""

    TRANSITIONS = {
        RequestState.RECEIVED: {RequestState.VALIDATING, RequestState.FAILED},
        RequestState.VALIDATING: {RequestState.EXECUTING, RequestState.FAILED},
        RequestState.EXECUTING: {RequestState.COMPLETED, RequestState.FAILED},
        RequestState.COMPLETED: set(),
        RequestState.FAILED: set()
    }

    def __init__(self, verb, name, payload=None):
        self.id = uuid.uuid4().hex
        self.verb = verb
        self.name = name
        self.payload = payload
        self.result = None
        self.error = None
        self._state = RequestState.RECEIVED
        self._logr = logging.getLogger(__name__)

    def __str__(self):
        return "<{}> {} {} ({})".format(self.__class__.__name__, self.verb, self.name, self._state)

    @property
    def state(self):
        """Current state of the request."""

        return self._state

    @property
    def is_finished(self):
        """True if the request is in a terminal state."""

        return not self.TRANSITIONS[self._state]

    def transition(self, state):
        """Moves the request to the given state.
        Raises RuntimeError on transitions that are not permitted."""

        if state not in self.TRANSITIONS[self._state]:
            raise RuntimeError("Illegal request transition: {} -> {}".format(self._state, state))

        self._logr.debug("Request {} ({}): {} -> {}".format(self.id, self.name, self._state, state))
        self._state = state

    def complete(self, result=None):
        """Finishes the request successfully."""

        self.transition(RequestState.COMPLETED)
        self.result = result

    def fail(self, error):
        """Finishes the request with the given error."""

        self.transition(RequestState.FAILED)
        self.error = error


class RequestDispatcher(object):
    """Validates inbound requests against the interactions in the
    InteractionStore and runs the matching user handlers.

    Requests are rejected before any handler runs when the interaction
    does not exist, the operation is not allowed or the payload does not
    conform to the schema. Errors raised by handlers are wrapped in
    HandlerFailureError and never retried."""

    def __init__(self, store, hub):
        self._store = store
        self._hub = hub
        self._logr = logging.getLogger(__name__)

    @classmethod
    async def _call_handler(cls, handler, *args):
        """Calls a user handler and waits for its result, wrapping any error."""

        try:
            return await resolve(handler(*args))
        except asyncio.CancelledError:
            raise
        except Exception as ex:
            raise HandlerFailureError(cause=ex) from ex

    async def _run(self, request, validate, execute):
        """Drives a request through its states running the given validation and execution steps."""

        try:
            request.transition(RequestState.VALIDATING)
            context = validate()
            request.transition(RequestState.EXECUTING)
            result = await execute(context)
        except (Exception, asyncio.CancelledError) as ex:
            if not request.is_finished:
                request.fail(ex)

            self._logr.debug("Request {} failed: {!r}".format(request, ex))

            raise

        request.complete(result)

        return result

    async def read_property(self, name):
        """Returns the value of a Property.
        The read handler is used if defined (and refreshes the cached value
        without notifying observers); otherwise the cached value is returned."""

        request = InteractionRequest(InteractionVerbs.READ_PROPERTY, name)

        def validate():
            self._store.get(InteractionTypes.PROPERTY, name)
            return self._store.resolve_handler(HandlerKeys.RETRIEVE_PROPERTY, name)

        async def execute(handler):
            if handler is None:
                return self._store.get_value(name)

            value = await self._call_handler(handler, name)

            async with self._store.property_lock(name):
                self._store.set_value(name, value)

            return value

        return await self._run(request, validate, execute)

    async def write_property(self, name, value):
        """Updates the value of a Property.
        The write handler runs first if defined; the new value is then committed
        to the cache and a property change is notified under the Property lock."""

        request = InteractionRequest(InteractionVerbs.WRITE_PROPERTY, name, payload=value)

        def validate():
            prop = self._store.get(InteractionTypes.PROPERTY, name)

            if not prop.interaction_fragment.writable:
                raise NotAllowedError("Property is not writable: {}".format(name))

            prop.interaction_fragment.data_schema.validate(value)

            return self._store.resolve_handler(HandlerKeys.UPDATE_PROPERTY, name)

        async def execute(handler):
            if handler is not None:
                await self._call_handler(handler, name, value)

            async with self._store.property_lock(name):
                old_value = self._store.get_value(name)
                self._store.set_value(name, value)
                event_init = PropertyChangeEventInit(name=name, value=value, old_value=old_value)
                self._hub.emit(HubChannels.PROPERTY_CHANGE, name, PropertyChangeEmittedEvent(init=event_init))

        await self._run(request, validate, execute)

    async def invoke_action(self, name, input_value=None):
        """Invokes an Action and returns its result.
        The result is None for Actions without an output schema."""

        request = InteractionRequest(InteractionVerbs.INVOKE_ACTION, name, payload=input_value)

        def validate():
            action = self._store.get(InteractionTypes.ACTION, name)
            input_schema = action.interaction_fragment.input

            if input_schema is not None:
                input_schema.validate(input_value)
            elif input_value is not None:
                raise SchemaViolationError("Action <{}> does not accept input".format(name))

            handler = self._store.resolve_handler(HandlerKeys.INVOKE_ACTION, name)

            if handler is None:
                raise UndefinedHandlerError("Undefined action handler: {}".format(name))

            return action, handler

        async def execute(context):
            action, handler = context
            result = await self._call_handler(handler, {"name": name, "input": input_value})
            output_schema = action.interaction_fragment.output

            if output_schema is None:
                return None

            try:
                output_schema.validate(result)
            except SchemaViolationError as ex:
                raise HandlerFailureError(cause=ex) from ex

            return result

        return await self._run(request, validate, execute)
