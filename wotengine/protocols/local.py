#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Protocol Binding client that reaches the ExposedThings of the same Servient in-process.
"""

import datetime
import logging

import rx
import tornado.gen
import tornado.util

from wotengine.protocols.client import BaseProtocolClient
from wotengine.protocols.enums import Protocols
from wotengine.protocols.exceptions import ClientRequestTimeout
from wotengine.wot.exceptions import NotFoundError, NotAllowedError, DestroyedError


class LocalProtocolClient(BaseProtocolClient):
    """Implementation of the protocol client interface that dispatches
    requests directly to the ExposedThings contained in a ThingRegistry."""

    def __init__(self, registry):
        self._registry = registry
        self._logr = logging.getLogger(__name__)

    @property
    def protocol(self):
        """Protocol of this client instance.
        A member of the Protocols enum."""

        return Protocols.LOCAL

    @classmethod
    async def _wait(cls, awaitable, timeout):
        """Awaits the given coroutine raising ClientRequestTimeout after the timeout (seconds)."""

        if timeout is None:
            return await awaitable

        try:
            return await tornado.gen.with_timeout(datetime.timedelta(seconds=timeout), awaitable)
        except tornado.util.TimeoutError:
            raise ClientRequestTimeout()

    def _find_exposed_thing(self, td):
        """Returns the ExposedThing for the given TD.
        Raises DestroyedError if the Thing has been destroyed, NotFoundError if
        it is not in the registry and NotAllowedError if it is not exposed yet."""

        if self._registry.is_destroyed(td.id):
            raise DestroyedError()

        exposed_thing = self._registry.find_by_thing_id(td.id)

        if exposed_thing is None:
            raise NotFoundError("Unknown Thing: {}".format(td.id))

        if not exposed_thing.is_exposed:
            raise NotAllowedError("Thing is not exposed: {}".format(td.id))

        return exposed_thing

    def is_supported_interaction(self, td, name):
        """Returns True if the Thing is known to the registry (including
        Things that have been destroyed) and the TD declares an interaction with the given name."""

        if self._registry.find_by_thing_id(td.id) is None and not self._registry.is_destroyed(td.id):
            return False

        return name in td.properties or name in td.actions or name in td.events

    async def invoke_action(self, td, name, input_value, timeout=None):
        """Invokes an Action on a local Thing and returns the result."""

        exposed_thing = self._find_exposed_thing(td)

        return await self._wait(exposed_thing.invoke_action(name, input_value), timeout)

    async def write_property(self, td, name, value, timeout=None):
        """Updates the value of a Property on a local Thing."""

        exposed_thing = self._find_exposed_thing(td)

        await self._wait(exposed_thing.write_property(name, value), timeout)

    async def read_property(self, td, name, timeout=None):
        """Reads the value of a Property on a local Thing."""

        exposed_thing = self._find_exposed_thing(td)

        return await self._wait(exposed_thing.read_property(name), timeout)

    def on_event(self, td, name):
        """Subscribes to an event on a local Thing."""

        try:
            return self._find_exposed_thing(td).on_event(name)
        except (NotFoundError, NotAllowedError) as ex:
            return rx.throw(ex)

    def on_property_change(self, td, name):
        """Subscribes to property changes on a local Thing."""

        try:
            return self._find_exposed_thing(td).on_property_change(name)
        except (NotFoundError, NotAllowedError) as ex:
            return rx.throw(ex)

    def on_td_change(self, td):
        """Subscribes to Thing Description changes on a local Thing."""

        try:
            return self._find_exposed_thing(td).on_td_change()
        except (NotFoundError, NotAllowedError) as ex:
            return rx.throw(ex)
