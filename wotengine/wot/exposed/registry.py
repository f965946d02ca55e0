#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Class that represents the set of ExposedThing instances that exist in the same Servient.
"""

import logging
import threading

from wotengine.wot.exceptions import AlreadyExistsError, NotFoundError


class ThingRegistry(object):
    """Represents a group of ExposedThing objects.
    A group cannot contain two ExposedThing with the same Thing ID.
    All methods may be called from any thread and lookups return snapshots."""

    def __init__(self):
        self._exposed_things = {}
        self._destroyed_ids = set()
        self._lock = threading.Lock()
        self._logr = logging.getLogger(__name__)

    @property
    def exposed_things(self):
        """A list of all the ExposedThing contained in this registry."""

        return self.snapshot()

    def snapshot(self):
        """Returns a list with the ExposedThing objects that are currently registered."""

        with self._lock:
            return list(self._exposed_things.values())

    def contains(self, exposed_thing):
        """Returns True if this registry contains the given ExposedThing."""

        with self._lock:
            return any(item is exposed_thing for item in self._exposed_things.values())

    def add(self, exposed_thing):
        """Add a new ExposedThing to this registry.
        Raises AlreadyExistsError if the Thing ID is already registered."""

        with self._lock:
            if exposed_thing.thing.id in self._exposed_things:
                raise AlreadyExistsError("Duplicate Exposed Thing: {}".format(exposed_thing.thing.id))

            self._exposed_things[exposed_thing.thing.id] = exposed_thing
            self._destroyed_ids.discard(exposed_thing.thing.id)
            self._destroyed_ids.discard(exposed_thing.thing.url_name)

        self._logr.debug("Registered ExposedThing: {}".format(exposed_thing.thing.id))

    def remove(self, thing_id, destroyed=False):
        """Removes an existing ExposedThing by ID and returns it.
        The thing_id argument may be the original Thing ID or the URL-safe name.
        When destroyed is True the ID is remembered so that later
        lookups can tell a destroyed Thing from an unknown one."""

        with self._lock:
            exposed_thing = self._find(thing_id)

            if exposed_thing is None:
                raise NotFoundError("Unknown Exposed Thing: {}".format(thing_id))

            self._exposed_things.pop(exposed_thing.thing.id)

            if destroyed:
                self._destroyed_ids.add(exposed_thing.thing.id)
                self._destroyed_ids.add(exposed_thing.thing.url_name)

        self._logr.debug("Unregistered ExposedThing: {}".format(exposed_thing.thing.id))

        return exposed_thing

    def _find(self, thing_id):
        def is_match(exp_thing):
            return exp_thing.thing.id == thing_id or exp_thing.thing.url_name == thing_id

        return next((item for item in self._exposed_things.values() if is_match(item)), None)

    def find_by_thing_id(self, thing_id):
        """Finds an existing ExposedThing by Thing ID.
        The ID argument may be the original Thing ID or the URL-safe name
        (which is also unique and based on the ID)."""

        with self._lock:
            return self._find(thing_id)

    def find_by_name(self, name):
        """Finds the first ExposedThing whose Thing has the given name."""

        with self._lock:
            return next((item for item in self._exposed_things.values() if item.thing.name == name), None)

    def is_destroyed(self, thing_id):
        """Returns True if the Thing with the given ID (or URL-safe name)
        was destroyed and no other Thing has taken its ID since."""

        with self._lock:
            return thing_id in self._destroyed_ids
