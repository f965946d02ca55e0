#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Class that represents a WoT servient.
"""

import logging
import urllib.parse

import tornado.locks

from wotengine.protocols.enums import Protocols
from wotengine.protocols.exceptions import ClientNotFoundException
from wotengine.protocols.local import LocalProtocolClient
from wotengine.wot.constants import DEFAULT_FETCH_TIMEOUT_SECS
from wotengine.wot.discovery.directory import DirectoryClient
from wotengine.wot.exceptions import NotFoundError
from wotengine.wot.exposed.registry import ThingRegistry
from wotengine.wot.wot import WoT


class Servient(object):
    """An entity that is both a WoT client and server at the same time.

    The Servient is the runtime context of the WoT entry point: it owns the registry
    of ExposedThings, the Protocol Binding clients, the Thing Directory client,
    the discovery transports and the optional query evaluator for discovery.

    Args:
        clients (list): Additional Protocol Binding clients. A client for the
            in-process local protocol is always available.
        base_url (str): Base URL used to derive the base of the ExposedThings.
        directory_client (DirectoryClient): Client for Thing Directories.
        discovery_transports (dict): :py:class:`.BaseDiscoveryTransport` instances
            by discovery method.
        query_evaluator: Function that takes a query and a TD dict and returns
            True if the TD matches the query (used on non-directory discovery).
        fetch_timeout (float): Timeout (seconds) when fetching remote TDs.
    """

    def __init__(self, clients=None, base_url=None, directory_client=None,
                 discovery_transports=None, query_evaluator=None,
                 fetch_timeout=DEFAULT_FETCH_TIMEOUT_SECS):
        if isinstance(clients, list):
            clients = {item.protocol: item for item in clients}

        self._registry = ThingRegistry()
        self._clients = dict(clients) if clients else {}
        self._base_url = base_url
        self._directory_client = directory_client if directory_client else DirectoryClient()
        self._discovery_transports = dict(discovery_transports) if discovery_transports else {}
        self._query_evaluator = query_evaluator
        self._fetch_timeout = fetch_timeout
        self._servient_lock = tornado.locks.Lock()
        self._is_running = False
        self._logr = logging.getLogger(__name__)

        if Protocols.LOCAL not in self._clients:
            self._clients[Protocols.LOCAL] = LocalProtocolClient(registry=self._registry)

    @property
    def is_running(self):
        """Returns True if the Servient has been started."""

        return self._is_running

    @property
    def registry(self):
        """Returns the ThingRegistry that contains the ExposedThings of this servient."""

        return self._registry

    @property
    def exposed_things(self):
        """Returns a list with the ExposedThings contained in this Servient."""

        return self._registry.snapshot()

    @property
    def clients(self):
        """Returns the dict of Protocol Binding clients attached to this servient."""

        return self._clients

    @property
    def default_client(self):
        """Returns the in-process Protocol Binding client."""

        return self._clients[Protocols.LOCAL]

    @property
    def base_url(self):
        """Base URL of the ExposedThings of this servient."""

        return self._base_url

    @property
    def directory_client(self):
        """Client used to talk to Thing Directories."""

        return self._directory_client

    @property
    def discovery_transports(self):
        """Dict of discovery transports by discovery method."""

        return self._discovery_transports

    @property
    def query_evaluator(self):
        """Function that evaluates discovery queries on TD documents (or None)."""

        return self._query_evaluator

    @property
    def fetch_timeout(self):
        """Timeout (seconds) for the requests that retrieve remote TDs."""

        return self._fetch_timeout

    def get_thing_base_url(self, exposed_thing):
        """Return the base URL for the given ExposedThing."""

        if exposed_thing.thing.base:
            return exposed_thing.thing.base

        if not self._base_url:
            return None

        return urllib.parse.urljoin(
            self._base_url.rstrip("/") + "/",
            "{}/".format(exposed_thing.thing.url_name))

    def select_client(self, td, name):
        """Returns the Protocol Binding client instance to
        communicate with the given Interaction."""

        client = next((
            item for item in self._clients.values()
            if item.is_supported_interaction(td, name)
        ), None)

        if client is None:
            raise ClientNotFoundException("No client for {} on {}".format(name, td.id))

        return client

    def add_client(self, client):
        """Adds a new Protocol Binding client to this servient."""

        self._clients[client.protocol] = client

    def remove_client(self, protocol):
        """Removes the Protocol Binding client with the given protocol from this servient."""

        if protocol == Protocols.LOCAL:
            raise ValueError("The local protocol client can not be removed")

        self._clients.pop(protocol, None)

    def add_discovery_transport(self, method, transport):
        """Registers a discovery transport for the given discovery method."""

        self._discovery_transports[method] = transport

    def remove_discovery_transport(self, method):
        """Removes the discovery transport of the given discovery method."""

        self._discovery_transports.pop(method, None)

    def add_exposed_thing(self, exposed_thing):
        """Adds an ExposedThing to this Servient.
        The Thing base is derived from the Servient base URL if undefined."""

        base_url = self.get_thing_base_url(exposed_thing)

        if base_url and not exposed_thing.thing.base:
            exposed_thing.thing.base = base_url

        self._registry.add(exposed_thing)

    def enable_exposed_thing(self, thing_id):
        """Checks that the ExposedThing with the given ID is contained in this Servient
        before it starts serving requests. Requests through the local client and local
        discovery only reach ExposedThings in the exposed state.
        Raises NotFoundError if the ExposedThing is not present."""

        exposed_thing = self.get_exposed_thing(thing_id)
        self._logr.debug("Exposing {}".format(exposed_thing.thing.id))

        return exposed_thing

    def remove_exposed_thing(self, thing_id):
        """Removes an ExposedThing from this Servient."""

        return self._registry.remove(thing_id)

    def destroy_exposed_thing(self, thing_id):
        """Removes a destroyed ExposedThing from this Servient.
        Later requests on the same ID fail with DestroyedError instead of being unroutable."""

        return self._registry.remove(thing_id, destroyed=True)

    def get_exposed_thing(self, thing_id):
        """Finds and returns an ExposedThing contained in this servient by Thing ID.
        Raises NotFoundError if the ExposedThing is not present."""

        exp_thing = self._registry.find_by_thing_id(thing_id)

        if exp_thing is None:
            raise NotFoundError("Unknown ExposedThing: {}".format(thing_id))

        return exp_thing

    async def start(self):
        """Starts the servient and returns an instance of the WoT object."""

        async with self._servient_lock:
            self._is_running = True
            return WoT(servient=self)

    async def shutdown(self):
        """Stops the servient destroying all the ExposedThings it contains."""

        async with self._servient_lock:
            for exposed_thing in self._registry.snapshot():
                exposed_thing.destroy()

            self._is_running = False
