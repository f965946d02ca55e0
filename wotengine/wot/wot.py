#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Class that serves as the WoT entrypoint.
"""

import json
import logging
import uuid

import rx.operators as ops
from tornado.httpclient import AsyncHTTPClient, HTTPRequest

from wotengine.wot.consumed.thing import ConsumedThing
from wotengine.wot.discovery.matcher import DiscoveryMatcher
from wotengine.wot.dictionaries.thing import ThingFragment
from wotengine.wot.exposed.thing import ExposedThing
from wotengine.wot.semantic import annotate
from wotengine.wot.td import ThingDescription
from wotengine.wot.thing import Thing


class WoT(object):
    """The WoT object is the API entry point and it is exposed by an
    implementation of the WoT Runtime. The WoT object does not expose
    properties, only methods for discovering, consuming and exposing a Thing."""

    def __init__(self, servient):
        self._servient = servient
        self._matcher = DiscoveryMatcher(servient=servient)
        self._logr = logging.getLogger(__name__)

    @property
    def servient(self):
        """Servient instance of this WoT entrypoint."""

        return self._servient

    def discover(self, thing_filter=None, timeout=None):
        """Starts the discovery process that will provide ConsumedThings
        that match the optional argument filter of type ThingFilter.
        Returns an Observable; each subscription starts a new discovery process
        and disposing the subscription stops it. An optional timeout (seconds)
        ends the discovery with a DiscoveryTimeoutError if it has not finished."""

        return self._matcher.discover(thing_filter, timeout=timeout).pipe(
            ops.map(lambda td: ConsumedThing(servient=self._servient, td=td)))

    async def fetch(self, url, timeout_secs=None):
        """Accepts an url argument and returns a Future
        that resolves with a Thing Description string."""

        timeout_secs = timeout_secs or self._servient.fetch_timeout

        http_client = AsyncHTTPClient()
        http_request = HTTPRequest(url, request_timeout=timeout_secs)

        http_response = await http_client.fetch(http_request)

        td_doc = json.loads(http_response.body)
        td = ThingDescription(td_doc)

        return td.to_str()

    def consume(self, td):
        """Accepts a thing description (str, dict or ThingDescription) and returns
        a ConsumedThing object instantiated based on that description."""

        td = td if isinstance(td, ThingDescription) else ThingDescription(td)

        return ConsumedThing(servient=self._servient, td=td)

    @classmethod
    def thing_from_model(cls, model):
        """Takes a ThingModel and builds a Thing.
        Raises if the model has an unexpected type."""

        expected_types = (str, dict, ThingFragment, ConsumedThing)

        if not isinstance(model, expected_types):
            raise ValueError("Expected one of: {}".format(expected_types))

        if isinstance(model, (str, dict)):
            thing = ThingDescription(doc=model).build_thing()
        elif isinstance(model, ThingFragment):
            thing = ThingDescription(doc=model.to_dict()).build_thing()
        else:
            thing = model.td.build_thing()

        return thing

    def produce(self, model):
        """Accepts a model argument of type ThingModel and returns an ExposedThing
        object, locally created based on the provided initialization parameters."""

        thing = self.thing_from_model(model)
        exposed_thing = ExposedThing(servient=self._servient, thing=thing)
        self._servient.add_exposed_thing(exposed_thing)

        return exposed_thing

    def create_thing(self, name, template=None, semantic_types=None, metadata=None):
        """Creates a new empty ExposedThing with the given name.
        An optional template (ThingFragment or dict) provides the initial
        metadata and interactions. A random URN ID is generated if the
        template does not define one. Semantic types and metadata terms
        are added to the annotations (@type, @context) of the new Thing."""

        doc = template.to_dict() if isinstance(template, ThingFragment) else dict(template or {})
        doc = annotate(doc, semantic_types=semantic_types, metadata=metadata)
        doc.setdefault("id", uuid.uuid4().urn)
        doc["name"] = name

        return self.produce(doc)

    async def produce_from_url(self, url, timeout_secs=None):
        """Return a Future that resolves to an ExposedThing created
        from the thing description retrieved from the given URL."""

        td_str = await self.fetch(url, timeout_secs=timeout_secs)
        exposed_thing = self.produce(td_str)

        return exposed_thing

    async def consume_from_url(self, url, timeout_secs=None):
        """Return a Future that resolves to a ConsumedThing created
        from the thing description retrieved from the given URL."""

        td_str = await self.fetch(url, timeout_secs=timeout_secs)
        consumed_thing = self.consume(td_str)

        return consumed_thing

    async def register(self, directory, thing):
        """Generate the Thing Description as td, given the Properties,
        Actions and Events defined for this ExposedThing object.
        Then make a request to register td to the given WoT Thing Directory."""

        await self._servient.directory_client.register(directory, thing.get_thing_description())

    async def unregister(self, directory, thing):
        """Makes a request to unregister the thing from the given WoT Thing Directory."""

        await self._servient.directory_client.unregister(directory, thing.id)
