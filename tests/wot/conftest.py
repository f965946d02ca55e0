#!/usr/bin/env python
# -*- coding: utf-8 -*-

import json
import uuid

import pytest
import tornado.escape
import tornado.web
from faker import Faker

from tests.td_examples import TD_EXAMPLE
from tests.wot.utils import random_name
from wotengine.wot.dictionaries.interaction import PropertyFragmentDict, ActionFragmentDict, EventFragmentDict
from wotengine.wot.exposed.thing import ExposedThing
from wotengine.wot.servient import Servient
from wotengine.wot.thing import Thing


def _build_property_fragment():
    """Builds and returns a random Property init fragment."""

    return PropertyFragmentDict({
        "description": Faker().sentence(),
        "readOnly": False,
        "observable": True,
        "type": "string"
    })


def _build_event_fragment():
    """Builds and returns a random Event init fragment."""

    return EventFragmentDict({
        "description": Faker().sentence(),
        "data": {"type": "string"}
    })


def _build_action_fragment():
    """Builds and returns a random Action init fragment."""

    return ActionFragmentDict({
        "description": Faker().sentence(),
        "input": {
            "type": "string",
            "description": Faker().sentence()
        },
        "output": {
            "type": "string",
            "description": Faker().sentence()
        }
    })


@pytest.fixture
def property_fragment():
    """Builds and returns a random Property init fragment."""

    return _build_property_fragment()


@pytest.fixture
def action_fragment():
    """Builds and returns a random ActionInit."""

    return _build_action_fragment()


@pytest.fixture
def event_fragment():
    """Builds and returns a random EventInit."""

    return _build_event_fragment()


@pytest.fixture
def exposed_thing():
    """Builds and returns a random ExposedThing that is
    contained in a Servient without protocol bindings."""

    servient = Servient()

    exp_thing = ExposedThing(
        servient=servient,
        thing=Thing(id=uuid.uuid4().urn, name=Faker().user_name()))

    servient.add_exposed_thing(exp_thing)

    return exp_thing


@pytest.fixture
def consumed_exposed_pair(wot):
    """Returns a dict with two keys:
    * consumed_thing: A ConsumedThing that reaches its ExposedThing through the local client.
    * exposed_thing: The ExposedThing behind the previous ConsumedThing (for assertion purposes)."""

    exp_thing = wot.produce({
        "id": uuid.uuid4().urn,
        "name": Faker().user_name()
    })

    async def lower(parameters):
        return str(parameters.get("input")).lower()

    exp_thing.add_property(random_name(), _build_property_fragment(), value=Faker().pystr())
    exp_thing.add_action(random_name(), _build_action_fragment(), lower)
    exp_thing.add_event(random_name(), _build_event_fragment())
    exp_thing.expose()

    return {
        "consumed_thing": wot.consume(exp_thing.get_thing_description()),
        "exposed_thing": exp_thing
    }


@pytest.fixture
def td_example_tornado_app():
    """Builds a Tornado web application with a simple handler
    that exposes the example Thing Description document."""

    # noinspection PyAbstractClass
    class TDHandler(tornado.web.RequestHandler):
        """Dummy handler to fetch a JSON-serialized TD document."""

        def get(self):
            self.write(TD_EXAMPLE)

    return tornado.web.Application([(r"/", TDHandler)])


class DirectoryState(object):
    """Storage of a fake Thing Directory that records the requests it receives."""

    def __init__(self):
        self.things = {}
        self.queries = []


@pytest.fixture
def directory_app():
    """Builds a Tornado web application that behaves as a minimal Thing Directory.
    Queries are matched as substrings of the serialized TDs."""

    state = DirectoryState()

    # noinspection PyAbstractClass
    class ThingsHandler(tornado.web.RequestHandler):
        def get(self):
            query = self.get_argument("query", None)
            state.queries.append(query)

            docs = [
                doc for doc in state.things.values()
                if query is None or query in json.dumps(doc)
            ]

            self.set_header("Content-Type", "application/json")
            self.write(json.dumps(docs))

    # noinspection PyAbstractClass
    class ThingHandler(tornado.web.RequestHandler):
        def put(self, thing_id):
            state.things[thing_id] = tornado.escape.json_decode(self.request.body)
            self.set_status(201)

        def delete(self, thing_id):
            if thing_id not in state.things:
                raise tornado.web.HTTPError(404)

            state.things.pop(thing_id)
            self.set_status(204)

    app = tornado.web.Application([
        (r"/things", ThingsHandler),
        (r"/things/(.+)", ThingHandler)
    ])

    app.directory_state = state

    return app
