#!/usr/bin/env python
# -*- coding: utf-8 -*-

import pytest
import tornado.ioloop

from wotengine.wot.servient import Servient


@pytest.fixture
def servient():
    """Returns an empty WoT Servient that is shut down after the test."""

    servient = Servient(base_url="http://localhost:8080/")

    yield servient

    async def shutdown():
        await servient.shutdown()

    tornado.ioloop.IOLoop.current().run_sync(shutdown)


@pytest.fixture
def wot(servient):
    """Returns the WoT entrypoint of a started Servient."""

    async def start():
        return await servient.start()

    return tornado.ioloop.IOLoop.current().run_sync(start)
