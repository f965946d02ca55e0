#!/usr/bin/env python
# -*- coding: utf-8 -*-

import uuid

from faker import Faker

from tests.utils import find_free_port, run_test_coroutine
from wotengine.wot.discovery.directory import DirectoryClient


def test_things_url():
    """Thing IDs are escaped in the URLs of the directory."""

    assert DirectoryClient.things_url("http://dir.example.com/") == "http://dir.example.com/things"
    assert DirectoryClient.things_url("http://dir.example.com") == "http://dir.example.com/things"

    assert DirectoryClient.things_url("http://dir.example.com", "urn:dev:lamp/1") == \
        "http://dir.example.com/things/urn%3Adev%3Alamp%2F1"


def test_register_search_unregister(directory_app):
    """TDs can be stored, searched and removed in a Thing Directory."""

    app_port = find_free_port()
    directory_app.listen(app_port)
    directory_url = "http://localhost:{}".format(app_port)

    client = DirectoryClient()

    td_lamp = {"id": uuid.uuid4().urn, "name": "lamp-" + Faker().pystr()}
    td_sensor = {"id": uuid.uuid4().urn, "name": "sensor-" + Faker().pystr()}

    async def test_coroutine():
        assert (await client.search(directory_url)) == []

        await client.register(directory_url, td_lamp)
        await client.register(directory_url, td_sensor)

        assert directory_app.directory_state.things[td_lamp["id"]] == td_lamp

        found = await client.search(directory_url)

        assert sorted(item["id"] for item in found) == sorted([td_lamp["id"], td_sensor["id"]])

        found_query = await client.search(directory_url, query="sensor-")

        assert found_query == [td_sensor]

        await client.unregister(directory_url, td_sensor["id"])

        assert (await client.search(directory_url)) == [td_lamp]

    run_test_coroutine(test_coroutine)
