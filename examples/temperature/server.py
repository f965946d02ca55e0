#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
A simple Temperature Thing that serves as an example for how to use the
wotengine servient. The Thing is consumed in the same process to observe
the high temperature events and the threshold updates.
"""

import json
import logging
import random

import tornado.gen
from tornado.ioloop import IOLoop, PeriodicCallback

from wotengine.wot.servient import Servient

GLOBAL_TEMPERATURE = None
PERIODIC_MS = 3000
DEFAULT_TEMP_THRESHOLD = 27.0

logging.basicConfig()
LOGGER = logging.getLogger("temperature-server")
LOGGER.setLevel(logging.INFO)

ID_THING = "urn:temperaturething"
NAME_PROP_TEMP = "temperature"
NAME_PROP_TEMP_THRESHOLD = "high-temperature-threshold"
NAME_EVENT_TEMP_HIGH = "high-temperature"

DESCRIPTION = {
    "id": ID_THING,
    "name": ID_THING,
    "properties": {
        NAME_PROP_TEMP: {
            "type": "number",
            "writable": False,
            "observable": True
        },
        NAME_PROP_TEMP_THRESHOLD: {
            "type": "number",
            "minimum": 0,
            "writable": True,
            "observable": True
        }
    },
    "events": {
        NAME_EVENT_TEMP_HIGH: {
            "data": {"type": "number"}
        }
    }
}


def update_temp():
    """Updates the global temperature value."""

    global GLOBAL_TEMPERATURE
    GLOBAL_TEMPERATURE = round(random.randint(20, 30) + random.random(), 2)
    LOGGER.info("Current temperature: {}".format(GLOBAL_TEMPERATURE))


async def emit_temp_high(exp_thing):
    """Emits a 'Temperature High' event if the temperature is over the threshold."""

    temp_threshold = await exp_thing.read_property(NAME_PROP_TEMP_THRESHOLD)

    if temp_threshold and GLOBAL_TEMPERATURE > temp_threshold:
        LOGGER.info("Emitting high temperature event: {}".format(GLOBAL_TEMPERATURE))
        exp_thing.emit_event(NAME_EVENT_TEMP_HIGH, GLOBAL_TEMPERATURE)


async def temp_read_handler(property_name):
    """Custom handler for the 'Temperature' property."""

    LOGGER.info("Doing some work to simulate temperature retrieval")
    await tornado.gen.sleep(random.random() * 3.0)

    return GLOBAL_TEMPERATURE


async def main():
    update_temp()

    LOGGER.info("Starting servient")

    servient = Servient(base_url="http://localhost:9090/")
    wot = await servient.start()

    LOGGER.info("Exposing and configuring Thing")

    exposed_thing = wot.produce(json.dumps(DESCRIPTION))
    exposed_thing.set_property_read_handler(NAME_PROP_TEMP, temp_read_handler)
    await exposed_thing.properties[NAME_PROP_TEMP_THRESHOLD].write(DEFAULT_TEMP_THRESHOLD)
    exposed_thing.expose()

    LOGGER.info("Consuming Thing")

    consumed_thing = wot.consume(exposed_thing.get_thing_description())

    consumed_thing.events[NAME_EVENT_TEMP_HIGH].subscribe(
        on_next=lambda item: LOGGER.info("High temperature event: {}".format(item.data)))

    consumed_thing.properties[NAME_PROP_TEMP_THRESHOLD].subscribe(
        on_next=lambda item: LOGGER.info("Threshold updated: {}".format(item.data.value)))

    periodic_update = PeriodicCallback(update_temp, PERIODIC_MS)
    periodic_update.start()

    async def emit_for_exposed_thing():
        await emit_temp_high(exposed_thing)

    periodic_emit = PeriodicCallback(emit_for_exposed_thing, PERIODIC_MS)
    periodic_emit.start()


if __name__ == "__main__":
    LOGGER.info("Starting loop")
    IOLoop.current().add_callback(main)
    IOLoop.current().start()
