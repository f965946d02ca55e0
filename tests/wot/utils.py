#!/usr/bin/env python
# -*- coding: utf-8 -*-

import uuid

import tornado.concurrent


def random_name():
    """Returns a random interaction name that is safe for TD documents."""

    return uuid.uuid4().hex


def assert_exposed_thing_equal(exp_thing, td_doc):
    """Asserts that the given ExposedThing is equivalent to the Thing Description dict."""

    assert exp_thing.thing.id == td_doc.get("id")
    assert exp_thing.thing.name == td_doc.get("name", None)
    assert exp_thing.thing.description == td_doc.get("description", None)
    assert sorted(exp_thing.thing.properties) == sorted(td_doc.get("properties", {}))
    assert sorted(exp_thing.thing.actions) == sorted(td_doc.get("actions", {}))
    assert sorted(exp_thing.thing.events) == sorted(td_doc.get("events", {}))


async def collect_discovery(observable):
    """Subscribes to a discovery Observable and waits until it completes.
    Returns the list of discovered items or raises the error of the Observable."""

    future_done = tornado.concurrent.Future()
    found = []

    def on_error(err):
        if not future_done.done():
            future_done.set_exception(err)

    def on_completed():
        if not future_done.done():
            future_done.set_result(True)

    subscription = observable.subscribe(
        on_next=found.append,
        on_error=on_error,
        on_completed=on_completed)

    try:
        await future_done
    finally:
        subscription.dispose()

    return found
