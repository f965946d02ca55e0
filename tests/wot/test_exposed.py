#!/usr/bin/env python
# -*- coding: utf-8 -*-

import asyncio
import uuid

import pytest
import tornado.gen
from faker import Faker
from tornado.concurrent import Future

from tests.utils import run_test_coroutine
from tests.wot.utils import random_name
from wotengine.wot.constants import WILDCARD_HANDLER
from wotengine.wot.dictionaries.interaction import PropertyFragmentDict
from wotengine.wot.enums import TDChangeMethod, TDChangeType, ThingState
from wotengine.wot.events import ThingDescriptionChangeEventInit
from wotengine.wot.exceptions import \
    AlreadyExistsError, \
    DestroyedError, \
    NotAllowedError, \
    NotFoundError, \
    SchemaViolationError, \
    UndefinedHandlerError


def _test_td_change_events(exposed_thing, property_fragment, event_fragment, action_fragment, subscribe_func):
    """Helper function to test subscriptions to TD changes."""

    async def test_coroutine():
        prop_name = random_name()
        event_name = random_name()
        action_name = random_name()

        complete_futures = {
            (TDChangeType.PROPERTY, TDChangeMethod.ADD): Future(),
            (TDChangeType.PROPERTY, TDChangeMethod.REMOVE): Future(),
            (TDChangeType.EVENT, TDChangeMethod.ADD): Future(),
            (TDChangeType.EVENT, TDChangeMethod.REMOVE): Future(),
            (TDChangeType.ACTION, TDChangeMethod.ADD): Future(),
            (TDChangeType.ACTION, TDChangeMethod.REMOVE): Future(),
            (TDChangeType.ACTION, TDChangeMethod.CHANGE): Future()
        }

        def on_next(ev):
            change_type = ev.data.td_change_type
            change_method = ev.data.method
            interaction_name = ev.data.name
            future_key = (change_type, change_method)
            complete_futures[future_key].set_result(ev.data)

            if change_method == TDChangeMethod.ADD:
                assert interaction_name in ev.data.description[change_type + "s"]

        subscription = subscribe_func(on_next=on_next)

        await tornado.gen.sleep(0)

        exposed_thing.add_event(event_name, event_fragment)

        assert complete_futures[(TDChangeType.EVENT, TDChangeMethod.ADD)].result().name == event_name
        assert not complete_futures[(TDChangeType.EVENT, TDChangeMethod.REMOVE)].done()

        exposed_thing.remove_event(name=event_name)
        exposed_thing.add_property(prop_name, property_fragment)

        prop_change = complete_futures[(TDChangeType.PROPERTY, TDChangeMethod.ADD)].result()

        assert complete_futures[(TDChangeType.EVENT, TDChangeMethod.REMOVE)].result().name == event_name
        assert prop_change.name == prop_name
        assert prop_change.data["type"] == property_fragment.type
        assert not complete_futures[(TDChangeType.PROPERTY, TDChangeMethod.REMOVE)].done()

        exposed_thing.remove_property(name=prop_name)
        exposed_thing.add_action(action_name, action_fragment)
        exposed_thing.set_action_handler(action_name, lambda params: params["input"])
        exposed_thing.remove_action(name=action_name)

        action_remove = complete_futures[(TDChangeType.ACTION, TDChangeMethod.REMOVE)].result()

        assert complete_futures[(TDChangeType.PROPERTY, TDChangeMethod.REMOVE)].result().name == prop_name
        assert complete_futures[(TDChangeType.ACTION, TDChangeMethod.ADD)].result().name == action_name
        assert complete_futures[(TDChangeType.ACTION, TDChangeMethod.CHANGE)].result().name == action_name
        assert action_remove.name == action_name
        assert action_name not in action_remove.description.get("actions", {})

        subscription.dispose()

    run_test_coroutine(test_coroutine)


def test_thing_template_getters(exposed_thing):
    """ThingTemplate properties can be accessed from the ExposedThing."""

    thing_template = exposed_thing.thing.thing_fragment

    assert exposed_thing.id == thing_template.id
    assert exposed_thing.name == thing_template.name
    assert exposed_thing.description == thing_template.description


def test_thing_template_setters(exposed_thing):
    """Metadata can be updated before exposing the Thing and is reflected in the TD."""

    description = Faker().sentence()
    td_before = exposed_thing.thing_description

    exposed_thing.description = description

    assert exposed_thing.description == description
    assert exposed_thing.thing_description is not td_before
    assert exposed_thing.get_thing_description()["description"] == description

    exposed_thing.expose()

    with pytest.raises(NotAllowedError):
        exposed_thing.description = Faker().sentence()

    assert exposed_thing.description == description


def test_read_property(exposed_thing, property_fragment):
    """Properties may be retrieved on ExposedThings."""

    async def test_coroutine():
        prop_name = random_name()
        prop_init_value = Faker().sentence()
        exposed_thing.add_property(prop_name, property_fragment, value=prop_init_value)
        value = await exposed_thing.read_property(prop_name)
        assert value == prop_init_value

        with pytest.raises(NotFoundError):
            await exposed_thing.read_property(random_name())

    run_test_coroutine(test_coroutine)


def test_write_property(exposed_thing, property_fragment):
    """Properties may be updated on ExposedThings."""

    assert property_fragment.writable

    async def test_coroutine():
        updated_val = Faker().pystr()
        prop_name = random_name()

        exposed_thing.add_property(prop_name, property_fragment)

        await exposed_thing.write_property(prop_name, updated_val)

        value = await exposed_thing.read_property(prop_name)

        assert value == updated_val

        with pytest.raises(SchemaViolationError):
            await exposed_thing.write_property(prop_name, Faker().pyint())

        assert (await exposed_thing.read_property(prop_name)) == updated_val

    run_test_coroutine(test_coroutine)


def test_write_non_writable_property(exposed_thing):
    """Attempts to write a non-writable property fail and keep the previous value."""

    async def test_coroutine():
        exposed_thing.add_property("temp", {"type": "number", "writable": False}, 21.5)

        with pytest.raises(NotAllowedError):
            await exposed_thing.write_property("temp", 22)

        assert (await exposed_thing.read_property("temp")) == 21.5

    run_test_coroutine(test_coroutine)


def test_property_handlers(exposed_thing):
    """Read and write handlers replace the default cache behaviour."""

    backend = {"value": 0}

    def read_handler(name):
        return backend["value"]

    async def write_handler(name, value):
        await tornado.gen.sleep(0)
        backend["value"] = value * 10

    async def test_coroutine():
        exposed_thing.add_property("level", {"type": "integer"}, value=1)

        ret = exposed_thing \
            .set_property_read_handler("level", read_handler) \
            .set_property_write_handler("level", write_handler)

        assert ret is exposed_thing
        assert (await exposed_thing.read_property("level")) == 0

        await exposed_thing.write_property("level", 2)

        assert backend["value"] == 20
        assert (await exposed_thing.read_property("level")) == 20

        exposed_thing.set_property_read_handler("level", None)

        assert (await exposed_thing.read_property("level")) == 2

    run_test_coroutine(test_coroutine)


def test_wildcard_handlers(exposed_thing):
    """Wildcard handlers apply to every interaction without a specific handler."""

    async def test_coroutine():
        exposed_thing.add_property("alpha", {"type": "string"}, value="a")
        exposed_thing.add_property("beta", {"type": "string"}, value="b")
        exposed_thing.add_action("upper", {"input": {"type": "string"}, "output": {"type": "string"}})
        exposed_thing.add_action("lower", {"input": {"type": "string"}, "output": {"type": "string"}})

        exposed_thing.set_property_read_handler(WILDCARD_HANDLER, lambda name: "wildcard-" + name)
        exposed_thing.set_property_read_handler("beta", lambda name: "specific")
        exposed_thing.set_action_handler(WILDCARD_HANDLER, lambda params: params["input"].upper())
        exposed_thing.set_action_handler("lower", lambda params: params["input"].lower())

        assert (await exposed_thing.read_property("alpha")) == "wildcard-alpha"
        assert (await exposed_thing.read_property("beta")) == "specific"
        assert (await exposed_thing.invoke_action("upper", "AbC")) == "ABC"
        assert (await exposed_thing.invoke_action("lower", "AbC")) == "abc"

    run_test_coroutine(test_coroutine)


def test_invoke_action(exposed_thing, action_fragment):
    """Actions can be invoked on ExposedThings."""

    def upper(parameters):
        loop = asyncio.get_event_loop()
        input_value = parameters.get("input")
        return loop.run_in_executor(None, lambda x: str(x).upper(), input_value)

    @tornado.gen.coroutine
    def lower(parameters):
        input_value = parameters.get("input")
        yield tornado.gen.sleep(0)
        raise tornado.gen.Return(str(input_value).lower())

    def title(parameters):
        input_value = parameters.get("input")
        future = Future()
        future.set_result(input_value.title())
        return future

    handlers_map = {
        upper: lambda x: x.upper(),
        lower: lambda x: x.lower(),
        title: lambda x: x.title()
    }

    async def test_coroutine():
        action_name = random_name()
        exposed_thing.add_action(action_name, action_fragment)

        for handler, assert_func in handlers_map.items():
            exposed_thing.set_action_handler(action_name, handler)
            action_arg = Faker().sentence(10)
            result = await exposed_thing.invoke_action(action_name, action_arg)
            assert result == assert_func(action_arg)

    run_test_coroutine(test_coroutine)


def test_invoke_action_undefined_handler(exposed_thing):
    """Actions with undefined handlers return an error."""

    async def test_coroutine():
        exposed_thing.add_action("reset", {"input": {"type": "null"}, "output": {"type": "boolean"}})

        with pytest.raises(UndefinedHandlerError):
            await exposed_thing.invoke_action("reset")

        async def dummy_func(parameters):
            assert parameters.get("input") is None
            return True

        exposed_thing.set_action_handler("reset", dummy_func)

        result = await exposed_thing.invoke_action("reset")

        assert result is True

    run_test_coroutine(test_coroutine)


def test_duplicated_interactions(exposed_thing, property_fragment, event_fragment):
    """Names are unique per interaction type on ExposedThings."""

    name = random_name()

    exposed_thing.add_property(name, property_fragment)

    with pytest.raises(AlreadyExistsError):
        exposed_thing.add_property(name, property_fragment)

    exposed_thing.add_event(name, event_fragment)

    assert name in exposed_thing.properties
    assert name in exposed_thing.events

    with pytest.raises(NotFoundError):
        exposed_thing.remove_action(name)


def test_on_property_change(exposed_thing, property_fragment):
    """Property changes can be observed."""

    assert property_fragment.observable

    async def test_coroutine():
        prop_name = random_name()
        exposed_thing.add_property(prop_name, property_fragment)

        observable_prop = exposed_thing.on_property_change(prop_name)

        property_values = [Faker().pystr() for _ in range(5)]

        emitted_values = []

        def on_next_property_event(ev):
            emitted_values.append(ev.data.value)

        subscription = observable_prop.subscribe(on_next=on_next_property_event)

        for val in property_values:
            await exposed_thing.write_property(prop_name, val)

        assert emitted_values == property_values

        subscription.dispose()

    run_test_coroutine(test_coroutine)


def test_on_property_change_concurrent_writes(exposed_thing):
    """Three concurrent writes deliver exactly three notifications."""

    async def test_coroutine():
        exposed_thing.add_property("temp", {"type": "number", "observable": True}, 20)

        async def write_handler(name, value):
            await tornado.gen.sleep(0.01 * (value % 3))

        exposed_thing.set_property_write_handler("temp", write_handler)

        notified = []

        subscription = exposed_thing.on_property_change("temp").subscribe(
            on_next=lambda ev: notified.append(ev.data.value))

        values = [21, 22, 23]

        await asyncio.gather(*[exposed_thing.write_property("temp", val) for val in values])

        assert sorted(notified) == values
        assert (await exposed_thing.read_property("temp")) == notified[-1]

        subscription.dispose()

    run_test_coroutine(test_coroutine)


def test_on_property_change_non_observable(exposed_thing):
    """Observe requests to non-observable properties are rejected."""

    prop_init_non_observable = PropertyFragmentDict({
        "type": "string",
        "observable": False
    })

    async def test_coroutine():
        prop_name = random_name()
        exposed_thing.add_property(prop_name, prop_init_non_observable)

        observable_prop = exposed_thing.on_property_change(prop_name)

        future_next = Future()
        future_error = Future()

        def on_next(item):
            future_next.set_result(item)

        def on_error(err):
            future_error.set_exception(err)

        subscription = observable_prop.subscribe(on_next=on_next, on_error=on_error)

        await exposed_thing.write_property(prop_name, Faker().pystr())

        with pytest.raises(NotAllowedError):
            future_error.result()

        assert not future_next.done()

        subscription.dispose()

    run_test_coroutine(test_coroutine)


def test_on_unknown_interactions(exposed_thing):
    """Subscriptions to unknown interactions fail with NotFoundError."""

    errors = []

    exposed_thing.on_event(random_name()).subscribe(on_error=errors.append)
    exposed_thing.on_property_change(random_name()).subscribe(on_error=errors.append)

    assert len(errors) == 2
    assert all(isinstance(err, NotFoundError) for err in errors)


def test_on_event(exposed_thing, event_fragment):
    """Events defined in the Thing Description can be observed."""

    event_name = random_name()
    exposed_thing.add_event(event_name, event_fragment)

    observable_event = exposed_thing.on_event(event_name)

    event_payloads = [Faker().pystr() for _ in range(5)]

    emitted_payloads = []

    def on_next_event(ev):
        emitted_payloads.append(ev.data)

    subscription = observable_event.subscribe(on_next=on_next_event)

    for val in event_payloads:
        exposed_thing.emit_event(event_name, val)

    with pytest.raises(SchemaViolationError):
        exposed_thing.emit_event(event_name, Faker().pyint())

    with pytest.raises(NotFoundError):
        exposed_thing.emit_event(random_name(), Faker().pystr())

    assert emitted_payloads == event_payloads

    subscription.dispose()


def test_event_cancel_inside_callback(exposed_thing, event_fragment):
    """Disposing a subscription inside its first callback prevents further invocations."""

    event_name = random_name()
    exposed_thing.add_event(event_name, event_fragment)

    received = []
    state = {}

    def on_next(ev):
        received.append(ev.data)
        state["subscription"].dispose()

    state["subscription"] = exposed_thing.on_event(event_name).subscribe(on_next=on_next)

    exposed_thing.emit_event(event_name, "first")
    exposed_thing.emit_event(event_name, "second")

    assert received == ["first"]


def test_on_td_change(exposed_thing, property_fragment, event_fragment, action_fragment):
    """Thing Description changes can be observed."""

    def subscribe_func(*args, **kwargs):
        return exposed_thing.on_td_change().subscribe(*args, **kwargs)

    _test_td_change_events(exposed_thing, property_fragment, event_fragment, action_fragment, subscribe_func)


def test_thing_description_cache(exposed_thing, property_fragment):
    """The Thing Description is cached until the next mutation."""

    td_01 = exposed_thing.thing_description

    assert exposed_thing.thing_description is td_01

    prop_name = random_name()
    exposed_thing.add_property(prop_name, property_fragment)

    td_02 = exposed_thing.thing_description

    assert td_02 is not td_01
    assert prop_name in td_02.properties
    assert prop_name not in td_01.properties

    td_dict = exposed_thing.get_thing_description()
    td_dict["properties"].pop(prop_name)

    assert prop_name in exposed_thing.get_thing_description()["properties"]


def test_lifecycle(exposed_thing, property_fragment, event_fragment):
    """Removals are only allowed before exposing and every operation fails once destroyed."""

    async def test_coroutine():
        servient = exposed_thing.servient
        prop_name = random_name()
        event_name = random_name()

        exposed_thing.add_property(prop_name, property_fragment)
        exposed_thing.add_event(event_name, event_fragment)

        assert exposed_thing.state == ThingState.CREATED
        assert not exposed_thing.is_exposed

        exposed_thing.expose()

        assert exposed_thing.is_exposed

        with pytest.raises(NotAllowedError):
            exposed_thing.remove_property(prop_name)

        exposed_thing.add_property(random_name(), property_fragment)

        completed = []
        exposed_thing.on_event(event_name).subscribe(on_completed=lambda: completed.append(True))

        exposed_thing.destroy()

        assert exposed_thing.state == ThingState.DESTROYED
        assert completed == [True]
        assert servient.registry.find_by_thing_id(exposed_thing.id) is None

        with pytest.raises(DestroyedError):
            await exposed_thing.read_property(prop_name)

        with pytest.raises(DestroyedError):
            await exposed_thing.write_property(prop_name, Faker().pystr())

        with pytest.raises(DestroyedError):
            exposed_thing.add_event(random_name(), event_fragment)

        with pytest.raises(DestroyedError):
            exposed_thing.remove_event(event_name)

        with pytest.raises(DestroyedError):
            exposed_thing.set_action_handler(WILDCARD_HANDLER, lambda params: None)

        with pytest.raises(DestroyedError):
            exposed_thing.expose()

        with pytest.raises(DestroyedError):
            exposed_thing.get_thing_description()

        errors = []
        exposed_thing.on_td_change().subscribe(on_error=errors.append)

        assert len(errors) == 1
        assert isinstance(errors[0], DestroyedError)

    run_test_coroutine(test_coroutine)


def test_thing_property_get(exposed_thing, property_fragment):
    """Property values can be retrieved on ExposedThings using the map-like interface."""

    async def test_coroutine():
        prop_name = random_name()
        prop_init_value = Faker().sentence()
        exposed_thing.add_property(prop_name, property_fragment, value=prop_init_value)
        value = await exposed_thing.properties[prop_name].read()
        assert value == prop_init_value

    run_test_coroutine(test_coroutine)


def test_thing_property_set(exposed_thing, property_fragment):
    """Property values can be updated on ExposedThings using the map-like interface."""

    assert property_fragment.writable

    async def test_coroutine():
        updated_val = Faker().pystr()
        prop_name = random_name()
        exposed_thing.add_property(prop_name, property_fragment)
        await exposed_thing.properties[prop_name].write(updated_val)
        value = await exposed_thing.properties[prop_name].read()
        assert value == updated_val

    run_test_coroutine(test_coroutine)


def test_thing_property_subscribe(exposed_thing, property_fragment):
    """Property updates can be observed on ExposedThings using the map-like interface."""

    assert property_fragment.observable

    async def test_coroutine():
        prop_name = random_name()
        exposed_thing.add_property(prop_name, property_fragment)

        values = [Faker().sentence() for _ in range(10)]
        values_futures = {key: Future() for key in values}

        def on_next(ev):
            value = ev.data.value
            if value in values_futures and not values_futures[value].done():
                values_futures[value].set_result(True)

        subscription = exposed_thing.properties[prop_name].subscribe(on_next=on_next)

        for val in values:
            await exposed_thing.properties[prop_name].write(val)

        await asyncio.gather(*values_futures.values())

        subscription.dispose()

    run_test_coroutine(test_coroutine)


def test_thing_property_getters(exposed_thing, property_fragment):
    """ThingProperty retrieved from ExposedThing expose the attributes
    from the Interaction, InteractionFragment and PropertyFragment interfaces."""

    prop_name = random_name()
    exposed_thing.add_property(prop_name, property_fragment, value=Faker().sentence())
    thing_property = exposed_thing.properties[prop_name]

    assert len(thing_property.forms) == 1
    assert thing_property.forms[0].href == "properties/{}".format(prop_name)
    assert thing_property.description == property_fragment.description
    assert thing_property.observable == property_fragment.observable
    assert thing_property.type == property_fragment.type
    assert len(exposed_thing.properties) == 1
    assert list(exposed_thing.properties) == [prop_name]

    with pytest.raises(KeyError):
        exposed_thing.properties[random_name()]


def test_thing_action_run(exposed_thing, action_fragment):
    """Actions can be invoked on ExposedThings using the map-like interface."""

    async def lower(parameters):
        input_value = parameters.get("input")
        return str(input_value).lower()

    async def test_coroutine():
        action_name = random_name()
        exposed_thing.add_action(action_name, action_fragment, lower)
        input_value = Faker().pystr()

        result = await exposed_thing.actions[action_name].invoke(input_value)
        result_expected = await exposed_thing.invoke_action(action_name, input_value)

        assert result == result_expected
        assert exposed_thing.actions[action_name].description == action_fragment.description

    run_test_coroutine(test_coroutine)


def test_thing_event_emit_subscribe(exposed_thing, event_fragment):
    """Events can be emitted and observed on ExposedThings using the map-like interface."""

    event_name = random_name()
    exposed_thing.add_event(event_name, event_fragment)

    payloads = []
    subscription = exposed_thing.events[event_name].subscribe(on_next=lambda ev: payloads.append(ev.data))

    payload = Faker().pystr()
    exposed_thing.events[event_name].emit(payload)

    assert payloads == [payload]

    subscription.dispose()


def test_thing_with_declared_interactions(wot):
    """ExposedThings produced from a TD keep the declared interactions usable."""

    async def test_coroutine():
        exp_thing = wot.produce({
            "id": uuid.uuid4().urn,
            "name": Faker().pystr(),
            "properties": {
                "status": {"type": "string", "observable": True}
            }
        })

        await exp_thing.write_property("status", "on")

        assert (await exp_thing.read_property("status")) == "on"

    run_test_coroutine(test_coroutine)


def test_add_property_with_handlers(exposed_thing):
    """Read and write handlers can be given when the Property is added."""

    backend = {}

    def read_handler(name):
        return backend.get(name, "unknown")

    def write_handler(name, value):
        backend[name] = value.upper()

    async def test_coroutine():
        exposed_thing.add_property(
            "mode", {"type": "string"}, value="eco",
            read_handler=read_handler, write_handler=write_handler)

        assert (await exposed_thing.read_property("mode")) == "unknown"

        await exposed_thing.write_property("mode", "boost")

        assert backend["mode"] == "BOOST"
        assert (await exposed_thing.read_property("mode")) == "BOOST"

    run_test_coroutine(test_coroutine)


def test_property_change_notification_data(exposed_thing):
    """Property change notifications carry the previous and the new value."""

    async def test_coroutine():
        exposed_thing.add_property("level", {"type": "integer", "observable": True}, value=1)

        events = []

        subscription = exposed_thing.on_property_change("level").subscribe(on_next=events.append)

        await tornado.gen.sleep(0)
        await exposed_thing.write_property("level", 2)
        await exposed_thing.write_property("level", 3)

        assert [(ev.data.old_value, ev.data.value) for ev in events] == [(1, 2), (2, 3)]
        assert events[1].to_dict()["data"] == {"name": "level", "value": 3, "oldValue": 2}
        assert events[0].timestamp <= events[1].timestamp

        subscription.dispose()

    run_test_coroutine(test_coroutine)


def test_td_change_notification_data(exposed_thing, event_fragment):
    """TD change notifications serialize to the change type, method, name and new description."""

    async def test_coroutine():
        changes = []

        subscription = exposed_thing.on_td_change().subscribe(on_next=changes.append)

        await tornado.gen.sleep(0)

        exposed_thing.add_event("alarm", event_fragment)

        change = changes[0].to_dict()["data"]

        assert change["changeType"] == TDChangeType.EVENT
        assert change["method"] == TDChangeMethod.ADD
        assert change["name"] == "alarm"
        assert "alarm" in change["newDescription"]["events"]

        subscription.dispose()

    run_test_coroutine(test_coroutine)


def test_td_change_init_validation():
    """TD change data only accepts known change types and methods."""

    with pytest.raises(ValueError):
        ThingDescriptionChangeEventInit(td_change_type=Faker().pystr(), method=TDChangeMethod.ADD, name="a")

    with pytest.raises(ValueError):
        ThingDescriptionChangeEventInit(td_change_type=TDChangeType.PROPERTY, method=Faker().pystr(), name="a")
