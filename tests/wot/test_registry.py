#!/usr/bin/env python
# -*- coding: utf-8 -*-

import threading
import uuid

import pytest
from faker import Faker

from wotengine.wot.exceptions import AlreadyExistsError, NotFoundError
from wotengine.wot.exposed.registry import ThingRegistry
from wotengine.wot.exposed.thing import ExposedThing
from wotengine.wot.servient import Servient
from wotengine.wot.thing import Thing


def _build_exposed_thing(name=None):
    return ExposedThing(
        servient=Servient(),
        thing=Thing(id=uuid.uuid4().urn, name=name or Faker().pystr()))


def test_add_find_remove():
    """ExposedThings can be added, found by ID, URL name or name and removed."""

    registry = ThingRegistry()
    exp_thing = _build_exposed_thing()

    registry.add(exp_thing)

    assert registry.contains(exp_thing)
    assert registry.find_by_thing_id(exp_thing.id) is exp_thing
    assert registry.find_by_thing_id(exp_thing.thing.url_name) is exp_thing
    assert registry.find_by_name(exp_thing.name) is exp_thing
    assert registry.find_by_thing_id(uuid.uuid4().urn) is None
    assert registry.find_by_name(Faker().pystr() + "-missing") is None

    assert registry.remove(exp_thing.id) is exp_thing
    assert not registry.contains(exp_thing)

    with pytest.raises(NotFoundError):
        registry.remove(exp_thing.id)


def test_duplicated_ids():
    """A registry can not contain two ExposedThings with the same Thing ID."""

    registry = ThingRegistry()
    exp_thing = _build_exposed_thing()

    registry.add(exp_thing)

    duplicate = ExposedThing(servient=Servient(), thing=Thing(id=exp_thing.id))

    with pytest.raises(AlreadyExistsError):
        registry.add(duplicate)

    assert registry.find_by_thing_id(exp_thing.id) is exp_thing


def test_destroyed_ids():
    """IDs of destroyed ExposedThings are remembered until the ID is registered again."""

    registry = ThingRegistry()
    exp_thing_removed = _build_exposed_thing()
    exp_thing_destroyed = _build_exposed_thing()

    registry.add(exp_thing_removed)
    registry.add(exp_thing_destroyed)

    registry.remove(exp_thing_removed.id)
    registry.remove(exp_thing_destroyed.thing.url_name, destroyed=True)

    assert not registry.is_destroyed(exp_thing_removed.id)
    assert registry.is_destroyed(exp_thing_destroyed.id)
    assert registry.is_destroyed(exp_thing_destroyed.thing.url_name)
    assert registry.find_by_thing_id(exp_thing_destroyed.id) is None

    registry.add(exp_thing_destroyed)

    assert not registry.is_destroyed(exp_thing_destroyed.id)
    assert registry.find_by_thing_id(exp_thing_destroyed.id) is exp_thing_destroyed


def test_snapshot():
    """Snapshots are not affected by later changes in the registry."""

    registry = ThingRegistry()
    exp_things = [_build_exposed_thing() for _ in range(3)]

    for item in exp_things:
        registry.add(item)

    snapshot = registry.snapshot()

    registry.remove(exp_things[0].id)

    assert len(snapshot) == 3
    assert len(registry.exposed_things) == 2


def test_concurrent_add():
    """ExposedThings may be added from multiple threads."""

    registry = ThingRegistry()
    exp_things = [_build_exposed_thing() for _ in range(20)]

    threads = [threading.Thread(target=registry.add, args=(item,)) for item in exp_things]

    for thread in threads:
        thread.start()

    for thread in threads:
        thread.join(5)

    assert sorted(item.id for item in registry.snapshot()) == sorted(item.id for item in exp_things)
