#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Matching of Thing Descriptions against ThingFilters and the discovery
processes that search the local Servient, directories and transports.
"""

import logging

import rx
import rx.operators as ops
import tornado.ioloop
from rx.disposable import Disposable, CompositeDisposable

from wotengine.utils.utils import handle_observer_finalization
from wotengine.wot.dictionaries.filter import ThingFilterDict
from wotengine.wot.enums import DiscoveryMethod
from wotengine.wot.exceptions import DiscoveryTimeoutError
from wotengine.wot.td import ThingDescription
from wotengine.wot.validation import InvalidDescription


def is_fragment_match(fragment, td_doc):
    """Returns True if the TD document contains every key of the fragment.
    Nested dicts are matched recursively and any other value must be equal.
    An empty or None fragment matches every TD."""

    if not fragment:
        return True

    for key, expected in fragment.items():
        if key not in td_doc:
            return False

        actual = td_doc[key]

        if isinstance(expected, dict):
            if not isinstance(actual, dict) or not is_fragment_match(expected, actual):
                return False
        elif actual != expected:
            return False

    return True


class DiscoveryMatcher(object):
    """Builds the Observables that search for Things that match a ThingFilter.

    Every subscription starts a new discovery process.
    Disposing the subscription stops the emission of results."""

    def __init__(self, servient):
        self._servient = servient
        self._logr = logging.getLogger(__name__)

    def _to_td(self, doc):
        """Returns a ThingDescription for the given document or None if it is invalid."""

        if isinstance(doc, ThingDescription):
            return doc

        try:
            return ThingDescription(doc)
        except InvalidDescription as ex:
            self._logr.warning("Discarded invalid TD in discovery: {}".format(ex))
            return None

    def _build_predicate(self, thing_filter, use_query):
        """Returns the function that decides if a ThingDescription is a discovery result."""

        query_evaluator = self._servient.query_evaluator

        def predicate(td):
            if td is None:
                return False

            td_doc = td.to_dict()

            if not is_fragment_match(thing_filter.fragment, td_doc):
                return False

            if use_query and thing_filter.query is not None:
                return bool(query_evaluator(thing_filter.query, td_doc))

            return True

        return predicate

    def _build_local_observable(self, thing_filter):
        """Builds an Observable to discover the exposed Things of the local Servient.
        The registry is read when the subscription starts."""

        predicate = self._build_predicate(thing_filter, use_query=True)

        def subscribe(observer, scheduler=None):
            state = {"stop": False}
            exposed_things = [
                item for item in self._servient.registry.snapshot()
                if item.is_exposed
            ]

            @handle_observer_finalization(observer, state)
            async def callback():
                for exposed_thing in exposed_things:
                    if state["stop"]:
                        return

                    td = exposed_thing.thing_description

                    if predicate(td):
                        observer.on_next(td)

            def unsubscribe():
                state["stop"] = True

            tornado.ioloop.IOLoop.current().add_callback(callback)

            return Disposable(unsubscribe)

        return rx.create(subscribe)

    def _build_directory_observable(self, thing_filter):
        """Builds an Observable to discover Things registered in a Thing Directory.
        The query is forwarded to the directory."""

        predicate = self._build_predicate(thing_filter, use_query=False)
        directory_client = self._servient.directory_client

        def subscribe(observer, scheduler=None):
            state = {"stop": False}

            @handle_observer_finalization(observer, state)
            async def callback():
                docs = await directory_client.search(thing_filter.url, query=thing_filter.query)

                for doc in docs:
                    if state["stop"]:
                        return

                    td = self._to_td(doc)

                    if predicate(td):
                        observer.on_next(td)

            def unsubscribe():
                state["stop"] = True

            tornado.ioloop.IOLoop.current().add_callback(callback)

            return Disposable(unsubscribe)

        return rx.create(subscribe)

    def _build_transport_observable(self, transport, thing_filter):
        """Builds an Observable to discover Things using a discovery transport."""

        predicate = self._build_predicate(thing_filter, use_query=True)

        return transport.solicit(thing_filter).pipe(
            ops.map(self._to_td),
            ops.filter(predicate))

    def _build_tolerant(self, observable, source_name):
        """Returns an Observable that logs and ignores the errors of the given source."""

        def handler(ex, source):
            self._logr.warning("Discovery source <{}> failed: {!r}".format(source_name, ex))
            return rx.empty()

        return observable.pipe(ops.catch(handler))

    @classmethod
    def _with_timeout(cls, observable, timeout):
        """Returns an Observable that fails with DiscoveryTimeoutError
        if the source has not completed after the timeout (seconds)."""

        def subscribe(observer, scheduler=None):
            state = {"done": False}
            io_loop = tornado.ioloop.IOLoop.current()

            def finish():
                state["done"] = True
                io_loop.remove_timeout(timeout_handle)

            def on_error(ex):
                if not state["done"]:
                    finish()
                    observer.on_error(ex)

            def on_completed():
                if not state["done"]:
                    finish()
                    observer.on_completed()

            def on_timeout():
                if not state["done"]:
                    state["done"] = True
                    source_disposable.dispose()
                    observer.on_error(DiscoveryTimeoutError())

            timeout_handle = io_loop.call_later(timeout, on_timeout)

            source_disposable = observable.subscribe(
                on_next=observer.on_next,
                on_error=on_error,
                on_completed=on_completed)

            return CompositeDisposable(source_disposable, Disposable(finish))

        return rx.create(subscribe)

    def discover(self, thing_filter=None, timeout=None):
        """Returns an Observable that emits a ThingDescription for each
        Thing that matches the given ThingFilterDict (or dict)."""

        if thing_filter is None:
            thing_filter = ThingFilterDict()
        elif isinstance(thing_filter, dict):
            thing_filter = ThingFilterDict(thing_filter)

        method = thing_filter.method
        transports = self._servient.discovery_transports

        if method == DiscoveryMethod.DIRECTORY and not thing_filter.url:
            return rx.throw(ValueError("A directory URL is required for directory discovery"))

        if method not in (DiscoveryMethod.ANY, DiscoveryMethod.LOCAL, DiscoveryMethod.DIRECTORY) \
                and method not in transports:
            return rx.throw(NotImplementedError("Unsupported discovery method: {}".format(method)))

        needs_evaluator = method != DiscoveryMethod.DIRECTORY and thing_filter.query is not None

        if needs_evaluator and self._servient.query_evaluator is None:
            return rx.throw(NotImplementedError("Queries are only supported on Thing Directories"))

        if method == DiscoveryMethod.LOCAL:
            observable = self._build_local_observable(thing_filter)
        elif method == DiscoveryMethod.DIRECTORY:
            observable = self._build_directory_observable(thing_filter)
        elif method != DiscoveryMethod.ANY:
            observable = self._build_transport_observable(transports[method], thing_filter)
        else:
            observables = [self._build_local_observable(thing_filter)]

            if thing_filter.url:
                observables.append(self._build_tolerant(
                    self._build_directory_observable(thing_filter),
                    DiscoveryMethod.DIRECTORY))

            for transport_method, transport in transports.items():
                observables.append(self._build_tolerant(
                    self._build_transport_observable(transport, thing_filter),
                    transport_method))

            observable = rx.merge(*observables)

        if timeout is not None:
            observable = self._with_timeout(observable, timeout)

        return observable
