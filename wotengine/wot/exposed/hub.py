#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Notification hub that delivers property changes, events and TD changes to subscribers.
"""

import logging
import threading

import rx
from rx.disposable import Disposable


class HubSubscription(object):
    """A subscription to one channel and key of an ObservableHub.

    Once cancel() returns no new invocation of the callbacks starts, even when the
    subscription is cancelled from inside its own callback. The lock only guards the
    active flag and is never held while a callback runs, so a delivery already in
    progress on another thread may still finish after cancel() returns."""

    def __init__(self, hub, channel, key, on_next, on_completed=None):
        self._hub = hub
        self._channel = channel
        self._key = key
        self._on_next = on_next
        self._on_completed = on_completed
        self._lock = threading.Lock()
        self._active = True
        self._logr = logging.getLogger(__name__)

    @property
    def channel(self):
        """Channel of this subscription."""

        return self._channel

    @property
    def key(self):
        """Key (interaction name) of this subscription."""

        return self._key

    @property
    def active(self):
        """True until the subscription is cancelled or completed."""

        with self._lock:
            return self._active

    def deliver(self, item):
        """Invokes the next callback unless the subscription is no longer active.
        Errors raised by the callback are logged and do not reach the emitter."""

        with self._lock:
            if not self._active:
                return

        try:
            self._on_next(item)
        except Exception as ex:
            self._logr.warning(
                "Subscriber of ({}, {}) failed: {!r}".format(self._channel, self._key, ex),
                exc_info=True)

    def complete(self):
        """Ends the subscription signalling that no more items will be delivered."""

        with self._lock:
            if not self._active:
                return

            self._active = False

        if self._on_completed:
            self._on_completed()

    def cancel(self):
        """Cancels the subscription synchronously."""

        with self._lock:
            self._active = False

        self._hub.remove(self)


class ObservableHub(object):
    """Keeps the subscribers of each (channel, key) pair.

    Emission takes a snapshot of the subscribers so that subscribing
    and cancelling are safe from inside callbacks and from other threads."""

    def __init__(self):
        self._lock = threading.RLock()
        self._subscriptions = {}
        self._completed = False
        self._logr = logging.getLogger(__name__)

    @property
    def completed(self):
        """True once complete_all() has been called."""

        with self._lock:
            return self._completed

    def subscribe(self, channel, key, on_next, on_completed=None):
        """Adds a subscriber to the given channel and key and returns its HubSubscription."""

        sub = HubSubscription(
            hub=self, channel=channel, key=key,
            on_next=on_next, on_completed=on_completed)

        with self._lock:
            completed = self._completed

            if not completed:
                self._subscriptions.setdefault((channel, key), []).append(sub)

        if completed:
            sub.complete()

        return sub

    def remove(self, sub):
        """Removes the given subscription from the hub."""

        with self._lock:
            subs = self._subscriptions.get((sub.channel, sub.key), [])

            if sub in subs:
                subs.remove(sub)

            if not subs:
                self._subscriptions.pop((sub.channel, sub.key), None)

    def subscriber_count(self, channel, key):
        """Number of active subscribers for the given channel and key."""

        with self._lock:
            return len(self._subscriptions.get((channel, key), []))

    def emit(self, channel, key, item):
        """Delivers the item to every subscriber of the given channel and key."""

        with self._lock:
            subs = list(self._subscriptions.get((channel, key), []))

        for sub in subs:
            sub.deliver(item)

    def complete_all(self):
        """Completes every subscription. Later subscriptions complete immediately."""

        with self._lock:
            self._completed = True
            subs = [sub for items in self._subscriptions.values() for sub in items]
            self._subscriptions = {}

        for sub in subs:
            sub.complete()

    def observable(self, channel, key):
        """Returns an Observable that subscribes to the given channel and key.
        Disposing the subscription to the Observable cancels the hub subscription."""

        def subscribe(observer, scheduler=None):
            sub = self.subscribe(
                channel, key,
                on_next=observer.on_next,
                on_completed=observer.on_completed)

            return Disposable(sub.cancel)

        return rx.create(subscribe)
