#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Class that represents the abstract client interface.
"""

from abc import ABCMeta, abstractmethod


class BaseProtocolClient(object, metaclass=ABCMeta):
    """Base protocol client class.
    This is the interface that must be implemented by all client classes."""

    @property
    @abstractmethod
    def protocol(self):
        """Protocol of this client instance.
        A member of the Protocols enum."""

        raise NotImplementedError()

    @abstractmethod
    def is_supported_interaction(self, td, name):
        """Returns True if the Interaction with the given
        name can be reached with this Protocol Binding client."""

        raise NotImplementedError()

    @abstractmethod
    async def invoke_action(self, td, name, input_value, timeout=None):
        """Invokes an Action on a remote Thing and returns the result."""

        raise NotImplementedError()

    @abstractmethod
    async def write_property(self, td, name, value, timeout=None):
        """Updates the value of a Property on a remote Thing."""

        raise NotImplementedError()

    @abstractmethod
    async def read_property(self, td, name, timeout=None):
        """Reads the value of a Property on a remote Thing."""

        raise NotImplementedError()

    @abstractmethod
    def on_event(self, td, name):
        """Subscribes to an event on a remote Thing.
        Returns an Observable."""

        raise NotImplementedError()

    @abstractmethod
    def on_property_change(self, td, name):
        """Subscribes to property changes on a remote Thing.
        Returns an Observable"""

        raise NotImplementedError()

    @abstractmethod
    def on_td_change(self, td):
        """Subscribes to Thing Description changes on a remote Thing.
        Returns an Observable."""

        raise NotImplementedError()
