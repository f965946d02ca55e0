#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Base class for the transports that discover Things on the network.
"""

from abc import ABCMeta, abstractmethod


class BaseDiscoveryTransport(object, metaclass=ABCMeta):
    """Base class for discovery transports (e.g. multicast or nearby discovery).
    Transports are registered in the Servient for one discovery method."""

    @property
    @abstractmethod
    def method(self):
        """Discovery method (an item of DiscoveryMethod or an arbitrary string)
        that is served by this transport."""

        raise NotImplementedError()

    @abstractmethod
    def solicit(self, thing_filter):
        """Starts a discovery process for the given ThingFilterDict.
        Returns an Observable that emits TD documents (as str or dict)
        and completes when the transport has finished searching."""

        raise NotImplementedError()
