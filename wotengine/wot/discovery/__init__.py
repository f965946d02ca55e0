#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Discovery of Things in the local Servient, Thing Directories and pluggable transports.

.. autosummary::
    :toctree: _discovery

    wotengine.wot.discovery.directory
    wotengine.wot.discovery.matcher
    wotengine.wot.discovery.transport
"""
