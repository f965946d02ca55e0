#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Classes that implement the server side of Things: interaction storage,
request dispatching, notification streams and the ExposedThing interface.

.. autosummary::
    :toctree: _exposed

    wotengine.wot.exposed.dispatcher
    wotengine.wot.exposed.hub
    wotengine.wot.exposed.interactions
    wotengine.wot.exposed.registry
    wotengine.wot.exposed.store
    wotengine.wot.exposed.thing
"""
