#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Classes that implement the WoT Scripting API interaction model.

.. autosummary::
    :toctree: _wot

    wotengine.wot.consumed
    wotengine.wot.dictionaries
    wotengine.wot.discovery
    wotengine.wot.exposed
    wotengine.wot.constants
    wotengine.wot.enums
    wotengine.wot.events
    wotengine.wot.exceptions
    wotengine.wot.form
    wotengine.wot.interaction
    wotengine.wot.semantic
    wotengine.wot.servient
    wotengine.wot.td
    wotengine.wot.thing
    wotengine.wot.validation
    wotengine.wot.wot
"""
