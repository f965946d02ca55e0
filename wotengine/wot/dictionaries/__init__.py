#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Objects defined in the Scripting API specification represented as classes that are basically dict-wrappers.

.. autosummary::
    :toctree: _dictionaries

    wotengine.wot.dictionaries.base
    wotengine.wot.dictionaries.filter
    wotengine.wot.dictionaries.interaction
    wotengine.wot.dictionaries.link
    wotengine.wot.dictionaries.schema
    wotengine.wot.dictionaries.security
    wotengine.wot.dictionaries.thing
"""
