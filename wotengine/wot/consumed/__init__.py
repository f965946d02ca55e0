#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Classes that implement the client side of Things.

.. autosummary::
    :toctree: _consumed

    wotengine.wot.consumed.interaction_map
    wotengine.wot.consumed.thing
"""
