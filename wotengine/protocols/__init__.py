#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Protocol Binding clients used by ConsumedThings to reach ExposedThings.

.. autosummary::
    :toctree: _protocols

    wotengine.protocols.client
    wotengine.protocols.enums
    wotengine.protocols.exceptions
    wotengine.protocols.local
"""
