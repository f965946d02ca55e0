#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Enumeration classes related to the protocol bindings.
"""

from wotengine.utils.enums import EnumListMixin


class Protocols(EnumListMixin):
    """Enumeration of protocol types."""

    LOCAL = "local"
