#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Wrapper class for dictionaries to represent Thing filters.
"""

from wotengine.wot.dictionaries.base import WotBaseDict
from wotengine.wot.enums import DiscoveryMethod


class ThingFilterDict(WotBaseDict):
    """The ThingFilter dictionary that represents the
    constraints for discovering Things as key-value pairs."""

    class Meta:
        fields = {
            "method",
            "url",
            "query",
            "fragment"
        }

        defaults = {
            "method": DiscoveryMethod.ANY
        }

    def __init__(self, *args, **kwargs):
        super(ThingFilterDict, self).__init__(*args, **kwargs)

        # Older drafts of the Scripting API named the fragment "template"
        if "template" in self._init and "fragment" not in self._init:
            self._init["fragment"] = self._init.pop("template")

    @property
    def fragment(self):
        """Dict of key-value pairs that the TDs of the discovered Things must contain."""

        fragment = self._init.get("fragment")

        if fragment is None:
            return None

        return fragment.to_dict() if hasattr(fragment, "to_dict") else dict(fragment)
