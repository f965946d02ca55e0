#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Wrapper classes for link dictionaries defined in the Scripting API.
"""

import urllib.parse

from wotengine.wot.constants import DEFAULT_CONTENT_TYPE
from wotengine.wot.dictionaries.base import WotBaseDict
from wotengine.wot.dictionaries.security import SecuritySchemeDict


class LinkDict(WotBaseDict):
    """A Web link, as specified by IETF RFC 8288."""

    class Meta:
        fields = {
            "href",
            "type",
            "rel",
            "anchor"
        }

        required = {
            "href"
        }


class FormDict(LinkDict):
    """Communication metadata indicating where a service can be accessed
    by a client application. An interaction might have more than one form."""

    class Meta:
        fields = LinkDict.Meta.fields.union({
            "contentType",
            "op",
            "subprotocol",
            "security",
            "scopes"
        })

        required = LinkDict.Meta.required

        defaults = {
            "contentType": DEFAULT_CONTENT_TYPE
        }

    @property
    def content_type(self):
        """Media type of the payloads exchanged through this Form."""

        return self._init.get("contentType", DEFAULT_CONTENT_TYPE)

    @property
    def op(self):
        """Operation types that may be performed through this Form.
        Always returned as a list even if the document contains a single string."""

        op = self._init.get("op")

        if op is None:
            return None

        return [op] if isinstance(op, str) else list(op)

    @property
    def security(self):
        """Set of security configurations, provided as an array,
        that must all be satisfied for access to resources at or
        below the current level, if not overridden at a lower level"""

        if "security" not in self._init:
            return None

        return [SecuritySchemeDict.build(item) for item in self._init.get("security")]

    def resolve_uri(self, base=None):
        """Resolves and returns the Link URI.
        When the href does not contain a full URL the base URI is joined with said href."""

        href_parsed = urllib.parse.urlparse(self.href)

        if base and not href_parsed.scheme:
            return urllib.parse.urljoin(base, self.href)

        if href_parsed.scheme:
            return self.href

        return None
