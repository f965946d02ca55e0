#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Client for Thing Directories that store Thing Descriptions over HTTP.
"""

import json
import logging
import urllib.parse

from tornado.httpclient import AsyncHTTPClient, HTTPRequest

from wotengine.wot.constants import DIRECTORY_THINGS_PATH

DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_REQUEST_TIMEOUT = 20.0


class DirectoryClient(object):
    """Registers, unregisters and searches Thing Descriptions in a Thing Directory.
    The Things collection of a directory is located under the /things path."""

    JSON_HEADERS = {"Content-Type": "application/json"}

    def __init__(self, connect_timeout=DEFAULT_CONNECT_TIMEOUT, request_timeout=DEFAULT_REQUEST_TIMEOUT):
        self._connect_timeout = connect_timeout
        self._request_timeout = request_timeout
        self._logr = logging.getLogger(__name__)

    @classmethod
    def things_url(cls, directory_url, thing_id=None):
        """Returns the URL of the Things collection or of a single Thing in the directory."""

        url = "{}/{}".format(directory_url.rstrip("/"), DIRECTORY_THINGS_PATH)

        if thing_id is None:
            return url

        return "{}/{}".format(url, urllib.parse.quote(thing_id, safe=""))

    def _build_request(self, url, method="GET", body=None):
        return HTTPRequest(
            url,
            method=method,
            body=body,
            headers=self.JSON_HEADERS if body is not None else None,
            connect_timeout=self._connect_timeout,
            request_timeout=self._request_timeout)

    async def register(self, directory_url, td_doc):
        """Stores the given TD (dict) in the directory under its Thing ID."""

        url = self.things_url(directory_url, td_doc["id"])
        http_client = AsyncHTTPClient()
        http_request = self._build_request(url, method="PUT", body=json.dumps(td_doc))

        await http_client.fetch(http_request)

        self._logr.debug("Registered {} in directory {}".format(td_doc["id"], directory_url))

    async def unregister(self, directory_url, thing_id):
        """Removes the TD with the given Thing ID from the directory."""

        url = self.things_url(directory_url, thing_id)
        http_client = AsyncHTTPClient()
        http_request = self._build_request(url, method="DELETE")

        await http_client.fetch(http_request)

        self._logr.debug("Unregistered {} from directory {}".format(thing_id, directory_url))

    async def search(self, directory_url, query=None):
        """Returns the list of TD documents in the directory that match the
        optional query (which is evaluated by the directory itself).
        The directory may answer with a list of TDs or a dict of TDs by Thing ID."""

        url = self.things_url(directory_url)

        if query is not None:
            url = "{}?{}".format(url, urllib.parse.urlencode({"query": query}))

        http_client = AsyncHTTPClient()
        http_response = await http_client.fetch(self._build_request(url))
        body = json.loads(http_response.body)

        if isinstance(body, dict):
            return list(body.values())

        return list(body)
