#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Exceptions raised by the protocol binding implementations.
"""


class ProtocolClientException(Exception):
    """Base Exceptions raised by clients of the protocol binding implementations."""

    DEFAULT_MSG = "Protocol client error"

    def __init__(self, *args, **kwargs):
        if not (args or kwargs):
            args = (self.DEFAULT_MSG,)

        super(ProtocolClientException, self).__init__(*args, **kwargs)


class ClientNotFoundException(ProtocolClientException):
    """Exception raised when no protocol client of
    the Servient supports the requested interaction."""

    DEFAULT_MSG = "No protocol client supports the interaction"


class ClientRequestTimeout(ProtocolClientException):
    """Exception raised when a protocol client request reaches the timeout."""

    DEFAULT_MSG = "Timeout in protocol client request"
