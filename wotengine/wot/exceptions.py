#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Exceptions raised by the interaction model when serving requests on Things.
"""


class InteractionModelException(Exception):
    """Base Exception for all errors raised by the interaction model."""

    DEFAULT_MSG = "Interaction model error"

    def __init__(self, *args, **kwargs):
        if not (args or kwargs):
            args = (self.DEFAULT_MSG,)

        super(InteractionModelException, self).__init__(*args, **kwargs)


class NotFoundError(InteractionModelException):
    """Exception raised when an interaction or Thing does not exist."""

    DEFAULT_MSG = "Not found"


class UndefinedHandlerError(NotFoundError):
    """Exception raised when invoking an Action that has no handler."""

    DEFAULT_MSG = "Undefined action handler"


class AlreadyExistsError(InteractionModelException):
    """Exception raised when adding an interaction or Thing that already exists."""

    DEFAULT_MSG = "Already exists"


class NotAllowedError(InteractionModelException):
    """Exception raised when the requested operation is not
    permitted (e.g. writing to a read-only Property)."""

    DEFAULT_MSG = "Operation not allowed"


class DestroyedError(NotAllowedError):
    """Exception raised on any operation on an ExposedThing that has been destroyed."""

    DEFAULT_MSG = "The ExposedThing has been destroyed"


class SchemaViolationError(InteractionModelException, ValueError):
    """Exception raised when a value does not conform to a DataSchema.
    The path attribute points to the offending item in nested values."""

    DEFAULT_MSG = "Value does not conform to the DataSchema"

    def __init__(self, *args, **kwargs):
        self.path = kwargs.pop("path", None) or []
        super(SchemaViolationError, self).__init__(*args, **kwargs)


class HandlerFailureError(InteractionModelException):
    """Exception raised when a user handler raises an error.
    The original error is available in the cause attribute."""

    DEFAULT_MSG = "Handler failure"

    def __init__(self, *args, **kwargs):
        self.cause = kwargs.pop("cause", None)

        if not args and self.cause is not None:
            args = ("{}: {!r}".format(self.DEFAULT_MSG, self.cause),)

        super(HandlerFailureError, self).__init__(*args, **kwargs)


class DiscoveryTimeoutError(InteractionModelException):
    """Exception raised when a discovery process does not finish in the given time."""

    DEFAULT_MSG = "Discovery timeout"
