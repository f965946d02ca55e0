#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Some utility functions for the WoT data type wrappers.
"""

from functools import wraps


def merge_args_kwargs_dict(args, kwargs):
    """Takes a tuple of args and dict of kwargs.
    Returns a dict that is the result of merging the first item
    of args (if that item is a dict) and the kwargs dict."""

    init_dict = {}

    if len(args) > 0 and isinstance(args[0], dict):
        init_dict = dict(args[0])

    init_dict.update(kwargs)

    return init_dict


def to_camel(val):
    """Takes a string and transforms it to camelCase."""

    if not isinstance(val, str):
        raise ValueError

    parts = val.split("_")
    parts = parts[:1] + [item.title() for item in parts[1:]]

    return "".join(parts)


def to_snake(val):
    """Takes a string and transforms it to snake_case."""

    if not isinstance(val, str):
        raise ValueError

    return "".join(["_" + x.lower() if x.isupper() else x for x in val])


def handle_observer_finalization(observer, state=None):
    """Builds a decorator that awaits the wrapped coroutine and calls on_completed
    or on_error on the observer when the coroutine ends or raises an error.
    Nothing is signalled to the observer once the optional state dict has been stopped."""

    state = state if state is not None else {}

    def deco(coro):
        @wraps(coro)
        async def wrapper(*args, **kwargs):
            try:
                await coro(*args, **kwargs)
            except Exception as ex:
                if not state.get("stop"):
                    observer.on_error(ex)
            else:
                if not state.get("stop"):
                    observer.on_completed()

        return wrapper

    return deco
