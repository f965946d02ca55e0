#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Utilities related to Futures and Promise-like objects.
"""

import asyncio
import concurrent.futures
import inspect


async def resolve(result):
    """Waits for the outcome of a user callback.
    Accepts coroutines, asyncio or tornado Futures, concurrent Futures and plain values."""

    if isinstance(result, concurrent.futures.Future):
        return await asyncio.wrap_future(result)

    if inspect.isawaitable(result):
        return await result

    return result
