#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Constants related to objects in the Thing hierarchy.
"""

WILDCARD_HANDLER = "*"
"""Interaction name that sets a handler for every interaction of a given kind."""

DEFAULT_CONTENT_TYPE = "application/json"
"""Content type of the Forms that are derived for interactions without custom Forms."""

DEFAULT_FETCH_TIMEOUT_SECS = 20.0
"""Default timeout for the requests that retrieve remote TD documents."""

DIRECTORY_THINGS_PATH = "things"
"""Path of the Things collection in a Thing Directory."""
