#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Assorted helpers shared across the package.
"""
