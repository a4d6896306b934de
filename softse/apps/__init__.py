#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse applications package.

This package contains the command-line tool delivered with softse for working
with the software secure element.
"""
