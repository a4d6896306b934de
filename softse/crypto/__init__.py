#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse cryptographic building blocks.

Random source, SHA-256 hasher, P-256 key codec and ECDSA signature codec used
by the secure element service.
"""
