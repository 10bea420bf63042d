# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""CUBA REST v2 wire format: entity maps, sorting and search filters."""
