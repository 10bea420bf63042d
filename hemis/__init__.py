"""HEMIS legacy API backend.

CUBA Platform compatible REST API ("old-hemis") serving university
integrations: entity CRUD, OAuth2 tokens and government data proxies.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
