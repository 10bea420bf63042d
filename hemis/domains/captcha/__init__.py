# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Image captcha used by the passport data lookups."""

from hemis.domains.captcha.service import CaptchaService

__all__ = ["CaptchaService"]
