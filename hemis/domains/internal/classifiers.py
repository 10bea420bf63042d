# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Classifier lists served under ``/services/classifiers``.

Only the classifiers named in ``CLASSIFIERS`` are reachable; the name
picks the model, never a table name taken from the request.
"""

import logging
from collections import defaultdict
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hemis.domains.integration.base import error_response, require
from hemis.domains.internal.responses import pick
from hemis.infrastructure.database.models import (
    Citizenship,
    ClassifierMixin,
    Country,
    Course,
    EducationForm,
    EducationLanguage,
    EducationType,
    EducationYear,
    Gender,
    Nationality,
    Ownership,
    PaymentForm,
    Soato,
    StudentStatusType,
    UniversityType,
)

logger = logging.getLogger(__name__)

CLASSIFIERS: dict[str, type[ClassifierMixin]] = {
    "country": Country,
    "citizenship": Citizenship,
    "nationality": Nationality,
    "gender": Gender,
    "course": Course,
    "education_type": EducationType,
    "education_form": EducationForm,
    "education_language": EducationLanguage,
    "education_year": EducationYear,
    "payment_form": PaymentForm,
    "student_status": StudentStatusType,
    "university_type": UniversityType,
    "ownership": Ownership,
}

ITEM_FIELDS = (
    ("code", "code"),
    ("name", "name"),
    ("name_ru", "name_ru"),
    ("name_en", "name_en"),
    ("active", "active"),
)

SOATO_FIELDS = (
    ("code", "code"),
    ("name_uz", "name_uz"),
    ("name_ru", "name_ru"),
)


class ClassifierLookupService:
    """Read-only access to the ``hemishe_h_*`` reference tables."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    def info(self) -> list[str]:
        """Names accepted by :meth:`single`."""
        return sorted(CLASSIFIERS)

    async def _items(self, model: type[ClassifierMixin]) -> list[dict[str, Any]]:
        stmt = select(model).where(model.delete_ts.is_(None)).order_by(model.code)
        result = await self._db.execute(stmt)
        return [pick(row, ITEM_FIELDS) for row in result.scalars().all()]

    async def single(self, classifier: str | None) -> list[dict[str, Any]] | dict[str, Any]:
        """Items of one classifier ordered by code.

        Returns:
            List of ``{code, name, name_ru, name_en, active}`` maps, or an
            ``invalid_parameter`` error map for a blank or unknown name.
        """
        invalid = require(classifier=classifier)
        if invalid:
            return invalid

        model = CLASSIFIERS.get(classifier.strip().lower())
        if model is None:
            return error_response("invalid_parameter", f"Unknown classifier: {classifier}")
        return await self._items(model)

    async def all_items(self) -> dict[str, list[dict[str, Any]]]:
        items = {}
        for name in sorted(CLASSIFIERS):
            items[name] = await self._items(CLASSIFIERS[name])
        logger.info("Loaded %d classifiers", len(items))
        return items

    async def hokimiyat(self) -> dict[str, Any]:
        """Regions with their districts from the SOATO table.

        A region is a row without a parent (or pointing at itself); every
        other row is listed under its parent region. Rows whose parent is
        not a region are left out.
        """
        stmt = select(Soato).where(Soato.delete_ts.is_(None)).order_by(Soato.code)
        result = await self._db.execute(stmt)

        regions = []
        districts: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for row in result.scalars().all():
            if row.parent_code is None or row.parent_code == row.code:
                regions.append(row)
            else:
                districts[row.parent_code].append(pick(row, SOATO_FIELDS))

        data = []
        for region in regions:
            item = pick(region, SOATO_FIELDS)
            item["districts"] = districts.get(region.code, [])
            data.append(item)
        return {"regions": data, "count": len(data)}
