# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Classifier reference tables.

Revision ID: 002_classifiers
Revises: 001_initial
Create Date: 2025-02-03

Databases migrated from the CUBA application already carry these
tables; stamp them with ``alembic stamp 002_classifiers``.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "002_classifiers"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CLASSIFIER_TABLES = (
    "hemishe_h_country",
    "hemishe_h_citizenship",
    "hemishe_h_nationality",
    "hemishe_h_gender",
    "hemishe_h_course",
    "hemishe_h_education_type",
    "hemishe_h_education_form",
    "hemishe_h_education_language",
    "hemishe_h_education_year",
    "hemishe_h_payment_form",
    "hemishe_h_student_status_type",
    "hemishe_h_university_type",
    "hemishe_h_ownership",
)


def _bookkeeping_columns() -> list[sa.Column]:
    return [
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("create_ts", sa.DateTime, nullable=True),
        sa.Column("created_by", sa.String(50), nullable=True),
        sa.Column("update_ts", sa.DateTime, nullable=True),
        sa.Column("updated_by", sa.String(50), nullable=True),
        sa.Column("delete_ts", sa.DateTime, nullable=True),
        sa.Column("deleted_by", sa.String(50), nullable=True),
    ]


def upgrade() -> None:
    """Create classifier tables."""
    for name in CLASSIFIER_TABLES:
        op.create_table(
            name,
            sa.Column("code", sa.String(64), primary_key=True),
            sa.Column("name", sa.String(1024)),
            sa.Column("name_ru", sa.String(1024)),
            sa.Column("name_en", sa.String(1024)),
            sa.Column("active", sa.Boolean),
            *_bookkeeping_columns(),
        )

    op.create_table(
        "hemishe_h_soato",
        sa.Column("code", sa.String(20), primary_key=True),
        sa.Column("name_uz", sa.String(1024)),
        sa.Column("name_ru", sa.String(1024)),
        sa.Column("parent_code", sa.String(20)),
        *_bookkeeping_columns(),
    )
    op.create_index("ix_hemishe_h_soato_parent_code", "hemishe_h_soato", ["parent_code"])


def downgrade() -> None:
    """Drop classifier tables."""
    op.drop_table("hemishe_h_soato")
    for name in reversed(CLASSIFIER_TABLES):
        op.drop_table(name)
