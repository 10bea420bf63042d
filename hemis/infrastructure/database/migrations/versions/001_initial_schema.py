# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial legacy HEMIS schema.

Revision ID: 001_initial
Revises: None
Create Date: 2025-01-15

Creates the old-hemis tables served by the REST API on an empty
database. Databases migrated from the CUBA application already have
these tables and should be marked with ``alembic stamp 001_initial``.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    """Columns shared by every CUBA entity table."""
    return [
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("create_ts", sa.DateTime, nullable=True),
        sa.Column("created_by", sa.String(50), nullable=True),
        sa.Column("update_ts", sa.DateTime, nullable=True),
        sa.Column("updated_by", sa.String(50), nullable=True),
    ]


def _soft_delete_columns() -> list[sa.Column]:
    return [
        sa.Column("delete_ts", sa.DateTime, nullable=True),
        sa.Column("deleted_by", sa.String(50), nullable=True),
    ]


def _uuid_pk() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True)


def upgrade() -> None:
    """Create legacy tables."""
    # ==========================================================================
    # 1. University structure
    # ==========================================================================
    op.create_table(
        "hemishe_e_university",
        sa.Column("code", sa.String(255), primary_key=True),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("tin", sa.String(255)),
        sa.Column("name", sa.String(1024)),
        sa.Column("address", sa.String(1024)),
        sa.Column("cadastre", sa.String(255)),
        sa.Column("university_url", sa.String(255)),
        sa.Column("student_url", sa.String(255)),
        sa.Column("teacher_url", sa.String(255)),
        sa.Column("uzbmb_url", sa.String(255)),
        sa.Column("_soato", sa.String(20)),
        sa.Column("_soato_region", sa.String(20)),
        sa.Column("_university_type", sa.String(32)),
        sa.Column("_ownership", sa.String(32)),
        sa.Column("_university_version", sa.String(32)),
        sa.Column("_university_activity_status", sa.String(32)),
        sa.Column("_university_belongs_to", sa.String(32)),
        sa.Column("_university_contract_category", sa.String(32)),
        sa.Column("_parent_university", sa.String(255)),
        sa.Column("active", sa.Boolean),
        sa.Column("gpa_edit", sa.Boolean),
        sa.Column("accreditation_edit", sa.Boolean),
        sa.Column("add_student", sa.Boolean),
        sa.Column("allow_grouping", sa.Boolean),
        sa.Column("allow_transfer_outside", sa.Boolean),
        sa.Column("_version_type", sa.String(32)),
        sa.Column("_terrain", sa.String(32)),
        sa.Column("mail_address", sa.String(1024)),
        sa.Column("bank_info", sa.String(1024)),
        sa.Column("accreditation_info", sa.String(1024)),
    )

    op.create_table(
        "hemishe_e_faculty",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("code", sa.String(255)),
        sa.Column("name", sa.String(1024)),
        sa.Column("short_name", sa.String(255)),
        sa.Column("_university", sa.String(255)),
        sa.Column("_faculty_type", sa.String(32)),
        sa.Column("active", sa.Boolean),
    )
    op.create_index("ix_hemishe_e_faculty__university", "hemishe_e_faculty", ["_university"])

    op.create_table(
        "hemishe_e_specialty",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("code", sa.String(255)),
        sa.Column("name", sa.String(1024)),
        sa.Column("short_name", sa.String(255)),
        sa.Column("_university", sa.String(255)),
        sa.Column("_faculty", postgresql.UUID(as_uuid=True)),
        sa.Column("_specialty_type", sa.String(32)),
        sa.Column("_education_type", sa.String(32)),
        sa.Column("_education_form", sa.String(32)),
        sa.Column("_study_period", sa.String(32)),
        sa.Column("active", sa.Boolean),
    )
    op.create_index(
        "ix_hemishe_e_specialty__university", "hemishe_e_specialty", ["_university"]
    )

    op.create_table(
        "hemishe_e_group",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("name", sa.String(255)),
        sa.Column("_university", sa.String(255)),
        sa.Column("_specialty", postgresql.UUID(as_uuid=True)),
        sa.Column("_faculty", postgresql.UUID(as_uuid=True)),
        sa.Column("_curriculum", postgresql.UUID(as_uuid=True)),
        sa.Column("academic_year", sa.String(32)),
        sa.Column("course", sa.Integer),
        sa.Column("capacity", sa.Integer),
        sa.Column("student_count", sa.Integer),
        sa.Column("_education_type", sa.String(32)),
        sa.Column("_education_form", sa.String(32)),
        sa.Column("_education_lang", sa.String(32)),
        sa.Column("active", sa.Boolean),
    )
    op.create_index("ix_hemishe_e_group__university", "hemishe_e_group", ["_university"])

    # ==========================================================================
    # 2. People
    # ==========================================================================
    op.create_table(
        "hemishe_e_student",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("code", sa.String(255), nullable=False),
        sa.Column("firstname", sa.String(255)),
        sa.Column("lastname", sa.String(255)),
        sa.Column("fathername", sa.String(255)),
        sa.Column("pinfl", sa.String(255)),
        sa.Column("is_duplicate", sa.Boolean),
        sa.Column("birthday", sa.Date),
        sa.Column("firstname_latin", sa.String(255)),
        sa.Column("lastname_latin", sa.String(255)),
        sa.Column("fathername_latin", sa.String(255)),
        sa.Column("serial_number", sa.String(255)),
        sa.Column("passport_given_date", sa.Date),
        sa.Column("phone", sa.String(255)),
        sa.Column("email", sa.String(255)),
        sa.Column("parent_phone", sa.String(255)),
        sa.Column("address", sa.String(1024)),
        sa.Column("current_address", sa.String(1024)),
        sa.Column("_soato", sa.String(20)),
        sa.Column("_current_soato", sa.String(20)),
        sa.Column("_university", sa.String(255)),
        sa.Column("_faculty", sa.String(255)),
        sa.Column("_speciality", sa.String(255)),
        sa.Column("_student_status", sa.String(32)),
        sa.Column("_payment_form", sa.String(32)),
        sa.Column("_education_type", sa.String(32)),
        sa.Column("_education_form", sa.String(32)),
        sa.Column("_course", sa.String(32)),
        sa.Column("_education_year", sa.String(32)),
        sa.Column("_gender", sa.String(32)),
        sa.Column("_nationality", sa.String(32)),
        sa.Column("_citizenship", sa.String(32)),
        sa.Column("_country", sa.String(32)),
        sa.Column("_language", sa.String(32)),
        sa.Column("_social_category", sa.String(32)),
        sa.Column("status", sa.String(255)),
        sa.Column("active", sa.Boolean),
        sa.Column("verified", sa.Boolean),
        sa.Column("points", sa.String(255)),
        sa.Column("group_id", sa.String(255)),
        sa.Column("group_name", sa.String(255)),
        sa.Column("is_graduate", sa.String(10)),
        sa.Column("enroll_order_number", sa.String(255)),
        sa.Column("enroll_order_date", sa.Date),
    )
    op.create_index("ix_hemishe_e_student_pinfl", "hemishe_e_student", ["pinfl"])
    op.create_index("ix_hemishe_e_student__university", "hemishe_e_student", ["_university"])

    op.create_table(
        "hemishe_e_student_gpa",
        _uuid_pk(),
        *_audit_columns(),
        sa.Column("student_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("education_year_code", sa.String(32)),
        sa.Column("gpa", sa.String(255)),
        sa.Column("method_", sa.String(255)),
        sa.Column("level_code", sa.String(32)),
        sa.Column("credit_sum", sa.String(255)),
        sa.Column("subjects", sa.Integer),
        sa.Column("debt_subjects", sa.Integer),
    )
    op.create_index(
        "ix_hemishe_e_student_gpa_student_id", "hemishe_e_student_gpa", ["student_id"]
    )

    op.create_table(
        "hemishe_e_teacher",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("firstname", sa.String(255)),
        sa.Column("lastname", sa.String(255)),
        sa.Column("fathername", sa.String(255)),
        sa.Column("birthday", sa.Date),
        sa.Column("_gender", sa.String(32)),
        sa.Column("_university", sa.String(255)),
        sa.Column("_academic_degree", sa.String(32)),
        sa.Column("_academic_rank", sa.String(32)),
    )
    op.create_index("ix_hemishe_e_teacher__university", "hemishe_e_teacher", ["_university"])

    op.create_table(
        "hemishe_user",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("username", sa.String(255), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("roles", sa.String(1024)),
        sa.Column("enabled", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("_university", sa.String(255)),
        sa.Column("full_name", sa.String(512)),
        sa.Column("first_name", sa.String(255)),
        sa.Column("middle_name", sa.String(255)),
        sa.Column("last_name", sa.String(255)),
        sa.Column("position", sa.String(255)),
        sa.Column("email", sa.String(255)),
        sa.Column("phone", sa.String(255)),
        sa.Column("time_zone", sa.String(64)),
        sa.Column("language", sa.String(16)),
        sa.Column("locale", sa.String(16)),
        sa.Column(
            "account_non_locked", sa.Boolean, nullable=False, server_default=sa.true()
        ),
        sa.Column("failed_attempts", sa.Integer, nullable=False, server_default="0"),
    )

    # ==========================================================================
    # 3. Documents
    # ==========================================================================
    op.create_table(
        "hemishe_e_diploma",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("diploma_number", sa.String(128), unique=True),
        sa.Column("_student", postgresql.UUID(as_uuid=True)),
        sa.Column("_university", sa.String(64)),
        sa.Column("_specialty", postgresql.UUID(as_uuid=True)),
        sa.Column("_diploma_blank", postgresql.UUID(as_uuid=True)),
        sa.Column("serial_number", sa.String(64)),
        sa.Column("_diploma_type", sa.String(32)),
        sa.Column("issue_date", sa.Date),
        sa.Column("registration_date", sa.Date),
        sa.Column("graduation_year", sa.Integer),
        sa.Column("qualification", sa.String(512)),
        sa.Column("average_grade", sa.Float),
        sa.Column("_honors", sa.String(32)),
        sa.Column("diploma_hash", sa.String(128), unique=True),
        sa.Column("rector_name", sa.String(256)),
        sa.Column("_status", sa.String(32)),
        sa.Column("qr_code", sa.String(512)),
        sa.Column("verification_url", sa.String(512)),
        sa.Column("notes", sa.String(2048)),
    )
    op.create_index("ix_hemishe_e_diploma__student", "hemishe_e_diploma", ["_student"])

    op.create_table(
        "hemishe_e_diploma_blank",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("blank_code", sa.String(64), unique=True),
        sa.Column("series", sa.String(8)),
        sa.Column("number", sa.String(16)),
        sa.Column("_university", sa.String(64)),
        sa.Column("_blank_type", sa.String(32)),
        sa.Column("_status", sa.String(32)),
        sa.Column("received_date", sa.Date),
        sa.Column("issued_date", sa.Date),
        sa.Column("academic_year", sa.Integer),
        sa.Column("supplier", sa.String(256)),
        sa.Column("batch_number", sa.String(64)),
        sa.Column("status_reason", sa.String(512)),
        sa.Column("security_features", sa.String(1024)),
        sa.Column("notes", sa.String(2048)),
    )
    op.create_index(
        "ix_hemishe_e_diploma_blank__university", "hemishe_e_diploma_blank", ["_university"]
    )

    op.create_table(
        "hemishe_e_contract",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("contract_number", sa.String(128)),
        sa.Column("_student", postgresql.UUID(as_uuid=True)),
        sa.Column("_university", sa.String(64)),
        sa.Column("_education_year", sa.String(32)),
        sa.Column("_contract_type", sa.String(32)),
        sa.Column("contract_date", sa.Date),
        sa.Column("contract_sum", sa.Numeric(15, 2)),
        sa.Column("paid_sum", sa.Numeric(15, 2)),
        sa.Column("_status", sa.String(32)),
        sa.Column("is_active", sa.Boolean),
    )
    op.create_index(
        "ix_hemishe_e_contract_contract_number", "hemishe_e_contract", ["contract_number"]
    )
    op.create_index("ix_hemishe_e_contract__student", "hemishe_e_contract", ["_student"])
    op.create_index("ix_hemishe_e_contract__university", "hemishe_e_contract", ["_university"])

    # ==========================================================================
    # 4. Schedule, scholarships, employment
    # ==========================================================================
    op.create_table(
        "hemishe_e_schedule",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("_university", sa.String(255)),
        sa.Column("_group", postgresql.UUID(as_uuid=True)),
        sa.Column("_course", postgresql.UUID(as_uuid=True)),
        sa.Column("_teacher", postgresql.UUID(as_uuid=True)),
        sa.Column("_auditorium", postgresql.UUID(as_uuid=True)),
        sa.Column("schedule_date", sa.Date),
        sa.Column("start_time", sa.Time),
        sa.Column("end_time", sa.Time),
        sa.Column("day_of_week", sa.Integer),
        sa.Column("pair_number", sa.Integer),
        sa.Column("academic_year", sa.String(32)),
        sa.Column("semester", sa.Integer),
        sa.Column("week_number", sa.Integer),
        sa.Column("_lesson_type", sa.String(32)),
        sa.Column("_schedule_type", sa.String(32)),
        sa.Column("active", sa.Boolean),
        sa.Column("is_cancelled", sa.Boolean),
    )
    op.create_index("ix_hemishe_e_schedule__university", "hemishe_e_schedule", ["_university"])
    op.create_index("ix_hemishe_e_schedule__group", "hemishe_e_schedule", ["_group"])

    op.create_table(
        "hemishe_e_scholarship",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("scholarship_code", sa.String(64), unique=True),
        sa.Column("_student", postgresql.UUID(as_uuid=True)),
        sa.Column("_university", sa.String(64)),
        sa.Column("_education_year", sa.String(32)),
        sa.Column("semester", sa.Integer),
        sa.Column("_scholarship_type", sa.String(32)),
        sa.Column("amount", sa.Numeric(15, 2)),
        sa.Column("start_date", sa.Date),
        sa.Column("end_date", sa.Date),
        sa.Column("payment_date", sa.Date),
        sa.Column("_status", sa.String(32)),
        sa.Column("order_number", sa.String(128)),
        sa.Column("order_date", sa.Date),
        sa.Column("approved_by", sa.String(256)),
        sa.Column("_payment_method", sa.String(32)),
        sa.Column("bank_account", sa.String(64)),
        sa.Column("bank_code", sa.String(16)),
        sa.Column("transaction_ref", sa.String(128)),
        sa.Column("reason", sa.String(512)),
        sa.Column("notes", sa.String(2048)),
        sa.Column("is_active", sa.Boolean),
    )
    op.create_index("ix_hemishe_e_scholarship__student", "hemishe_e_scholarship", ["_student"])
    op.create_index(
        "ix_hemishe_e_scholarship__university", "hemishe_e_scholarship", ["_university"]
    )

    op.create_table(
        "hemishe_e_employment",
        _uuid_pk(),
        *_audit_columns(),
        *_soft_delete_columns(),
        sa.Column("employment_code", sa.String(64), unique=True),
        sa.Column("_student", postgresql.UUID(as_uuid=True)),
        sa.Column("_university", sa.String(64)),
        sa.Column("_diploma", postgresql.UUID(as_uuid=True)),
        sa.Column("company_name", sa.String(512)),
        sa.Column("company_tin", sa.String(32)),
        sa.Column("company_address", sa.String(512)),
        sa.Column("company_phone", sa.String(32)),
        sa.Column("_employment_type", sa.String(32)),
        sa.Column("position", sa.String(256)),
        sa.Column("employment_date", sa.Date),
        sa.Column("contract_number", sa.String(128)),
        sa.Column("contract_date", sa.Date),
        sa.Column("salary", sa.Numeric(15, 2)),
        sa.Column("_employment_status", sa.String(32)),
        sa.Column("termination_date", sa.Date),
        sa.Column("termination_reason", sa.String(512)),
        sa.Column("_soato", sa.String(20)),
        sa.Column("_industry_code", sa.String(32)),
        sa.Column("is_specialty_related", sa.Boolean),
        sa.Column("notes", sa.String(2048)),
        sa.Column("is_active", sa.Boolean),
    )
    op.create_index("ix_hemishe_e_employment__student", "hemishe_e_employment", ["_student"])
    op.create_index(
        "ix_hemishe_e_employment__university", "hemishe_e_employment", ["_university"]
    )


def downgrade() -> None:
    """Drop legacy tables."""
    for table in (
        "hemishe_e_employment",
        "hemishe_e_scholarship",
        "hemishe_e_schedule",
        "hemishe_e_contract",
        "hemishe_e_diploma_blank",
        "hemishe_e_diploma",
        "hemishe_user",
        "hemishe_e_teacher",
        "hemishe_e_student_gpa",
        "hemishe_e_student",
        "hemishe_e_group",
        "hemishe_e_specialty",
        "hemishe_e_faculty",
        "hemishe_e_university",
    ):
        op.drop_table(table)
