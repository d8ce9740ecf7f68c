"""Create member tables.

Revision ID: 0001
Revises: None
Create Date: 2026-10-19

Creates ``members`` and its four child tables. Every child row points at
exactly one member through a unique ``member_id``.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

role_enum = sa.Enum("USER", "ADMIN", name="role")
provider_enum = sa.Enum("KAKAO", "NAVER", "GOOGLE", name="provider")


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("role", role_enum, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    )
    op.create_index("ix_members_email", "members", ["email"], unique=True)

    op.create_table(
        "member_generals",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=False, unique=True),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("is_auto", sa.Boolean(), nullable=False),
    )
    op.create_table(
        "member_socials",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=False, unique=True),
        sa.Column("provider", provider_enum, nullable=False),
    )
    op.create_table(
        "member_profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=False, unique=True),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("birth", sa.String(length=10), nullable=False),
    )
    op.create_table(
        "member_agreements",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("member_id", sa.Integer(), sa.ForeignKey("members.id"), nullable=False, unique=True),
        sa.Column("personal_info", sa.Boolean(), nullable=False),
        sa.Column("third_party", sa.Boolean(), nullable=False),
    )


def downgrade() -> None:
    for table in ("member_agreements", "member_profiles", "member_socials", "member_generals"):
        op.drop_table(table)
    op.drop_index("ix_members_email", table_name="members")
    op.drop_table("members")

    bind = op.get_bind()
    provider_enum.drop(bind, checkfirst=True)
    role_enum.drop(bind, checkfirst=True)
