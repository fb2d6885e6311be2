"""Initial back-office tables: bid_list, curve_point, rating, rule_name, trade, users.

Revision ID: 20261001000000
Revises:
Create Date: 2026-10-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261001000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _creation_audit() -> list[sa.Column]:
    return [
        sa.Column("creation_name", sa.String(length=125), nullable=True),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=True),
    ]


def _revision_audit() -> list[sa.Column]:
    return [
        sa.Column("revision_name", sa.String(length=125), nullable=True),
        sa.Column("revision_date", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "bid_list",
        sa.Column("bid_list_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("account", sa.String(length=30), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("bid_quantity", sa.Float(), nullable=True),
        sa.Column("ask_quantity", sa.Float(), nullable=True),
        sa.Column("bid", sa.Float(), nullable=True),
        sa.Column("ask", sa.Float(), nullable=True),
        sa.Column("benchmark", sa.String(length=125), nullable=True),
        sa.Column("bid_list_date", sa.DateTime(), nullable=True),
        sa.Column("commentary", sa.String(length=125), nullable=True),
        sa.Column("security", sa.String(length=125), nullable=True),
        sa.Column("status", sa.String(length=10), nullable=True),
        sa.Column("trader", sa.String(length=125), nullable=True),
        sa.Column("book", sa.String(length=125), nullable=True),
        *_creation_audit(),
        *_revision_audit(),
        sa.Column("deal_name", sa.String(length=125), nullable=True),
        sa.Column("deal_type", sa.String(length=125), nullable=True),
        sa.Column("source_list_id", sa.String(length=125), nullable=True),
        sa.Column("side", sa.String(length=125), nullable=True),
        sa.PrimaryKeyConstraint("bid_list_id"),
    )
    op.create_table(
        "curve_point",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("curve_id", sa.Integer(), nullable=True),
        sa.Column("as_of_date", sa.DateTime(), nullable=True),
        sa.Column("term", sa.Float(), nullable=True),
        sa.Column("value", sa.Float(), nullable=True),
        *_creation_audit(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_curve_point_curve_id"), "curve_point", ["curve_id"], unique=False)
    op.create_table(
        "rating",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("moodys_rating", sa.String(length=125), nullable=True),
        sa.Column("sand_p_rating", sa.String(length=125), nullable=True),
        sa.Column("fitch_rating", sa.String(length=125), nullable=True),
        sa.Column("order_number", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "rule_name",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=125), nullable=True),
        sa.Column("description", sa.String(length=125), nullable=True),
        sa.Column("json", sa.String(length=125), nullable=True),
        sa.Column("template", sa.String(length=512), nullable=True),
        sa.Column("sql_str", sa.String(length=125), nullable=True),
        sa.Column("sql_part", sa.String(length=125), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "trade",
        sa.Column("trade_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("account", sa.String(length=30), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("buy_quantity", sa.Float(), nullable=True),
        sa.Column("sell_quantity", sa.Float(), nullable=True),
        sa.Column("buy_price", sa.Float(), nullable=True),
        sa.Column("sell_price", sa.Float(), nullable=True),
        sa.Column("trade_date", sa.DateTime(), nullable=True),
        sa.Column("security", sa.String(length=125), nullable=True),
        sa.Column("status", sa.String(length=10), nullable=True),
        sa.Column("trader", sa.String(length=125), nullable=True),
        sa.Column("benchmark", sa.String(length=125), nullable=True),
        sa.Column("book", sa.String(length=125), nullable=True),
        *_creation_audit(),
        *_revision_audit(),
        sa.Column("deal_name", sa.String(length=125), nullable=True),
        sa.Column("deal_type", sa.String(length=125), nullable=True),
        sa.Column("source_list_id", sa.String(length=125), nullable=True),
        sa.Column("side", sa.String(length=125), nullable=True),
        sa.PrimaryKeyConstraint("trade_id"),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=125), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("fullname", sa.String(length=125), nullable=False),
        sa.Column("role", sa.String(length=125), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
    op.drop_table("trade")
    op.drop_table("rule_name")
    op.drop_table("rating")
    op.drop_index(op.f("ix_curve_point_curve_id"), table_name="curve_point")
    op.drop_table("curve_point")
    op.drop_table("bid_list")
