"""Create accounts, inventory_items and meal_plans tables

Revision ID: 4c2e9b7d1a30
Revises:
Create Date: 2026-10-19 18:52:11.204117

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4c2e9b7d1a30"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("household_id", sa.String(length=255), nullable=False),
        sa.Column("inventory_endpoint", sa.Text(), nullable=False),
        sa.Column("slack_channel", sa.String(length=255), nullable=True),
        sa.Column("auto_send_slack", sa.Boolean(), server_default="false", nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_accounts_id"), "accounts", ["id"], unique=False)
    op.create_index(op.f("ix_accounts_household_id"), "accounts", ["household_id"], unique=True)

    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("account_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit", sa.String(length=50), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("is_expiring_soon", sa.Boolean(), server_default="false", nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_inventory_items_id"), "inventory_items", ["id"], unique=False)
    op.create_index(
        op.f("ix_inventory_items_account_id"), "inventory_items", ["account_id"], unique=False
    )

    op.create_table(
        "meal_plans",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("account_id", sa.Integer(), nullable=False),
        sa.Column("week_start_date", sa.Date(), nullable=False),
        sa.Column("plan_data", sa.Text(), nullable=False),
        sa.Column("shopping_gaps", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_meal_plans_id"), "meal_plans", ["id"], unique=False)
    op.create_index(op.f("ix_meal_plans_account_id"), "meal_plans", ["account_id"], unique=False)
    op.create_index(
        op.f("ix_meal_plans_week_start_date"), "meal_plans", ["week_start_date"], unique=False
    )


def downgrade() -> None:
    op.drop_table("meal_plans")
    op.drop_table("inventory_items")
    op.drop_table("accounts")
