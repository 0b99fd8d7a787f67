"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2025-11-03
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.sql import func


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=func.now(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "credit_cards",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("limit", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("closing_day", sa.Integer(), nullable=False),
        sa.Column("due_day", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_credit_cards")),
    )
    op.create_index(op.f("ix_credit_cards_id"), "credit_cards", ["id"], unique=False)

    op.create_table(
        "card_expenses",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("card_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("total_amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("purchase_date", sa.DateTime(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("installments", sa.JSON(), nullable=True),
        sa.Column("is_recurring", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["card_id"],
            ["credit_cards.id"],
            name=op.f("fk_card_expenses_card_id_credit_cards"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_card_expenses")),
    )
    op.create_index(op.f("ix_card_expenses_id"), "card_expenses", ["id"], unique=False)
    op.create_index(op.f("ix_card_expenses_card_id"), "card_expenses", ["card_id"], unique=False)
    op.create_index(op.f("ix_card_expenses_purchase_date"), "card_expenses", ["purchase_date"], unique=False)

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("type", sa.String(length=10), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("is_recurring", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("installments", sa.JSON(), nullable=True),
        sa.Column("group_id", sa.String(length=100), nullable=True),
        sa.Column("related_card_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["related_card_id"],
            ["credit_cards.id"],
            name=op.f("fk_transactions_related_card_id_credit_cards"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_transactions")),
    )
    op.create_index(op.f("ix_transactions_id"), "transactions", ["id"], unique=False)
    op.create_index(op.f("ix_transactions_date"), "transactions", ["date"], unique=False)
    op.create_index(op.f("ix_transactions_related_card_id"), "transactions", ["related_card_id"], unique=False)

    op.create_table(
        "custom_icons",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("keyword", sa.String(length=100), nullable=False),
        sa.Column("brand_term", sa.String(length=100), nullable=True),
        sa.Column("custom_image_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_custom_icons")),
    )
    op.create_index(op.f("ix_custom_icons_id"), "custom_icons", ["id"], unique=False)
    op.create_index(op.f("ix_custom_icons_keyword"), "custom_icons", ["keyword"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_custom_icons_keyword"), table_name="custom_icons")
    op.drop_index(op.f("ix_custom_icons_id"), table_name="custom_icons")
    op.drop_table("custom_icons")
    op.drop_index(op.f("ix_transactions_related_card_id"), table_name="transactions")
    op.drop_index(op.f("ix_transactions_date"), table_name="transactions")
    op.drop_index(op.f("ix_transactions_id"), table_name="transactions")
    op.drop_table("transactions")
    op.drop_index(op.f("ix_card_expenses_purchase_date"), table_name="card_expenses")
    op.drop_index(op.f("ix_card_expenses_card_id"), table_name="card_expenses")
    op.drop_index(op.f("ix_card_expenses_id"), table_name="card_expenses")
    op.drop_table("card_expenses")
    op.drop_index(op.f("ix_credit_cards_id"), table_name="credit_cards")
    op.drop_table("credit_cards")
