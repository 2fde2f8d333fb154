"""create notification settings table

Revision ID: 003
Revises: 002
Create Date: 2025-06-01 10:20:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    settings_table = op.create_table(
        "notification_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("telegram_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("whatsapp_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("telegram_chat_id", sa.String(), nullable=True),
        sa.Column("whatsapp_number", sa.String(), nullable=True),
        sa.Column("email_from", sa.String(320), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()
        ),
        sa.Column(
            "updated_at", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()
        ),
        sa.PrimaryKeyConstraint("id"),
        # CHECK constraint: the table only ever holds the row with id 1
        sa.CheckConstraint("id = 1", name="ck_notification_settings_singleton"),
    )

    # Default row: every channel disabled
    op.bulk_insert(
        settings_table,
        [
            {
                "id": 1,
                "email_enabled": False,
                "telegram_enabled": False,
                "whatsapp_enabled": False,
            }
        ],
    )


def downgrade() -> None:
    op.drop_table("notification_settings")
