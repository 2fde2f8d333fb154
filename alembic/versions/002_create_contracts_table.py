"""create contracts table

Revision ID: 002
Revises: 001
Create Date: 2025-06-01 10:10:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "contracts",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("contract_number", sa.String(32), nullable=False),
        sa.Column("access_code", sa.String(6), nullable=False),
        sa.Column("tenant_name", sa.String(), nullable=False),
        sa.Column("tenant_email", sa.String(320), nullable=False),
        sa.Column("tenant_phone", sa.String(), nullable=True),
        sa.Column("tenant_national_id", sa.String(), nullable=True),
        sa.Column("landlord_name", sa.String(), nullable=False),
        sa.Column("landlord_email", sa.String(320), nullable=False),
        sa.Column("landlord_national_id", sa.String(), nullable=True),
        sa.Column("property_address", sa.Text(), nullable=False),
        sa.Column("property_type", sa.String(), nullable=True),
        sa.Column("property_size", sa.String(), nullable=True),
        sa.Column("property_features", sa.Text(), nullable=True),
        sa.Column("rent_amount", sa.String(), nullable=False),
        sa.Column("deposit", sa.String(), nullable=True),
        sa.Column("start_date", sa.String(10), nullable=False),
        sa.Column("end_date", sa.String(10), nullable=False),
        sa.Column("utilities_included", sa.Text(), nullable=True),
        sa.Column("pet_policy", sa.Text(), nullable=True),
        sa.Column("smoking_policy", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("signature", sa.Text(), nullable=True),
        sa.Column("national_id_image", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()
        ),
        sa.Column("signed_at", sa.DateTime(), nullable=True),
        sa.Column("terminated_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("contract_number", name="uq_contracts_contract_number"),
        # CHECK constraint: the access code is exactly six digits
        sa.CheckConstraint(
            "length(access_code) = 6", name="ck_contracts_access_code_length"
        ),
        sa.CheckConstraint(
            "status IN ('draft', 'active', 'signed', 'terminated', 'deleted')",
            name="ck_contracts_status",
        ),
    )
    op.create_index("ix_contracts_contract_number", "contracts", ["contract_number"], unique=False)
    op.create_index("ix_contracts_status", "contracts", ["status"], unique=False)
    op.create_index("ix_contracts_tenant_email", "contracts", ["tenant_email"], unique=False)
    op.create_index("ix_contracts_created_at", "contracts", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_contracts_created_at", table_name="contracts")
    op.drop_index("ix_contracts_tenant_email", table_name="contracts")
    op.drop_index("ix_contracts_status", table_name="contracts")
    op.drop_index("ix_contracts_contract_number", table_name="contracts")
    op.drop_table("contracts")
