from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from rental.db.base import Base


class Contract(Base):
    __tablename__ = "contracts"

    id = Column(String(64), primary_key=True)
    contract_number = Column(String(32), unique=True, nullable=False, index=True)
    access_code = Column(String(6), nullable=False)

    tenant_name = Column(String, nullable=False)
    tenant_email = Column(String(320), nullable=False, index=True)
    tenant_phone = Column(String, nullable=True)
    tenant_national_id = Column(String, nullable=True)

    landlord_name = Column(String, nullable=False)
    landlord_email = Column(String(320), nullable=False)
    landlord_national_id = Column(String, nullable=True)

    property_address = Column(Text, nullable=False)
    property_type = Column(String, nullable=True)
    property_size = Column(String, nullable=True)
    property_features = Column(Text, nullable=True)

    rent_amount = Column(String, nullable=False)
    deposit = Column(String, nullable=True)
    start_date = Column(String(10), nullable=False)
    end_date = Column(String(10), nullable=False)

    utilities_included = Column(Text, nullable=True)
    pet_policy = Column(Text, nullable=True)
    smoking_policy = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default="draft", index=True)
    signature = Column(Text, nullable=True)
    national_id_image = Column(Text, nullable=True)

    created_at = Column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), index=True
    )
    signed_at = Column(DateTime, nullable=True)
    terminated_at = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, nullable=True)
    deleted_at = Column(DateTime, nullable=True)
