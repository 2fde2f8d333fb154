import re
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

_AMOUNT_RE = re.compile(r"^[0-9]+(\.[0-9]+)?$")


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Contract(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    contract_number: str
    access_code: str
    tenant_name: str
    tenant_email: str
    tenant_phone: str | None = None
    tenant_national_id: str | None = None
    landlord_name: str
    landlord_email: str
    landlord_national_id: str | None = None
    property_address: str
    property_type: str | None = None
    property_size: str | None = None
    property_features: str | None = None
    rent_amount: str
    deposit: str | None = None
    start_date: str
    end_date: str
    utilities_included: str | None = None
    pet_policy: str | None = None
    smoking_policy: str | None = None
    notes: str | None = None
    status: str
    signature: str | None = None
    national_id_image: str | None = None
    created_at: datetime
    signed_at: datetime | None = None
    terminated_at: datetime | None = None
    updated_at: datetime | None = None


def _amount_to_str(v):
    if isinstance(v, bool):
        raise ValueError("Amount must be a number")
    if isinstance(v, (int, float)):
        return str(v)
    if isinstance(v, str):
        return v.strip()
    return v


class ContractCreate(CamelModel):
    tenant_name: str = Field(..., min_length=1, max_length=255)
    tenant_email: EmailStr
    tenant_phone: str | None = None
    tenant_national_id: str | None = None
    landlord_name: str = Field(..., min_length=1, max_length=255)
    landlord_email: EmailStr
    landlord_national_id: str | None = None
    property_address: str = Field(..., min_length=1)
    property_type: str | None = None
    property_size: str | None = None
    property_features: str | None = None
    rent_amount: str
    deposit: str | None = None
    start_date: date
    end_date: date
    utilities_included: str | None = None
    pet_policy: str | None = None
    smoking_policy: str | None = None
    notes: str | None = None

    @field_validator("rent_amount", "deposit", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        """Accept numbers as well as numeric strings."""
        return _amount_to_str(v)

    @field_validator("rent_amount")
    @classmethod
    def validate_rent_amount(cls, v: str) -> str:
        if not _AMOUNT_RE.match(v):
            raise ValueError("rentAmount must be a non-negative decimal number")
        return v

    @field_validator("deposit")
    @classmethod
    def validate_deposit(cls, v: str | None) -> str | None:
        if v in (None, ""):
            return None
        if not _AMOUNT_RE.match(v):
            raise ValueError("deposit must be a non-negative decimal number")
        return v

    @model_validator(mode="after")
    def validate_end_date_after_start_date(self):
        """Ensure end_date doesn't precede start_date."""
        if self.end_date < self.start_date:
            raise ValueError(
                f"endDate ({self.end_date}) cannot precede startDate ({self.start_date})"
            )
        return self


class ContractUpdate(CamelModel):
    """Partial update; only the keys present in the request are applied."""

    tenant_name: str | None = Field(None, min_length=1, max_length=255)
    tenant_email: EmailStr | None = None
    tenant_phone: str | None = None
    tenant_national_id: str | None = None
    landlord_name: str | None = Field(None, min_length=1, max_length=255)
    landlord_email: EmailStr | None = None
    landlord_national_id: str | None = None
    property_address: str | None = Field(None, min_length=1)
    property_type: str | None = None
    property_size: str | None = None
    property_features: str | None = None
    rent_amount: str | None = None
    deposit: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    utilities_included: str | None = None
    pet_policy: str | None = None
    smoking_policy: str | None = None
    notes: str | None = None

    @field_validator("rent_amount", "deposit", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        return _amount_to_str(v)

    @field_validator("rent_amount")
    @classmethod
    def validate_rent_amount(cls, v: str | None) -> str | None:
        if v is not None and not _AMOUNT_RE.match(v):
            raise ValueError("rentAmount must be a non-negative decimal number")
        return v

    @field_validator("deposit")
    @classmethod
    def validate_deposit(cls, v: str | None) -> str | None:
        if v in (None, ""):
            return None
        if not _AMOUNT_RE.match(v):
            raise ValueError("deposit must be a non-negative decimal number")
        return v


class ContractCreated(CamelModel):
    success: bool = True
    contract_number: str
    access_code: str
    id: str


class ContractSign(CamelModel):
    signature: str = Field(..., min_length=1)
    national_id_image: str = Field(..., min_length=1)
