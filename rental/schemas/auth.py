from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Role = Literal["admin", "tenant"]


class TokenClaims(BaseModel):
    """Decoded token payload: the role plus the identity it is scoped to."""

    model_config = ConfigDict(populate_by_name=True)

    role: Role
    user_id: int | None = Field(None, alias="userId")
    contract_id: str | None = Field(None, alias="contractId")
    iat: int | None = None
    exp: int | None = None

    @model_validator(mode="after")
    def validate_identity_for_role(self):
        """Admin tokens carry a userId, tenant tokens a contractId."""
        if self.role == "admin" and self.user_id is None:
            raise ValueError("admin claims require userId")
        if self.role == "tenant" and self.contract_id is None:
            raise ValueError("tenant claims require contractId")
        return self


class LoginRequest(BaseModel):
    """Either the admin pair (username, password) or the tenant pair (contractNumber, accessCode)."""

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = None
    password: str | None = None
    contract_number: str | None = Field(None, alias="contractNumber")
    access_code: str | None = Field(None, alias="accessCode")

    @field_validator("contract_number", "access_code", mode="before")
    @classmethod
    def number_to_str(cls, v):
        """Clients may send the access code as a JSON number."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class LoginUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str


class LoginContract(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    contract_number: str = Field(alias="contractNumber")


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    token: str
    user: LoginUser | None = None
    contract: LoginContract | None = None
