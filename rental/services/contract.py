import logging
import secrets
import time
import uuid

from sqlalchemy.orm import Session

import rental.repositories.contract as contract_repo
import rental.repositories.notification_settings as settings_repo
from rental.core import messages
from rental.db.models.contract import Contract as ContractModel
from rental.domain.contract_status import ContractStatus, can_sign, is_deleted
from rental.errors import DomainValidationError, ForbiddenError, NotFoundError
from rental.schemas.auth import TokenClaims
from rental.schemas.contract import ContractCreate, ContractUpdate
from rental.services.notification import (
    NotificationDispatcher,
    notify_access_code,
    notify_contract_signed,
)

logger = logging.getLogger(__name__)

CONTRACT_NUMBER_PREFIX = "RNT"


def generate_contract_number() -> str:
    """Prefix + millisecond timestamp + 3 random digits, e.g. RNT1718000000000123."""
    return f"{CONTRACT_NUMBER_PREFIX}{int(time.time() * 1000)}{secrets.randbelow(1000):03d}"


def generate_access_code() -> str:
    """Random 6-digit numeric code in 100000-999999."""
    return str(100000 + secrets.randbelow(900000))


def generate_contract_id() -> str:
    return f"contract_{uuid.uuid4().hex}"


def list_contracts(db: Session, claims: TokenClaims) -> list[ContractModel]:
    """
    List the contracts visible to the caller.

    - Admin: all contracts, newest first
    - Tenant: only the contract their token is scoped to
    """
    if claims.role == "admin":
        return contract_repo.get_all_contracts(db)
    if claims.role == "tenant":
        contract = contract_repo.get_contract_by_id(db, claims.contract_id)
        return [contract] if contract and not is_deleted(contract.status) else []
    raise ForbiddenError(messages.UNAUTHORIZED)


async def create_contract(
    db: Session,
    notifier: NotificationDispatcher,
    claims: TokenClaims,
    contract_data: ContractCreate,
) -> ContractModel:
    """
    Create a draft contract with generated number, access code and id.

    The access code is then emailed to the tenant; a failed email is logged
    and does not undo the creation.
    """
    if claims.role != "admin":
        raise ForbiddenError(messages.UNAUTHORIZED)

    fields = contract_data.model_dump()
    fields["start_date"] = contract_data.start_date.isoformat()
    fields["end_date"] = contract_data.end_date.isoformat()

    contract = contract_repo.create_contract(
        db,
        id=generate_contract_id(),
        contract_number=generate_contract_number(),
        access_code=generate_access_code(),
        status=ContractStatus.DRAFT.value,
        **fields,
    )
    logger.info("Created contract %s", contract.contract_number)

    stored = settings_repo.get_notification_settings(db)
    await notify_access_code(notifier, contract, stored)
    return contract


async def sign_contract(
    db: Session,
    notifier: NotificationDispatcher,
    claims: TokenClaims,
    contract_number: str,
    signature: str,
    national_id_image: str,
) -> ContractModel:
    """
    Sign a contract as its tenant.

    - Validates the contract exists
    - Validates the tenant's token is scoped to this contract
    - Validates the contract has not been terminated

    Signing again overwrites the previous signature, ID image and signing time.
    """
    if claims.role != "tenant":
        raise ForbiddenError(messages.UNAUTHORIZED)

    contract = contract_repo.get_contract_by_number(db, contract_number)
    if not contract or is_deleted(contract.status):
        raise NotFoundError(messages.CONTRACT_NOT_FOUND)

    if contract.id != claims.contract_id:
        raise ForbiddenError(messages.UNAUTHORIZED)

    if not can_sign(contract.status):
        raise DomainValidationError(messages.CONTRACT_TERMINATED)

    contract = contract_repo.sign_contract(
        db,
        contract_number=contract_number,
        signature=signature,
        national_id_image=national_id_image,
    )
    logger.info("Contract %s signed", contract_number)

    stored = settings_repo.get_notification_settings(db)
    await notify_contract_signed(notifier, contract, stored)
    return contract


def terminate_contract(db: Session, claims: TokenClaims, contract_number: str) -> ContractModel:
    """Terminate a contract; its tenant can no longer log in."""
    if claims.role != "admin":
        raise ForbiddenError(messages.ADMIN_ONLY)

    existing = contract_repo.get_contract_by_number(db, contract_number)
    if not existing or is_deleted(existing.status):
        raise NotFoundError(messages.CONTRACT_NOT_FOUND)

    contract = contract_repo.terminate_contract(db, contract_number)
    logger.info("Contract %s terminated", contract_number)
    return contract


# Columns that may not be cleared by an update.
_REQUIRED_FIELDS = frozenset(
    {
        "tenant_name",
        "tenant_email",
        "landlord_name",
        "landlord_email",
        "property_address",
        "rent_amount",
        "start_date",
        "end_date",
    }
)


def update_contract(
    db: Session, claims: TokenClaims, contract_id: str, contract_data: ContractUpdate
) -> ContractModel:
    """
    Update the descriptive fields of a contract. Admin only.

    Only fields present in the request are written. Number, access code,
    status and signature are not updatable.

    Raises:
        NotFoundError: Unknown or deleted contract.
        DomainValidationError: No updatable field sent, a required field
            cleared, or the resulting end date precedes the start date.
    """
    if claims.role != "admin":
        raise ForbiddenError(messages.ADMIN_ONLY)

    update_fields = contract_data.model_dump(exclude_unset=True)
    if not update_fields:
        raise DomainValidationError(messages.NO_UPDATABLE_FIELDS)

    contract = contract_repo.get_contract_by_id(db, contract_id)
    if not contract or is_deleted(contract.status):
        raise NotFoundError(messages.CONTRACT_NOT_FOUND)

    if any(update_fields[key] is None for key in _REQUIRED_FIELDS & update_fields.keys()):
        raise DomainValidationError(messages.REQUIRED_FIELD_CLEARED)

    for key in ("start_date", "end_date"):
        if key in update_fields:
            update_fields[key] = update_fields[key].isoformat()

    # ISO dates compare correctly as strings
    start_date = update_fields.get("start_date", contract.start_date)
    end_date = update_fields.get("end_date", contract.end_date)
    if end_date < start_date:
        raise DomainValidationError(messages.INVALID_DATE_RANGE)

    contract = contract_repo.update_contract(db, contract_id, **update_fields)
    logger.info(
        "Contract %s updated: %s", contract.contract_number, ", ".join(sorted(update_fields))
    )
    return contract


def delete_contract(db: Session, claims: TokenClaims, contract_id: str) -> ContractModel:
    """Soft-delete a contract. It disappears from lists and charts and its tenant is locked out."""
    if claims.role != "admin":
        raise ForbiddenError(messages.ADMIN_ONLY)

    contract = contract_repo.get_contract_by_id(db, contract_id)
    if not contract or is_deleted(contract.status):
        raise NotFoundError(messages.CONTRACT_NOT_FOUND)

    contract = contract_repo.soft_delete_contract(db, contract_id)
    logger.info("Contract %s deleted", contract.contract_number)
    return contract
