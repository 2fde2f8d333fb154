from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rental.api.deps import get_current_claims, get_db, get_notifier, require_roles
from rental.core import messages
from rental.schemas.auth import TokenClaims
from rental.schemas.common import MessageResponse
from rental.schemas.contract import (
    Contract,
    ContractCreate,
    ContractCreated,
    ContractSign,
    ContractUpdate,
)
from rental.services.contract import (
    create_contract,
    delete_contract,
    list_contracts,
    sign_contract,
    terminate_contract,
    update_contract,
)
from rental.services.notification import NotificationDispatcher

router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.get("", response_model=list[Contract])
def get_contracts(
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims),
):
    """
    List contracts.
    - Admin: all contracts, newest first
    - Tenant: a one-element list holding their own contract
    """
    return list_contracts(db, claims)


@router.post("", response_model=ContractCreated)
async def create_new_contract(
    contract_data: ContractCreate,
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
    claims: TokenClaims = Depends(require_roles("admin")),
):
    """
    Create a draft contract. Only the admin can create contracts.

    The generated access code is returned and also emailed to the tenant.
    """
    contract = await create_contract(db, notifier, claims, contract_data)
    return ContractCreated(
        contract_number=contract.contract_number,
        access_code=contract.access_code,
        id=contract.id,
    )


@router.post("/{contract_number}/sign", response_model=MessageResponse)
async def sign(
    contract_number: str,
    sign_data: ContractSign,
    db: Session = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
    claims: TokenClaims = Depends(require_roles("tenant")),
):
    """Sign the caller's own contract and notify the landlord."""
    await sign_contract(
        db,
        notifier,
        claims,
        contract_number=contract_number,
        signature=sign_data.signature,
        national_id_image=sign_data.national_id_image,
    )
    return MessageResponse(message=messages.CONTRACT_SIGNED)


@router.post("/{contract_number}/terminate", response_model=MessageResponse)
def terminate(
    contract_number: str,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(require_roles("admin")),
):
    """Terminate a contract. Its tenant can no longer log in."""
    terminate_contract(db, claims, contract_number)
    return MessageResponse(message=messages.CONTRACT_TERMINATED_SUCCESS)


@router.put("/{contract_id}", response_model=MessageResponse)
def update_contract_by_id(
    contract_id: str,
    contract_data: ContractUpdate,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(require_roles("admin")),
):
    """
    Update a contract. Only the admin can update contracts.

    Fields not included in the request are not updated.
    """
    update_contract(db, claims, contract_id, contract_data)
    return MessageResponse(message=messages.CONTRACT_UPDATED)


@router.delete("/{contract_id}", response_model=MessageResponse)
def delete_contract_by_id(
    contract_id: str,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(require_roles("admin")),
):
    """Soft-delete a contract; the row is kept with status `deleted`."""
    delete_contract(db, claims, contract_id)
    return MessageResponse(message=messages.CONTRACT_DELETED)
