from datetime import datetime, timezone

from sqlalchemy import Float, cast, func, literal_column
from sqlalchemy.orm import Session

from rental.db.models.contract import Contract as ContractModel
from rental.domain.contract_status import (
    INCOME_STATUSES,
    ContractStatus,
    sqlalchemy_login_predicate,
    sqlalchemy_visible_predicate,
)
from rental.errors import NotFoundError


def get_contract_by_id(db: Session, contract_id: str) -> ContractModel | None:
    """Get a contract by ID."""
    return db.query(ContractModel).filter(ContractModel.id == contract_id).first()


def get_contract_by_number(db: Session, contract_number: str) -> ContractModel | None:
    """Get a contract by its public contract number."""
    return (
        db.query(ContractModel)
        .filter(ContractModel.contract_number == contract_number)
        .first()
    )


def get_contract_for_login(
    db: Session, contract_number: str, access_code: str
) -> ContractModel | None:
    """Get a contract matching both tenant credentials, excluding terminated and deleted contracts."""
    return (
        db.query(ContractModel)
        .filter(
            ContractModel.contract_number == contract_number,
            ContractModel.access_code == access_code,
            sqlalchemy_login_predicate(ContractModel.status),
        )
        .first()
    )


def get_all_contracts(db: Session) -> list[ContractModel]:
    """Get all contracts that have not been deleted, newest first."""
    return (
        db.query(ContractModel)
        .filter(sqlalchemy_visible_predicate(ContractModel.status))
        .order_by(ContractModel.created_at.desc())
        .all()
    )


def create_contract(db: Session, **fields) -> ContractModel:
    """Create a new contract in the database. Pure data access - no business logic."""
    db_contract = ContractModel(**fields)
    db.add(db_contract)
    db.commit()
    db.refresh(db_contract)
    return db_contract


def update_contract(db: Session, contract_id: str, **fields) -> ContractModel:
    """
    Update a contract. Only updates fields that are explicitly provided.

    `updated_at` is refreshed on every update.
    """
    contract = get_contract_by_id(db, contract_id)
    if not contract:
        raise NotFoundError("Contract not found")

    for key, value in fields.items():
        setattr(contract, key, value)
    contract.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(contract)
    return contract


def soft_delete_contract(db: Session, contract_id: str) -> ContractModel:
    """Mark a contract deleted; the row is kept."""
    contract = get_contract_by_id(db, contract_id)
    if not contract:
        raise NotFoundError("Contract not found")

    contract.status = ContractStatus.DELETED.value
    contract.deleted_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(contract)
    return contract


def sign_contract(
    db: Session,
    contract_number: str,
    signature: str,
    national_id_image: str,
) -> ContractModel:
    """Store the signature and ID image and mark the contract signed."""
    contract = get_contract_by_number(db, contract_number)
    if not contract:
        raise NotFoundError("Contract not found")

    contract.signature = signature
    contract.national_id_image = national_id_image
    contract.status = ContractStatus.SIGNED.value
    contract.signed_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(contract)
    return contract


def terminate_contract(db: Session, contract_number: str) -> ContractModel:
    """Mark a contract terminated."""
    contract = get_contract_by_number(db, contract_number)
    if not contract:
        raise NotFoundError("Contract not found")

    contract.status = ContractStatus.TERMINATED.value
    contract.terminated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(contract)
    return contract


def _month_key(db: Session, column):
    """`YYYY-MM` of a timestamp column, in the bound database's dialect."""
    dialect_name = db.get_bind().dialect.name
    if dialect_name == "sqlite":
        return func.strftime("%Y-%m", column)
    # PostgreSQL and other databases use TO_CHAR. The format is inlined so the
    # SELECT and GROUP BY expressions compare equal.
    return func.to_char(column, literal_column("'YYYY-MM'"))


def _rent():
    return cast(ContractModel.rent_amount, Float)


def get_signed_income_by_month(
    db: Session, limit: int = 12
) -> list[tuple[str, float | None, int]]:
    """
    Sum rent and count income-bearing contracts per creation month.

    Returns:
        (month_key, income_sum, contract_count) rows, most recent month first.
    """
    month = _month_key(db, ContractModel.created_at).label("month")
    return (
        db.query(
            month,
            func.sum(_rent()).label("income"),
            func.count(ContractModel.id).label("contracts"),
        )
        .filter(ContractModel.status.in_(INCOME_STATUSES))
        .group_by(month)
        .order_by(month.desc())
        .limit(limit)
        .all()
    )


def get_income_total(db: Session, month_key: str | None = None) -> float | None:
    """Sum of rent over income-bearing contracts, optionally for one `YYYY-MM` creation month."""
    query = db.query(func.sum(_rent())).filter(ContractModel.status.in_(INCOME_STATUSES))
    if month_key is not None:
        query = query.filter(_month_key(db, ContractModel.created_at) == month_key)
    return query.scalar()


def get_status_counts(db: Session) -> list[tuple[str, int]]:
    """Count contracts per status code, soft-deleted contracts excluded."""
    return (
        db.query(ContractModel.status, func.count(ContractModel.id))
        .filter(sqlalchemy_visible_predicate(ContractModel.status))
        .group_by(ContractModel.status)
        .all()
    )


def get_property_type_stats(db: Session) -> list[tuple[str, int, float | None]]:
    """(property_type, count, average_rent) over income-bearing contracts, most common first."""
    count = func.count(ContractModel.id).label("count")
    return (
        db.query(ContractModel.property_type, count, func.avg(_rent()))
        .filter(
            ContractModel.status.in_(INCOME_STATUSES),
            ContractModel.property_type.isnot(None),
            ContractModel.property_type != "",
        )
        .group_by(ContractModel.property_type)
        .order_by(count.desc(), ContractModel.property_type)
        .all()
    )


def get_property_sizes(db: Session) -> list[tuple[str, str]]:
    """(property_size, rent_amount) of income-bearing contracts that state a size."""
    return (
        db.query(ContractModel.property_size, ContractModel.rent_amount)
        .filter(
            ContractModel.status.in_(INCOME_STATUSES),
            ContractModel.property_size.isnot(None),
            ContractModel.property_size != "",
        )
        .all()
    )


def get_top_locations(db: Session, limit: int = 10) -> list[tuple[str, int, float | None]]:
    """(property_address, count, average_rent) for the most frequent addresses."""
    count = func.count(ContractModel.id).label("count")
    return (
        db.query(ContractModel.property_address, count, func.avg(_rent()))
        .filter(ContractModel.status.in_(INCOME_STATUSES))
        .group_by(ContractModel.property_address)
        .order_by(count.desc(), ContractModel.property_address)
        .limit(limit)
        .all()
    )
