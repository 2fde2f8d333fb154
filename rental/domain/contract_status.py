from __future__ import annotations

from enum import Enum


class ContractStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    SIGNED = "signed"
    TERMINATED = "terminated"
    DELETED = "deleted"


# Display labels for the status chart; codes missing here are shown as-is.
STATUS_LABELS: dict[str, str] = {
    ContractStatus.DRAFT.value: "پیش‌نویس",
    ContractStatus.ACTIVE.value: "فعال",
    ContractStatus.SIGNED.value: "امضا شده",
    ContractStatus.TERMINATED.value: "فسخ شده",
}

# Statuses whose rent counts as income in charts and dashboard totals.
INCOME_STATUSES: tuple[str, ...] = (ContractStatus.SIGNED.value,)

# Statuses that lock a tenant out.
_CLOSED_STATUSES: tuple[str, ...] = (
    ContractStatus.TERMINATED.value,
    ContractStatus.DELETED.value,
)


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def is_deleted(status: str) -> bool:
    return status == ContractStatus.DELETED.value


def allows_tenant_login(status: str) -> bool:
    """Tenants keep access to every contract that has not been terminated or deleted."""
    return status not in _CLOSED_STATUSES


def can_sign(status: str) -> bool:
    # Re-signing a signed contract overwrites the previous signature.
    return status not in _CLOSED_STATUSES


def sqlalchemy_login_predicate(status_col):
    """SQL form of allows_tenant_login, for repository queries."""
    return status_col.notin_(_CLOSED_STATUSES)


def sqlalchemy_visible_predicate(status_col):
    """Soft-deleted contracts are hidden from lists, charts and totals."""
    return status_col != ContractStatus.DELETED.value
