"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from mini_ledger.models import Account, Transfer


def to_dict(obj: Any) -> dict:
    """Convert a record to a JSON-ready dictionary."""
    if isinstance(obj, Account):
        return account_to_dict(obj)
    if isinstance(obj, Transfer):
        return transfer_to_dict(obj)
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    if isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a dataclass without deep-copying its values."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def account_to_dict(account: Account) -> dict:
    """Public JSON shape of an account."""
    return {
        "id": account.account_id,
        "name": account.name,
        "cpf": account.cpf,
        "balance": account.balance,
        "created_at": serialize_value(account.created_at),
    }


def transfer_to_dict(transfer: Transfer) -> dict:
    """Public JSON shape of a transfer; status is rendered as display text."""
    return {
        "id": transfer.transfer_id,
        "account_origin_id": transfer.origin_account_id,
        "account_destination_id": transfer.destination_account_id,
        "amount": transfer.amount,
        "created_at": serialize_value(transfer.created_at),
        "status": transfer.status_text,
    }


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, (Account, Transfer)):
        return to_dict(value)
    elif is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    elif isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value
