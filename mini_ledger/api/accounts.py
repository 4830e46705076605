import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from mini_ledger.api.deps import get_ledger
from mini_ledger.api.ids import parse_id
from mini_ledger.api.schemas import AccountOut, BalanceResponse, CreateAccountRequest, IdResponse
from mini_ledger.exceptions import AccountNotFoundError, NoRecordsError, SinkError, ValidationError
from mini_ledger.ledger import Ledger
from mini_ledger.sinks.serialization import account_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(tags=["accounts"])


@router.get("/accounts", response_model=List[AccountOut])
def list_accounts(ledger: Ledger = Depends(get_ledger)):
    """
    List every account, sorted by ID.
    """
    try:
        accounts = ledger.list_accounts()
    except NoRecordsError:
        return []
    return [account_to_dict(a) for a in accounts]


@router.post("/accounts", response_model=IdResponse, status_code=201)
def create_account(payload: CreateAccountRequest, ledger: Ledger = Depends(get_ledger)):
    """
    Open an account and return its ID.
    """
    try:
        account_id = ledger.create_account(payload.name, payload.cpf, payload.balance)
    except ValidationError as e:
        logger.warning("Account creation rejected: %s", e)
        return PlainTextResponse(str(e), status_code=400)
    except SinkError as e:
        logger.warning("Account %s created without audit event: %s", e.subject, e)
        return JSONResponse({"id": int(e.subject)}, status_code=201)
    return JSONResponse({"id": account_id}, status_code=201)


@router.get("/accounts/{account_id}/balance", response_model=BalanceResponse)
def get_balance(account_id: str, ledger: Ledger = Depends(get_ledger)):
    """
    Return the balance of one account.
    """
    parsed = parse_id(account_id)
    if parsed is None:
        msg = f"account ID is invalid. ID given: {account_id}"
        logger.warning(msg)
        return PlainTextResponse(msg, status_code=400)

    try:
        balance = ledger.get_balance(parsed)
    except AccountNotFoundError:
        msg = f"account {parsed} not found"
        logger.warning(msg)
        return PlainTextResponse(msg, status_code=404)
    return {"id": parsed, "balance": balance}
