import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from mini_ledger.api.deps import get_ledger
from mini_ledger.api.ids import parse_id
from mini_ledger.api.schemas import CreateTransferRequest, IdResponse, TransferOut
from mini_ledger.exceptions import (
    AccountNotFoundError,
    AuthorizationError,
    NoTransfersError,
    SinkError,
    TransferNotFoundError,
)
from mini_ledger.ledger import Ledger
from mini_ledger.sinks.serialization import transfer_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transfers"])


@router.get("/transfers", response_model=List[TransferOut])
def list_transfers(ledger: Ledger = Depends(get_ledger)):
    """
    List every transfer, sorted by ID.
    """
    try:
        transfers = ledger.list_transfers()
    except NoTransfersError:
        return []
    return [transfer_to_dict(t) for t in transfers]


@router.post("/transfers", response_model=IdResponse, status_code=201)
def create_transfer(payload: CreateTransferRequest, ledger: Ledger = Depends(get_ledger)):
    """
    Create, authorize and settle a transfer in one step.
    """
    origin_id = payload.account_origin_id
    destination_id = payload.account_destination_id
    logger.info(
        "Transfer request from=%s to=%s amount=%s", origin_id, destination_id, payload.amount
    )

    try:
        transfer_id = ledger.execute_transfer(origin_id, destination_id, payload.amount)
    except AccountNotFoundError as e:
        msg = f'account {e.account_id} not found. error: "{e}"'
        logger.warning(msg)
        return PlainTextResponse(msg, status_code=400)
    except AuthorizationError as e:
        msg = f"error transferring from account [{origin_id}] to account [{destination_id}]: {e}"
        logger.warning(msg)
        return PlainTextResponse(msg, status_code=400)
    except SinkError as e:
        # The transfer is already confirmed
        logger.warning("Transfer %s confirmed without audit event: %s", e.subject, e)
        return JSONResponse({"id": int(e.subject)}, status_code=201)
    return JSONResponse({"id": transfer_id}, status_code=201)


@router.get("/transfers/{transfer_id}", response_model=TransferOut)
def get_transfer(transfer_id: str, ledger: Ledger = Depends(get_ledger)):
    """
    Fetch a single transfer by ID.
    """
    parsed = parse_id(transfer_id)
    if parsed is None:
        msg = f"transfer ID is invalid. ID given: {transfer_id}"
        logger.warning(msg)
        return PlainTextResponse(msg, status_code=400)

    try:
        transfer = ledger.get_transfer(parsed)
    except TransferNotFoundError:
        msg = f"transfer {parsed} not found"
        logger.warning(msg)
        return PlainTextResponse(msg, status_code=404)
    return transfer_to_dict(transfer)
