# File: src/blockscope/api/routes/explorer.py
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request

from ...explorer import ExplorerSession
from ...explorer.state import ScreenKind

router = APIRouter(prefix="/api/v1/explorer")

def get_session(request: Request) -> ExplorerSession:
    return request.app.state.session

def view_payload(session: ExplorerSession) -> Dict[str, Any]:
    state = session.state
    block = state.selected_block
    tx = state.selected_transaction
    return {
        "screen": state.kind.value,
        "loading": state.loading,
        "loading_detail": state.loading_detail,
        "error": state.error,
        "blocks": [b.model_dump() for b in state.blocks],
        "selected_block": block.model_dump() if block is not None else None,
        "selected_transaction": tx.model_dump() if tx is not None else None,
        "view": session.render().to_dict(),
    }

def select_block(session: ExplorerSession, number: int):
    block = session.find_block(number)
    if block is None:
        raise HTTPException(status_code=404, detail="Block not found")
    session.navigation.select_block(block)

def select_transaction(session: ExplorerSession, tx_hash: str):
    if session.state.selected_block is None:
        raise HTTPException(status_code=409, detail="No block selected")
    tx = session.find_transaction(tx_hash)
    if tx is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    session.navigation.select_transaction(tx)

def back_to_transactions(session: ExplorerSession):
    if session.state.kind is not ScreenKind.TRANSACTION_DETAIL:
        raise HTTPException(status_code=409, detail="No transaction selected")
    session.navigation.back_to_transactions()

async def _respond(session: ExplorerSession, wait: bool) -> Dict[str, Any]:
    if wait:
        await session.drain()
    return view_payload(session)

@router.get("/view")
async def get_view(wait: bool = False, session: ExplorerSession = Depends(get_session)):
    return await _respond(session, wait)

@router.post("/blocks/{number}/select")
async def post_select_block(number: int, wait: bool = False, session: ExplorerSession = Depends(get_session)):
    select_block(session, number)
    return await _respond(session, wait)

@router.post("/transactions/{tx_hash}/select")
async def post_select_transaction(tx_hash: str, wait: bool = False,
                                  session: ExplorerSession = Depends(get_session)):
    select_transaction(session, tx_hash)
    return await _respond(session, wait)

@router.post("/back/blocks")
async def post_back_to_blocks(session: ExplorerSession = Depends(get_session)):
    session.navigation.back_to_blocks()
    return view_payload(session)

@router.post("/back/transactions")
async def post_back_to_transactions(session: ExplorerSession = Depends(get_session)):
    back_to_transactions(session)
    return view_payload(session)
