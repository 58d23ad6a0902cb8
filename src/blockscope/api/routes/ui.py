# File: src/blockscope/api/routes/ui.py
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse

from .explorer import back_to_transactions, get_session, select_block, select_transaction
from ...explorer import ExplorerSession
from ...explorer.renderer import render_html

router = APIRouter()

def _home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)

@router.get("/", response_class=HTMLResponse)
async def index(session: ExplorerSession = Depends(get_session)):
    return HTMLResponse(render_html(session.render()))

@router.post("/ui/blocks/{number}")
async def ui_select_block(number: int, session: ExplorerSession = Depends(get_session)):
    select_block(session, number)
    return _home()

@router.post("/ui/transactions/{tx_hash}")
async def ui_select_transaction(tx_hash: str, session: ExplorerSession = Depends(get_session)):
    select_transaction(session, tx_hash)
    return _home()

@router.post("/ui/back/blocks")
async def ui_back_to_blocks(session: ExplorerSession = Depends(get_session)):
    session.navigation.back_to_blocks()
    return _home()

@router.post("/ui/back/transactions")
async def ui_back_to_transactions(session: ExplorerSession = Depends(get_session)):
    back_to_transactions(session)
    return _home()
