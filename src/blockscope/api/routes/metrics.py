# File: src/blockscope/api/routes/metrics.py
from fastapi import APIRouter, HTTPException, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST

router = APIRouter()

@router.get("/metrics")
async def get_metrics(request: Request):
    metrics = request.app.state.metrics
    if metrics is None:
        raise HTTPException(status_code=404, detail="Metrics disabled")
    return Response(content=metrics.export(), media_type=CONTENT_TYPE_LATEST)
