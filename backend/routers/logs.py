from typing import Dict, List

from fastapi import APIRouter, Depends

from core.stock import StockService, get_stock_service

router = APIRouter()


@router.get("/logs", response_model=List[Dict])
def list_transactions(service: StockService = Depends(get_stock_service)):
    """Full transaction log, oldest first. 500 if the log can't be read."""
    return service.get_log()
