from typing import Dict, List

from fastapi import APIRouter, Depends

from core.stock import StockService, get_stock_service
from schemas.stock import StockAdjustment

router = APIRouter()


@router.get("/{section}", response_model=List[Dict])
def get_stock(section: str, service: StockService = Depends(get_stock_service)):
    """Current stock list for a section, as stored."""
    return service.get_stock(section)


@router.post("/in", response_model=Dict)
def stock_in(payload: StockAdjustment, service: StockService = Depends(get_stock_service)):
    """Add quantity to a size, creating the size if it is new."""
    stock_data = service.stock_in(payload.section, payload.size, payload.quantity)
    return {"success": True, "stockData": stock_data}


@router.post("/out", response_model=Dict)
def stock_out(payload: StockAdjustment, service: StockService = Depends(get_stock_service)):
    """Remove quantity from an existing size."""
    stock_data = service.stock_out(payload.section, payload.size, payload.quantity)
    return {"success": True, "stockData": stock_data}
