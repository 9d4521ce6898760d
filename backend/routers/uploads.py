from typing import Dict, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from core.config import Settings
from core.exceptions import InvalidInput, InvalidSection
from core.importer import discard_upload, parse_rows, save_upload
from core.stock import StockService, get_stock_service

router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.post("/upload", response_model=Dict)
def upload_stock_file(
    file: Optional[UploadFile] = File(None),
    section: Optional[str] = Form(None),
    service: StockService = Depends(get_stock_service),
    settings: Settings = Depends(get_settings),
):
    """
    Set absolute quantities for a section from a CSV file.

    The CSV needs ``size`` and ``quantity`` columns. Rows that don't parse are
    skipped silently; the response always carries the full resulting list.
    """
    if not section or section not in service.sections:
        raise InvalidSection()
    if file is None:
        raise InvalidInput("No file uploaded")

    path = save_upload(file, settings.upload_dir)
    try:
        stock_data = service.bulk_set(section, parse_rows(path))
    finally:
        discard_upload(path)

    return {"success": True, "stockData": stock_data}
