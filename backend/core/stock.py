"""
Stock mutations for a section.

Each operation loads the section's whole list, changes it in memory, writes
it back and appends to the transaction log. Save/log failures are logged by
the store and do not fail the operation.
"""

from typing import Dict, Iterable, List, Optional, Sequence

import structlog
from fastapi import Request

from core.exceptions import (
    InsufficientStock,
    InvalidInput,
    InvalidSection,
    ItemNotFound,
)
from core.importer import ParsedRow, is_valid
from db.store import JsonStore

logger = structlog.get_logger(__name__)

IN = "IN"
OUT = "OUT"
UPLOAD = "UPLOAD"


def _find(stock_data: List[Dict], size: int) -> Optional[Dict]:
    for item in stock_data:
        if item.get("size") == size:
            return item
    return None


class StockService:
    def __init__(self, store: JsonStore, sections: Sequence[str]):
        self.store = store
        self.sections = tuple(sections)

    def _check_section(self, section: Optional[str]) -> None:
        if not section or section not in self.sections:
            raise InvalidSection()

    def _check_adjustment(self, section, size, quantity) -> None:
        # Zero/empty counts as missing, as does a non-positive quantity.
        if not section or not size or not quantity or quantity <= 0:
            raise InvalidInput()
        self._check_section(section)

    def get_stock(self, section: str) -> List[Dict]:
        self._check_section(section)
        return self.store.load(section)

    def get_log(self) -> List[Dict]:
        return self.store.load_log(strict=True)

    def stock_in(self, section: str, size: int, quantity: int) -> List[Dict]:
        self._check_adjustment(section, size, quantity)

        stock_data = self.store.load(section)
        item = _find(stock_data, size)
        if item is not None:
            item["quantity"] += quantity
        else:
            stock_data.append({"size": size, "quantity": quantity})

        self.store.save(section, stock_data)
        self.store.append_log({"section": section, "size": size, "quantity": quantity, "type": IN})
        logger.info("Stock in", section=section, size=size, quantity=quantity)
        return stock_data

    def stock_out(self, section: str, size: int, quantity: int) -> List[Dict]:
        self._check_adjustment(section, size, quantity)

        stock_data = self.store.load(section)
        item = _find(stock_data, size)
        if item is None:
            raise ItemNotFound()
        if item["quantity"] < quantity:
            raise InsufficientStock()

        item["quantity"] -= quantity

        self.store.save(section, stock_data)
        self.store.append_log({"section": section, "size": size, "quantity": quantity, "type": OUT})
        logger.info("Stock out", section=section, size=size, quantity=quantity)
        return stock_data

    def bulk_set(self, section: str, rows: Iterable[ParsedRow]) -> List[Dict]:
        """Set absolute quantities from parsed upload rows.

        Rows with a non-numeric size or quantity, or a negative quantity, are
        skipped without a log entry. The list is saved once after every row has
        been read, then one UPLOAD transaction is appended per applied row, so a
        read that fails partway leaves both stock and log untouched.
        """
        self._check_section(section)

        stock_data = self.store.load(section)
        applied = []
        skipped = 0
        for row in rows:
            if not is_valid(row) or row.quantity < 0:
                skipped += 1
                continue

            item = _find(stock_data, row.size)
            if item is not None:
                item["quantity"] = row.quantity
            else:
                stock_data.append({"size": row.size, "quantity": row.quantity})

            applied.append({"section": section, "size": row.size, "quantity": row.quantity, "type": UPLOAD})

        self.store.save(section, stock_data)
        for entry in applied:
            self.store.append_log(entry)
        logger.info("Bulk upload applied", section=section, applied=len(applied), skipped=skipped)
        return stock_data


def get_stock_service(request: Request) -> StockService:
    return request.app.state.stock_service
