from typing import Optional

from pydantic import BaseModel, StrictInt


class StockAdjustment(BaseModel):
    # Optional so a missing field surfaces as "Invalid input data" rather than a 422
    section: Optional[str] = None
    size: Optional[StrictInt] = None
    quantity: Optional[StrictInt] = None
