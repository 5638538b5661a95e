from typing import List

from pydantic import BaseModel, Field


class OrderLine(BaseModel):
    id: str
    quantity: int = 1


class OrderIn(BaseModel):
    # Extra keys on lines (e.g. cart items carrying name/price) are ignored
    products: List[OrderLine]
    total: float = Field(..., allow_inf_nan=False)


class Order(OrderIn):
    id: str = Field(..., description="Generated by the store")
