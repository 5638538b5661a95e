from typing import List

from pydantic import BaseModel, ConfigDict, Field


class CartItem(BaseModel):
    """One cart entry. Quantity is always 1; duplicates are separate entries."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float = Field(..., allow_inf_nan=False)


class CartSnapshot(BaseModel):
    items: List[CartItem]
    count: int
    total: float
