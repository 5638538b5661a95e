from pydantic import BaseModel, Field


class ProductIn(BaseModel):
    name: str
    # NaN/Infinity would not survive a JSON round trip
    price: float = Field(..., allow_inf_nan=False)


class Product(ProductIn):
    id: str = Field(..., description="Generated by the store")
