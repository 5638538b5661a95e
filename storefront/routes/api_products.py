from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from storefront.app.models.product import Product, ProductIn
from storefront.app.services import product_service
from storefront.app.services.document_store import DocumentStoreProto, get_store

router = APIRouter(tags=["products"])


@router.get("/products", response_model=List[Product])
async def list_products(store: DocumentStoreProto = Depends(get_store)) -> List[Dict[str, Any]]:
    return await product_service.list_products(store)


@router.post("/products", status_code=201, response_model=Product)
async def create_product(body: ProductIn, store: DocumentStoreProto = Depends(get_store)) -> Dict[str, Any]:
    return await product_service.create_product(store, body)


@router.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str, store: DocumentStoreProto = Depends(get_store)) -> Dict[str, Any]:
    product = await product_service.get_product(store, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
