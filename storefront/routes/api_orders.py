from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from storefront.app.models.order import Order, OrderIn
from storefront.app.services import order_service
from storefront.app.services.document_store import DocumentStoreProto, get_store

router = APIRouter(tags=["orders"])


@router.post("/orders", status_code=201, response_model=Order)
async def create_order(body: OrderIn, store: DocumentStoreProto = Depends(get_store)) -> Dict[str, Any]:
    # total is taken as sent; it is not checked against the lines
    return await order_service.create_order(store, body)


@router.get("/orders", response_model=List[Order])
async def list_orders(store: DocumentStoreProto = Depends(get_store)) -> List[Dict[str, Any]]:
    return await order_service.list_orders(store)


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(order_id: str, store: DocumentStoreProto = Depends(get_store)) -> Dict[str, Any]:
    order = await order_service.get_order(store, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
