"""
Store administration.

Product catalogue management and order fulfilment.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.database.entities.store import OrderStatus
from constituency_hub.core.models.io import Deleted, Envelope, ok
from constituency_hub.core.models.io.store import (
    OrderAdminUpdate,
    OrderRead,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from constituency_hub.server.services.deps import SessionDep
from constituency_hub.server.services.store import StoreService

router = APIRouter()


@router.get("/products", response_model=Envelope[List[ProductRead]], summary="List All Products")
async def list_products(
    session: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
) -> Envelope[List[ProductRead]]:
    products, pagination = await StoreService(session).list_products_admin(page, limit)
    return ok(products, pagination)


@router.post("/products", response_model=Envelope[ProductRead], status_code=201, summary="Create Product")
async def create_product(data: ProductCreate, session: SessionDep) -> Envelope[ProductRead]:
    """
    Create a product with its variants.

    The slug is derived from ``name_en``; a clash gets a timestamp suffix.
    """
    return ok(await StoreService(session).create_product(data))


@router.put("/products/{product_id}", response_model=Envelope[ProductRead], summary="Update Product")
async def update_product(product_id: str, data: ProductUpdate, session: SessionDep) -> Envelope[ProductRead]:
    """Update a product. A ``variants`` list replaces every existing variant."""
    return ok(await StoreService(session).update_product(product_id, data))


@router.delete("/products/{product_id}", response_model=Envelope[Deleted], summary="Delete Product")
async def delete_product(product_id: str, session: SessionDep) -> Envelope[Deleted]:
    await StoreService(session).delete_product(product_id)
    return ok(Deleted(id=product_id))


@router.get("/orders", response_model=Envelope[List[OrderRead]], summary="List Orders")
async def list_orders(
    session: SessionDep,
    status: Optional[OrderStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
) -> Envelope[List[OrderRead]]:
    orders, pagination = await StoreService(session).list_orders(status.value if status else None, page, limit)
    return ok(orders, pagination)


@router.patch("/orders/{order_id}", response_model=Envelope[OrderRead], summary="Update Order")
async def update_order(order_id: str, data: OrderAdminUpdate, session: SessionDep) -> Envelope[OrderRead]:
    return ok(await StoreService(session).update_order(order_id, data))


@router.delete("/orders/{order_id}", response_model=Envelope[Deleted], summary="Delete Order")
async def delete_order(order_id: str, session: SessionDep) -> Envelope[Deleted]:
    await StoreService(session).delete_order(order_id)
    return ok(Deleted(id=order_id))
