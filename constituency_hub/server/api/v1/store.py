"""
Store Endpoints.

The merchandise catalogue, cash-on-delivery ordering and order tracking.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.store import OrderCreate, OrderRead, ProductRead
from constituency_hub.server.services.deps import SessionDep
from constituency_hub.server.services.store import StoreService

router = APIRouter()


@router.get(
    "/products",
    response_model=Envelope[List[ProductRead]],
    summary="List Products",
)
async def list_products(
    session: SessionDep,
    featured: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
) -> Envelope[List[ProductRead]]:
    products, pagination = await StoreService(session).list_products(featured, page, limit)
    return ok(products, pagination)


@router.get(
    "/products/{slug}",
    response_model=Envelope[ProductRead],
    summary="Get Product",
    responses={404: {"description": "Product not found"}},
)
async def get_product(slug: str, session: SessionDep) -> Envelope[ProductRead]:
    return ok(await StoreService(session).get_product(slug))


@router.post(
    "/orders",
    response_model=Envelope[OrderRead],
    status_code=201,
    summary="Place Order",
    responses={400: {"description": "Missing customer details or unavailable items"}},
)
async def place_order(data: OrderCreate, session: SessionDep) -> Envelope[OrderRead]:
    """
    Place a cash-on-delivery order.

    Unit prices are taken from the catalogue, never from the request. The
    total is the item subtotal plus the flat delivery fee.
    """
    return ok(await StoreService(session).create_order(data))


@router.get(
    "/orders/track",
    response_model=Envelope[OrderRead],
    summary="Track Order",
    responses={404: {"description": "No order with this number and phone"}},
)
async def track_order(
    session: SessionDep,
    order_number: Optional[str] = Query(None),
    phone: Optional[str] = Query(None),
) -> Envelope[OrderRead]:
    return ok(await StoreService(session).track_order(order_number, phone))
