"""
Merchandise store service.

Checkout never trusts client prices: every line is priced from the catalogue
as the product base price plus the variant's price adjustment.
"""

from __future__ import annotations

import logging
import secrets
import string
from typing import Dict, List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from constituency_hub.core.database.entities.store import Order, OrderItem, OrderStatus, Product, ProductVariant
from constituency_hub.core.database.utils import plain_values, utc_now_naive
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io.common import Pagination
from constituency_hub.core.models.io.store import (
    OrderAdminUpdate,
    OrderCreate,
    OrderItemRead,
    OrderRead,
    ProductCreate,
    ProductRead,
    ProductUpdate,
    ProductVariantInput,
    ProductVariantRead,
)
from constituency_hub.core.monitoring import log_domain_event
from constituency_hub.core.text import slugify
from constituency_hub.server.core.config import settings

from .pagination import paginate

logger = logging.getLogger(__name__)

ORDER_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


def generate_order_number(now=None) -> str:
    """``ORD-YYYYMMDD-XXXX`` with a random alphanumeric suffix."""
    now = now or utc_now_naive()
    suffix = "".join(secrets.choice(ORDER_SUFFIX_ALPHABET) for _ in range(4))
    return f"ORD-{now:%Y%m%d}-{suffix}"


class StoreService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _variants(self, product_ids: List[str], active_only: bool) -> Dict[str, List[ProductVariant]]:
        if not product_ids:
            return {}
        query = select(ProductVariant).where(ProductVariant.product_id.in_(product_ids))
        if active_only:
            query = query.where(ProductVariant.is_active == True)  # noqa: E712
        result = await self.session.execute(query.order_by(ProductVariant.created_at))
        grouped: Dict[str, List[ProductVariant]] = {}
        for variant in result.scalars().all():
            grouped.setdefault(variant.product_id, []).append(variant)
        return grouped

    async def _to_reads(self, products: List[Product], active_only: bool = True) -> List[ProductRead]:
        variants = await self._variants([p.id for p in products], active_only)
        reads = []
        for product in products:
            read = ProductRead.model_validate(product)
            read.variants = [ProductVariantRead.model_validate(v) for v in variants.get(product.id, [])]
            reads.append(read)
        return reads

    async def list_products(
        self, featured: Optional[bool] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[ProductRead], Pagination]:
        query = select(Product).where(Product.is_active == True)  # noqa: E712
        if featured is not None:
            query = query.where(Product.is_featured == featured)
        query = query.order_by(Product.display_order, Product.created_at.desc())
        products, pagination = await paginate(self.session, query, page=page, limit=limit)
        return await self._to_reads(products), pagination

    async def get_product(self, slug: str) -> ProductRead:
        result = await self.session.execute(
            select(Product).where(Product.slug == slug, Product.is_active == True)  # noqa: E712
        )
        product = result.scalars().first()
        if product is None:
            raise NotFoundError("Product not found")
        return (await self._to_reads([product]))[0]

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    async def _unique_order_number(self) -> str:
        while True:
            candidate = generate_order_number()
            taken = await self.session.execute(select(Order.id).where(Order.order_number == candidate))
            if taken.first() is None:
                return candidate

    async def _order_read(self, order: Order) -> OrderRead:
        result = await self.session.execute(
            select(OrderItem)
            .where(OrderItem.order_id == order.id)
            .order_by(OrderItem.created_at)
            .execution_options(populate_existing=True)
        )
        read = OrderRead.model_validate(order)
        read.items = [OrderItemRead.model_validate(item) for item in result.scalars().all()]
        return read

    async def create_order(self, data: OrderCreate) -> OrderRead:
        lines = []
        for item in data.items:
            product = await self.session.get(Product, item.product_id)
            if product is None or not product.is_active:
                raise BadRequestError(f"Product not available: {item.product_id}")
            variant = None
            if item.variant_id:
                variant = await self.session.get(ProductVariant, item.variant_id)
                if variant is None or variant.product_id != product.id or not variant.is_active:
                    raise BadRequestError(f"Variant not available: {item.variant_id}")
            unit_price = product.base_price + (variant.price_adjustment if variant else 0.0)
            lines.append((product, variant, item.quantity, unit_price))

        subtotal = sum(quantity * unit_price for _, _, quantity, unit_price in lines)
        delivery_fee = settings.site.delivery_fee
        order = Order(
            order_number=await self._unique_order_number(),
            customer_name=data.customer_name.strip(),
            customer_phone=data.customer_phone.strip(),
            customer_email=data.customer_email or None,
            shipping_address=data.shipping_address.strip(),
            notes=data.notes or None,
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=subtotal + delivery_fee,
            status=OrderStatus.PENDING.value,
        )
        self.session.add(order)
        await self.session.flush()

        for product, variant, quantity, unit_price in lines:
            self.session.add(
                OrderItem(
                    order_id=order.id,
                    product_id=product.id,
                    variant_id=variant.id if variant else None,
                    product_name=product.name_en,
                    variant_info=variant.describe() if variant else None,
                    quantity=quantity,
                    unit_price=unit_price,
                    total_price=unit_price * quantity,
                )
            )
        await self.session.commit()
        await self.session.refresh(order)

        log_domain_event("Order placed", order_number=order.order_number, total=order.total)
        logger.info(f"Order {order.order_number} placed: {len(lines)} line(s), total {order.total}")
        return await self._order_read(order)

    async def track_order(self, order_number: Optional[str], phone: Optional[str]) -> OrderRead:
        if not (order_number or "").strip() or not (phone or "").strip():
            raise BadRequestError("Order number and phone are required")
        result = await self.session.execute(
            select(Order).where(Order.order_number == order_number.strip(), Order.customer_phone == phone.strip())
        )
        order = result.scalars().first()
        if order is None:
            raise NotFoundError("Order not found. Please check your order number and phone number.")
        return await self._order_read(order)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    async def _unique_slug(self, name: str, exclude_id: Optional[str] = None) -> str:
        slug = slugify(name) or "product"
        query = select(Product.id).where(Product.slug == slug)
        if exclude_id:
            query = query.where(Product.id != exclude_id)
        if (await self.session.execute(query)).first() is not None:
            slug = f"{slug}-{int(utc_now_naive().timestamp() * 1000)}"
        return slug

    def _add_variants(self, product_id: str, variants: List[ProductVariantInput]) -> None:
        for variant in variants:
            self.session.add(ProductVariant(product_id=product_id, **variant.model_dump()))

    async def list_products_admin(self, page: int = 1, limit: int = 50) -> Tuple[List[ProductRead], Pagination]:
        query = select(Product).order_by(Product.display_order, Product.created_at.desc())
        products, pagination = await paginate(self.session, query, page=page, limit=limit)
        return await self._to_reads(products, active_only=False), pagination

    async def create_product(self, data: ProductCreate) -> ProductRead:
        product = Product(slug=await self._unique_slug(data.name_en), **data.model_dump(exclude={"variants"}))
        self.session.add(product)
        await self.session.flush()
        self._add_variants(product.id, data.variants)
        await self.session.commit()
        await self.session.refresh(product)
        logger.info(f"Product {product.slug} created with {len(data.variants)} variant(s)")
        return (await self._to_reads([product], active_only=False))[0]

    async def update_product(self, product_id: str, data: ProductUpdate) -> ProductRead:
        product = await self.session.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product not found")

        update = data.model_dump(exclude_unset=True, exclude={"variants"})
        if update.get("name_en") and update["name_en"] != product.name_en:
            product.slug = await self._unique_slug(update["name_en"], exclude_id=product.id)
        for key, value in update.items():
            setattr(product, key, value)

        if data.variants is not None:
            await self.session.execute(delete(ProductVariant).where(ProductVariant.product_id == product.id))
            self._add_variants(product.id, data.variants)

        product.updated_at = utc_now_naive()
        self.session.add(product)
        await self.session.commit()
        await self.session.refresh(product)
        return (await self._to_reads([product], active_only=False))[0]

    async def delete_product(self, product_id: str) -> None:
        product = await self.session.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product not found")
        await self.session.execute(delete(ProductVariant).where(ProductVariant.product_id == product.id))
        await self.session.delete(product)
        await self.session.commit()

    async def list_orders(
        self, status: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[OrderRead], Pagination]:
        query = select(Order)
        if status:
            query = query.where(Order.status == status)
        query = query.order_by(Order.created_at.desc())
        orders, pagination = await paginate(self.session, query, page=page, limit=limit)
        return [await self._order_read(order) for order in orders], pagination

    async def update_order(self, order_id: str, data: OrderAdminUpdate) -> OrderRead:
        order = await self.session.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")
        for key, value in plain_values(data.model_dump(exclude_unset=True)).items():
            setattr(order, key, value)
        order.updated_at = utc_now_naive()
        self.session.add(order)
        await self.session.commit()
        await self.session.refresh(order)
        logger.info(f"Order {order.order_number} updated: status={order.status}")
        return await self._order_read(order)

    async def delete_order(self, order_id: str) -> None:
        order = await self.session.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")
        await self.session.execute(delete(OrderItem).where(OrderItem.order_id == order.id))
        await self.session.delete(order)
        await self.session.commit()
