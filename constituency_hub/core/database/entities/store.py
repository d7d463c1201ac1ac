"""
Storefront entity models: products with size/colour variants, and orders.

Order lines copy product name, variant description and unit price at the time
of purchase so later catalogue edits do not rewrite past orders. Deleting a
product or variant sets the line's reference to NULL and keeps the copy.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import TimestampedTable


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class Product(TimestampedTable, table=True):
    """
    Table: products
    """

    __tablename__ = "products"
    __table_args__ = ({"extend_existing": True},)

    name_en: str = Field(max_length=300)
    name_bn: Optional[str] = Field(default=None, max_length=300)
    slug: str = Field(index=True, unique=True, max_length=300)
    description_en: Optional[str] = Field(default=None)
    description_bn: Optional[str] = Field(default=None)
    base_price: float = Field(default=0.0)
    images: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    is_active: bool = Field(default=True)
    is_featured: bool = Field(default=False)
    display_order: int = Field(default=0)

    def __repr__(self) -> str:
        return f"Product(id={self.id}, slug={self.slug})"


class ProductVariant(TimestampedTable, table=True):
    """
    Table: product_variants
    """

    __tablename__ = "product_variants"
    __table_args__ = ({"extend_existing": True},)

    product_id: str = Field(foreign_key="products.id", index=True)
    size: Optional[str] = Field(default=None, max_length=20)
    color: Optional[str] = Field(default=None, max_length=50)
    color_code: Optional[str] = Field(default=None, max_length=20)
    price_adjustment: float = Field(default=0.0)
    stock: int = Field(default=0)
    sku: Optional[str] = Field(default=None, max_length=100)
    is_active: bool = Field(default=True)

    def describe(self) -> str:
        return " / ".join(part for part in (self.size, self.color) if part)


class Order(TimestampedTable, table=True):
    """
    Table: orders
    """

    __tablename__ = "orders"
    __table_args__ = ({"extend_existing": True},)

    order_number: str = Field(index=True, unique=True, max_length=30)
    customer_name: str = Field(max_length=200)
    customer_phone: str = Field(index=True, max_length=20)
    customer_email: Optional[str] = Field(default=None, max_length=255)
    shipping_address: str
    notes: Optional[str] = Field(default=None)
    subtotal: float = Field(default=0.0)
    delivery_fee: float = Field(default=0.0)
    total: float = Field(default=0.0)
    status: str = Field(default=OrderStatus.PENDING.value, index=True, max_length=20)
    admin_notes: Optional[str] = Field(default=None)

    def __repr__(self) -> str:
        return f"Order(order_number={self.order_number}, status={self.status})"


class OrderItem(TimestampedTable, table=True):
    """
    Table: order_items
    """

    __tablename__ = "order_items"
    __table_args__ = ({"extend_existing": True},)

    order_id: str = Field(foreign_key="orders.id", index=True)
    product_id: Optional[str] = Field(default=None, foreign_key="products.id", ondelete="SET NULL")
    variant_id: Optional[str] = Field(default=None, foreign_key="product_variants.id", ondelete="SET NULL")
    product_name: str = Field(max_length=300)
    variant_info: Optional[str] = Field(default=None, max_length=200)
    quantity: int
    unit_price: float
    total_price: float
