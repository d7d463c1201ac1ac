"""Storefront schemas: catalogue, checkout and order tracking."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from constituency_hub.core.database.entities.store import OrderStatus


class ProductVariantRead(BaseModel):
    id: str
    size: Optional[str] = None
    color: Optional[str] = None
    color_code: Optional[str] = None
    price_adjustment: float
    stock: int
    sku: Optional[str] = None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class ProductRead(BaseModel):
    id: str
    name_en: str
    name_bn: Optional[str] = None
    slug: str
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    base_price: float
    images: List[str]
    is_active: bool
    is_featured: bool
    display_order: int
    created_at: datetime
    variants: List[ProductVariantRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class ProductVariantInput(BaseModel):
    size: Optional[str] = None
    color: Optional[str] = None
    color_code: Optional[str] = None
    price_adjustment: float = 0.0
    stock: int = Field(default=0, ge=0)
    sku: Optional[str] = None
    is_active: bool = True


class ProductCreate(BaseModel):
    name_en: str = Field(..., min_length=1)
    name_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    base_price: float = Field(..., ge=0)
    images: List[str] = Field(default_factory=list)
    is_active: bool = True
    is_featured: bool = False
    display_order: int = 0
    variants: List[ProductVariantInput] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    base_price: Optional[float] = Field(default=None, ge=0)
    images: Optional[List[str]] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    display_order: Optional[int] = None
    variants: Optional[List[ProductVariantInput]] = Field(
        default=None, description="When given, replaces every existing variant"
    )


class OrderItemInput(BaseModel):
    product_id: str
    variant_id: Optional[str] = None
    quantity: int = Field(default=1, ge=1)


class OrderCreate(BaseModel):
    customer_name: str = ""
    customer_phone: str = ""
    customer_email: Optional[str] = None
    shipping_address: str = ""
    notes: Optional[str] = None
    items: List[OrderItemInput] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_order(self) -> "OrderCreate":
        if not (self.customer_name.strip() and self.customer_phone.strip() and self.shipping_address.strip()):
            raise ValueError("Name, phone and address are required")
        if not self.items:
            raise ValueError("Order must contain at least one item")
        return self


class OrderItemRead(BaseModel):
    id: str
    product_id: Optional[str] = None
    variant_id: Optional[str] = None
    product_name: str
    variant_info: Optional[str] = None
    quantity: int
    unit_price: float
    total_price: float

    model_config = ConfigDict(from_attributes=True)


class OrderRead(BaseModel):
    id: str
    order_number: str
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    shipping_address: str
    notes: Optional[str] = None
    subtotal: float
    delivery_fee: float
    total: float
    status: str
    admin_notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    items: List[OrderItemRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class OrderAdminUpdate(BaseModel):
    status: Optional[OrderStatus] = None
    admin_notes: Optional[str] = None
