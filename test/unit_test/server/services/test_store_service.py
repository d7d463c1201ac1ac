"""Unit tests for the merchandise store service."""

import re
from datetime import datetime

import pytest
from pydantic import ValidationError
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.pool import StaticPool

from constituency_hub.core.database import entities  # noqa: F401
from constituency_hub.core.database.entities.store import OrderItem, OrderStatus
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io.store import (
    OrderAdminUpdate,
    OrderCreate,
    OrderItemInput,
    ProductCreate,
    ProductUpdate,
    ProductVariantInput,
)
from constituency_hub.server.services.store import StoreService, generate_order_number


@pytest.fixture
def service(session):
    return StoreService(session)


@pytest.fixture
async def tshirt(service):
    return await service.create_product(
        ProductCreate(
            name_en="Campaign T-Shirt",
            base_price=350.0,
            is_featured=True,
            variants=[
                ProductVariantInput(size="XL", color="Green", price_adjustment=50.0, stock=10),
                ProductVariantInput(size="S", color="Red", is_active=False),
            ],
        )
    )


def _order(*items, phone="01712345678") -> OrderCreate:
    return OrderCreate(
        customer_name="Rahim",
        customer_phone=phone,
        shipping_address="Road 1, Dhaka",
        items=list(items),
    )


class TestOrderNumber:
    def test_format(self):
        number = generate_order_number(datetime(2025, 1, 9, 10, 30))

        assert re.fullmatch(r"ORD-20250109-[A-Z0-9]{4}", number)


class TestCatalogue:
    async def test_create_product_slug_and_variants(self, tshirt):
        assert tshirt.slug == "campaign-t-shirt"
        assert len(tshirt.variants) == 2

    async def test_duplicate_name_gets_distinct_slug(self, service, tshirt):
        again = await service.create_product(ProductCreate(name_en="Campaign T-Shirt", base_price=1))

        assert again.slug != tshirt.slug
        assert again.slug.startswith("campaign-t-shirt-")

    async def test_public_listing_hides_inactive(self, service, tshirt):
        await service.create_product(ProductCreate(name_en="Old Mug", base_price=100, is_active=False))

        products, pagination = await service.list_products()
        featured, _ = await service.list_products(featured=True)
        public = await service.get_product("campaign-t-shirt")

        assert [p.id for p in products] == [tshirt.id]
        assert pagination.total == 1
        assert [p.id for p in featured] == [tshirt.id]
        assert [v.size for v in public.variants] == ["XL"]
        with pytest.raises(NotFoundError):
            await service.get_product("old-mug")

    async def test_admin_listing_includes_everything(self, service, tshirt):
        await service.create_product(ProductCreate(name_en="Old Mug", base_price=100, is_active=False))

        products, pagination = await service.list_products_admin()

        assert pagination.total == 2
        shirt = next(p for p in products if p.id == tshirt.id)
        assert len(shirt.variants) == 2

    async def test_update_replaces_variants_and_slug(self, service, tshirt):
        updated = await service.update_product(
            tshirt.id,
            ProductUpdate(name_en="Polo Shirt", variants=[ProductVariantInput(size="M", color="Blue")]),
        )

        assert updated.slug == "polo-shirt"
        assert [(v.size, v.color) for v in updated.variants] == [("M", "Blue")]

    async def test_update_without_variants_keeps_them(self, service, tshirt):
        updated = await service.update_product(tshirt.id, ProductUpdate(base_price=400))

        assert updated.base_price == 400
        assert updated.slug == tshirt.slug
        assert len(updated.variants) == 2

    async def test_delete_product(self, service, tshirt):
        await service.delete_product(tshirt.id)

        with pytest.raises(NotFoundError):
            await service.delete_product(tshirt.id)


class TestCheckout:
    async def test_prices_from_catalogue(self, service, tshirt):
        xl = next(v for v in tshirt.variants if v.size == "XL")

        order = await service.create_order(
            _order(
                OrderItemInput(product_id=tshirt.id, variant_id=xl.id, quantity=2),
                OrderItemInput(product_id=tshirt.id),
            )
        )

        assert order.subtotal == 2 * 400.0 + 350.0
        assert order.delivery_fee == 60.0
        assert order.total == order.subtotal + 60.0
        assert order.status == "pending"
        assert re.fullmatch(r"ORD-\d{8}-[A-Z0-9]{4}", order.order_number)
        lines = {item.variant_info: item for item in order.items}
        assert lines["XL / Green"].unit_price == 400.0
        assert lines["XL / Green"].total_price == 800.0
        assert lines[None].product_name == "Campaign T-Shirt"

    async def test_rejects_unavailable_items(self, service, tshirt):
        inactive = next(v for v in tshirt.variants if v.size == "S")

        with pytest.raises(BadRequestError, match="Product not available"):
            await service.create_order(_order(OrderItemInput(product_id="missing")))
        with pytest.raises(BadRequestError, match="Variant not available"):
            await service.create_order(_order(OrderItemInput(product_id=tshirt.id, variant_id=inactive.id)))

    def test_order_requires_contact_and_items(self):
        with pytest.raises(ValidationError):
            OrderCreate(customer_name="A", customer_phone="1", shipping_address=" ", items=[])
        with pytest.raises(ValidationError):
            OrderCreate(customer_name="A", customer_phone="1", shipping_address="B", items=[])
        with pytest.raises(ValidationError):
            OrderItemInput(product_id="x", quantity=0)

    async def test_track_order(self, service, tshirt):
        order = await service.create_order(_order(OrderItemInput(product_id=tshirt.id)))

        tracked = await service.track_order(f" {order.order_number} ", "01712345678")

        assert tracked.id == order.id
        with pytest.raises(NotFoundError):
            await service.track_order(order.order_number, "01800000000")
        with pytest.raises(BadRequestError):
            await service.track_order(order.order_number, "")
        with pytest.raises(BadRequestError):
            await service.track_order(None, "01712345678")


class TestOrderAdministration:
    async def test_list_update_delete(self, service, tshirt):
        first = await service.create_order(_order(OrderItemInput(product_id=tshirt.id)))
        await service.create_order(_order(OrderItemInput(product_id=tshirt.id), phone="01800000000"))

        updated = await service.update_order(
            first.id, OrderAdminUpdate(status=OrderStatus.PROCESSING, admin_notes="Packed")
        )
        processing, pagination = await service.list_orders(status="processing")
        everything, all_pagination = await service.list_orders()

        assert updated.status == "processing"
        assert updated.admin_notes == "Packed"
        assert [o.id for o in processing] == [first.id]
        assert pagination.total == 1
        assert all_pagination.total == 2
        assert all(len(o.items) == 1 for o in everything)

        await service.delete_order(first.id)
        with pytest.raises(NotFoundError):
            await service.update_order(first.id, OrderAdminUpdate(admin_notes="x"))


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def enforcing_service():
    """A store service on a database that enforces foreign keys, as Postgres does."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield StoreService(session)

    await engine.dispose()


class TestOrderedProducts:
    async def _ordered_product(self, service):
        product = await service.create_product(
            ProductCreate(name_en="Campaign Cap", base_price=200.0, variants=[ProductVariantInput(size="M")])
        )
        order = await service.create_order(
            _order(OrderItemInput(product_id=product.id, variant_id=product.variants[0].id))
        )
        return product, order

    async def test_foreign_keys_are_enforced(self, enforcing_service):
        session = enforcing_service.session
        session.add(OrderItem(order_id="missing", product_name="Cap", quantity=1, unit_price=1.0, total_price=1.0))

        with pytest.raises(IntegrityError):
            await session.commit()
        await session.rollback()

    async def test_replacing_variants_keeps_order_lines(self, enforcing_service):
        product, order = await self._ordered_product(enforcing_service)

        updated = await enforcing_service.update_product(
            product.id, ProductUpdate(variants=[ProductVariantInput(size="L")])
        )
        orders, _ = await enforcing_service.list_orders()

        assert [v.size for v in updated.variants] == ["L"]
        line = orders[0].items[0]
        assert orders[0].id == order.id
        assert line.variant_id is None
        assert line.product_id == product.id
        assert line.variant_info == "M"
        assert line.unit_price == 200.0

    async def test_deleting_product_keeps_order_lines(self, enforcing_service):
        product, order = await self._ordered_product(enforcing_service)

        await enforcing_service.delete_product(product.id)
        tracked = await enforcing_service.track_order(order.order_number, "01712345678")

        line = tracked.items[0]
        assert line.product_id is None
        assert line.variant_id is None
        assert line.product_name == "Campaign Cap"
        assert tracked.total == order.total
