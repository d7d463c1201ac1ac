"""Initial schema and seed data for Constituency Hub

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

This is the initial migration that creates all tables and seeds default data
for the Constituency Hub service. This includes:
- Accounts (users)
- Content (categories, news, events, achievements)
- Citizen services (ama, polls, voter roll, volunteers, emergency, store, contact)
- Site settings and their translations
- Default categories, emergency hotlines and header settings

Revision format: YYYYMMDD_HHMMSS_description

"""

import uuid
from datetime import datetime, timezone
from typing import List, Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> List[sa.Column]:
    return [
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    """Create all tables and seed initial data."""

    # Create users table
    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Create categories table
    op.create_table(
        "categories",
        *_base_columns(),
        sa.Column("name_en", sa.String(200), nullable=False),
        sa.Column("name_bn", sa.String(200), nullable=True),
        sa.Column("slug", sa.String(200), nullable=False),
        sa.Column("content_type", sa.String(20), nullable=False),
        sa.Column("description_en", sa.String(), nullable=True),
        sa.Column("description_bn", sa.String(), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_categories_slug", "categories", ["slug"])
    op.create_index("ix_categories_content_type", "categories", ["content_type"])

    # Create news table
    op.create_table(
        "news",
        *_base_columns(),
        sa.Column("title_en", sa.String(500), nullable=False),
        sa.Column("title_bn", sa.String(500), nullable=True),
        sa.Column("slug", sa.String(500), nullable=False),
        sa.Column("excerpt_en", sa.String(), nullable=True),
        sa.Column("excerpt_bn", sa.String(), nullable=True),
        sa.Column("content_en", sa.String(), nullable=True),
        sa.Column("content_bn", sa.String(), nullable=True),
        sa.Column("featured_image", sa.String(), nullable=True),
        sa.Column("category_id", sa.String(36), sa.ForeignKey("categories.id"), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        sa.Column("read_time", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.String(36), sa.ForeignKey("users.id"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_news_slug", "news", ["slug"], unique=True)
    op.create_index("ix_news_category_id", "news", ["category_id"])
    op.create_index("ix_news_status", "news", ["status"])
    op.create_index("ix_news_published_at", "news", ["published_at"])

    # Create events table
    op.create_table(
        "events",
        *_base_columns(),
        sa.Column("title_en", sa.String(500), nullable=False),
        sa.Column("title_bn", sa.String(500), nullable=True),
        sa.Column("slug", sa.String(500), nullable=False),
        sa.Column("description_en", sa.String(), nullable=True),
        sa.Column("description_bn", sa.String(), nullable=True),
        sa.Column("event_date", sa.DateTime(), nullable=False),
        sa.Column("event_end_date", sa.DateTime(), nullable=True),
        sa.Column("location_en", sa.String(500), nullable=True),
        sa.Column("location_bn", sa.String(500), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("featured_image", sa.String(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_events_slug", "events", ["slug"], unique=True)
    op.create_index("ix_events_event_date", "events", ["event_date"])
    op.create_index("ix_events_category", "events", ["category"])
    op.create_index("ix_events_status", "events", ["status"])

    # Create achievement tables
    op.create_table(
        "achievement_categories",
        *_base_columns(),
        sa.Column("name_en", sa.String(200), nullable=False),
        sa.Column("name_bn", sa.String(200), nullable=True),
        sa.Column("slug", sa.String(200), nullable=False),
        sa.Column("icon", sa.String(100), nullable=True),
        sa.Column("color", sa.String(50), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_achievement_categories_slug", "achievement_categories", ["slug"], unique=True)

    op.create_table(
        "achievements",
        *_base_columns(),
        sa.Column("category_id", sa.String(36), sa.ForeignKey("achievement_categories.id"), nullable=True),
        sa.Column("title_en", sa.String(500), nullable=False),
        sa.Column("title_bn", sa.String(500), nullable=True),
        sa.Column("description_en", sa.String(), nullable=True),
        sa.Column("description_bn", sa.String(), nullable=True),
        sa.Column("achievement_date", sa.Date(), nullable=True),
        sa.Column("location_en", sa.String(500), nullable=True),
        sa.Column("location_bn", sa.String(500), nullable=True),
        sa.Column("impact_metrics", sa.JSON(), nullable=False),
        sa.Column("featured_image", sa.String(), nullable=True),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("videos", sa.JSON(), nullable=False),
        sa.Column("news_links", sa.JSON(), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_achievements_category_id", "achievements", ["category_id"])
    op.create_index("ix_achievements_achievement_date", "achievements", ["achievement_date"])

    # Create ask-me-anything tables
    op.create_table(
        "ama_categories",
        *_base_columns(),
        sa.Column("name_en", sa.String(200), nullable=False),
        sa.Column("name_bn", sa.String(200), nullable=True),
        sa.Column("slug", sa.String(200), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ama_categories_slug", "ama_categories", ["slug"], unique=True)

    op.create_table(
        "ama_questions",
        *_base_columns(),
        sa.Column("category_id", sa.String(36), sa.ForeignKey("ama_categories.id"), nullable=True),
        sa.Column("submitter_name_en", sa.String(200), nullable=True),
        sa.Column("submitter_name_bn", sa.String(200), nullable=True),
        sa.Column("submitter_address_en", sa.String(500), nullable=True),
        sa.Column("submitter_address_bn", sa.String(500), nullable=True),
        sa.Column("submitter_ip", sa.String(64), nullable=True),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False),
        sa.Column("question_en", sa.String(), nullable=False),
        sa.Column("question_bn", sa.String(), nullable=True),
        sa.Column("answer_en", sa.String(), nullable=True),
        sa.Column("answer_bn", sa.String(), nullable=True),
        sa.Column("answered_at", sa.DateTime(), nullable=True),
        sa.Column("answered_by", sa.String(36), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False),
        sa.Column("downvotes", sa.Integer(), nullable=False),
        sa.Column("answer_upvotes", sa.Integer(), nullable=False),
        sa.Column("answer_downvotes", sa.Integer(), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ama_questions_category_id", "ama_questions", ["category_id"])
    op.create_index("ix_ama_questions_status", "ama_questions", ["status"])

    op.create_table(
        "ama_votes",
        *_base_columns(),
        sa.Column("question_id", sa.String(36), sa.ForeignKey("ama_questions.id"), nullable=False),
        sa.Column("voter_ip", sa.String(64), nullable=False),
        sa.Column("vote_type", sa.String(10), nullable=False),
        sa.Column("vote_target", sa.String(10), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("question_id", "voter_ip", "vote_target", name="uq_ama_vote_voter_target"),
    )
    op.create_index("ix_ama_votes_question_id", "ama_votes", ["question_id"])
    op.create_index("ix_ama_votes_voter_ip", "ama_votes", ["voter_ip"])

    # Create poll tables
    op.create_table(
        "polls",
        *_base_columns(),
        sa.Column("title_en", sa.String(500), nullable=False),
        sa.Column("title_bn", sa.String(500), nullable=False),
        sa.Column("description_en", sa.String(), nullable=True),
        sa.Column("description_bn", sa.String(), nullable=True),
        sa.Column("start_datetime", sa.DateTime(), nullable=False),
        sa.Column("end_datetime", sa.DateTime(), nullable=False),
        sa.Column("timezone", sa.String(64), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("allow_multiple_votes", sa.Boolean(), nullable=False),
        sa.Column("show_results_before_end", sa.Boolean(), nullable=False),
        sa.Column("require_verification", sa.Boolean(), nullable=False),
        sa.Column("featured_image", sa.String(), nullable=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_polls_start_datetime", "polls", ["start_datetime"])
    op.create_index("ix_polls_end_datetime", "polls", ["end_datetime"])
    op.create_index("ix_polls_status", "polls", ["status"])

    op.create_table(
        "poll_options",
        *_base_columns(),
        sa.Column("poll_id", sa.String(36), sa.ForeignKey("polls.id"), nullable=False),
        sa.Column("option_en", sa.String(500), nullable=False),
        sa.Column("option_bn", sa.String(500), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_poll_options_poll_id", "poll_options", ["poll_id"])

    op.create_table(
        "poll_votes",
        *_base_columns(),
        sa.Column("poll_id", sa.String(36), sa.ForeignKey("polls.id"), nullable=False),
        sa.Column("option_id", sa.String(36), sa.ForeignKey("poll_options.id"), nullable=False),
        sa.Column("voter_phone_hash", sa.String(64), nullable=False),
        sa.Column("voter_ip", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.String(500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("poll_id", "voter_phone_hash", name="uq_poll_vote_voter"),
    )
    op.create_index("ix_poll_votes_poll_id", "poll_votes", ["poll_id"])
    op.create_index("ix_poll_votes_option_id", "poll_votes", ["option_id"])
    op.create_index("ix_poll_votes_voter_phone_hash", "poll_votes", ["voter_phone_hash"])

    # Create voter roll tables
    op.create_table(
        "voter_metadata",
        *_base_columns(),
        sa.Column("district", sa.String(200), nullable=True),
        sa.Column("upazila_thana", sa.String(200), nullable=True),
        sa.Column("cc_pourosova", sa.String(200), nullable=True),
        sa.Column("union_pouro_ward_cant_board", sa.String(200), nullable=True),
        sa.Column("ward_no_for_union", sa.String(50), nullable=True),
        sa.Column("voter_area_name", sa.String(300), nullable=False),
        sa.Column("voter_area_no", sa.String(50), nullable=False),
        sa.Column("post_office", sa.String(200), nullable=True),
        sa.Column("postal_code", sa.String(20), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_voter_metadata_voter_area_no", "voter_metadata", ["voter_area_no"])

    op.create_table(
        "voters",
        *_base_columns(),
        sa.Column("voter_metadata_id", sa.String(36), sa.ForeignKey("voter_metadata.id"), nullable=False),
        sa.Column("serial_no", sa.Integer(), nullable=False),
        sa.Column("voter_no", sa.String(50), nullable=False),
        sa.Column("voter_name", sa.String(300), nullable=False),
        sa.Column("father_name", sa.String(300), nullable=True),
        sa.Column("mother_name", sa.String(300), nullable=True),
        sa.Column("profession", sa.String(200), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_voters_voter_metadata_id", "voters", ["voter_metadata_id"])
    op.create_index("ix_voters_serial_no", "voters", ["serial_no"])
    op.create_index("ix_voters_voter_no", "voters", ["voter_no"])
    op.create_index("ix_voters_date_of_birth", "voters", ["date_of_birth"])

    # Create volunteers table
    op.create_table(
        "volunteers",
        *_base_columns(),
        sa.Column("volunteer_id", sa.String(8), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("name_bn", sa.String(200), nullable=True),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("gender", sa.String(10), nullable=False),
        sa.Column("thana", sa.String(50), nullable=False),
        sa.Column("ward", sa.String(50), nullable=False),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column("categories", sa.JSON(), nullable=False),
        sa.Column("skills", sa.String(), nullable=True),
        sa.Column("availability", sa.String(100), nullable=True),
        sa.Column("why_join", sa.String(), nullable=False),
        sa.Column("photo_url", sa.String(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("badges", sa.JSON(), nullable=False),
        sa.Column("verified_at", sa.DateTime(), nullable=True),
        sa.Column("verified_by", sa.String(36), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("admin_notes", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_volunteers_volunteer_id", "volunteers", ["volunteer_id"], unique=True)
    op.create_index("ix_volunteers_phone", "volunteers", ["phone"], unique=True)
    op.create_index("ix_volunteers_thana", "volunteers", ["thana"])
    op.create_index("ix_volunteers_ward", "volunteers", ["ward"])
    op.create_index("ix_volunteers_status", "volunteers", ["status"])

    # Create emergency tables
    op.create_table(
        "emergency_requests",
        *_base_columns(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("message", sa.String(), nullable=True),
        sa.Column("request_type", sa.String(50), nullable=False),
        sa.Column("priority", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("ward", sa.String(50), nullable=True),
        sa.Column("audio_url", sa.String(), nullable=True),
        sa.Column("audio_duration", sa.Integer(), nullable=True),
        sa.Column("admin_notes", sa.String(), nullable=True),
        sa.Column("assigned_to", sa.String(200), nullable=True),
        sa.Column("response_time", sa.DateTime(), nullable=True),
        sa.Column("resolved_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_emergency_requests_request_type", "emergency_requests", ["request_type"])
    op.create_index("ix_emergency_requests_priority", "emergency_requests", ["priority"])
    op.create_index("ix_emergency_requests_status", "emergency_requests", ["status"])

    op.create_table(
        "emergency_contacts",
        *_base_columns(),
        sa.Column("name_en", sa.String(200), nullable=False),
        sa.Column("name_bn", sa.String(200), nullable=True),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("description_en", sa.String(), nullable=True),
        sa.Column("description_bn", sa.String(), nullable=True),
        sa.Column("is_24_7", sa.Boolean(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "emergency_resources",
        *_base_columns(),
        sa.Column("name_en", sa.String(200), nullable=False),
        sa.Column("name_bn", sa.String(200), nullable=True),
        sa.Column("resource_type", sa.String(50), nullable=False),
        sa.Column("address_en", sa.String(), nullable=True),
        sa.Column("address_bn", sa.String(), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_emergency_resources_resource_type", "emergency_resources", ["resource_type"])

    # Create store tables
    op.create_table(
        "products",
        *_base_columns(),
        sa.Column("name_en", sa.String(300), nullable=False),
        sa.Column("name_bn", sa.String(300), nullable=True),
        sa.Column("slug", sa.String(300), nullable=False),
        sa.Column("description_en", sa.String(), nullable=True),
        sa.Column("description_bn", sa.String(), nullable=True),
        sa.Column("base_price", sa.Float(), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_products_slug", "products", ["slug"], unique=True)

    op.create_table(
        "product_variants",
        *_base_columns(),
        sa.Column("product_id", sa.String(36), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("size", sa.String(20), nullable=True),
        sa.Column("color", sa.String(50), nullable=True),
        sa.Column("color_code", sa.String(20), nullable=True),
        sa.Column("price_adjustment", sa.Float(), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False),
        sa.Column("sku", sa.String(100), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_product_variants_product_id", "product_variants", ["product_id"])

    op.create_table(
        "orders",
        *_base_columns(),
        sa.Column("order_number", sa.String(30), nullable=False),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_phone", sa.String(20), nullable=False),
        sa.Column("customer_email", sa.String(255), nullable=True),
        sa.Column("shipping_address", sa.String(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("subtotal", sa.Float(), nullable=False),
        sa.Column("delivery_fee", sa.Float(), nullable=False),
        sa.Column("total", sa.Float(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("admin_notes", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_orders_order_number", "orders", ["order_number"], unique=True)
    op.create_index("ix_orders_customer_phone", "orders", ["customer_phone"])
    op.create_index("ix_orders_status", "orders", ["status"])

    op.create_table(
        "order_items",
        *_base_columns(),
        sa.Column("order_id", sa.String(36), sa.ForeignKey("orders.id"), nullable=False),
        sa.Column("product_id", sa.String(36), sa.ForeignKey("products.id", ondelete="SET NULL"), nullable=True),
        sa.Column("variant_id", sa.String(36), sa.ForeignKey("product_variants.id", ondelete="SET NULL"), nullable=True),
        sa.Column("product_name", sa.String(300), nullable=False),
        sa.Column("variant_info", sa.String(200), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Float(), nullable=False),
        sa.Column("total_price", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])

    # Create contact_submissions table
    op.create_table(
        "contact_submissions",
        *_base_columns(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("subject", sa.String(300), nullable=False),
        sa.Column("message", sa.String(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("admin_notes", sa.String(), nullable=True),
        sa.Column("responded_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contact_submissions_status", "contact_submissions", ["status"])

    # Create settings tables
    op.create_table(
        "settings",
        *_base_columns(),
        sa.Column("setting_key", sa.String(200), nullable=False),
        sa.Column("setting_value", sa.String(), nullable=True),
        sa.Column("setting_type", sa.String(20), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("subcategory", sa.String(50), nullable=True),
        sa.Column("is_multilingual", sa.Boolean(), nullable=False),
        sa.Column("default_value", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("validation_rules", sa.JSON(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("updated_by", sa.String(36), sa.ForeignKey("users.id"), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_settings_setting_key", "settings", ["setting_key"], unique=True)
    op.create_index("ix_settings_category", "settings", ["category"])

    op.create_table(
        "setting_translations",
        *_base_columns(),
        sa.Column("setting_id", sa.String(36), sa.ForeignKey("settings.id"), nullable=False),
        sa.Column("language_code", sa.String(10), nullable=False),
        sa.Column("translated_value", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("setting_id", "language_code", name="uq_setting_translation_language"),
    )
    op.create_index("ix_setting_translations_setting_id", "setting_translations", ["setting_id"])

    # Seed default data
    _seed_default_data()


def _row(**values):
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return {"id": str(uuid.uuid4()), "created_at": now, "updated_at": None, **values}


def _seed_default_data() -> None:
    """Seed the categories, emergency hotlines and header settings the public pages expect."""

    ama_categories = sa.table(
        "ama_categories",
        sa.column("id", sa.String),
        sa.column("created_at", sa.DateTime),
        sa.column("updated_at", sa.DateTime),
        sa.column("name_en", sa.String),
        sa.column("name_bn", sa.String),
        sa.column("slug", sa.String),
        sa.column("display_order", sa.Integer),
        sa.column("is_active", sa.Boolean),
    )
    op.bulk_insert(
        ama_categories,
        [
            _row(name_en=name_en, name_bn=name_bn, slug=slug, display_order=order, is_active=True)
            for order, (name_en, name_bn, slug) in enumerate(
                [
                    ("Development", "উন্নয়ন", "development"),
                    ("Education", "শিক্ষা", "education"),
                    ("Health", "স্বাস্থ্য", "health"),
                    ("Infrastructure", "অবকাঠামো", "infrastructure"),
                    ("Public Safety", "জননিরাপত্তা", "public-safety"),
                    ("Other", "অন্যান্য", "other"),
                ]
            )
        ],
    )

    achievement_categories = sa.table(
        "achievement_categories",
        sa.column("id", sa.String),
        sa.column("created_at", sa.DateTime),
        sa.column("updated_at", sa.DateTime),
        sa.column("name_en", sa.String),
        sa.column("name_bn", sa.String),
        sa.column("slug", sa.String),
        sa.column("icon", sa.String),
        sa.column("color", sa.String),
        sa.column("display_order", sa.Integer),
        sa.column("is_active", sa.Boolean),
    )
    op.bulk_insert(
        achievement_categories,
        [
            _row(name_en=name_en, name_bn=name_bn, slug=slug, icon=icon, color=color, display_order=order, is_active=True)
            for order, (name_en, name_bn, slug, icon, color) in enumerate(
                [
                    ("Infrastructure", "অবকাঠামো", "infrastructure", "building", "blue"),
                    ("Education", "শিক্ষা", "education", "book", "green"),
                    ("Health", "স্বাস্থ্য", "health", "heart", "red"),
                    ("Social Welfare", "সমাজকল্যাণ", "social-welfare", "users", "purple"),
                ]
            )
        ],
    )

    emergency_contacts = sa.table(
        "emergency_contacts",
        sa.column("id", sa.String),
        sa.column("created_at", sa.DateTime),
        sa.column("updated_at", sa.DateTime),
        sa.column("name_en", sa.String),
        sa.column("name_bn", sa.String),
        sa.column("phone", sa.String),
        sa.column("category", sa.String),
        sa.column("is_24_7", sa.Boolean),
        sa.column("display_order", sa.Integer),
        sa.column("is_active", sa.Boolean),
    )
    op.bulk_insert(
        emergency_contacts,
        [
            _row(
                name_en=name_en,
                name_bn=name_bn,
                phone=phone,
                category=category,
                is_24_7=True,
                display_order=order,
                is_active=True,
            )
            for order, (name_en, name_bn, phone, category) in enumerate(
                [
                    ("National Emergency Service", "জাতীয় জরুরি সেবা", "999", "emergency"),
                    ("Fire Service", "ফায়ার সার্ভিস", "16163", "fire"),
                    ("Health Helpline", "স্বাস্থ্য বাতায়ন", "16263", "health"),
                    ("Disaster Early Warning", "দুর্যোগের আগাম বার্তা", "1090", "disaster"),
                ]
            )
        ],
    )

    settings = sa.table(
        "settings",
        sa.column("id", sa.String),
        sa.column("created_at", sa.DateTime),
        sa.column("updated_at", sa.DateTime),
        sa.column("setting_key", sa.String),
        sa.column("setting_value", sa.String),
        sa.column("setting_type", sa.String),
        sa.column("category", sa.String),
        sa.column("subcategory", sa.String),
        sa.column("is_multilingual", sa.Boolean),
        sa.column("validation_rules", sa.JSON),
        sa.column("display_order", sa.Integer),
        sa.column("is_active", sa.Boolean),
    )
    op.bulk_insert(
        settings,
        [
            _row(
                setting_key=key,
                setting_value=value,
                setting_type=setting_type,
                category=category,
                subcategory=None,
                is_multilingual=multilingual,
                validation_rules={},
                display_order=order,
                is_active=True,
            )
            for order, (key, value, setting_type, category, multilingual) in enumerate(
                [
                    ("site_title", "Constituency Hub", "text", "header", True),
                    ("site_logo", "", "image", "header", False),
                    ("hero_title", "Working together for our constituency", "text", "hero", True),
                    ("hero_subtitle", "", "text", "hero", True),
                    ("hero_image", "", "image", "hero", False),
                ]
            )
        ],
    )


def downgrade() -> None:
    """Drop all tables."""
    for table in (
        "setting_translations",
        "settings",
        "contact_submissions",
        "order_items",
        "orders",
        "product_variants",
        "products",
        "emergency_resources",
        "emergency_contacts",
        "emergency_requests",
        "volunteers",
        "voters",
        "voter_metadata",
        "poll_votes",
        "poll_options",
        "polls",
        "ama_votes",
        "ama_questions",
        "ama_categories",
        "achievements",
        "achievement_categories",
        "events",
        "news",
        "categories",
        "users",
    ):
        op.drop_table(table)
