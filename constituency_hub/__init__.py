"""Constituency Hub.

Backend and client library for a bilingual (English/Bengali) constituent
engagement platform: news, events, polls, an "ask me anything" board, a
volunteer registry with ID cards, voter lookup, emergency services, a small
storefront and the back office that manages all of it.

Core subpackages
----------------

- ``constituency_hub.core``:

  - Bengali date input helpers and voter slip rendering.
  - The calendar month grid builder.
  - Phone number normalisation and hashing.
  - SQLModel entities, database session management and I/O schemas.
  - Logging and Logfire monitoring.

- ``constituency_hub.server``:

  - The FastAPI application with public and admin routers.
  - Services holding the business rules (poll voting, AMA votes,
    volunteer registration, orders, alert feeds, SMS).

- ``constituency_hub.client``:

  - An async HTTP client that unwraps the ``{success, data, error}`` envelope.
  - The poll vote flow with phone verification gating.
"""
