"""ECODATA CIC website backend.

This package serves the JSON API behind the ECODATA CIC website: the public
pages (services, blog, impact metrics, funding goals), the admin content
management screens and the donor dashboard.

High-level architecture
-----------------------

- ``ecodata.core``:

  - Logging, monitoring and security helpers (password hashing, JWT).
  - SQLModel entities for every table.
  - Pydantic I/O models describing the camelCase wire format.
  - The storage layer: a single ``Storage`` facade over either an in-memory
    backend (development and demos) or a SQL database backend.

- ``ecodata.server``:

  - The FastAPI application, its routers and dependencies.
  - Settings, exception handlers and request logging middleware.
  - Services for authentication, email notifications and Stripe payments.

Request flow
------------

Every route validates its body against an I/O model, performs one storage
call (occasionally two, such as a uniqueness check before an insert) and
returns JSON or an error status with a ``{"message": ...}`` body.
"""

__version__ = "1.0.0"
