"""
SQLAlchemy Core table definitions for the pets bounded context.

All animal variants share one ``animals`` table with a ``type``
discriminator; variant columns are nullable. Every animal belongs to
an owner (NOT NULL foreign key, cascading delete). Both tables carry
a ``version`` column for optimistic concurrency.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
)

metadata = MetaData()

owners = Table(
    "owners",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("email", String(180), nullable=False, unique=True),
    Column("phone_number", String(20), nullable=False),
    Column("street", String(255), nullable=False),
    Column("city", String(100), nullable=False),
    Column("postal_code", String(10), nullable=False),
    Column("country", String(100), nullable=False),
    Column("registration_date", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("version", Integer, nullable=False, default=1),
)

animals = Table(
    "animals",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("type", String(10), nullable=False, index=True),
    Column("name", String(100), nullable=False),
    Column("birth_date", Date, nullable=False),
    Column("weight", Float, nullable=False),
    Column("color", String(30), nullable=False),
    Column(
        "owner_id",
        Integer,
        ForeignKey("owners.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    Column("version", Integer, nullable=False, default=1),
    # Dog
    Column("breed", String(100)),
    Column("is_dangerous", Boolean),
    Column("registration_number", String(15)),
    # Cat
    Column("is_indoor", Boolean),
    Column("is_hypoallergenic", Boolean),
    # Bird
    Column("species", String(100)),
    Column("wing_span", Float),
    Column("can_talk", Boolean),
)
