"""Resource model for tracking event inventory."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.common import new_id, utcnow


class Resource(SQLModel):
    """An inventory item needed for an event.

    Attributes:
        id: Timestamp-based identifier.
        event_id: Owning event.
        name: What the resource is, never empty.
        quantity: How many are on hand; never negative.
        image: Optional ``data:`` URI with a picture of the resource.
        created_at: When the resource was added.
    """
    id: str = Field(default_factory=new_id)
    event_id: str
    name: str
    quantity: int = Field(default=1, ge=0)
    image: str | None = None
    created_at: datetime = Field(default_factory=utcnow)


class ResourceCreate(SQLModel):
    name: str
    quantity: int = 1
    image: str | None = None


class ResourceUpdate(SQLModel):
    name: str | None = None
    quantity: int | None = None
    image: str | None = None


class QuantityAdjust(SQLModel):
    delta: int
