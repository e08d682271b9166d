"""Resource inventory service."""
import base64
import logging

from app.models import Resource
from app.storage import Collection, KeyValueStore, keys

logger = logging.getLogger(__name__)


def resource_collection(store: KeyValueStore, event_id: str) -> Collection[Resource]:
    return Collection(store, keys.resources(event_id), Resource)


def list_resources(store: KeyValueStore, event_id: str) -> list[Resource]:
    return resource_collection(store, event_id).all()


def _validate(name: str, quantity: int) -> str:
    name = name.strip()
    if not name:
        raise ValueError("Resource name must not be empty")
    if quantity < 1:
        raise ValueError("Resource quantity must be at least 1")
    return name


def create_resource(
    store: KeyValueStore,
    event_id: str,
    name: str,
    quantity: int = 1,
    image: str | None = None,
) -> Resource:
    resource = Resource(
        event_id=event_id,
        name=_validate(name, quantity),
        quantity=quantity,
        image=image or None,
    )
    return resource_collection(store, event_id).append(resource)


def update_resource(
    store: KeyValueStore,
    event_id: str,
    resource_id: str,
    name: str | None = None,
    quantity: int | None = None,
    image: str | None = None,
) -> Resource | None:
    """
    Edit a resource's name, quantity or image.

    The same rules as creation apply to the resulting values: a non-empty
    name and a quantity of at least 1. Returns None if the resource does
    not exist.
    """
    collection = resource_collection(store, event_id)
    resource = collection.get(resource_id)
    if resource is None:
        return None

    new_name = _validate(
        name if name is not None else resource.name,
        quantity if quantity is not None else resource.quantity,
    )

    def change(r: Resource) -> None:
        r.name = new_name
        if quantity is not None:
            r.quantity = quantity
        if image is not None:
            r.image = image or None

    return collection.update(resource_id, change)


def adjust_quantity(
    store: KeyValueStore, event_id: str, resource_id: str, delta: int
) -> Resource | None:
    """Step a resource's quantity by delta, clamping at zero."""

    def change(r: Resource) -> None:
        r.quantity = max(0, r.quantity + delta)

    return resource_collection(store, event_id).update(resource_id, change)


def delete_resource(store: KeyValueStore, event_id: str, resource_id: str) -> bool:
    return resource_collection(store, event_id).remove(resource_id)


def total_quantity(resources: list[Resource]) -> int:
    return sum(r.quantity for r in resources)


def image_data_uri(content_type: str, data: bytes) -> str:
    """Encode an uploaded picture as a ``data:`` URI."""
    if not content_type.startswith("image/"):
        raise ValueError(f"Not an image: {content_type or 'unknown type'}")
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
