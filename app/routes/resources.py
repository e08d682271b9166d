"""Resource routes for an event's inventory."""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from app.models import Event, QuantityAdjust, Resource, ResourceCreate, ResourceUpdate
from app.routes.deps import get_event_or_404, get_store, require_login
from app.services import resources as resource_service
from app.storage import KeyValueStore

router = APIRouter(
    prefix="/events/{event_id}/resources",
    tags=["resources"],
    dependencies=[Depends(require_login)],
)


@router.get("")
async def list_resources(
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """Resources with the total quantity across all of them."""
    resources = resource_service.list_resources(store, event.id)
    return {"resources": resources, "total_quantity": resource_service.total_quantity(resources)}


@router.post("", status_code=201)
async def create_resource(
    body: ResourceCreate,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
) -> Resource:
    """Add a resource. Requires a name and a quantity of at least 1."""
    try:
        return resource_service.create_resource(
            store, event.id, body.name, body.quantity, body.image
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{resource_id}")
async def update_resource(
    resource_id: str,
    body: ResourceUpdate,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
) -> Resource:
    try:
        resource = resource_service.update_resource(
            store, event.id, resource_id,
            name=body.name, quantity=body.quantity, image=body.image,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not resource:
        raise HTTPException(status_code=404, detail="Resource not found")
    return resource


@router.post("/{resource_id}/adjust")
async def adjust_quantity(
    resource_id: str,
    body: QuantityAdjust,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
) -> Resource:
    """
    Step the quantity up or down.

    Decrements below zero are clamped to zero rather than rejected.
    """
    resource = resource_service.adjust_quantity(store, event.id, resource_id, body.delta)
    if not resource:
        raise HTTPException(status_code=404, detail="Resource not found")
    return resource


@router.post("/{resource_id}/image")
async def upload_image(
    resource_id: str,
    image: UploadFile = File(...),
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
) -> Resource:
    """Attach a picture to a resource, stored inline as a data URI."""
    data = await image.read()
    try:
        data_uri = resource_service.image_data_uri(image.content_type or "", data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    resource = resource_service.update_resource(store, event.id, resource_id, image=data_uri)
    if not resource:
        raise HTTPException(status_code=404, detail="Resource not found")
    return resource


@router.delete("/{resource_id}")
async def delete_resource(
    resource_id: str,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    if not resource_service.delete_resource(store, event.id, resource_id):
        raise HTTPException(status_code=404, detail="Resource not found")
    return {"success": True, "resource_id": resource_id}
