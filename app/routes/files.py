"""File routes: start simulated uploads, follow their progress, list files."""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from app.core.config import settings
from app.models import Event
from app.routes.deps import get_event_or_404, get_store, get_upload_manager, require_login
from app.services import files as file_service
from app.services.uploads import UploadManager
from app.storage import KeyValueStore

router = APIRouter(
    prefix="/events/{event_id}/files",
    tags=["files"],
    dependencies=[Depends(require_login)],
)


@router.get("")
async def list_files(
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
    uploads: UploadManager = Depends(get_upload_manager),
):
    """Completed files plus uploads still in progress."""
    files = file_service.list_files(store, event.id)
    return {
        "files": [
            {**f.model_dump(mode="json"), "display_size": file_service.format_file_size(f.size)}
            for f in files
        ],
        "uploading": [h.to_dict() for h in uploads.active(event.id)],
    }


@router.post("", status_code=202)
async def upload_files(
    files: list[UploadFile] = File(...),
    event: Event = Depends(get_event_or_404),
    uploads: UploadManager = Depends(get_upload_manager),
):
    """
    Start one upload per submitted file.

    Each upload runs independently; poll /uploads/{upload_id} for progress.
    The file appears in the list once its upload completes.
    """
    handles = []
    for upload in files:
        data = await upload.read()
        if len(data) > settings.max_upload_size:
            raise HTTPException(
                status_code=413,
                detail=f"{upload.filename} exceeds {settings.max_upload_size} bytes",
            )
        handles.append(
            uploads.start(event.id, upload.filename or "file", upload.content_type or "", data)
        )
    return {"uploads": [h.to_dict() for h in handles]}


@router.get("/uploads/{upload_id}")
async def upload_status(
    upload_id: str,
    event: Event = Depends(get_event_or_404),
    uploads: UploadManager = Depends(get_upload_manager),
):
    handle = uploads.get(upload_id)
    if not handle or handle.event_id != event.id:
        raise HTTPException(status_code=404, detail="Upload not found")
    return handle.to_dict()


@router.delete("/uploads/{upload_id}")
async def cancel_upload(
    upload_id: str,
    event: Event = Depends(get_event_or_404),
    uploads: UploadManager = Depends(get_upload_manager),
):
    """Cancel an upload that has not completed yet."""
    handle = uploads.get(upload_id)
    if not handle or handle.event_id != event.id:
        raise HTTPException(status_code=404, detail="Upload not found")
    if not uploads.cancel(upload_id):
        raise HTTPException(status_code=400, detail=f"Upload already {handle.status.value}")
    return handle.to_dict()


@router.delete("/{file_id}")
async def delete_file(
    file_id: str,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """Remove a file from the event's list. The stored blob is not deleted."""
    if not file_service.delete_file(store, event.id, file_id):
        raise HTTPException(status_code=404, detail="File not found")
    return {"success": True, "file_id": file_id}
