from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from siteadmin.core.middleware import AuthContext, auth_middleware
from siteadmin.db.session import get_session
from siteadmin.models.media import Media, MediaCreate
from siteadmin.services.media import MediaService
from siteadmin.services.pagination import MAX_PAGE_SIZE, Page

router = APIRouter()


def get_media_service(session: Session = Depends(get_session)) -> MediaService:
    return MediaService(session)


@router.get("/", response_model=Page[Media])
def list_media(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
    ctx: AuthContext = Depends(auth_middleware),
    service: MediaService = Depends(get_media_service),
):
    return service.list_media(page=page, page_size=page_size)


@router.post("/", response_model=Media, status_code=201)
def upload_media(
    data: MediaCreate,
    ctx: AuthContext = Depends(auth_middleware),
    service: MediaService = Depends(get_media_service),
):
    """
    Record an uploaded file. The client uploads the bytes to storage first and
    sends the resulting URL with the file's metadata.
    """
    return service.register_upload(data, uploader=ctx.user)


@router.delete("/{media_id}")
def delete_media(
    media_id: int,
    ctx: AuthContext = Depends(auth_middleware),
    service: MediaService = Depends(get_media_service),
):
    if not service.delete_media(media_id):
        raise HTTPException(status_code=404, detail="Media not found")
    return {"id": media_id}
