import logging
from typing import Optional
from fastapi import HTTPException
from sqlalchemy import desc
from sqlmodel import Session, select, func

from siteadmin.models.media import Media, MediaCreate
from siteadmin.models.user import User
from siteadmin.services.pagination import paginate

logger = logging.getLogger(__name__)

MAX_UPLOAD_SIZE = 20 * 1024 * 1024  # 20 MB
ALLOWED_MIME_PREFIXES = ("image/", "video/", "audio/", "application/pdf")


class MediaService:
    """Media library records. File bytes live wherever ``url`` points."""

    def __init__(self, session: Session):
        self.session = session

    def list_media(self, page: int = 1, page_size: int = 20) -> dict:
        total = self.session.exec(select(func.count(Media.id))).one()
        query = select(Media).order_by(desc(Media.created_at), desc(Media.id))
        result = paginate(self.session, query, page, page_size, total)
        return {"data": result["rows"], "pagination": result["pagination"]}

    def get_media(self, media_id: int) -> Optional[Media]:
        return self.session.get(Media, media_id)

    def register_upload(self, data: MediaCreate, uploader: User) -> Media:
        if not data.mimetype.startswith(ALLOWED_MIME_PREFIXES):
            raise HTTPException(status_code=400, detail=f"Unsupported file type: {data.mimetype}")
        if data.size > MAX_UPLOAD_SIZE:
            raise HTTPException(status_code=400, detail="File is too large")

        media = Media(**data.model_dump(), uploaded_by=uploader.id)
        self.session.add(media)
        self.session.commit()
        self.session.refresh(media)
        logger.info("Registered media %s (%s, %d bytes)", media.id, media.mimetype, media.size)
        return media

    def delete_media(self, media_id: int) -> bool:
        media = self.session.get(Media, media_id)
        if not media:
            return False
        self.session.delete(media)
        self.session.commit()
        logger.info("Deleted media %s", media_id)
        return True
