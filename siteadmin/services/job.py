import logging
from datetime import datetime
from typing import Optional
from fastapi import HTTPException
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func

from siteadmin.models.job import Job, JobCreate, JobListItem, JobStatus, JobType, JobUpdate
from siteadmin.models.user import User
from siteadmin.services.pagination import paginate

logger = logging.getLogger(__name__)

FILTER_ALL = "all"


class JobService:
    def __init__(self, session: Session):
        self.session = session

    def list_jobs(
        self,
        page: int = 1,
        page_size: int = 10,
        title: Optional[str] = None,
        status: str = FILTER_ALL,
        job_type: str = FILTER_ALL,
    ) -> dict:
        conditions = []
        if title:
            conditions.append(Job.title.like(f"%{title}%"))
        if status != FILTER_ALL:
            conditions.append(Job.status == JobStatus(status))
        if job_type != FILTER_ALL:
            conditions.append(Job.type == JobType(job_type))

        total = self.session.exec(select(func.count(Job.id)).where(*conditions)).one()
        query = (
            select(Job, User.name, User.email)
            .join(User, Job.author_id == User.id, isouter=True)
            .where(*conditions)
            .order_by(desc(Job.created_at), desc(Job.id))
        )
        result = paginate(self.session, query, page, page_size, total)

        data = [
            JobListItem(
                id=job.id,
                title=job.title,
                slug=job.slug,
                location=job.location,
                type=job.type,
                status=job.status,
                created_at=job.created_at,
                updated_at=job.updated_at,
                author_name=author_name,
                author_email=author_email,
            )
            for job, author_name, author_email in result["rows"]
        ]
        return {"data": data, "pagination": result["pagination"]}

    def get_job(self, job_id: int) -> Optional[Job]:
        return self.session.get(Job, job_id)

    def _check_slug_available(self, slug: str, exclude_id: Optional[int] = None) -> None:
        existing = self.session.exec(select(Job).where(Job.slug == slug)).first()
        if existing and existing.id != exclude_id:
            raise HTTPException(status_code=400, detail="Slug already exists")

    def _commit(self, job: Job) -> Job:
        self.session.add(job)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise HTTPException(status_code=400, detail="Slug already exists")
        self.session.refresh(job)
        return job

    def create_job(self, data: JobCreate, author: User) -> Job:
        self._check_slug_available(data.slug)
        job = self._commit(Job(**data.model_dump(), author_id=author.id))
        logger.info("Created job %s by user %s", job.id, author.id)
        return job

    def update_job(self, job_id: int, data: JobUpdate) -> Optional[Job]:
        job = self.session.get(Job, job_id)
        if not job:
            return None

        changes = {field: value for field, value in data.model_dump(exclude_unset=True).items()
                   if value is not None or field in ("requirements", "location", "salary_range")}
        if "slug" in changes:
            self._check_slug_available(changes["slug"], exclude_id=job_id)

        for field, value in changes.items():
            setattr(job, field, value)
        job.updated_at = datetime.utcnow()
        job = self._commit(job)
        logger.info("Updated job %s", job.id)
        return job

    def delete_job(self, job_id: int) -> bool:
        job = self.session.get(Job, job_id)
        if not job:
            return False
        self.session.delete(job)
        self.session.commit()
        logger.info("Deleted job %s", job_id)
        return True
