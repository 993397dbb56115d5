from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from siteadmin.core.middleware import AuthContext, auth_middleware
from siteadmin.db.session import get_session
from siteadmin.models.job import Job, JobCreate, JobListItem, JobUpdate
from siteadmin.services.job import JobService
from siteadmin.services.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Page

router = APIRouter()

StatusFilter = Literal["draft", "published", "closed", "all"]
TypeFilter = Literal["full-time", "part-time", "contract", "internship", "remote", "all"]


def get_job_service(session: Session = Depends(get_session)) -> JobService:
    return JobService(session)


@router.get("/", response_model=Page[JobListItem])
def list_jobs(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
    title: Optional[str] = None,
    status: StatusFilter = "all",
    type: TypeFilter = "all",
    ctx: AuthContext = Depends(auth_middleware),
    service: JobService = Depends(get_job_service),
):
    return service.list_jobs(page=page, page_size=page_size, title=title, status=status, job_type=type)


@router.get("/{job_id}", response_model=Job)
def get_job(
    job_id: int,
    ctx: AuthContext = Depends(auth_middleware),
    service: JobService = Depends(get_job_service),
):
    job = service.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.post("/", response_model=Job, status_code=201)
def create_job(
    data: JobCreate,
    ctx: AuthContext = Depends(auth_middleware),
    service: JobService = Depends(get_job_service),
):
    return service.create_job(data, author=ctx.user)


@router.put("/{job_id}", response_model=Job)
def update_job(
    job_id: int,
    data: JobUpdate,
    ctx: AuthContext = Depends(auth_middleware),
    service: JobService = Depends(get_job_service),
):
    job = service.update_job(job_id, data)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    ctx: AuthContext = Depends(auth_middleware),
    service: JobService = Depends(get_job_service),
):
    if not service.delete_job(job_id):
        raise HTTPException(status_code=404, detail="Job not found")
    return {"id": job_id}
