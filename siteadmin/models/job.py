from typing import Optional
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Text

class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    REMOTE = "remote"

class JobStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CLOSED = "closed"

class Job(SQLModel, table=True):
    __tablename__ = "jobs"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    slug: str = Field(unique=True, index=True)
    description: str = Field(sa_column=Column(Text, nullable=False))
    requirements: Optional[str] = Field(default=None, sa_column=Column(Text))
    location: Optional[str] = None
    type: JobType = Field(default=JobType.FULL_TIME, index=True)
    salary_range: Optional[str] = None
    status: JobStatus = Field(default=JobStatus.DRAFT, index=True)

    author_id: Optional[int] = Field(default=None, foreign_key="user.id", ondelete="SET NULL", index=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

class JobCreate(SQLModel):
    title: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: str = Field(min_length=1)
    requirements: Optional[str] = None
    location: Optional[str] = None
    type: JobType = JobType.FULL_TIME
    salary_range: Optional[str] = None
    status: JobStatus = JobStatus.DRAFT

class JobUpdate(SQLModel):
    title: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    requirements: Optional[str] = None
    location: Optional[str] = None
    type: Optional[JobType] = None
    salary_range: Optional[str] = None
    status: Optional[JobStatus] = None

class JobListItem(SQLModel):
    id: int
    title: str
    slug: str
    location: Optional[str] = None
    type: JobType
    status: JobStatus
    created_at: datetime
    updated_at: datetime
    author_name: Optional[str] = None
    author_email: Optional[str] = None
