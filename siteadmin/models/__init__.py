# Import all models to register them with SQLModel
from siteadmin.models.user import User, Role
from siteadmin.models.auth_session import UserSession
from siteadmin.models.category import Category
from siteadmin.models.post import Post, PostType, PostStatus
from siteadmin.models.job import Job, JobType, JobStatus
from siteadmin.models.media import Media
from siteadmin.models.option import Option, OptionGroup

__all__ = [
    "User",
    "Role",
    "UserSession",
    "Category",
    "Post",
    "PostType",
    "PostStatus",
    "Job",
    "JobType",
    "JobStatus",
    "Media",
    "Option",
    "OptionGroup",
]
