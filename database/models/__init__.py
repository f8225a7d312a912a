
from .base import Base, utc_now
from .project import Project
from .project_member import ProjectMember, ProjectRole
from .task import Task, TaskStatus
from .user import User
