
from .project_member_repository import ProjectMemberRepository
from .project_repository import ProjectRepository
from .task_repository import UNSET, TaskPatch, TaskRepository, TaskSort
from .user_repository import UserRepository, hash_password, verify_password
