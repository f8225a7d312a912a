

from .database import (get_member_repo, get_project_repo, get_task_repo,
                       get_user_repo)
from .get_project import (get_project, get_project_member, get_project_owner,
                          require_member, require_owner)
from .get_task import get_task, get_task_member
from .get_user import get_provisioned_user, get_user, get_user_db
