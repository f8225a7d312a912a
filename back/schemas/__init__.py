
from .common import CamelSchema, DataResponse
from .project import (AddMemberSchema, CreateProjectSchema, ProjectMemberSchema,
                      ProjectSchema, ProjectSummarySchema)
from .task import TaskCreateSchema, TaskSchema, TaskUpdateSchema
from .user import (AuthSchema, CredsSchema, GoogleSignInSchema, RegisterSchema,
                   UserSchema)
