

from config import settings

SECRET = settings.secret


class Config:
	access_token_lifetime = 60 * 60 * 24 * 7
	algorithm = "HS256"
	ip_buffer = 10
	ip_buffer_lifetime = 60 * 60 * 24
	reminder_lookahead = 60 * 60 * 12
	reminder_window = 60 * 60
	reminder_interval = 60 * 60
	personal_project_name = "Personal Workspace"
	personal_project_description = "Auto-created to organize your tasks"
