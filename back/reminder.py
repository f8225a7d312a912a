
"""
Due-date reminder sweep.

Every `interval` seconds (and once right after start) the scheduler looks for
open, assigned tasks whose due date falls in [now + lookahead, now + lookahead
+ window) and that have not been reminded yet, emails the assignee and stamps
`reminder_sent_at`.

Delivery is at-least-once: the email goes out before the stamp is committed,
so a crash in between sends the reminder again on the next sweep.
"""

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable
from uuid import UUID

from back.config import Config
from back.mailer import Mailer
from database.database import DatabaseSessionManager
from database.models import Task, utc_now
from database.repositories import TaskRepository

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    idle = "idle"
    sweeping = "sweeping"
    stopped = "stopped"


def format_reminder(task: Task) -> tuple[str, str]:
    assignee_name = task.assignee.name if task.assignee else None
    friendly_name = assignee_name.split(" ")[0] if assignee_name else "there"
    project_name = task.project.name if task.project else "your project"
    due_utc = task.due_date.strftime("%a, %d %b %Y %H:%M:%S GMT")
    subject = f"Reminder: {task.title} is due soon"
    text = "\n".join([
        f"Hi {friendly_name},",
        "",
        f'Heads up: "{task.title}" in project "{project_name}" is due in about 12 hours.',
        f"Planned deadline: {due_utc}.",
        "",
        "Please wrap it up or let the project owner know if you need help.",
        "",
        "Task Manager bot",
    ])
    return subject, text


@dataclass(frozen=True)
class Reminder:
    task_id: UUID
    recipient: str
    subject: str
    text: str

    @classmethod
    def from_task(cls, task: Task) -> "Reminder":
        subject, text = format_reminder(task)
        return cls(task_id=task.id, recipient=task.assignee.email, subject=subject, text=text)


class ReminderScheduler:
    def __init__(self,
                 sessions: DatabaseSessionManager,
                 mailer: Mailer,
                 interval: float = Config.reminder_interval,
                 lookahead: float = Config.reminder_lookahead,
                 window: float = Config.reminder_window,
                 clock: Callable[[], datetime] = utc_now) -> None:
        self.sessions = sessions
        self.mailer = mailer
        self.interval = interval
        self.lookahead = timedelta(seconds=lookahead)
        self.window = timedelta(seconds=window)
        self.clock = clock
        self.state = SchedulerState.stopped
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        if self.running:
            return False
        if not self.mailer.is_enabled():
            logger.info("Skipping reminder scheduler because email is disabled")
            return False
        self.state = SchedulerState.idle
        self._task = asyncio.create_task(self._run(), name="task-reminder-scheduler")
        logger.info("Reminder scheduler started, interval=%ss", self.interval)
        return True

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
            logger.info("Reminder scheduler stopped")
        self.state = SchedulerState.stopped

    async def _run(self) -> None:
        while True:
            await self.run_sweep()
            await asyncio.sleep(self.interval)

    async def run_sweep(self) -> int:
        """One pass over due-soon tasks. Returns the number of reminders sent."""
        if not self.mailer.is_enabled():
            return 0
        self.state = SchedulerState.sweeping
        sent = 0
        try:
            window_start = self.clock() + self.lookahead
            window_end = window_start + self.window
            async with self.sessions.context_session() as session:
                tr = TaskRepository(session)
                candidates = await tr.get_reminder_candidates(window_start, window_end)
                reminders = [Reminder.from_task(task) for task in candidates]
                for reminder in reminders:
                    if await self._remind(tr, reminder):
                        sent += 1
        except Exception:
            logger.exception("Task reminder sweep failed")
        finally:
            if self.state is SchedulerState.sweeping:
                self.state = SchedulerState.idle
        return sent

    async def _remind(self, tr: TaskRepository, reminder: Reminder) -> bool:
        try:
            await self.mailer.send(to=reminder.recipient, subject=reminder.subject, text=reminder.text)
        except Exception:
            logger.exception("Failed to send reminder email task_id=%s", reminder.task_id)
            return False
        try:
            await tr.mark_reminder_sent(reminder.task_id, self.clock())
        except Exception:
            logger.exception("Reminder sent but not recorded task_id=%s", reminder.task_id)
            await tr.session.rollback()
            return False
        logger.info("Sent reminder for task %s to %s", reminder.task_id, reminder.recipient)
        return True
