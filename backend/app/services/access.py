"""
Ownership checks for projects and tasks.

A project is owned by its owner_id user; a task is owned through its project.
"""

from app.exceptions import ForbiddenError
from app.logging_config import get_logger
from app.models import Project, Task, User

logger = get_logger(__name__)


def assert_project_owned(project: Project | None, user: User) -> None:
    """Raise ForbiddenError unless `user` owns `project`."""
    if project is None or project.owner_id is None:
        logger.error(f"Ownership check on project without owner: {project!r}")
        raise ForbiddenError("Project has no owner")
    if project.owner_id != user.id:
        logger.warning(f"User {user.id} denied access to project {project.id}")
        raise ForbiddenError("Not your project")


def assert_task_owned(task: Task, user: User) -> None:
    """
    Raise ForbiddenError unless `user` owns the task's project.

    `task.project` must already be loaded.
    """
    assert_project_owned(task.project, user)
