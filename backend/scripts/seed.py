#!/usr/bin/env python3
"""
Seed script to populate a development database with demo data.

Creates (or reuses) a demo user, then gives it a number of projects, each
with a spread of tasks across statuses, priorities and due dates.

Usage:
    python -m scripts.seed [--projects 5] [--tasks 20] [--clear]

Options:
    --email      Demo user's email (default: demo@taskflow.dev)
    --password   Demo user's password (default: demo)
    --projects   Number of projects to create (default: 5)
    --tasks      Tasks per project (default: 20)
    --clear      Delete the demo user's existing projects first
"""

import argparse
import asyncio
import random
import time
from datetime import date, timedelta

from sqlmodel import select

from app.auth import get_user_by_email
from app.database import get_session_context, init_db
from app.models import Project, ProjectStatus, Task, TaskStatus, User
from app.schemas import UserCreate
from app.services.users import register_user


async def get_or_create_user(email: str, password: str) -> User:
    async with get_session_context() as session:
        user = await get_user_by_email(session, email)
        if user is None:
            user = await register_user(
                session,
                UserCreate(username=email.split("@")[0], email=email, password=password),
            )
            print(f"Created user: {user.email} ({user.id})")
        else:
            print(f"Reusing user: {user.email} ({user.id})")
        return user


async def clear_projects(user: User) -> None:
    """Delete every project (and, by cascade, task) owned by the user."""
    async with get_session_context() as session:
        result = await session.execute(select(Project).where(Project.owner_id == user.id))
        projects = list(result.scalars().all())
        for project in projects:
            await session.delete(project)
    print(f"Deleted {len(projects)} existing projects.")


def build_tasks(project: Project, count: int, start: date) -> list[Task]:
    tasks = []
    for i in range(count):
        due = start + timedelta(days=random.randint(0, 60)) if random.random() < 0.8 else None
        tasks.append(Task(
            title=f"{project.name} - Task {i + 1}",
            description=None,
            status=random.choice(list(TaskStatus)),
            due_date=due,
            priority=random.randint(1, 3),
            project_id=project.id,
        ))
    return tasks


async def seed(user: User, num_projects: int, tasks_per_project: int) -> None:
    start = date.today()
    async with get_session_context() as session:
        for i in range(num_projects):
            project = Project(
                name=f"Demo Project {i + 1}",
                description="Generated by the seed script",
                due_date=start + timedelta(days=30 * (i + 1)),
                status=random.choice(list(ProjectStatus)),
                owner_id=user.id,
            )
            session.add(project)
            await session.flush()
            session.add_all(build_tasks(project, tasks_per_project, start))
            print(f"  {project.name}: {tasks_per_project} tasks")


async def main():
    parser = argparse.ArgumentParser(description="Seed the database with demo projects and tasks")
    parser.add_argument("--email", type=str, default="demo@taskflow.dev", help="Demo user's email")
    parser.add_argument("--password", type=str, default="demo", help="Demo user's password")
    parser.add_argument("--projects", type=int, default=5, help="Number of projects to create")
    parser.add_argument("--tasks", type=int, default=20, help="Tasks per project")
    parser.add_argument("--clear", action="store_true", help="Delete the user's projects first")

    args = parser.parse_args()

    print("=== Taskflow Seed Script ===")

    await init_db()

    user = await get_or_create_user(args.email, args.password)

    if args.clear:
        await clear_projects(user)

    start_time = time.time()
    await seed(user, args.projects, args.tasks)
    print(f"Insert time: {time.time() - start_time:.2f}s")

    print("\n=== Seeding Complete ===")
    print(f"Log in with {args.email} / {args.password}")


if __name__ == "__main__":
    asyncio.run(main())
