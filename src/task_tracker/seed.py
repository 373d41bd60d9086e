"""Reset the configured task store and fill it with sample tasks."""

from __future__ import annotations

import asyncio
import logging

from task_tracker.bootstrap import open_task_service
from task_tracker.config import Settings, load_settings
from task_tracker.observability.logging import setup_logging

logger = logging.getLogger("task_tracker.seed")

SAMPLE_TASKS = [
    {
        "title": "Setup Development Environment",
        "description": "Install Python, SQLite, and configure development tools",
        "priority": "high",
        "status": "completed",
    },
    {
        "title": "Create API Documentation",
        "description": "Write comprehensive API documentation using Swagger/OpenAPI",
        "priority": "medium",
        "status": "in-progress",
    },
    {
        "title": "Implement User Authentication",
        "description": "Add JWT-based authentication system with login/register functionality",
        "priority": "high",
        "status": "pending",
    },
    {
        "title": "Write Unit Tests",
        "description": "Create comprehensive unit tests for all API endpoints",
        "priority": "medium",
        "status": "pending",
    },
    {
        "title": "Setup CI/CD Pipeline",
        "description": "Configure automated testing and deployment pipeline",
        "priority": "low",
        "status": "pending",
    },
    {
        "title": "Optimize Database Queries",
        "description": "Add indexes and optimize database queries for better performance",
        "priority": "medium",
        "status": "in-progress",
    },
    {
        "title": "Add Error Logging",
        "description": "Implement comprehensive error logging and monitoring",
        "priority": "low",
        "status": "completed",
    },
    {
        "title": "Create Frontend Components",
        "description": "Build components for the task management interface",
        "priority": "high",
        "status": "in-progress",
    },
    {
        "title": "Setup Production Environment",
        "description": "Configure production server with proper security measures",
        "priority": "high",
        "status": "pending",
    },
    {
        "title": "Implement Real-time Updates",
        "description": "Add WebSocket support for real-time task updates",
        "priority": "low",
        "status": "pending",
    },
]


async def seed(settings: Settings) -> int:
    async with open_task_service(settings) as svc:
        removed = await svc.clear()
        logger.info("seed.cleared", extra={"category": "seed", "event": "seed.cleared", "removed": removed})

        for payload in SAMPLE_TASKS:
            task = await svc.create(payload)
            logger.info(
                "seed.insert",
                extra={
                    "category": "seed",
                    "event": "seed.insert",
                    "task_id": task.id,
                    "title": task.title,
                    "priority": task.priority.value,
                    "status": task.status.value,
                },
            )

        total = (await svc.stats()).total
    logger.info("seed.done", extra={"category": "seed", "event": "seed.done", "inserted": total})
    return total


def main() -> None:
    settings = load_settings()
    setup_logging(settings)
    asyncio.run(seed(settings))


if __name__ == "__main__":
    main()
