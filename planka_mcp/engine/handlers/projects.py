"""Project tool handlers.

Handles:
- get_projects: List every project visible to the token
- get_project: Fetch one project
- create_project: Create a project
- delete_project: Delete a project
"""

from typing import Any

from .base import DELETED, HandlerContext, dump, dump_all


async def handle_get_projects(params: dict[str, Any], ctx: HandlerContext) -> list[dict[str, Any]]:
    return dump_all(await ctx.resolver.get_projects())


async def handle_get_project(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    return dump(await ctx.resolver.get_project(params["projectId"]))


async def handle_create_project(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    """Create a project.

    Args:
        params: Dict containing:
            - name: Project name
            - description: Optional description
    """
    project = await ctx.resolver.create_project(params["name"], params.get("description"))
    return dump(project)


async def handle_delete_project(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    await ctx.resolver.delete_project(params["projectId"])
    return DELETED
