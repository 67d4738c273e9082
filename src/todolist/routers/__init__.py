from fastapi import Request

from ..service import TodoService


def get_service(request: Request) -> TodoService:
    """
    Dependency returning the application's TodoService.
    """
    return request.app.state.service
