"""Todo CRUD endpoints."""

from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from todostore.core.modules.todo.models import Todo
from todostore.web.deps import AppDep
from todostore.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["todos"])


class TodoTextRequest(BaseModel):
    """Request carrying the text of a todo."""

    todo_text: str = Field(..., alias="todoText", description="The todo text")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {"examples": [{"todoText": "walk the dog"}]},
    }


# Endpoints are plain functions: store calls block on file I/O, so FastAPI runs them in its threadpool


@router.post(
    "/todo",
    summary="Create todo",
    description="Create a new todo. The id is the next value of the persistent counter.",
    operation_id="createTodo",
    status_code=201,
    responses={
        201: {"description": "Todo created successfully"},
        400: {"model": ErrorResponse, "description": "Invalid body or store failure"},
    },
)
def create_todo(request: TodoTextRequest, app: AppDep) -> Todo:
    return app.create_todo(request.todo_text)


@router.get(
    "/todo",
    summary="List todos",
    description="Get all todos ordered by id.",
    operation_id="listTodos",
    responses={
        200: {"description": "List of todos"},
        400: {"model": ErrorResponse, "description": "Store failure"},
    },
)
def list_todos(app: AppDep) -> list[Todo]:
    return app.get_todos()


@router.get(
    "/todo/{todo_id}",
    summary="Get todo",
    description="Get a specific todo by its id.",
    operation_id="getTodo",
    responses={
        200: {"description": "Todo details"},
        404: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
def get_todo(todo_id: str, app: AppDep) -> Todo:
    return app.get_todo(todo_id)


@router.put(
    "/todo/{todo_id}",
    summary="Update todo",
    description="Replace the text of an existing todo. Unknown ids are not created.",
    operation_id="updateTodo",
    responses={
        200: {"description": "Todo updated successfully"},
        400: {"model": ErrorResponse, "description": "Invalid body"},
        404: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
def update_todo(todo_id: str, request: TodoTextRequest, app: AppDep) -> Todo:
    return app.update_todo(todo_id, request.todo_text)


@router.delete(
    "/todo/{todo_id}",
    summary="Delete todo",
    description="Delete a todo by its id.",
    operation_id="deleteTodo",
    status_code=204,
    responses={
        204: {"description": "Todo deleted successfully"},
        404: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
def delete_todo(todo_id: str, app: AppDep) -> Response:
    app.delete_todo(todo_id)
    return Response(status_code=204)
