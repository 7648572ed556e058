import logging
import sys
from typing import List

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import ConfigError, Settings
from app.database import StorageError, init_db
from app.logging_setup import setup_logging
from app.models import Task, TaskCreate, TaskResponse, TaskUpdate
from app.services import TaskNotFoundError, TaskService

logger = logging.getLogger(__name__)

CORS_HEADERS = ["X-Requested-With", "Content-Type", "Authorization"]
CORS_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "OPTIONS"]

router = APIRouter()


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def decode_task(payload: TaskCreate, task_id=None) -> Task:
    try:
        task = payload.to_task(task_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid request: {e}")
    if task.title == "":
        raise HTTPException(status_code=400, detail="Title is required")
    if task.status == "":
        raise HTTPException(status_code=400, detail="Status is required")
    return task


@router.get("/health")
def health():
    return {"status": "healthy"}


@router.post("/tasks", status_code=201, response_model=TaskResponse)
def create_task(payload: TaskCreate, service: TaskService = Depends(get_task_service)):
    task = decode_task(payload)
    created = service.create(task)
    logger.info("created task %s", created.id)
    return TaskResponse.from_task(created)


@router.get("/tasks", response_model=List[TaskResponse])
def list_tasks(service: TaskService = Depends(get_task_service)):
    return [TaskResponse.from_task(task) for task in service.list()]


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    try:
        task = service.get(task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskResponse.from_task(task)


@router.put("/tasks/{task_id}", status_code=204)
def update_task(task_id: int, payload: TaskUpdate, service: TaskService = Depends(get_task_service)):
    task = decode_task(payload, task_id)
    try:
        service.update(task)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    logger.info("updated task %s", task_id)


@router.delete("/tasks/{task_id}", status_code=204)
def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    try:
        service.delete(task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    logger.info("deleted task %s", task_id)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug("rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("%s %s failed: %s: %s", request.method, request.url.path, exc, exc.__cause__)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(service: TaskService) -> FastAPI:
    app = FastAPI(title="Task Service")
    app.state.task_service = service
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_headers=CORS_HEADERS,
        allow_methods=CORS_METHODS,
    )
    return app


def run() -> None:
    import uvicorn

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        setup_logging()
        logger.error("could not load config: %s", e)
        sys.exit(1)

    setup_logging(settings.log_level)
    try:
        engine = init_db(settings.db)
    except StorageError as e:
        logger.error("failed to initialize database: %s: %s", e, e.__cause__)
        sys.exit(1)

    app = create_app(TaskService(engine))
    try:
        uvicorn.run(app, host=settings.app_host, port=settings.app_port, log_config=None)
    finally:
        engine.dispose()


if __name__ == "__main__":
    run()
