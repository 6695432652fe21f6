from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.common.permissions import Actor
from app.common.schemas import ApiResponse, ok
from app.dependencies.channels import realtime_dependency
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_actor
from app.modules.comments.schemas import CommentCreate, CommentOut
from app.modules.comments.service import CommentService

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.get("/job/{job_id}", response_model=ApiResponse[List[CommentOut]])
async def get_job_comments(job_id: UUID, db: db_dependency, actor: Actor = Depends(get_actor)):
    return ok(CommentService(db).list_for_job(job_id))


@router.post("", response_model=ApiResponse[CommentOut], status_code=status.HTTP_201_CREATED)
async def create_comment(
    data: CommentCreate,
    db: db_dependency,
    realtime: realtime_dependency,
    actor: Actor = Depends(get_actor),
):
    """Agregar comentario a un trabajo y notificar en tiempo real (`commentAdded`)"""
    comment = CommentService(db).create_comment(data, actor)
    await realtime.broadcast(
        "commentAdded", CommentOut.model_validate(comment).model_dump(by_alias=True, mode="json")
    )
    return ok(comment, message="Comment added successfully")


@router.delete("/{comment_id}", response_model=ApiResponse[None])
async def delete_comment(comment_id: UUID, db: db_dependency, actor: Actor = Depends(get_actor)):
    CommentService(db).delete_comment(comment_id)
    return ok(message="Comment deleted successfully")
