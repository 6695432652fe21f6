import logging
from typing import List
from uuid import UUID

from app.common.permissions import Actor
from app.common.service import BaseService
from app.common.validators import initials
from app.modules.comments.models import Comment
from app.modules.comments.schemas import CommentCreate
from app.modules.jobs.models import Job

logger = logging.getLogger(__name__)


class CommentService(BaseService):
    model = Comment
    label = "Comment"

    def list_for_job(self, job_id: UUID) -> List[Comment]:
        """Comentarios activos de un trabajo, el más antiguo primero"""
        self._get_or_404(job_id, Job, "Job")
        return (
            self._active_query()
            .filter(Comment.job_id == job_id)
            .order_by(Comment.created_at.asc())
            .all()
        )

    def create_comment(self, data: CommentCreate, actor: Actor) -> Comment:
        """
        Autor, iniciales y rol se toman del usuario autenticado cuando no se envían.
        """
        self._get_or_404(data.job, Job, "Job")
        author = (data.author or actor.name).strip()
        comment = Comment(
            job_id=data.job,
            author=author,
            author_initials=data.author_initials or initials(author),
            role=data.role or actor.role,
            text=data.text,
            attachments=[a.model_dump() for a in data.attachments],
        )
        return self._save(comment)

    def delete_comment(self, comment_id: UUID) -> None:
        self._soft_delete(self._get_or_404(comment_id))
