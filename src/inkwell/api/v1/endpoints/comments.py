"""Comment endpoints addressed by comment id."""

from fastapi import APIRouter

from inkwell.schemas.common import MessageResponse
from inkwell.services import comments

from ..dependencies import CurrentCallerDep, StoreDep

router = APIRouter(prefix="/comments", tags=["comments"])


@router.delete("/{comment_id}", response_model=MessageResponse)
def delete_comment(comment_id: str, caller_id: CurrentCallerDep, store: StoreDep) -> MessageResponse:
    """Delete a comment; only its author or an admin may do this."""
    comments.delete_comment(store, caller_id, comment_id)
    return MessageResponse(message="Comment deleted")
