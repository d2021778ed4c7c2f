from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_user, get_record_store
from app.core.exceptions import NotFoundError
from app.models import User
from app.repositories.record_store import RecordStore
from app.schemas.user import CurrentUser, UserOut

router = APIRouter()


@router.get("/me", response_model=UserOut)
async def me(
    user: CurrentUser = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
):
    row = store.get(User, user.user_id)
    if row is None:
        raise NotFoundError("User not found")
    return row
