"""Auth router - current user lookup. Sessions are issued by the identity provider."""

from fastapi import APIRouter, Depends

from freelancehub.core.deps import get_current_user
from freelancehub.db.models import User
from freelancehub.schemas.user import UserRead

router = APIRouter()


@router.get("/user", response_model=UserRead)
def get_me(user: User = Depends(get_current_user)):
    """Return the authenticated user (created on first request)."""
    return user
