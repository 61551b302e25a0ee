from fastapi import APIRouter, Depends

from auth import get_current_user
from models import User

user_router = APIRouter(
    prefix="/api/users",
    tags=["User"]
)


@user_router.get("/me", tags=["User"])
def read_users_me(current_user: User = Depends(get_current_user)):
    return {"success": True, "data": current_user.model_dump()}
