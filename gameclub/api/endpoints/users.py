"""
Users API endpoints

Club member management. Members are the recipients of tournament creation
emails. Reads go straight to the SQL store; members are not cached.
"""

from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ...domain.entities import Member
from ...repositories.user import UserRepository
from ..dependencies import get_user_repository

logger = structlog.get_logger()
router = APIRouter()

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# Pydantic schemas for API
class UserCreate(BaseModel):
    """Request body for registering a member."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)


class UserUpdate(BaseModel):
    """Request body for updating a member; omitted fields are kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: Optional[str] = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)


class UserResponse(BaseModel):
    """Member as returned by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    email: str
    first_name: str
    last_name: Optional[str] = None

    @classmethod
    def from_entity(cls, member: Member) -> "UserResponse":
        return cls.model_validate(member.model_dump())


@router.get("/users", response_model=List[UserResponse])
async def list_users(users: UserRepository = Depends(get_user_repository)):
    """List all members."""
    return [UserResponse.from_entity(member) for member in await users.find_all()]


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, users: UserRepository = Depends(get_user_repository)):
    return UserResponse.from_entity(await users.find_by_id(user_id))


@router.post(
    "/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
async def create_user(
    request: UserCreate, users: UserRepository = Depends(get_user_repository)
):
    """Register a member. A duplicate email is a conflict."""
    created = await users.create(Member(**request.model_dump()))
    logger.info("User created", user_id=created.id)
    return UserResponse.from_entity(created)


@router.put("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    request: UserUpdate,
    users: UserRepository = Depends(get_user_repository),
):
    """Update the fields present in the request."""
    existing = await users.find_by_id(user_id)
    changes = request.model_dump(exclude_unset=True, exclude_none=True)

    updated = await users.update(existing.model_copy(update=changes))
    logger.info("User updated", user_id=user_id, fields=sorted(changes))
    return UserResponse.from_entity(updated)
