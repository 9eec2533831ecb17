# Pydantic schemas for user-related requests/responses
# fastapi-users provides the base schemas; organization_id is the only extension

from uuid import UUID
from fastapi_users import schemas
from typing import Optional


class UserRead(schemas.BaseUser[UUID]):
    organization_id: Optional[int] = None


class UserCreate(schemas.BaseUserCreate):
    organization_id: Optional[int] = None


class UserUpdate(schemas.BaseUserUpdate):
    organization_id: Optional[int] = None
