from datetime import datetime
from pydantic import BaseModel, ConfigDict


class UserBase(BaseModel):
    username: str
    email: str


class UserCreate(UserBase):
    firebase_uid: str
    profile_picture: int = 0


class UserUpdate(BaseModel):
    username: str | None = None
    reputation: float | None = None
    profile_picture: int | None = None


class User(UserBase):
    id: int
    firebase_uid: str
    reputation: float
    profile_picture: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class UserReputation(BaseModel):
    user_id: int
    reputation: float
