from datetime import datetime
from pydantic import BaseModel, ConfigDict


class RatingCreate(BaseModel):
    value: int


class RatingUpdate(BaseModel):
    value: int


class Rating(BaseModel):
    id: int
    project_id: int
    user_id: int
    value: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class RatingWithAuthor(Rating):
    username: str | None = None


class RatingStats(BaseModel):
    project_id: int
    average_rating: float
    total_ratings: int
    # Keys 1..5 are always present
    distribution: dict[int, int]


class RatingTrendPoint(BaseModel):
    day: str
    average_rating: float
    count: int
