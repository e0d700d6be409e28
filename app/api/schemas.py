"""Request and response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class PersonalRecommendationsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | int | None = Field(None, alias="userId")
    seed: str | None = None


class RecommendedBook(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    author: str
    image: str | None = None
    description: str = ""
    rating: float | None = None
    category: str = ""
    published_date: int | str | None = Field(None, alias="publishedDate")
