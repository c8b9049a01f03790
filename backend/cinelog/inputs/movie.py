from sqlmodel import Field, SQLModel

from cinelog.models.review import MAX_RATING, MIN_RATING


class UserMovieInput(SQLModel):
    user_id: int
    movie_id: int


class ReviewInput(SQLModel):
    user_id: int
    movie_id: int
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    content: str | None = Field(default=None, max_length=5000)


class ListCreateInput(SQLModel):
    user_id: int
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    movie_id: int


class ListMovieInput(SQLModel):
    list_id: int
    movie_id: int


class SavedListInput(SQLModel):
    user_id: int
    list_id: int


class FollowInput(SQLModel):
    follower_id: int
    followed_id: int
