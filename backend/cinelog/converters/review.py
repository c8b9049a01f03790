from cinelog.models.review import Review
from cinelog.models.user import User
from cinelog.schemas.review import ReviewPublic


def to_public(review: Review, author: User) -> ReviewPublic:
    return ReviewPublic.model_validate(
        review,
        update={"username": author.username, "avatar": author.avatar},
    )
