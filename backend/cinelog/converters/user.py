from cinelog.models.user import User
from cinelog.schemas.user import UserPublic


def to_public(user: User) -> UserPublic:
    return UserPublic.model_validate(user)
