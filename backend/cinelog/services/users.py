from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from cinelog.converters import movie as movie_converters
from cinelog.converters import movie_list as list_converters
from cinelog.converters import review as review_converters
from cinelog.converters import user as user_converters
from cinelog.core.config import settings
from cinelog.core.enums import IntegrityKind
from cinelog.crud import favorite as favorites_crud
from cinelog.crud import follow as follows_crud
from cinelog.crud import movie as movies_crud
from cinelog.crud import movie_list as lists_crud
from cinelog.crud import review as reviews_crud
from cinelog.crud import user as users_crud
from cinelog.crud import watched as watched_crud
from cinelog.crud.integrity import classify_integrity_error
from cinelog.exceptions.base import AppError
from cinelog.exceptions.user_exceptions import (
    AlreadyFollowingError,
    FollowNotFoundError,
    OneOrMoreUsersNotFound,
    SelfFollowError,
    UserNotFoundError,
)
from cinelog.models.auth_schemas import Message
from cinelog.models.movie import MoviePublic
from cinelog.models.user import User
from cinelog.schemas.movie import MovieRecommendation
from cinelog.schemas.movie_list import MovieListPublic, ProfileLists
from cinelog.schemas.review import ReviewPublic
from cinelog.schemas.user import FollowRelation, UserPublic


def _get_user_or_raise(*, session: Session, username: str) -> User:
    user = users_crud.get_user_by_username(session=session, username=username)
    if user is None:
        raise UserNotFoundError(username)
    return user


def get_public_user(*, session: Session, username: str) -> UserPublic:
    """
    Get the public profile of a user.

    Parameters:
        session (Session): Database session.
        username (str): The username to look up.
    Returns:
        UserPublic: The profile, without email or password hash.
    Raises:
        UserNotFoundError: If no user has that username.
    """
    user = _get_user_or_raise(session=session, username=username)
    return user_converters.to_public(user)


def get_favorite_movies(*, session: Session, username: str) -> list[MoviePublic]:
    _get_user_or_raise(session=session, username=username)
    movies = favorites_crud.get_favorite_movies_by_username(
        session=session,
        username=username,
    )
    return [movie_converters.to_public(movie) for movie in movies]


def get_watched_movies(*, session: Session, username: str) -> list[MoviePublic]:
    _get_user_or_raise(session=session, username=username)
    movies = watched_crud.get_watched_movies_by_username(
        session=session,
        username=username,
    )
    return [movie_converters.to_public(movie) for movie in movies]


def get_lists(*, session: Session, username: str) -> list[MovieListPublic]:
    _get_user_or_raise(session=session, username=username)
    return [
        list_converters.to_public(movie_list)
        for movie_list in lists_crud.get_lists_by_username(
            session=session,
            username=username,
        )
    ]


def get_profile_lists(*, session: Session, username: str) -> ProfileLists:
    """
    Get the lists shown on a profile: the ones the user created and the ones
    they saved.

    Raises:
        UserNotFoundError: If no user has that username.
    """
    _get_user_or_raise(session=session, username=username)
    own = lists_crud.get_lists_by_username(session=session, username=username)
    saved = lists_crud.get_saved_lists_by_username(session=session, username=username)
    return ProfileLists(
        own=[list_converters.to_public(movie_list) for movie_list in own],
        saved=[list_converters.to_public(movie_list) for movie_list in saved],
    )


def follow(*, session: Session, follower_id: int, followed_id: int) -> Message:
    """
    Make one user follow another.

    Parameters:
        session (Session): Database session.
        follower_id (int): ID of the user who follows.
        followed_id (int): ID of the user to follow.
    Returns:
        Message: Confirmation message.
    Raises:
        SelfFollowError: If both IDs are the same user.
        UserNotFoundError: If one of the users does not exist.
        OneOrMoreUsersNotFound: If neither user exists.
        AlreadyFollowingError: If the follow already exists.
        AppError: For any other (unexpected) errors.
    """
    if follower_id == followed_id:
        raise SelfFollowError(follower_id)

    missing = [
        user_id
        for user_id in (follower_id, followed_id)
        if users_crud.get_user_by_id(session=session, user_id=user_id) is None
    ]
    if len(missing) == 1:
        raise UserNotFoundError(missing[0])
    if missing:
        raise OneOrMoreUsersNotFound(missing)
    if follows_crud.get_follow(
        session=session,
        follower_id=follower_id,
        followed_id=followed_id,
    ):
        raise AlreadyFollowingError(follower_id, followed_id)

    try:
        follows_crud.create_follow(
            session=session,
            follower_id=follower_id,
            followed_id=followed_id,
        )
        session.commit()
    except IntegrityError as e:
        session.rollback()
        kind = classify_integrity_error(e)
        if kind is IntegrityKind.UNIQUE:
            raise AlreadyFollowingError(follower_id, followed_id) from e
        elif kind is IntegrityKind.FOREIGN_KEY:
            raise OneOrMoreUsersNotFound([follower_id, followed_id]) from e
        elif kind is IntegrityKind.CHECK:
            raise SelfFollowError(follower_id) from e
        else:
            raise AppError from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    return Message(message="User successfully followed")


def unfollow(*, session: Session, follower_id: int, followed_id: int) -> Message:
    removed = follows_crud.delete_follow(
        session=session,
        follower_id=follower_id,
        followed_id=followed_id,
    )
    if removed is None:
        raise FollowNotFoundError(follower_id, followed_id)
    session.commit()
    return Message(message="User successfully unfollowed")


def get_following_relation(
    *,
    session: Session,
    user_id: int,
    other_id: int,
) -> FollowRelation:
    follows = follows_crud.get_follow(
        session=session,
        follower_id=user_id,
        followed_id=other_id,
    )
    followed_by = follows_crud.get_follow(
        session=session,
        follower_id=other_id,
        followed_id=user_id,
    )
    return FollowRelation(follows=follows is not None, followed_by=followed_by is not None)


def get_followers(*, session: Session, user_id: int) -> list[UserPublic]:
    users = follows_crud.get_followers(session=session, user_id=user_id)
    return [user_converters.to_public(user) for user in users]


def get_followed(*, session: Session, user_id: int) -> list[UserPublic]:
    users = follows_crud.get_followed(session=session, user_id=user_id)
    return [user_converters.to_public(user) for user in users]


def get_friends(*, session: Session, user_id: int) -> list[UserPublic]:
    users = follows_crud.get_friends(session=session, user_id=user_id)
    return [user_converters.to_public(user) for user in users]


def get_user_reviews(*, session: Session, user_id: int) -> list[ReviewPublic]:
    return [
        review_converters.to_public(review, author)
        for review, author in reviews_crud.get_reviews_by_user(
            session=session,
            user_id=user_id,
        )
    ]


def get_user_recommendations(
    *,
    session: Session,
    user_id: int,
    limit: int = settings.POPULAR_LIMIT,
) -> list[MovieRecommendation]:
    """
    Recommend movies favorited by the users someone follows.

    Movies the user already watched or favorited are left out. The rest are
    ranked by how many followed users favorited them.

    Raises:
        UserNotFoundError: If the user does not exist.
    """
    if users_crud.get_user_by_id(session=session, user_id=user_id) is None:
        raise UserNotFoundError(user_id)
    return [
        movie_converters.to_recommendation(movie, followed_favorites)
        for movie, followed_favorites in movies_crud.get_recommended_movies(
            session=session,
            user_id=user_id,
            limit=limit,
        )
    ]
