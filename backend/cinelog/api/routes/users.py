from fastapi import APIRouter

from cinelog.api.deps import SessionDep
from cinelog.inputs.movie import FollowInput
from cinelog.models.auth_schemas import Message
from cinelog.models.movie import MoviePublic
from cinelog.schemas.movie import MovieRecommendation
from cinelog.schemas.movie_list import MovieListPublic, ProfileLists
from cinelog.schemas.review import ReviewPublic
from cinelog.schemas.user import FollowRelation, UserPublic
from cinelog.services import users as users_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/follow", response_model=Message)
def follow_user(session: SessionDep, follow_in: FollowInput) -> Message:
    return users_service.follow(
        session=session,
        follower_id=follow_in.follower_id,
        followed_id=follow_in.followed_id,
    )


@router.delete("/follow", response_model=Message)
def unfollow_user(session: SessionDep, follower_id: int, followed_id: int) -> Message:
    return users_service.unfollow(
        session=session,
        follower_id=follower_id,
        followed_id=followed_id,
    )


@router.get("/follow", response_model=FollowRelation)
def read_following_relation(
    session: SessionDep,
    user_id: int,
    other_id: int,
) -> FollowRelation:
    return users_service.get_following_relation(
        session=session,
        user_id=user_id,
        other_id=other_id,
    )


@router.get("/id/{user_id}/followers", response_model=list[UserPublic])
def read_followers(session: SessionDep, user_id: int) -> list[UserPublic]:
    return users_service.get_followers(session=session, user_id=user_id)


@router.get("/id/{user_id}/followed", response_model=list[UserPublic])
def read_followed(session: SessionDep, user_id: int) -> list[UserPublic]:
    return users_service.get_followed(session=session, user_id=user_id)


@router.get("/id/{user_id}/friends", response_model=list[UserPublic])
def read_friends(session: SessionDep, user_id: int) -> list[UserPublic]:
    return users_service.get_friends(session=session, user_id=user_id)


@router.get("/id/{user_id}/reviews", response_model=list[ReviewPublic])
def read_user_reviews(session: SessionDep, user_id: int) -> list[ReviewPublic]:
    return users_service.get_user_reviews(session=session, user_id=user_id)


@router.get("/id/{user_id}/recommendations", response_model=list[MovieRecommendation])
def read_recommendations(session: SessionDep, user_id: int) -> list[MovieRecommendation]:
    return users_service.get_user_recommendations(session=session, user_id=user_id)


@router.get("/{username}/favorites", response_model=list[MoviePublic])
def read_favorite_movies(session: SessionDep, username: str) -> list[MoviePublic]:
    return users_service.get_favorite_movies(session=session, username=username)


@router.get("/{username}/watched", response_model=list[MoviePublic])
def read_watched_movies(session: SessionDep, username: str) -> list[MoviePublic]:
    return users_service.get_watched_movies(session=session, username=username)


@router.get("/{username}/lists", response_model=list[MovieListPublic])
def read_user_lists(session: SessionDep, username: str) -> list[MovieListPublic]:
    return users_service.get_lists(session=session, username=username)


@router.get("/{username}/profile-lists", response_model=ProfileLists)
def read_profile_lists(session: SessionDep, username: str) -> ProfileLists:
    return users_service.get_profile_lists(session=session, username=username)


# KEEP AT THE BOTTOM
@router.get("/{username}", response_model=UserPublic)
def read_user(session: SessionDep, username: str) -> UserPublic:
    return users_service.get_public_user(session=session, username=username)
