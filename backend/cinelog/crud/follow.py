from sqlalchemy.orm import aliased
from sqlmodel import Session, col, select

from cinelog.models.follow import Follow
from cinelog.models.user import User


def get_follow(
    *,
    session: Session,
    follower_id: int,
    followed_id: int,
) -> Follow | None:
    return session.get(Follow, (follower_id, followed_id))


def create_follow(
    *,
    session: Session,
    follower_id: int,
    followed_id: int,
) -> Follow:
    """
    Create a one-way follow relationship.

    Parameters:
        session (Session): The database session.
        follower_id (int): The ID of the user who follows.
        followed_id (int): The ID of the user being followed.
    Returns:
        Follow: The created follow object.
    Raises:
        IntegrityError: If the relationship already exists (unique), either
            user does not exist (foreign key) or both ids are equal (check).
    """
    follow = Follow(follower_id=follower_id, followed_id=followed_id)
    session.add(follow)
    session.flush()
    return follow


def delete_follow(
    *,
    session: Session,
    follower_id: int,
    followed_id: int,
) -> Follow | None:
    follow = session.get(Follow, (follower_id, followed_id))
    if follow is None:
        return None
    session.delete(follow)
    session.flush()
    return follow


def get_followers(*, session: Session, user_id: int) -> list[User]:
    """
    Retrieve the users that follow a user.
    """
    stmt = (
        select(User)
        .join(Follow, col(Follow.follower_id) == col(User.id))
        .where(col(Follow.followed_id) == user_id)
        .order_by(col(User.username))
    )
    return list(session.exec(stmt).all())


def get_followed(*, session: Session, user_id: int) -> list[User]:
    """
    Retrieve the users that a user follows.
    """
    stmt = (
        select(User)
        .join(Follow, col(Follow.followed_id) == col(User.id))
        .where(col(Follow.follower_id) == user_id)
        .order_by(col(User.username))
    )
    return list(session.exec(stmt).all())


def get_friends(*, session: Session, user_id: int) -> list[User]:
    """
    Retrieve the users that follow a user and are followed back by them.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the user.
    Returns:
        list[User]: The mutual follows of the user.
    """
    outgoing = aliased(Follow)
    incoming = aliased(Follow)
    stmt = (
        select(User)
        .join(outgoing, outgoing.followed_id == col(User.id))
        .join(
            incoming,
            (incoming.follower_id == col(User.id))
            & (incoming.followed_id == user_id),
        )
        .where(outgoing.follower_id == user_id)
        .order_by(col(User.username))
    )
    return list(session.exec(stmt).all())
