from sqlalchemy import func
from sqlmodel import Session, col, select

from cinelog.models.review import Review, ReviewCreate
from cinelog.models.user import User


def get_review(*, session: Session, user_id: int, movie_id: int) -> Review | None:
    """
    Retrieve the review a user wrote for a movie.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the author.
        movie_id (int): The ID of the movie.
    Returns:
        Review | None: The review if found, otherwise None.
    """
    stmt = select(Review).where(
        col(Review.user_id) == user_id,
        col(Review.movie_id) == movie_id,
    )
    return session.exec(stmt).one_or_none()


def get_review_with_author(
    *,
    session: Session,
    user_id: int,
    movie_id: int,
) -> tuple[Review, User] | None:
    stmt = (
        select(Review, User)
        .join(User, col(User.id) == col(Review.user_id))
        .where(
            col(Review.user_id) == user_id,
            col(Review.movie_id) == movie_id,
        )
    )
    row = session.exec(stmt).one_or_none()
    if row is None:
        return None
    review, user = row
    return review, user


def create_review(*, session: Session, review_create: ReviewCreate) -> Review:
    """
    Create a review.

    Parameters:
        session (Session): The database session.
        review_create (ReviewCreate): The review data.
    Returns:
        Review: The created review.
    Raises:
        IntegrityError: If the user already reviewed the movie, the rating is
            out of range, or the user or movie does not exist.
    """
    db_obj = Review.model_validate(review_create)
    session.add(db_obj)
    session.flush()
    return db_obj


def delete_review(*, session: Session, user_id: int, movie_id: int) -> Review | None:
    review = get_review(session=session, user_id=user_id, movie_id=movie_id)
    if review is None:
        return None
    session.delete(review)
    session.flush()
    return review


def get_reviews_for_movie(
    *,
    session: Session,
    movie_id: int,
) -> list[tuple[Review, User]]:
    """
    Retrieve all reviews of a movie together with their authors, newest first.
    """
    stmt = (
        select(Review, User)
        .join(User, col(User.id) == col(Review.user_id))
        .where(col(Review.movie_id) == movie_id)
        .order_by(col(Review.created_at).desc(), col(Review.id).desc())
    )
    return [(review, user) for review, user in session.exec(stmt).all()]


def get_reviews_by_user(
    *,
    session: Session,
    user_id: int,
) -> list[tuple[Review, User]]:
    stmt = (
        select(Review, User)
        .join(User, col(User.id) == col(Review.user_id))
        .where(col(Review.user_id) == user_id)
        .order_by(col(Review.created_at).desc(), col(Review.id).desc())
    )
    return [(review, user) for review, user in session.exec(stmt).all()]


def get_rating_summary(*, session: Session, movie_id: int) -> tuple[int, float | None]:
    """
    Count the reviews of a movie and average their ratings.

    Returns:
        tuple[int, float | None]: The number of reviews and the average rating,
        which is None when there are no reviews.
    """
    stmt = select(func.count(col(Review.id)), func.avg(col(Review.rating))).where(
        col(Review.movie_id) == movie_id
    )
    count, average = session.exec(stmt).one()
    return count, float(average) if average is not None else None
