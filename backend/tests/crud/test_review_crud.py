import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from cinelog.crud import review as review_crud
from cinelog.models.review import Review


def test_rating_summary_without_reviews(
    *,
    db_transaction: Session,
    movie_factory,
):
    movie = movie_factory()

    assert review_crud.get_rating_summary(session=db_transaction, movie_id=movie.id) == (
        0,
        None,
    )


def test_rating_out_of_range_is_rejected_by_database(
    *,
    db_transaction: Session,
    user_factory,
    movie_factory,
):
    user = user_factory()
    movie = movie_factory()
    # Table models skip validation, so the check constraint is what stops this
    db_transaction.add(Review(user_id=user.id, movie_id=movie.id, rating=9))

    with pytest.raises(IntegrityError):
        db_transaction.flush()


def test_get_review_with_author(
    *,
    db_transaction: Session,
    user_factory,
    movie_factory,
):
    user = user_factory()
    movie = movie_factory()
    db_transaction.add(Review(user_id=user.id, movie_id=movie.id, rating=2))
    db_transaction.flush()

    row = review_crud.get_review_with_author(
        session=db_transaction, user_id=user.id, movie_id=movie.id
    )

    assert row is not None
    review, author = row
    assert review.rating == 2
    assert author is user
