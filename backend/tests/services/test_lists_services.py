import pytest
from pytest_mock import MockerFixture
from sqlmodel import Session, func, select

from cinelog.core.config import settings
from cinelog.crud import follow as follows_crud
from cinelog.crud import movie_list as lists_crud
from cinelog.exceptions.base import AppError
from cinelog.exceptions.list_exceptions import (
    ListAlreadySavedError,
    ListNotFoundError,
    ListNotUpdatedError,
    MovieAlreadyInListError,
    MovieNotInListError,
    SavedListNotFoundError,
)
from cinelog.exceptions.movie_exceptions import MovieNotFoundError
from cinelog.exceptions.user_exceptions import UserNotFoundError
from cinelog.models.movie_list import MovieList, MovieListUpdate
from cinelog.services import lists as lists_services
from cinelog.services.movie_resolver import MovieResolver


def _list_count(session: Session) -> int:
    return session.exec(select(func.count()).select_from(MovieList)).one()


def test_create_list_with_first_movie(
    db_transaction: Session,
    movie_resolver: MovieResolver,
    user_factory,
):
    user = user_factory()

    created = lists_services.create_list(
        session=db_transaction,
        resolver=movie_resolver,
        user_id=user.id,
        title="Club nights",
        description="Movies about clubs",
        movie_id=550,
    )
    detail = lists_services.get_list(session=db_transaction, list_id=created.id)

    assert created.user_id == user.id
    assert detail.title == "Club nights"
    assert detail.author == user.username
    assert detail.saved == 0
    assert [movie.id for movie in detail.movies] == [550]


def test_create_list_with_unknown_movie_writes_nothing(
    db_transaction: Session,
    movie_resolver: MovieResolver,
    user_factory,
):
    user = user_factory()

    with pytest.raises(MovieNotFoundError):
        lists_services.create_list(
            session=db_transaction,
            resolver=movie_resolver,
            user_id=user.id,
            title="Ghosts",
            description=None,
            movie_id=999_999_999,
        )

    assert _list_count(db_transaction) == 0


def test_create_list_unknown_user(
    db_transaction: Session,
    movie_resolver: MovieResolver,
):
    with pytest.raises(UserNotFoundError):
        lists_services.create_list(
            session=db_transaction,
            resolver=movie_resolver,
            user_id=404,
            title="Nobody",
            description=None,
            movie_id=550,
        )


def test_create_list_rolls_back_when_entry_fails(
    mocker: MockerFixture,
    db_transaction: Session,
    movie_resolver: MovieResolver,
    user_factory,
):
    user = user_factory()
    db_transaction.commit()
    mocker.patch(
        "cinelog.crud.movie_list.add_movie_to_list",
        side_effect=RuntimeError("disk full"),
    )

    with pytest.raises(AppError):
        lists_services.create_list(
            session=db_transaction,
            resolver=movie_resolver,
            user_id=user.id,
            title="Half written",
            description=None,
            movie_id=550,
        )

    assert _list_count(db_transaction) == 0


def test_add_and_remove_movie(
    db_transaction: Session,
    movie_resolver: MovieResolver,
    user_factory,
    movie_list_factory,
    movie_factory,
):
    user = user_factory()
    movie_list = movie_list_factory(user_id=user.id)
    movie = movie_factory()

    lists_services.add_movie_to_list(
        session=db_transaction,
        resolver=movie_resolver,
        list_id=movie_list.id,
        movie_id=movie.id,
    )
    with pytest.raises(MovieAlreadyInListError):
        lists_services.add_movie_to_list(
            session=db_transaction,
            resolver=movie_resolver,
            list_id=movie_list.id,
            movie_id=movie.id,
        )

    lists_services.remove_movie_from_list(
        session=db_transaction, list_id=movie_list.id, movie_id=movie.id
    )

    with pytest.raises(MovieNotInListError):
        lists_services.remove_movie_from_list(
            session=db_transaction, list_id=movie_list.id, movie_id=movie.id
        )


def test_add_movie_to_missing_list(
    db_transaction: Session,
    movie_resolver: MovieResolver,
):
    with pytest.raises(ListNotFoundError):
        lists_services.add_movie_to_list(
            session=db_transaction,
            resolver=movie_resolver,
            list_id=1,
            movie_id=550,
        )


def test_get_list_pages_movies(
    db_transaction: Session,
    movie_resolver: MovieResolver,
    user_factory,
    movie_list_factory,
    movie_factory,
):
    user = user_factory()
    movie_list = movie_list_factory(user_id=user.id)
    total = settings.LIST_PAGE_SIZE + 3
    for movie in movie_factory.create_batch(total):
        lists_crud.add_movie_to_list(
            session=db_transaction, list_id=movie_list.id, movie_id=movie.id
        )

    first = lists_services.get_list(session=db_transaction, list_id=movie_list.id)
    second = lists_services.get_list(session=db_transaction, list_id=movie_list.id, page=2)

    assert len(first.movies) == settings.LIST_PAGE_SIZE
    assert len(second.movies) == 3
    assert first.total_pages == second.total_pages == 2
    assert first.total_results == total
    assert {m.id for m in first.movies}.isdisjoint({m.id for m in second.movies})


def test_get_missing_list(db_transaction: Session):
    with pytest.raises(ListNotFoundError):
        lists_services.get_list(session=db_transaction, list_id=1)


def test_update_list(
    db_transaction: Session,
    user_factory,
    movie_list_factory,
):
    user = user_factory()
    movie_list = movie_list_factory(user_id=user.id, description="old")

    updated = lists_services.update_list(
        session=db_transaction,
        list_id=movie_list.id,
        list_update=MovieListUpdate(title="New title"),
    )

    assert updated.title == "New title"
    assert updated.description == "old"


def test_update_list_without_changes_or_list(
    db_transaction: Session,
    user_factory,
    movie_list_factory,
):
    user = user_factory()
    movie_list = movie_list_factory(user_id=user.id)

    with pytest.raises(ListNotUpdatedError):
        lists_services.update_list(
            session=db_transaction,
            list_id=movie_list.id,
            list_update=MovieListUpdate(),
        )
    with pytest.raises(ListNotUpdatedError):
        lists_services.update_list(
            session=db_transaction,
            list_id=movie_list.id + 1,
            list_update=MovieListUpdate(title="x"),
        )


def test_delete_list_cascades_entries(
    db_transaction: Session,
    movie_resolver: MovieResolver,
    user_factory,
):
    user = user_factory()
    created = lists_services.create_list(
        session=db_transaction,
        resolver=movie_resolver,
        user_id=user.id,
        title="Short lived",
        description=None,
        movie_id=550,
    )

    deleted = lists_services.delete_list(session=db_transaction, list_id=created.id)

    assert deleted.id == created.id
    assert lists_crud.get_movies_in_list(session=db_transaction, list_id=created.id) == []
    with pytest.raises(ListNotFoundError):
        lists_services.delete_list(session=db_transaction, list_id=created.id)


def test_user_lists_with_movie_status(
    db_transaction: Session,
    user_factory,
    movie_list_factory,
    movie_factory,
):
    user = user_factory()
    with_movie, without_movie = movie_list_factory.create_batch(2, user_id=user.id)
    movie = movie_factory()
    lists_crud.add_movie_to_list(
        session=db_transaction, list_id=with_movie.id, movie_id=movie.id
    )

    statuses = lists_services.get_user_lists_with_movie_status(
        session=db_transaction, user_id=user.id, movie_id=movie.id
    )
    no_movie = lists_services.get_user_lists_with_movie_status(
        session=db_transaction, user_id=user.id, movie_id=None
    )

    assert {s.id: s.has_movie for s in statuses} == {
        with_movie.id: True,
        without_movie.id: False,
    }
    assert not any(s.has_movie for s in no_movie)


def test_save_and_unsave_list(
    db_transaction: Session,
    user_factory,
    movie_list_factory,
):
    owner, reader = user_factory.create_batch(2)
    movie_list = movie_list_factory(user_id=owner.id)

    lists_services.save_list(session=db_transaction, user_id=reader.id, list_id=movie_list.id)

    assert lists_services.is_list_saved(
        session=db_transaction, user_id=reader.id, list_id=movie_list.id
    )
    with pytest.raises(ListAlreadySavedError):
        lists_services.save_list(
            session=db_transaction, user_id=reader.id, list_id=movie_list.id
        )

    lists_services.unsave_list(session=db_transaction, user_id=reader.id, list_id=movie_list.id)

    with pytest.raises(SavedListNotFoundError):
        lists_services.unsave_list(
            session=db_transaction, user_id=reader.id, list_id=movie_list.id
        )


def test_save_list_errors(
    db_transaction: Session,
    user_factory,
    movie_list_factory,
):
    owner = user_factory()
    movie_list = movie_list_factory(user_id=owner.id)

    with pytest.raises(ListNotFoundError):
        lists_services.save_list(session=db_transaction, user_id=owner.id, list_id=999)
    with pytest.raises(UserNotFoundError):
        lists_services.save_list(
            session=db_transaction, user_id=owner.id + 100, list_id=movie_list.id
        )


def test_popular_and_followed_lists(
    db_transaction: Session,
    user_factory,
    movie_list_factory,
    movie_factory,
):
    viewer, author, stranger = user_factory.create_batch(3)
    top = movie_list_factory(user_id=author.id)
    runner_up = movie_list_factory(user_id=stranger.id)
    unsaved = movie_list_factory(user_id=author.id)
    lists_crud.add_movie_to_list(
        session=db_transaction, list_id=top.id, movie_id=movie_factory().id
    )
    for user in (viewer, stranger):
        lists_crud.add_saved(session=db_transaction, user_id=user.id, list_id=top.id)
    lists_crud.add_saved(session=db_transaction, user_id=viewer.id, list_id=runner_up.id)
    follows_crud.create_follow(
        session=db_transaction, follower_id=viewer.id, followed_id=author.id
    )

    popular = lists_services.get_popular_lists(session=db_transaction)
    followed = lists_services.get_followed_lists(session=db_transaction, user_id=viewer.id)

    assert [(s.id, s.saved) for s in popular] == [
        (top.id, 2),
        (runner_up.id, 1),
        (unsaved.id, 0),
    ]
    assert popular[0].author == author.username
    assert len(popular[0].movies) == 1
    assert [s.id for s in followed] == [top.id, unsaved.id]


def test_popular_lists_are_capped_at_ten(
    db_transaction: Session,
    user_factory,
    movie_list_factory,
):
    user = user_factory()
    movie_list_factory.create_batch(12, user_id=user.id)

    assert len(lists_services.get_popular_lists(session=db_transaction)) == 10
