from fastapi.testclient import TestClient
from sqlmodel import Session

from cinelog.core.config import settings

LISTS_URL = f"{settings.API_V1_STR}/lists"


def test_list_lifecycle(
    client: TestClient,
    db_transaction: Session,
    user_factory,
) -> None:
    owner, reader = user_factory.create_batch(2)
    db_transaction.commit()

    created = client.post(
        f"{LISTS_URL}/",
        json={"user_id": owner.id, "title": "Fincher", "movie_id": 550},
    )
    list_id = created.json()["id"]
    saved = client.post(f"{LISTS_URL}/saved", json={"user_id": reader.id, "list_id": list_id})
    renamed = client.patch(f"{LISTS_URL}/{list_id}", json={"title": "David Fincher"})
    detail = client.get(f"{LISTS_URL}/{list_id}")
    popular = client.get(f"{LISTS_URL}/popular")
    deleted = client.delete(f"{LISTS_URL}/{list_id}")
    missing = client.get(f"{LISTS_URL}/{list_id}")

    assert created.status_code == 200
    assert saved.status_code == 200
    assert renamed.json()["title"] == "David Fincher"
    body = detail.json()
    assert body["author"] == owner.username
    assert body["saved"] == 1
    assert [movie["id"] for movie in body["movies"]] == [550]
    assert body["total_results"] == 1
    assert [summary["id"] for summary in popular.json()] == [list_id]
    assert deleted.status_code == 200
    assert missing.status_code == 404


def test_empty_update_is_not_found(
    client: TestClient,
    db_transaction: Session,
    user_factory,
    movie_list_factory,
) -> None:
    user = user_factory()
    movie_list = movie_list_factory(user_id=user.id)
    db_transaction.commit()

    r = client.patch(f"{LISTS_URL}/{movie_list.id}", json={})

    assert r.status_code == 404


def test_add_movie_to_list(
    client: TestClient,
    db_transaction: Session,
    user_factory,
    movie_list_factory,
) -> None:
    user = user_factory()
    movie_list = movie_list_factory(user_id=user.id)
    db_transaction.commit()
    payload = {"list_id": movie_list.id, "movie_id": 550}

    added = client.post(f"{LISTS_URL}/movie", json=payload)
    duplicate = client.post(f"{LISTS_URL}/movie", json=payload)
    statuses = client.get(f"{LISTS_URL}/user/{user.id}", params={"movie_id": 550})
    removed = client.delete(f"{LISTS_URL}/movie", params=payload)

    assert added.status_code == 200
    assert duplicate.status_code == 400
    assert [status["has_movie"] for status in statuses.json()] == [True]
    assert removed.status_code == 200
