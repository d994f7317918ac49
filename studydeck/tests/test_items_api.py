from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine, select

from studydeck.api.dependencies import get_session
from studydeck.db.schemas import ItemProgress, StudyItem
from studydeck.main import app

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator[TestClient, None, None]:
    def override_get_session() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = override_get_session
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


def _create_item(client: TestClient, slug: str, term: str, headers=ALICE) -> dict:
    resp = client.post(
        f"/subjects/{slug}/items",
        json={"term": term, "definition": f"meaning of {term}"},
        headers=headers,
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture(name="subject_slug")
def subject_fixture(client: TestClient) -> str:
    resp = client.post("/subjects", json={"name": "French Words"}, headers=ALICE)
    assert resp.status_code == 201
    return resp.json()["slug"]


def test_create_item_starts_with_empty_progress(client: TestClient, session: Session, subject_slug: str) -> None:
    resp = client.post(
        f"/subjects/{subject_slug}/items",
        json={"term": "chat", "definition": "cat", "question": "  ", "choices": []},
        headers=ALICE,
    )
    assert resp.status_code == 201
    item = resp.json()
    assert item["term"] == "chat"
    assert item["question"] is None
    assert item["choices"] == []
    assert item["answer_index"] is None
    assert item["progress"] == {
        "last_seen": None,
        "last_result": None,
        "times_seen": 0,
        "easy_count": 0,
        "medium_count": 0,
        "hard_count": 0,
        "next_due": None,
    }
    rows = session.exec(select(ItemProgress)).all()
    assert len(rows) == 1
    assert rows[0].user_id == "alice"
    assert rows[0].item_id == item["id"]


def test_choices_are_trimmed_and_single_choice_dropped(client: TestClient, subject_slug: str) -> None:
    resp = client.post(
        f"/subjects/{subject_slug}/items",
        json={"term": "chien", "definition": "dog", "choices": [" dog ", "cat"], "answer_index": 0},
        headers=ALICE,
    )
    assert resp.status_code == 201
    assert resp.json()["choices"] == ["dog", "cat"]
    assert resp.json()["answer_index"] == 0

    resp = client.post(
        f"/subjects/{subject_slug}/items",
        json={"term": "oiseau", "definition": "bird", "choices": ["bird"], "answer_index": 0},
        headers=ALICE,
    )
    assert resp.status_code == 201
    assert resp.json()["choices"] == []
    assert resp.json()["answer_index"] is None


@pytest.mark.parametrize(
    "payload",
    [
        {"term": "", "definition": "x"},
        {"term": "x", "definition": ""},
        {"term": "x" * 201, "definition": "x"},
        {"term": "x", "definition": "x" * 1001},
        {"term": "x", "definition": "x", "question": "q" * 401},
        {"term": "x", "definition": "x", "choices": ["a", "   "]},
        {"term": "x", "definition": "x", "choices": ["c"] * 11},
        {"term": "x", "definition": "x", "choices": ["a", "b"], "answer_index": 2},
        {"term": "x", "definition": "x", "choices": ["a", "b"], "answer_index": -1},
    ],
)
def test_invalid_items_are_rejected(client: TestClient, subject_slug: str, payload: dict) -> None:
    resp = client.post(f"/subjects/{subject_slug}/items", json=payload, headers=ALICE)
    assert resp.status_code == 422


def test_create_item_requires_owned_subject(client: TestClient, subject_slug: str) -> None:
    resp = client.post(
        f"/subjects/{subject_slug}/items",
        json={"term": "chat", "definition": "cat"},
        headers=BOB,
    )
    assert resp.status_code == 404


def test_update_item_keeps_progress(client: TestClient, subject_slug: str) -> None:
    item = _create_item(client, subject_slug, "maison")
    client.post(
        "/progress",
        json={"item_id": item["id"], "stats_patch": {"times_seen": 1, "medium_count": 1, "last_result": "medium"}},
        headers=ALICE,
    )
    resp = client.put(
        f"/subjects/{subject_slug}/items/{item['id']}",
        json={"term": "maison", "definition": "house", "choices": ["house", "mouse"], "answer_index": 0},
        headers=ALICE,
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["definition"] == "house"
    assert updated["choices"] == ["house", "mouse"]
    assert updated["progress"]["times_seen"] == 1
    assert updated["progress"]["last_result"] == "medium"


def test_update_item_in_other_subject_is_not_found(client: TestClient, subject_slug: str) -> None:
    item = _create_item(client, subject_slug, "maison")
    client.post("/subjects", json={"name": "Other"}, headers=ALICE)
    resp = client.put(
        f"/subjects/other/items/{item['id']}",
        json={"term": "maison", "definition": "house"},
        headers=ALICE,
    )
    assert resp.status_code == 404
    missing = client.put(
        f"/subjects/{subject_slug}/items/999",
        json={"term": "maison", "definition": "house"},
        headers=ALICE,
    )
    assert missing.status_code == 404


def test_delete_item_removes_progress(client: TestClient, session: Session, subject_slug: str) -> None:
    keep = _create_item(client, subject_slug, "pain")
    gone = _create_item(client, subject_slug, "lait")
    resp = client.delete(f"/subjects/{subject_slug}/items/{gone['id']}", headers=ALICE)
    assert resp.status_code == 204
    assert client.delete(f"/subjects/{subject_slug}/items/{gone['id']}", headers=ALICE).status_code == 404

    assert [row.id for row in session.exec(select(StudyItem)).all()] == [keep["id"]]
    assert [row.item_id for row in session.exec(select(ItemProgress)).all()] == [keep["id"]]
