import asyncio

from app.apis.deps import get_repository
from app.core.blob_store import BlobStoreError, MemoryBlobStore
from app.core.config import settings
from app.modules.conjugation.models import GENERATION_FAILED_TITLE, Question
from app.modules.conjugation.repository import QuestionSetRepository
from main import app
from tests.conftest import make_item

V = settings.app.version
QUESTION = f"/{V}/question"


def _seed(repository, title, owner, items=None):
    questions = [Question.model_validate(i) for i in (items or [make_item()])]
    return asyncio.run(repository.create_set(title, questions, owner))


def test_root(client):
    assert client.get("/").json()["status"] == "ok"


def test_base_questions(client):
    r = client.get(QUESTION)
    assert r.status_code == 200
    data = r.json()
    assert len(data) > 0
    assert set(data[0]) == {"es", "en", "fr", "answer", "tense", "inf"}
    assert all(q["es"].count("__") == 1 for q in data)


def test_list_is_filtered_by_username(client, repository):
    a = _seed(repository, "A", "alice")
    _seed(repository, "B", "bob")

    r = client.get(QUESTION, params={"list": "true", "username": "alice"})
    assert r.status_code == 200
    assert r.json() == {"sets": [{"id": a.id, "title": "A", "owner_username": "alice"}]}

    r = client.get(QUESTION, params={"list": "true"})
    assert [s["title"] for s in r.json()["sets"]] == ["A", "B"]


def test_fetch_set_respects_owner(client, repository):
    qs = _seed(repository, "Mine", "alice")

    r = client.get(QUESTION, params={"id": qs.id, "username": "alice"})
    assert r.status_code == 200
    body = r.json()
    assert isinstance(body, list)
    assert body[0]["answer"] == "hablo"
    assert set(body[0]) == {"es", "en", "fr", "answer", "tense", "inf"}

    r = client.get(QUESTION, params={"id": qs.id, "username": "bob"})
    assert r.status_code == 404
    assert r.json() is None

    assert client.get(QUESTION, params={"id": qs.id}).status_code == 200


def test_fetch_missing_set(client):
    r = client.get(QUESTION, params={"id": "nonexistent-id"})
    assert r.status_code == 404
    assert r.json() is None


def test_generate_requires_username(client, generator):
    r = client.get(QUESTION, params={"generate": "true", "count": 2})
    assert r.status_code == 400
    assert generator.prompts == []


def test_generate_persists_set(client, generator):
    r = client.get(
        QUESTION,
        params={"generate": "true", "count": 2, "tenses": "pres,pret", "title": "Práctica", "username": "alice"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["title"] == "Práctica"
    assert [q["answer"] for q in body["questions"]] == ["hablo", "hablas"]
    assert "spread across the pres,pret tenses" in generator.prompts[0]

    listed = client.get(QUESTION, params={"list": "true", "username": "alice"}).json()
    assert [s["id"] for s in listed["sets"]] == [body["id"]]


def test_generate_default_title(client):
    r = client.get(QUESTION, params={"generate": "true", "count": 2, "username": "alice"})
    assert r.json()["title"] == "2 preguntas"


def test_generate_failure_is_a_titled_empty_set(client, generator, store):
    generator.outputs = ["not json"]
    r = client.get(QUESTION, params={"generate": "true", "username": "alice"})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is False
    assert body["failure"] == "malformed_output"
    assert body["title"] == GENERATION_FAILED_TITLE
    assert body["questions"] == []
    assert asyncio.run(store.list_paths()) == []


def test_generate_rejects_unknown_tenses(client, generator):
    r = client.get(QUESTION, params={"generate": "true", "tenses": "pres,aorist", "username": "alice"})
    assert r.status_code == 400
    assert "aorist" in r.json()["detail"]
    assert generator.prompts == []


def test_generate_count_bounds(client):
    params = {"generate": "true", "username": "alice"}
    assert client.get(QUESTION, params={**params, "count": 0}).status_code == 422
    too_many = settings.generation.max_question_count + 1
    assert client.get(QUESTION, params={**params, "count": too_many}).status_code == 422


def test_delete_requires_params(client):
    assert client.delete(QUESTION, params={"id": "abc"}).status_code == 400
    assert client.delete(QUESTION, params={"username": "alice"}).status_code == 400


def test_delete_not_owned_is_404(client, repository):
    qs = _seed(repository, "Mine", "alice")
    r = client.delete(QUESTION, params={"id": qs.id, "username": "bob"})
    assert r.status_code == 404
    assert client.get(QUESTION, params={"id": qs.id, "username": "alice"}).status_code == 200


def test_delete_owned_set(client, repository):
    qs = _seed(repository, "Practice 1", "alice")
    r = client.delete(QUESTION, params={"id": qs.id, "username": "alice"})
    assert r.status_code == 200
    assert r.json() == {"ok": True, "id": qs.id}

    listed = client.get(QUESTION, params={"list": "true", "username": "alice"}).json()
    assert listed["sets"] == []
    assert client.get(QUESTION, params={"id": qs.id, "username": "alice"}).status_code == 404


class ExplodingStore(MemoryBlobStore):
    async def head(self, path):
        raise BlobStoreError("backend unavailable")


def test_store_failure_is_500(client):
    app.dependency_overrides[get_repository] = lambda: QuestionSetRepository(ExplodingStore())
    r = client.get(QUESTION, params={"list": "true"})
    assert r.status_code == 500
    assert r.json() == {"detail": "Storage failure"}


def test_tenses(client):
    r = client.get(f"/{V}/tense")
    assert r.status_code == 200
    data = r.json()
    assert [t["id"] for t in data][:3] == ["pres", "pret", "imp"]
    assert len(data) == 13
    assert data[5]["endings"]["ar"][0] == "he -ado"


def test_login(client):
    url = f"/{V}/login"
    password = settings.auth.shared_password
    r = client.post(url, json={"username": "  alice ", "password": password})
    assert r.status_code == 200
    assert r.json() == {"username": "alice"}

    assert client.post(url, json={"username": "alice", "password": password + "x"}).status_code == 401
    assert client.post(url, json={"username": "  ", "password": password}).status_code == 400
