"""
Unit tests using FastAPI TestClient (no separate server or Redis needed).
"""

import fakeredis
import pytest
import redis
from fastapi.testclient import TestClient

from similarword.core.archive import QueryArchive
from similarword.core.config import Settings, get_settings
from similarword.core.dictionary import DictionaryStore
from similarword.core.synonyms import SynonymResolver
from similarword.core.translate import Translator
from similarword.server.deps import get_archive, get_dictionary, get_resolver
from similarword.server.main import app


CORPUS = [
    "cat n.a small domesticated feline",
    "bat n.a flying mammal",
    "happy adj.feeling joy; content",
    "glad adj.content; pleased",
]


class BrokenRedis(fakeredis.FakeRedis):
    def set(self, *args, **kwargs):
        raise redis.ConnectionError("redis went away")


class TableTranslator(Translator):
    def __init__(self, table):
        self.table = table

    def translate(self, word):
        return self.table.get(word)


@pytest.fixture
def store():
    return DictionaryStore.from_lines(CORPUS)


@pytest.fixture
def archive():
    return QueryArchive(fakeredis.FakeRedis(server=fakeredis.FakeServer()), key="testapi:archive")


@pytest.fixture
def client(store, archive):
    resolver = SynonymResolver(store, TableTranslator({"glad": "高兴的"}), timeout=5)

    app.dependency_overrides[get_dictionary] = lambda: store
    app.dependency_overrides[get_archive] = lambda: archive
    app.dependency_overrides[get_resolver] = lambda: resolver
    app.dependency_overrides[get_settings] = lambda: Settings(SIMILARITY_THRESHOLD=0.6)
    yield TestClient(app)

    app.dependency_overrides.clear()
    resolver.close()


class TestWordsUnit:
    def test_root(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert r.json()["name"] == "similarword API"

    def test_get_word(self, client):
        r = client.get("/api/words/CAT")
        assert r.status_code == 200
        assert r.json()["meaning_native"] == "a small domesticated feline"

    def test_get_word_not_found(self, client):
        r = client.get("/api/words/dog")
        assert r.status_code == 404

    def test_similar_default_threshold(self, client):
        r = client.get("/api/similar", params={"q": "cat"})
        assert r.status_code == 200
        data = r.json()
        assert data["threshold"] == 0.6
        assert [e["word"] for e in data["results"]] == ["cat", "bat"]

    def test_similar_strict_threshold(self, client):
        r = client.get("/api/similar", params={"q": "cat", "threshold": 1.0})
        assert [e["word"] for e in r.json()["results"]] == ["cat"]

    def test_similar_threshold_out_of_range(self, client):
        r = client.get("/api/similar", params={"q": "cat", "threshold": 0.3})
        assert r.status_code == 422

    def test_synonyms(self, client):
        r = client.get("/api/synonyms", params={"q": "happy"})
        assert r.status_code == 200
        results = r.json()["results"]
        assert [e["word"] for e in results] == ["happy", "glad"]
        assert results[0]["meaning_external"] is None
        assert results[1]["meaning_external"] == "高兴的"

    def test_synonyms_unknown_word(self, client):
        r = client.get("/api/synonyms", params={"q": "ecstatic"})
        assert r.status_code == 200
        assert r.json()["results"] == []


class TestArchiveUnit:
    def save(self, client, word="cat", kind="similar"):
        results = client.get("/api/similar", params={"q": word}).json()["results"]
        return client.post("/api/archive", json={"word": word, "kind": kind, "results": results})

    def test_save_and_get(self, client):
        r = self.save(client)
        assert r.status_code == 200
        data = r.json()
        assert data["saved"] is True
        assert data["label"] == "cat-similar"

        r = client.get(f"/api/archive/{data['id']}")
        assert r.status_code == 200
        record = r.json()
        assert record["kind"] == "similar"
        assert record["original"]["word"] == "cat"
        assert [e["word"] for e in record["results"]] == ["cat", "bat"]

    def test_duplicate_save(self, client):
        first = self.save(client).json()
        second = self.save(client, word="CAT").json()

        assert second["saved"] is False
        assert second["id"] == first["id"]

    def test_list_sorted_by_label(self, client):
        self.save(client, word="cat")
        self.save(client, word="bat")
        r = client.get("/api/archive", params={"sort": "label"})
        assert [rec["label"] for rec in r.json()["records"]] == ["bat-similar", "cat-similar"]

    def test_bad_sort(self, client):
        r = client.get("/api/archive", params={"sort": "random"})
        assert r.status_code == 422

    def test_delete(self, client):
        record_id = self.save(client).json()["id"]

        r = client.delete(f"/api/archive/{record_id}")
        assert r.status_code == 200
        assert client.get(f"/api/archive/{record_id}").status_code == 404

        # deleting again is fine
        assert client.delete(f"/api/archive/{record_id}").status_code == 200

    def test_get_missing(self, client):
        assert client.get("/api/archive/nonexistent123").status_code == 404

    def test_save_write_failure(self, client):
        broken = QueryArchive(BrokenRedis(server=fakeredis.FakeServer()), key="testapi:archive")
        app.dependency_overrides[get_archive] = lambda: broken

        r = self.save(client)
        assert r.status_code == 503
        assert client.get("/api/archive").json()["records"] == []

    def test_delete_write_failure(self, client):
        server = fakeredis.FakeServer()
        healthy = QueryArchive(fakeredis.FakeRedis(server=server), key="testapi:archive")
        app.dependency_overrides[get_archive] = lambda: healthy
        record_id = self.save(client).json()["id"]

        broken = QueryArchive(BrokenRedis(server=server), key="testapi:archive")
        app.dependency_overrides[get_archive] = lambda: broken

        assert client.delete(f"/api/archive/{record_id}").status_code == 503
        assert client.get(f"/api/archive/{record_id}").status_code == 200
