import copy

import pytest
from fastapi.testclient import TestClient
from firebase_admin import firestore
from google.api_core.exceptions import NotFound, ServiceUnavailable

from lotus.config import Settings, get_settings
from lotus.firebase_client import get_db
from lotus.main import app

ADMIN_KEY = "test-admin-key"


class FakeSnapshot:
    def __init__(self, ref, data):
        self.reference = ref
        self.id = ref.id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data)


class FakeDocumentRef:
    def __init__(self, collection, doc_id):
        self._collection = collection
        self.id = doc_id

    def _check(self, op):
        self._collection.db.check(self._collection.name, op)

    def get(self):
        self._check("get")
        return FakeSnapshot(self, self._collection.docs.get(self.id))

    def set(self, data):
        self._check("set")
        self._collection.docs[self.id] = copy.deepcopy(data)

    def update(self, data):
        self._check("update")
        if self.id not in self._collection.docs:
            raise NotFound(f"No document to update: {self.id}")
        doc = self._collection.docs[self.id]
        for key, value in data.items():
            if isinstance(value, firestore.Increment):
                doc[key] = doc.get(key, 0) + value.value
            else:
                doc[key] = copy.deepcopy(value)

    def delete(self):
        self._check("delete")
        self._collection.docs.pop(self.id, None)


class FakeQuery:
    def __init__(self, collection, filters=(), order=None):
        self._collection = collection
        self._filters = list(filters)
        self._order = order

    def where(self, filter):
        return FakeQuery(self._collection, self._filters + [filter], self._order)

    def order_by(self, field, direction="ASCENDING"):
        return FakeQuery(self._collection, self._filters, (field, direction))

    def stream(self):
        self._collection.db.check(self._collection.name, "stream")
        snaps = []
        for doc_id, data in list(self._collection.docs.items()):
            if all(f.op_string == "==" and data.get(f.field_path) == f.value for f in self._filters):
                snaps.append(FakeSnapshot(FakeDocumentRef(self._collection, doc_id), data))
        if self._order:
            field, direction = self._order
            snaps.sort(key=lambda s: s._data.get(field), reverse=direction == "DESCENDING")
        return iter(snaps)


class FakeCollection(FakeQuery):
    def __init__(self, db, name):
        super().__init__(self)
        self.db = db
        self.name = name
        self.docs = {}

    def document(self, doc_id):
        return FakeDocumentRef(self, doc_id)

    def add(self, data):
        self.db.check(self.name, "add")
        ref = FakeDocumentRef(self, f"{self.name}-{len(self.docs) + 1}")
        ref.set(data)
        return None, ref


class FakeFirestore:
    """In-memory stand-in for the Firestore client used by the workflow modules."""

    def __init__(self):
        self.collections = {}
        self.failures = set()

    def collection(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(self, name)
        return self.collections[name]

    def fail(self, collection, op):
        self.failures.add((collection, op))

    def check(self, collection, op):
        if (collection, op) in self.failures:
            raise ServiceUnavailable(f"{collection}.{op} unavailable")

    def docs(self, name):
        return self.collection(name).docs


@pytest.fixture()
def fake_db():
    return FakeFirestore()


@pytest.fixture()
def settings():
    return Settings(admin_key=ADMIN_KEY, session_secret="test-session-secret")


@pytest.fixture()
def client(fake_db, settings):
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def admin_client(client):
    res = client.post("/admin/session", json={"accessKey": ADMIN_KEY})
    assert res.status_code == 200
    return client


def submission(**overrides):
    data = {
        "title": "Haunted Attic",
        "description": "Strange noises above the bedroom at night.",
        "videoUrl": "https://www.youtube.com/watch?v=abc123XYZ",
        "category": "medium",
        "duration": "12:30",
        "quizQuestions": [
            {
                "question": "What was heard in the attic?",
                "options": ["Footsteps", "Music", "Nothing"],
                "correctAnswer": 0,
                "explanation": "Footsteps were recorded at 3am.",
            },
            {
                "question": "When did it happen?",
                "options": ["Noon", "Night"],
                "correctAnswer": 1,
            },
        ],
    }
    data.update(overrides)
    return data


@pytest.fixture()
def make_submission():
    return submission
