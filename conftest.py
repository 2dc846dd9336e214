import asyncio
import copy
from types import SimpleNamespace

import pytest
from bson import ObjectId


def _matches(doc, query):
    for key, expected in (query or {}).items():
        if isinstance(expected, dict) and "$in" in expected:
            if doc.get(key) not in expected["$in"]:
                return False
        elif isinstance(expected, dict) and "$exists" in expected:
            if (key in doc) != bool(expected["$exists"]):
                return False
        elif doc.get(key) != expected:
            return False
    return True


def _project(doc, projection):
    doc = copy.deepcopy(doc)
    for key, include in (projection or {}).items():
        if not include:
            doc.pop(key, None)
    return doc


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction=1):
        self._docs.sort(key=lambda d: (d.get(key) is None, d.get(key)), reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return [copy.deepcopy(d) for d in self._docs[:length]]


class FakeCollection:
    """The subset of the Motor collection API the stores use."""

    def __init__(self, name):
        self.name = name
        self.docs = []
        self.indexes = []

    def _apply(self, doc, update, inserting):
        """Apply $set/$setOnInsert/$unset in place; True if the doc changed."""
        before = copy.deepcopy(doc)
        for key, value in update.get("$set", {}).items():
            doc[key] = copy.deepcopy(value)
        if inserting:
            for key, value in update.get("$setOnInsert", {}).items():
                doc[key] = copy.deepcopy(value)
        for key in update.get("$unset", {}):
            doc.pop(key, None)
        return doc != before

    async def create_index(self, keys, **kwargs):
        self.indexes.append((keys, kwargs))
        return str(keys)

    async def insert_one(self, doc):
        doc = copy.deepcopy(doc)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one(self, query=None, projection=None):
        for doc in self.docs:
            if _matches(doc, query):
                return _project(doc, projection)
        return None

    def find(self, query=None, projection=None):
        return FakeCursor([_project(d, projection) for d in self.docs if _matches(d, query)])

    async def update_one(self, query, update, upsert=False):
        for doc in self.docs:
            if _matches(doc, query):
                self._apply(doc, update, inserting=False)
                return SimpleNamespace(matched_count=1, modified_count=1, upserted_id=None)
        if not upsert:
            return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)
        doc = {k: v for k, v in query.items() if not isinstance(v, dict)}
        doc["_id"] = ObjectId()
        self._apply(doc, update, inserting=True)
        self.docs.append(doc)
        return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=doc["_id"])

    async def update_many(self, query, update):
        count = 0
        for doc in self.docs:
            if _matches(doc, query):
                if self._apply(doc, update, inserting=False):
                    count += 1
        return SimpleNamespace(matched_count=count, modified_count=count)

    async def find_one_and_update(self, query, update, return_document=None):
        for doc in self.docs:
            if _matches(doc, query):
                self._apply(doc, update, inserting=False)
                return copy.deepcopy(doc)
        return None

    async def delete_one(self, query):
        for index, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def count_documents(self, query):
        return sum(1 for d in self.docs if _matches(d, query))


class FakeDatabase:
    def __init__(self):
        self._collections = {}

    def __getitem__(self, name):
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def add_teacher(db):
    """Insert a teacher document and return its id as a string."""
    def _add(teaching=(), email="teacher@school.test", name="Test Teacher", **extra):
        doc = {
            "_id": ObjectId(),
            "name": name,
            "email": email,
            "password": "secret",
            "teaching": [
                {"class": c, "section": s, "subject": sub} for c, s, sub in teaching
            ],
            **extra
        }
        db.teachers.docs.append(doc)
        return str(doc["_id"])
    return _add
