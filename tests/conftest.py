"""Shared fakes for the asyncpg pool, the Chroma client and provider APIs."""

import json
from contextlib import asynccontextmanager

import httpx
import pytest


class FakeStatement:
    def __init__(self, rows, status):
        self.rows = rows
        self.status = status
        self.args = None

    async def fetch(self, *args):
        self.args = args
        return self.rows

    def get_statusmsg(self):
        return self.status


class FakeConnection:
    def __init__(self):
        self.executed = []
        self.prepared = []
        self.fetched = []
        self.statement = FakeStatement([], "SELECT 0")
        self.fetch_rows = []
        self.fail_execute = None

    async def execute(self, query, *args):
        if self.fail_execute is not None:
            raise self.fail_execute
        self.executed.append(query)
        return "SELECT 1"

    async def prepare(self, query):
        self.prepared.append(query)
        return self.statement

    async def fetch(self, query, *args):
        self.fetched.append((query, args))
        return self.fetch_rows


class FakePool:
    def __init__(self):
        self.conn = FakeConnection()
        self.closed = False

    @asynccontextmanager
    async def acquire(self):
        yield self.conn

    async def close(self):
        self.closed = True


class FakePoolFactory:
    """Stands in for asyncpg.create_pool; hands out a new FakePool per call."""

    def __init__(self):
        self.calls = []
        self.pools = []

    async def __call__(self, **kwargs):
        self.calls.append(kwargs)
        pool = FakePool()
        self.pools.append(pool)
        return pool


class FakeCollection:
    def __init__(self, name, metadata=None, embedding_function=None):
        self.name = name
        self.metadata = metadata
        self.embedding_function = embedding_function
        self.documents = {}

    def add(self, documents, ids, metadatas=None):
        for i, doc_id in enumerate(ids):
            self.documents[doc_id] = (documents[i], metadatas[i] if metadatas else None)

    def query(self, query_texts, n_results, where=None):
        self.last_query = {"query_texts": query_texts, "n_results": n_results, "where": where}
        ids = list(self.documents)[:n_results]
        return {
            "ids": [ids for _ in query_texts],
            "documents": [[self.documents[i][0] for i in ids] for _ in query_texts],
            "metadatas": [[self.documents[i][1] for i in ids] for _ in query_texts],
            "distances": [[0.0 for _ in ids] for _ in query_texts],
            "embeddings": None,
        }

    def delete(self, ids):
        for doc_id in ids:
            self.documents.pop(doc_id, None)


class FakeChromaClient:
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.collections = {}
        self.heartbeats = 0

    def heartbeat(self):
        self.heartbeats += 1
        return 1

    def get_or_create_collection(self, name, metadata=None, embedding_function=None):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name, metadata, embedding_function)
        return self.collections[name]

    def list_collections(self):
        return list(self.collections.values())


class FakeChromaFactory:
    """Stands in for chromadb.HttpClient."""

    def __init__(self):
        self.clients = []

    def __call__(self, **kwargs):
        client = FakeChromaClient(**kwargs)
        self.clients.append(client)
        return client


class ProviderAPI:
    """httpx.MockTransport handler recording requests and replaying canned JSON by path."""

    def __init__(self, responses):
        self.responses = responses
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        body = self.responses.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, json=body)

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)

    def client(self):
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


class FakeLocalModel:
    def __init__(self, model_name, device=None):
        self.model_name = model_name
        self.device = device

    def embed(self, texts):
        return [[float(len(text)), 1.0] for text in texts]


@pytest.fixture
def pool_factory():
    return FakePoolFactory()


@pytest.fixture
def chroma_factory():
    return FakeChromaFactory()


@pytest.fixture
def provider_api():
    def make(responses):
        return ProviderAPI(responses)
    return make


@pytest.fixture
def local_model_factory():
    return FakeLocalModel
