"""Shared fixtures: an in-memory MeiliSearch served through httpx.MockTransport."""
import json

import httpx
import pytest

from meilimelo import MeiliMelo


class FakeMeili:
    """Echoes stored documents back; records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.documents: dict[str, dict[str, dict]] = {}
        self.indexes: list[dict] = []
        self.search_response: dict | None = None
        self.next_update_id = 0

    def _update(self) -> httpx.Response:
        self.next_update_id += 1
        return httpx.Response(202, json={"updateId": self.next_update_id})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")
        method = request.method

        if parts == ["indexes"]:
            if method == "GET":
                return httpx.Response(200, json=self.indexes)
            body = json.loads(request.content)
            index = {
                "uid": body["uid"],
                "name": body["name"],
                "primaryKey": body.get("primaryKey"),
                "createdAt": "2020-05-02T10:00:00.000000Z",
                "updatedAt": "2020-05-02T10:00:00.000000Z",
            }
            self.indexes.append(index)
            return httpx.Response(201, json=index)

        if len(parts) == 2:
            if method == "DELETE":
                self.indexes = [i for i in self.indexes if i["uid"] != parts[1]]
                return httpx.Response(204)
            for index in self.indexes:
                if index["uid"] == parts[1]:
                    return httpx.Response(200, json=index)
            return httpx.Response(404, json={"message": f"Index {parts[1]} not found"})

        index = parts[1]
        if parts[2:] == ["search"]:
            return httpx.Response(200, json=self.search_response or {"hits": [], "nbHits": 0})

        docs = self.documents.setdefault(index, {})
        if parts[2:] == ["documents"]:
            if method == "POST":
                for doc in json.loads(request.content):
                    docs[str(doc["id"])] = doc
                return self._update()
            limit = int(request.url.params.get("limit", 20))
            offset = int(request.url.params.get("offset", 0))
            return httpx.Response(200, json=list(docs.values())[offset : offset + limit])

        uid = parts[3]
        if method == "DELETE":
            docs.pop(uid, None)
            return self._update()
        if uid not in docs:
            return httpx.Response(
                404,
                json={
                    "message": f"Document {uid} not found",
                    "errorCode": "document_not_found",
                    "errorType": "invalid_request_error",
                    "errorLink": "https://docs.meilisearch.com/errors#document_not_found",
                },
            )
        return httpx.Response(200, json=docs[uid])

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_meili() -> FakeMeili:
    return FakeMeili()


@pytest.fixture
def meili(fake_meili: FakeMeili) -> MeiliMelo:
    return MeiliMelo(
        "http://meilisearch.test:7700",
        transport=httpx.MockTransport(fake_meili.handler),
    )


@pytest.fixture
def status_client():
    """Factory for a client whose every call gets the same canned response."""

    def make(status_code: int, body: dict | None = None) -> MeiliMelo:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=body if body is not None else {})

        return MeiliMelo("http://meilisearch.test:7700", transport=httpx.MockTransport(handler))

    return make
