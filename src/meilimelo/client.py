"""HTTP client for a MeiliSearch instance."""
from typing import Any, Iterable, TypeVar
from urllib.parse import quote

import httpx

from meilimelo.config import MeiliSettings
from meilimelo.http_client import create_http_client, send_request
from meilimelo.schema import dump_document, load_document, load_documents, validate_payload
from meilimelo.schemas import IndexDescriptor, Update
from meilimelo.search import Query

T = TypeVar("T")


class MeiliMelo:
    """Descriptor to a MeiliSearch instance.

    Configuration is fixed at construction; :meth:`with_secret_key` returns a
    new descriptor. Every coroutine method performs exactly one HTTP call
    through a short-lived ``httpx.AsyncClient`` and never retries.

    Args:
        host: scheme, hostname and port of the instance.
        secret_key: key sent with every request, if any.
        timeout: per-request timeout in seconds.
        transport: custom httpx transport (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        host: str,
        secret_key: str | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._host = host.rstrip("/")
        self._secret_key = secret_key
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: MeiliSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "MeiliMelo":
        settings = settings or MeiliSettings()
        return cls(
            settings.host,
            settings.secret_key,
            timeout=settings.timeout,
            transport=transport,
        )

    @property
    def host(self) -> str:
        return self._host

    @property
    def authenticated(self) -> bool:
        return self._secret_key is not None

    def __repr__(self) -> str:
        return f"MeiliMelo(host={self._host!r}, authenticated={self.authenticated})"

    def with_secret_key(self, key: str) -> "MeiliMelo":
        """Return a copy that authenticates with ``key``.

        Example::

            meili = MeiliMelo("https://meilisearch.example.com:7700").with_secret_key("abcdef")
        """
        return MeiliMelo(self._host, key, timeout=self._timeout, transport=self._transport)

    def _headers(self) -> dict[str, str]:
        if self._secret_key is None:
            return {}
        return {
            "X-Meili-API-Key": self._secret_key,
            "Authorization": f"Bearer {self._secret_key}",
        }

    @staticmethod
    def _index_path(index: str, *parts: str | int) -> str:
        segments = ["indexes", quote(index, safe="")]
        segments.extend(quote(str(p), safe="") for p in parts)
        return "/" + "/".join(segments)

    async def _call(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        async with create_http_client(
            self._host,
            timeout=self._timeout,
            headers=self._headers(),
            transport=self._transport,
        ) as client:
            return await send_request(client, method, path, json=json, params=params)

    def search(self, index: str) -> Query:
        """Start a search query on ``index``. No request is made until ``run``."""
        return Query(self, index)

    async def indices(self) -> list[IndexDescriptor]:
        """List all indices, in the order returned by the instance."""
        data = await self._call("GET", "/indexes")
        if isinstance(data, dict) and "results" in data:
            data = data["results"]
        return validate_payload(list[IndexDescriptor], data)

    async def get_index(self, uid: str) -> IndexDescriptor:
        data = await self._call("GET", self._index_path(uid))
        return validate_payload(IndexDescriptor, data)

    async def create_index(
        self, uid: str, name: str, primary_key: str | None = None
    ) -> IndexDescriptor:
        """Create index ``uid`` with human-readable ``name``."""
        payload: dict[str, Any] = {"uid": uid, "name": name}
        if primary_key is not None:
            payload["primaryKey"] = primary_key
        data = await self._call("POST", "/indexes", json=payload)
        return validate_payload(IndexDescriptor, data)

    async def delete_index(self, uid: str) -> None:
        await self._call("DELETE", self._index_path(uid))

    async def insert(self, index: str, documents: Iterable[Any]) -> Update:
        """Index a batch of documents in a single request.

        The instance's response is returned as-is; whether the batch is
        applied fully or partially is up to the instance.
        """
        payload = [dump_document(doc) for doc in documents]
        data = await self._call("POST", self._index_path(index, "documents"), json=payload)
        return validate_payload(Update, data or {})

    async def list_documents(
        self,
        index: str,
        model: type[T] = dict,  # type: ignore[assignment]
        *,
        limit: int = 20,
        offset: int = 0,
    ) -> list[T]:
        data = await self._call(
            "GET",
            self._index_path(index, "documents"),
            params={"limit": limit, "offset": offset},
        )
        if isinstance(data, dict) and "results" in data:
            data = data["results"]
        return load_documents(model, data)

    async def get_document(self, index: str, uid: str | int, model: type[T] = dict) -> T:  # type: ignore[assignment]
        """Fetch one document by primary key; raises NotFound if absent."""
        data = await self._call("GET", self._index_path(index, "documents", uid))
        return load_document(model, data)

    async def delete_document(self, index: str, uid: str | int) -> Update:
        data = await self._call("DELETE", self._index_path(index, "documents", uid))
        return validate_payload(Update, data or {})
