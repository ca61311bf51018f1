import json

import httpx
import pytest

from adl_store.config import StoreOptions
from adl_store.http_client import StoreClient


class FakeStore:
    """In-memory WebHDFS endpoint served through httpx.MockTransport."""

    def __init__(self):
        self.files = {}
        self.requests = []
        self.failures = []

    def fail_next(self, status, exception=None, message=None):
        self.failures.append((status, exception, message))

    def _error(self, status, exception, message):
        body = {"RemoteException": {"exception": exception, "message": message}} if exception else {}
        return httpx.Response(status, json=body, headers={"x-ms-request-id": "srv-1"})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.failures:
            return self._error(*self.failures.pop(0))
        path = request.url.path[len("/webhdfs/v1"):]
        op = request.url.params["op"]
        if op == "GETFILESTATUS":
            if path not in self.files:
                return self._error(404, "FileNotFoundException", f"{path} not found")
            data = self.files[path]
            return httpx.Response(200, json={"FileStatus": {"length": len(data), "type": "FILE", "owner": "me"}})
        if op == "LISTSTATUS":
            entries = [
                {"pathSuffix": p[len(path):].lstrip("/"), "length": len(d), "type": "FILE"}
                for p, d in sorted(self.files.items()) if p.startswith(path)
            ]
            return httpx.Response(200, json={"FileStatuses": {"FileStatus": entries}})
        if op == "CREATE":
            if request.url.params.get("overwrite") == "false" and path in self.files:
                return self._error(403, "FileAlreadyExistsException", f"{path} exists")
            self.files[path] = request.content
            return httpx.Response(201)
        if op == "APPEND":
            self.files[path] = self.files.get(path, b"") + request.content
            return httpx.Response(200)
        if op == "OPEN":
            data = self.files[path]
            off = int(request.url.params["offset"])
            n = int(request.url.params["length"])
            return httpx.Response(200, content=data[off:off + n])
        if op == "DELETE":
            existed = self.files.pop(path, None) is not None
            return httpx.Response(200, content=json.dumps({"boolean": existed}))
        if op == "MKDIRS":
            return httpx.Response(200, json={"boolean": True})
        if op == "RENAME":
            dst = request.url.params["destination"]
            self.files[dst] = self.files.pop(path)
            return httpx.Response(200, json={"boolean": True})
        return self._error(400, "IllegalArgumentException", f"bad op {op}")


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def make_client(store, sleeps):
    clients = []

    def _make(options=None, token=None):
        opts = options or StoreOptions().set_insecure_transport()
        c = StoreClient(
            "acct.example.net",
            opts,
            token=token,
            transport=httpx.MockTransport(store.handler),
            sleep=sleeps.append,
        )
        clients.append(c)
        return c

    yield _make
    for c in clients:
        c.close()
