from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional
import logging
import time
import uuid

import httpx
from pydantic import ValidationError

from .config import StoreOptions
from .errors import StoreError, translate_error
from .models import FileStatus, FileStatusResponse, ListStatusResponse, RemoteException
from .retry import ExponentialBackoffPolicy
from .ssl_factory import build_ssl_context
from .util import apply_prefix, build_origin


VERSION = "0.1.0"
API_VERSION = "2018-09-01"
DEFAULT_TIMEOUT_S = 60.0

log = logging.getLogger("adl.store")


def _mask_token(tok: Optional[str]) -> str:
    if not tok:
        return "-"
    t = tok.strip()
    if len(t) <= 8:
        return "***"
    return f"{t[:4]}…{t[-4:]}"


class StoreClient:
    """Synchronous WebHDFS-style client for a Data Lake Store account."""

    def __init__(
        self,
        account: str,
        options: Optional[StoreOptions] = None,
        token: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.options = options or StoreOptions()
        self.account = account
        self._sleep = sleep
        headers = {"User-Agent": self.user_agent}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        ctx = build_ssl_context(self.options)
        self._client = httpx.Client(
            base_url=build_origin(account, self.options.insecure_transport),
            timeout=self.timeout_s,
            headers=headers,
            verify=ctx if ctx is not None else True,
            transport=transport,
        )
        log.debug(
            "CLIENT init | account=%s | auth=%s | mode=%s | insecure=%s",
            account, _mask_token(token), self.options.ssl_channel_mode.value, self.options.insecure_transport,
        )

    @property
    def user_agent(self) -> str:
        ua = f"adl-store-python/{VERSION}"
        suffix = self.options.user_agent_suffix
        return f"{ua}/{suffix}" if suffix else ua

    @property
    def timeout_s(self) -> float:
        ms = self.options.default_timeout
        # StoreOptions stores any value; only a positive timeout is applied
        return DEFAULT_TIMEOUT_S if ms <= 0 else ms / 1000.0

    # ---------------------------
    # Request execution
    # ---------------------------
    def request(
        self,
        op: str,
        path: str,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        content: Optional[bytes] = None,
        exists_ok_on_retry: bool = False,
    ) -> httpx.Response:
        """Run one operation with the configured retry policy; raise on final failure."""
        full_path = apply_prefix(self.options.file_path_prefix, path)
        query: Dict[str, Any] = {"op": op, "api-version": API_VERSION}
        query.update(params or {})
        policy = ExponentialBackoffPolicy.from_options(self.options, sleep=self._sleep)

        while True:
            request_id = str(uuid.uuid4())
            resp: Optional[httpx.Response] = None
            err: Optional[httpx.TransportError] = None
            t0 = time.perf_counter()
            try:
                resp = self._client.request(
                    method,
                    f"/webhdfs/v1{full_path}",
                    params=query,
                    content=content,
                    headers={"x-ms-client-request-id": request_id},
                )
            except httpx.TransportError as e:
                err = e
            dt = (time.perf_counter() - t0) * 1000.0

            if resp is not None and resp.is_success:
                log.debug("%s OK | path=%s | status=%d | took=%.1fms", op, full_path, resp.status_code, dt)
                return resp

            remote = self._remote_exception(resp)
            if (
                exists_ok_on_retry
                and policy.retry_count > 0
                and remote.exception == "FileAlreadyExistsException"
            ):
                log.info("%s OK | path=%s | file created by an earlier attempt", op, full_path)
                return resp

            status = resp.status_code if resp is not None else None
            log.warning(
                "%s FAIL | path=%s | status=%s | remote=%s | err=%s | attempt=%d",
                op, full_path, status if status is not None else "-", remote.exception or "-", err, policy.retry_count + 1,
            )
            if not policy.should_retry(status, err):
                break

        raise translate_error(
            op,
            full_path,
            self.options.remote_exceptions_enabled,
            http_status=status,
            request_id=resp.headers.get("x-ms-request-id") if resp is not None else None,
            remote_exception_name=remote.exception,
            remote_exception_message=remote.message,
            last_error=err,
            num_retries=policy.retry_count,
        )

    @staticmethod
    def _remote_exception(resp: Optional[httpx.Response]) -> RemoteException:
        if resp is None:
            return RemoteException()
        try:
            body = resp.json()
        except ValueError:
            return RemoteException()
        if not isinstance(body, dict) or not isinstance(body.get("RemoteException"), dict):
            return RemoteException()
        try:
            return RemoteException.model_validate(body["RemoteException"])
        except ValidationError:
            return RemoteException()

    # ---------------------------
    # Operations
    # ---------------------------
    def get_file_status(self, path: str) -> FileStatus:
        resp = self.request("GETFILESTATUS", path)
        return FileStatusResponse.model_validate(resp.json()).file_status

    def list_status(self, path: str) -> List[FileStatus]:
        resp = self.request("LISTSTATUS", path)
        return ListStatusResponse.model_validate(resp.json()).entries

    def exists(self, path: str) -> bool:
        try:
            self.get_file_status(path)
        except FileNotFoundError:
            return False
        except StoreError as e:
            if e.http_status == 404 or e.remote_exception_name == "FileNotFoundException":
                return False
            raise
        return True

    def create(self, path: str, data: bytes = b"", overwrite: bool = True) -> None:
        conditional = (not overwrite) and self.options.conditional_create_enabled
        self.request(
            "CREATE",
            path,
            method="PUT",
            params={"overwrite": str(overwrite).lower(), "write": "true"},
            content=data,
            exists_ok_on_retry=conditional,
        )

    def append(self, path: str, data: bytes) -> None:
        self.request("APPEND", path, method="POST", params={"append": "true"}, content=data)

    def read(self, path: str, offset: int, length: int) -> bytes:
        resp = self.request("OPEN", path, params={"read": "true", "offset": offset, "length": length})
        return resp.content

    def delete(self, path: str, recursive: bool = False) -> bool:
        resp = self.request("DELETE", path, method="DELETE", params={"recursive": str(recursive).lower()})
        return bool(resp.json().get("boolean", False))

    def mkdirs(self, path: str) -> bool:
        resp = self.request("MKDIRS", path, method="PUT")
        return bool(resp.json().get("boolean", False))

    def rename(self, src: str, dst: str) -> bool:
        destination = apply_prefix(self.options.file_path_prefix, dst)
        resp = self.request("RENAME", src, method="PUT", params={"destination": destination})
        return bool(resp.json().get("boolean", False))

    def open(self, path: str, block_size: Optional[int] = None):
        from .input_stream import StoreFileInputStream

        if block_size is None:
            return StoreFileInputStream(self, path)
        return StoreFileInputStream(self, path, block_size=block_size)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> StoreClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
