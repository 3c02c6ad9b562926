"""
Remote task source backed by the task REST API.

Performs CRUD over HTTP with an injected httpx.AsyncClient and translates
every transport failure into the ErrorKind taxonomy before returning.
Cancellation of the calling task is logged and then propagates.
"""

import asyncio
import time
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
import structlog

from ..domain.entities import Task, TaskDraft
from ..domain.result import Result
from ..repositories.task_source import ITaskSource
from .error_translator import translate_transport_error
from .task_payload import TaskPayload

logger = structlog.get_logger(__name__)


class TaskRemoteSource(ITaskSource):
    """
    Task source talking to the remote API.

    Endpoints:
    - GET    {endpoint}         -> list
    - GET    {endpoint}/{id}    -> get
    - POST   {endpoint}         -> create
    - PUT    {endpoint}/{id}    -> update
    - DELETE {endpoint}/{id}    -> delete

    Attributes:
        client: HTTP client configured with base URL, headers and timeouts
        endpoint: Collection path of the task resource
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: str = "/tasks",
        owns_client: bool = False,
    ) -> None:
        """
        Initialize remote source.

        Args:
            client: HTTP client to send requests with
            endpoint: Collection path of the task resource
            owns_client: Close the client in aclose()
        """
        self.client = client
        self.endpoint = "/" + endpoint.strip("/")
        self._owns_client = owns_client

    async def aclose(self) -> None:
        """Close the HTTP client if this source owns it."""
        if self._owns_client and not self.client.is_closed:
            await self.client.aclose()

    async def __aenter__(self) -> "TaskRemoteSource":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _item_path(self, task_id: str) -> str:
        return f"{self.endpoint}/{quote(task_id, safe='')}"

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Send one request and raise for error statuses.

        Raises:
            httpx.HTTPStatusError: On 4xx/5xx responses
            httpx.RequestError: On transport failures
        """
        start_time = time.perf_counter()
        response = await self.client.request(method, path, json=payload)
        logger.debug(
            "remote_response",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
        )
        response.raise_for_status()
        return response

    def _failure(self, operation: str, error: BaseException, **context) -> Result:
        classified = translate_transport_error(error, operation)
        logger.warning(
            "remote_operation_failed",
            operation=operation,
            kind=classified.kind.value,
            status_code=classified.status_code,
            error=classified.message,
            **context,
        )
        return Result.failure(classified)

    def _cancelled(self, operation: str, error: asyncio.CancelledError, **context) -> Result:
        """
        Report a cancelled request.

        Cancellation requested on the calling task is re-raised after logging.
        A CancelledError coming out of the transport on its own is returned
        as a CANCELLED failure.

        Raises:
            asyncio.CancelledError: If the calling task is being cancelled
        """
        outcome = self._failure(operation, error, **context)
        current = asyncio.current_task()
        if current is not None and current.cancelling():
            raise error
        return outcome

    @staticmethod
    def _overlay(sent: TaskPayload, response: httpx.Response) -> TaskPayload:
        """Overlay the response body on the sent payload; fields in the body win."""
        body = response.json() if response.content else {}
        if not isinstance(body, dict):
            raise ValueError("Expected a JSON object in response body")
        echoed = TaskPayload.model_validate({"title": sent.title, **body})
        return sent.model_copy(
            update={name: getattr(echoed, name) for name in echoed.model_fields_set}
        )

    async def list(self) -> Result[List[Task]]:
        """Fetch all tasks from the API."""
        try:
            response = await self._request("GET", self.endpoint)
            body = response.json()
            if not isinstance(body, list):
                raise ValueError("Expected a JSON array in response body")
            tasks = [TaskPayload.model_validate(item).to_task() for item in body]
            logger.info("remote_list_succeeded", count=len(tasks))
            return Result.success(tasks)
        except asyncio.CancelledError as error:
            return self._cancelled("list", error)
        except Exception as error:
            return self._failure("list", error)

    async def get(self, task_id: str) -> Result[Task]:
        """Fetch one task by id."""
        try:
            response = await self._request("GET", self._item_path(task_id))
            task = TaskPayload.model_validate(response.json()).to_task()
            return Result.success(task)
        except asyncio.CancelledError as error:
            return self._cancelled("get", error, task_id=task_id)
        except Exception as error:
            return self._failure("get", error, task_id=task_id)

    async def create(self, draft: TaskDraft) -> Result[Task]:
        """
        Create a task.

        The draft's local id is sent along but the backend's id wins.
        """
        sent = TaskPayload.from_draft(draft)
        try:
            response = await self._request("POST", self.endpoint, sent.to_json_dict())
            task = self._overlay(sent, response).to_task()
            logger.info(
                "remote_create_succeeded",
                task_id=task.id,
                local_id=draft.local_id,
            )
            return Result.success(task)
        except asyncio.CancelledError as error:
            return self._cancelled("create", error, local_id=draft.local_id)
        except Exception as error:
            return self._failure("create", error, local_id=draft.local_id)

    async def update(self, task: Task) -> Result[Task]:
        """Replace a task with PUT."""
        sent = TaskPayload.from_task(task)
        try:
            response = await self._request("PUT", self._item_path(task.id), sent.to_json_dict())
            payload = self._overlay(sent, response)
            # The item URL is authoritative for the id
            updated = payload.model_copy(update={"id": task.id}).to_task()
            return Result.success(updated)
        except asyncio.CancelledError as error:
            return self._cancelled("update", error, task_id=task.id)
        except Exception as error:
            return self._failure("update", error, task_id=task.id)

    async def delete(self, task_id: str) -> Result[None]:
        """Delete a task."""
        try:
            await self._request("DELETE", self._item_path(task_id))
            logger.info("remote_delete_succeeded", task_id=task_id)
            return Result.success(None)
        except asyncio.CancelledError as error:
            return self._cancelled("delete", error, task_id=task_id)
        except Exception as error:
            return self._failure("delete", error, task_id=task_id)
