"""Async client for the authoritative backend API."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from projectstore.core.security import AuthState
from projectstore.exceptions.base import BackendError
from projectstore.schemas.base import RecordSchema
from projectstore.schemas.marketing_plan import MarketingPlan
from projectstore.schemas.milestone import Milestone
from projectstore.schemas.project import Project, ProjectCreate, ProjectUpdate
from projectstore.schemas.todo import Task

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=RecordSchema)


def _error_from_response(response: httpx.Response) -> BackendError:
    """Build a BackendError carrying the backend's own message when it sent one."""
    try:
        body = response.json()
    except ValueError:
        body = None

    message = code = None
    details = None
    if isinstance(body, dict):
        nested = body.get("error")
        if isinstance(nested, str):
            message = nested
        elif isinstance(nested, dict):
            message = nested.get("message") or nested.get("error")
            code = nested.get("code")
            details = nested
        message = body.get("message") or message
        code = body.get("code") or code
        details = body.get("details") or details

    return BackendError(
        message=message or response.reason_phrase or "An error occurred",
        status_code=response.status_code,
        error_code=code or "UNKNOWN_ERROR",
        details=details if isinstance(details, dict) else None,
    )


class BackendClient:
    """Thin wrapper around ``httpx.AsyncClient`` speaking the backend's envelope.

    Every response is ``{"success": ..., "data": ...}``; callers get ``data``.
    Any failure is raised as :class:`BackendError`.
    """

    def __init__(
        self,
        base_url: str,
        auth: AuthState,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.auth = auth
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )
        self.projects = ProjectsResource(self)
        self.todos = ChildResource(self, "todos", Task)
        self.milestones = ChildResource(self, "milestones", Milestone)
        self.marketing_plans = ChildResource(self, "marketing-plans", MarketingPlan)
        self.copilot = CopilotResource(self)

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        headers = {}
        if self.auth.access_token:
            headers["Authorization"] = f"Bearer {self.auth.access_token}"
        if params:
            params = {
                k: v.value if isinstance(v, Enum) else v
                for k, v in params.items()
                if v is not None
            }

        try:
            response = await self._client.request(
                method, url, params=params or None, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            logger.warning("Backend request %s %s failed: %s", method, url, e)
            raise BackendError(
                message=str(e) or "An error occurred", error_code="NETWORK_ERROR"
            ) from e

        if response.is_error:
            error = _error_from_response(response)
            logger.warning(
                "Backend request %s %s returned %s: %s",
                method,
                url,
                response.status_code,
                error.message,
            )
            raise error

        if response.status_code == 204 or not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            raise BackendError(message="Invalid response from server") from e
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()


def _parse(schema: type[R], data: Any) -> R:
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise BackendError(message=f"Invalid {schema.__name__} returned by server") from e


def _parse_list(schema: type[R], data: Any) -> list[R]:
    return [_parse(schema, item) for item in (data or [])]


def _body(data: BaseModel, partial: bool) -> dict[str, Any]:
    if partial:
        return data.model_dump(mode="json", exclude_unset=True)
    return data.model_dump(mode="json", exclude_none=True)


class ProjectsResource:
    def __init__(self, client: BackendClient):
        self.client = client

    async def list(
        self, status: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> list[Project]:
        data = await self.client.request(
            "GET", "/projects", params={"status": status, "page": page, "limit": limit}
        )
        return _parse_list(Project, data)

    async def get(self, project_id: str) -> Project:
        return _parse(Project, await self.client.request("GET", f"/projects/{project_id}"))

    async def create(self, data: ProjectCreate) -> Project:
        result = await self.client.request("POST", "/projects", json=_body(data, partial=False))
        return _parse(Project, result)

    async def update(self, project_id: str, data: ProjectUpdate) -> Project:
        result = await self.client.request(
            "PATCH", f"/projects/{project_id}", json=_body(data, partial=True)
        )
        return _parse(Project, result)

    async def delete(self, project_id: str) -> None:
        await self.client.request("DELETE", f"/projects/{project_id}")


class ChildResource(Generic[R]):
    """CRUD for one kind of record nested under ``/projects/{id}/<segment>``."""

    def __init__(self, client: BackendClient, segment: str, schema: type[R]):
        self.client = client
        self.segment = segment
        self.schema = schema

    def _path(self, project_id: str, record_id: Optional[str] = None) -> str:
        path = f"/projects/{project_id}/{self.segment}"
        return f"{path}/{record_id}" if record_id else path

    async def list(self, project_id: str, status: Optional[str] = None) -> list[R]:
        data = await self.client.request("GET", self._path(project_id), params={"status": status})
        return _parse_list(self.schema, data)

    async def create(self, project_id: str, data: BaseModel) -> R:
        result = await self.client.request(
            "POST", self._path(project_id), json=_body(data, partial=False)
        )
        return _parse(self.schema, result)

    async def update(self, project_id: str, record_id: str, data: BaseModel) -> R:
        result = await self.client.request(
            "PATCH", self._path(project_id, record_id), json=_body(data, partial=True)
        )
        return _parse(self.schema, result)

    async def delete(self, project_id: str, record_id: str) -> None:
        await self.client.request("DELETE", self._path(project_id, record_id))


class CopilotResource:
    """AI suggestion endpoints; opaque to this package beyond their shapes."""

    def __init__(self, client: BackendClient):
        self.client = client

    async def suggest_todos(self, project_id: str, context: Optional[str] = None) -> list[str]:
        data = await self.client.request(
            "POST", f"/projects/{project_id}/copilot/suggest-todos", json={"context": context}
        )
        return list((data or {}).get("suggestions", []))

    async def suggest_milestones(
        self, project_id: str, context: Optional[str] = None
    ) -> list[str]:
        data = await self.client.request(
            "POST",
            f"/projects/{project_id}/copilot/suggest-milestones",
            json={"context": context},
        )
        return list((data or {}).get("suggestions", []))

    async def generate_marketing_plan(
        self, project_id: str, goals: Optional[str] = None
    ) -> MarketingPlan:
        data = await self.client.request(
            "POST",
            f"/projects/{project_id}/copilot/generate-marketing-plan",
            json={"goals": goals},
        )
        return _parse(MarketingPlan, data)
