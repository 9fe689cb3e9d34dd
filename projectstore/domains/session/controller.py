"""Session API controller: sign-in state and the demo overlay."""

import logging

from fastapi import APIRouter, Depends, Request

from projectstore.core.context import StoreContext
from projectstore.core.dependencies import get_context, get_project_service
from projectstore.domains.project.service import ProjectService
from projectstore.schemas.base import ResponseSchema
from projectstore.schemas.session import SessionStatus, SignInRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/local/session", tags=["session"])


def _session_status(ctx: StoreContext) -> dict:
    return SessionStatus(
        is_authenticated=ctx.auth.is_authenticated,
        local_projects_count=ctx.state.local_projects_count,
        has_local_projects=ctx.state.has_local_projects,
    ).model_dump()


@router.get("/", response_model=ResponseSchema)
async def get_session(_request: Request, ctx: StoreContext = Depends(get_context)):
    return ResponseSchema(
        status="success",
        message="Session retrieved successfully",
        data=_session_status(ctx),
    )


@router.post("/sign-in", response_model=ResponseSchema)
async def sign_in(
    _request: Request,
    payload: SignInRequest,
    ctx: StoreContext = Depends(get_context),
):
    """Hand over the access token issued by the authentication provider."""
    ctx.auth.sign_in(payload.access_token)

    return ResponseSchema(
        status="success",
        message="Signed in" if ctx.auth.is_authenticated else "Access token has expired",
        data=_session_status(ctx),
    )


@router.post("/sign-out", response_model=ResponseSchema)
async def sign_out(_request: Request, ctx: StoreContext = Depends(get_context)):
    ctx.auth.sign_out()
    ctx.state.reset()

    return ResponseSchema(status="success", message="Signed out", data=_session_status(ctx))


@router.delete("/overlay", response_model=ResponseSchema)
async def clear_demo_session(
    _request: Request,
    service: ProjectService = Depends(get_project_service),
):
    """Discard all changes made to system projects in this session."""
    service.clear_demo_session()

    return ResponseSchema(status="success", message="Demo session cleared", data=None)
