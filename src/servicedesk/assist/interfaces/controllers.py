"""
Assist Controllers (API Routes)
===============================

FastAPI routes for the ticket assistant.
"""

from fastapi import APIRouter, Depends, Request

from servicedesk.assist.application import (
    AssistService,
    CategorizeRequest,
    SuggestionsRequest,
    CategorizeResponse,
    SuggestionResponse,
    SuggestionsResponse,
)
from servicedesk.config import Role
from servicedesk.users.domain import User
from servicedesk.users.interfaces import get_current_user, require_roles

router = APIRouter(prefix="/ai", tags=["Assistant"])


# ========== Dependencies ==========

def get_assist_service(request: Request) -> AssistService:
    """Assistant over the LLM client built at startup (None means keywords only)."""
    return AssistService(getattr(request.app.state, "llm_client", None))


# ========== Route Handlers ==========

@router.post("/categorize", response_model=CategorizeResponse, summary="Suggest category and priority")
async def categorize(
    payload: CategorizeRequest,
    _: User = Depends(get_current_user),
    service: AssistService = Depends(get_assist_service)
):
    result = await service.categorize(payload.title, payload.description)
    return CategorizeResponse.model_validate(result)


@router.post("/suggestions", response_model=SuggestionsResponse, summary="Suggest solutions (staff)")
async def suggestions(
    payload: SuggestionsRequest,
    _: User = Depends(require_roles(Role.AGENT, Role.ADMIN)),
    service: AssistService = Depends(get_assist_service)
):
    items = await service.suggest(payload.title, payload.description, payload.category)
    return SuggestionsResponse(suggestions=[SuggestionResponse.model_validate(s) for s in items])


# Export router for inclusion in main app
assist_router = router
