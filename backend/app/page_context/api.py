"""
Page Context API Routes - resolve instruction context for a URL
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from typing import Optional

from .formatter import format_for_prompt
from .resolver import BaseContextResolver
from .settings import get_resolver

router = APIRouter(prefix="/api/page-context", tags=["page-context"])


class FormatContextRequest(BaseModel):
    instructions: str
    url: str


class ResolveContextResponse(BaseModel):
    url: str
    context: Optional[str] = None
    formatted: Optional[str] = None


@router.get("", response_model=ResolveContextResponse)
async def resolve_context(
    url: str = Query(..., min_length=1),
    resolver: BaseContextResolver = Depends(get_resolver)
):
    """Resolve the instruction stack for a URL"""
    context = resolver.resolve(url)
    formatted = resolver.format_for_prompt(context, url) if context else None
    return ResolveContextResponse(url=url, context=context, formatted=formatted)


@router.post("/format")
async def format_context(request: FormatContextRequest):
    """Wrap instructions in the prompt envelope"""
    return {"prompt": format_for_prompt(request.instructions, request.url)}


@router.post("/cache/clear")
async def clear_cache(resolver: BaseContextResolver = Depends(get_resolver)):
    """Drop cached resolutions and configs after editing instructions"""
    resolver.clear_cache()
    return {"cleared": True}


@router.get("/stats")
async def get_stats(resolver: BaseContextResolver = Depends(get_resolver)):
    return resolver.get_stats()


@router.get("/instruction-sets")
async def list_instruction_sets(resolver: BaseContextResolver = Depends(get_resolver)):
    """Discovered instruction sets and the domains they serve"""
    return {"instruction_sets": resolver.list_instruction_sets()}
