from fastapi import APIRouter, HTTPException, Request

from skilltree.services.source_service import source_to_dict

router = APIRouter()


@router.get("")
async def list_sources(request: Request):
    sources = request.app.state.source_service.get_all_sources()
    return [source_to_dict(s) for s in sources]


@router.get("/domain/{domain_id}")
async def sources_for_domain(domain_id: int, request: Request):
    """Sources linked to a domain, with relevance data."""
    return request.app.state.source_service.get_sources_for_domain(domain_id)


@router.get("/{source_id}")
async def get_source(source_id: int, request: Request):
    source = request.app.state.source_service.get_source_by_id(source_id)
    if source is None:
        raise HTTPException(status_code=404, detail=f"Source not found with ID: {source_id}")
    return source_to_dict(source)
