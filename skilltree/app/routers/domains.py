from fastapi import APIRouter, HTTPException, Request

from skilltree.exceptions import DomainNotFoundError
from skilltree.services.domain_service import domain_to_dict

router = APIRouter()


@router.get("")
async def list_domains(request: Request):
    domains = request.app.state.domain_service.get_all_domains()
    return [domain_to_dict(d) for d in domains]


@router.get("/{domain_id}")
async def get_domain(domain_id: int, request: Request):
    try:
        domain = request.app.state.domain_service.get_domain(domain_id)
    except DomainNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {
        **domain_to_dict(domain),
        'prompt': domain.prompt,
        'source_count': len(domain.sources),
        'category_count': len(domain.categories),
    }
