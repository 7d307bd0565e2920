import logging
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from skilltree.exceptions import GenerationError
from skilltree.models.generation import DomainGenerationRequest, DomainGenerationResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/domain", response_model=DomainGenerationResponse)
async def generate_domain(body: DomainGenerationRequest, request: Request):
    """
    Research a topic and generate a domain from it.
    Failures return 500 with a FAILED response body.
    """
    logger.info(f"Received domain generation request for topic: {body.topic}")

    # A fresh pipeline per request keeps stage history per run
    pipeline = request.app.state.pipeline_factory()

    try:
        return await pipeline.run(body)
    except GenerationError as e:
        logger.error(f"Error generating domain (stage {e.stage}): {e}")
        return JSONResponse(
            status_code=500,
            content=DomainGenerationResponse.failed(body.topic).model_dump(mode="json"),
        )
