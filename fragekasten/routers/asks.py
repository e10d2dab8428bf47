"""
Asks Router
===========

Public endpoint for submitting anonymous questions. Responds with a bare
status code: 201 accepted, 400 rejected, 500 on storage or webhook failure.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response

from fragekasten.config import settings
from fragekasten.core.client_ip import ClientAddressError, resolve_client_ip
from fragekasten.core.errors import FragekastenError
from fragekasten.models.schemas import QuestionPayload
from fragekasten.services.submission_service import SubmissionService, get_submission_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/asks",
    status_code=201,
    response_class=Response,
    summary="Ask a question",
    description="Submit an anonymous question to the page owner.",
)
async def add_ask(
    payload: QuestionPayload,
    request: Request,
    service: SubmissionService = Depends(get_submission_service),
) -> Response:
    try:
        ip_address = resolve_client_ip(request, settings.ip_source)
    except ClientAddressError as exc:
        raise FragekastenError("FKS-API-002", detail=str(exc)) from exc

    user_agent = request.headers.get("user-agent", "")
    await service.submit(payload.content, ip_address, user_agent)
    return Response(status_code=201)
