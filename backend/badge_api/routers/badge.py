import base64
import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from ..core.fonts import BadgeFont, get_badge_font
from ..core.renderer import render_badge_png
from ..schemas.badge import BadgeBase64Response, BadgeParams, ErrorResponse
from ..services.participants import ParticipantResolver, get_participant_resolver

logger = logging.getLogger("badge_api.badge")

router = APIRouter(tags=["Badge"])

PNG_HEADERS = {"Content-Disposition": 'inline; filename="badge.png"'}


class MissingNameError(ValueError):
    pass


# -------------------------------
# Helper: request parameters
# -------------------------------
async def read_source(request: Request) -> dict:
    """Query string for GET, JSON object body for POST."""
    if request.method.upper() == "GET":
        return dict(request.query_params)
    body = await request.body()
    if not body:
        return {}
    try:
        source = json.loads(body)
    except ValueError:
        logger.debug("Ignoring non-JSON badge request body")
        return {}
    return source if isinstance(source, dict) else {}


# -------------------------------
# Helper: participant resolution
# -------------------------------
def resolve_badge_fields(params: BadgeParams, resolver: Optional[ParticipantResolver]):
    """Return ``(name, qr_text, category)`` to render.

    With a resolver, ``qr`` is a participant id: a match supplies the name and
    category, a miss drops the QR. Without one, ``qr`` is drawn as given.
    """
    name, qr_text, category = params.name, params.qr or None, None
    if not qr_text or resolver is None:
        return name, qr_text, category

    logger.debug("Resolving participant for qr=%s", qr_text)
    participant = resolver.resolve(qr_text)
    if participant is None:
        logger.info("Participant not found for qr=%s, omitting QR", qr_text)
        return name, None, None

    if isinstance(participant.name, str) and participant.name.strip():
        name = participant.name.strip()
    if participant.category is not None:
        category = str(participant.category)
    return name, qr_text, category


def generate_badge(params: BadgeParams, resolver: Optional[ParticipantResolver], font: BadgeFont) -> bytes:
    name, qr_text, category = resolve_badge_fields(params, resolver)
    if not name:
        raise MissingNameError("Missing required parameter: name")
    return render_badge_png(
        name,
        qr_text=qr_text,
        category=category,
        dpi=params.dpi,
        mm_width=params.mm_width,
        mm_height=params.mm_height,
        rotation=params.rotation,
        max_chars_line1=params.max_chars_line1,
        max_chars_line2=params.max_chars_line2,
        font=font,
    )


# -------------------------------
# GET/POST /badge
# -------------------------------
@router.api_route(
    "/badge",
    methods=["GET", "POST"],
    responses={
        200: {"content": {"image/png": {}}, "model": BadgeBase64Response},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def badge(
    request: Request,
    resolver: Optional[ParticipantResolver] = Depends(get_participant_resolver),
    font: BadgeFont = Depends(get_badge_font),
):
    """Render a badge PNG (or a base64 JSON envelope with ``format=base64``)."""
    try:
        params = BadgeParams.model_validate(await read_source(request))
        logger.debug("Badge params: %s", params.model_dump())
        png = await run_in_threadpool(generate_badge, params, resolver, font)
    except MissingNameError as e:
        return JSONResponse({"error": str(e)}, status_code=422)
    except Exception:
        logger.exception("Error generating badge")
        return JSONResponse({"error": "Internal Server Error"}, status_code=500)

    if params.output_format == "base64":
        data = base64.b64encode(png).decode("ascii")
        payload = BadgeBase64Response(data=data, dataUri=f"data:image/png;base64,{data}")
        return JSONResponse(payload.model_dump())

    return Response(content=png, media_type="image/png", headers=PNG_HEADERS)
