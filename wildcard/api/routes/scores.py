"""
Score API endpoints.

- GET  /api/users: roster in display order
- POST /api/submit-score: validate and record one game
- GET  /api/init: re-open the spreadsheet and repair its header row

Every error is answered with ``{"success": false, "message": ...}``. Bad
input gets a 400 carrying the reason; unexpected failures get a generic 500
and are logged with the traceback.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from wildcard.api.dependencies import (
    get_roster,
    get_sheets_service,
    get_submission_service,
)
from wildcard.api.models.score_models import (
    ApiResponse,
    ScoreSubmission,
    SubmissionData,
    UsersResponse,
)
from wildcard.core.logging.context import set_request_context
from wildcard.core.logging.logger import get_api_logger
from wildcard.domain.errors import ScoreInputError
from wildcard.domain.roster import Roster
from wildcard.services.sheets_service import GoogleSheetsService
from wildcard.services.submission_service import SubmissionService

logger = get_api_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Scores"],
    responses={
        400: {"description": "Bad Request - Invalid or unbalanced scores"},
        500: {"description": "Internal Server Error"},
    },
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse(success=False, message=message).to_content(),
    )


@router.get("/users", response_model=UsersResponse, summary="List Players")
async def get_users(roster: Roster = Depends(get_roster)) -> UsersResponse:
    """Return the configured players in roster order."""
    return UsersResponse(users=list(roster))


@router.post("/submit-score", summary="Submit Game Scores")
async def submit_score(
    request: Request,
    submission_service: SubmissionService = Depends(get_submission_service),
) -> JSONResponse:
    """
    Record one game.

    Body: ``{"scores": {"Winz": 5, "Luffy": -5}}``. The scores must be
    integers that add up to zero. Partial sink failures still answer 200,
    with ``sheetSuccess``/``chatSuccess`` telling which writes worked.
    """
    set_request_context(source="api")

    try:
        body = await request.json()
    except ValueError:
        body = None

    if not isinstance(body, dict) or body.get("scores") is None:
        return _error(400, "Missing required field: scores")

    try:
        submission = ScoreSubmission.model_validate(body)
    except ValidationError as e:
        logger.warning(f"Rejected score payload: {e.error_count()} validation errors")
        return _error(400, "Invalid scores format")

    try:
        result = await submission_service.submit(submission.scores)
    except ScoreInputError as e:
        logger.warning(f"Rejected scores: {e}")
        return _error(400, str(e))
    except Exception as e:
        logger.error(f"Error in submit-score endpoint: {e}", exc_info=True)
        return _error(500, "Internal server error while saving scores")

    response = ApiResponse(
        success=True,
        message="Game recorded successfully!",
        data=SubmissionData(
            scores=result.scores,
            sheet_success=result.sheet_success,
            chat_success=result.chat_success,
        ),
    )
    return JSONResponse(status_code=200, content=response.to_content())


@router.get("/init", summary="Initialize Google Sheet")
async def init_sheet(
    sheets_service: GoogleSheetsService = Depends(get_sheets_service),
) -> JSONResponse:
    """Force the spreadsheet to re-initialize and rewrite row 1 if needed."""
    set_request_context(source="api")

    try:
        initialized = await sheets_service.initialize_sheet(force=True)
    except Exception as e:
        logger.error(f"Error initializing Google Sheets: {e}", exc_info=True)
        return _error(500, "Error initializing Google Sheets")

    message = (
        "Google Sheets initialized" if initialized else "Failed to initialize Google Sheets"
    )
    return JSONResponse(
        status_code=200,
        content=ApiResponse(success=initialized, message=message).to_content(),
    )
