"""
Request and response models for the score API.

Response field names follow the JSON the web form already consumes
(``sheetSuccess``/``chatSuccess``), so snake_case fields serialize with
camelCase aliases.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


class ScoreSubmission(BaseModel):
    """Body of ``POST /api/submit-score``."""

    scores: dict[str, StrictInt] = Field(
        ..., description="Player name to signed integer score"
    )

    @field_validator("scores")
    @classmethod
    def validate_not_empty(cls, v: dict[str, int]) -> dict[str, int]:
        if not v:
            raise ValueError("At least one score is required")
        if any(not name.strip() for name in v):
            raise ValueError("Player names must not be blank")
        return v


class SubmissionData(BaseModel):
    """Outcome of a recorded game."""

    model_config = ConfigDict(populate_by_name=True)

    scores: dict[str, int]
    sheet_success: bool = Field(..., serialization_alias="sheetSuccess")
    chat_success: bool = Field(..., serialization_alias="chatSuccess")


class ApiResponse(BaseModel):
    """Envelope shared by every score API endpoint."""

    success: bool
    message: str
    data: SubmissionData | None = None

    def to_content(self) -> dict:
        """JSON-ready dict; ``data`` is omitted when absent."""
        return self.model_dump(by_alias=True, exclude_none=True)


class UsersResponse(BaseModel):
    """Body of ``GET /api/users``."""

    users: list[str]
