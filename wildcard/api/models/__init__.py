"""API models."""

from .score_models import ApiResponse, ScoreSubmission, SubmissionData, UsersResponse

__all__ = [
    "ApiResponse",
    "ScoreSubmission",
    "SubmissionData",
    "UsersResponse",
]
