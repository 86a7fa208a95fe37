"""
Data Transfer Objects for Gardien application layer.
"""

from gardien.application.dto.verification_dto import (
    ChallengeDTO,
    OperationResult,
    SessionTokenDTO,
    UnlinkResultDTO,
)

__all__ = [
    "ChallengeDTO",
    "SessionTokenDTO",
    "UnlinkResultDTO",
    "OperationResult",
]
