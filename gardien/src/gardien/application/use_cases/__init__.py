"""
Application use cases.
"""

from gardien.application.use_cases.generate_challenge import GenerateChallenge
from gardien.application.use_cases.get_binding import GetBinding
from gardien.application.use_cases.unlink_wallet import UnlinkWallet
from gardien.application.use_cases.validate_session import ValidateSession
from gardien.application.use_cases.verify_challenge import VerifyChallenge

__all__ = [
    "GenerateChallenge",
    "VerifyChallenge",
    "UnlinkWallet",
    "GetBinding",
    "ValidateSession",
]
