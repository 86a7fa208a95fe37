"""
Domain services package.
"""

from gardien.domain.services.i_session_issuer import ISessionIssuer
from gardien.domain.services.i_signature_verifier import ISignatureVerifier
from gardien.domain.services.message_builder import MessageBuilder

__all__ = [
    "MessageBuilder",
    "ISignatureVerifier",
    "ISessionIssuer",
]
