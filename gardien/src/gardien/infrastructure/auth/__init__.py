"""Signature verification and session tokens."""

from gardien.infrastructure.auth.eth_signature_verifier import EthSignatureVerifier
from gardien.infrastructure.auth.jwt_session_issuer import JwtSessionIssuer

__all__ = ["EthSignatureVerifier", "JwtSessionIssuer"]
