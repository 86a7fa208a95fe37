"""
EIP-191 personal_sign signature verification.

The service never handles private keys; it only recovers the signer
address from (message, signature).
"""

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import is_hex, to_checksum_address

from gardien.domain.exceptions import SignatureMismatchError
from gardien.domain.services.i_signature_verifier import ISignatureVerifier
from gardien.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)

SIGNATURE_LENGTH = 65


class EthSignatureVerifier(ISignatureVerifier):
    """Recovers secp256k1 signers of personal_sign messages."""

    @staticmethod
    def _decode_signature(signature: str) -> bytes:
        """
        Decode hex signature and normalize recovery id to 27/28.

        Raises:
            SignatureMismatchError: If signature is not 65 hex bytes
        """
        if not isinstance(signature, str):
            raise SignatureMismatchError()

        raw = signature.strip()
        if raw.startswith(("0x", "0X")):
            raw = raw[2:]

        if len(raw) != SIGNATURE_LENGTH * 2 or not is_hex(raw):
            raise SignatureMismatchError()

        sig_bytes = bytes.fromhex(raw)
        v = sig_bytes[-1]
        if v in (0, 1):
            v += 27
        if v not in (27, 28):
            raise SignatureMismatchError()

        return sig_bytes[:-1] + bytes([v])

    def recover(self, message: str, signature: str) -> str:
        """
        Recover signer address.

        Args:
            message: Exact signed text
            signature: 65-byte hex signature (r || s || v)

        Returns:
            Checksummed signer address

        Raises:
            SignatureMismatchError: On any decoding or recovery failure
        """
        sig_bytes = self._decode_signature(signature)
        try:
            recovered = Account.recover_message(
                encode_defunct(text=message),
                signature=sig_bytes,
            )
        except Exception as e:
            # eth_keys raises several unrelated types for bad curve points
            logger.debug(f"Signature recovery failed: {type(e).__name__}")
            raise SignatureMismatchError()

        return to_checksum_address(recovered)

    def verify(self, message: str, signature: str, wallet_address: str) -> bool:
        """Return True if signature was produced by wallet_address."""
        try:
            recovered = self.recover(message, signature)
        except SignatureMismatchError:
            return False
        return recovered.lower() == str(wallet_address).lower()
