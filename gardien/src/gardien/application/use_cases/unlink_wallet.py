"""
Unlink Wallet use case.
"""

from gardien.application.dto.verification_dto import UnlinkResultDTO
from gardien.application.validation import require_identity, require_platform
from gardien.domain.repositories.i_binding_registry import IBindingRegistry
from gardien.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class UnlinkWallet:
    """
    Remove an identity's wallet binding.

    Issued session tokens stay cryptographically valid; callers that need
    revocation validate with require_active_binding.
    """

    def __init__(self, binding_registry: IBindingRegistry):
        self.binding_registry = binding_registry

    async def execute(self, identity_id: str, platform: str) -> UnlinkResultDTO:
        """
        Execute unlink.

        Args:
            identity_id: Platform user id
            platform: Platform tag

        Returns:
            UnlinkResultDTO (unlinked=False if nothing was bound)
        """
        identity_id = require_identity(identity_id)
        parsed_platform = require_platform(platform)

        removed = await self.binding_registry.unbind(identity_id, parsed_platform)
        if removed is None:
            return UnlinkResultDTO(unlinked=False)

        logger.info(f"Wallet unlinked for {parsed_platform.value} identity")
        return UnlinkResultDTO(unlinked=True, wallet_address=removed.wallet_address)
