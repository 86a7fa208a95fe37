"""
Get Binding use case.
"""

from typing import Optional

from gardien.application.validation import require_identity, require_platform
from gardien.domain.entities.wallet_binding import WalletBinding
from gardien.domain.repositories.i_binding_registry import IBindingRegistry


class GetBinding:
    """Look up the wallet bound to an identity."""

    def __init__(self, binding_registry: IBindingRegistry):
        self.binding_registry = binding_registry

    async def execute(self, identity_id: str, platform: str) -> Optional[WalletBinding]:
        identity_id = require_identity(identity_id)
        parsed_platform = require_platform(platform)
        return await self.binding_registry.get_by_identity(identity_id, parsed_platform)
