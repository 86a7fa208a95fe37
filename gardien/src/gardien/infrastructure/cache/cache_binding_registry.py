"""
Binding registry on the shared key-value store.

Layout:
    binding:<identity_id>:<platform> -> {"wallet_address", "bound_at"}
    wallet:<address-lower>           -> <identity_id>:<platform>
"""

import json
from datetime import datetime, timezone
from typing import Optional

from gardien.domain.entities.wallet_binding import WalletBinding
from gardien.domain.exceptions import WalletAlreadyBoundError
from gardien.domain.repositories.i_binding_registry import IBindingRegistry
from gardien.domain.value_objects.platform import Platform
from gardien.infrastructure.cache.i_cache_client import ICacheClient
from gardien.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class CacheBindingRegistry(IBindingRegistry):
    """
    Two-index binding registry built from conditional store primitives.

    bind claims the reverse index first, then the forward index, and
    releases the reverse claim if the forward claim loses. A reverse claim
    held by the same identity with no forward entry is left over from an
    interrupted bind or unbind; the next bind by that identity takes it over.
    """

    def __init__(self, cache_client: ICacheClient):
        self.cache = cache_client

    @staticmethod
    def _forward_key(identity_id: str, platform: Platform) -> str:
        return f"binding:{identity_id}:{platform.value}"

    @staticmethod
    def _reverse_key(wallet_address: str) -> str:
        return f"wallet:{wallet_address.lower()}"

    @staticmethod
    def _owner(identity_id: str, platform: Platform) -> str:
        return f"{identity_id}:{platform.value}"

    @staticmethod
    def _decode(identity_id: str, platform: Platform, raw: str) -> WalletBinding:
        data = json.loads(raw)
        return WalletBinding(
            identity_id=identity_id,
            platform=platform,
            wallet_address=data["wallet_address"],
            bound_at=datetime.fromisoformat(data["bound_at"]),
        )

    async def _holds(self, reverse_key: str, owner: str) -> bool:
        if await self.cache.set_if_absent(reverse_key, owner):
            return True
        return await self.cache.get(reverse_key) == owner

    async def bind(
        self,
        identity_id: str,
        platform: Platform,
        wallet_address: str,
    ) -> WalletBinding:
        owner = self._owner(identity_id, platform)
        reverse_key = self._reverse_key(wallet_address)
        forward_key = self._forward_key(identity_id, platform)
        recovered = False

        if not await self.cache.set_if_absent(reverse_key, owner):
            existing = await self.get_by_identity(identity_id, platform)
            if existing is not None and existing.matches_wallet(wallet_address):
                return existing
            if await self.cache.get(reverse_key) != owner:
                raise WalletAlreadyBoundError()
            # Claim left behind by an interrupted bind or unbind of this identity
            logger.warning(
                f"Recovering orphaned wallet claim for {owner}",
                extra={"wallet_key": reverse_key},
            )
            recovered = True

        binding = WalletBinding(
            identity_id=identity_id,
            platform=platform,
            wallet_address=wallet_address,
            bound_at=datetime.now(timezone.utc),
        )
        payload = json.dumps(
            {
                "wallet_address": binding.wallet_address,
                "bound_at": binding.bound_at.isoformat(),
            }
        )

        if not await self.cache.set_if_absent(forward_key, payload):
            existing = await self.get_by_identity(identity_id, platform)
            if existing is not None and existing.matches_wallet(wallet_address):
                return existing
            await self.cache.delete_if_equals(reverse_key, owner)
            raise WalletAlreadyBoundError.identity_bound()

        if recovered and not await self._holds(reverse_key, owner):
            # Recovered claim was released and taken by another identity
            await self.cache.delete_if_equals(forward_key, payload)
            raise WalletAlreadyBoundError()

        return binding

    async def unbind(
        self,
        identity_id: str,
        platform: Platform,
    ) -> Optional[WalletBinding]:
        forward_key = self._forward_key(identity_id, platform)
        raw = await self.cache.get(forward_key)
        if raw is None:
            return None

        if not await self.cache.delete_if_equals(forward_key, raw):
            # Changed underneath us; nothing removed
            return None

        binding = self._decode(identity_id, platform, raw)
        # If this fails the claim stays with this identity until its next bind
        await self.cache.delete_if_equals(
            self._reverse_key(binding.wallet_address),
            self._owner(identity_id, platform),
        )
        return binding

    async def get_by_identity(
        self,
        identity_id: str,
        platform: Platform,
    ) -> Optional[WalletBinding]:
        raw = await self.cache.get(self._forward_key(identity_id, platform))
        if raw is None:
            return None
        return self._decode(identity_id, platform, raw)

    async def get_by_wallet(self, wallet_address: str) -> Optional[WalletBinding]:
        owner = await self.cache.get(self._reverse_key(wallet_address))
        if owner is None:
            return None

        identity_id, _, platform_tag = owner.rpartition(":")
        binding = await self.get_by_identity(identity_id, Platform.parse(platform_tag))
        if binding is None or not binding.matches_wallet(wallet_address):
            # Reverse claim without a matching forward entry (bind in flight)
            logger.debug(f"Reverse index for {wallet_address} has no forward entry")
            return None
        return binding
