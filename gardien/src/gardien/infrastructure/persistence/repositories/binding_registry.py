"""
Binding registry implementation on SQLAlchemy.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from gardien.domain.entities.wallet_binding import WalletBinding
from gardien.domain.exceptions import StoreUnavailableError, WalletAlreadyBoundError
from gardien.domain.repositories.i_binding_registry import IBindingRegistry
from gardien.domain.value_objects.platform import Platform
from gardien.infrastructure.monitoring.logger import get_logger
from gardien.infrastructure.persistence.database import Database
from gardien.infrastructure.persistence.models import WalletBindingModel

logger = get_logger(__name__)


class SqlBindingRegistry(IBindingRegistry):
    """
    Durable binding registry.

    Uniqueness in both directions rests on the table constraints; each
    operation runs in its own short transaction.
    """

    def __init__(self, database: Database, timeout: float = 10.0):
        """
        Initialize registry.

        Args:
            database: Connected Database
            timeout: Per-operation timeout in seconds
        """
        self.database = database
        self.timeout = timeout

    async def _run(self, operation: str, work: Callable[[], Awaitable[Any]]) -> Any:
        """Run work under the database timeout, mapping outages."""
        try:
            return await asyncio.wait_for(work(), timeout=self.timeout)
        except IntegrityError:
            raise
        except asyncio.TimeoutError:
            logger.warning(f"Database {operation} timed out after {self.timeout}s")
            raise StoreUnavailableError("database", reason="timeout")
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Database {operation} failed: {type(e).__name__}")
            raise StoreUnavailableError("database", reason=type(e).__name__)

    async def bind(
        self,
        identity_id: str,
        platform: Platform,
        wallet_address: str,
    ) -> WalletBinding:
        binding = WalletBinding(
            identity_id=identity_id,
            platform=platform,
            wallet_address=wallet_address,
            bound_at=datetime.now(timezone.utc),
        )

        async def _insert() -> None:
            async with self.database.session() as session:
                session.add(
                    WalletBindingModel(
                        identity_id=binding.identity_id,
                        platform=binding.platform.value,
                        wallet_address=binding.wallet_address,
                        wallet_key=binding.wallet_key,
                        bound_at=binding.bound_at,
                    )
                )
                await session.flush()

        try:
            await self._run("bind", _insert)
            return binding
        except IntegrityError:
            pass

        existing = await self.get_by_identity(identity_id, platform)
        if existing is None:
            raise WalletAlreadyBoundError()
        if existing.matches_wallet(wallet_address):
            return existing
        raise WalletAlreadyBoundError.identity_bound()

    async def unbind(
        self,
        identity_id: str,
        platform: Platform,
    ) -> Optional[WalletBinding]:
        async def _delete() -> Optional[WalletBinding]:
            async with self.database.session() as session:
                result = await session.execute(
                    select(WalletBindingModel)
                    .where(
                        WalletBindingModel.identity_id == identity_id,
                        WalletBindingModel.platform == platform.value,
                    )
                    .with_for_update()
                )
                model = result.scalar_one_or_none()
                if model is None:
                    return None

                removed = self._to_entity(model)
                await session.execute(
                    delete(WalletBindingModel).where(
                        WalletBindingModel.identity_id == identity_id,
                        WalletBindingModel.platform == platform.value,
                    )
                )
                return removed

        return await self._run("unbind", _delete)

    async def get_by_identity(
        self,
        identity_id: str,
        platform: Platform,
    ) -> Optional[WalletBinding]:
        async def _fetch() -> Optional[WalletBinding]:
            async with self.database.session() as session:
                model = await session.get(
                    WalletBindingModel,
                    (identity_id, platform.value),
                )
                return self._to_entity(model) if model else None

        return await self._run("get_by_identity", _fetch)

    async def get_by_wallet(self, wallet_address: str) -> Optional[WalletBinding]:
        async def _fetch() -> Optional[WalletBinding]:
            async with self.database.session() as session:
                result = await session.execute(
                    select(WalletBindingModel).where(
                        WalletBindingModel.wallet_key == wallet_address.lower()
                    )
                )
                model = result.scalar_one_or_none()
                return self._to_entity(model) if model else None

        return await self._run("get_by_wallet", _fetch)

    def _to_entity(self, model: WalletBindingModel) -> WalletBinding:
        """Convert ORM model to domain entity."""
        bound_at = model.bound_at
        if bound_at.tzinfo is None:
            # SQLite drops tzinfo
            bound_at = bound_at.replace(tzinfo=timezone.utc)

        return WalletBinding(
            identity_id=model.identity_id,
            platform=Platform.parse(model.platform),
            wallet_address=model.wallet_address,
            bound_at=bound_at,
        )
