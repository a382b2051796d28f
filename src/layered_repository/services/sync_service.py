"""Synchronisation between the remote and local repositories.

Business logic:
1. Load a snapshot from both sides
2. Push local products that differ from their remote counterpart
3. Pull remote products that are missing locally

Local-only products are left untouched.
"""

from dataclasses import dataclass, field

import structlog
from structlog.typing import BindableLogger

from layered_repository.protocols import ProductRepository


@dataclass
class SyncReport:
    """Outcome of one synchronisation run.

    Attributes:
        pushed: Ids updated on the remote from the local copy
        pulled: Ids copied from the remote into the local repository
    """

    pushed: list[str] = field(default_factory=list)
    pulled: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.pushed or self.pulled)


class SyncService:
    """Reconciles the local repository with the remote one on demand.

    Errors from either side propagate. Every step is idempotent, so a
    failed run can be repeated.

    Example:
        ```python
        service = SyncService(remote=remote_repo, local=local_repo)
        report = await service.sync()
        ```
    """

    def __init__(
        self,
        remote: ProductRepository,
        local: ProductRepository,
        logger: BindableLogger | None = None,
    ) -> None:
        self._remote = remote
        self._local = local
        self._logger = logger or structlog.get_logger(__name__)

    async def sync(self) -> SyncReport:
        """Run one synchronisation pass.

        Returns:
            SyncReport listing pushed and pulled product ids
        """
        local_products = {p.id: p for p in await self._local.get_all()}
        remote_products = {p.id: p for p in await self._remote.get_all()}

        report = SyncReport()

        for product_id, local_product in local_products.items():
            remote_product = remote_products.get(product_id)
            if remote_product is not None and remote_product != local_product:
                await self._remote.update(local_product)
                report.pushed.append(product_id)

        for product_id, remote_product in remote_products.items():
            if product_id not in local_products:
                await self._local.create(remote_product)
                report.pulled.append(product_id)

        self._logger.info("sync.completed", pushed=len(report.pushed), pulled=len(report.pulled))
        return report
