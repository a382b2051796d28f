"""Service layer.

Services orchestrate repositories. They depend on protocols, not
concrete implementations, so they run against any leaf or decorated
pipeline.

Usage:
    ```python
    from layered_repository.services import SyncService

    report = await SyncService(remote=remote, local=local).sync()
    ```
"""

from .sync_service import SyncReport, SyncService

__all__ = [
    "SyncReport",
    "SyncService",
]
