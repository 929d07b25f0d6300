# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - record_client.py: Table-level CRUD adapter over the Supabase client
# - local_store.py: JSON-file key-value store for local lists
# - utils.py: Shared utilities (error base class, record id normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.record_client import RecordClient, RecordClientError
from lib.local_store import LocalStore, LocalStoreError
from lib.utils import ApplicationError, normalize_record_id

__all__ = [
    # Backend records
    "RecordClient",
    "RecordClientError",
    # Local storage
    "LocalStore",
    "LocalStoreError",
    # Utils
    "ApplicationError",
    "normalize_record_id",
]
