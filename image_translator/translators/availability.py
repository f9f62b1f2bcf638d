"""Session-scoped provider availability flags.

Every provider starts available. A failed attempt flips its flag to False
for the rest of the session; there is no re-enable and nothing is persisted.
A fresh session gets a fresh store.
"""

from typing import Dict, Iterable, List

from image_translator.utils.logger import get_logger

logger = get_logger(__name__)


class ProviderAvailability:
    """In-memory map of provider id to availability flag."""

    def __init__(self, provider_ids: Iterable[str]) -> None:
        # dict keeps registry order
        self._flags: Dict[str, bool] = {pid: True for pid in provider_ids}

    def is_available(self, provider_id: str) -> bool:
        return self._flags.get(provider_id, False)

    def mark_unavailable(self, provider_id: str) -> None:
        """Demote a provider for the remainder of the session."""
        if self._flags.get(provider_id):
            logger.info("Provider marked unavailable", provider=provider_id)
        self._flags[provider_id] = False

    def available_ids(self) -> List[str]:
        """Ids of providers still available, in registry order."""
        return [pid for pid, available in self._flags.items() if available]

    def snapshot(self) -> Dict[str, bool]:
        """Copy of the current flags."""
        return dict(self._flags)

    def __contains__(self, provider_id: str) -> bool:
        return provider_id in self._flags
