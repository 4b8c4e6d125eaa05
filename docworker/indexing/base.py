from abc import ABC, abstractmethod

from docworker.database.models import DocumentView


class BaseSearchIndexer(ABC):
    @abstractmethod
    def index(self, document: DocumentView) -> None:
        """Create or replace the search entry for `document`.

        Raises:
            IndexingError: if the search backend rejects the document.
        """

    def close(self) -> None:
        """Release backend resources. No-op by default."""
