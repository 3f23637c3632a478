from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

Metadata = Dict[str, Any]
MetadataMutator = Callable[[Metadata], None]


class MetadataStore(ABC):
    """Access to each document's frontmatter block. Documents are vault paths."""

    @abstractmethod
    async def read_metadata(self, doc: str) -> Metadata:
        pass

    @abstractmethod
    async def write_metadata(self, doc: str, mutator: MetadataMutator) -> None:
        """
        Read, mutate and write back `doc`'s metadata as one transaction.

        Must not interleave with another write_metadata on the same document.
        """
        pass


class LinkResolver(ABC):
    @abstractmethod
    def resolve_link_target(self, raw_link: str, relative_to: str) -> Optional[str]:
        """Document a link points to when written inside `relative_to`, or None."""
        pass

    @abstractmethod
    def canonical_link_text(self, doc: str, relative_to: str) -> str:
        """Shortest link text that resolves to `doc` from `relative_to`."""
        pass

    def snapshot(self) -> "LinkResolver":
        """
        Resolver for a batch of lookups against one view of the documents.

        Hosts that scan storage per lookup override this to scan once.
        """
        return self
