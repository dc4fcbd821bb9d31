"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so the CLI
layer can catch them uniformly and display user-friendly messages.  Each
class carries a ``kind`` tag that is reported alongside the message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    kind = "domain"


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    kind = "validation"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = "not_found"


class DataUnavailableError(DomainException):
    """A backing collection could not be read or parsed."""

    kind = "data_unavailable"


class CyclicCompositionError(DomainException):
    """A composite product is, directly or transitively, its own component."""

    kind = "cyclic_composition"

    def __init__(self, product_id: str, path: tuple[str, ...]) -> None:
        self.product_id = product_id
        self.path = path
        chain = " -> ".join(path + (product_id,))
        super().__init__(
            f"Product '{product_id}' has a cyclic composition ({chain})"
        )
