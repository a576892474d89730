"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantity(ValidationError):
    pass


class InvalidPrice(ValidationError):
    pass


class InvalidWeight(ValidationError):
    pass


class InvalidDeliveryCost(ValidationError):
    pass


class NegativeDeliveryCost(InvalidDeliveryCost):
    pass


class InvalidTransportMethod(ValidationError):
    pass


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ItemNotFound(EntityNotFoundError):
    """A cart line for the given product does not exist."""


class InvalidStateTransition(DomainException):
    """An order status change outside the allowed transitions."""


class CheckoutError(DomainException):
    """Checkout preconditions were not met."""


class EmptyCart(CheckoutError):
    pass


class CheckoutNotAllowed(CheckoutError):
    pass


class CurrencyMismatch(DomainException):
    """Arithmetic across money values of different currencies."""
