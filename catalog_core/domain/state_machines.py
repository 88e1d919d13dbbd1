"""State machine for product listing status.

State diagram:
    ACTIVE ◄────────► PAUSED
      │                 │
      │ close           │ close
      ▼                 ▼
    CLOSED  (terminal, soft-deleted)

Self-transitions on ACTIVE and PAUSED are accepted as no-ops.
"""

from enum import Enum

from catalog_core.domain.exceptions import InvalidStatusTransitionError


class ProductStatus(str, Enum):
    """Product listing lifecycle states."""

    ACTIVE = "active"
    PAUSED = "paused"
    CLOSED = "closed"

    def can_transition_to(self, target: "ProductStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _PRODUCT_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["ProductStatus"]:
        """Get list of valid target states, in declaration order.

        Returns:
            List of states that can be transitioned to.
        """
        targets = _PRODUCT_TRANSITIONS.get(self, set())
        return [status for status in ProductStatus if status in targets]

    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) state.

        Returns:
            True if no further transitions are possible.
        """
        return len(_PRODUCT_TRANSITIONS.get(self, set())) == 0


# Only CLOSED restricts its way out; awaiting product-owner confirmation
_PRODUCT_TRANSITIONS: dict[ProductStatus, set[ProductStatus]] = {
    ProductStatus.ACTIVE: {ProductStatus.ACTIVE, ProductStatus.PAUSED, ProductStatus.CLOSED},
    ProductStatus.PAUSED: {ProductStatus.ACTIVE, ProductStatus.PAUSED, ProductStatus.CLOSED},
    ProductStatus.CLOSED: set(),  # Terminal state
}


def validate_status_transition(
    product_id: str,
    current_status: ProductStatus,
    target_status: ProductStatus,
) -> None:
    """Validate and raise if a product status transition is invalid.

    Args:
        product_id: Product identifier for error message.
        current_status: Current product status.
        target_status: Target product status.

    Raises:
        InvalidStatusTransitionError: If transition is not valid.
    """
    if not current_status.can_transition_to(target_status):
        raise InvalidStatusTransitionError(
            product_id=product_id,
            current_status=current_status.value,
            target_status=target_status.value,
            allowed_transitions=[s.value for s in current_status.allowed_transitions()],
        )
