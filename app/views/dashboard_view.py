"""
Dashboard View.
Derives the rendered view model from the controller state. Everything here is
recomputed on every render; nothing is stored.
"""

from typing import List, Optional, Sequence

from app.models import (
    ApiStatus,
    DashboardResponse,
    DashboardStats,
    Product,
    ProductCard,
    ProductDraft,
    ViewState
)

NO_DESCRIPTION = "No description"
EMPTY_MESSAGE = "No products yet. Add your first product!"


def total_value(products: Sequence[Product]) -> float:
    """Sum of price x quantity over the collection."""
    return sum(product.price * product.quantity for product in products)


def compute_stats(products: Sequence[Product]) -> DashboardStats:
    """
    Aggregate statistics for the stat cards.

    Args:
        products: Current collection snapshot, possibly empty or stale

    Returns:
        DashboardStats with the item count and the total value rendered
        with exactly two decimals
    """
    return DashboardStats(
        count=len(products),
        total_value=f"{total_value(products):.2f}"
    )


def render_card(product: Product) -> ProductCard:
    return ProductCard(
        id=product.id,
        name=product.name,
        description=product.description or NO_DESCRIPTION,
        price=product.price,
        quantity=product.quantity
    )


class DashboardView:
    """
    View layer for the dashboard.
    Handles the transformation of controller state to the API response model.
    """

    @staticmethod
    def render(
        api_status: ApiStatus,
        state: ViewState,
        products: Sequence[Product],
        show_form: bool = False,
        draft: Optional[ProductDraft] = None
    ) -> DashboardResponse:
        """
        Render the dashboard.

        Args:
            api_status: Health monitor status
            state: Loading flag and error banner
            products: Current collection snapshot
            show_form: Whether the creation form is visible
            draft: Draft values, only rendered while the form is visible

        Returns:
            DashboardResponse: The formatted API response
        """
        cards: List[ProductCard] = []
        empty_message = None
        # The grid is replaced by the loading indicator until the first fetch settles.
        if not state.loading:
            cards = [render_card(product) for product in products]
            if not cards:
                empty_message = EMPTY_MESSAGE

        return DashboardResponse(
            api_status=api_status,
            status_label=api_status.value.upper(),
            loading=state.loading,
            error=state.error,
            show_form=show_form,
            draft=draft if show_form else None,
            stats=compute_stats(products),
            products=cards,
            empty_message=empty_message
        )
