"""
Dashboard routes.
Renders the controller state and forwards user intents into it.
"""

from fastapi import APIRouter, Path, Request
from app.models import DashboardResponse, DraftFieldUpdate, ErrorResponse, ProductDraft
from app.controllers.dashboard_controller import DashboardController

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"]
)

BAD_INTENT = {
    400: {
        "description": "Intent not valid in the current form state",
        "model": ErrorResponse
    }
}


def get_controller(request: Request) -> DashboardController:
    # One controller per process, created on startup.
    return request.app.state.dashboard


async def get_dashboard(request: Request) -> DashboardResponse:
    """
    Render the current dashboard state.
    """
    return get_controller(request).render()


async def toggle_form(request: Request) -> DashboardResponse:
    """
    Show or hide the product form. Hiding it discards the draft.
    """
    return get_controller(request).toggle_form()


async def update_draft(request: Request, update: DraftFieldUpdate) -> DashboardResponse:
    """
    Replace one draft field with the raw text typed by the user.
    """
    return get_controller(request).update_draft(update.field, update.value)


async def submit_draft(request: Request) -> DashboardResponse:
    """
    Create a product from the draft, then refetch the collection.
    """
    return await get_controller(request).submit_draft()


async def delete_product(
    request: Request,
    product_id: str = Path(..., description="Server-assigned product id")
) -> DashboardResponse:
    """
    Delete a product, then refetch the collection.
    """
    return await get_controller(request).delete_product(product_id)


async def update_product(
    request: Request,
    draft: ProductDraft,
    product_id: str = Path(..., description="Server-assigned product id")
) -> DashboardResponse:
    """
    Update a product from raw form values, then refetch the collection.
    """
    return await get_controller(request).update_product(product_id, draft)


router.add_api_route("", get_dashboard, methods=["GET"], response_model=DashboardResponse,
                     summary="Render dashboard")
router.add_api_route("/form/toggle", toggle_form, methods=["POST"], response_model=DashboardResponse,
                     summary="Toggle product form")
router.add_api_route("/draft", update_draft, methods=["PATCH"], response_model=DashboardResponse,
                     responses=BAD_INTENT, summary="Edit a draft field")
router.add_api_route("/draft/submit", submit_draft, methods=["POST"], response_model=DashboardResponse,
                     responses=BAD_INTENT, summary="Submit draft")
router.add_api_route("/products/{product_id}", delete_product, methods=["DELETE"],
                     response_model=DashboardResponse, summary="Delete product")
router.add_api_route("/products/{product_id}", update_product, methods=["PUT"],
                     response_model=DashboardResponse, summary="Update product")
