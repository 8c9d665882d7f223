"""Event categories router module."""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy import func
from sqlalchemy.orm import Session

from ...auth import TokenPayload
from ...db import ListQuery, PageRequest, SortOrder
from ...db.sorting import CategorySortField
from ...models import Event, EventCategory
from ...schemas.category import CategoryCreate, CategoryUpdate
from ..dependencies import ResourceId, get_session, require_admin
from ..errors import APIError, ErrorKind
from ..responses import paginated

logger = logging.getLogger(__name__)

router = APIRouter(tags=["categories"])

CATEGORY_LISTING = ListQuery(
    entity=EventCategory,
    primary_key=EventCategory.category_id,
    default_sort=EventCategory.category_id,
    default_order=SortOrder.ASC,
    sort_fields=CategorySortField,
    sort_columns={
        CategorySortField.NAME: EventCategory.name,
    },
)

def get_category_or_404(session: Session, category_id: int) -> EventCategory:
    category = session.query(EventCategory).filter(EventCategory.category_id == category_id).first()
    if not category:
        raise APIError(ErrorKind.NOT_FOUND, "Category not found")
    return category

def _ensure_unique_name(session: Session, name: str, exclude_id: Optional[int] = None) -> None:
    query = session.query(EventCategory.category_id).filter(func.lower(EventCategory.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(EventCategory.category_id != exclude_id)
    if query.first():
        raise APIError(ErrorKind.CONFLICT, "Category name already exists")

@router.get("/categories", response_model=Dict)
def list_categories(
    response: Response,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """List categories, one page at a time."""
    categories, page_info = CATEGORY_LISTING.run(
        session,
        PageRequest.from_query(page, limit),
        sort=CATEGORY_LISTING.sort_spec(sort_by, sort_order),
    )
    return paginated(response, [category.to_dict() for category in categories], page_info)

@router.get("/categories/{category_id}", response_model=Dict)
def get_category(category_id: ResourceId, session: Session = Depends(get_session)):
    """Get a single category by ID."""
    return get_category_or_404(session, category_id).to_dict()

@router.post("/categories", status_code=201, response_model=Dict)
def create_category(
    payload: CategoryCreate,
    admin: TokenPayload = Depends(require_admin),
    session: Session = Depends(get_session)
):
    """Create a category. Admin only."""
    name = (payload.name or '').strip()
    if not name:
        raise APIError(ErrorKind.VALIDATION_ERROR, "Category name is required")
    _ensure_unique_name(session, name)

    category = EventCategory(name=name, description=payload.description)
    session.add(category)
    session.flush()
    logger.info(f"Admin {admin.user_id} created category {category.category_id} ({name})")
    return category.to_dict()

@router.put("/categories/{category_id}", response_model=Dict)
def update_category(
    category_id: ResourceId,
    payload: CategoryUpdate,
    admin: TokenPayload = Depends(require_admin),
    session: Session = Depends(get_session)
):
    """Rename or re-describe a category. Admin only."""
    category = get_category_or_404(session, category_id)
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise APIError(ErrorKind.VALIDATION_ERROR, "No fields to update")

    if 'name' in changes:
        name = (changes['name'] or '').strip()
        if not name:
            raise APIError(ErrorKind.VALIDATION_ERROR, "Category name cannot be empty")
        _ensure_unique_name(session, name, exclude_id=category_id)
        category.name = name
    if 'description' in changes:
        category.description = changes['description']
    session.flush()
    return category.to_dict()

@router.delete("/categories/{category_id}", status_code=204)
def delete_category(
    category_id: ResourceId,
    admin: TokenPayload = Depends(require_admin),
    session: Session = Depends(get_session)
):
    """Delete a category. Its events are kept and become uncategorized. Admin only."""
    category = get_category_or_404(session, category_id)
    session.query(Event).filter(Event.category_id == category_id).update(
        {Event.category_id: None}, synchronize_session=False
    )
    session.delete(category)
    logger.info(f"Admin {admin.user_id} deleted category {category_id}")
    return Response(status_code=204)
