"""Categories 기능 API 라우터입니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import sessionmaker

from blog.database import get_session_factory
from blog.schemas.category import AttachCategoriesRequest, CategoryOut, CategoryRequest
from blog.schemas.post import MessageOut
from blog.services.category_service import CategoryService
from blog.services.transaction import Transactor
from blog.utils import validators

router = APIRouter(prefix="/api/categories", tags=["categories"])


def get_category_service(session_factory: sessionmaker = Depends(get_session_factory)) -> CategoryService:
    return CategoryService(Transactor(session_factory))


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(data: CategoryRequest, service: CategoryService = Depends(get_category_service)):
    return service.create(data.name)


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: str,
    data: CategoryRequest,
    service: CategoryService = Depends(get_category_service),
):
    validators.validate_id(category_id, "category id")
    return service.update(category_id, data.name)


@router.post("/attach", response_model=MessageOut)
def attach_categories(data: AttachCategoriesRequest, service: CategoryService = Depends(get_category_service)):
    service.attach_to_post_version(data.post_version_id, data.category_ids)
    return {"message": "category attached to post version successfully"}
