"""Posts 기능 API 라우터입니다. 요청을 검증하고 버전 관리 엔진으로 위임합니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import sessionmaker

from blog.database import get_session_factory
from blog.schemas.post import PostCreate, PostUpdate, PostOut, PublishOut, PostDetailOut, MessageOut
from blog.services.post_service import PostService
from blog.services.transaction import Transactor
from blog.utils import validators

router = APIRouter(prefix="/api/posts", tags=["posts"])


def get_post_service(session_factory: sessionmaker = Depends(get_session_factory)) -> PostService:
    return PostService(Transactor(session_factory))


@router.get("/{post_id}", response_model=PostDetailOut)
def get_post(post_id: str, service: PostService = Depends(get_post_service)):
    validators.validate_id(post_id, "post ID")
    return service.get_by_id(post_id)


@router.post("", response_model=PostOut, status_code=201)
def create_post(data: PostCreate, service: PostService = Depends(get_post_service)):
    validators.validate_create_post(data.title, data.content)
    return service.create(data.title, data.content)


@router.put("/{post_id}", response_model=PostOut)
def update_post(post_id: str, data: PostUpdate, service: PostService = Depends(get_post_service)):
    validators.validate_id(post_id, "post ID")
    validators.validate_update_post(data.title, data.content)
    return service.update(post_id, data.title, data.content)


@router.post("/{post_id}/publish", response_model=PublishOut)
def publish_post(post_id: str, service: PostService = Depends(get_post_service)):
    validators.validate_id(post_id, "post ID")
    return service.publish(post_id)


@router.delete("/{post_id}", response_model=MessageOut)
def delete_post_draft(post_id: str, service: PostService = Depends(get_post_service)):
    validators.validate_id(post_id, "post ID")
    service.delete_draft(post_id)
    return {"message": "Post version deleted"}
