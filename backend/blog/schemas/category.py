"""카테고리 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import List
from datetime import datetime


class CategoryRequest(BaseModel):
    name: str = ""


class CategoryOut(BaseModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AttachCategoriesRequest(BaseModel):
    post_version_id: str = ""
    category_ids: List[str] = []
