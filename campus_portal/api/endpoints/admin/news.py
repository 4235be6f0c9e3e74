from fastapi import APIRouter, Depends, status
from typing import List

from campus_portal.api.deps import get_news_service
from campus_portal.schemas.base import MessageResponse
from campus_portal.schemas.content import NewsCreate, NewsResponse
from campus_portal.services.news_service import NewsService

router = APIRouter()


@router.get("", response_model=List[NewsResponse])
async def list_news(service: NewsService = Depends(get_news_service)):
    """All news, newest first"""
    return await service.list()


@router.post("", response_model=NewsResponse, status_code=status.HTTP_201_CREATED)
async def publish_news(
    data: NewsCreate,
    service: NewsService = Depends(get_news_service)
):
    return await service.create(data)


@router.delete("/{news_id}", response_model=MessageResponse)
async def delete_news(
    news_id: str,
    service: NewsService = Depends(get_news_service)
):
    return MessageResponse(message=await service.delete(news_id))
