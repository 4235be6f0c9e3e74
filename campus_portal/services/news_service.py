from campus_portal.models.news import News
from campus_portal.schemas.content import NewsCreate, NewsResponse
from campus_portal.services.broadcast import PortalEvent
from campus_portal.services.content_service import ContentService, require_fields


class NewsService(ContentService[News]):
    """News posts and announcements, newest first"""

    model = News
    response_schema = NewsResponse
    entity_name = "News"
    created_event = PortalEvent.NEWS_PUBLISHED
    deleted_event = PortalEvent.NEWS_DELETED

    def _list_order(self):
        return News.published_at.desc()

    async def create(self, data: NewsCreate) -> NewsResponse:
        require_fields({"title": data.title, "content": data.content}, "Title and content are required")

        news = News(title=data.title.strip(), content=data.content)
        return await self._persist(news)
