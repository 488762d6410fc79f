"""Blog posts, their tags and view counting."""

import structlog

from portfolio.constants import BLOG_STATUSES
from portfolio.exceptions import PortfolioException
from portfolio.services.base import CrudService
from portfolio.services.forms import Field, bind, tag_names_from

logger = structlog.get_logger('blog')


class BlogService(CrudService):
    id_label = "blog post ID"
    fields = [
        Field("title", required=True, max_length=255),
        Field("content"),
        Field("excerpt"),
        Field("slug", required=True, max_length=255),
        Field("featured_image", max_length=500),
        Field("publish_date", "datetime"),
        Field("status", default="draft", choices=BLOG_STATUSES, nullable=False),
        Field("view_count", int, default=0, min_value=0, nullable=False),
    ]

    def _viewed(self, post):
        # The response shows the count as it was before this view
        data = post.to_dict()
        try:
            self.repository.increment_view_count(post.id)
        except PortfolioException as e:
            logger.warning("view_count_increment_failed", post_id=data["id"], error=e.message)
        return data

    def list(self):
        return [post.to_dict() for post in self.repository.list_all_with_tags()]

    def list_published(self):
        return [post.to_dict() for post in self.repository.list_published_with_tags()]

    def get(self, id):
        return self._viewed(self.repository.get_by_id_with_tags(self._id(id)))

    def get_by_slug(self, slug):
        return self._viewed(self.repository.get_by_slug_with_tags(slug))

    def create(self, payload):
        values = bind(payload, self.fields)
        post = self.repository.create_with_tags(values, tag_names_from(payload) or [])
        logger.info("blog_post_created", post_id=str(post.id), slug=post.slug)
        return post.to_dict()

    def update(self, id, payload):
        values = bind(payload, self.fields, partial=True)
        post = self.repository.update_with_tags(self._id(id), values, tag_names_from(payload))
        return post.to_dict()

    def delete(self, id):
        return self.repository.delete_with_tags(self._id(id))

    def list_tags(self):
        return [tag.to_dict() for tag in self.repository.get_all_tags()]

    def create_tag(self, payload):
        values = bind(payload, [Field("name", required=True, max_length=50)])
        return self.repository.create_tag(values["name"]).to_dict()
