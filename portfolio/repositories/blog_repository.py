"""
Repository for BlogPost database operations
"""

import logging

from sqlalchemy import update

from portfolio.exceptions import NotFoundException
from portfolio.models import BlogPost, BlogPostTag, BlogTag
from portfolio.repositories.base import unit_of_work
from portfolio.repositories.taggable import TaggableRepository

logger = logging.getLogger("main")


class BlogPostRepository(TaggableRepository):
    """Blog posts and their blog_tags"""

    model = BlogPost
    entity_name = "Blog post"
    ordering = ("-created_at",)
    unique_field = "slug"
    tag_model = BlogTag
    relation_model = BlogPostTag
    owner_key = "post_id"
    tag_family = "blog"

    def get_by_slug_with_tags(self, slug):
        post = self._query().filter(BlogPost.slug == slug).one_or_none()
        if post is None:
            raise NotFoundException(f"Blog post with slug '{slug}' not found")
        return self._attach(post)

    def list_published_with_tags(self):
        posts = (
            self._query()
            .filter(BlogPost.status == "published")
            .order_by(BlogPost.publish_date.desc(), BlogPost.created_at.desc())
            .all()
        )
        return self._attach_many(posts)

    def increment_view_count(self, id):
        """Atomic `view_count + 1`; returns False when the post is gone."""
        with unit_of_work(self.session):
            result = self.session.execute(
                update(BlogPost)
                .where(BlogPost.id == id)
                .values(view_count=BlogPost.view_count + 1)
                .execution_options(synchronize_session=False)
            )
        return result.rowcount > 0
