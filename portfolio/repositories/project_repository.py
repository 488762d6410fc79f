"""
Repository for Project database operations
"""

from portfolio.models import Project, ProjectTag, ProjectTagRelation
from portfolio.repositories.taggable import TaggableRepository


class ProjectRepository(TaggableRepository):
    """Projects and their project_tags"""

    model = Project
    entity_name = "Project"
    ordering = ("display_order", "-created_at")
    tag_model = ProjectTag
    relation_model = ProjectTagRelation
    owner_key = "project_id"
    tag_family = "project"
