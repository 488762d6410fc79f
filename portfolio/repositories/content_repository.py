"""
Repositories for site content: sections, social links and key/value settings
"""

from portfolio.models import Section, Setting, SocialLink
from portfolio.repositories.base import CrudRepository


class SectionRepository(CrudRepository):
    model = Section
    entity_name = "Section"
    ordering = ("display_order", "created_at")
    unique_field = "section_id"


class SocialLinkRepository(CrudRepository):
    model = SocialLink
    entity_name = "Social link"
    ordering = ("display_order", "created_at")
    unique_field = "platform"


class SettingRepository(CrudRepository):
    model = Setting
    entity_name = "Setting"
    ordering = ("key",)
    unique_field = "key"
