"""Sections, social links and key/value settings."""

from portfolio.services.base import CrudService
from portfolio.services.forms import Field


class SectionService(CrudService):
    id_label = "section ID"
    fields = [
        Field("section_id", required=True, max_length=50),
        Field("label", required=True, max_length=100),
        Field("display_order", int, default=0, nullable=False),
        Field("is_active", bool, default=True, nullable=False),
    ]


class SocialLinkService(CrudService):
    id_label = "social link ID"
    fields = [
        Field("platform", required=True, max_length=50),
        Field("url", required=True, max_length=500),
        Field("icon_name", max_length=50),
        Field("display_order", int, default=0, nullable=False),
        Field("is_active", bool, default=True, nullable=False),
    ]


class SettingService(CrudService):
    id_label = "setting ID"
    fields = [
        Field("key", required=True, max_length=100),
        Field("value"),
        Field("data_type", default="string", max_length=20, nullable=False),
        Field("description"),
    ]
