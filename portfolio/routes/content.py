from flask_restx import Namespace

from portfolio.routes import register_crud

ns_sections = Namespace("sections", description="Page sections")
ns_social_links = Namespace("social-links", description="Social profile links")
ns_settings = Namespace("settings", description="Key/value site settings")

register_crud(ns_sections, "sections", "Section")
register_crud(ns_social_links, "social_links", "Social link")
register_crud(ns_settings, "settings", "Setting")
