from flask_restx import Api
import logging

from portfolio import __version__
from portfolio.routes.blog import ns_blog
from portfolio.routes.certificates import ns_certificates
from portfolio.routes.content import ns_sections, ns_settings, ns_social_links
from portfolio.routes.profile import ns_education, ns_experiences, ns_testimonials
from portfolio.routes.projects import ns_project_tags, ns_projects, ns_tags
from portfolio.routes.skills import ns_skills

logger = logging.getLogger('main')


def init_rest_api(app):
    api = Api(app, version=__version__, title='Portfolio API',
        description='Portfolio content-management API',
        doc='/docs'
    )

    # Versioned resources
    api.add_namespace(ns_projects, path='/v1/projects')
    api.add_namespace(ns_tags, path='/v1/tags')
    api.add_namespace(ns_blog, path='/v1/blog')
    api.add_namespace(ns_skills, path='/v1/skills')
    api.add_namespace(ns_certificates, path='/v1/certificates')
    api.add_namespace(ns_education, path='/v1/education')
    api.add_namespace(ns_experiences, path='/v1/experiences')
    api.add_namespace(ns_testimonials, path='/v1/testimonials')
    api.add_namespace(ns_sections, path='/v1/sections')
    api.add_namespace(ns_social_links, path='/v1/social-links')
    api.add_namespace(ns_settings, path='/v1/settings')

    # Unversioned, kept for existing admin clients
    api.add_namespace(ns_project_tags, path='/projects')

    logger.info("REST API initialized with docs at /api/docs")
    return api
