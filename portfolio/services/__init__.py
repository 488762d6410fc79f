"""
Services package - request binding, upload handling and orchestration on top
of the repositories. One registry per app, built once at startup.
"""

from flask import current_app

from portfolio.repositories import (
    BlogPostRepository,
    CertificateRepository,
    EducationRepository,
    ExperienceRepository,
    ProjectRepository,
    SectionRepository,
    SettingRepository,
    SkillRepository,
    SocialLinkRepository,
    TestimonialRepository,
    normalize_tag_name,
)
from .blog_service import BlogService
from .certificate_service import CertificateService
from .content_service import SectionService, SettingService, SocialLinkService
from .profile_service import EducationService, ExperienceService, TestimonialService
from .project_service import ProjectService
from .skill_service import SkillService

EXTENSION_KEY = "portfolio"


class ServiceRegistry:
    def __init__(self, upload_gateway, tag_normalizer=normalize_tag_name, session=None):
        self.uploads = upload_gateway
        self.projects = ProjectService(ProjectRepository(session, tag_normalizer), upload_gateway)
        self.blog = BlogService(BlogPostRepository(session, tag_normalizer))
        self.skills = SkillService(SkillRepository(session), upload_gateway)
        self.certificates = CertificateService(CertificateRepository(session), upload_gateway)
        self.education = EducationService(EducationRepository(session))
        self.experiences = ExperienceService(ExperienceRepository(session))
        self.testimonials = TestimonialService(TestimonialRepository(session))
        self.sections = SectionService(SectionRepository(session))
        self.social_links = SocialLinkService(SocialLinkRepository(session))
        self.settings = SettingService(SettingRepository(session))


def get_services() -> ServiceRegistry:
    return current_app.extensions[EXTENSION_KEY]
