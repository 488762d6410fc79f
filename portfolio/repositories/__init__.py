"""
Repositories package - query and persistence logic, one repository per aggregate
"""

from .base import CrudRepository, unit_of_work
from .taggable import TagAssociation, TaggableRepository, TagStore, fold_tag_name, normalize_tag_name
from .project_repository import ProjectRepository
from .blog_repository import BlogPostRepository
from .skill_repository import SkillRepository
from .certificate_repository import CertificateRepository
from .education_repository import EducationRepository
from .experience_repository import ExperienceRepository
from .testimonial_repository import TestimonialRepository
from .content_repository import SectionRepository, SettingRepository, SocialLinkRepository

__all__ = [
    "CrudRepository",
    "unit_of_work",
    "TagStore",
    "TagAssociation",
    "TaggableRepository",
    "normalize_tag_name",
    "fold_tag_name",
    "ProjectRepository",
    "BlogPostRepository",
    "SkillRepository",
    "CertificateRepository",
    "EducationRepository",
    "ExperienceRepository",
    "TestimonialRepository",
    "SectionRepository",
    "SocialLinkRepository",
    "SettingRepository",
]
