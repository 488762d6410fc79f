"""
Models package - one module per aggregate
"""

from .project import Project, ProjectTag, ProjectTagRelation
from .blog import BlogPost, BlogTag, BlogPostTag
from .skill import Skill
from .certificate import Certificate
from .education import Education, EducationAchievement
from .experience import Experience, ExperienceResponsibility, ExperienceSkill
from .testimonial import Testimonial
from .section import Section
from .social_link import SocialLink
from .setting import Setting

__all__ = [
    "Project",
    "ProjectTag",
    "ProjectTagRelation",
    "BlogPost",
    "BlogTag",
    "BlogPostTag",
    "Skill",
    "Certificate",
    "Education",
    "EducationAchievement",
    "Experience",
    "ExperienceResponsibility",
    "ExperienceSkill",
    "Testimonial",
    "Section",
    "SocialLink",
    "Setting",
]
