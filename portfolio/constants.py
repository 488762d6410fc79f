import os
from enum import Enum

APP_DIR = os.path.dirname(os.path.abspath(__file__))
CONFIG_DIR = os.environ.get("PORTFOLIO_CONFIG_DIR", os.path.join(os.getcwd(), "config"))
CONFIG_FILE = os.path.join(CONFIG_DIR, "settings.yaml")
DB_FILE = os.path.join(CONFIG_DIR, "portfolio.db")
ALEMBIC_DIR = os.path.join(APP_DIR, "migrations")
ALEMBIC_CONF = os.path.join(ALEMBIC_DIR, "alembic.ini")

PORTFOLIO_DB = "sqlite:///" + DB_FILE

SERVICE_NAME = "portfolio-api"
BUILD_VERSION = "1.0.0"


class DeployMode(str, Enum):
    STANDALONE = "standalone"
    SERVERLESS = "serverless"


class StorageBackend(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


DEFAULT_SETTINGS = {
    "server": {
        "host": "0.0.0.0",
        "port": 8080,
        "deploy_mode": DeployMode.STANDALONE.value,
        "cors_allowed_origins": ["*"],
    },
    "database": {
        "url": PORTFOLIO_DB,
        "skip": False,
    },
    "uploads": {
        "provider": StorageBackend.LOCAL.value,
        "path": "./uploads",
        "public_prefix": "/uploads",
        "remote": {
            "url": "",
            "api_key": "",
            "bucket": "uploads",
            "timeout": 60,
        },
    },
    "tags": {
        "normalize": False,
    },
    "logging": {
        "level": "INFO",
        "format": "console",
    },
}

# Upload folders
PROJECTS_FOLDER = "projects"
SKILLS_FOLDER = "skills"
CERTIFICATES_FOLDER = "certificates"

# Upload validation rules
PROJECT_IMAGE_MAX_MB = 10
PROJECT_IMAGE_EXTENSIONS = [".jpg", ".jpeg", ".png", ".webp", ".gif", ".svg"]
SKILL_ICON_MAX_MB = 5
SKILL_ICON_EXTENSIONS = [".jpg", ".jpeg", ".png", ".webp", ".svg", ".ico"]
CERTIFICATE_IMAGE_MAX_MB = 10
CERTIFICATE_IMAGE_EXTENSIONS = [".jpg", ".jpeg", ".png", ".webp", ".pdf"]

DEFAULT_UPLOAD_EXTENSION = ".dat"
REMOTE_CACHE_CONTROL = "public, max-age=31536000"

TAG_NAME_MAX_LENGTH = 50

PROJECT_STATUSES = ["draft", "published", "archived"]
BLOG_STATUSES = ["draft", "published", "archived"]
TESTIMONIAL_STATUSES = ["pending", "approved", "rejected"]
