"""
Repository for Certificate database operations
"""

from portfolio.models import Certificate
from portfolio.repositories.base import CrudRepository


class CertificateRepository(CrudRepository):
    model = Certificate
    entity_name = "Certificate"
