import logging
from app.config import DEFAULT_AUTHORITIES
from app.repositories import AuthorityRepository

logger = logging.getLogger(__name__)


def create_default_authorities_if_not_exist(session_factory, names=DEFAULT_AUTHORITIES):
    """Cria as authorities padrão (ROLE_ADMIN, ROLE_USER) se elas não existirem."""
    db = session_factory()
    try:
        created = AuthorityRepository(db).ensure_defaults(names)
        if created:
            logger.info("Authorities padrão criadas: %s", ", ".join(created))
        else:
            logger.debug("Authorities padrão já existem.")
        return created
    finally:
        db.close()
