import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database_models import Authority, Usuario as UsuarioRow, usuario_authority
from app.config import SYSTEM_ACCOUNT
from app.models.usuario import BIGINT_MAX, BIGINT_MIN, NovoUsuario, Usuario

logger = logging.getLogger(__name__)


def _to_domain(row: UsuarioRow, authorities=frozenset()) -> Usuario:
    return Usuario(
        id=row.id,
        cpf=row.cpf,
        nome=row.nome,
        data_nascimento=row.data_nascimento,
        authorities=frozenset(authorities),
        created_by=row.created_by,
        created_date=row.created_date,
        last_modified_by=row.last_modified_by,
        last_modified_date=row.last_modified_date,
    )


def _utcnow() -> datetime:
    # SQLite guarda DateTime sem fuso: gravamos sempre em UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _valid_id(usuario_id: int) -> bool:
    return BIGINT_MIN <= usuario_id <= BIGINT_MAX


class AuthorityRepository:
    """Acesso à tabela de authorities (chave = nome)."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_name(self, name: str) -> Optional[Authority]:
        return self.db.get(Authority, name)

    def find_all_by_names(self, names: Iterable[str]) -> List[Authority]:
        names = set(names)
        if not names:
            return []
        stmt = select(Authority).where(Authority.name.in_(names))
        return list(self.db.scalars(stmt))

    def ensure_defaults(self, names: Iterable[str]) -> List[str]:
        """Cria as authorities que ainda não existem e devolve os nomes criados."""
        created = []
        try:
            for name in names:
                if self.find_by_name(name) is None:
                    self.db.add(Authority(name=name))
                    created.append(name)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return created


class UsuarioRepository:
    """
    Camada de acesso a dados do Usuário.

    Cada operação é atômica: 'save' faz commit (ou rollback em caso de erro),
    as consultas apenas leem. As authorities ficam na tabela de junção e só
    são lidas por 'find_authorities'.
    """

    def __init__(self, db: Session, auditor: str = SYSTEM_ACCOUNT, clock=_utcnow):
        self.db = db
        self.auditor = auditor
        self.clock = clock
        self.authority_repository = AuthorityRepository(db)

    def save(self, usuario: Union[NovoUsuario, Usuario]) -> Usuario:
        """Insere um NovoUsuario ou atualiza um Usuario já persistido."""
        row = None
        if isinstance(usuario, Usuario):
            row = self.db.get(UsuarioRow, usuario.id)
        if row is None:
            row = UsuarioRow()
            if isinstance(usuario, Usuario):
                row.id = usuario.id
            self.db.add(row)

        now = self.clock()
        if row.created_by is None:
            row.created_by = self.auditor
            row.created_date = now
        row.last_modified_by = self.auditor
        row.last_modified_date = now

        row.cpf = usuario.cpf
        row.nome = usuario.nome
        row.data_nascimento = usuario.data_nascimento

        # Authorities desconhecidas são ignoradas (não são criadas aqui)
        authorities = self.authority_repository.find_all_by_names(usuario.authorities)
        skipped = set(usuario.authorities) - {a.name for a in authorities}
        if skipped:
            logger.debug("Ignorando authorities inexistentes: %s", sorted(skipped))
        row.authorities = authorities
        authority_names = frozenset(a.name for a in authorities)

        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(row)
        return _to_domain(row, authority_names)

    def find_all(self) -> List[Usuario]:
        stmt = select(UsuarioRow).order_by(UsuarioRow.id)
        return [_to_domain(row) for row in self.db.scalars(stmt)]

    def find_by_id(self, usuario_id: int) -> Optional[Usuario]:
        if not _valid_id(usuario_id):
            return None
        row = self.db.get(UsuarioRow, usuario_id)
        if row is None:
            return None
        return _to_domain(row)

    def find_one_by_id(self, usuario_id: int) -> Optional[Usuario]:
        if not _valid_id(usuario_id):
            return None
        stmt = select(UsuarioRow).where(UsuarioRow.id == usuario_id)
        row = self.db.scalars(stmt).first()
        if row is None:
            return None
        return _to_domain(row)

    def find_authorities(self, usuario_id: int) -> frozenset:
        if not _valid_id(usuario_id):
            return frozenset()
        stmt = select(usuario_authority.c.authority_name).where(
            usuario_authority.c.usuario_id == usuario_id
        )
        return frozenset(self.db.scalars(stmt))
