from datetime import date, datetime

import pytest
from sqlalchemy.exc import IntegrityError

from app.database_models import Usuario as UsuarioRow
from app.models.usuario import NovoUsuario, Usuario
from app.repositories import AuthorityRepository, UsuarioRepository


@pytest.fixture
def repository(db):
    return UsuarioRepository(db)


def test_save_novo_usuario_assigns_id(repository):
    saved = repository.save(NovoUsuario(cpf=111, nome="Ana", data_nascimento=date(1990, 1, 1)))
    assert isinstance(saved, Usuario)
    assert saved.id is not None
    assert saved.cpf == 111
    assert saved.data_nascimento == date(1990, 1, 1)


def test_save_existing_usuario_updates_row(repository, db):
    saved = repository.save(NovoUsuario(cpf=111, nome="Ana"))
    updated = repository.save(Usuario(id=saved.id, cpf=111, nome="Ana Maria"))
    assert updated.id == saved.id
    assert repository.find_by_id(saved.id).nome == "Ana Maria"
    assert db.query(UsuarioRow).count() == 1


def test_save_duplicate_cpf_raises_and_keeps_single_row(repository, db):
    repository.save(NovoUsuario(cpf=111))
    with pytest.raises(IntegrityError):
        repository.save(NovoUsuario(cpf=111))
    assert db.query(UsuarioRow).filter(UsuarioRow.cpf == 111).count() == 1


def test_find_all_returns_insertion_order(repository):
    first = repository.save(NovoUsuario(cpf=1))
    second = repository.save(NovoUsuario(cpf=2))
    assert [u.id for u in repository.find_all()] == [first.id, second.id]


def test_find_all_empty(repository):
    assert repository.find_all() == []


def test_find_by_id_missing_returns_none(repository):
    assert repository.find_by_id(999) is None
    assert repository.find_one_by_id(999) is None


def test_find_one_by_id(repository):
    saved = repository.save(NovoUsuario(cpf=5, nome="Eva"))
    found = repository.find_one_by_id(saved.id)
    assert found == saved
    assert found.nome == "Eva"


def test_save_attaches_known_authorities_and_skips_unknown(repository):
    saved = repository.save(
        NovoUsuario(cpf=7, authorities=frozenset({"ROLE_USER", "ROLE_INEXISTENTE"}))
    )
    assert saved.authorities == frozenset({"ROLE_USER"})
    assert repository.find_authorities(saved.id) == frozenset({"ROLE_USER"})


def test_authorities_are_loaded_only_on_request(repository):
    saved = repository.save(NovoUsuario(cpf=8, authorities=frozenset({"ROLE_ADMIN"})))
    assert repository.find_by_id(saved.id).authorities == frozenset()
    assert repository.find_authorities(saved.id) == frozenset({"ROLE_ADMIN"})


def test_default_authorities_are_seeded(db):
    authorities = AuthorityRepository(db)
    assert authorities.find_by_name("ROLE_ADMIN") is not None
    assert authorities.find_by_name("ROLE_USER") is not None
    assert authorities.ensure_defaults(["ROLE_ADMIN", "ROLE_USER"]) == []
    assert authorities.ensure_defaults(["ROLE_AUDITOR"]) == ["ROLE_AUDITOR"]


def test_find_by_id_out_of_range_returns_none(repository):
    assert repository.find_by_id(2**63) is None
    assert repository.find_one_by_id(2**63) is None
    assert repository.find_by_id(-(2**63) - 1) is None
    assert repository.find_authorities(2**63) == frozenset()


def test_save_fills_audit_fields_on_insert(db):
    now = datetime(2024, 1, 10, 12, 0, 0)
    repository = UsuarioRepository(db, auditor="admin", clock=lambda: now)
    saved = repository.save(NovoUsuario(cpf=9))
    assert saved.created_by == "admin"
    assert saved.created_date == now
    assert saved.last_modified_by == "admin"
    assert saved.last_modified_date == now


def test_save_keeps_creation_audit_on_update(db):
    created_at = datetime(2024, 1, 10, 12, 0, 0)
    updated_at = datetime(2024, 2, 1, 8, 30, 0)
    saved = UsuarioRepository(db, auditor="admin", clock=lambda: created_at).save(
        NovoUsuario(cpf=10, nome="Davi")
    )
    updated = UsuarioRepository(db, auditor="system", clock=lambda: updated_at).save(
        Usuario(id=saved.id, cpf=10, nome="Davi Lima")
    )
    assert updated.created_by == "admin"
    assert updated.created_date == created_at
    assert updated.last_modified_by == "system"
    assert updated.last_modified_date == updated_at
