import logging
from typing import List
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from starlette import status

from app.database import get_db
from app.errors import BadRequestAlertException, entity_creation_alert
from app.models.usuario import Usuario, UsuarioPayload
from app.repositories import UsuarioRepository

logger = logging.getLogger(__name__)

ENTITY_NAME = "usuario"

router = APIRouter(prefix="/api/usuarios", tags=["usuarios"])


def get_usuario_repository(db: Session = Depends(get_db)) -> UsuarioRepository:
    return UsuarioRepository(db)


# Rota 1: Criar Usuário
@router.post(
    "",
    name="create_usuario",
    response_model=Usuario,
    status_code=status.HTTP_201_CREATED,
)
def create_usuario(
    usuario: UsuarioPayload,
    response: Response,
    repository: UsuarioRepository = Depends(get_usuario_repository),
):
    """
    Cria um novo usuário.

    Responde 201 com o usuário criado e o cabeçalho Location, ou 400 se o
    corpo já trouxer um 'id'.
    """
    logger.debug("REST request to save Usuario : %s", usuario)
    if usuario.id is not None:
        raise BadRequestAlertException(
            "A new usuario cannot already have an ID", ENTITY_NAME, "idexists"
        )

    result = repository.save(usuario.to_novo_usuario())

    response.headers["Location"] = str(router.url_path_for("get_usuario", usuario_id=str(result.id)))
    response.headers.update(entity_creation_alert(ENTITY_NAME, str(result.id)))
    return result


# Rota 2: Listar Usuários
@router.get("", name="list_usuarios", response_model=List[Usuario])
def list_usuarios(repository: UsuarioRepository = Depends(get_usuario_repository)):
    logger.debug("REST request to get all usuarios")
    return repository.find_all()


# Rota 3: Buscar Usuário pelo id
@router.get("/{usuario_id}", name="get_usuario", response_model=Usuario)
def get_usuario(
    usuario_id: int,
    repository: UsuarioRepository = Depends(get_usuario_repository),
):
    logger.debug("REST request to get Usuario : %s", usuario_id)
    usuario = repository.find_by_id(usuario_id)
    if usuario is None:
        # 404 sem corpo
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return usuario
