import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request

# --- Configuração e logging ---
from app.config import DATABASE_URL, HOST, LOG_LEVEL, PORT
from app.logging_config import configure_logging
# -----------------------------

# BANCO DE DADOS
from app.database import Base, build_engine, build_session_factory
from app import database_models  # noqa: F401 (registra as tabelas no Base)
from app.authority_utils import create_default_authorities_if_not_exist
from app.errors import register_exception_handlers
#----------------------------------------------------------
from app.routers.usuarios import router as usuarios_router
# ---------------------------------

logger = logging.getLogger(__name__)


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """Monta a aplicação: banco, authorities padrão, rotas e tratadores de erro."""
    configure_logging(LOG_LEVEL)

    engine = build_engine(database_url or DATABASE_URL)
    session_factory = build_session_factory(engine)
    Base.metadata.create_all(bind=engine)
    create_default_authorities_if_not_exist(session_factory)

    app = FastAPI(title="Cadastro de Usuários")
    app.state.engine = engine
    app.state.session_factory = session_factory

    register_exception_handlers(app)
    app.include_router(usuarios_router)

    @app.get("/status")
    def status(request: Request):
        return {
            "status": "ok",
            "host": request.client.host if request.client else None,
            "port": request.url.port or 80,
            "scheme": request.url.scheme,
            "path": request.url.path,
        }

    logger.debug("Aplicação criada usando %s", engine.url)
    return app


# Servidor: uvicorn main:create_app --factory
if __name__ == "__main__":
    uvicorn.run("main:create_app", factory=True, host=HOST, port=PORT)
