from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


def build_engine(database_url: str):
    """Cria a Engine de conexão para a URL informada."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url)

    # 'check_same_thread' é necessário apenas para SQLite
    connect_args = {"check_same_thread": False}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # Banco em memória: todas as sessões precisam da mesma conexão
        return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(database_url, connect_args=connect_args)


def build_session_factory(bind):
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


# Base Declarativa
# Nossas classes de modelo herdarão desta
Base = declarative_base()


# --- Dependência para obter a sessão ---
def get_db(request: Request):
    """Abre uma sessão por requisição usando a fábrica criada em create_app."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
