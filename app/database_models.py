from sqlalchemy import BigInteger, Column, Date, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship
from .database import Base

# Tabela de junção Usuário <-> Authority (muitos-para-muitos)
usuario_authority = Table(
    "usuario_authority",
    Base.metadata,
    Column("usuario_id", Integer, ForeignKey("usuarios.id"), primary_key=True),
    Column("authority_name", String(50), ForeignKey("authorities.name"), primary_key=True),
)


# 1. Modelo de Tabela para Authorities (perfis de acesso)
class Authority(Base):
    __tablename__ = "authorities"
    name = Column(String(50), primary_key=True)

    def __repr__(self):
        return f"<Authority(name='{self.name}')>"


# 2. Modelo de Tabela para Usuários
class Usuario(Base):
    __tablename__ = "usuarios"
    id = Column(Integer, primary_key=True, autoincrement=True)
    cpf = Column(BigInteger, unique=True, nullable=False, index=True)
    nome = Column(String(50))
    data_nascimento = Column(Date)

    # Campos de auditoria
    created_by = Column(String(50), nullable=False)
    created_date = Column(DateTime)
    last_modified_by = Column(String(50))
    last_modified_date = Column(DateTime)

    # Carregado apenas quando acessado (lazy)
    authorities = relationship("Authority", secondary=usuario_authority, lazy="select")

    def __repr__(self):
        return f"<Usuario(cpf='{self.cpf}', nome='{self.nome}', data_nascimento='{self.data_nascimento}')>"
