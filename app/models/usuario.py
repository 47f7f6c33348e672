from datetime import date, datetime
from typing import FrozenSet, List, Optional
from pydantic import BaseModel, ConfigDict, Field

# Limites de um BIGINT com sinal (faixa do banco)
BIGINT_MIN = -(2**63)
BIGINT_MAX = 2**63 - 1


class AuthorityRef(BaseModel):
    """Referência a uma Authority pelo nome (ex: ROLE_USER)."""
    name: str = Field(..., max_length=50)


# ----------------------------------------------------
# 1. PAYLOAD DE ENTRADA
# O corpo do POST aceita 'id' apenas para poder rejeitá-lo.
# ----------------------------------------------------
class UsuarioPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(None, description="Deve vir vazio na criação.")
    cpf: int = Field(..., ge=0, le=BIGINT_MAX, description="CPF do usuário (único).")
    nome: Optional[str] = Field(None, max_length=50)
    data_nascimento: Optional[date] = Field(None, alias="dataNascimento")
    authorities: List[AuthorityRef] = Field(default_factory=list)

    def to_novo_usuario(self) -> "NovoUsuario":
        return NovoUsuario(
            cpf=self.cpf,
            nome=self.nome,
            data_nascimento=self.data_nascimento,
            authorities=frozenset(a.name for a in self.authorities),
        )


# ----------------------------------------------------
# 2. USUÁRIO AINDA NÃO PERSISTIDO
# Não possui identificador; duas instâncias distintas nunca são iguais.
# ----------------------------------------------------
class NovoUsuario(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cpf: int = Field(..., ge=0, le=BIGINT_MAX)
    nome: Optional[str] = Field(None, max_length=50)
    data_nascimento: Optional[date] = Field(None, alias="dataNascimento")
    authorities: FrozenSet[str] = Field(default_factory=frozenset)

    def __eq__(self, other):
        return self is other

    def __hash__(self):
        return id(self)


# ----------------------------------------------------
# 3. USUÁRIO PERSISTIDO
# O 'id' é imutável e define sozinho a igualdade.
# 'authorities' nunca é exportado nas respostas.
# ----------------------------------------------------
class Usuario(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(..., ge=BIGINT_MIN, le=BIGINT_MAX, description="Identificador gerado pelo banco.")
    cpf: int = Field(..., ge=0, le=BIGINT_MAX)
    nome: Optional[str] = None
    data_nascimento: Optional[date] = Field(None, alias="dataNascimento")
    authorities: FrozenSet[str] = Field(default_factory=frozenset, exclude=True)

    # Auditoria: preenchida pelo repositório, apenas leitura na API
    created_by: Optional[str] = Field(None, alias="createdBy")
    created_date: Optional[datetime] = Field(None, alias="createdDate")
    last_modified_by: Optional[str] = Field(None, alias="lastModifiedBy")
    last_modified_date: Optional[datetime] = Field(None, alias="lastModifiedDate")

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Usuario):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash((Usuario, self.id))

    def __str__(self):
        return f"Usuario{{cpf='{self.cpf}', nome='{self.nome}', dataNascimento='{self.data_nascimento}'}}"
