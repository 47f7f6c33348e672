import os
from dotenv import load_dotenv

# Lê as variáveis do arquivo .env (se existir) antes de qualquer leitura
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./usuarios.db")

# Nome usado nos cabeçalhos de alerta (X-<APP_NAME>-alert, X-<APP_NAME>-error)
APP_NAME = os.getenv("APP_NAME", "bdApp")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))

# Authorities criadas na inicialização quando ainda não existem
DEFAULT_AUTHORITIES = ("ROLE_ADMIN", "ROLE_USER")

# Usuário registrado nos campos de auditoria (não há autenticação)
SYSTEM_ACCOUNT = os.getenv("SYSTEM_ACCOUNT", "system")
