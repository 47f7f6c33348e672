import logging
from fastapi import FastAPI, Request
from sqlalchemy.exc import SQLAlchemyError
from starlette import status
from starlette.responses import JSONResponse

from app.config import APP_NAME

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"


# --- Cabeçalhos de alerta usados pelo cliente web ---
def entity_creation_alert(entity_name: str, param: str, app_name: str = APP_NAME) -> dict:
    return {
        f"X-{app_name}-alert": f"A new {entity_name} is created with identifier {param}",
        f"X-{app_name}-params": param,
    }


def failure_alert(entity_name: str, error_key: str, app_name: str = APP_NAME) -> dict:
    return {
        f"X-{app_name}-error": f"error.{error_key}",
        f"X-{app_name}-params": entity_name,
    }


class BadRequestAlertException(Exception):
    """Erro de entrada do cliente, respondido com 400 e um alerta."""

    def __init__(self, message: str, entity_name: str, error_key: str):
        super().__init__(message)
        self.message = message
        self.entity_name = entity_name
        self.error_key = error_key

    def to_problem(self) -> dict:
        return {
            "title": self.message,
            "status": status.HTTP_400_BAD_REQUEST,
            "entityName": self.entity_name,
            "errorKey": self.error_key,
            "message": f"error.{self.error_key}",
            "params": self.entity_name,
        }


def bad_request_alert_handler(request: Request, exc: BadRequestAlertException):
    return JSONResponse(
        exc.to_problem(),
        status_code=status.HTTP_400_BAD_REQUEST,
        headers=failure_alert(exc.entity_name, exc.error_key),
        media_type=PROBLEM_JSON,
    )


def storage_error_handler(request: Request, exc: SQLAlchemyError):
    # Ex: CPF duplicado. Não há recuperação, apenas registro do erro.
    logger.error("Erro de banco em %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        {
            "title": "Internal Server Error",
            "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "message": "error.http.500",
        },
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        media_type=PROBLEM_JSON,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BadRequestAlertException, bad_request_alert_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
