"""
Schema do endpoint de healthcheck.
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """
    Status da aplicação.

    Attributes:
        status: "healthy" quando a aplicação responde
        app_name: Nome da aplicação (APP_NAME)
        version: Versão da API
        environment: development, staging ou production
    """

    status: str
    app_name: str
    version: str
    environment: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": "healthy",
                    "app_name": "Book Network API",
                    "version": "1.0.0",
                    "environment": "development",
                }
            ]
        }
    }
