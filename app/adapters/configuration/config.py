# app/adapters/configuration/config.py

import json
from typing import Annotated, Optional, List, Union
from logging import getLevelName
from pydantic import PostgresDsn, field_validator, model_validator, ConfigDict
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"

    # Database
    DB_DRIVER: str = "asyncpg"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "cooperativa"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    TEST_MODE: bool = False
    TEST_POSTGRES_DB: str = ""
    DATABASE_URL: Optional[str] = None
    CREATE_TABLES_ON_STARTUP: bool = False

    # Nova flag de debug
    DEBUG: bool = False

    # CORS
    # Lista CSV ou JSON; a conversão fica no validador abaixo
    CORS_ORIGINS: Annotated[List[str], NoDecode] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Provisionamento
    GENERATED_PASSWORD_LENGTH: int = 8

    # Email (fastapi-mail)
    MAIL_ENABLED: bool = False
    MAIL_USERNAME: str = ""
    MAIL_PASSWORD: str = ""
    MAIL_FROM: str = "nao-responda@cooperativa.org.br"
    MAIL_FROM_NAME: str = "Cooperativa de Catadores"
    MAIL_SERVER: str = "localhost"
    MAIL_PORT: int = 587
    MAIL_STARTTLS: bool = True
    MAIL_SSL_TLS: bool = False

    @model_validator(mode="after")
    def assemble_db_url(self):
        if self.DATABASE_URL:
            return self

        db_name = self.TEST_POSTGRES_DB if self.TEST_MODE else self.POSTGRES_DB
        self.DATABASE_URL = str(PostgresDsn.build(
            scheme=f"postgresql+{self.DB_DRIVER}",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            path=db_name,
        ))
        return self

    @field_validator("CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """
        Aceita string CSV (ex: 'a,b,c'), lista JSON em string ou lista.
        """
        if isinstance(v, str) and v.strip().startswith("["):
            v = json.loads(v)
        elif isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, list):
            return v
        raise ValueError(f"CORS_ORIGINS inválido: {v!r}")

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Garante que o valor é um nível válido do logging"""
        lvl = v.upper()
        if not isinstance(getLevelName(lvl), int):
            raise ValueError(f"LOG_LEVEL inválido: {v!r}")
        return lvl

    @field_validator("GENERATED_PASSWORD_LENGTH")
    def validate_password_length(cls, v: int) -> int:
        if v < 4:
            raise ValueError("GENERATED_PASSWORD_LENGTH deve ser pelo menos 4")
        return v

    model_config = ConfigDict(env_file=".env", extra="ignore")


settings = Settings()
