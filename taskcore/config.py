from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class Config:
    secret_key: str = "change-me"
    database_url: str = "sqlite:///dev.db"
    jwt_secret: str = "dev-secret"
    jwt_leeway_seconds: int = 60
    cors_allowed_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    app_env: str = "production"  # "development" exposes error detail in 500 envelopes
    max_content_length: int = 5 * 1024 * 1024

    @classmethod
    def from_env(cls) -> Config:
        # FRONTEND_URL may list several origins, comma-separated
        frontend = os.getenv("FRONTEND_URL", "")
        origins = [o for o in [u.strip() for u in frontend.split(",")] if o]
        return cls(
            secret_key=os.getenv("SECRET_KEY", "change-me"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///dev.db"),
            jwt_secret=os.getenv("JWT_SECRET", "dev-secret"),
            jwt_leeway_seconds=int(os.getenv("JWT_LEEWAY_SECONDS", "60")),
            cors_allowed_origins=origins or ["http://localhost:3000"],
            app_env=os.getenv("APP_ENV", "production").strip().lower(),
            max_content_length=int(os.getenv("MAX_CONTENT_LENGTH", str(5 * 1024 * 1024))),
        )

    def override(self, d: dict):
        for k, v in d.items():
            if hasattr(self, k):
                setattr(self, k, v)

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    def to_flask_dict(self):
        return {
            "SECRET_KEY": self.secret_key,
            "SQLALCHEMY_DATABASE_URI": self.database_url,
            "JWT_SECRET": self.jwt_secret,
            "JWT_LEEWAY_SECONDS": self.jwt_leeway_seconds,
            "CORS_ALLOWED_ORIGINS": self.cors_allowed_origins,
            "APP_ENV": self.app_env,
            "EXPOSE_ERROR_DETAIL": self.is_development,
            "MAX_CONTENT_LENGTH": self.max_content_length,
            "SESSION_COOKIE_HTTPONLY": True,
            "SESSION_COOKIE_SAMESITE": "Lax",
        }
