from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class Settings(BaseSettings):
    # Base de datos
    db_url: str = Field("sqlite+aiosqlite:///./blog.sqlite3", alias="DB_URL")

    # Tokens
    jwt_secret: str = Field(..., alias="JWT_SECRET")
    jwt_alg: str = Field("HS256", alias="JWT_ALG")
    token_ttl_hours: int = Field(72, alias="TOKEN_TTL_HOURS")

    # Hash de contraseñas
    bcrypt_rounds: int = Field(12, alias="BCRYPT_ROUNDS")

    # Fotos de perfil
    upload_dir: str = Field("uploads", alias="UPLOAD_DIR")
    max_upload_bytes: int = Field(10 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")
    profile_pic_required: bool = Field(False, alias="PROFILE_PIC_REQUIRED")

    # HTTP
    cors_origins: list[str] = Field(["http://localhost:3000"], alias="CORS_ORIGINS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("jwt_alg")
    @classmethod
    def _hmac_only(cls, v: str) -> str:
        if v not in HMAC_ALGORITHMS:
            raise ValueError(f"JWT_ALG must be one of {', '.join(HMAC_ALGORITHMS)}")
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def _bcrypt_range(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v


settings = Settings()
