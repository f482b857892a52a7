from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./lease_signing.db"

    APP_URL: str = "http://localhost:8000"
    SIGN_LINK_EXPIRE_HOURS: int = 24

    # Upper bound for the /initN/ scan (tenant role)
    MAX_INITIAL_FIELDS: int = 6

    # Signed PDFs and audit logs
    SIGNED_DOCS_DIR: str = "signed-leases"
    SIGNED_DOCS_BASE_URL: str = "/files"

    # Stamp fonts (TrueType paths). Missing files fall back to Pillow's default font.
    SIGNATURE_FONT_PATHS: list[str] = [
        "fonts/BrushScript.ttf",
        "fonts/LucidaHandwriting.ttf",
        "fonts/SegoeScript.ttf",
    ]
    INITIALS_FONT_PATH: str = "fonts/Georgia-Italic.ttf"

    # SMTP Configuration (empty host disables email)
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASS: str = ""
    SMTP_FROM: str = ""

    class Config:
        env_file = ".env"


settings = Settings()
