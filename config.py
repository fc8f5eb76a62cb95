import os


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # State lives only as long as the process; point DB_URL at a file to keep it.
    SQLALCHEMY_DATABASE_URI = os.getenv("DB_URL", "sqlite:///:memory:")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "change_me")
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    LOG_DIR = os.getenv("LOG_DIR", os.path.join(BASE_DIR, "logs"))

    SEED_DEMO_DATA = _env_flag("SEED_DEMO_DATA", False)
    ALLOW_NEGATIVE_STOCK = _env_flag("ALLOW_NEGATIVE_STOCK", True)

    DEFAULT_MIN_STOCK = int(os.getenv("DEFAULT_MIN_STOCK", 10))
    SKU_PREFIX = os.getenv("SKU_PREFIX", "SKU-")
    LOCATION_FALLBACK_NAME = os.getenv("LOCATION_FALLBACK_NAME", "N/A")
    IMAGE_PLACEHOLDER_URL = os.getenv(
        "IMAGE_PLACEHOLDER_URL", "https://picsum.photos/seed/{sku}/400/300"
    )
