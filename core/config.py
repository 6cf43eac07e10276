import os
import tempfile
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    if not value:
        return None
    return float(value)


class Settings:
    PROJECT_NAME: str = "Compii Server"
    PROJECT_VERSION: str = "1.0.0"

    # server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "5000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]
    STATIC_DIR: str = os.getenv("STATIC_DIR", os.path.join(BASE_DIR, "static"))

    # compiler settings
    COMPILER_PATH: str = os.getenv("COMPILER_PATH", os.path.join(BASE_DIR, "compii.exe"))
    WORK_DIR: str = os.getenv("WORK_DIR", tempfile.gettempdir())
    SOURCE_SUFFIX: str = os.getenv("SOURCE_SUFFIX", ".compii")

    # unset means the compiler may run for as long as it likes
    COMPILER_TIMEOUT_SECONDS: float | None = _optional_float("COMPILER_TIMEOUT_SECONDS")
    # 0 means no cap on concurrently running compiler processes
    MAX_CONCURRENT_RUNS: int = int(os.getenv("MAX_CONCURRENT_RUNS", "0"))


settings = Settings()
