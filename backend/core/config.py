import os
from typing import Optional, Tuple
from dotenv import load_dotenv

load_dotenv()


def _split_sections(raw: str) -> Tuple[str, ...]:
    return tuple(s.strip() for s in raw.split(",") if s.strip())


class Settings:
    def __init__(
        self,
        port: Optional[int] = None,
        host: Optional[str] = None,
        data_dir: Optional[str] = None,
        upload_dir: Optional[str] = None,
        sections: Optional[Tuple[str, ...]] = None,
        log_level: Optional[str] = None,
    ):
        self.port: int = port if port is not None else int(os.getenv("PORT", "5000"))
        self.host: str = host or os.getenv("HOST", "0.0.0.0")

        # Storage locations (created on startup if missing)
        self.data_dir: str = data_dir or os.getenv("DATA_DIR", "data")
        self.upload_dir: str = upload_dir or os.getenv("UPLOAD_DIR", "uploads")

        self.sections: Tuple[str, ...] = tuple(sections) if sections else _split_sections(
            os.getenv("STOCK_SECTIONS", "A,B,C")
        )
        self.log_level: str = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()

    def stock_path(self, section: str) -> str:
        return os.path.join(self.data_dir, f"stock_{section}.json")

    @property
    def log_path(self) -> str:
        return os.path.join(self.data_dir, "transactions.json")


settings = Settings()
