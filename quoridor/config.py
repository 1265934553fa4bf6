import logging
import os
from functools import lru_cache
from typing import NamedTuple, Tuple

from dotenv import load_dotenv

from quoridor.ai.constants import DEFAULT_MINIMAX_DEPTH, DEFAULT_TABLE_SIZE, WALL_WEIGHT

load_dotenv()


class Settings(NamedTuple):
    search_depth: int
    table_size: int
    wall_weight: float
    log_level: str
    cors_origins: Tuple[str, ...]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    origins = os.getenv("QUORIDOR_CORS_ORIGINS", "*")
    return Settings(
        search_depth=int(os.getenv("QUORIDOR_SEARCH_DEPTH", DEFAULT_MINIMAX_DEPTH)),
        table_size=int(os.getenv("QUORIDOR_TABLE_SIZE", DEFAULT_TABLE_SIZE)),
        wall_weight=float(os.getenv("QUORIDOR_WALL_WEIGHT", WALL_WEIGHT)),
        log_level=os.getenv("QUORIDOR_LOG_LEVEL", "WARNING").upper(),
        cors_origins=tuple(origin.strip() for origin in origins.split(",") if origin.strip()),
    )


def configure_logging(level: str = "WARNING", filename: str = None) -> None:
    logging.basicConfig(
        filename=filename,
        level=getattr(logging, level, logging.WARNING),
        format='%(asctime)s %(name)s %(levelname)s %(message)s'
    )
