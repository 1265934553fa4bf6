# quoridor/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quoridor.api.routes import router as game_router
from quoridor.config import configure_logging, get_settings

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="Quoridor Engine API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(game_router)


@app.get("/")
async def root():
    return {"message": "Quoridor Engine API"}
