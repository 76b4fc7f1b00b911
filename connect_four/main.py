import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from connect_four.api.games import router as games_router
from connect_four.api.stats import router as stats_router
from connect_four.core.ai_registry import registry
from connect_four.core.config import configure_logging, settings
from connect_four.engine.errors import GameNotFound, MoveRejected, NotPlayersTurn
from connect_four.services.game_service import game_service
from connect_four.services.statistics import statistics_tracker

configure_logging(settings)
logger = logging.getLogger(__name__)

# Finished games feed the statistics
game_service.events.subscribe_complete(statistics_tracker.on_game_complete)

app = FastAPI(title="Connect Four")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Error mapping ---
@app.exception_handler(MoveRejected)
async def move_rejected_handler(request: Request, exc: MoveRejected):
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "reason": str(exc.reason), "column": exc.column},
    )

@app.exception_handler(NotPlayersTurn)
async def not_players_turn_handler(request: Request, exc: NotPlayersTurn):
    return JSONResponse(status_code=409, content={"detail": str(exc)})

@app.exception_handler(GameNotFound)
async def game_not_found_handler(request: Request, exc: GameNotFound):
    return JSONResponse(status_code=404, content={"detail": "Game not found"})

# Register routers
app.include_router(games_router, prefix="/games", tags=["Games"])
app.include_router(stats_router, prefix="/stats", tags=["Stats"])

@app.get("/difficulties")
async def get_difficulties():
    """Returns the configured AI opponents and their search depth."""
    return [
        {
            "id": key,
            "label": profile.label,
            "difficulty": profile.difficulty.name,
            "depth": profile.difficulty.depth,
        }
        for key, profile in registry.list_all().items()
    ]
