from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from draughts.config import GameConfig
from draughts.errors import ForcedCaptureViolation

from .schemas import AIMoveRequest, ConfigRequest, MoveRequest, ResetRequest
from .serializers import serialize_moves
from .session import GameSession


@contextmanager
def _http_errors() -> Iterator[None]:
    """Translate engine errors: bad requests are 400, wrong game state is 409."""
    try:
        yield
    except ForcedCaptureViolation as exc:
        detail = {"message": str(exc), "forced": serialize_moves(exc.forced)}
        raise HTTPException(status_code=400, detail=detail) from exc
    except (ValueError, IndexError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RuntimeError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


def create_app(config: Optional[GameConfig] = None) -> FastAPI:
    app = FastAPI(title="Draughts Engine", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    session = GameSession(config)
    app.state.session = session

    def get_session() -> GameSession:
        return session

    @app.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/board")
    def read_board(session: GameSession = Depends(get_session)):
        return session.serialize()

    @app.get("/valid-moves")
    def read_valid_moves(
        row: int = Query(..., ge=0),
        col: int = Query(..., ge=0),
        session: GameSession = Depends(get_session),
    ):
        with _http_errors():
            return session.get_valid_moves(row, col)

    @app.post("/move")
    def play_move(payload: MoveRequest, session: GameSession = Depends(get_session)):
        with _http_errors():
            return session.make_move(payload)

    @app.post("/ai-move")
    def ai_move(payload: AIMoveRequest, session: GameSession = Depends(get_session)):
        with _http_errors():
            return session.run_ai_move(payload)

    @app.post("/reset")
    def reset_game(payload: Optional[ResetRequest] = None, session: GameSession = Depends(get_session)):
        return session.reset(payload)

    @app.post("/config")
    def configure_players(payload: ConfigRequest, session: GameSession = Depends(get_session)):
        with _http_errors():
            return session.configure_players(payload)

    @app.get("/events")
    def read_events(since: int = Query(0, ge=0), session: GameSession = Depends(get_session)):
        return session.events(since)

    return app


app = create_app()
