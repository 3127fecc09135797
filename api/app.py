"""
api/app.py — Quiz Taker FastAPI 앱 팩토리

요청마다 쿠키로 응시 슬롯(api.session)을 찾아 request.state.session_id에 싣는다.
슬롯이 없거나 만료되었으면 빈 슬롯을 새로 발급한다.
"""

import logging
import threading
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import SESSION_CLEANUP_INTERVAL, SESSION_COOKIE, SESSION_TTL
from api.routes import router
import api.session as session

logger = logging.getLogger(__name__)


def _resolve_session_id(request: Request) -> str:
    sid = request.cookies.get(SESSION_COOKIE)
    if sid and session.get_session(sid) is not None:
        return sid
    return session.create_session()


def _sweep_expired_sessions() -> None:
    while True:
        time.sleep(SESSION_CLEANUP_INTERVAL)
        removed = session.cleanup_expired()
        if removed:
            logger.info(f"만료된 응시 슬롯 {removed}개 정리")


def create_app(start_cleanup: bool = True) -> FastAPI:
    app = FastAPI(title="Quiz Taker", docs_url=None, redoc_url=None)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def attach_attempt_slot(request: Request, call_next):
        sid = _resolve_session_id(request)
        request.state.session_id = sid
        response: Response = await call_next(request)
        response.set_cookie(
            key=SESSION_COOKIE,
            value=sid,
            httponly=True,
            samesite="lax",
            max_age=SESSION_TTL,
        )
        return response

    app.include_router(router)

    if start_cleanup:
        threading.Thread(target=_sweep_expired_sessions, daemon=True).start()

    return app
