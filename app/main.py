import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from app.auth import PasswordHasher, TokenService
from app.config import Settings, settings as default_settings
from app.database import Base, create_engine, create_session_lock, create_sessionmaker, session_scope
from app.exceptions import RobusphereError
from app.routers import auth, users, timeline, viewers
from app.services.timeline import TimelineStore
from app.services.users import UserStore
from app.services.viewers import ViewerCounter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: Settings = app.state.settings
    engine = app.state.engine
    # No migrations: the default database is in-memory and rebuilt on every start
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with session_scope(app.state) as db:
        await UserStore(db, app.state.passwords).ensure_admin(config.ADMIN_USERNAME, config.ADMIN_PASSWORD)
        await ViewerCounter(db).seed(config.VIEWERS_START)
    yield
    await engine.dispose()


async def robusphere_error_handler(request: Request, exc: RobusphereError) -> Response:
    if exc.message is None:
        return Response(status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


CREDENTIAL_FIELDS = {"username", "password"}


def _validation_message(errors) -> str:
    # body fields arrive as ("body", name); unparseable JSON reports an integer offset instead
    locs = [tuple(err.get("loc", ())) for err in errors]
    fields = [loc[-1] for loc in locs if len(loc) > 1 and isinstance(loc[-1], str)]
    if fields and set(fields) <= CREDENTIAL_FIELDS:
        return "Username and password required"
    if fields:
        return "Invalid value for " + ", ".join(sorted(set(fields)))
    return "Invalid request"


async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    logger.debug("Rejected request on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"message": _validation_message(exc.errors())})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(title="ROBUSPHERE Event Server", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = create_engine(settings.DATABASE_URL)
    app.state.sessionmaker = create_sessionmaker(app.state.engine)
    app.state.session_lock = create_session_lock(settings.DATABASE_URL)
    app.state.passwords = PasswordHasher(settings.BCRYPT_ROUNDS)
    app.state.tokens = TokenService(settings.SECRET_KEY, settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    app.state.timeline = TimelineStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RobusphereError, robusphere_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(viewers.router, prefix="/api/viewers", tags=["viewers"])
    app.include_router(auth.router, prefix="/api", tags=["auth"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(timeline.router, prefix="/api/timeline", tags=["timeline"])

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    # Landing page assets, mounted last so the API routes take precedence
    if settings.STATIC_DIR and Path(settings.STATIC_DIR).is_dir():
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
    elif settings.STATIC_DIR:
        logger.warning("STATIC_DIR %s is not a directory, static files disabled", settings.STATIC_DIR)

    return app


app = create_app()
