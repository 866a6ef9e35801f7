import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import settings
from app.core.rate_limit import limiter
from app.modules.auth import routes as auth_routes
from app.modules.profiles import routes as profiles_routes
from app.modules.journals import routes as journals_routes
from app.modules.meditations import routes as meditations_routes
from app.modules.checkins import routes as checkins_routes
from app.modules.assessments import routes as assessments_routes
from app.modules.chat import routes as chat_routes
from app.modules.companion import routes as companion_routes
from app.modules.speech import routes as speech_routes
from app.modules.moods import routes as moods_routes
from app.modules.pomodoro import routes as pomodoro_routes
from app.modules.admin import routes as admin_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api")
app.include_router(profiles_routes.router, prefix="/api")
app.include_router(journals_routes.router, prefix="/api")
app.include_router(meditations_routes.router, prefix="/api")
app.include_router(checkins_routes.router, prefix="/api")
app.include_router(assessments_routes.router, prefix="/api")
app.include_router(assessments_routes.report_router, prefix="/api")
app.include_router(chat_routes.router, prefix="/api")
app.include_router(companion_routes.router, prefix="/api")
app.include_router(speech_routes.router, prefix="/api")
app.include_router(moods_routes.router, prefix="/api")
app.include_router(pomodoro_routes.router, prefix="/api")
app.include_router(admin_routes.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    if not settings.ai_enabled:
        logger.warning("OPENAI_API_KEY is not set; AI features will use their fallbacks")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to elmora-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: reports whether Supabase and OpenAI are configured."""
    return {
        "status": "ready",
        "supabase_configured": bool(settings.supabase_url and settings.supabase_key),
        "ai_enabled": settings.ai_enabled,
    }
