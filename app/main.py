import uvicorn
from fastapi import FastAPI

from app.api.limits import ApiLimits
from app.api.routes import create_app
from app.config.settings import Settings
from app.logging.logger import Log
from app.pipeline.submission_pipeline import build_pipeline


def build_app(settings: Settings) -> FastAPI:
    """Build the pipeline and wrap it in the HTTP app."""
    pipeline = build_pipeline(settings)
    origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
    return create_app(pipeline, cors_origins=origins, limits=ApiLimits.from_settings(settings))


def main() -> None:
    """Entry point: settings -> logging -> pipeline -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)
    app = build_app(settings)
    Log.info(f"DS Gutachten server starting on port {settings.port} ({settings.app_env})")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
