from fastapi import FastAPI

from finengine.api.routes_finance import router as finance_router
from finengine.api.routes_health import router as health_router
from finengine.api.routes_payroll import router as payroll_router
from finengine.core.config import settings
from finengine.core.errors import register_error_handlers
from finengine.core.logger import init_logging
from finengine.db.base_class import Base
from finengine.db.session import engine
from finengine.models import finance_models  # noqa: F401 - registers tables


def create_app() -> FastAPI:
    init_logging()
    is_production = settings.ENV.lower() == "prod"
    app = FastAPI(
        title=settings.APP_NAME,
        debug=False,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
    )
    register_error_handlers(app)
    app.include_router(finance_router)
    app.include_router(payroll_router)
    app.include_router(health_router)

    # Production schema is managed by migrations
    if not is_production:
        Base.metadata.create_all(bind=engine)

    return app


app = create_app()
