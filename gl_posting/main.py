"""
GL Posting Engine: FastAPI application.

This is the entry point for the application.
Logging is configured and all routers are registered here.
"""

import logging

from fastapi import FastAPI

from gl_posting.config import get_settings
from gl_posting.logging_config import configure_logging
from gl_posting.api.health import router as health_router
from gl_posting.api.coa import router as coa_router
from gl_posting.api.bank_accounts import router as bank_accounts_router
from gl_posting.api.journals import router as journals_router
from gl_posting.api.postings import router as postings_router
from gl_posting.api.subledger import router as subledger_router

settings = get_settings()

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Multi-currency double-entry GL posting engine",
    debug=settings.DEBUG,
)

# Register routers
app.include_router(health_router)
app.include_router(coa_router)
app.include_router(bank_accounts_router)
app.include_router(journals_router)
app.include_router(postings_router)
app.include_router(subledger_router)

logger.info(
    "%s %s starting (%s), functional currency %s",
    settings.APP_NAME, settings.APP_VERSION,
    settings.ENVIRONMENT, settings.FUNCTIONAL_CURRENCY,
)
