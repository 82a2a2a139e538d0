"""
Bank Ledger API Application Factory
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import LedgerConfig, get_config
from ..ledger import Ledger
from ..logging_config import get_logger
from ..samples import seed_sample_accounts
from .accounts import router as accounts_router
from .transactions import router as transactions_router


logger = get_logger(__name__)


def create_app(ledger: Optional[Ledger] = None, config: Optional[LedgerConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        ledger: Ledger to serve. A new one is built (and seeded with the
            sample accounts when configured) if not given.
        config: Settings, defaults to the global configuration
    """
    config = config or get_config()

    if ledger is None:
        ledger = Ledger(max_account_number_attempts=config.account_number_max_attempts)
        if config.seed_sample_accounts:
            seed_sample_accounts(ledger)

    app = FastAPI(
        title="Bank Ledger API",
        description="In-memory demonstration banking ledger",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.ledger = ledger

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    app.include_router(transactions_router, prefix="/transactions", tags=["Transactions"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "bank_ledger_api",
            "version": __version__
        }

    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Bank Ledger API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "accounts": "/accounts",
                "transactions": "/transactions",
            }
        }

    logger.info("API application created with %d accounts", len(ledger.get_all_accounts()))
    return app
