"""
Request dependencies and error mapping
"""

from fastapi import HTTPException, Request, status

from ..exceptions import AccountNotFoundError, LedgerError
from ..ledger import Ledger


def get_ledger(request: Request) -> Ledger:
    """Ledger owned by the running application"""
    return request.app.state.ledger


def ledger_http_error(error: LedgerError) -> HTTPException:
    """Translate a ledger error into an HTTP error response"""
    if isinstance(error, AccountNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    return HTTPException(
        status_code=status_code,
        detail={"code": error.code, "message": str(error)}
    )
