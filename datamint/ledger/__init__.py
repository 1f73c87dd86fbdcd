from datamint.ledger.base import BaseAuditLog, BaseNftReader, BaseTokenService
from datamint.ledger.factory import LedgerClients, LedgerFactory

__all__ = [
    "BaseAuditLog",
    "BaseNftReader",
    "BaseTokenService",
    "LedgerClients",
    "LedgerFactory",
]
