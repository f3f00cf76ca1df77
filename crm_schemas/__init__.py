from .records import (
    AccountRecord,
    ContactRecord,
    OpportunityRecord,
    OperationResult,
)

__all__ = [
    "AccountRecord", "ContactRecord", "OpportunityRecord", "OperationResult",
]
