from .records import (
    AccountOut,
    ContactBatchIn,
    ContactIn,
    ContactOut,
    OpportunityOut,
)

__all__ = [
    "ContactIn", "ContactBatchIn",
    "AccountOut", "ContactOut", "OpportunityOut",
]
