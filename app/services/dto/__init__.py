from .filters import OperationFilters, PaymentFilters, JournalFilters

__all__ = ["OperationFilters", "PaymentFilters", "JournalFilters"]
