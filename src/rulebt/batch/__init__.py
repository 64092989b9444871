from .runner import BatchRunner, BatchResult, RunSummary, SavedStrategy

__all__ = [
    "BatchRunner",
    "BatchResult",
    "RunSummary",
    "SavedStrategy",
]
