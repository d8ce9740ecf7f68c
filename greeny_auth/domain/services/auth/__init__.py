from .orchestrator import AuthOrchestrator

__all__ = ["AuthOrchestrator"]
