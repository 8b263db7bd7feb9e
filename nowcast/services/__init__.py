from .orchestrator import ForecastOrchestrator, RunPhase

__all__ = ["ForecastOrchestrator", "RunPhase"]
