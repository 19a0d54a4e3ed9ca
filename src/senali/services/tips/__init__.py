"""Daily tip services."""

from senali.services.tips.tip_service import TipService

__all__ = ["TipService"]
