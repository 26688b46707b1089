"""
Lifecycle Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime

from pydantic import BaseModel


class SweepResult(BaseModel):
    """Rows moved by each sweep rule in one tick"""

    starting_soon: int = 0
    in_progress: int = 0
    expired: int = 0
    swept_at: datetime

    @property
    def total(self) -> int:
        return self.starting_soon + self.in_progress + self.expired
