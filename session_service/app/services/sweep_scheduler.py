from abc import ABC, abstractmethod


class SweepScheduler(ABC):
    """Drives the lifecycle sweep on a fixed cadence"""

    @abstractmethod
    def start(self) -> None:
        pass

    @abstractmethod
    def shutdown(self) -> None:
        pass

    @abstractmethod
    async def run_once(self):
        """Run a single sweep tick now and return its SweepResult (or None on failure)"""
        pass
