"""Base collector class and interfaces"""
import asyncio
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any


class BaseCollector(ABC):
    """Base class for metric collectors backed by blocking calls"""

    def __init__(self, config=None, name: str = "", help_text: str = "", max_workers: int = 4):
        self.config = config or {}
        self._name = name
        self._help_text = help_text
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=f"{name}_collector")

    @abstractmethod
    def collect(self) -> Any:
        """Run one blocking collection"""
        pass

    async def collect_async(self) -> Any:
        """Run collect() on the worker pool so the event loop keeps serving"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.collect)

    @property
    def name(self) -> str:
        """Collector name for identification"""
        return self._name

    @property
    def help_text(self) -> str:
        """Help text describing what this collector does"""
        return self._help_text or f"{self.name} metrics collector"

    def cleanup(self):
        """Cleanup resources"""
        if hasattr(self, '_executor'):
            self._executor.shutdown(wait=False)
