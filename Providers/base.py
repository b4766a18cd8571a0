# providers/base.py
from abc import ABC, abstractmethod


class Provider(ABC):
    @abstractmethod
    def start_fetch(self) -> None:
        """Kick off a calendar fetch and return at once; results arrive as files."""
        ...
