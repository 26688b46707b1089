import copy
import json
from pathlib import Path
from typing import Any, Dict


class TestDataLoader:
    """Read-only access to tests/fixtures/test_data.json"""

    _data: Dict[str, Any] = None

    @classmethod
    def load(cls) -> Dict[str, Any]:
        if cls._data is None:
            with open(Path(__file__).parent / "test_data.json") as f:
                cls._data = json.load(f)
        return cls._data

    @classmethod
    def get(cls, key: str) -> Any:
        return cls.load().get(key)

    @classmethod
    def users(cls) -> Dict[str, Dict[str, Any]]:
        """Seed users by fixture name; a fresh copy on every call"""
        return copy.deepcopy(cls.get("users"))

    @classmethod
    def reason(cls, kind: str) -> str:
        return cls.get("reasons")[kind]
