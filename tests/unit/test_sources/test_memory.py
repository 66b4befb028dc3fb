"""Unit tests for the in-memory source."""

from dataclasses import dataclass, field
from enum import Enum

import pytest
from pydantic import BaseModel

from serfig.errors import SourceEncodeError
from serfig.sources import SelfSource, SourceOrigin, from_self


class Mode(str, Enum):
    FAST = "fast"
    SAFE = "safe"


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000


class AppConfig(BaseModel):
    name: str = "app"
    mode: Mode = Mode.SAFE
    server: ServerConfig = ServerConfig()
    tags: list[str] = []


@dataclass
class WorkerConfig:
    workers: int = 2
    queues: list[str] = field(default_factory=lambda: ["default"])


class TestSelfSource:
    """Tests for SelfSource."""

    @pytest.mark.unit
    def test_serializes_model(self) -> None:
        """Test a pydantic model becomes a nested mapping."""
        value = from_self(AppConfig()).produce()
        assert value.to_python() == {
            "name": "app",
            "mode": "safe",
            "server": {"host": "127.0.0.1", "port": 8000},
            "tags": [],
        }

    @pytest.mark.unit
    def test_serializes_dataclass(self) -> None:
        """Test dataclasses are supported."""
        value = SelfSource(WorkerConfig()).produce()
        assert value.to_python() == {"workers": 2, "queues": ["default"]}

    @pytest.mark.unit
    def test_serializes_dict(self) -> None:
        """Test plain dicts are supported."""
        value = SelfSource({"a": {"b": 1}}).produce()
        assert value.to_python() == {"a": {"b": 1}}

    @pytest.mark.unit
    def test_unserializable_value(self) -> None:
        """Test broken serialization raises SourceEncodeError."""
        source = SelfSource({"handle": object()})
        with pytest.raises(SourceEncodeError) as exc_info:
            source.produce()
        assert exc_info.value.type_name == "dict"
        assert exc_info.value.source_name == "self:dict"

    @pytest.mark.unit
    def test_metadata(self) -> None:
        """Test origin and default name."""
        source = SelfSource(AppConfig())
        assert source.origin == SourceOrigin.MEMORY
        assert source.name == "self:AppConfig"
