"""Unit tests for inline and reader sources."""

import io

import pytest

from serfig.errors import SourceIoError, SourceParseError
from serfig.parsers import JsonParser, TomlParser
from serfig.sources import ReaderSource, SourceOrigin, StringSource, from_reader, from_str


class TestStringSource:
    """Tests for StringSource."""

    @pytest.mark.unit
    def test_decodes_text(self) -> None:
        """Test inline TOML decodes."""
        source = from_str('test_b = "test_b"', TomlParser())
        assert source.produce().to_python() == {"test_b": "test_b"}

    @pytest.mark.unit
    def test_decodes_bytes(self) -> None:
        """Test bytes are passed through."""
        source = StringSource(b'{"a": [1]}', JsonParser())
        assert source.produce().to_python() == {"a": [1]}

    @pytest.mark.unit
    def test_can_produce_repeatedly(self) -> None:
        """Test inline sources are stable across builds."""
        source = StringSource("a = 1", TomlParser())
        assert source.produce() == source.produce()

    @pytest.mark.unit
    def test_parse_error_tagged(self) -> None:
        """Test parse errors carry the source name."""
        source = StringSource("a = ", TomlParser(), name="inline-defaults")
        with pytest.raises(SourceParseError) as exc_info:
            source.produce()
        assert exc_info.value.source_name == "inline-defaults"

    @pytest.mark.unit
    def test_metadata(self) -> None:
        """Test origin and default name."""
        source = StringSource("", JsonParser())
        assert source.origin == SourceOrigin.MEMORY
        assert source.name == "str:json"


class TestReaderSource:
    """Tests for ReaderSource."""

    @pytest.mark.unit
    def test_binary_reader(self) -> None:
        """Test binary streams are read to the end."""
        source = from_reader(io.BytesIO(b"a = 1\n"), TomlParser())
        assert source.produce().to_python() == {"a": 1}

    @pytest.mark.unit
    def test_text_reader(self) -> None:
        """Test text streams are encoded before decoding."""
        source = ReaderSource(io.StringIO('{"b": "é"}'), JsonParser())
        assert source.produce().to_python() == {"b": "é"}

    @pytest.mark.unit
    def test_read_failure(self) -> None:
        """Test stream errors raise SourceIoError."""

        class FailingReader(io.BytesIO):
            def read(self, size: int | None = -1) -> bytes:
                raise OSError("device gone")

        source = ReaderSource(FailingReader(), TomlParser(), name="pipe")
        with pytest.raises(SourceIoError, match="device gone"):
            source.produce()

    @pytest.mark.unit
    def test_metadata(self) -> None:
        """Test origin."""
        source = ReaderSource(io.BytesIO(b""), TomlParser())
        assert source.origin == SourceOrigin.FILE
        assert source.name == "reader:toml"
