"""Tests for PlantUML rendering (local JAR and HTTP server)."""

import subprocess
import zlib
from unittest.mock import MagicMock, patch

import httpx
import pytest

from docloom.core.config import RendererSettings
from docloom.core.diagrams import plantuml_encode, render_diagram
from docloom.core.diagrams import renderer
from docloom.core.errors import RenderingError

PUML = "@startuml\nclass shop.Order {\n}\n@enduml\n"
SVG = b'<?xml version="1.0"?><svg xmlns="http://www.w3.org/2000/svg"></svg>'
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16

_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"


def _decode(encoded: str) -> str:
    data = bytearray()
    for i in range(0, len(encoded), 4):
        c1, c2, c3, c4 = (_ALPHABET.index(c) for c in encoded[i:i + 4])
        data.append((c1 << 2) | (c2 >> 4))
        data.append(((c2 & 0xF) << 4) | (c3 >> 2))
        data.append(((c3 & 0x3) << 6) | c4)
    return zlib.decompressobj(-15).decompress(bytes(data)).decode("utf-8")


def _response(content: bytes, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.content = content
    response.status_code = status_code
    return response


@pytest.fixture
def http_only():
    return RendererSettings(jar_path=None, server_url="https://plantuml.test/plantuml/")


class TestEncoding:
    def test_encoded_text_decodes_back(self):
        encoded = plantuml_encode(PUML)
        assert set(encoded) <= set(_ALPHABET)
        assert len(encoded) % 4 == 0
        assert _decode(encoded) == PUML


class TestHttpRendering:
    def test_svg(self, http_only):
        with patch("docloom.core.diagrams.renderer.httpx.get", return_value=_response(SVG)) as get:
            assert render_diagram(PUML, "svg", http_only) == SVG
        url = get.call_args[0][0]
        assert url.startswith("https://plantuml.test/plantuml/svg/")
        assert _decode(url.rsplit("/", 1)[1]) == PUML

    def test_png(self, http_only):
        with patch("docloom.core.diagrams.renderer.httpx.get", return_value=_response(PNG)) as get:
            assert render_diagram(PUML, "png", http_only) == PNG
        assert "/png/" in get.call_args[0][0]

    def test_error_status_with_image_is_accepted(self, http_only):
        with patch("docloom.core.diagrams.renderer.httpx.get", return_value=_response(SVG, 400)):
            assert render_diagram(PUML, "svg", http_only) == SVG

    def test_request_error(self, http_only):
        error = httpx.ConnectError("connection refused")
        with patch("docloom.core.diagrams.renderer.httpx.get", side_effect=error):
            with pytest.raises(RenderingError, match="request failed"):
                render_diagram(PUML, "svg", http_only)

    def test_non_image_body(self, http_only):
        with patch("docloom.core.diagrams.renderer.httpx.get", return_value=_response(b"Bad gateway", 502)):
            with pytest.raises(RenderingError):
                render_diagram(PUML, "png", http_only)


class TestJarRendering:
    SETTINGS = RendererSettings(jar_path="/opt/plantuml.jar", server_url="https://plantuml.test")

    def test_jar_output_used(self):
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout=SVG, stderr=b"")
        with patch.object(renderer, "_check_jar_available", return_value=True), \
                patch.object(renderer, "_has_graphviz", return_value=False), \
                patch("docloom.core.diagrams.renderer.subprocess.run", return_value=completed) as run, \
                patch("docloom.core.diagrams.renderer.httpx.get") as get:
            assert render_diagram(PUML, "svg", self.SETTINGS) == SVG

        cmd = run.call_args[0][0]
        assert cmd[-2:] == ["-tsvg", "-pipe"]
        assert "/opt/plantuml.jar" in cmd
        assert b"!pragma layout smetana" in run.call_args.kwargs["input"]
        get.assert_not_called()

    def test_falls_back_to_http_when_jar_fails(self):
        completed = subprocess.CompletedProcess(args=[], returncode=1, stdout=b"", stderr=b"boom")
        with patch.object(renderer, "_check_jar_available", return_value=True), \
                patch.object(renderer, "_has_graphviz", return_value=True), \
                patch("docloom.core.diagrams.renderer.subprocess.run", return_value=completed), \
                patch("docloom.core.diagrams.renderer.httpx.get", return_value=_response(PNG)) as get:
            assert render_diagram(PUML, "png", self.SETTINGS) == PNG
        get.assert_called_once()

    def test_falls_back_on_timeout(self):
        timeout = subprocess.TimeoutExpired(cmd="java", timeout=60)
        with patch.object(renderer, "_check_jar_available", return_value=True), \
                patch.object(renderer, "_has_graphviz", return_value=True), \
                patch("docloom.core.diagrams.renderer.subprocess.run", side_effect=timeout), \
                patch("docloom.core.diagrams.renderer.httpx.get", return_value=_response(SVG)):
            assert render_diagram(PUML, "svg", self.SETTINGS) == SVG

    def test_missing_jar_file_not_available(self, tmp_path):
        assert renderer._check_jar_available(str(tmp_path / "absent.jar")) is False


class TestUnsupportedFormat:
    def test_rejected_before_rendering(self, http_only):
        with patch("docloom.core.diagrams.renderer.httpx.get") as get:
            with pytest.raises(RenderingError, match="Unsupported"):
                render_diagram(PUML, "gif", http_only)
        get.assert_not_called()
