"""PlantUML text -> SVG/PNG rendering with dual-mode support.

Primary:  Local JAR via `java -jar plantuml.jar -tsvg|-tpng -pipe` (no size limits).
Fallback: PlantUML HTTP server with deflate + custom base64 URL encoding.

The local JAR is preferred because large diagrams exceed URL length limits on
the HTTP server. The JAR renders via stdin/stdout pipe with no such constraint.

JAR location: renderer.jar_path in config (PLANTUML_JAR_PATH overrides it).
"""

import logging
import shutil
import subprocess
import zlib
from functools import lru_cache
from pathlib import Path
from typing import Optional

import httpx

from ..config import RendererSettings
from ..errors import RenderingError

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("svg", "png")

MEDIA_TYPES = {
    "svg": "image/svg+xml",
    "png": "image/png",
}

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _looks_like(fmt: str, data: bytes) -> bool:
    if fmt == "png":
        return data.startswith(_PNG_SIGNATURE)
    head = data[:500].decode("utf-8", errors="replace")
    return head.strip().startswith("<") and "<svg" in head


# ---------------------------------------------------------------------------
# JAR availability detection (cached per-process per path)
# ---------------------------------------------------------------------------


@lru_cache(maxsize=8)
def _check_jar_available(jar_path: Optional[str]) -> bool:
    """Check once per path whether local JAR rendering is possible."""
    if not jar_path or not Path(jar_path).is_file():
        logger.info("PlantUML JAR not found, using HTTP fallback")
        return False

    if shutil.which("java") is None:
        logger.info("java not on PATH, using HTTP fallback for PlantUML")
        return False

    logger.info("PlantUML local JAR available at %s", jar_path)
    return True


@lru_cache(maxsize=1)
def _has_graphviz() -> bool:
    """Check once whether Graphviz (dot) is available on PATH."""
    available = shutil.which("dot") is not None
    if not available:
        logger.info("Graphviz (dot) not found, PlantUML will use built-in Smetana layout engine")
    return available


def _ensure_smetana(puml: str) -> str:
    """Inject '!pragma layout smetana' when Graphviz is unavailable.

    Only needed for JAR rendering; the HTTP server has its own Graphviz.
    """
    if _has_graphviz():
        return puml
    pragma = "!pragma layout smetana"
    if pragma in puml:
        return puml
    return puml.replace("@startuml", f"@startuml\n{pragma}", 1)


# ---------------------------------------------------------------------------
# Local JAR rendering
# ---------------------------------------------------------------------------


def _render_via_jar(puml: str, fmt: str, jar_path: str, timeout: int) -> Optional[bytes]:
    """Render PlantUML source via local JAR (stdin -> stdout pipe).

    Returns image bytes on success, None on failure (caller should fall back).
    """
    puml = _ensure_smetana(puml)

    cmd = [
        "java",
        "-Djava.awt.headless=true",
        "-jar",
        jar_path,
        f"-t{fmt}",
        "-pipe",
    ]

    try:
        result = subprocess.run(
            cmd,
            input=puml.encode("utf-8"),
            capture_output=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("PlantUML JAR timed out after %ds, falling back to HTTP", timeout)
        return None
    except OSError as e:
        logger.warning("PlantUML JAR execution failed: %s, falling back to HTTP", e)
        return None

    # PlantUML writes an image even for syntax errors (the image shows the error).
    if _looks_like(fmt, result.stdout):
        if result.returncode != 0:
            logger.debug(
                "PlantUML JAR returned exit code %d but produced %s, using it",
                result.returncode,
                fmt,
            )
        return result.stdout

    stderr = result.stderr.decode("utf-8", errors="replace").strip()
    logger.warning(
        "PlantUML JAR produced no %s (exit=%d, stderr=%s), falling back to HTTP",
        fmt,
        result.returncode,
        stderr[:300] if stderr else "(empty)",
    )
    return None


# ---------------------------------------------------------------------------
# HTTP server rendering (fallback)
# ---------------------------------------------------------------------------

_PLANTUML_ALPHABET = (
    "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"
)


def _encode6bit(b: int) -> str:
    """Encode a 6-bit value to PlantUML's custom base64 character."""
    return _PLANTUML_ALPHABET[b & 0x3F]


def _encode3bytes(b1: int, b2: int, b3: int) -> str:
    """Encode 3 bytes into 4 PlantUML base64 characters."""
    c1 = b1 >> 2
    c2 = ((b1 & 0x3) << 4) | (b2 >> 4)
    c3 = ((b2 & 0xF) << 2) | (b3 >> 6)
    c4 = b3 & 0x3F
    return _encode6bit(c1) + _encode6bit(c2) + _encode6bit(c3) + _encode6bit(c4)


def plantuml_encode(text: str) -> str:
    """Encode PlantUML text using deflate + custom base64 for URL embedding."""
    data = zlib.compress(text.encode("utf-8"))[2:-4]  # raw deflate

    result = []
    for i in range(0, len(data), 3):
        if i + 2 < len(data):
            result.append(_encode3bytes(data[i], data[i + 1], data[i + 2]))
        elif i + 1 < len(data):
            result.append(_encode3bytes(data[i], data[i + 1], 0))
        else:
            result.append(_encode3bytes(data[i], 0, 0))

    return "".join(result)


def _render_via_http(puml: str, fmt: str, server_url: str, timeout: float) -> bytes:
    """Render PlantUML source via HTTP server (GET with encoded URL).

    Raises RenderingError on failure.
    """
    server = server_url.rstrip("/")
    encoded = plantuml_encode(puml)
    url = f"{server}/{fmt}/{encoded}"

    logger.debug("Rendering PlantUML via HTTP %s (encoded len=%d)", server, len(encoded))

    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
    except httpx.RequestError as e:
        raise RenderingError(f"PlantUML server request failed: {e}") from e

    body = response.content
    if _looks_like(fmt, body):
        if response.status_code != 200:
            logger.warning(
                "PlantUML server returned %d but with %s content, using it",
                response.status_code,
                fmt,
            )
        return body

    if response.status_code != 200:
        raise RenderingError(f"PlantUML server returned {response.status_code} with non-{fmt} body")

    raise RenderingError(f"PlantUML server returned unexpected content: {body[:200]!r}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_diagram(puml: str, fmt: str = "svg", settings: Optional[RendererSettings] = None) -> bytes:
    """Render PlantUML text to an image.

    Tries the local JAR first, falls back to the HTTP server.

    Args:
        puml: PlantUML source text (including @startuml/@enduml).
        fmt: "svg" or "png".
        settings: Renderer settings; defaults to the loaded configuration.

    Returns:
        Image bytes.

    Raises:
        RenderingError: If the format is unsupported or both modes fail.
    """
    if fmt not in SUPPORTED_FORMATS:
        raise RenderingError(f"Unsupported image format: {fmt}. Supported: {list(SUPPORTED_FORMATS)}")

    if settings is None:
        from ..config import get_settings
        settings = get_settings().renderer

    if _check_jar_available(settings.jar_path):
        image = _render_via_jar(puml, fmt, settings.jar_path, settings.jar_timeout_seconds)
        if image is not None:
            logger.debug("Rendered via local JAR (%d bytes %s)", len(image), fmt)
            return image

    return _render_via_http(puml, fmt, settings.server_url, settings.http_timeout_seconds)
