"""Mermaid text -> SVG rendering with dual-mode support.

Primary:  Local Mermaid CLI via `mmdc -i - -o - -e svg` (stdin -> stdout pipe).
Fallback: mermaid.ink compatible HTTP server with base64 URL encoding.

CLI location resolution order:
  1. MERMAID_CLI_PATH env var (explicit override)
  2. `mmdc` on PATH

Every call resolves the CLI and parses the SVG on its own. The only shared
state is the SVG and xlink prefixes registered with ElementTree at import.
"""

import base64
import logging
import re
import shutil
import subprocess
import time
import xml.etree.ElementTree as ET
from typing import Optional, Tuple

import httpx

from .. import config
from ..exceptions import EMPTY_MERMAID_CODE, NO_SVG_ELEMENT, SVG_RENDER_ERROR, RenderError
from .models import THEMES, RenderOptions, SvgRenderResult

logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", _SVG_NS)
ET.register_namespace("xlink", "http://www.w3.org/1999/xlink")

_DEFAULT_WIDTH = 800
_DEFAULT_HEIGHT = 600
_NUMBER = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(?:px)?\s*$")


def get_supported_themes() -> Tuple[str, ...]:
    return THEMES


# ---------------------------------------------------------------------------
# Local CLI rendering
# ---------------------------------------------------------------------------


def _resolve_cli() -> Optional[str]:
    """Return the Mermaid CLI executable if usable, else None."""
    explicit = config.mermaid_cli_path()
    if explicit:
        resolved = shutil.which(explicit)
        if resolved is None:
            logger.info("MERMAID_CLI_PATH=%s is not executable, using HTTP fallback", explicit)
        return resolved
    return shutil.which("mmdc")


def _render_via_cli(cli: str, code: str, theme: str) -> Optional[str]:
    """Render Mermaid source to SVG via local CLI.

    Returns SVG string on success, None on failure (caller should fall back).
    """
    cmd = [cli, "-i", "-", "-o", "-", "-e", "svg", "-t", theme, "-q"]
    timeout = config.render_timeout()

    try:
        result = subprocess.run(
            cmd,
            input=code.encode("utf-8"),
            capture_output=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("Mermaid CLI timed out after %.0fs, falling back to HTTP", timeout)
        return None
    except OSError as e:
        logger.warning("Mermaid CLI execution failed: %s, falling back to HTTP", e)
        return None

    stdout = result.stdout.decode("utf-8", errors="replace")
    if result.returncode == 0 and "<svg" in stdout[:2000]:
        return stdout

    stderr = result.stderr.decode("utf-8", errors="replace").strip()
    logger.warning(
        "Mermaid CLI produced no SVG (exit=%d, stderr=%s), falling back to HTTP",
        result.returncode,
        stderr[:300] if stderr else "(empty)",
    )
    return None


# ---------------------------------------------------------------------------
# HTTP server rendering (fallback)
# ---------------------------------------------------------------------------


def _mermaid_encode(code: str) -> str:
    """Encode Mermaid text as URL-safe base64 for mermaid.ink style URLs."""
    return base64.urlsafe_b64encode(code.encode("utf-8")).decode("ascii")


def _render_via_http(code: str, theme: str, server_url: Optional[str] = None) -> str:
    """Render Mermaid source to SVG via HTTP server.

    Raises RenderError on failure.
    """
    server = (server_url or config.mermaid_server_url()).rstrip("/")
    url = f"{server}/svg/{_mermaid_encode(code)}"

    logger.debug("Rendering Mermaid via HTTP %s (url len=%d)", server, len(url))

    try:
        response = httpx.get(
            url,
            params={"theme": theme},
            timeout=config.render_timeout(),
            follow_redirects=True,
        )
    except httpx.RequestError as e:
        raise RenderError(
            f"Mermaid server request failed: {e}",
            SVG_RENDER_ERROR,
            {"server": server, "mermaid_code": code[:200]},
        ) from e

    body = response.text
    if response.status_code == 200 and "<svg" in body[:2000]:
        return body

    raise RenderError(
        f"Mermaid server returned {response.status_code} without SVG content",
        SVG_RENDER_ERROR,
        {"server": server, "status": response.status_code, "body": body[:200], "mermaid_code": code[:200]},
    )


# ---------------------------------------------------------------------------
# SVG post-processing
# ---------------------------------------------------------------------------


def _parse_length(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    match = _NUMBER.match(value)
    return int(float(match.group(1))) if match else None


def _viewbox_size(root: ET.Element) -> Tuple[Optional[int], Optional[int]]:
    parts = (root.get("viewBox") or "").replace(",", " ").split()
    if len(parts) != 4:
        return None, None
    try:
        return int(float(parts[2])), int(float(parts[3]))
    except ValueError:
        return None, None


def _finalize_svg(svg: str, options: RenderOptions) -> SvgRenderResult:
    """Apply dimensions and background to a rendered SVG."""
    try:
        root = ET.fromstring(svg)
    except ET.ParseError as e:
        raise RenderError(
            f"Rendered output is not well-formed SVG: {e}",
            SVG_RENDER_ERROR,
            {"svg": svg[:200]},
        ) from e

    if root.tag not in (f"{{{_SVG_NS}}}svg", "svg"):
        raise RenderError("No SVG element found in render output", NO_SVG_ELEMENT, {"svg": svg[:200]})

    vb_width, vb_height = _viewbox_size(root)
    width = options.width or _parse_length(root.get("width")) or vb_width or _DEFAULT_WIDTH
    height = options.height or _parse_length(root.get("height")) or vb_height or _DEFAULT_HEIGHT

    if options.background_color and options.background_color != "transparent":
        rect = ET.Element(f"{{{_SVG_NS}}}rect", {"width": "100%", "height": "100%", "fill": options.background_color})
        root.insert(0, rect)

    root.set("width", str(width))
    root.set("height", str(height))
    if not root.get("viewBox"):
        root.set("viewBox", f"0 0 {width} {height}")

    return SvgRenderResult(svg=ET.tostring(root, encoding="unicode"), width=width, height=height)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_mermaid_to_svg(
    code: str,
    options: Optional[RenderOptions] = None,
    server_url: Optional[str] = None,
) -> SvgRenderResult:
    """Render Mermaid text to SVG.

    Tries the local CLI first, falls back to the HTTP server.

    Args:
        code: Mermaid diagram text.
        options: Size, background and theme options.
        server_url: Server base URL for HTTP fallback. Defaults to
                    MERMAID_SERVER_URL env var or https://mermaid.ink.

    Returns:
        SvgRenderResult with final SVG and dimensions.

    Raises:
        RenderError: If the code is empty or no renderer produced SVG.
    """
    options = options or RenderOptions()
    start = time.perf_counter()

    if not code or not code.strip():
        raise RenderError("Mermaid code must not be empty", EMPTY_MERMAID_CODE, {"mermaid_code": code})

    if options.theme not in THEMES:
        raise RenderError(
            f"Unsupported theme {options.theme!r}; expected one of {', '.join(THEMES)}",
            SVG_RENDER_ERROR,
            {"theme": options.theme},
        )

    svg = None
    cli = _resolve_cli()
    if cli is not None:
        svg = _render_via_cli(cli, code, options.theme)
        if svg is not None:
            logger.debug("Rendered via local CLI (%d chars SVG)", len(svg))

    if svg is None:
        svg = _render_via_http(code, options.theme, server_url)

    result = _finalize_svg(svg, options)
    result.render_time = (time.perf_counter() - start) * 1000
    return result


def validate_mermaid_code(code: str, server_url: Optional[str] = None) -> bool:
    """Return True if the renderer accepts the Mermaid text."""
    try:
        render_mermaid_to_svg(code, server_url=server_url)
    except RenderError as e:
        logger.debug("Mermaid validation failed: %s", e)
        return False
    return True
