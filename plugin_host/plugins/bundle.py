"""Manifest block extraction from single-file plugin bundles.

A bundle carries its manifest in a comment block:

    /* plugin-manifest:
    { "name": "...", ... }
    */

The scan is purely line based; the bundle is never parsed as code.
"""

from dataclasses import dataclass
from enum import Enum

from plugin_host.plugins.errors import ManifestNotFound

DEFAULT_MANIFEST_NAMESPACE = "plugin"
_CLOSING_MARKER = "*/"


class _ScanState(Enum):
    STARTED = 1
    IN_MANIFEST = 2


@dataclass(frozen=True)
class PluginBundle:
    """Manifest JSON text and the full script text of a bundle."""

    manifest_text: str
    script_text: str


def opening_marker(namespace: str = DEFAULT_MANIFEST_NAMESPACE) -> str:
    return f"/* {namespace}-manifest:"


def parse_plugin_js_bundle(
    bundle_text: str, namespace: str = DEFAULT_MANIFEST_NAMESPACE
) -> PluginBundle:
    """Split bundle into manifest text (trimmed inner lines of the block) and script text.

    Raises ManifestNotFound when the opening marker is missing, the block is empty,
    or the block is never closed.
    """
    marker = opening_marker(namespace)
    manifest_lines: list[str] = []
    state = _ScanState.STARTED
    closed = False

    for raw_line in bundle_text.split("\n"):
        line = raw_line.strip()
        if state is _ScanState.STARTED:
            if line == marker:
                state = _ScanState.IN_MANIFEST
            continue
        if line.startswith(_CLOSING_MARKER):
            closed = True
            break
        manifest_lines.append(line)

    if state is _ScanState.STARTED:
        raise ManifestNotFound(f"Could not find manifest: no '{marker}' line")
    if not closed:
        raise ManifestNotFound(f"Could not find manifest: block opened by '{marker}' is not closed")
    if not manifest_lines:
        raise ManifestNotFound("Could not find manifest: manifest block is empty")

    return PluginBundle(manifest_text="\n".join(manifest_lines), script_text=bundle_text)
