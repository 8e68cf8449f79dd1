"""Plugin id derivation from file and directory names."""

import re
import unicodedata

from plugin_host.plugins.errors import InvalidPluginId

MAX_PLUGIN_ID_LENGTH = 32

# Underscore is a word character but not alphanumeric
_UNSAFE_RUN_RE = re.compile(r"[\W_]+")


def make_plugin_id(source: str) -> str:
    """Lower-cased slug of source, at most 32 chars. Letters of any script are kept.

    Lossy: "MyPlugin" and "myplugin" end up as the same id; the loader
    rejects the second one as a duplicate.
    """
    normalized = unicodedata.normalize("NFKC", source).strip().lower()
    slug = _UNSAFE_RUN_RE.sub("-", normalized).strip("-")
    slug = slug[:MAX_PLUGIN_ID_LENGTH].rstrip("-")
    if not slug:
        raise InvalidPluginId(f"Cannot derive a plugin id from {source!r}")
    return slug
