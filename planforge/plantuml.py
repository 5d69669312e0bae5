"""
PlantUML Helpers
Sanitize model-produced diagrams and build rendering-service URLs for them.
"""
import logging
import re
import zlib

logger = logging.getLogger(__name__)

START_MARKER = '@startuml'
END_MARKER = '@enduml'
DEFAULT_SERVER_URL = 'http://www.plantuml.com/plantuml'

# Fence opener lines (with any language tag) and closing fences at line end
_FENCE_PATTERN = re.compile(r'^```[^\n]*\n|```$', re.MULTILINE)
_NON_ASCII_PATTERN = re.compile(r'[^\x00-\x7F]')

_PLANTUML_ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_'


def sanitize(raw: str) -> str:
    """
    Normalize a diagram string into PlantUML source.

    Steps: strip code fences, strip stray backticks, ensure the
    @startuml/@enduml markers, replace non-ASCII characters with '_'.
    Applying it twice gives the same result as applying it once.
    """
    sanitized = _FENCE_PATTERN.sub('', raw or '').strip()
    sanitized = sanitized.replace('`', '').strip()

    if not sanitized.startswith(START_MARKER):
        sanitized = f"{START_MARKER}\n{sanitized}"

    if not sanitized.endswith(END_MARKER):
        sanitized = f"{sanitized}\n{END_MARKER}"

    return _NON_ASCII_PATTERN.sub('_', sanitized)


def _append_3_bytes(b1: int, b2: int, b3: int) -> str:
    c1 = b1 >> 2
    c2 = ((b1 & 0x3) << 4) | (b2 >> 4)
    c3 = ((b2 & 0xF) << 2) | (b3 >> 6)
    c4 = b3 & 0x3F
    return ''.join(_PLANTUML_ALPHABET[c & 0x3F] for c in (c1, c2, c3, c4))


def _encode_64(data: bytes) -> str:
    chunks = []
    for i in range(0, len(data), 3):
        group = data[i:i + 3]
        padded = group + b'\x00' * (3 - len(group))
        chunks.append(_append_3_bytes(padded[0], padded[1], padded[2]))
    return ''.join(chunks)


def encode(source: str) -> str:
    """Encode PlantUML source the way the rendering server expects (raw deflate + PlantUML base64)"""
    compressor = zlib.compressobj(9, zlib.DEFLATED, -15)
    deflated = compressor.compress(source.encode('utf-8')) + compressor.flush()
    return _encode_64(deflated)


def image_url(source: str, server_url: str = DEFAULT_SERVER_URL, fmt: str = 'png') -> str:
    """Build the URL of the rendered diagram image"""
    url = f"{server_url.rstrip('/')}/{fmt}/{encode(source)}"
    logger.debug(f"PlantUML image URL: {url}")
    return url
