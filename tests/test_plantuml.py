import zlib

import pytest

from planforge.plantuml import (
    END_MARKER,
    START_MARKER,
    _encode_64,
    encode,
    image_url,
    sanitize,
)

PLANTUML_ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_'


def _decode(encoded: str) -> str:
    """Invert the PlantUML text encoding"""
    bits = [PLANTUML_ALPHABET.index(c) for c in encoded]
    data = bytearray()
    for i in range(0, len(bits), 4):
        c1, c2, c3, c4 = bits[i:i + 4]
        data.append((c1 << 2) | (c2 >> 4))
        data.append(((c2 & 0xF) << 4) | (c3 >> 2))
        data.append(((c3 & 0x3) << 6) | c4)
    decompressor = zlib.decompressobj(-15)
    return decompressor.decompress(bytes(data)).decode('utf-8')


class TestSanitize:

    def test_adds_missing_markers(self):
        result = sanitize('A -> B')
        assert result == f'{START_MARKER}\nA -> B\n{END_MARKER}'

    def test_keeps_existing_markers(self):
        source = '@startuml\nA -> B\n@enduml'
        assert sanitize(source) == source

    def test_strips_code_fences(self):
        raw = '```plantuml\n@startuml\nA -> B\n@enduml\n```'
        assert sanitize(raw) == '@startuml\nA -> B\n@enduml'

    def test_strips_stray_backticks(self):
        assert '`' not in sanitize('@startuml\n[`Web`] -> [API]\n@enduml')

    def test_replaces_non_ascii(self):
        result = sanitize('@startuml\nUser -> Café : commande\n@enduml')
        assert 'Caf_' in result
        assert all(ord(ch) < 128 for ch in result)

    @pytest.mark.parametrize('raw', [
        '',
        'A -> B',
        '```\nA -> B\n```',
        '@startuml\nnode "Sérveur"\n@enduml',
    ])
    def test_starts_and_ends_with_markers(self, raw):
        result = sanitize(raw)
        assert result.startswith(START_MARKER)
        assert result.endswith(END_MARKER)

    @pytest.mark.parametrize('raw', [
        'A -> B',
        '```plantuml\n@startuml\nA -> B\n@enduml\n```',
        'Ünïcode -> B',
    ])
    def test_idempotent(self, raw):
        once = sanitize(raw)
        assert sanitize(once) == once


class TestEncoding:

    def test_encode_64_alphabet_edges(self):
        assert _encode_64(b'\x00\x00\x00') == '0000'
        assert _encode_64(b'\xff\xff\xff') == '____'

    def test_encode_64_pads_partial_group(self):
        # Always four characters per (padded) three-byte group
        assert len(_encode_64(b'\x01')) == 4
        assert len(_encode_64(b'\x01\x02\x03\x04')) == 8

    def test_encode_uses_raw_deflate(self):
        source = '@startuml\nAlice -> Bob : hello\n@enduml'
        assert _decode(encode(source)) == source

    def test_image_url(self):
        source = '@startuml\nA -> B\n@enduml'
        url = image_url(source)
        assert url == f'http://www.plantuml.com/plantuml/png/{encode(source)}'

    def test_image_url_custom_server(self):
        url = image_url('@startuml\n@enduml', 'http://localhost:8080/', fmt='svg')
        assert url.startswith('http://localhost:8080/svg/')
