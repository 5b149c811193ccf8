"""
PSF Tag Reader - Track metadata from the [TAG] block of (mini)GSF files.

File layout:
    0   'PSF' signature
    3   version byte (0x22 for GSF)
    4   reserved area size (LE uint32)
    8   compressed program size (LE uint32)
    12  program CRC32
    16  reserved area, then compressed program
    ... '[TAG]' followed by 'name=value' lines
"""
import struct
import logging
from pathlib import Path
from typing import Optional, Dict

from ..models import TrackMetadata

logger = logging.getLogger(__name__)

PSF_SIGNATURE = b'PSF'
HEADER_SIZE = 16
TAG_MARKER = b'[TAG]'
MAX_TAG_SIZE = 50000

# Tag name -> TrackMetadata field
TAG_FIELDS = {
    'title': 'title',
    'artist': 'artist',
    'game': 'game',
    'year': 'year',
    'copyright': 'copyright',
    'gsfby': 'produced_by',
    'length': 'length_text',
}


def parse_tag_block(raw: bytes) -> Dict[str, str]:
    """
    Parse the text following '[TAG]' into a dict.

    Names are case-insensitive; a repeated name continues the previous
    value on a new line.
    """
    utf8 = b'utf8=1' in raw.replace(b' ', b'').lower()
    text = raw.decode('utf-8' if utf8 else 'latin-1', errors='replace')

    tags: Dict[str, str] = {}
    for line in text.split('\n'):
        if '=' not in line:
            continue
        name, value = line.split('=', 1)
        name = name.strip().lower()
        value = value.strip()
        if not name:
            continue
        if name in tags:
            tags[name] = f'{tags[name]}\n{value}'
        else:
            tags[name] = value
    return tags


def read_tags(path: Path) -> Optional[Dict[str, str]]:
    """Read the raw tag dict of a PSF file, or None if it has no readable tag."""
    try:
        with open(path, 'rb') as f:
            header = f.read(HEADER_SIZE)
            if len(header) < HEADER_SIZE or header[:3] != PSF_SIGNATURE:
                logger.debug(f'Not a PSF file: {path}')
                return None
            reserved_size, program_size = struct.unpack('<II', header[4:12])
            f.seek(HEADER_SIZE + reserved_size + program_size)
            marker = f.read(len(TAG_MARKER))
            if marker != TAG_MARKER:
                logger.debug(f'No tag block in {path}')
                return None
            raw = f.read(MAX_TAG_SIZE)
    except OSError as e:
        logger.warning(f'Cannot read tags from {path}: {e}')
        return None

    return parse_tag_block(raw)


def read_metadata(path: Path) -> Optional[TrackMetadata]:
    """
    Read track metadata from a (mini)GSF file.

    Returns None when the file or its tag block is unreadable; never raises.
    """
    tags = read_tags(path)
    if tags is None:
        return None

    meta = TrackMetadata(path=str(path))
    for tag_name, field_name in TAG_FIELDS.items():
        if tag_name in tags:
            setattr(meta, field_name, tags[tag_name])
    return meta
