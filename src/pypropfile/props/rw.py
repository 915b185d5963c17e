# -*- encoding: utf-8 -*-
# @File   : rw.py
# @Time   : 2026/10/19 09:31:52
# @Author : Kariko Lin

"""Where bytes come from and go to.

A source (or sink) is either a path, which we open and close ourselves,
or an already opened stream (binary or text), which belongs to the caller
and is left open.
"""

import codecs
import logging
from contextlib import contextmanager
from io import StringIO, TextIOBase, TextIOWrapper
from os import PathLike
from typing import IO, Iterator, TextIO

from chardet import detect as guess_codec

logger = logging.getLogger(__name__)

Source = str | PathLike[str] | IO[bytes] | IO[str]
DEFAULT_ENCODING = 'utf-8'
# last resort of `decode_bytes`, maps every byte.
FALLBACK_ENCODING = 'latin-1'


def is_path(source: object) -> bool:
    return isinstance(source, (str, PathLike))


def reading_codec(encoding: str) -> str:
    """Read UTF-8 as `utf-8-sig`, so a leading BOM is dropped."""
    if codecs.lookup(encoding).name == 'utf-8':
        return 'utf-8-sig'
    return encoding


def decode_bytes(raw: bytes) -> StringIO:
    """Decode bytes of unknown encoding, trusting `chardet` only if sure."""
    codec = guess_codec(raw)
    encoding = codec.get('encoding') if codec else None
    if encoding is None or codec['confidence'] < 0.8:
        encoding = DEFAULT_ENCODING
    logger.debug('decoding as %s (guessed %r)', encoding, codec)

    # fallbacks
    for i in dict.fromkeys(
            (reading_codec(encoding), reading_codec(DEFAULT_ENCODING))):
        try:
            return StringIO(raw.decode(i))
        except UnicodeDecodeError as e:
            logger.debug('%s failed: %s', i, e)
    return StringIO(raw.decode(FALLBACK_ENCODING))


@contextmanager
def open_source(
    source: Source, encoding: str | None = DEFAULT_ENCODING
) -> Iterator[TextIO]:
    """Yield a text stream to read lines from.

    With `encoding=None` the whole input is read and its encoding guessed.
    """
    if is_path(source):
        if encoding is None:
            with open(source, 'rb') as fp:
                yield decode_bytes(fp.read())
        else:
            with open(source, 'r', encoding=reading_codec(encoding)) as fp:
                yield fp
    elif isinstance(source, TextIOBase):
        yield source
    elif encoding is None:
        yield decode_bytes(source.read())
    else:
        buf = TextIOWrapper(source, encoding=reading_codec(encoding))
        try:
            yield buf
        finally:
            # don't let the wrapper close the caller's stream.
            buf.detach()


@contextmanager
def open_sink(
    sink: Source, encoding: str | None = DEFAULT_ENCODING
) -> Iterator[TextIO]:
    """Yield a text stream writing `\\n` terminated lines."""
    encoding = encoding or DEFAULT_ENCODING
    if is_path(sink):
        with open(sink, 'w', encoding=encoding, newline='\n') as fp:
            yield fp
    elif isinstance(sink, TextIOBase):
        yield sink
    else:
        buf = TextIOWrapper(sink, encoding=encoding, newline='\n')
        try:
            yield buf
        finally:
            buf.flush()
            buf.detach()
