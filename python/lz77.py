#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
General-purpose sliding-window lossless compression
Greedy LZ77 with a bounded history window and fixed-width tokens

This code is licensed according to the MIT license as follows:
----------------------------------------------------------------------------
Copyright (c) 2026 The lz77-compression authors

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
----------------------------------------------------------------------------

Stream format, a flat sequence of self-delimiting tokens:

    literal   := 0x00 <byte>
    reference := 0x01 <offset:u16 big-endian> <length:u16 big-endian>
"""

import struct
from collections import namedtuple


WINDOW_SIZE = 4096
MIN_MATCH_LEN = 3
MAX_MATCH_LEN = 258

TOKEN_LITERAL = 0x00
TOKEN_REFERENCE = 0x01

MAX_FIELD_VALUE = 0xFFFF
BUFFER_INITIAL_CAPACITY = 1024

_REFERENCE_STRUCT = struct.Struct(">BHH")
_FIELDS_STRUCT = struct.Struct(">HH")


class LZ77Error(Exception):
    """Base class for all errors raised by the coder"""
    pass

class OutOfMemoryError(LZ77Error, MemoryError):
    """A buffer could not be grown"""
    pass

class InvalidDataError(LZ77Error, ValueError):
    """Malformed compressed stream"""
    pass

class InvalidArgumentError(LZ77Error, TypeError, ValueError):
    """Ill-formed buffer, data or config handed to an operation"""
    pass


def _as_bytes(in_data):
    if in_data is None or isinstance(in_data, str):
        raise InvalidArgumentError("expected a bytes-like object, not {0}".format(type(in_data).__name__))
    if isinstance(in_data, bytes):
        return in_data
    try:
        return memoryview(in_data).tobytes()
    except TypeError:
        raise InvalidArgumentError("expected a bytes-like object, not {0}".format(type(in_data).__name__))


class Config(namedtuple('Config', ['window_size', 'min_match', 'max_match'])):
    """Immutable compression parameters"""
    __slots__ = ()

    def __new__(cls, window_size=WINDOW_SIZE, min_match=MIN_MATCH_LEN, max_match=MAX_MATCH_LEN):
        for name, value in (('window_size', window_size), ('min_match', min_match), ('max_match', max_match)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgumentError("{0} must be an integer, not {1!r}".format(name, value))
        if not 1 <= window_size <= MAX_FIELD_VALUE:
            raise InvalidArgumentError("window_size {0} is outside 1..{1}".format(window_size, MAX_FIELD_VALUE))
        if min_match < 1:
            raise InvalidArgumentError("min_match {0} must be at least 1".format(min_match))
        if not min_match <= max_match <= MAX_FIELD_VALUE:
            raise InvalidArgumentError("max_match {0} is outside {1}..{2}".format(max_match, min_match, MAX_FIELD_VALUE))
        return super().__new__(cls, window_size, min_match, max_match)


def configure(window_size=WINDOW_SIZE, min_match=MIN_MATCH_LEN, max_match=MAX_MATCH_LEN):
    return Config(window_size, min_match, max_match)


class GrowableBuffer:
    """Growable bytearray buffer, capacity doubles on demand"""
    def __init__(self, capacity=BUFFER_INITIAL_CAPACITY):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 0:
            raise InvalidArgumentError("invalid buffer capacity {0!r}".format(capacity))
        self.num_items = 0
        self.buffer = self._allocate(capacity)

    @property
    def capacity(self):
        return len(self.buffer)

    @staticmethod
    def _new_bytearray(size):
        return bytearray(size)

    def _allocate(self, size):
        try:
            return self._new_bytearray(size)
        except MemoryError:
            raise OutOfMemoryError("cannot allocate a {0} byte buffer".format(size))

    def _grow(self, count):
        needed = self.num_items + count
        if needed <= self.capacity:
            return
        new_capacity = self.capacity * 2 + 1
        while new_capacity < needed:
            new_capacity *= 2
        new_buffer = self._allocate(new_capacity)
        new_buffer[:self.num_items] = self.buffer[:self.num_items]
        self.buffer = new_buffer

    def push(self, byte):
        if isinstance(byte, bool) or not isinstance(byte, int) or not 0 <= byte <= 0xFF:
            raise InvalidArgumentError("cannot push {0!r}, expected a byte value".format(byte))
        self._grow(1)
        self.buffer[self.num_items] = byte
        self.num_items += 1

    def append(self, item):
        item = _as_bytes(item)
        item_len = len(item)
        self._grow(item_len)
        self.buffer[self.num_items:self.num_items+item_len] = item
        self.num_items += item_len

    def release(self):
        self.buffer = bytearray()
        self.num_items = 0

    def getvalue(self):
        return bytes(self.buffer[:self.num_items])

    def __len__(self):
        return self.num_items

    def __bytes__(self):
        return self.getvalue()

    def __getitem__(self, key):
        if isinstance(key, int):
            if key < 0:
                key += self.num_items
            if not 0 <= key < self.num_items:
                raise IndexError("GrowableBuffer index out of range")
            return self.buffer[key]
        elif isinstance(key, slice):
            (start, end, step) = key.indices(self.num_items)
            return bytes(self.buffer[start:end:step])
        else:
            raise TypeError("GrowableBuffer index must be integer, not %s" % type(key))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        # Nothing partial escapes a failed call
        if exc_type is not None:
            self.release()
        return False


class CircularBytesBuffer:
    """Circular bytearray buffer holding the most recent history"""
    def __init__(self, size):
        self.buffer_size = size

        self.buffer = bytearray(self.buffer_size)
        self.num_items = 0
        self.newest = 0

    def _add_index_wrapped(self, index, count):
        return (index + count) % self.buffer_size

    def push(self, byte):
        self.buffer[self.newest] = byte
        self.newest = self._add_index_wrapped(self.newest, 1)
        if self.num_items < self.buffer_size:
            self.num_items += 1

    def __len__(self):
        return self.num_items

    def __getitem__(self, index):
        """Read back from the newest end, so index must be negative"""
        if not -self.num_items <= index < 0:
            raise IndexError("CircularBytesBuffer index out of range")
        return self.buffer[self._add_index_wrapped(self.newest, index)]


Literal = namedtuple('Literal', ['byte'])
Reference = namedtuple('Reference', ['offset', 'length'])


def find_match(in_data, pos, config):
    """
    Search the window preceding pos for the longest earlier occurrence of
    the bytes starting at pos.
    Returns (offset, length), or (0, 0) if nothing reaches min_match.
    Equal-length matches keep the oldest one found.
    """
    best_offset = 0
    best_length = 0

    search_start = max(0, pos - config.window_size)
    max_len = min(len(in_data) - pos, config.max_match)
    if max_len < config.min_match:
        return (0, 0)

    for i in range(search_start, pos):
        match_len = 0
        while match_len < max_len and in_data[i + match_len] == in_data[pos + match_len]:
            match_len += 1
        if match_len >= config.min_match and match_len > best_length:
            best_offset = pos - i
            best_length = match_len
            if match_len == max_len:
                # can't do better
                break
    return (best_offset, best_length)


def _reference_fields(token):
    offset, length = token
    for value in (offset, length):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgumentError("Reference {0} fields must be integers".format(token))
    if length < 0:
        raise InvalidArgumentError("Reference {0} has a negative length".format(token))
    return offset, length


def _copy_reference(out_data, offset, length):
    if offset < 1 or offset > len(out_data):
        raise InvalidDataError("reference out of range: offset {0} with {1} bytes of output".format(offset, len(out_data)))
    start = len(out_data) - offset
    # Byte by byte, the source may overlap what this token writes
    for i in range(length):
        out_data.push(out_data[start + i])


class LZ77Coder:
    def __init__(self, config=None):
        if config is None:
            config = configure()
        if not isinstance(config, Config):
            raise InvalidArgumentError("config must be a Config, not {0}".format(type(config).__name__))
        self.config = config

    def compress(self, in_data):
        """Greedy tokenisation of in_data. Returns a list of tokens."""
        in_data = _as_bytes(in_data)
        out_data = []

        in_data_offset = 0
        while in_data_offset < len(in_data):
            offset, length = find_match(in_data, in_data_offset, self.config)
            if length >= self.config.min_match:
                out_data.append(Reference(offset, length))
                in_data_offset += length
            else:
                out_data.append(Literal(in_data[in_data_offset]))
                in_data_offset += 1
        return out_data

    @staticmethod
    def encode_token(token, out_buffer):
        if isinstance(token, Literal):
            out_buffer.push(TOKEN_LITERAL)
            out_buffer.push(token.byte)
        elif isinstance(token, Reference):
            offset, length = _reference_fields(token)
            if not 1 <= offset <= MAX_FIELD_VALUE or length > MAX_FIELD_VALUE:
                raise InvalidArgumentError("Reference {0} cannot be encoded".format(token))
            out_buffer.append(_REFERENCE_STRUCT.pack(TOKEN_REFERENCE, offset, length))
        else:
            raise InvalidArgumentError("not a token: {0!r}".format(token))

    def encode(self, in_data):
        """Encode the compressed tokens to a binary stream"""
        with GrowableBuffer() as out_buffer:
            for token in in_data:
                self.encode_token(token, out_buffer)
            return out_buffer.getvalue()

    @staticmethod
    def gen_decode(in_data):
        """Decode a binary stream to tokens, one token at a time"""
        in_data = _as_bytes(in_data)
        in_data_len = len(in_data)

        pos = 0
        while pos < in_data_len:
            token_pos = pos
            token_type = in_data[pos]
            pos += 1
            if token_type == TOKEN_LITERAL:
                if pos >= in_data_len:
                    raise InvalidDataError("truncated literal at position {0}".format(token_pos))
                yield Literal(in_data[pos])
                pos += 1
            elif token_type == TOKEN_REFERENCE:
                if pos + _FIELDS_STRUCT.size > in_data_len:
                    raise InvalidDataError("truncated reference at position {0}".format(token_pos))
                offset, length = _FIELDS_STRUCT.unpack_from(in_data, pos)
                yield Reference(offset, length)
                pos += _FIELDS_STRUCT.size
            else:
                raise InvalidDataError("invalid token type 0x{0:02X} at position {1}".format(token_type, token_pos))

    def decode(self, in_data):
        """Decode a binary stream to a list of tokens"""
        return list(self.gen_decode(in_data))

    @staticmethod
    def decompress(in_data):
        """Rebuild the original bytes from tokens"""
        with GrowableBuffer() as out_data:
            for token in in_data:
                if isinstance(token, Literal):
                    out_data.push(token.byte)
                elif isinstance(token, Reference):
                    offset, length = _reference_fields(token)
                    _copy_reference(out_data, offset, length)
                else:
                    raise InvalidArgumentError("not a token: {0!r}".format(token))
            return out_data.getvalue()

    @staticmethod
    def gen_decompress(in_data, window_size=MAX_FIELD_VALUE):
        """
        Decompress a binary stream, yielding one byte at a time.
        Only window_size bytes of history are kept.
        """
        if isinstance(window_size, bool) or not isinstance(window_size, int):
            raise InvalidArgumentError("window_size must be an integer, not {0!r}".format(window_size))
        if not 1 <= window_size <= MAX_FIELD_VALUE:
            raise InvalidArgumentError("window_size {0} is outside 1..{1}".format(window_size, MAX_FIELD_VALUE))
        return LZ77Coder._gen_decompress(in_data, window_size)

    @staticmethod
    def _gen_decompress(in_data, window_size):
        cbb = CircularBytesBuffer(window_size)
        produced = 0
        for token in LZ77Coder.gen_decode(in_data):
            if isinstance(token, Literal):
                cbb.push(token.byte)
                produced += 1
                yield bytes([token.byte])
            else:
                offset, length = token
                if offset < 1 or offset > produced:
                    raise InvalidDataError("reference out of range: offset {0} with {1} bytes of output".format(offset, produced))
                if offset > window_size:
                    raise InvalidDataError("reference offset {0} is beyond the {1} byte window".format(offset, window_size))
                for i in range(length):
                    next_char = cbb[-offset]
                    cbb.push(next_char)
                    produced += 1
                    yield bytes([next_char])


def compress_tokens(in_data, config=None):
    return LZ77Coder(config).compress(in_data)

def encode_tokens(tokens):
    return LZ77Coder().encode(tokens)

def decode_tokens(in_data):
    return LZ77Coder().decode(in_data)

gen_decode = LZ77Coder.gen_decode
decompress_tokens = LZ77Coder.decompress
gen_decompress = LZ77Coder.gen_decompress


def compress(in_data, config=None):
    LZ77 = LZ77Coder(config)
    return LZ77.encode(LZ77.compress(in_data))

def decompress(in_data):
    """
    Decompress a binary stream in one pass: read a tag byte, then its
    payload, straight into the output buffer.
    """
    in_data = _as_bytes(in_data)
    in_data_len = len(in_data)

    with GrowableBuffer() as out_data:
        pos = 0
        while pos < in_data_len:
            token_pos = pos
            token_type = in_data[pos]
            pos += 1
            if token_type == TOKEN_LITERAL:
                if pos >= in_data_len:
                    raise InvalidDataError("truncated literal at position {0}".format(token_pos))
                out_data.push(in_data[pos])
                pos += 1
            elif token_type == TOKEN_REFERENCE:
                if pos + _FIELDS_STRUCT.size > in_data_len:
                    raise InvalidDataError("truncated reference at position {0}".format(token_pos))
                offset, length = _FIELDS_STRUCT.unpack_from(in_data, pos)
                pos += _FIELDS_STRUCT.size
                _copy_reference(out_data, offset, length)
            else:
                raise InvalidDataError("invalid token type 0x{0:02X} at position {1}".format(token_type, token_pos))
        return out_data.getvalue()
