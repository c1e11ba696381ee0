"""A byte-addressable memory model and the word-wise copy, fill and compare routines."""

from __future__ import annotations

from typing import NamedTuple, Union

BytesLike = Union[bytes, bytearray, memoryview]


class Memory:
    """A flat, zero-based byte store whose address 0 is word aligned."""

    def __init__(
        self,
        initial: int | BytesLike = 0,
        *,
        word_size: int = 8,
        byteorder: str = "little",
    ) -> None:
        if word_size < 1 or word_size & (word_size - 1):
            raise ValueError(f"word size must be a power of two, got {word_size}")
        if byteorder not in ("little", "big"):
            raise ValueError(f"byteorder must be 'little' or 'big', got {byteorder!r}")
        self._data = bytearray(initial)
        self.word_size = word_size
        self.byteorder = byteorder

    @property
    def word_bits(self) -> int:
        return self.word_size * 8

    @property
    def word_mask(self) -> int:
        """Mask selecting the offset of an address within its word."""
        return self.word_size - 1

    @property
    def copy_threshold(self) -> int:
        """Smallest length for which the word-wise routines are used."""
        return max(2 * self.word_size, 16)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __repr__(self) -> str:
        return (
            f"Memory({len(self)} bytes, word_size={self.word_size}, "
            f"byteorder={self.byteorder!r})"
        )

    def _require(self, address: int, n: int) -> None:
        if n < 0:
            raise ValueError(f"length must not be negative, got {n}")
        if address < 0 or address + n > len(self._data):
            raise IndexError(
                f"range [{address}, {address + n}) outside memory of {len(self._data)} bytes"
            )

    def read(self, address: int, n: int) -> bytes:
        """Return the ``n`` bytes starting at ``address``."""
        self._require(address, n)
        return bytes(self._data[address : address + n])

    def write(self, address: int, data: BytesLike) -> None:
        """Store ``data`` starting at ``address``."""
        data = bytes(data)
        self._require(address, len(data))
        self._data[address : address + len(data)] = data


class RepParams(NamedTuple):
    """Byte and qword counts for a string-instruction style copy or fill."""

    pre_byte_count: int
    qword_count: int
    byte_count: int


def _load_word(mem: Memory, address: int) -> int:
    return int.from_bytes(mem.read(address, mem.word_size), mem.byteorder)


def _store_word(mem: Memory, address: int, value: int) -> None:
    mem.write(address, value.to_bytes(mem.word_size, mem.byteorder))


def _load_word_padded(mem: Memory, address: int) -> int:
    """Load an aligned word whose bytes may lie partly outside memory.

    Bytes outside memory read as zero; callers never use them.
    """
    end = address + mem.word_size
    lo, hi = max(address, 0), min(end, len(mem))
    if hi <= lo:
        chunk = bytes(mem.word_size)
    else:
        chunk = bytes(lo - address) + mem.read(lo, hi - lo) + bytes(end - hi)
    return int.from_bytes(chunk, mem.byteorder)


def _copy_forward_bytes(mem: Memory, dest: int, src: int, n: int) -> None:
    # One byte at a time, in order, so overlapping ranges behave as in hardware.
    for offset in range(n):
        mem.write(dest + offset, mem.read(src + offset, 1))


def _copy_forward_aligned_words(mem: Memory, dest: int, src: int, n: int) -> None:
    for offset in range(0, n, mem.word_size):
        _store_word(mem, dest + offset, _load_word(mem, src + offset))


def _copy_forward_misaligned_words(mem: Memory, dest: int, src: int, n: int) -> None:
    bits = mem.word_bits
    full = (1 << bits) - 1
    shift = (src & mem.word_mask) * 8
    src_aligned = src & ~mem.word_mask
    prev_word = _load_word_padded(mem, src_aligned)
    for offset in range(0, n, mem.word_size):
        src_aligned += mem.word_size
        cur_word = _load_word_padded(mem, src_aligned)
        if mem.byteorder == "little":
            assembled = (prev_word >> shift) | (cur_word << (bits - shift))
        else:
            assembled = (prev_word << shift) | (cur_word >> (bits - shift))
        prev_word = cur_word
        _store_word(mem, dest + offset, assembled & full)


def copy_forward(mem: Memory, dest: int, src: int, n: int) -> None:
    """Copy ``n`` bytes from ``src`` to ``dest``, lowest address first."""
    mem._require(dest, n)
    mem._require(src, n)
    mask = mem.word_mask
    if n >= mem.copy_threshold:
        misalignment = -dest & mask
        _copy_forward_bytes(mem, dest, src, misalignment)
        dest += misalignment
        src += misalignment
        n -= misalignment

        n_words = n & ~mask
        if src & mask == 0:
            _copy_forward_aligned_words(mem, dest, src, n_words)
        else:
            _copy_forward_misaligned_words(mem, dest, src, n_words)
        dest += n_words
        src += n_words
        n -= n_words
    _copy_forward_bytes(mem, dest, src, n)


# The backward helpers take addresses one past the end of their ranges.


def _copy_backward_bytes(mem: Memory, dest_end: int, src_end: int, n: int) -> None:
    for offset in range(1, n + 1):
        mem.write(dest_end - offset, mem.read(src_end - offset, 1))


def _copy_backward_aligned_words(mem: Memory, dest_end: int, src_end: int, n: int) -> None:
    for offset in range(mem.word_size, n + 1, mem.word_size):
        _store_word(mem, dest_end - offset, _load_word(mem, src_end - offset))


def _copy_backward_misaligned_words(
    mem: Memory, dest_end: int, src_end: int, n: int
) -> None:
    bits = mem.word_bits
    full = (1 << bits) - 1
    shift = (src_end & mem.word_mask) * 8
    src_aligned = src_end & ~mem.word_mask
    prev_word = _load_word_padded(mem, src_aligned)
    for offset in range(mem.word_size, n + 1, mem.word_size):
        src_aligned -= mem.word_size
        cur_word = _load_word_padded(mem, src_aligned)
        if mem.byteorder == "little":
            assembled = (prev_word << (bits - shift)) | (cur_word >> shift)
        else:
            assembled = (prev_word >> (bits - shift)) | (cur_word << shift)
        prev_word = cur_word
        _store_word(mem, dest_end - offset, assembled & full)


def copy_backward(mem: Memory, dest: int, src: int, n: int) -> None:
    """Copy ``n`` bytes from ``src`` to ``dest``, highest address first."""
    mem._require(dest, n)
    mem._require(src, n)
    mask = mem.word_mask
    dest += n
    src += n
    if n >= mem.copy_threshold:
        misalignment = dest & mask
        _copy_backward_bytes(mem, dest, src, misalignment)
        dest -= misalignment
        src -= misalignment
        n -= misalignment

        n_words = n & ~mask
        if src & mask == 0:
            _copy_backward_aligned_words(mem, dest, src, n_words)
        else:
            _copy_backward_misaligned_words(mem, dest, src, n_words)
        dest -= n_words
        src -= n_words
        n -= n_words
    _copy_backward_bytes(mem, dest, src, n)


def set_bytes(mem: Memory, s: int, c: int, n: int) -> None:
    """Fill ``n`` bytes starting at ``s`` with the byte value ``c``."""
    if not 0 <= c <= 0xFF:
        raise ValueError(f"byte value must be in 0..255, got {c}")
    mem._require(s, n)
    byte = bytes([c])
    if n >= mem.copy_threshold:
        misalignment = -s & mem.word_mask
        mem.write(s, byte * misalignment)
        s += misalignment
        n -= misalignment

        n_words = n & ~mem.word_mask
        word = byte * mem.word_size
        for offset in range(0, n_words, mem.word_size):
            mem.write(s + offset, word)
        s += n_words
        n -= n_words
    mem.write(s, byte * n)


def compare_bytes(mem: Memory, s1: int, s2: int, n: int) -> int:
    """Return the difference of the first differing bytes, or 0 if none differ."""
    first = mem.read(s1, n)
    second = mem.read(s2, n)
    return next((a - b for a, b in zip(first, second) if a != b), 0)


def rep_param(dest: int, count: int) -> RepParams:
    """Split ``count`` into bytes up to 8-byte alignment of ``dest``, qwords and tail bytes."""
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    pre_byte_count = min((8 - (dest & 0b111)) & 0b111, count)
    count -= pre_byte_count
    return RepParams(pre_byte_count, count >> 3, count & 0b111)