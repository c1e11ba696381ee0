"""C memory routines over a Memory, with element-wise unordered-atomic variants."""

from __future__ import annotations

from .memory import Memory, compare_bytes, copy_backward, copy_forward, set_bytes

_ELEMENT_SIZES = (1, 2, 4, 8, 16)


def memcpy(mem: Memory, dest: int, src: int, n: int) -> int:
    """Copy ``n`` bytes from ``src`` to ``dest`` and return ``dest``."""
    copy_forward(mem, dest, src, n)
    return dest


def memmove(mem: Memory, dest: int, src: int, n: int) -> int:
    """Copy ``n`` bytes from ``src`` to ``dest``, correct for overlap; return ``dest``."""
    delta = (dest - src) % (1 << mem.word_bits)
    if delta >= n:
        # dest is far enough ahead of src, or src is ahead of dest (delta wrapped).
        copy_forward(mem, dest, src, n)
    else:
        copy_backward(mem, dest, src, n)
    return dest


def memset(mem: Memory, s: int, c: int, n: int) -> int:
    """Fill ``n`` bytes at ``s`` with the low byte of ``c`` and return ``s``."""
    set_bytes(mem, s, c & 0xFF, n)
    return s


def memcmp(mem: Memory, s1: int, s2: int, n: int) -> int:
    """Compare ``n`` bytes; negative, zero or positive like C ``memcmp``."""
    return compare_bytes(mem, s1, s2, n)


def bcmp(mem: Memory, s1: int, s2: int, n: int) -> int:
    """Compare ``n`` bytes; zero exactly when they are equal."""
    return memcmp(mem, s1, s2, n)


def strlen(mem: Memory, s: int) -> int:
    """Return the number of bytes before the first NUL byte at or after ``s``."""
    if not 0 <= s < len(mem):
        raise IndexError(f"address {s} outside memory of {len(mem)} bytes")
    end = bytes(mem).find(0, s)
    if end < 0:
        raise IndexError(f"no terminating NUL byte after address {s}")
    return end - s


def _element_count(nbytes: int, element_size: int) -> int:
    if element_size not in _ELEMENT_SIZES:
        raise ValueError(
            f"element size must be one of {_ELEMENT_SIZES}, got {element_size}"
        )
    if nbytes < 0:
        raise ValueError(f"byte count must not be negative, got {nbytes}")
    count, rest = divmod(nbytes, element_size)
    if rest:
        raise ValueError(
            f"byte count {nbytes} is not a multiple of element size {element_size}"
        )
    return count


def _copy_element(mem: Memory, dest: int, src: int, index: int, size: int) -> None:
    offset = index * size
    mem.write(dest + offset, mem.read(src + offset, size))


def memcpy_element_unordered_atomic(
    mem: Memory, dest: int, src: int, nbytes: int, element_size: int
) -> None:
    """Copy ``nbytes`` one whole element at a time, lowest element first."""
    for index in range(_element_count(nbytes, element_size)):
        _copy_element(mem, dest, src, index, element_size)


def memmove_element_unordered_atomic(
    mem: Memory, dest: int, src: int, nbytes: int, element_size: int
) -> None:
    """Copy ``nbytes`` one whole element at a time, correct for overlap."""
    indices = range(_element_count(nbytes, element_size))
    if src < dest:
        indices = reversed(indices)
    for index in indices:
        _copy_element(mem, dest, src, index, element_size)


def memset_element_unordered_atomic(
    mem: Memory, s: int, c: int, nbytes: int, element_size: int
) -> None:
    """Fill ``nbytes`` at ``s`` with byte ``c``, writing whole elements."""
    if not 0 <= c <= 0xFF:
        raise ValueError(f"byte value must be in 0..255, got {c}")
    count = _element_count(nbytes, element_size)
    element = bytes([c]) * element_size
    for index in range(count):
        mem.write(s + index * element_size, element)