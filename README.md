# membuiltins

This package provides reference implementations of the classic memory
builtins. They are `memcpy`, `memmove`, `memset`, `memcmp`, `bcmp`,
`strlen` and the element-wise unordered-atomic variants. All of them work
on a simulated, byte-addressed memory. The package also has two software
multiplication routines.

Most of the memory routines copy or fill word by word. They align the
destination, handle whole words, and then finish the leftover bytes.
`memmove` handles overlapping regions the way a C library must. Addresses
are plain integers, so you can test alignment-sensitive behaviour without
touching real memory.

## Installation

```
pip install membuiltins
```

To install with the test dependencies:

```
pip install "membuiltins[test]"
```

## Usage

### Memory

`membuiltins.memory.Memory` is a flat, zero-based byte store. Address 0 is
word aligned.

- `Memory(initial)` takes either a size in bytes or some initial bytes.
- The keyword `word_size` must be a power of two. It defaults to 8.
- The keyword `byteorder` is `"little"` or `"big"`. It defaults to `"little"`.
- `read(address, n)` returns bytes.
- `write(address, data)` stores bytes.
- An access outside the memory raises `IndexError`.

```python
from membuiltins.memory import Memory
from membuiltins.intrinsics import memcpy, memmove, memset, memcmp, strlen

mem = Memory(128)
mem.write(0, bytes(range(12)))

memmove(mem, 3, 6, 5)          # overlapping move, returns the destination
print(list(mem.read(0, 12)))   # [0, 1, 2, 6, 7, 8, 9, 10, 8, 9, 10, 11]

memset(mem, 0, 0x2009, 4)      # only the low byte of the fill value counts
print(memcmp(mem, 0, 4, 4))    # 2: difference of the first differing bytes

mem.write(100, b"hello\0")
print(strlen(mem, 100))        # 5
```

### Intrinsics

The module `membuiltins.intrinsics` has these functions:

- `memcpy(mem, dest, src, n)` copies lowest address first and returns `dest`.
- `memmove(mem, dest, src, n)` is correct when the regions overlap. It returns `dest`.
- `memset(mem, s, c, n)` fills with the low byte of `c` and returns `s`.
- `memcmp(mem, s1, s2, n)` returns the difference of the first differing bytes, or 0 if there is none.
- `bcmp(mem, s1, s2, n)` returns zero exactly when the regions are equal.
- `strlen(mem, s)` returns the number of bytes before the first NUL. It raises `IndexError` if no NUL follows.
- `memcpy_element_unordered_atomic(mem, dest, src, nbytes, element_size)` copies whole elements.
- `memmove_element_unordered_atomic(mem, dest, src, nbytes, element_size)` copies whole elements and is correct when the regions overlap.
- `memset_element_unordered_atomic(mem, s, c, nbytes, element_size)` fills whole elements.

For the three element-wise functions, `element_size` must be 1, 2, 4, 8
or 16. `nbytes` must be a multiple of it. If either rule is broken, the
function raises `ValueError`.

### Lower-level helpers

The module `membuiltins.memory` also has these helpers:

- `copy_forward`, `copy_backward`, `set_bytes` and `compare_bytes` are the word-wise routines that the intrinsics use.
- `rep_param(dest, count)` splits `count` into three parts. It returns a `RepParams` tuple of `(pre_byte_count, qword_count, byte_count)`.
  - `pre_byte_count` is the number of bytes up to 8-byte alignment of `dest`.
  - `qword_count` is the number of whole qwords.
  - `byte_count` is the number of tail bytes.

### Software multiplication

These functions multiply by shifting and adding:

```python
from membuiltins.softmul import mulsi3, muldi3

mulsi3(7, 6)            # 42, wrapping at 32 bits
muldi3(2**63, 2)        # 0, wrapping at 64 bits
```

An argument that is outside the unsigned range raises `ValueError`.

## What it does not do

The package works only on its simulated `Memory`. It never reads or writes
real process memory. It has no command-line tool. It does not generate test
inputs, so you supply your own values or use a property-testing library.

## Running the tests

```
pytest
```