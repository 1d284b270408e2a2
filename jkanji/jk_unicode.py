#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Code point level helpers: scalar iteration over Python strings, range tables and the Han table.

Python strings are sequences of code points, but text that was decoded from UTF-16 with 'surrogatepass'
(or assembled from UTF-16 code units) can carry a surrogate pair as two separate code points, or a lone
surrogate. iter_scalars() folds well-formed pairs into one scalar and reports lone surrogates as invalid
units, so that a rewrite pass never splits a supplementary-plane character and never fails on bad input.
"""
# -*- encoding: utf-8 -*-
from typing import Callable, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Union

MAX_SCALAR = 0x10FFFF
MAX_SCALAR_16 = 0xFFFF


class ScalarSpan(NamedTuple):
    scalar: int   # Unicode scalar value (or the raw code unit value if not valid)
    start: int    # index into the string
    width: int    # number of Python code points the scalar occupies (1 or 2)
    valid: bool   # False for an unpaired surrogate


def is_high_surrogate(code_point: int) -> bool:
    return 0xD800 <= code_point <= 0xDBFF


def is_low_surrogate(code_point: int) -> bool:
    return 0xDC00 <= code_point <= 0xDFFF


def iter_scalars(s: str) -> Iterator[ScalarSpan]:
    """Lazily decodes s into (scalar, start, width, valid) spans.
    Example: 'a\\U00020000' -> (0x61, 0, 1, True), (0x20000, 1, 1, True)
             '\\ud840\\udc00' -> (0x20000, 0, 2, True)"""
    i = 0
    n = len(s)
    while i < n:
        code_point = ord(s[i])
        if is_high_surrogate(code_point):
            if i + 1 < n and is_low_surrogate(ord(s[i + 1])):
                scalar = 0x10000 + ((code_point - 0xD800) << 10) + (ord(s[i + 1]) - 0xDC00)
                yield ScalarSpan(scalar, i, 2, True)
                i += 2
                continue
            yield ScalarSpan(code_point, i, 1, False)
        elif is_low_surrogate(code_point):
            yield ScalarSpan(code_point, i, 1, False)
        else:
            yield ScalarSpan(code_point, i, 1, True)
        i += 1


def single_scalar(s: Optional[str]) -> Optional[int]:
    """Returns the scalar value if s holds exactly one (valid) scalar, otherwise None. '' -> None; 'ab' -> None"""
    if not s:
        return None
    spans = iter_scalars(s)
    first = next(spans)
    if not first.valid or first.width != len(s):
        return None
    return first.scalar


def to_scalar(ch: Union[str, int]) -> int:
    """Accepts a scalar value or a one-character string. Example: '漢' -> 0x6F22"""
    if isinstance(ch, int):
        if not 0 <= ch <= MAX_SCALAR:
            raise ValueError(f'Scalar value out of range: {ch:#x}')
        return ch
    scalar = single_scalar(ch)
    if scalar is None:
        raise ValueError(f'Expected a single character, got {ch!r}')
    return scalar


class Range(NamedTuple):
    lo: int
    hi: int
    stride: int = 1

    def contains(self, scalar: int) -> bool:
        if scalar < self.lo or scalar > self.hi:
            return False
        return (scalar - self.lo) % (self.stride or 1) == 0


class RangeTable:
    """
    Immutable set of (lo, hi, stride) ranges describing a character class.
    Ranges are split into those that fit into 16 bits (r16) and the rest (r32); the split only saves work at
    lookup time. Ranges may overlap and need not be sorted: membership is an OR over all ranges.
    """
    __slots__ = ('r16', 'r32')

    def __init__(self, ranges: Iterable[Union[Range, Sequence[int]]] = ()):
        r16, r32 = [], []
        for r in ranges:
            r = r if isinstance(r, Range) else Range(*r)
            if r.lo > r.hi:
                raise ValueError(f'Bad range {r.lo:#x}-{r.hi:#x}')
            (r16 if r.hi <= MAX_SCALAR_16 else r32).append(r)
        self.r16 = tuple(r16)
        self.r32 = tuple(r32)

    @classmethod
    def from_scalars(cls, scalars: Iterable[int]) -> 'RangeTable':
        return cls(compact_scalars_to_ranges(scalars))

    def is_in(self, scalar: int) -> bool:
        if scalar <= MAX_SCALAR_16:
            for r in self.r16:
                if r.contains(scalar):
                    return True
        for r in self.r32:
            if r.contains(scalar):
                return True
        return False

    def __contains__(self, scalar: int) -> bool:
        return self.is_in(scalar)

    def __iter__(self) -> Iterator[Range]:
        yield from self.r16
        yield from self.r32

    def __len__(self) -> int:
        return len(self.r16) + len(self.r32)

    def __repr__(self) -> str:
        return f'RangeTable(r16={len(self.r16)}, r32={len(self.r32)})'


def compact_scalars_to_ranges(scalars: Iterable[int]) -> List[Range]:
    """Merges a set of scalars into maximal stride-1 ranges, sorted ascending.
    Example: {0x4E00, 0x4E01, 0x4E02, 0x4E05} -> [Range(0x4E00, 0x4E02), Range(0x4E05, 0x4E05)]"""
    result = []
    start = prev = None
    for scalar in sorted(set(scalars)):
        if prev is not None and scalar == prev + 1:
            prev = scalar
            continue
        if start is not None:
            result.append(Range(start, prev, 1))
        start = prev = scalar
    if start is not None:
        result.append(Range(start, prev, 1))
    return result


# CJK ideograph blocks
HAN = RangeTable([
    Range(0x3400, 0x4DBF),    # CJK Unified Ideographs Extension A
    Range(0x4E00, 0x9FFF),    # CJK Unified Ideographs
    Range(0xF900, 0xFAFF),    # CJK Compatibility Ideographs
    Range(0x20000, 0x2A6DF),  # Extension B
    Range(0x2A700, 0x2B73F),  # Extension C
    Range(0x2B740, 0x2B81F),  # Extension D
    Range(0x2B820, 0x2CEAF),  # Extension E
    Range(0x2CEB0, 0x2EBEF),  # Extension F
    Range(0x30000, 0x3134F),  # Extension G
])


def is_han(scalar: int) -> bool:
    return HAN.is_in(scalar)


def replace_all(s: Optional[str], replacement: str, keep: Callable[[int], bool]) -> Optional[str]:
    """
    Replaces every scalar for which keep() is False by replacement (inserted verbatim, may be empty).
    Kept characters and unpaired surrogates (which keep() never sees) are copied from s as slices.
    """
    if not s:
        return s
    pieces = []
    copy_from = 0
    for span in iter_scalars(s):
        if not span.valid or keep(span.scalar):
            continue
        if copy_from < span.start:
            pieces.append(s[copy_from:span.start])
        pieces.append(replacement)
        copy_from = span.start + span.width
    if copy_from == 0:
        return s
    pieces.append(s[copy_from:])
    return ''.join(pieces)
