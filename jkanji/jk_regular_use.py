#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Regular-use (jōyō) and personal-name-use (jinmeiyō) kanji classification.

Regular use = standard OR old form OR tolerable form.
Characters outside the Han blocks (Latin, kana, punctuation) are never 'not regular use'
and never 'not for personal names'.
"""
# -*- encoding: utf-8 -*-
import logging as log
from typing import Optional, Set, Union
from jkanji.jk_data import JINMEI_FILENAME, OLD_NEW_FILENAME, Lazy, iter_old_new_lines, iter_section_scalars, \
    read_data_lines
from jkanji.jk_unicode import HAN, Range, RangeTable, replace_all, to_scalar

STANDARD = RangeTable([
    Range(0x4E00, 0x9FFF),
    Range(0x3400, 0x4DBF),
    Range(0xF900, 0xFAFF),
])

# Tolerable forms (許容字体): 謎 遜 遡 餅 餌
TOLERABLE = RangeTable([
    Range(0x8B0E, 0x8B0E),
    Range(0x905C, 0x905C),
    Range(0x9061, 0x9061),
    Range(0x9905, 0x9905),
    Range(0x990C, 0x990C),
])


def build_old_form_table(path_or_name: str = OLD_NEW_FILENAME) -> RangeTable:
    """Old forms are the left-hand (old) side of the old->new table."""
    lines = read_data_lines(path_or_name)
    if lines is None:
        log.warning(f'Could not find {path_or_name}; old-form regular-use table will be empty')
        return RangeTable()
    return RangeTable.from_scalars(code_point for code_point, _ in iter_old_new_lines(lines, source=path_or_name))


def build_personal_name_table(path_or_name: str = JINMEI_FILENAME) -> RangeTable:
    lines = read_data_lines(path_or_name)
    if lines is None:
        log.warning(f'Could not find {path_or_name}; personal-name table will be empty')
        return RangeTable()
    return RangeTable.from_scalars(iter_section_scalars(lines))


OLD_FORM = Lazy(build_old_form_table, 'old-form')
PERSONAL_NAMES = Lazy(build_personal_name_table, 'personal-names')


def is_han(ch: Union[str, int]) -> bool:
    return HAN.is_in(to_scalar(ch))


def is_standard_regular_use(ch: Union[str, int]) -> bool:
    return STANDARD.is_in(to_scalar(ch))


def is_old_form_regular_use(ch: Union[str, int]) -> bool:
    return OLD_FORM.value.is_in(to_scalar(ch))


def is_tolerable_regular_use(ch: Union[str, int]) -> bool:
    return TOLERABLE.is_in(to_scalar(ch))


def is_regular_use(ch: Union[str, int]) -> bool:
    scalar = to_scalar(ch)
    return STANDARD.is_in(scalar) or OLD_FORM.value.is_in(scalar) or TOLERABLE.is_in(scalar)


def is_not_regular_use(ch: Union[str, int]) -> bool:
    scalar = to_scalar(ch)
    return HAN.is_in(scalar) and not is_regular_use(scalar)


def is_for_personal_names(ch: Union[str, int]) -> bool:
    scalar = to_scalar(ch)
    return is_regular_use(scalar) or PERSONAL_NAMES.value.is_in(scalar)


def is_not_for_personal_names(ch: Union[str, int]) -> bool:
    scalar = to_scalar(ch)
    return HAN.is_in(scalar) and not is_for_personal_names(scalar)


def replace_not_regular_use_all(s: Optional[str], replacement: str) -> Optional[str]:
    """Replaces all Han characters that are not regular-use kanji. Example: ('𠀀A', '_') -> '_A'"""
    return replace_all(s, replacement, lambda scalar: not is_not_regular_use(scalar))


def replace_not_for_personal_names_all(s: Optional[str], replacement: str) -> Optional[str]:
    return replace_all(s, replacement, lambda scalar: not is_not_for_personal_names(scalar))


class Discriminator:
    """
    Regular-use check with per-call overrides. Explicitly allowed characters are never 'not regular use',
    explicitly disallowed ones always are (allow wins if a character is in both). Everything else falls back to
    the shared regular-use tables.
    Example: Discriminator().disallow('漢').replace_not_regular_use_all('漢A漢', '_') -> '_A_'
    allow() and disallow() modify the object in place; do not call them while other threads use it.
    """

    def __init__(self):
        self.allowed: Set[int] = set()
        self.disallowed: Set[int] = set()

    def allow(self, *chars: Union[str, int]) -> 'Discriminator':
        self.allowed.update(to_scalar(ch) for ch in chars)
        return self

    def disallow(self, *chars: Union[str, int]) -> 'Discriminator':
        self.disallowed.update(to_scalar(ch) for ch in chars)
        return self

    def is_not_regular_use(self, ch: Union[str, int]) -> bool:
        scalar = to_scalar(ch)
        if scalar in self.allowed:
            return False
        if scalar in self.disallowed:
            return True
        return is_not_regular_use(scalar)

    def replace_not_regular_use_all(self, s: Optional[str], replacement: str) -> Optional[str]:
        return replace_all(s, replacement, lambda scalar: not self.is_not_regular_use(scalar))

    def __repr__(self) -> str:
        return f'Discriminator(allowed={len(self.allowed)}, disallowed={len(self.disallowed)})'
