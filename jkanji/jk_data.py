#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data file access for jkanji: locating data files, parsing their rows, and building derived tables exactly once.

Data files (in jkanji/data unless found elsewhere first):
 * golden_old-new.txt                   old (kyujitai) -> new (shinjitai) forms, 4 space-separated columns
 * golden_jinmei.txt                    personal-name-use kanji (first !!!-delimited section)
 * normalization_map_hotset_names.csv   curated high-frequency name variants (hotset)
 * normalization_map_namefirst_491.csv  main variant table
CSV columns: target_char,target_codepoint,variant_char,variant_codepoint,category,notes
"""
# -*- encoding: utf-8 -*-
import csv
import logging as log
import os
from pathlib import Path
import threading
from typing import Callable, Generic, Iterable, Iterator, List, NamedTuple, Optional, Tuple, TypeVar, Union
from jkanji.jk_unicode import MAX_SCALAR, is_high_surrogate, is_low_surrogate, iter_scalars, single_scalar

data_dir = Path(__file__).parent / 'data'
data_dir_path = str(data_dir.resolve())
DATA_DIR_ENV_VAR = 'JKANJI_DATA_DIR'

OLD_NEW_FILENAME = 'golden_old-new.txt'
JINMEI_FILENAME = 'golden_jinmei.txt'
HOTSET_FILENAME = 'normalization_map_hotset_names.csv'
MAIN_MAP_FILENAME = 'normalization_map_namefirst_491.csv'

T = TypeVar('T')


class DataSourceNotFoundError(FileNotFoundError):
    """A data file required by an explicit construction path could not be found."""


class Lazy(Generic[T]):
    """Builds a value on first access and keeps it for the rest of the process.
    Concurrent first accesses result in exactly one call of the builder."""

    def __init__(self, builder: Callable[[], T], name: Optional[str] = None):
        self._builder = builder
        self._lock = threading.Lock()
        self._built = False
        self._value = None
        self.name = name or getattr(builder, '__name__', 'lazy')

    @property
    def value(self) -> T:
        if not self._built:
            with self._lock:
                if not self._built:
                    self._value = self._builder()
                    self._built = True
        return self._value

    def __call__(self) -> T:
        return self.value

    @property
    def is_built(self) -> bool:
        return self._built


def data_search_dirs() -> List[Path]:
    """Directories searched for data files, in order: $JKANJI_DATA_DIR entries, package data dir, ./data"""
    dirs = [Path(d) for d in os.environ.get(DATA_DIR_ENV_VAR, '').split(os.pathsep) if d]
    dirs.append(data_dir)
    dirs.append(Path.cwd() / 'data')
    return dirs


def resolve_data_path(path_or_name: Union[str, Path]) -> Optional[Path]:
    """Returns the first existing file for path_or_name (as given, then in data_search_dirs()), else None."""
    path = Path(path_or_name)
    if path.is_file():
        return path
    for directory in data_search_dirs():
        candidate = directory / path_or_name
        if candidate.is_file():
            return candidate
    return None


def read_data_lines(path_or_name: Union[str, Path]) -> Optional[List[str]]:
    """Lines (without line endings, BOM removed) of a data file, or None if it cannot be found."""
    path = resolve_data_path(path_or_name)
    if path is None:
        return None
    with open(path, 'r', encoding='utf-8-sig', errors='surrogateescape') as f:
        return [line.rstrip('\r\n') for line in f]


def require_data_lines(path_or_name: Union[str, Path]) -> List[str]:
    lines = read_data_lines(path_or_name)
    if lines is None:
        considered = ', '.join(str(d) for d in data_search_dirs())
        raise DataSourceNotFoundError(f'Could not find data file {path_or_name} (also looked in: {considered})')
    return lines


class VariantEntry(NamedTuple):
    canonical: str
    canonical_code_point: str  # informational, e.g. 'U+67F3'
    variant: str
    variant_code_point: str    # informational
    category: str = ''
    notes: str = ''

    @property
    def canonical_scalar(self) -> Optional[int]:
        return single_scalar(self.canonical)

    @property
    def variant_scalar(self) -> Optional[int]:
        return single_scalar(self.variant)

    def is_itaiji(self) -> bool:
        return self.category.strip().lower() == 'itaiji'


def parse_csv_line(line: str) -> List[str]:
    """Splits one CSV record. Example: 'a,"b,c","d""e"' -> ['a', 'b,c', 'd"e']"""
    return next(csv.reader([line]), [])


def iter_variant_entries(lines: Iterable[str], skip_header: Optional[bool] = None, min_columns: int = 3,
                         itaiji_only: bool = False, source: str = '') -> Iterator[VariantEntry]:
    """
    Parses CSV variant table lines into VariantEntry objects.
    skip_header: None: drop first line only if it starts with 'target_char'; True: always drop it; False: keep it.
    Rows with fewer than min_columns fields, with canonical or variant not exactly one character, with
    canonical == variant, or (if itaiji_only) with a category other than 'itaiji' are skipped.
    """
    n_skipped = 0
    n_accepted = 0
    for line_number, line in enumerate(lines, 1):
        if line_number == 1 and (skip_header or (skip_header is None and line.startswith('target_char'))):
            continue
        if not line:
            continue
        try:
            fields = parse_csv_line(line)
        except csv.Error:
            n_skipped += 1
            continue
        if len(fields) < min_columns:
            n_skipped += 1
            continue
        fields += [''] * (6 - len(fields))
        entry = VariantEntry(*fields[:6])
        canonical_scalar, variant_scalar = entry.canonical_scalar, entry.variant_scalar
        if (canonical_scalar is None or variant_scalar is None or canonical_scalar == variant_scalar
                or (itaiji_only and not entry.is_itaiji())):
            n_skipped += 1
            continue
        n_accepted += 1
        yield entry
    log.debug(f'{source or "CSV"}: {n_accepted} entries accepted, {n_skipped} rows skipped')


def iter_old_new_lines(lines: Iterable[str], source: str = OLD_NEW_FILENAME) -> Iterator[Tuple[int, str]]:
    """Parses golden_old-new.txt lines into (old scalar, new string) pairs.
    Example: '570B 國 56FD 国' -> (0x570B, '国'); comment lines start with '!'"""
    n_skipped = 0
    for line in lines:
        if not line or line.startswith('!'):
            continue
        cols = line.split(' ')
        if len(cols) != 4:
            n_skipped += 1
            continue
        try:
            code_point = int(cols[0], 16)
        except ValueError:
            n_skipped += 1
            continue
        if not 0 <= code_point <= MAX_SCALAR or is_high_surrogate(code_point) or is_low_surrogate(code_point):
            n_skipped += 1
            continue
        yield code_point, cols[3]
    if n_skipped:
        log.debug(f'{source}: skipped {n_skipped} malformed lines')


def iter_section_scalars(lines: Iterable[str], separators: str = '‐') -> Iterator[int]:
    """Scalars listed in the first section of a file whose first line and section end start with '!!!'.
    Separator characters (default: hyphen ‐) and whitespace are ignored. No leading '!!!' line -> nothing."""
    lines = iter(lines)
    first_line = next(lines, None)
    if first_line is None or not first_line.startswith('!!!'):
        return
    for line in lines:
        if line.startswith('!!!'):
            break
        for span in iter_scalars(line):
            char = line[span.start:span.start + span.width]
            if span.valid and char not in separators and not char.isspace():
                yield span.scalar
