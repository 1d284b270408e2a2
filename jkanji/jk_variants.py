#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Character variant mapping with two tiers: a curated 'hotset' (frequent name variants) that always takes precedence
over a broader 'main' table.
 * replace_old_to_new:      old/variant forms -> regular-use forms, e.g. 國體 -> 国体, 髙橋 -> 高橋
 * replace_to_name_variant: regular-use forms -> name-specific variants (itaiji), e.g. 二本柳 -> 二本栁
 * VariantNormalizer:       variant -> canonical normalizer built from explicitly named CSV files
"""
# -*- encoding: utf-8 -*-
import logging as log
from typing import Callable, Dict, Iterable, Optional, Tuple, Union
from jkanji.jk_data import HOTSET_FILENAME, MAIN_MAP_FILENAME, OLD_NEW_FILENAME, Lazy, iter_old_new_lines, \
    iter_variant_entries, read_data_lines, require_data_lines
from jkanji.jk_unicode import iter_scalars, to_scalar


def replace_by_map(s: Optional[str], lookup: Callable[[int], Optional[str]]) -> Optional[str]:
    """
    Replaces each scalar for which lookup() returns a string. Unmapped characters, including unpaired surrogates,
    are copied from s unchanged. None -> None
    """
    if not s:
        return s
    pieces = []
    copy_from = 0
    for span in iter_scalars(s):
        if not span.valid:
            continue
        value = lookup(span.scalar)
        if value is None:
            continue
        if copy_from < span.start:
            pieces.append(s[copy_from:span.start])
        pieces.append(value)
        copy_from = span.start + span.width
    if copy_from == 0:
        return s
    pieces.append(s[copy_from:])
    return ''.join(pieces)


class TieredVariantMap:
    """
    Two mappings from a scalar to a replacement string. Lookup checks hot, then main.
    Hot entries overwrite earlier hot entries; main entries never overwrite (first main entry for a key wins).
    """

    def __init__(self, hot: Optional[Dict[int, str]] = None, main: Optional[Dict[int, str]] = None):
        self.hot: Dict[int, str] = dict(hot) if hot else {}
        self.main: Dict[int, str] = dict(main) if main else {}

    def add_hot(self, key: int, value: str) -> None:
        self.hot[key] = value

    def add_main(self, key: int, value: str) -> None:
        if key not in self.main:
            self.main[key] = value

    def load(self, pairs: Iterable[Tuple[int, str]], hot: bool = False) -> int:
        n = 0
        for key, value in pairs:
            if hot:
                self.add_hot(key, value)
            else:
                self.add_main(key, value)
            n += 1
        return n

    def lookup(self, scalar: int) -> Optional[str]:
        value = self.hot.get(scalar)
        if value is None:
            value = self.main.get(scalar)
        return value

    def normalize(self, s: Optional[str]) -> Optional[str]:
        return replace_by_map(s, self.lookup)

    @property
    def count(self) -> Tuple[int, int]:
        return len(self.hot), len(self.main)

    def __contains__(self, scalar: int) -> bool:
        return scalar in self.hot or scalar in self.main

    def __repr__(self) -> str:
        return f'TieredVariantMap(hot={len(self.hot)}, main={len(self.main)})'


def load_csv_source(tiered_map: TieredVariantMap, path_or_name: str, hot: bool, name_variants: bool = False,
                    skip_header: Optional[bool] = None) -> bool:
    """
    Adds the entries of a CSV variant table to tiered_map; returns False if the file could not be found.
    name_variants=False: variant -> canonical (all categories);
    name_variants=True:  canonical -> variant (category 'itaiji' only).
    """
    lines = read_data_lines(path_or_name)
    if lines is None:
        log.warning(f'Could not find {path_or_name}; continuing without it')
        return False
    entries = iter_variant_entries(lines, skip_header=skip_header, min_columns=5 if name_variants else 3,
                                   itaiji_only=name_variants, source=path_or_name)
    if name_variants:
        pairs = ((entry.canonical_scalar, entry.variant) for entry in entries)
    else:
        pairs = ((entry.variant_scalar, entry.canonical) for entry in entries)
    n = tiered_map.load(pairs, hot=hot)
    log.debug(f"Loaded {n} {'hot' if hot else 'main'} entries from {path_or_name}")
    return True


def build_old_to_new_map(hot_csv: str = HOTSET_FILENAME, old_new_txt: str = OLD_NEW_FILENAME) -> TieredVariantMap:
    tiered_map = TieredVariantMap()
    load_csv_source(tiered_map, hot_csv, hot=True)
    lines = read_data_lines(old_new_txt)
    if lines is None:
        log.warning(f'Could not find {old_new_txt}; old->new replacement limited to hotset')
    else:
        tiered_map.load(iter_old_new_lines(lines, source=old_new_txt), hot=False)
    return tiered_map


def build_name_variant_map(hot_csv: str = HOTSET_FILENAME, main_csv: str = MAIN_MAP_FILENAME) -> TieredVariantMap:
    tiered_map = TieredVariantMap()
    load_csv_source(tiered_map, hot_csv, hot=True, name_variants=True)
    load_csv_source(tiered_map, main_csv, hot=False, name_variants=True)
    return tiered_map


OLD_TO_NEW = Lazy(build_old_to_new_map, 'old-to-new')
NAME_VARIANTS = Lazy(build_name_variant_map, 'name-variants')


def replace_old_to_new(s: Optional[str]) -> Optional[str]:
    """Example: '國體' -> '国体'"""
    return OLD_TO_NEW.value.normalize(s)


def replace_to_name_variant(s: Optional[str]) -> Optional[str]:
    """Example: '二本柳' -> '二本栁'"""
    return NAME_VARIANTS.value.normalize(s)


class VariantNormalizer:
    """
    Immutable variant -> canonical normalizer (e.g. 髙 -> 高, 𠮷 -> 吉), hotset before main table.
    with_hot_mapping() and with_main_mapping() return new normalizers and leave the original unchanged.
    Example:
        normalizer = VariantNormalizer.from_csv_with_hotset('normalization_map_namefirst_491.csv',
                                                            'normalization_map_hotset_names.csv')
        normalizer.normalize('髙橋﨑太郎と𠮷田さん') -> '高橋崎太郎と吉田さん'
    """
    __slots__ = ('_map',)

    def __init__(self, tiered_map: Optional[TieredVariantMap] = None):
        self._map = tiered_map if tiered_map is not None else TieredVariantMap()

    @staticmethod
    def load_csv(tiered_map: TieredVariantMap, path_or_name: str, hot: bool, skip_header: bool = True) -> None:
        """Adds variant -> canonical entries; raises DataSourceNotFoundError if the file cannot be found."""
        lines = require_data_lines(path_or_name)
        n = tiered_map.load(((entry.variant_scalar, entry.canonical)
                             for entry in iter_variant_entries(lines, skip_header=skip_header, source=path_or_name)),
                            hot=hot)
        log.debug(f"Loaded {n} {'hot' if hot else 'main'} entries from {path_or_name}")

    @classmethod
    def from_csv_with_hotset(cls, main_csv: str, hot_csv: str,
                             skip_header_main: bool = True, skip_header_hot: bool = True) -> 'VariantNormalizer':
        tiered_map = TieredVariantMap()
        cls.load_csv(tiered_map, hot_csv, hot=True, skip_header=skip_header_hot)
        cls.load_csv(tiered_map, main_csv, hot=False, skip_header=skip_header_main)
        return cls(tiered_map)

    @classmethod
    def from_csv(cls, main_csv: str, skip_header: bool = True) -> 'VariantNormalizer':
        tiered_map = TieredVariantMap()
        cls.load_csv(tiered_map, main_csv, hot=False, skip_header=skip_header)
        return cls(tiered_map)

    @classmethod
    def builtin_hotset_minimal(cls) -> 'VariantNormalizer':
        """Small built-in hotset and an empty main table; needs no data files."""
        hot = {
            0x9AD9: '高',   # 髙
            0xFA11: '崎',   # 﨑
            0x20BB7: '吉',  # 𠮷
            ord('濵'): '浜',
            ord('濱'): '浜',
            ord('邊'): '辺',
            ord('邉'): '辺',
            ord('嶋'): '島',
            ord('嶌'): '島',
            ord('齋'): '斎',
            ord('齊'): '斉',
            ord('澤'): '沢',
            ord('德'): '徳',
            ord('櫻'): '桜',
            ord('廣'): '広',
            ord('關'): '関',
            ord('冨'): '富',
            ord('峯'): '峰',
        }
        return cls(TieredVariantMap(hot=hot))

    def normalize(self, s: Optional[str]) -> Optional[str]:
        return self._map.normalize(s)

    def equivalent(self, s1: Optional[str], s2: Optional[str]) -> bool:
        """True if both strings are identical after normalization. Example: ('髙橋', '高橋') -> True"""
        return (self.normalize(s1) or '') == (self.normalize(s2) or '')

    def with_hot_mapping(self, variant: Union[str, int], canonical: Union[str, int]) -> 'VariantNormalizer':
        hot = dict(self._map.hot)
        hot[to_scalar(variant)] = chr(to_scalar(canonical))
        return VariantNormalizer(TieredVariantMap(hot=hot, main=self._map.main))

    def with_main_mapping(self, variant: Union[str, int], canonical: Union[str, int]) -> 'VariantNormalizer':
        main = dict(self._map.main)
        main[to_scalar(variant)] = chr(to_scalar(canonical))
        return VariantNormalizer(TieredVariantMap(hot=self._map.hot, main=main))

    def lookup(self, ch: Union[str, int]) -> Optional[str]:
        return self._map.lookup(to_scalar(ch))

    @property
    def count(self) -> Tuple[int, int]:
        """(number of hot entries, number of main entries)"""
        return self._map.count

    def __repr__(self) -> str:
        hot_count, main_count = self.count
        return f'VariantNormalizer(hot={hot_count}, main={main_count})'
