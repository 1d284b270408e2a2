#!/usr/bin/env python3
# -*- encoding: utf-8 -*-
"""
Pytest for jk_variants.py
"""

import logging as log
import pytest
from jkanji.jk_data import DataSourceNotFoundError, HOTSET_FILENAME, MAIN_MAP_FILENAME
from jkanji.jk_variants import TieredVariantMap, VariantNormalizer, build_name_variant_map, build_old_to_new_map, \
    load_csv_source, replace_by_map, replace_old_to_new, replace_to_name_variant

log.basicConfig(level=log.INFO)

__version__ = '0.3'
last_mod_date = 'October 19, 2026'

header = 'target_char,target_codepoint,variant_char,variant_codepoint,category,notes\n'
normalizer = VariantNormalizer.from_csv_with_hotset(MAIN_MAP_FILENAME, HOTSET_FILENAME)


def test_replace_old_to_new():
    for s, ref in (('國體', '国体'),
                   ('舊字體', '旧字体'),
                   ('𠮷田', '吉田'),
                   ('冨田', '富田'),
                   ('峯', '峰'),
                   ('嶋﨑', '島崎'),
                   ('德', '徳'),
                   ('濱', '浜'),
                   ('濵', '浜'),
                   ('渡邉', '渡辺'),
                   ('渡邊', '渡辺'),
                   ('廣', '広'),
                   ('齊藤', '斉藤'),
                   ('齋藤', '斎藤'),
                   ('斎藤', '斎藤'),
                   ('櫻井', '桜井'),
                   ('澤', '沢'),
                   ('關', '関'),
                   ('髙橋', '高橋'),
                   ('栁', '柳'),
                   ('ABC', 'ABC'),
                   ('', '')):
        assert replace_old_to_new(s) == ref
    assert replace_old_to_new(None) is None


def test_replace_old_to_new_utf16_units():
    assert replace_old_to_new('\ud842\udfb7田') == '吉田'
    assert replace_old_to_new('\ud842國') == '\ud842国'
    assert replace_old_to_new('國\udc00') == '国\udc00'


def test_replace_to_name_variant():
    for s, ref in (('二本柳', '二本栁'),
                   ('柳', '栁'),
                   ('島', '嶋'),    # last hot entry for 島 wins
                   ('辺', '邉'),    # hot beats main (邊)
                   ('浜', '濵'),    # only itaiji rows count (濱 is kyuji in the hotset)
                   ('秋', '穐'),    # main table only
                   ('野', '埜'),    # first main entry wins
                   ('崎', '崎'),    # compat row, not itaiji
                   ('恵', '恵'),    # kyuji row
                   ('隆', '隆'),
                   ('渡辺', '渡邉'),
                   ('ABC', 'ABC')):
        assert replace_to_name_variant(s) == ref
    assert replace_to_name_variant(None) is None
    assert replace_to_name_variant('') == ''


def test_tiered_variant_map_precedence():
    tiered_map = TieredVariantMap()
    tiered_map.add_main(ord('A'), 'main-1')
    tiered_map.add_main(ord('A'), 'main-2')
    assert tiered_map.lookup(ord('A')) == 'main-1'
    tiered_map.add_hot(ord('A'), 'hot-1')
    tiered_map.add_hot(ord('A'), 'hot-2')
    assert tiered_map.lookup(ord('A')) == 'hot-2'
    assert tiered_map.lookup(ord('B')) is None
    assert tiered_map.count == (1, 1)
    assert ord('A') in tiered_map and ord('B') not in tiered_map
    assert tiered_map.normalize('ABA') == 'hot-2Bhot-2'
    assert tiered_map.load([(ord('x'), 'y'), (ord('A'), 'z')]) == 2
    assert tiered_map.lookup(ord('A')) == 'hot-2'


def test_replace_by_map():
    def lookup(scalar):
        return {0x20BB7: '吉', ord('a'): ''}.get(scalar)
    assert replace_by_map('𠮷abc', lookup) == '吉bc'
    assert replace_by_map('xyz', lookup) == 'xyz'
    assert replace_by_map('', lookup) == ''
    assert replace_by_map(None, lookup) is None


def test_hot_csv_beats_old_new_table(tmp_path):
    hot_path = tmp_path / 'hot.csv'
    hot_path.write_text(header + '国,U+56FD,國,U+570B,kyuji,\n' + '围,U+56F4,國,U+570B,itaiji,\n', encoding='utf-8')
    old_new_path = tmp_path / 'old-new.txt'
    old_new_path.write_text('! test\n570B 國 56FD 国\n9AD4 體 4F53 体\n9AD4 體 0000 X\n', encoding='utf-8')
    tiered_map = build_old_to_new_map(str(hot_path), str(old_new_path))
    assert tiered_map.normalize('國體') == '围体'
    assert tiered_map.count == (1, 2)


def test_load_csv_source(tmp_path):
    path = tmp_path / 'names.csv'
    path.write_text(header + '柳,U+67F3,栁,U+6801,itaiji,\n' + '浜,U+6D5C,濱,U+6FF1,kyuji,\n'
                    + '高,U+9AD8,髙\n', encoding='utf-8')
    tiered_map = TieredVariantMap()
    assert load_csv_source(tiered_map, str(path), hot=False)
    assert tiered_map.normalize('栁濱髙') == '柳浜高'
    name_map = TieredVariantMap()
    assert load_csv_source(name_map, str(path), hot=True, name_variants=True)
    assert name_map.count == (1, 0)
    assert name_map.normalize('柳浜高') == '栁浜高'
    assert not load_csv_source(TieredVariantMap(), 'no-such-file.csv', hot=True)


def test_missing_data_files_leave_text_unchanged():
    assert build_old_to_new_map('no-such-hotset.csv', 'no-such-old-new.txt').normalize('國體') == '國體'
    assert build_name_variant_map('no-such-hotset.csv', 'no-such-main.csv').normalize('柳') == '柳'
    assert build_old_to_new_map('no-such-hotset.csv').normalize('國髙') == '国髙'


def test_variant_normalizer_from_csv():
    assert normalizer.normalize('髙橋﨑太郎と𠮷田さん') == '高橋崎太郎と吉田さん'
    assert normalizer.normalize('穐山') == '秋山'
    assert normalizer.normalize('邊') == '辺'
    assert normalizer.normalize('\uf9dc') == '隆'  # CJK compatibility ideograph
    assert normalizer.count == (19, 15)
    assert normalizer.equivalent('髙橋', '高橋')
    assert not normalizer.equivalent('髙橋', '高端')
    assert normalizer.equivalent(None, '')
    assert normalizer.lookup('𠮷') == '吉'
    assert normalizer.lookup('吉') is None
    main_only = VariantNormalizer.from_csv(MAIN_MAP_FILENAME)
    assert main_only.count == (0, 15)
    assert main_only.normalize('𠮷田') == '𠮷田'


def test_variant_normalizer_missing_file():
    with pytest.raises(DataSourceNotFoundError):
        VariantNormalizer.from_csv('no-such-main.csv')
    with pytest.raises(FileNotFoundError):
        VariantNormalizer.from_csv_with_hotset(MAIN_MAP_FILENAME, 'no-such-hotset.csv')


def test_variant_normalizer_skip_header(tmp_path):
    path = tmp_path / 'no-header.csv'
    path.write_text('高,U+9AD8,髙,U+9AD9,itaiji,\n柳,U+67F3,栁,U+6801,itaiji,\n', encoding='utf-8')
    assert VariantNormalizer.from_csv(str(path)).count == (0, 1)
    assert VariantNormalizer.from_csv(str(path), skip_header=False).count == (0, 2)


def test_variant_normalizer_builtin_and_immutable_updates():
    builtin = VariantNormalizer.builtin_hotset_minimal()
    assert builtin.count == (18, 0)
    assert builtin.normalize('髙橋') == '高橋'
    assert builtin.normalize('𠮷田') == '吉田'
    extended = builtin.with_hot_mapping('栁', '柳')
    assert extended.normalize('栁') == '柳'
    assert builtin.normalize('栁') == '栁'
    assert extended.count == (19, 0)
    with_main = builtin.with_main_mapping('髙', 'X').with_main_mapping(0x7A50, '秋')
    assert with_main.normalize('髙穐') == '高秋'
    assert with_main.count == (18, 2)
    assert builtin.count == (18, 0)
    with pytest.raises(ValueError):
        builtin.with_hot_mapping('栁', '柳柳')
