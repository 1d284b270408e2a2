#!/usr/bin/env python3
# -*- encoding: utf-8 -*-
"""
Pytest for jk_regular_use.py
"""

import pytest
from jkanji import jk_regular_use
from jkanji.jk_regular_use import Discriminator, build_old_form_table, build_personal_name_table, \
    is_for_personal_names, is_han, is_not_for_personal_names, is_not_regular_use, is_old_form_regular_use, \
    is_regular_use, is_standard_regular_use, is_tolerable_regular_use, replace_not_for_personal_names_all, \
    replace_not_regular_use_all

sample_scalars = [0x41, 0x3042, 0x3000, 0x3400, 0x4E00, 0x570B, 0x6F22, 0x8B0E, 0x9FFF, 0xF900, 0xFA11, 0xFF21,
                  0x20000, 0x20BB7, 0x2A700, 0x30000, 0x1F600]


def test_classification_examples():
    assert is_han('漢') and is_standard_regular_use('漢') and is_regular_use('漢')
    assert not is_not_regular_use('漢')
    assert is_old_form_regular_use('國')
    assert not is_old_form_regular_use('国')
    assert is_tolerable_regular_use('謎') and is_tolerable_regular_use(0x990C)
    assert not is_tolerable_regular_use('漢')
    assert not is_not_regular_use('A')
    assert not is_not_regular_use('か')
    assert is_not_regular_use(0x20000)
    assert is_not_regular_use('𠮷')


def test_regular_use_is_composed_of_its_parts():
    for scalar in sample_scalars:
        assert is_regular_use(scalar) == (is_standard_regular_use(scalar) or is_old_form_regular_use(scalar)
                                          or is_tolerable_regular_use(scalar))
        assert is_not_regular_use(scalar) == (is_han(scalar) and not is_regular_use(scalar))
        assert is_not_for_personal_names(scalar) == (is_han(scalar) and not is_for_personal_names(scalar))
        if is_regular_use(scalar):
            assert is_for_personal_names(scalar)


def test_personal_names():
    assert is_for_personal_names('丑')
    assert not is_for_personal_names('A')
    assert not is_not_for_personal_names('A')
    assert not is_for_personal_names(0x20000)
    assert is_not_for_personal_names(0x20000)
    personal_names = jk_regular_use.PERSONAL_NAMES.value
    assert ord('丑') in personal_names
    assert ord('栁') in personal_names
    assert ord('亞') not in personal_names  # second section of the file
    assert ord('‐') not in personal_names


def test_replace_not_regular_use_all():
    assert replace_not_regular_use_all('𠀀A', '_') == '_A'
    assert replace_not_regular_use_all('漢字とかな', '_') == '漢字とかな'
    assert replace_not_regular_use_all('𠮷田', '') == '田'
    assert replace_not_regular_use_all('', '_') == ''
    assert replace_not_regular_use_all(None, '_') is None
    assert replace_not_for_personal_names_all('𠀀丑A', '〓') == '〓丑A'


def test_discriminator():
    d = Discriminator().disallow('漢')
    assert d.replace_not_regular_use_all('漢A漢', '_') == '_A_'
    assert d.is_not_regular_use('漢')
    assert d.replace_not_regular_use_all('字', '_') == '字'
    allowing = Discriminator().allow('漢')
    assert not allowing.is_not_regular_use('漢')
    assert allowing.replace_not_regular_use_all('漢A漢', '_') == '漢A漢'
    assert Discriminator().allow(0x20000).replace_not_regular_use_all('𠀀𠀁', '_') == '𠀀_'
    both = Discriminator().allow('漢').disallow('漢')
    assert not both.is_not_regular_use('漢')
    assert Discriminator().disallow('A').is_not_regular_use('A')
    assert Discriminator().is_not_regular_use(0x20001) == is_not_regular_use(0x20001)
    with pytest.raises(ValueError):
        Discriminator().allow('漢字')


def test_missing_data_files_give_empty_tables():
    assert len(build_old_form_table('no-such-old-new.txt')) == 0
    assert len(build_personal_name_table('no-such-jinmei.txt')) == 0
    assert not build_personal_name_table('no-such-jinmei.txt').is_in(ord('丑'))


def test_old_form_table_from_file(tmp_path):
    path = tmp_path / 'old-new.txt'
    path.write_text('! test\n570B 國 56FD 国\n9AD4 體 4F53 体\n', encoding='utf-8')
    table = build_old_form_table(str(path))
    assert table.is_in(0x570B) and table.is_in(0x9AD4)
    assert not table.is_in(0x56FD)
