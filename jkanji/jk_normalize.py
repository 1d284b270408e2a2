#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
This script normalizes Japanese text at the kanji level (details below).
Examples:
  jk_normalize.py -h  # for full usage info
  jk_normalize.py --version
  jk_normalize.py -i names.txt -o names.norm.txt       # default: old forms/variants to regular-use forms
  jk_normalize.py --only name-variant < names.txt      # regular-use forms to name-specific variants
  jk_normalize.py --add not-regular-use --replacement '〓' --allow 栁 < corpus.txt
  jk_normalize.py --only custom-map --map my_map.csv --hotset my_hotset.csv < corpus.txt

List of default normalization steps (performed by default, but can be controlled using
                                     options --all, --all-except, --only, --add, --skip):
 * old-to-new (maps old character forms (kyujitai) and variants (itaiji) to regular-use forms, e.g. 國體 -> 国体)
List of non-default normalization steps (specify options --all, --all-except, or --add):
 * custom-map (maps variants to canonical forms using the CSV files given by --map and --hotset)
 * name-variant (maps regular-use forms to name-specific variants, e.g. 柳 -> 栁)
 * not-regular-use (replaces kanji that are not regular-use (jōyō) kanji by --replacement)
 * not-personal-name (replaces kanji that are not usable in personal names by --replacement)
Note: old-to-new and name-variant map in opposite directions; --all performs name-variant after old-to-new.
When using STDIN and/or STDOUT, if might be necessary, particularly for older versions of Python, to do
'export PYTHONIOENCODING=UTF-8' before calling this Python script to ensure UTF-8 encoding.
"""
# -*- encoding: utf-8 -*-
import argparse
import datetime
import logging as log
import re
import sys
from typing import Callable, List, Optional, TextIO
from jkanji import __version__, last_mod_date
from jkanji.jk_data import DataSourceNotFoundError, HOTSET_FILENAME
from jkanji.jk_regular_use import Discriminator, replace_not_for_personal_names_all
from jkanji.jk_variants import VariantNormalizer, replace_old_to_new, replace_to_name_variant


log.basicConfig(level=log.INFO)


class KanjiNormalizer:
    def __init__(self, replacement: str = '〓', discriminator: Optional[Discriminator] = None,
                 variant_normalizer: Optional[VariantNormalizer] = None):
        self.all_norm_elems = ['custom-map', 'old-to-new', 'name-variant', 'not-regular-use', 'not-personal-name']
        self.default_norm_elems = ['old-to-new']
        self.replacement = replacement
        self.discriminator = discriminator or Discriminator()
        self.variant_normalizer = variant_normalizer

    def custom_map(self, s: str) -> str:
        if self.variant_normalizer is None:
            return s
        return self.variant_normalizer.normalize(s)

    def replace_not_regular_use(self, s: str) -> str:
        return self.discriminator.replace_not_regular_use_all(s, self.replacement)

    def replace_not_personal_name(self, s: str) -> str:
        return replace_not_for_personal_names_all(s, self.replacement)

    @staticmethod
    def increment_dict_count(ht: dict, key: str, increment=1) -> int:
        """For example ht['NUMBER-OF-LINES'] += 1"""
        ht[key] = ht.get(key, 0) + increment
        return ht[key]

    def ncs_group(self, s: str, ht: dict, group_name: str, group_function: Callable[[str], str]) -> str:
        """Performs normalization step group_name (unless skipped) and records whether it changed s."""
        if ht.get(f'SKIP-{group_name}'):
            return s
        orig_s = s
        s = group_function(s)
        self.increment_dict_count(ht, f'CALL-{group_name}')
        if s != orig_s:
            self.increment_dict_count(ht, f'COUNT-{group_name}')
            log.debug(f'  {group_name}: {orig_s} -> {s}')
        return s

    def norm_clean_string(self, s: str, ht: dict, loc_id: str = '') -> str:
        """Applies all normalization steps not marked as SKIP-<step> in ht to s."""
        orig_s = s
        self.increment_dict_count(ht, 'NUMBER-OF-LINES')
        s = self.ncs_group(s, ht, 'custom-map', self.custom_map)
        s = self.ncs_group(s, ht, 'old-to-new', replace_old_to_new)
        s = self.ncs_group(s, ht, 'name-variant', replace_to_name_variant)
        s = self.ncs_group(s, ht, 'not-regular-use', self.replace_not_regular_use)
        s = self.ncs_group(s, ht, 'not-personal-name', self.replace_not_personal_name)
        if s != orig_s:
            self.increment_dict_count(ht, 'COUNT-ALL')
            if loc_id:
                log.debug(f'line {loc_id} changed')
        return s

    def norm_clean_lines(self, ht: dict, input_file: TextIO, output_file: TextIO) -> None:
        """Apply normalization to a file (or STDIN/STDOUT)."""
        line_number = 0
        for line in input_file:
            line_number += 1
            output_file.write(self.norm_clean_string(line.rstrip("\n"), ht, loc_id=str(line_number)) + "\n")

    def build_norm_step_dict(self, base: str = 'DEFAULT',
                             skip: Optional[List[str]] = None,
                             add: Optional[List[str]] = None) -> dict:
        """Builds dictionary which lists which specific normalization steps should be skipped"""
        if base == 'NONE':
            base_elems = []
        elif base == 'ALL':
            base_elems = self.all_norm_elems
        else:  # base == 'DEFAULT'
            base_elems = self.default_norm_elems
        norm_step_dict = {}
        for norm_elem in self.all_norm_elems:
            norm_step_dict[f'SKIP-{norm_elem}'] = (norm_elem not in base_elems)
        if skip:
            for norm_elem in skip:
                norm_step_dict[f'SKIP-{norm_elem}'] = True
        if add:
            for norm_elem in add:
                norm_step_dict[f'SKIP-{norm_elem}'] = False
        return norm_step_dict


def listify_by_comma(s: str) -> list:
    """Converts string with comma-separated elements to list, e.g. 'a,b, c' -> ['a', 'b', 'c']; '' -> []"""
    return [] if re.match(r'\s*$', s) else re.split(r',\s*', s.strip())


def chars_of(s: str) -> list:
    """Characters to be allowed/disallowed, e.g. '栁,髙' -> ['栁', '髙']; also accepts '栁髙' and 'U+6801'"""
    result = []
    for elem in listify_by_comma(s):
        if m := re.match(r'(?:U\+|0x)([0-9A-Fa-f]{4,6})$', elem):
            result.append(int(m.group(1), 16))
        else:
            result.extend(ch for ch in elem if not ch.isspace())
    return result


def main(argv: Optional[List[str]] = None):
    """Wrapper around normalization that takes care of argument parsing and prints change stats to STDERR."""
    jk = KanjiNormalizer()
    additional_norm_elems = [elem for elem in jk.all_norm_elems if elem not in jk.default_norm_elems]
    skip_help = f"perform all default normalization steps except those specified in comma-separated list \
    (default normalization steps: {','.join(jk.default_norm_elems)})"
    add_help = f"perform all default normalization steps plus those specified in comma-separated list \
    (non-default normalization steps: {','.join(additional_norm_elems)})"
    parser = argparse.ArgumentParser(description='Normalizes Japanese text at the kanji level', prog="jk-norm")
    parser.add_argument('-i', '--input', type=argparse.FileType('r', encoding='utf-8', errors='surrogateescape'),
                        default=sys.stdin, metavar='INPUT-FILENAME', help='(default: STDIN)')
    parser.add_argument('-o', '--output', type=argparse.FileType('w', encoding='utf-8', errors='surrogateescape'),
                        default=sys.stdout, metavar='OUTPUT-FILENAME', help='(default: STDOUT)')
    parser.add_argument('--skip', type=str, default='', metavar='NORM-STEPS', help=skip_help)
    parser.add_argument('--add', type=str, default='', metavar='NORM-STEPS', help=add_help)
    parser.add_argument('--all', action='count', default=0, help=f"perform all normalization steps, i.e. "
                                                                 f"{','.join(jk.all_norm_elems)}")
    parser.add_argument('--all-except', type=str, default='', metavar='NORM-STEPS',
                        help='perform all normalization steps except those specified in comma-separated list')
    parser.add_argument('--only', type=str, default='', metavar='NORM-STEPS',
                        help='perform only normalization steps specified in comma-separated list')
    parser.add_argument('--replacement', type=str, default='〓', metavar='STRING',
                        help="replacement for kanji removed by not-regular-use or not-personal-name (default: 〓)")
    parser.add_argument('--allow', type=str, default='', metavar='CHARS',
                        help='kanji to be treated as regular-use kanji by not-regular-use, e.g. 栁,髙')
    parser.add_argument('--disallow', type=str, default='', metavar='CHARS',
                        help='kanji to be treated as not regular-use kanji by not-regular-use')
    parser.add_argument('--map', type=str, default=None, metavar='CSV-FILENAME',
                        help='main variant table for custom-map (required for custom-map)')
    parser.add_argument('--hotset', type=str, default=None, metavar='CSV-FILENAME',
                        help=f'hotset variant table for custom-map (e.g. {HOTSET_FILENAME})')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='write change log etc. to STDERR')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__} last modified: {last_mod_date}')
    args = parser.parse_args(argv)
    add_list = listify_by_comma(args.add) + listify_by_comma(args.only)
    skip_list = listify_by_comma(args.skip) + listify_by_comma(args.all_except)

    # Make sure utf-8 encoding is properly set (in older Python3 versions).
    if args.input is sys.stdin and not re.search('utf-8', sys.stdin.encoding, re.IGNORECASE):
        log.error(f"Bad STDIN encoding '{sys.stdin.encoding}' as opposed to 'utf-8'. \
                    Suggestion: 'export PYTHONIOENCODING=UTF-8' or use '--input FILENAME' option")
    if args.output is sys.stdout and not re.search('utf-8', sys.stdout.encoding, re.IGNORECASE):
        log.error(f"Error: Bad STDIN/STDOUT encoding '{sys.stdout.encoding}' as opposed to 'utf-8'. \
                    Suggestion: 'export PYTHONIOENCODING=UTF-8' or use use '--output FILENAME' option")

    if unknown_elems := [elem for elem in add_list + skip_list if elem not in jk.all_norm_elems]:
        parser.error(f"Unknown normalization step(s): {', '.join(unknown_elems)} "
                     f"(known steps: {', '.join(jk.all_norm_elems)})")
    ht = {}
    norm_elems, skip_elems = [], []
    if args.all and args.all_except:
        log.warning("Will ignore option --all due to presence of option --all-except")
    if args.only:
        if args.all_except:
            log.warning("Will re-interpret option --only as option --add due to presence of option --all-except")
        elif args.all:
            log.warning("Will ignore option --only due to presence of option --all")
    if add_and_skip := [elem for elem in add_list if elem in skip_list]:
        if len(add_and_skip) == 1:
            plural_s, be_verb = "", "is"
        else:
            plural_s, be_verb = "s", "are"
        log.warning(f"The following normalization step{plural_s} {be_verb} specified as both to be performed "
                    f"and not to be performed: {', '.join(add_and_skip)} (will perform the step{plural_s}).")
    for norm_elem in jk.all_norm_elems:
        if norm_elem in add_list:
            skip = False
        elif norm_elem in skip_list:
            skip = True
        elif args.all or args.all_except:
            skip = False
        elif args.only:
            skip = True
        elif norm_elem in jk.default_norm_elems:
            skip = False
        else:
            skip = True
        if skip:
            skip_elems.append(norm_elem)
            ht[f'SKIP-{norm_elem}'] = True
        else:
            norm_elems.append(norm_elem)

    if 'custom-map' in norm_elems:
        if args.map:
            try:
                if args.hotset:
                    jk.variant_normalizer = VariantNormalizer.from_csv_with_hotset(args.map, args.hotset)
                else:
                    jk.variant_normalizer = VariantNormalizer.from_csv(args.map)
            except DataSourceNotFoundError as error:
                parser.error(str(error))
        elif args.all or args.all_except:
            skip_elems.append('custom-map')
            norm_elems.remove('custom-map')
            ht['SKIP-custom-map'] = True
        else:
            parser.error('Normalization step custom-map requires option --map')
    if 'old-to-new' in norm_elems and 'name-variant' in norm_elems:
        log.warning("Steps old-to-new and name-variant map in opposite directions; name-variant is applied last.")
    jk.replacement = args.replacement
    try:
        jk.discriminator.allow(*chars_of(args.allow)).disallow(*chars_of(args.disallow))
    except ValueError as error:
        parser.error(f'--allow/--disallow: {error}')

    if args.verbose:
        log.info(f"NORM: {norm_elems}")
        log.info(f"SKIP: {skip_elems}")
    start_time = datetime.datetime.now()
    if args.verbose:
        log.info(f'Start: {start_time}')
        log.info('Script jk_normalize.py')
        if args.input is not sys.stdin:
            log.info(f'Input: {args.input.name}')
        if args.output is not sys.stdout:
            log.info(f'Output: {args.output.name}')
        if args.skip:
            log.info(f'Skip: {args.skip}')
        if jk.discriminator.allowed or jk.discriminator.disallowed:
            log.info(f'Allow: {len(jk.discriminator.allowed)} Disallow: {len(jk.discriminator.disallowed)}')
    # The following line is the core call. ht is a dictionary (with SKIP-<step> entries for steps to be skipped).
    jk.norm_clean_lines(ht, input_file=args.input, output_file=args.output)
    args.output.flush()
    # Log some change stats.
    if args.verbose:
        change_count = ht.get('COUNT-ALL', 0)
        number_of_lines = ht.get('NUMBER-OF-LINES', 0)
        lines = 'line' if change_count == 1 else 'lines'
        log_info = f"{str(change_count)} out of {str(number_of_lines)} {lines} changed"
        for norm_elem in jk.all_norm_elems:
            n_changed_lines = ht.get(f'COUNT-{norm_elem}', 0)
            n_lines_with_call = ht.get(f'CALL-{norm_elem}', 0)
            if n_changed_lines:
                lines = 'line' if n_changed_lines == 1 else 'lines'
                log_info += f'; {norm_elem} in {str(n_changed_lines)}/{str(n_lines_with_call)} {lines}'
        log.info(log_info)
        end_time = datetime.datetime.now()
        log.info(f'End: {end_time}')
        elapsed_time = end_time - start_time
        log.info(f'Time: {elapsed_time}')


if __name__ == "__main__":
    main()
