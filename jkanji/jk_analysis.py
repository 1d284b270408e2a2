#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
This script analyzes the kanji of a given text: how many are regular-use (jōyō) kanji, old forms, tolerable forms,
kanji not in regular use or not usable in personal names, and how many would be changed by jk_normalize.py.
When using STDIN and/or STDOUT, if might be necessary, particularly for older versions of Python, to do
'export PYTHONIOENCODING=UTF-8' before calling this Python script to ensure UTF-8 encoding.
"""
# -*- encoding: utf-8 -*-

import argparse
import io
import json
import time
import datetime
from collections import defaultdict
import logging as log
from pathlib import Path
import regex
import sys
from tqdm.auto import tqdm
from typing import IO, List, Optional, TextIO
import unicodeblock.blocks
from jkanji import __version__, last_mod_date
from jkanji.jk_regular_use import is_for_personal_names, is_han, is_old_form_regular_use, is_regular_use, \
    is_standard_regular_use, is_tolerable_regular_use
from jkanji.jk_unicode import iter_scalars
from jkanji.jk_variants import NAME_VARIANTS, OLD_TO_NEW


log.basicConfig(level=log.INFO)

# Character classes in output order, with headings for pretty_print
CHAR_CLASSES = (('han', 'Kanji'),
                ('standard-regular-use', 'Standard regular-use kanji'),
                ('old-form-regular-use', 'Old-form regular-use kanji'),
                ('tolerable-regular-use', 'Tolerable-form regular-use kanji'),
                ('not-regular-use', 'Kanji not in regular use'),
                ('not-for-personal-names', 'Kanji not usable in personal names'),
                ('old-to-new', 'Kanji with a regular-use form (old-to-new)'),
                ('name-variant', 'Kanji with a name variant (name-variant)'))


class KanjiAnalysis:
    """
    Object stores raw and aggregate information of a kanji analysis.
    Final results are stored in self.analysis
    """
    def __init__(self, max_examples: int = 10, max_cases: int = 100, verbose: Optional[bool] = False):
        self.verbose = verbose
        self.filename = None
        self.max_n_examples = max_examples
        self.max_n_cases = max_cases
        self.char_count = {char_class: defaultdict(int) for char_class, _ in CHAR_CLASSES}
        self.block_count = defaultdict(int)
        self.block_examples = defaultdict(str)
        self.token_count = defaultdict(int)
        self.token_examples = defaultdict(list)  # values are lists of line numbers
        self.han_token_re = regex.compile(r'\p{Han}+')
        self.old_to_new = OLD_TO_NEW.value
        self.name_variants = NAME_VARIANTS.value
        self.analysis = {'n_lines': 0,
                         'n_characters': 0,
                         'class': defaultdict(dict),
                         'block': defaultdict(dict),
                         'notable-token': defaultdict(dict)}

    @staticmethod
    def unicode_block(char: str) -> str:
        """Safe version of character to Unicode block. Example: '漢' -> 'CJK_UNIFIED_IDEOGRAPHS'"""
        try:
            block_name = unicodeblock.blocks.of(char) or 'OTHER'
        except (ValueError, TypeError):
            block_name = '_UNDEFINED_'
        return block_name

    def char_classes(self, scalar: int) -> List[str]:
        """Example: 0x570B (國) -> ['han', 'standard-regular-use', 'old-form-regular-use', 'old-to-new']"""
        result = []
        if not is_han(scalar):
            return result
        result.append('han')
        if is_standard_regular_use(scalar):
            result.append('standard-regular-use')
        if is_old_form_regular_use(scalar):
            result.append('old-form-regular-use')
        if is_tolerable_regular_use(scalar):
            result.append('tolerable-regular-use')
        if not is_regular_use(scalar):
            result.append('not-regular-use')
        if not is_for_personal_names(scalar):
            result.append('not-for-personal-names')
        if scalar in self.old_to_new:
            result.append('old-to-new')
        if scalar in self.name_variants:
            result.append('name-variant')
        return result

    def collect_counts_and_examples_in_line(self, line: str, line_number: int) -> None:
        n_characters = 0
        for span in iter_scalars(line.rstrip('\n')):
            n_characters += 1
            if not span.valid:
                continue
            char_classes = self.char_classes(span.scalar)
            if not char_classes:
                continue
            char = chr(span.scalar)
            for char_class in char_classes:
                self.char_count[char_class][char] += 1
            block = self.unicode_block(char)
            self.block_count[block] += 1
            if len(self.block_examples[block]) < self.max_n_examples and char not in self.block_examples[block]:
                self.block_examples[block] += char
        self.analysis['n_characters'] += n_characters
        for token in self.han_token_re.findall(line):
            if any(not is_regular_use(span.scalar) for span in iter_scalars(token) if is_han(span.scalar)):
                self.token_count[token] += 1
                if len(self.token_examples[token]) < self.max_n_examples:
                    self.token_examples[token].append(line_number)

    def collect_counts_and_examples_in_file(self, input_file: IO, total_bytes=None, progress_bar=True) -> None:
        """Collect counts and examples for kanji and kanji tokens occurring in file."""
        line_number = 0
        st = time.time()
        prefix = 'Checking'
        with tqdm(input_file, total=total_bytes, disable=not progress_bar, unit='b', unit_scale=True,
                  dynamic_ncols=True, desc=prefix) as data_bar:
            try:
                for line in data_bar:
                    line_number += 1
                    if progress_bar:
                        line_speed = int(line_number / max(time.time() - st, 1e-6))
                        data_bar.set_postfix_str(f'{line_speed}L/s', refresh=False)
                        data_bar.set_description_str(f'{prefix} {line_number}', refresh=False)
                        data_bar.update(len(line.encode('utf-8', errors='surrogateescape')))  # bytes
                    self.collect_counts_and_examples_in_line(line, line_number)
            except UnicodeError as error:
                sys.stderr.write(f"*** Unicode error: {error}\n")
                sys.stderr.write(f"***    Input aborted. The input is not in valid UTF-8 encoding.\n")
        self.analysis['n_lines'] = line_number

    def aggregate(self) -> None:
        """Aggregates raw counts into self.analysis"""
        for char_class, _ in CHAR_CLASSES:
            char_dict = self.char_count[char_class]
            if not char_dict:
                continue
            chars = sorted(char_dict.keys(), key=lambda c: (-char_dict[c], c))
            self.analysis['class'][char_class] = {'count': sum(char_dict.values()),
                                                  'n_types': len(char_dict),
                                                  'ex': ''.join(chars[:self.max_n_cases])}
        for block in sorted(self.block_count.keys(), key=lambda b: -self.block_count[b]):
            self.analysis['block'][block] = {'count': self.block_count[block], 'ex': self.block_examples[block]}
        tokens = sorted(self.token_count.keys(), key=lambda t: (-self.token_count[t], t))
        for token in tokens[:self.max_n_cases]:
            self.analysis['notable-token']['not-regular-use'][token] = {'count': self.token_count[token],
                                                                        'lines': self.token_examples[token]}

    def pretty_print(self, output_file: TextIO) -> None:
        """Output kanji analysis in human-readable format."""
        output_file.write("OVERVIEW:\n")
        output_file.write(f"File size: {count_plus_noun(self.analysis['n_lines'], 'line')}, "
                          f"{count_plus_noun(self.analysis['n_characters'], 'character')}\n")
        for char_class, heading in CHAR_CLASSES:
            if class_dict := self.analysis['class'].get(char_class):
                output_file.write(f"{heading}: {count_plus_noun(class_dict['count'], 'instance')} "
                                  f"({count_plus_noun(class_dict['n_types'], 'type')})")
                if ex_s := class_dict.get('ex'):
                    output_file.write(f": {ex_s[:self.max_n_examples]}")
                output_file.write("\n")
        if self.analysis['block']:
            output_file.write("Blocks:\n")
            for block, block_dict in self.analysis['block'].items():
                output_file.write(f"    {block} ({count_plus_noun(block_dict['count'], 'instance')}): "
                                  f"{block_dict['ex']}\n")
        if notable_tokens := self.analysis['notable-token'].get('not-regular-use'):
            output_file.write(f"Tokens with kanji not in regular use: {len(notable_tokens)}\n")
            for token, token_dict in notable_tokens.items():
                lines = ', '.join(str(line_number) for line_number in token_dict['lines'])
                output_file.write(f"    {token} ({count_plus_noun(token_dict['count'], 'instance')}; "
                                  f"{'line' if len(token_dict['lines']) == 1 else 'lines'} {lines})\n")

    def summary_list_of_issues(self) -> List[str]:
        """Example: ['3 kanji not in regular use', '2 old forms']"""
        result = []
        for char_class, description in (('not-regular-use', 'kanji not in regular use'),
                                        ('not-for-personal-names', 'kanji not usable in personal names')):
            if class_dict := self.analysis['class'].get(char_class):
                result.append(f"{class_dict['count']} {description}")
        if class_dict := self.analysis['class'].get('old-to-new'):
            result.append(count_plus_noun(class_dict['count'], 'old form'))
        return result or ['ok']


def plural_noun_form(noun: str) -> str:
    """Quick and dirty plural form, e.g. 'baby' -> 'babies'"""
    if noun.endswith('y'):
        return regex.sub(r'y$', 'ies', noun)
    else:
        return noun + 's'


def count_plus_noun(count: int, noun: str) -> str:
    """Quick and dirty count + plural form, e.g. (2, 'baby') -> '2 babies'"""
    return f'{count} {noun if count == 1 else plural_noun_form(noun)}'


def process_args(args) -> KanjiAnalysis:
    """Perform kanji analysis for 1 file, using argparse args."""
    ka = KanjiAnalysis(max_examples=args.max_examples, max_cases=args.max_cases, verbose=args.verbose)
    input_path = None
    if args.input is sys.stdin:
        args.total_bytes = None
        args.input = io.TextIOWrapper(sys.stdin.buffer, encoding='utf-8', errors='surrogateescape')
    elif args.input:
        input_path = args.input
        if not input_path.exists():
            raise ValueError(f"{input_path} does not exist.")
        args.total_bytes = input_path.stat().st_size
        args.input = argparse.FileType('r', encoding='utf-8', errors='surrogateescape')(str(input_path))
        ka.filename = input_path
    if args.input:
        ka.collect_counts_and_examples_in_file(args.input, total_bytes=args.total_bytes,
                                               progress_bar=args.progress_bar)
        if input_path:
            args.input.close()
            args.input = input_path
    elif args.strings:
        line_number = 0
        for line in args.strings:
            line_number += 1
            ka.collect_counts_and_examples_in_line(line, line_number)
        ka.analysis['n_lines'] = line_number
    else:  # nothing to process
        log.warning('Called function process_args with neither args.input nor args.strings')
    ka.aggregate()
    if args.json:
        args.json.write(json.dumps(ka.analysis, ensure_ascii=False) + "\n")
    if args.summary:
        args.output.write(f"{args.file_id or ka.filename or '-'}: {'; '.join(ka.summary_list_of_issues())}\n")
    elif args.output:
        ka.pretty_print(args.output)
    if args.output:
        args.output.flush()
    return ka


def process(in_file: Optional[str] = None,     # provide exactly one input: input filename, strings or string
            strings: Optional[List[str]] = None,
            string: Optional[str] = None,
            pp_output: Optional[TextIO] = None,    # output file (for pretty-print)
            json_output: Optional[TextIO] = None,  # output file (in json)
            max_cases: int = 100,                  # max cases per group (e.g. number of tokens)
            max_examples: int = 10) -> KanjiAnalysis:
    """Entry point when kanji analysis for non-CLI use; maps to CLI interface"""
    return process_args(argparse.Namespace(strings=[string] if string and not strings else strings,
                                           input=Path(in_file) if in_file else None,
                                           output=pp_output, json=json_output, summary=None, file_id=None,
                                           max_cases=max_cases, max_examples=max_examples,
                                           progress_bar=None, verbose=0))


def main(argv: Optional[List[str]] = None):
    """Wrapper around kanji analysis that takes care of argument parsing."""
    parser = argparse.ArgumentParser(description='Analyzes the kanji of a given text', prog="jk-ana")
    parser.add_argument('-i', '--input', type=Path,
                        default=sys.stdin, metavar='INPUT-FILENAME', help='(default: STDIN)')
    parser.add_argument('--batch', type=Path, default=None, metavar='BATCH_DIR',
                        help='Directory with batch of input files (BATCH_DIR/*.txt)')
    parser.add_argument('-s', '--summary', action='count', default=0, help='single summary line per file')
    parser.add_argument('-o', '--output', type=argparse.FileType('w', encoding='utf-8', errors='ignore'),
                        default=sys.stdout, metavar='OUTPUT-FILENAME', help='(default: STDOUT)')
    parser.add_argument('-j', '--json', type=argparse.FileType('w', encoding='utf-8', errors='ignore'),
                        default=None, metavar='JSON-OUTPUT-FILENAME', help='(default: None)')
    parser.add_argument('--file_id', type=str, default=None)
    parser.add_argument('-v', '--verbose', action='count', default=0, help='write log info to STDERR')
    parser.add_argument('-pb', '--progress_bar', action='store_true', default=False, help='Show progress bar')
    parser.add_argument('-n', '--max_cases', type=int, default=100, help='max number of cases per group')
    parser.add_argument('-x', '--max_examples', type=int, default=10, help='max number of examples per case')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__} last modified: {last_mod_date}')
    parser.add_argument('--strings', default=None, help=argparse.SUPPRESS)
    args = parser.parse_args(argv)
    start_time = datetime.datetime.now()
    if args.verbose:
        log.info('Script: jk_analysis.py')
        log.info(f'Start: {start_time}')
        if args.input is not sys.stdin:
            log.info(f'Input: {args.input}')
        if args.output is not sys.stdout:
            log.info(f'Output: {args.output.name}')
    if args.batch:
        directory_path = Path(args.batch)
        args.batch = None
        files = sorted(directory_path.glob('*.txt'))
        n_files = 0
        for file in files:
            if file.is_file():
                n_files += 1
                args.input = file
                args.file_id = file.name
                process_args(args)
        if args.verbose:
            log.info(f"Processed {count_plus_noun(n_files, 'file')}")
    else:
        process_args(args)
    if args.verbose:
        end_time = datetime.datetime.now()
        log.info(f'End: {end_time}')
        elapsed_time = end_time - start_time
        log.info(f'Time: {elapsed_time}')


if __name__ == "__main__":
    main()
