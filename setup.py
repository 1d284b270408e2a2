#!/usr/bin/env python

import jkanji
from pathlib import Path

from setuptools import setup, find_namespace_packages

long_description = Path('README.md').read_text(encoding='utf-8', errors='ignore')

classifiers = [  # copied from https://pypi.org/classifiers/
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'Topic :: Utilities',
    'Topic :: Text Processing',
    'Topic :: Text Processing :: General',
    'Topic :: Text Processing :: Filters',
    'Topic :: Text Processing :: Linguistic',
    'Natural Language :: Japanese',
    'License :: OSI Approved :: Apache Software License',
    'Programming Language :: Python :: 3 :: Only',
]

setup(
    name='jkanji-norm',
    version=jkanji.__version__,
    description=jkanji.__description__,
    long_description=long_description,
    long_description_content_type='text/markdown',
    classifiers=classifiers,
    python_requires='>=3.8',
    platforms=['any'],
    packages=find_namespace_packages(include=['jkanji', 'jkanji.*']),
    package_data={'jkanji': ['data/*.txt', 'data/*.csv']},
    keywords=['kanji', 'Japanese', 'joyo kanji', 'jinmeiyo kanji', 'kyujitai', 'itaiji', 'normalization', 'NLP'],
    entry_points={
        'console_scripts': [
            'jk_normalize.py=jkanji.jk_normalize:main',
            'jk_analysis.py=jkanji.jk_analysis:main',
            'jk-norm=jkanji.jk_normalize:main',
            'jk-ana=jkanji.jk_analysis:main',
        ],
    },
    install_requires=[
        'regex>=2021.8.3',
        'tqdm>=4.40',
        'unicodeblock>=0.3.1',
        'wheel>=0.38.4',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    include_package_data=True,
    zip_safe=False,
)
