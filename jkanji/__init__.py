r"""jkanji: classification and normalization of Japanese kanji (regular-use/jōyō, personal-name-use/jinmeiyō,
old/new forms, name variants).
Main modules: jkanji.jk_regular_use, jkanji.jk_variants, jkanji.jk_normalize, jkanji.jk_analysis
Argument help: jk_normalize.py -h, jk_analysis.py -h; or, alternatively: jk-norm -h, jk-ana -h"""
__version__ = '0.3.1'
__description__ = '''The jkanji scripts classify Japanese kanji as regular-use (jōyō) or personal-name-use (jinmeiyō), replace kanji outside those classes, map old character forms (kyūjitai) and variants (itaiji) to their regular-use forms, and expand regular-use forms to name-specific variants.'''
last_mod_date = 'October 19, 2026'
from .jk_unicode import Range, RangeTable, compact_scalars_to_ranges, iter_scalars, replace_all
from .jk_regular_use import Discriminator, is_for_personal_names, is_han, is_not_for_personal_names, \
    is_not_regular_use, is_old_form_regular_use, is_regular_use, is_standard_regular_use, is_tolerable_regular_use, \
    replace_not_for_personal_names_all, replace_not_regular_use_all
from .jk_variants import TieredVariantMap, VariantNormalizer, replace_old_to_new, replace_to_name_variant
__all__ = ['Range', 'RangeTable', 'compact_scalars_to_ranges', 'iter_scalars', 'replace_all',
           'Discriminator', 'is_for_personal_names', 'is_han', 'is_not_for_personal_names', 'is_not_regular_use',
           'is_old_form_regular_use', 'is_regular_use', 'is_standard_regular_use', 'is_tolerable_regular_use',
           'replace_not_for_personal_names_all', 'replace_not_regular_use_all',
           'TieredVariantMap', 'VariantNormalizer', 'replace_old_to_new', 'replace_to_name_variant']
