"""
Translation driver
"""

from .driver import Translator, TranslationResult
