"""
Analyzers package: one analyzer per source language.
"""

from .script_analyzer import ScriptAnalyzer
from .stylesheet_analyzer import StylesheetAnalyzer
from .template_analyzer import TemplateAnalyzer

__all__ = [
    'ScriptAnalyzer',
    'TemplateAnalyzer',
    'StylesheetAnalyzer',
]
