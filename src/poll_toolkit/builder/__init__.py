"""
Module: builder

Purpose:
    Questionnaire builder: select, order and re-word library questions,
    fill in race details, and export to Word or PDF.

Key Functions:
    - export_template(): Write the questionnaire to a file
    - replace_variables(): Race placeholder substitution

Key Classes:
    - QuestionnaireTemplate / TemplateQuestion: Ordered selection
    - RaceConfig / Party: Race details

Dependencies:
    - docx (python-docx): Word output
    - reportlab: PDF output
"""

from .controller import EXPORT_FORMATS, ExportResult, export_filename, export_template
from .template import Party, QuestionnaireTemplate, RaceConfig, TemplateQuestion
from .variables import replace_variables

__all__ = [
    "EXPORT_FORMATS",
    "ExportResult",
    "Party",
    "QuestionnaireTemplate",
    "RaceConfig",
    "TemplateQuestion",
    "export_filename",
    "export_template",
    "replace_variables",
]
