"""
Module: output

Purpose:
    PDF rendering for composed studies.
    Converts LayoutResult to PDF files using ReportLab.

Key Functions:
    - render_to_pdf(): Render layout to PDF
    - output_filename(): PDF file name for a study

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - fen2pdf.layout.models: LayoutResult

Used By:
    - fen2pdf.controller: Pipeline orchestration
"""

from .renderer import render_to_pdf, output_filename

__all__ = [
    "render_to_pdf",
    "output_filename",
]
