"""Renderers for validation reports."""

from .report_view import render_list_items, render_report_embed, render_report_lines

__all__ = ["render_list_items", "render_report_embed", "render_report_lines"]
