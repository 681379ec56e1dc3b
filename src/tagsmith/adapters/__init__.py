"""Default collaborators: BeautifulSoup trees, Jinja2 rendering, CSS files."""

from __future__ import annotations

from .filesystem import TemplateDirectoryScanner, iter_template_files, scan_template_directory
from .html import SoupDocumentTree
from .jinja import JinjaRenderer, build_environment
from .stylesheets import FileStylesheetPreprocessor


__all__ = [
    "FileStylesheetPreprocessor",
    "JinjaRenderer",
    "SoupDocumentTree",
    "TemplateDirectoryScanner",
    "build_environment",
    "iter_template_files",
    "scan_template_directory",
]
