"""
Vitae - résumé assembly, theming and export

Builds a résumé from form input, an uploaded file or an AI rewrite, styles it
with a theme plus personal customization, and exports it as a PDF.

Architecture:
- Content Context: Résumé document model and external content collaborators
- Theming Context: Theme catalog, customization store, style resolution
- Rendering Context: Visual tree, HTML/markdown preview, PDF capture
- Editing Context: In-place field edits on the résumé document
"""

__version__ = "0.1.0"
