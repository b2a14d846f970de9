"""
folio - résumé HTML to PDF publishing for a personal portfolio site.

Renders the site's résumé page to a print-ready PDF with a headless browser
and keeps the CSS utility build's theme configuration in one validated place.

Architecture:
- Rendering Context: HTML to PDF rendering, page options, output validation
- Styling Context: Theme configuration loading, validation and export
"""

__version__ = "0.1.0"
