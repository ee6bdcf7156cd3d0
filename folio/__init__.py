"""
FOLIO - Formatted Output Layout for Itemized Occupational records

Renders structured resume data into paginated, styled PDF documents.

Architecture:
- Profile Context: Resume data model, loading, and input-shape validation
- Rendering Context: Pagination, layout strategies, PDF output and diagnostics
"""

__version__ = "0.1.0"
