"""
Machine translation of gettext POT/PO catalogs, one PO file per target locale.
"""

__version__ = "1.0.0"
