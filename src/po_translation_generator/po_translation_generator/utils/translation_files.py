"""Reading catalogs and writing the generated .po/.mo files."""

import logging
from pathlib import Path, PurePath

import polib

from po_translation_generator.utils.constants import (
    MO_FILE_EXTENSION,
    PO_FILE_EXTENSION,
)
from po_translation_generator.utils.exclusions import strip_catalog_extension

logger = logging.getLogger(__name__)


def get_output_file_name(source_file_name: str, locale: str) -> str:
    """``acme-forms.pot`` translated to ``fr_FR`` gives ``acme-forms-fr_FR.po``."""
    base_name = strip_catalog_extension(PurePath(source_file_name).name)
    return f"{base_name}-{locale}{PO_FILE_EXTENSION}"


def read_catalog(path: Path) -> str:
    """Read a UTF-8 catalog, tolerating a byte order mark."""
    return path.read_text(encoding="utf-8-sig")


def write_po_file(output_dir: Path, file_name: str, content: str) -> Path:
    """
    Write a generated catalog to ``output_dir``.

    Returns:
        Path of the written file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    po_path = output_dir / file_name
    po_path.write_text(content, encoding="utf-8")
    logger.info("Wrote %s", po_path)
    return po_path


def compile_mo_file(po_path: Path) -> Path:
    """
    Compile a .po file into a .mo file next to it.

    Args:
        po_path: Path of the .po file

    Returns:
        Path of the compiled .mo file

    Raises:
        OSError: If polib cannot parse or write the catalog
    """
    mo_path = po_path.with_suffix(MO_FILE_EXTENSION)
    po_file = polib.pofile(str(po_path))
    po_file.save_as_mofile(str(mo_path))
    logger.info("Compiled %s", mo_path)
    return mo_path
