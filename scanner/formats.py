"""Import extraction for ELF and PE binaries."""

import io
import logging
import struct
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pefile
from elftools.common.exceptions import ELFError
from elftools.elf.dynamic import DynamicSection
from elftools.elf.elffile import ELFFile

from registry.model import ModuleName, ModuleRegistry
from .errors import FileAccessError, MalformedImportTableError, NotABinaryError


logger = logging.getLogger(__name__)

IMPORT_DIRECTORY_INDEX = pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_IMPORT"]
IMPORT_DESCRIPTOR_SIZE = 20

# COFF file header: Machine, NumberOfSections, TimeDateStamp,
# PointerToSymbolTable, NumberOfSymbols, SizeOfOptionalHeader, Characteristics
COFF_HEADER_FORMAT = "<HHIIIHH"
COFF_HEADER_SIZE = struct.calcsize(COFF_HEADER_FORMAT)
DOS_LFANEW_OFFSET = 0x3C
PE_SIGNATURE = b"PE\0\0"


def parse_elf(data: bytes) -> Optional[List[ModuleName]]:
    """
    Read the DT_NEEDED entries of an ELF image.
    
    Returns:
        Needed shared objects in file order, or None if the data is not a
        well-formed ELF image. An image without a dynamic section has none.
    """
    try:
        elf = ELFFile(io.BytesIO(data))
        needed: List[str] = []
        for section in elf.iter_sections():
            if not isinstance(section, DynamicSection):
                continue
            for tag in section.iter_tags():
                if tag.entry.d_tag == "DT_NEEDED":
                    needed.append(tag.needed)
            break
    except ELFError as e:
        logger.debug("Not an ELF image: %s", e)
        return None
    
    return [ModuleName(name, case_insensitive=False) for name in needed]


def parse_pe(data: bytes) -> Optional[List[ModuleName]]:
    """
    Read the imported DLL names of a PE image or COFF object.
    
    The import directory table is walked from raw section bytes. Images
    without an optional header, without an import directory entry, or whose
    import directory lies outside every section have no imports.
    
    Returns:
        Imported module names in table order, or None if the data is not a
        PE image or COFF object.
    """
    optional_size = _optional_header_size(data)
    if optional_size == 0:
        logger.debug("PE/COFF file has no optional header")
        return []
    
    try:
        pe = pefile.PE(data=data, fast_load=True)
    except pefile.PEFormatError as e:
        logger.debug("Not a PE image: %s", e)
        return None
    
    try:
        names = _walk_import_directory(pe)
    finally:
        pe.close()
    
    return [ModuleName(name, case_insensitive=True) for name in names]


def _optional_header_size(data: bytes) -> Optional[int]:
    """
    Peek at the COFF file header's SizeOfOptionalHeader field.
    
    Handles both PE images (behind an MZ stub) and bare COFF objects.
    Returns None when no plausible COFF header is found.
    """
    if data[:2] == b"MZ":
        if len(data) < DOS_LFANEW_OFFSET + 4:
            return None
        (lfanew,) = struct.unpack_from("<I", data, DOS_LFANEW_OFFSET)
        if data[lfanew:lfanew + 4] != PE_SIGNATURE:
            return None
        header_offset = lfanew + 4
    else:
        header_offset = 0
    
    if len(data) < header_offset + COFF_HEADER_SIZE:
        return None
    fields = struct.unpack_from(COFF_HEADER_FORMAT, data, header_offset)
    machine, optional_size = fields[0], fields[5]
    
    # A bare object file has no signature, so require a known machine type
    if header_offset == 0 and (machine == 0 or machine not in pefile.MACHINE_TYPE):
        return None
    return optional_size


def _walk_import_directory(pe: pefile.PE) -> List[str]:
    """Walk the import directory table and collect DLL names."""
    optional_header = pe.OPTIONAL_HEADER
    if (
        optional_header.NumberOfRvaAndSizes <= IMPORT_DIRECTORY_INDEX
        or len(optional_header.DATA_DIRECTORY) <= IMPORT_DIRECTORY_INDEX
    ):
        logger.debug("PE image has no import directory entry")
        return []
    
    directory_rva = optional_header.DATA_DIRECTORY[IMPORT_DIRECTORY_INDEX].VirtualAddress
    section = _section_containing(pe, directory_rva)
    if section is None:
        logger.debug("No section contains import directory RVA %#x", directory_rva)
        return []
    
    raw = section.get_data()
    names: List[str] = []
    offset = directory_rva - section.VirtualAddress
    
    while len(raw) - offset >= IMPORT_DESCRIPTOR_SIZE:
        original_first_thunk, name_rva = struct.unpack_from("<I8xI", raw, offset)
        if original_first_thunk == 0:
            break
        try:
            names.append(_read_cstring(raw, name_rva - section.VirtualAddress))
        except MalformedImportTableError as e:
            logger.debug("Skipping import descriptor at %#x: %s", offset, e)
        offset += IMPORT_DESCRIPTOR_SIZE
    
    return names


def _section_containing(pe: pefile.PE, rva: int):
    """Return the first section whose virtual range contains the RVA."""
    for section in pe.sections:
        start = section.VirtualAddress
        if start <= rva < start + section.Misc_VirtualSize:
            return section
    return None


def _read_cstring(data: bytes, start: int) -> str:
    """Read a null-terminated ASCII name from section data."""
    if start < 0 or start >= len(data):
        raise MalformedImportTableError(f"name offset {start:#x} outside section")
    end = data.find(b"\0", start)
    if end < 0:
        raise MalformedImportTableError(f"unterminated name at offset {start:#x}")
    return bytes(data[start:end]).decode("utf-8", errors="replace")


# Tried in order; the first handler that accepts the data wins.
FORMAT_HANDLERS = (
    ("ELF", parse_elf),
    ("PE", parse_pe),
)


def extract_imports(path: Union[str, Path]) -> List[ModuleName]:
    """
    Extract the module names a binary requests to load.
    
    Args:
        path: Path to an ELF or PE file.
    
    Returns:
        Imported module names in file order, duplicates included.
    
    Raises:
        FileAccessError: The path is not a readable regular file.
        NotABinaryError: The file matches no supported format.
    """
    path = Path(path)
    if not path.is_file():
        raise FileAccessError(f"Not a file: '{path}'")
    
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileAccessError(f"Cannot read '{path}': {e.strerror or e}") from e
    
    for format_name, handler in FORMAT_HANDLERS:
        names = handler(data)
        if names is not None:
            logger.debug("%s: %s module, %d import(s)", path, format_name, len(names))
            return names
    
    raise NotABinaryError(path)


def collect_imports(paths: Iterable[Union[str, Path]]) -> ModuleRegistry:
    """
    Extract and deduplicate the imports of several binaries.
    
    Empty path strings are skipped.
    """
    registry = ModuleRegistry()
    for path in paths:
        if not path:
            continue
        registry.extend(extract_imports(path))
    return registry
