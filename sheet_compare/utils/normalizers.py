"""
Text normalization utilities.
Single responsibility: normalize cell text and column names for matching.
"""

from typing import Any


def trim_cell(val: Any) -> str:
    """
    Trim surrounding whitespace from a cell value.
    
    Args:
        val: Cell text (None is treated as empty)
        
    Returns:
        Trimmed string
    """
    if val is None:
        return ""
    return str(val).strip()


def header_key(name: Any) -> str:
    """
    Case-insensitive matching key for a column name or header cell.
    
    Args:
        name: Column name as declared or as found in the header row
        
    Returns:
        Trimmed, casefolded name
    """
    return trim_cell(name).casefold()
