# core/utilities/setup_validator.py
"""
Build output validation utilities for Comicdex.
Checks that the archive, manifest and every index file are present and agree.
"""
import json
from typing import Tuple
from config import PathConfig, INDEX_FIELDS

def is_setup_complete() -> bool:
    """Check if all required files exist."""
    return all(file.exists() for file in PathConfig.get_all_required_files())

def validate_build() -> Tuple[bool, str]:
    """
    Cheap consistency check of the build output (no decompression).

    Returns:
        Tuple of (is_valid, message)
    """
    missing = [path.name for path in PathConfig.get_all_required_files() if not path.exists()]
    if missing:
        return False, f"Missing build files: {', '.join(missing)}"

    try:
        with open(PathConfig.get_metadata_file(), 'r') as f:
            metadata = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        return False, f"Cannot read build manifest: {e}"

    total = metadata.get('total_comics', 0) if isinstance(metadata, dict) else 0
    if not isinstance(total, int) or total <= 0:
        return False, "Build manifest has no comics"

    # --- Each index must have one line per comic ---
    for field in INDEX_FIELDS:
        index_path = PathConfig.get_index_file(field)
        with open(index_path, 'rb') as f:
            line_count = sum(1 for line in f if line.strip())
        if line_count != total:
            return False, (
                f"Index {index_path.name} has {line_count:,} entries, "
                f"expected {total:,}"
            )

    return True, f"Valid build with {total:,} comics (created {metadata.get('created_at', 'unknown')})"
