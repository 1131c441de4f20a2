"""
Local data path helpers.

Raw and cleansed file locations are built in one place so the DAG, the
pipeline runner and the tests agree on where files live.
"""

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


def _resolve_folder(folder: PathLike, base_dir: Optional[PathLike]) -> Path:
    folder = Path(folder) if folder else Path(".")
    if base_dir is not None and not folder.is_absolute():
        return Path(base_dir) / folder
    return folder


def _strip_leading_slash(name: str) -> str:
    return str(name).lstrip("/") if name else ""


def build_raw_path(raw_folder: PathLike, file_name: str, base_dir: Optional[PathLike] = None) -> Path:
    """
    Build the path of a raw/source file.

    Example:
        build_raw_path("data/raw/", "pet_supplies.csv")
        -> Path("data/raw/pet_supplies.csv")
    """

    return _resolve_folder(raw_folder, base_dir) / _strip_leading_slash(file_name)


def build_clean_path(cleansed_folder: PathLike, file_name: str, base_dir: Optional[PathLike] = None) -> Path:
    """
    Build the path of a cleansed output file.

    Example:
        build_clean_path("data/cleansed", "/pet_supplies_clean.csv")
        -> Path("data/cleansed/pet_supplies_clean.csv")
    """

    return _resolve_folder(cleansed_folder, base_dir) / _strip_leading_slash(file_name)
