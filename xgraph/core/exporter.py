"""Export utilities for timeline pages."""

from pathlib import Path
from datetime import datetime
from typing import TYPE_CHECKING

from xgraph.models.page import Page

if TYPE_CHECKING:
    import pandas as pd

try:
    import pandas as pd
    PANDAS_AVAILABLE = True
except ImportError:
    PANDAS_AVAILABLE = False


def to_json(page: Page, indent: int = 2) -> str:
    """
    Convert Page to JSON string.

    Args:
        page: Page to serialize
        indent: JSON indentation level

    Returns:
        JSON string
    """
    return page.model_dump_json(indent=indent)


def to_dict(page: Page) -> dict:
    """Convert Page to a JSON-compatible dictionary."""
    return page.model_dump(mode="json")


def save_json(page: Page, filepath: str | Path, indent: int = 2) -> Path:
    """
    Save Page to JSON file.

    Args:
        page: Page to save
        filepath: Output file path
        indent: JSON indentation level

    Returns:
        Path to saved file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(page.model_dump_json(indent=indent), encoding="utf-8")
    return path


def load_json(filepath: str | Path) -> Page:
    """Load Page from JSON file."""
    path = Path(filepath)
    return Page.model_validate_json(path.read_text(encoding="utf-8"))


def combine_pages(pages: list[Page]) -> Page:
    """Concatenate consecutive pages into one, keeping the outermost cursors."""
    if not pages:
        return Page()
    return Page(
        profiles=tuple(p for page in pages for p in page.profiles),
        next=pages[-1].next,
        previous=pages[0].previous,
    )


def merge_pages(pages: list[Page]) -> dict:
    """
    Merge pages of one pagination run into a single export-friendly dict.

    Profiles keep page order; an account seen on several pages is kept once.
    The last page's ``next`` cursor is kept so the run can be resumed.
    """
    profiles = []
    seen: set[str] = set()

    for page in pages:
        for profile in page.profiles:
            if profile.id and profile.id in seen:
                continue
            seen.add(profile.id)
            profiles.append(profile.model_dump(mode="json"))

    return {
        "exported_at": datetime.now().isoformat(),
        "pages_count": len(pages),
        "profiles_count": len(profiles),
        "next_cursor": pages[-1].next if pages else None,
        "profiles": profiles,
    }


def _check_pandas():
    """Raise ImportError if pandas is not available."""
    if not PANDAS_AVAILABLE:
        raise ImportError(
            "pandas is required for DataFrame export. Install with: pip install xgraph[dataframe]"
        )


def to_profiles_df(page: Page) -> "pd.DataFrame":
    """
    Convert the profiles of a Page to a pandas DataFrame.

    Raises:
        ImportError: If pandas is not installed
    """
    _check_pandas()
    return pd.DataFrame([p.model_dump(mode="json") for p in page.profiles])


def pages_to_profiles_df(pages: list[Page]) -> "pd.DataFrame":
    """
    Convert profiles from several pages to one DataFrame, one row per profile.

    Raises:
        ImportError: If pandas is not installed
    """
    _check_pandas()

    rows = []
    for page in pages:
        for profile in page.profiles:
            rows.append(profile.model_dump(mode="json"))

    return pd.DataFrame(rows)


def save_csv(pages: Page | list[Page], filepath: str | Path) -> Path:
    """
    Save profiles to a CSV file.

    Args:
        pages: One Page or a list of pages
        filepath: Output file path

    Returns:
        Path to saved file

    Raises:
        ImportError: If pandas is not installed
    """
    _check_pandas()

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(pages, Page):
        pages = [pages]

    pages_to_profiles_df(pages).to_csv(path, index=False)
    return path
