"""
Catalog persistence: the JSON array of releases read and written wholesale.
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..core.config import PATHS
from ..core.exceptions import CatalogError
from ..core.logger import get_logger
from ..core.validation import validate_catalog
from ..models.releases import Release

logger = get_logger("catalog")


class CatalogStore:
    """Reads and writes the catalog file."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or PATHS["CATALOG"])

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> List[Release]:
        """
        Load the catalog.

        Returns:
            Releases in file order; empty if the file does not exist yet

        Raises:
            CatalogError: If the file is not a JSON array of release objects
        """
        if not self.exists():
            logger.info("No existing catalog found, will create new one")
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Catalog {self.path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise CatalogError(f"Catalog {self.path} must contain a JSON array")

        try:
            releases = [Release.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise CatalogError(f"Catalog {self.path} has a malformed release entry: {e}") from e

        logger.info(f"Loaded {len(releases)} existing releases from catalog")
        return releases

    def save(self, releases: Sequence[Release]):
        """
        Overwrite the catalog with the given releases.

        Raises:
            CatalogError: If two releases share an id
        """
        problems = validate_catalog(releases)
        duplicates = [p for p in problems if p.startswith("Duplicate release id")]
        if duplicates:
            raise CatalogError("; ".join(duplicates))
        for problem in problems:
            logger.warning(f"⚠️  {problem}")

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump([release.to_dict() for release in releases], f, indent=2, ensure_ascii=False)
            f.write("\n")

        logger.info(f"✓ Catalog saved to: {self.path}")
