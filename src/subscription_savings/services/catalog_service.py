"""
Subscription catalog loading.

The catalog ships with the package as a JSON document. A different document
can be selected with the SUBSCRIPTION_CATALOG_PATH environment variable or by
passing a path explicitly.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from subscription_savings.models.catalog import SubscriptionCatalog

logger = logging.getLogger(__name__)

CATALOG_PATH_ENV = 'SUBSCRIPTION_CATALOG_PATH'
DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "subscriptions.json"


class CatalogLoadError(Exception):
    """Raised when a catalog document cannot be read or validated."""
    pass


def resolve_catalog_path(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Work out which catalog document to load.

    Precedence: explicit path, then SUBSCRIPTION_CATALOG_PATH, then the
    bundled catalog.
    """
    if path is not None:
        return Path(path)
    env_path = os.getenv(CATALOG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_CATALOG_PATH


def parse_catalog(data: Dict[str, Any]) -> SubscriptionCatalog:
    """
    Validate a decoded catalog document.

    Args:
        data: Decoded JSON document with ``meta`` and ``categories`` keys

    Returns:
        SubscriptionCatalog

    Raises:
        CatalogLoadError: If the document does not match the catalog schema
    """
    try:
        catalog = SubscriptionCatalog.model_validate(data)
    except ValidationError as e:
        raise CatalogLoadError(f"Invalid catalog document: {e}") from e

    if catalog.meta and catalog.meta.total_services is not None:
        if catalog.meta.total_services != catalog.service_count:
            logger.warning(
                f"Catalog meta declares {catalog.meta.total_services} services "
                f"but {catalog.service_count} were loaded"
            )
    return catalog


def load_catalog(path: Optional[Union[str, Path]] = None) -> SubscriptionCatalog:
    """
    Load the subscription catalog from disk.

    Args:
        path: Optional path to a catalog JSON document

    Returns:
        SubscriptionCatalog

    Raises:
        CatalogLoadError: If the file is missing, is not valid JSON or does not
            match the catalog schema
    """
    catalog_path = resolve_catalog_path(path)
    try:
        with open(catalog_path, encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(f"Catalog file not found: {catalog_path}") from e
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Catalog file {catalog_path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise CatalogLoadError(f"Catalog file {catalog_path} must contain a JSON object")

    catalog = parse_catalog(data)
    logger.info(
        f"Loaded catalog from {catalog_path}: {len(catalog.categories)} categories, "
        f"{catalog.service_count} services"
    )
    return catalog
