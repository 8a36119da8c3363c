"""
Configuration and catalog validation utilities.
"""

import importlib
from typing import List, Tuple, Iterable, Any
from .config import (
    STOREFRONT_CONFIG,
    DOWNLOAD_CONFIG,
    ARTWORK_CONFIG,
    THROTTLE_CONFIG,
    LOGGING_CONFIG,
    PATHS,
    RELEASE_TYPES,
)
from .exceptions import ConfigurationError


def check_dependencies() -> Tuple[bool, List[str]]:
    """
    Check if all required dependencies are installed.

    Returns:
        Tuple of (all_installed, list_of_missing_dependencies)
    """
    required_packages = {
        "requests": "requests",
        "bs4": "beautifulsoup4",
        "rich": "rich",
    }

    missing = []
    for module_name, package_name in required_packages.items():
        try:
            importlib.import_module(module_name)
        except ImportError:
            missing.append(package_name)

    return len(missing) == 0, missing


def validate_configuration() -> Tuple[bool, List[str]]:
    """
    Validate application configuration.

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    deps_ok, missing_deps = check_dependencies()
    if not deps_ok:
        errors.append(
            f"Missing required dependencies: {', '.join(missing_deps)}. "
            f"Please install them with: pip install -e ."
        )

    base_url = STOREFRONT_CONFIG["BASE_URL"]
    if not base_url.startswith(("http://", "https://")):
        errors.append(f"BASE_URL must be an absolute http(s) URL, got: {base_url}")

    expected = STOREFRONT_CONFIG["EXPECTED_RELEASE_COUNT"]
    if expected is not None and expected < 0:
        errors.append("EXPECTED_RELEASE_COUNT must be >= 0")

    if DOWNLOAD_CONFIG["MAX_ATTEMPTS"] < 1:
        errors.append("MAX_ATTEMPTS must be >= 1")

    if DOWNLOAD_CONFIG["BACKOFF_STEP"] < 0:
        errors.append("BACKOFF_STEP must be >= 0")

    for key in ("IMAGE_TIMEOUT", "AUDIO_TIMEOUT"):
        if DOWNLOAD_CONFIG[key] < 1:
            errors.append(f"{key} must be >= 1")

    for key, delay in THROTTLE_CONFIG.items():
        if delay < 0:
            errors.append(f"Throttle delay {key} must be >= 0")

    if not ARTWORK_CONFIG["SELECTORS"]:
        errors.append("At least one artwork selector is required")

    for key in ("ARTWORK_URL_PREFIX", "AUDIO_URL_PREFIX"):
        if not PATHS[key].startswith("/"):
            errors.append(f"{key} must be root-relative (start with '/')")

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if LOGGING_CONFIG["LEVEL"] not in valid_log_levels:
        errors.append(f"LOG_LEVEL must be one of: {', '.join(valid_log_levels)}")

    is_valid = len(errors) == 0
    return is_valid, errors


def validate_and_raise():
    """
    Validate configuration and raise ConfigurationError if invalid.
    """
    is_valid, errors = validate_configuration()
    if not is_valid:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)


def _is_valid_asset_reference(value: str, prefix: str) -> bool:
    if value.startswith(("http://", "https://")):
        return True
    return value.startswith(prefix.rstrip("/") + "/")


def validate_catalog(releases: Iterable[Any]) -> List[str]:
    """
    Check catalog invariants.

    Ids must be unique, track numbers must run 1..n in order, and covers and
    track paths must be absolute URLs or live under the local asset prefixes.

    Args:
        releases: Release objects

    Returns:
        List of violation messages (empty when the catalog is valid)
    """
    errors = []
    seen_ids = set()

    for release in releases:
        if release.id in seen_ids:
            errors.append(f"Duplicate release id: {release.id}")
        seen_ids.add(release.id)

        if release.cover and not _is_valid_asset_reference(release.cover, PATHS["ARTWORK_URL_PREFIX"]):
            errors.append(f"Release {release.id} has malformed cover: {release.cover}")

        if release.type not in RELEASE_TYPES:
            errors.append(f"Release {release.id} has unknown type: {release.type}")

        if release.tracks:
            numbers = [track.track_number for track in release.tracks]
            if numbers != list(range(1, len(numbers) + 1)):
                errors.append(f"Release {release.id} has non-contiguous track numbers: {numbers}")

            for track in release.tracks:
                location = track.path or track.url
                if location and not _is_valid_asset_reference(location, PATHS["AUDIO_URL_PREFIX"]):
                    errors.append(f"Track {track.id} of {release.id} has malformed path: {location}")

    return errors
