"""
Biomass carbon totals via Google Earth Engine.

Sums above-ground and below-ground biomass carbon density over a
user-supplied polygon using the NASA/ORNL global biomass carbon density
dataset (Spawn et al. 2020, nominal year 2010, ~300 m resolution).

Dataset bands are in Mg C/ha per pixel. A sum reducer over the polygon
returns the sum of per-pixel densities, so multiplying by the pixel area
in hectares gives total tonnes of carbon.
"""

import json
import logging
import threading
from typing import TypedDict

import ee
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from carbonmap.core.config import get_project_root, settings
from carbonmap.core.units import density_sum_to_tonnes

logger = logging.getLogger(__name__)

BIOMASS_CARBON_DENSITY = "NASA/ORNL/biomass_carbon_density/v1"
AGB_BAND = "agb"
BGB_BAND = "bgb"

# Reduction scale in meters (dataset native resolution)
REDUCE_SCALE_M = 300
MAX_PIXELS = 1e13

LOCAL_KEY_FILENAME = "service-account-key.json"

# =============================================================================
# Retry Configuration
# =============================================================================

MAX_RETRIES = 3
MIN_WAIT_SECONDS = 1
MAX_WAIT_SECONDS = 10

# Substrings of Earth Engine error messages worth retrying
TRANSIENT_ERROR_MARKERS = (
    "too many concurrent",
    "rate limit",
    "quota exceeded",
    "computation timed out",
    "deadline exceeded",
    "service unavailable",
    "internal error",
)


# =============================================================================
# Exceptions
# =============================================================================


class EarthEngineConfigError(RuntimeError):
    """Raised when Earth Engine credentials or project cannot be resolved."""

    pass


class EarthEngineError(Exception):
    """Non-retryable failure from Earth Engine."""

    pass


class RetryableEarthEngineError(EarthEngineError):
    """Transient Earth Engine failure (quota, concurrency, timeouts)."""

    pass


class GeometryError(ValueError):
    """Raised when the supplied GeoJSON cannot be used for a reduction."""

    pass


class CarbonTotals(TypedDict):
    """Biomass carbon stored within a region, in tonnes C."""

    aboveground_tonnes: float
    belowground_tonnes: float
    total_tonnes: float


# =============================================================================
# Initialization
# =============================================================================


def _load_service_account_key() -> str:
    """
    Find service account key JSON.

    Looks for credentials in order:
    1. GEE_SERVICE_ACCOUNT_KEY (JSON string, for deployments)
    2. GEE_KEY_FILE (path to JSON key file)
    3. service-account-key.json in the project root (for local dev)
    """
    if settings.gee_service_account_key:
        return settings.gee_service_account_key

    if settings.gee_key_file:
        key_file = settings.gee_key_file
        try:
            with open(key_file, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError as e:
            raise EarthEngineConfigError(f"GEE_KEY_FILE missing or path not found: {key_file}") from e

    local_key = get_project_root() / LOCAL_KEY_FILENAME
    if local_key.exists():
        logger.info("Using local service account key %s", local_key)
        return local_key.read_text(encoding="utf-8")

    raise EarthEngineConfigError(
        "No GEE credentials found. Either:\n"
        "  1. Set GEE_SERVICE_ACCOUNT_KEY env var, or\n"
        "  2. Set GEE_KEY_FILE to a service account key path, or\n"
        f"  3. Place {LOCAL_KEY_FILENAME} in the project root"
    )


def initialize(project: str | None = None) -> None:
    """
    Initialize Earth Engine using a service account.

    Project ID is determined by:
    1. Explicit project parameter
    2. GEE_PROJECT_ID setting
    3. project_id from the service account JSON

    Args:
        project: GEE project ID (optional if configured elsewhere).

    Raises:
        EarthEngineConfigError: If credentials or project cannot be resolved
    """
    key_json = _load_service_account_key()

    try:
        key_data = json.loads(key_json)
    except json.JSONDecodeError as e:
        raise EarthEngineConfigError(f"Service account key is not valid JSON: {e}") from e

    effective_project = project or settings.gee_project_id or key_data.get("project_id")
    if not effective_project:
        raise EarthEngineConfigError(
            "No GEE project ID found. Either:\n"
            "  1. Set GEE_PROJECT_ID in .env, or\n"
            "  2. Ensure the service account key contains project_id"
        )

    credentials = ee.ServiceAccountCredentials(
        email=key_data["client_email"],
        key_data=key_json,
    )
    ee.Initialize(credentials=credentials, project=effective_project)
    logger.info("Earth Engine initialized (project=%s)", effective_project)


_init_lock = threading.Lock()
_initialized = False


def ensure_initialized() -> None:
    """Initialize Earth Engine once per process; safe to call from any thread."""
    global _initialized
    if _initialized:
        return
    with _init_lock:
        if _initialized:
            return
        try:
            initialize()
        except Exception:
            logger.exception("Failed to initialize Earth Engine")
            raise
        _initialized = True


def is_initialized() -> bool:
    return _initialized


# =============================================================================
# Geometry
# =============================================================================


def to_ee_geometry(geometry: dict) -> ee.Geometry:
    """Convert a GeoJSON geometry (or Feature) to an Earth Engine geometry."""
    if not isinstance(geometry, dict):
        raise GeometryError("geometry must be a GeoJSON object")

    if geometry.get("type") == "Feature":
        geometry = geometry.get("geometry") or {}

    geom_type = geometry.get("type")
    coords = geometry.get("coordinates")
    if not coords:
        raise GeometryError("geometry has no coordinates")

    if geom_type == "Polygon":
        constructor = ee.Geometry.Polygon
    elif geom_type == "MultiPolygon":
        constructor = ee.Geometry.MultiPolygon
    else:
        raise GeometryError(f"Unsupported geometry type: {geom_type}")

    # Coordinates are validated client-side
    try:
        return constructor(coords)
    except ee.EEException as e:
        raise GeometryError(str(e)) from e


# =============================================================================
# Reduction
# =============================================================================


def _is_transient(error: Exception) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)


@retry(
    retry=retry_if_exception_type(RetryableEarthEngineError),
    stop=stop_after_attempt(MAX_RETRIES),
    wait=wait_exponential_jitter(initial=MIN_WAIT_SECONDS, max=MAX_WAIT_SECONDS, jitter=2),
    reraise=True,
)
def _reduce_region(image: ee.Image, geometry: ee.Geometry) -> dict:
    """Sum image bands over a geometry, retrying transient failures."""
    try:
        result = image.reduceRegion(
            reducer=ee.Reducer.sum(),
            geometry=geometry,
            scale=REDUCE_SCALE_M,
            bestEffort=True,
            maxPixels=MAX_PIXELS,
        ).getInfo()
    except ee.EEException as e:
        if _is_transient(e):
            logger.warning("Transient Earth Engine error, retrying: %s", e)
            raise RetryableEarthEngineError(str(e)) from e
        raise EarthEngineError(str(e)) from e
    return result or {}


def calculate_carbon(geometry: dict) -> CarbonTotals:
    """
    Sum biomass carbon stored within a polygon.

    Args:
        geometry: GeoJSON Polygon/MultiPolygon (or a Feature wrapping one)

    Returns:
        CarbonTotals in tonnes C; bands with no data count as zero

    Raises:
        GeometryError: If the geometry is unusable
        EarthEngineError: If the reduction fails
    """
    region = to_ee_geometry(geometry)
    image = ee.ImageCollection(BIOMASS_CARBON_DENSITY).first().select([AGB_BAND, BGB_BAND])

    sums = _reduce_region(image, region)

    agb = density_sum_to_tonnes(sums.get(AGB_BAND) or 0, REDUCE_SCALE_M)
    bgb = density_sum_to_tonnes(sums.get(BGB_BAND) or 0, REDUCE_SCALE_M)

    logger.debug("Carbon totals: agb=%.1f t, bgb=%.1f t", agb, bgb)

    return CarbonTotals(
        aboveground_tonnes=agb,
        belowground_tonnes=bgb,
        total_tonnes=agb + bgb,
    )
