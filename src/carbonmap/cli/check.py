"""Check command to verify configuration and Earth Engine access."""

import os

from carbonmap.core.config import get_project_root, settings
from carbonmap.satellite import gee

ENV_VARS = {
    "GEE_SERVICE_ACCOUNT_KEY": "service account key JSON",
    "GEE_KEY_FILE": "service account key file path",
    "GEE_PROJECT_ID": "GEE Cloud project",
    "FRONTEND_ORIGIN": "CORS origin",
}


def check_mark(success: bool) -> str:
    """Return a check mark or X based on success."""
    return "[OK]" if success else "[MISSING]"


def check_env_vars() -> dict[str, bool]:
    """Check which environment variables are configured."""
    print("Checking environment variables...")
    print("-" * 50)

    # Read through settings so values from .env count too
    checks = {var: bool(getattr(settings, var.lower())) for var in ENV_VARS}
    for var, label in ENV_VARS.items():
        print(f"  {check_mark(checks[var])} {var} ({label})")

    print()
    return checks


def has_credentials() -> bool:
    """True if any credential source is available."""
    if settings.gee_service_account_key:
        return True
    if settings.gee_key_file:
        return os.path.exists(settings.gee_key_file)
    return (get_project_root() / gee.LOCAL_KEY_FILENAME).exists()


def check_gee_connection() -> bool:
    """Initialize Earth Engine and read dataset metadata."""
    print("Testing Google Earth Engine...")
    print("-" * 50)

    if not has_credentials():
        print("  [SKIPPED] No service account credentials configured")
        print("            Set GEE_SERVICE_ACCOUNT_KEY or GEE_KEY_FILE")
        print()
        return False

    try:
        gee.initialize()
        collection = gee.ee.ImageCollection(gee.BIOMASS_CARBON_DENSITY)
        bands = collection.first().bandNames().getInfo()
        print("  [OK] Connected to Google Earth Engine")
        print(f"       Dataset: {gee.BIOMASS_CARBON_DENSITY}")
        print(f"       Bands: {', '.join(bands)}")
        print()
        return True
    except Exception as e:
        print(f"  [FAILED] Could not connect to GEE: {e}")
        print()
        return False


def main() -> bool:
    """Run configuration checks. Returns True when Earth Engine is usable."""
    print("=" * 50)
    print("carbonmap Check")
    print("=" * 50)
    print()

    check_env_vars()
    gee_ok = check_gee_connection()

    print("=" * 50)
    if gee_ok:
        print("Ready: carbon calculations are available.")
    else:
        print("Not ready: only /api/estimate will work without Earth Engine.")
    return gee_ok
