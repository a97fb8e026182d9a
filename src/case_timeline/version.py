"""
Version constants for the timeline engine.

Bump a component version whenever its output for the same input changes, so
cached renderings can be invalidated.
"""

__version__ = "1.0.0"

SANITIZER_VERSION = "sanitizer-1.0.0"
BOUNDARY_DETECTOR_VERSION = "boundary-1.1.0"
TRUNCATOR_VERSION = "truncator-1.0.0"
LINKIFIER_VERSION = "linkify-1.0.0"


def get_engine_versions() -> dict:
    """Return the component versions that shaped a processed item."""
    return {
        "engine": __version__,
        "sanitizer": SANITIZER_VERSION,
        "boundary_detector": BOUNDARY_DETECTOR_VERSION,
        "truncator": TRUNCATOR_VERSION,
        "linkifier": LINKIFIER_VERSION,
    }
