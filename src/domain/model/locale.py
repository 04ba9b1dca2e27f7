"""Supported locales and path-based locale resolution.

The first path segment selects the locale. Anything outside the closed
set falls back to DEFAULT_LOCALE; the same rule feeds page rendering and
the route guard's redirect targets.
"""

LOCALES: tuple[str, ...] = ('en', 'pl')
DEFAULT_LOCALE = 'en'


def path_segments(path: str) -> list[str]:
    """Split a URL path into its non-empty segments."""
    return [segment for segment in path.split('/') if segment]


def is_supported_locale(value: str | None) -> bool:
    return value in LOCALES


def locale_from_path(path: str) -> str:
    """Return the locale named by the first path segment, or the default.

    Examples:
        "/pl/cms/dashboard" -> "pl"
        "/fr/cms/dashboard" -> "en"
        "/" -> "en"
    """
    segments = path_segments(path)
    if segments and is_supported_locale(segments[0]):
        return segments[0]
    return DEFAULT_LOCALE
