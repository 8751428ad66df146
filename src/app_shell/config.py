import sys

from src.api.deps import Settings
from src.components.redirects import SUPPORTED_FORMATS, ParseError


def validate_settings(settings: Settings) -> None:
    """
    Validate settings before startup.
    Exits with status 1 on the first batch of problems.
    """
    problems = []

    # 1. Redirects file must exist if configured
    if settings.redirects_file is not None and not settings.redirects_file.is_file():
        problems.append(f"Redirects file not found: {settings.redirects_file}")

    # 2. Format must be known (explicit or from extension)
    try:
        fmt = settings.resolved_format
    except ParseError as e:
        problems.append(str(e))
    else:
        if fmt is not None and fmt not in SUPPORTED_FORMATS:
            problems.append(
                f"Unsupported format {fmt!r}, expected one of: {', '.join(SUPPORTED_FORMATS)}"
            )

    # 3. Port range
    if not 0 < settings.port < 65536:
        problems.append(f"Invalid port: {settings.port_value!r}")

    if problems:
        for problem in problems:
            print(f"CRITICAL: {problem}", file=sys.stderr)
        sys.exit(1)

    print("Configuration Validated.")
