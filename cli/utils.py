"""Utility functions for CLI output."""

from cli.constants import GREEN, PROGRESS_BAR_WIDTH, RESET, YELLOW


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def format_progress_bar(progress: int, width: int = PROGRESS_BAR_WIDTH) -> str:
    """
    Render a fixed-width text progress bar.

    Args:
        progress: Percentage between 0 and 100
        width: Number of cells in the bar

    Returns:
        String like "[#########---------------]  38%"
    """
    progress = max(0, min(100, progress))
    filled = round(width * progress / 100)
    return f"[{'#' * filled}{'-' * (width - filled)}] {progress:3d}%"


def format_upload_line(name: str, size: int, progress: int, status: str) -> str:
    """One line of the upload queue display."""
    colour = GREEN if status == "complete" else YELLOW if status == "uploading" else ""
    reset = RESET if colour else ""
    return f"{name} ({format_file_size(size)}) {format_progress_bar(progress)} {colour}{status}{reset}"
