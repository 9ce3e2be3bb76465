# ui/cli/console_utils.py
from config import FRAME_WIDTH
from core.archive.comic_record import ComicRecord

def print_header(title):
    """Print a clean header with title."""
    print("\n" + "═" * FRAME_WIDTH)
    print(f"  {title}")
    print("═" * FRAME_WIDTH)

def format_elapsed_time(seconds: float) -> str:
    """Format elapsed time in a human-readable way."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        seconds = seconds % 60
        return f"{minutes}m {seconds:.0f}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes}m"

def format_file_size(size_bytes):
    """Convert bytes to human-readable format."""
    if size_bytes < 1024:
        return f"{size_bytes} bytes"
    elif size_bytes < 1024**2:
        return f"{size_bytes/1024:.1f} KB"
    else:
        return f"{size_bytes/(1024**2):.1f} MB"

def format_comic_display(record: ComicRecord) -> str:
    """Format a comic for display."""
    if record.is_empty:
        return "  #---  (no comic published for this number)"

    lines = [f"  #{record.num}  {record.title}  ({record.date_display})"]
    if record.img:
        lines.append(f"        image: {record.img}")
    if record.link:
        lines.append(f"        link:  {record.link}")
    if record.alt:
        lines.append(f"        alt:   {record.alt}")
    return "\n".join(lines)
