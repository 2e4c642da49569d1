from .errors import FileReadError


def read_urls(input_file):
    """Read one URL per line, keeping blank lines and duplicates in order."""
    try:
        with open(input_file, 'r', encoding='utf-8', newline='') as f:
            return [line.rstrip('\r\n') for line in f]
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(f"Error reading URLs from file {input_file}: {e}") from e
